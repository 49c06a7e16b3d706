"""GigCampus resume rating and skill ledger service."""

__version__ = "0.1.0"
