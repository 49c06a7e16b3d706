"""
Error taxonomy for the resume rating core.

Hierarchy:
    GigCampusError
    ├── InvalidInputError           - text too short to analyze
    │   ├── NoReadableTextError     - extraction returned (near) empty text
    │   └── UnsupportedDocumentError - upload of a disallowed type or size
    ├── ExtractionUnavailableError  - OCR service unreachable or errored
    └── PersistenceError            - ledger store read/write failure

The core never retries or swallows these; the HTTP layer turns them
into responses with actionable messages.
"""


class GigCampusError(Exception):
    """Base class for all service errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(GigCampusError):
    """Input text is empty or shorter than the analyzable minimum."""


class NoReadableTextError(InvalidInputError):
    """The extraction collaborator produced no usable text."""

    def __init__(self, message: str = "No readable text found in the document. "
                                      "The file is unreadable, retry with a clearer scan."):
        super().__init__(message)


class UnsupportedDocumentError(InvalidInputError):
    """Uploaded document has an unsupported type or exceeds the size limit."""


class ExtractionUnavailableError(GigCampusError):
    """Text extraction service is unreachable or reported a processing error."""


class PersistenceError(GigCampusError):
    """Rating store could not be read or written."""
