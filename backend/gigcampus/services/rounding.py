import math


def round_half_up(value: float, digits: int = 0) -> float:
    """Round to `digits` places with halves going up (2.25 -> 2.3, 2.5 -> 3)."""
    factor = 10 ** digits
    rounded = math.floor(value * factor + 0.5) / factor
    return int(rounded) if digits == 0 else rounded


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
