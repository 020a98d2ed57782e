"""Parsing of user-entered quantities."""

import math


class QuantityParseError(ValueError):
    """Raised when a quantity string cannot be used as an amount."""

    def __init__(self, raw: str, reason: str):
        super().__init__(f"Invalid quantity '{raw}': {reason}")
        self.raw = raw
        self.reason = reason


def parse_quantity(text: str | float | int) -> float:
    """Parse a positive decimal amount.

    Accepts either ``,`` or ``.`` as the decimal separator, so "2,5" and
    "2.5" both give 2.5. Malformed input raises ``QuantityParseError``
    instead of being replaced by a default.
    """
    if isinstance(text, bool):
        raise QuantityParseError(str(text), "not a number")
    if isinstance(text, int | float):
        value = float(text)
        raw = str(text)
    else:
        raw = text
        normalized = text.strip().replace(",", ".")
        if not normalized:
            raise QuantityParseError(raw, "value is empty")
        if normalized.count(".") > 1:
            raise QuantityParseError(raw, "more than one decimal separator")
        try:
            value = float(normalized)
        except ValueError:
            raise QuantityParseError(raw, "not a number") from None

    if not math.isfinite(value):
        raise QuantityParseError(raw, "must be finite")
    if value <= 0:
        raise QuantityParseError(raw, "must be greater than zero")
    return value
