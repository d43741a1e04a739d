"""Mini README: Conversion between user-typed amounts and integer cents.

Structure:
    * InvalidAmountError - raised when an amount breaks its field rule.
    * parse_cents - lenient parser (blank or garbage reads as zero).
    * parse_positive_cents / parse_non_negative_cents - validating parsers.
    * format_cents / format_timestamp - display helpers used by the interfaces.

Amounts are typed with either a decimal comma (``650,00``) or a decimal point
(``650.00``). Parsing goes through :class:`decimal.Decimal` and rounds half-up
to two fractional digits, so no binary floating point ever touches money.
"""

from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

_CENT = Decimal("0.01")


class InvalidAmountError(ValueError):
    """An amount was rejected; the message describes the expected format."""

    def __init__(self, text: Optional[str], example: str = "650,00") -> None:
        self.text = text
        self.example = example
        super().__init__(f"Invalid amount (e.g. {example}).")


def _to_cents(text: Optional[str]) -> Optional[int]:
    """Return cents for ``text``, ``0`` when blank and ``None`` when unparseable."""

    cleaned = (text or "").replace(",", ".", 1).strip()
    if not cleaned:
        return 0
    try:
        value = Decimal(cleaned)
        if not value.is_finite():
            return None
        return int(value.quantize(_CENT, rounding=ROUND_HALF_UP) * 100)
    except InvalidOperation:
        return None


def parse_cents(text: Optional[str]) -> int:
    """Parse ``text`` into cents, reading blank or unparseable input as zero."""

    cents = _to_cents(text)
    if cents is None:
        LOGGER.debug("Unparseable amount %r read as zero", text)
        return 0
    return cents


def parse_positive_cents(text: Optional[str], example: str = "650,00") -> int:
    """Parse an amount that must be strictly positive (entries, fixed charges)."""

    cents = _to_cents(text)
    if cents is None or cents <= 0:
        raise InvalidAmountError(text, example)
    return cents


def parse_non_negative_cents(text: Optional[str], example: str = "200,00") -> int:
    """Parse an amount where zero is allowed (envelope limits, income)."""

    cents = _to_cents(text)
    if cents is None or cents < 0:
        raise InvalidAmountError(text, example)
    return cents


def format_cents(cents: int) -> str:
    """Render cents with a decimal comma, e.g. ``-1050`` -> ``-10,50``."""

    sign = "-" if cents < 0 else ""
    units, remainder = divmod(abs(cents), 100)
    return f"{sign}{units},{remainder:02d}"


def format_timestamp(ts: int) -> str:
    """Render a millisecond epoch timestamp as ``dd/mm hh:mm`` in local time."""

    return datetime.fromtimestamp(ts / 1000).strftime("%d/%m %H:%M")
