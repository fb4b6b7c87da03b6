"""
validate.py - Receipt format validation.

    validate_receipt(receipt) -> ValidatedReceipt

Checks run in a fixed order and stop at the first failure:
    1. items non-empty
    2. retailer characters
    3. total money format
    4. each item: description characters, price money format
    5. purchaseDate shape YYYY-MM-DD
    6. purchaseTime shape HH:MM

Values are parsed by hand into integers (cents, year/month/day,
hour/minute) instead of being matched with regular expressions. Only
ASCII digits count as digits.
"""

from __future__ import annotations

from logging_config import get_logger
from models import Receipt, ValidatedItem, ValidatedReceipt

logger = get_logger(__name__)

RETAILER_EXTRA_CHARS = frozenset("-&")
DESCRIPTION_EXTRA_CHARS = frozenset("-")
# Whole-dollar digits accepted in an amount (up to 999 trillion).
MAX_AMOUNT_WHOLE_DIGITS = 15
ECHO_MAX_CHARS = 40


class InvalidReceiptError(ValueError):
    """A well-formed receipt failed a field format check."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def _is_digits(text: str) -> bool:
    return bool(text) and text.isascii() and text.isdigit()


def _echo(text: str) -> str:
    """repr() of a submitted value, shortened for error messages and logs."""
    if len(text) <= ECHO_MAX_CHARS:
        return repr(text)
    return f"{text[:ECHO_MAX_CHARS]!r}... ({len(text)} chars)"


def _allowed_chars(text: str, extra: frozenset[str]) -> bool:
    # letters in any script, digits ASCII only
    return all(ch.isalpha() or _is_digits(ch) or ch.isspace() or ch in extra for ch in text)


def parse_money(text: str) -> int:
    """Parse a non-negative two-decimal amount ('35.35') into cents (3535)."""
    whole, sep, fraction = text.partition(".")
    if not sep or not _is_digits(whole) or len(fraction) != 2 or not _is_digits(fraction):
        raise ValueError(f"expected an amount like '12.34', got {_echo(text)}")
    if len(whole) > MAX_AMOUNT_WHOLE_DIGITS:
        raise ValueError(
            f"amount has more than {MAX_AMOUNT_WHOLE_DIGITS} whole-dollar digits, got {_echo(text)}"
        )
    return int(whole) * 100 + int(fraction)


def parse_date(text: str) -> tuple[int, int, int]:
    """Parse 'YYYY-MM-DD' into (year, month, day). Shape only, not calendar-checked."""
    parts = text.split("-")
    if len(parts) != 3 or [len(p) for p in parts] != [4, 2, 2] or not all(_is_digits(p) for p in parts):
        raise ValueError(f"expected a date like 'YYYY-MM-DD', got {_echo(text)}")
    year, month, day = (int(p) for p in parts)
    return year, month, day


def parse_time(text: str) -> tuple[int, int]:
    """Parse 'HH:MM' into (hour, minute).

    The first hour digit must be 0-2 and the first minute digit 0-5.
    Nothing else is range-checked, so '29:59' parses to (29, 59).
    """
    if len(text) != 5 or text[2] != ":":
        raise ValueError(f"expected a time like 'HH:MM', got {_echo(text)}")
    hh, mm = text[:2], text[3:]
    if not (_is_digits(hh) and _is_digits(mm)) or hh[0] > "2" or mm[0] > "5":
        raise ValueError(f"expected a time like 'HH:MM', got {_echo(text)}")
    return int(hh), int(mm)


def _validate_item(index: int, item) -> ValidatedItem:
    field = f"items[{index}]"
    description = item.short_description
    if not description.strip():
        raise InvalidReceiptError(f"{field}.shortDescription", "must not be blank")
    if not _allowed_chars(description, DESCRIPTION_EXTRA_CHARS):
        raise InvalidReceiptError(
            f"{field}.shortDescription",
            f"only letters, digits, spaces and '-' are allowed, got {_echo(description)}",
        )
    try:
        price_cents = parse_money(item.price)
    except ValueError as exc:
        raise InvalidReceiptError(f"{field}.price", str(exc)) from exc
    return ValidatedItem(description=description, price_cents=price_cents)


def validate_receipt(receipt: Receipt) -> ValidatedReceipt:
    """Check every field format and return the parsed receipt.

    Raises:
        InvalidReceiptError: on the first check that fails.
    """
    try:
        validated = _validate(receipt)
    except InvalidReceiptError as exc:
        logger.warning("receipt_rejected | field=%s | reason=%s", exc.field, exc.message)
        raise
    logger.debug(
        "receipt_validated | retailer=%r | items=%d | total_cents=%d",
        validated.retailer,
        validated.item_count,
        validated.total_cents,
    )
    return validated


def _validate(receipt: Receipt) -> ValidatedReceipt:
    if not receipt.items:
        raise InvalidReceiptError("items", "at least one item is required")

    retailer = receipt.retailer
    if not retailer:
        raise InvalidReceiptError("retailer", "must not be empty")
    if not _allowed_chars(retailer, RETAILER_EXTRA_CHARS):
        raise InvalidReceiptError(
            "retailer",
            f"only letters, digits, spaces, '-' and '&' are allowed, got {_echo(retailer)}",
        )

    try:
        total_cents = parse_money(receipt.total)
    except ValueError as exc:
        raise InvalidReceiptError("total", str(exc)) from exc

    items = tuple(_validate_item(index, item) for index, item in enumerate(receipt.items))

    try:
        year, month, day = parse_date(receipt.purchase_date)
    except ValueError as exc:
        raise InvalidReceiptError("purchaseDate", str(exc)) from exc

    try:
        hour, minute = parse_time(receipt.purchase_time)
    except ValueError as exc:
        raise InvalidReceiptError("purchaseTime", str(exc)) from exc

    return ValidatedReceipt(
        retailer=retailer,
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        total_cents=total_cents,
        items=items,
    )
