"""
models.py - Data Models for the Receipt Points Service

Every module in the service communicates through these models:

    api.py / main.py  ->  Receipt            (raw submission, JSON shape)
    validate.py       ->  ValidatedReceipt   (parsed, format-checked)
    score.py          ->  list[RuleResult]   (per-rule contributions)
    receipt_store.py  ->  ScoreRecord        (stored under a generated id)

Design principles:
1. Receipt mirrors the wire format exactly; it only guarantees shape
   (required keys present, string-typed values). Field formats are the
   Validator's job, so a shape failure and a format failure stay distinct.
2. ValidatedReceipt carries already-parsed integers (cents, day, hour...)
   so the scoring rules never re-parse text.
3. Everything downstream of validation is immutable.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Item(BaseModel):
    """One line entry within a submitted receipt."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    short_description: str = Field(
        ...,
        alias="shortDescription",
        description=(
            "Short product description as printed on the receipt. "
            "Letters, digits, whitespace and hyphens only. "
            "Examples: 'Mountain Dew 12PK', 'Emils Cheese Pizza'"
        ),
    )
    price: str = Field(
        ...,
        description="Price paid for the item as a two-decimal string, e.g. '6.49'.",
    )


class Receipt(BaseModel):
    """A purchase receipt exactly as submitted by the client.

    All values arrive as JSON strings and stay strings here. Numbers are
    not coerced: a total sent as the number 6.49 is a malformed request,
    not a valid receipt.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "retailer": "Target",
                    "purchaseDate": "2022-01-01",
                    "purchaseTime": "13:01",
                    "items": [
                        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
                        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
                    ],
                    "total": "18.74",
                }
            ]
        },
    )

    retailer: str = Field(
        ...,
        description=(
            "Retailer or store name. Letters, digits, whitespace, hyphens "
            "and ampersands. Examples: 'Target', 'M&M Corner Market'"
        ),
    )
    purchase_date: str = Field(
        ...,
        alias="purchaseDate",
        description="Date of purchase printed on the receipt, YYYY-MM-DD.",
    )
    purchase_time: str = Field(
        ...,
        alias="purchaseTime",
        description="Time of purchase printed on the receipt, 24-hour HH:MM.",
    )
    total: str = Field(
        ...,
        description="Total amount paid as a two-decimal string, e.g. '35.35'.",
    )
    items: list[Item] = Field(
        ...,
        description="Items on the receipt in printed order. At least one is required.",
    )


class ValidatedItem(BaseModel):
    """Item after validation: description kept raw, price parsed to cents."""

    model_config = ConfigDict(frozen=True)

    description: str
    price_cents: int = Field(..., ge=0)

    @property
    def trimmed_description(self) -> str:
        return self.description.strip()


class ValidatedReceipt(BaseModel):
    """Output of validate.validate_receipt().

    Only the Validator builds these. Every field has passed its format
    check, so scoring rules can use the parsed values directly. Dates and
    times are shape-checked only: month 13 or hour 29 would pass and are
    scored literally.
    """

    model_config = ConfigDict(frozen=True)

    retailer: str
    year: int
    month: int
    day: int
    hour: int
    minute: int
    total_cents: int = Field(..., ge=0)
    items: tuple[ValidatedItem, ...]

    @property
    def item_count(self) -> int:
        return len(self.items)

    @property
    def clock_value(self) -> int:
        """Purchase time read as a plain HHMM integer (14:05 -> 1405)."""
        return self.hour * 100 + self.minute


class RuleResult(BaseModel):
    """Contribution of one scoring rule to a receipt's points."""

    model_config = ConfigDict(frozen=True)

    rule: str = Field(..., description="Stable rule name, e.g. 'odd_purchase_day'.")
    points: int = Field(..., ge=0, description="Points this rule added (0 when it did not fire).")
    evidence: str = Field(..., description="Why the rule did or did not award points.")


class ScoreRecord(BaseModel):
    """A stored score. Created once per accepted receipt, never modified."""

    model_config = ConfigDict(frozen=True)

    id: str
    points: int = Field(..., ge=0)
    rules: tuple[RuleResult, ...] = ()
    created_at: str


class ReceiptIdResponse(BaseModel):
    id: str


class PointsResponse(BaseModel):
    points: int


class BreakdownResponse(BaseModel):
    id: str
    points: int
    rules: list[RuleResult]
