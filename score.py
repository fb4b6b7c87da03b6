"""
score.py - Receipt points rules.

Seven independent rules each inspect a ValidatedReceipt and return
(points, evidence). A receipt's score is the plain sum of every rule's
points; no rule looks at another rule's result.

    retailer_name             1 point per character of the retailer name
    round_dollar_total        50 if the total has no cents
    quarter_multiple_total    25 if the total is a multiple of 0.25
    item_pairs                5 per two items
    item_description_length   ceil(price * 0.2) per item whose trimmed
                              description length is a multiple of 3
    odd_purchase_day          6 if the day of month is odd
    afternoon_purchase        10 if bought after 14:00 and before 16:00

All money math is done in integer cents.
"""

from __future__ import annotations

from typing import Callable

from logging_config import get_logger
from models import RuleResult, ValidatedReceipt

logger = get_logger(__name__)

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
POINTS_PER_ITEM_PAIR = 5
DESCRIPTION_LENGTH_MULTIPLE = 3
# ceil(price * 0.2) == ceil(cents / 500)
DESCRIPTION_PRICE_DIVISOR_CENTS = 500
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START = 1400
AFTERNOON_END = 1600

Rule = Callable[[ValidatedReceipt], tuple[int, str]]


def _money(cents: int) -> str:
    return f"{cents // 100}.{cents % 100:02d}"


def retailer_name(receipt: ValidatedReceipt) -> tuple[int, str]:
    points = len(receipt.retailer)
    return points, f"Retailer name {receipt.retailer!r} has {points} characters"


def round_dollar_total(receipt: ValidatedReceipt) -> tuple[int, str]:
    total = _money(receipt.total_cents)
    if receipt.total_cents % 100 == 0:
        return ROUND_DOLLAR_POINTS, f"Total {total} is a round dollar amount"
    return 0, f"Total {total} is not a round dollar amount"


def quarter_multiple_total(receipt: ValidatedReceipt) -> tuple[int, str]:
    total = _money(receipt.total_cents)
    if receipt.total_cents % 25 == 0:
        return QUARTER_MULTIPLE_POINTS, f"Total {total} is a multiple of 0.25"
    return 0, f"Total {total} is not a multiple of 0.25"


def item_pairs(receipt: ValidatedReceipt) -> tuple[int, str]:
    pairs = receipt.item_count // 2
    return pairs * POINTS_PER_ITEM_PAIR, f"{receipt.item_count} items make {pairs} pair(s)"


def item_description_length(receipt: ValidatedReceipt) -> tuple[int, str]:
    points = 0
    matched: list[str] = []
    for item in receipt.items:
        trimmed = item.trimmed_description
        if len(trimmed) % DESCRIPTION_LENGTH_MULTIPLE != 0:
            continue
        # ceiling division
        item_points = -(-item.price_cents // DESCRIPTION_PRICE_DIVISOR_CENTS)
        points += item_points
        matched.append(f"{trimmed!r} ({_money(item.price_cents)} -> {item_points})")

    if not matched:
        return 0, "No item description length is a multiple of 3"
    return points, "Description length multiple of 3: " + ", ".join(matched)


def odd_purchase_day(receipt: ValidatedReceipt) -> tuple[int, str]:
    if receipt.day % 2 == 1:
        return ODD_DAY_POINTS, f"Purchase day {receipt.day:02d} is odd"
    return 0, f"Purchase day {receipt.day:02d} is even"


def afternoon_purchase(receipt: ValidatedReceipt) -> tuple[int, str]:
    clock = f"{receipt.hour:02d}:{receipt.minute:02d}"
    if AFTERNOON_START < receipt.clock_value < AFTERNOON_END:
        return AFTERNOON_POINTS, f"Purchase time {clock} is after 14:00 and before 16:00"
    return 0, f"Purchase time {clock} is outside 14:00-16:00 (exclusive)"


RULES: tuple[Rule, ...] = (
    retailer_name,
    round_dollar_total,
    quarter_multiple_total,
    item_pairs,
    item_description_length,
    odd_purchase_day,
    afternoon_purchase,
)


def score_rules(receipt: ValidatedReceipt) -> list[RuleResult]:
    """Apply every rule in order, including the ones that award nothing."""
    results: list[RuleResult] = []
    for rule in RULES:
        name = rule.__name__
        points, evidence = rule(receipt)
        logger.debug("rule_scored | rule=%s | points=%d | evidence=%s", name, points, evidence)
        results.append(RuleResult(rule=name, points=points, evidence=evidence))
    return results


def total_points(results: list[RuleResult]) -> int:
    return sum(result.points for result in results)


def score_receipt(receipt: ValidatedReceipt) -> int:
    """Total points for a validated receipt."""
    return total_points(score_rules(receipt))
