"""
main.py - CLI for scoring receipts without running the server.

Same pipeline as POST /receipts/process, minus the store:
1. load JSON
2. validate
3. score
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from logging_config import get_logger, setup_logging
from models import Receipt, RuleResult
from score import score_rules, total_points
from validate import validate_receipt

logger = get_logger("receipt-cli")


def _configure_output_symbols() -> tuple[str, str]:
    """Configure stdout encoding and return safe line/fail symbols."""
    try:
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    except Exception:
        pass

    try:
        "═✗".encode(sys.stdout.encoding or "utf-8")
        return "═", "✗"
    except Exception:
        return "=", "X"


BOX_CHAR, FAIL_CHAR = _configure_output_symbols()


def load_receipt(path: str) -> Receipt:
    """Read a receipt JSON file into a Receipt model."""
    receipt_path = Path(str(path).strip())
    if not receipt_path.is_file():
        raise FileNotFoundError(f"Receipt file not found: {receipt_path}")

    try:
        raw = json.loads(receipt_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Receipt file is not valid JSON: {exc}") from exc

    return Receipt.model_validate(raw)


def score_file(path: str) -> tuple[Receipt, list[RuleResult]]:
    """Load, validate and score one receipt file."""
    receipt = load_receipt(path)
    validated = validate_receipt(receipt)
    results = score_rules(validated)
    logger.info("cli_scored | file=%s | points=%d", path, total_points(results))
    return receipt, results


def format_breakdown(retailer: str, results: list[RuleResult]) -> str:
    """Render a per-rule breakdown box for terminal output."""
    lines = [
        BOX_CHAR * 60,
        f"  {retailer}",
        BOX_CHAR * 60,
    ]
    for result in results:
        lines.append(f"  {result.rule:<26} {result.points:>5}   {result.evidence}")
    lines.append(f"  {'─' * 26} {'─' * 5}")
    lines.append(f"  {'TOTAL':<26} {total_points(results):>5}")
    lines.append(BOX_CHAR * 60)
    return "\n".join(lines)


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="receipt-points",
        description="Score a receipt JSON file with the receipt points rules.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  %(prog)s receipt.json\n"
            "  %(prog)s receipt.json --json\n"
        ),
    )
    parser.add_argument("receipt", help="Path to a receipt JSON file")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print points and rule breakdown as JSON",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (DEBUG-level) logging",
    )

    args = parser.parse_args(argv)
    load_dotenv()
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        receipt, results = score_file(args.receipt)
    except FileNotFoundError as exc:
        logger.error("cli_error | type=FileNotFoundError | error=%s", exc)
        print(f"{FAIL_CHAR} Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    except ValueError as exc:
        logger.error("cli_error | type=%s | error=%s", type(exc).__name__, exc)
        print(f"{FAIL_CHAR} Invalid receipt: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if args.json:
        payload = {
            "points": total_points(results),
            "rules": [result.model_dump() for result in results],
        }
        print(json.dumps(payload, indent=2))
    else:
        print(format_breakdown(receipt.retailer, results))


if __name__ == "__main__":
    main()
