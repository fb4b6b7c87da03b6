"""
api.py - FastAPI HTTP layer for the receipt points service.

Endpoints:
  - POST /receipts/process
  - GET  /receipts/{receipt_id}/points
  - GET  /receipts/{receipt_id}/breakdown
  - GET  /health

Validation and scoring live in validate.py and score.py; this module only
maps requests onto them and errors onto status codes.
"""

from __future__ import annotations

import os
from typing import Any

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from logging_config import get_logger, setup_logging
from models import BreakdownResponse, PointsResponse, Receipt, ReceiptIdResponse
from receipt_store import score_store
from score import score_rules, total_points
from validate import InvalidReceiptError, validate_receipt

logger = get_logger("receipt-api")

try:
    load_dotenv()
except UnicodeDecodeError:
    # Fallback for legacy Windows-encoded .env files.
    load_dotenv(encoding="cp1252")

INVALID_RECEIPT_DETAIL = "The receipt is invalid."
NOT_FOUND_DETAIL = "No receipt found for that ID."
DEFAULT_PORT = 8080

app = FastAPI(
    title="Receipt Points API",
    version="1.0.0",
)


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    """Turn pydantic error dicts into one readable sentence."""
    if not errors:
        return INVALID_RECEIPT_DETAIL
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    where = ".".join(loc) or "body"
    message = f"{INVALID_RECEIPT_DETAIL} {where}: {first.get('msg', 'invalid value')}"
    if len(errors) > 1:
        message += f" (and {len(errors) - 1} more problem(s))"
    return message


@app.exception_handler(RequestValidationError)
async def malformed_receipt_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report unparseable or wrongly shaped bodies as 400 instead of 422."""
    errors = list(exc.errors())
    detail = _describe_validation_errors(errors)
    logger.warning(
        "api_malformed_input | path=%s | error_count=%d | detail=%s",
        request.url.path,
        len(errors),
        detail,
    )
    return JSONResponse(status_code=400, content={"detail": detail})


@app.get("/health")
def health() -> dict[str, str]:
    """Simple liveness endpoint."""
    return {"status": "ok"}


@app.post("/receipts/process", response_model=ReceiptIdResponse)
def process_receipt(receipt: Receipt) -> ReceiptIdResponse:
    """Validate and score a receipt, store the points, return the new id."""
    try:
        validated = validate_receipt(receipt)
        results = score_rules(validated)
        points = total_points(results)
        receipt_id = score_store.put(points, results)
    except InvalidReceiptError as exc:
        raise HTTPException(status_code=400, detail=f"{INVALID_RECEIPT_DETAIL} {exc}") from exc
    except Exception as exc:
        logger.error(
            "api_process_error | error_type=%s | error=%s",
            type(exc).__name__,
            exc,
            exc_info=True,
        )
        raise HTTPException(
            status_code=500,
            detail="Unexpected server error while processing receipt.",
        ) from exc

    logger.info("receipt_processed | id=%s | points=%d | items=%d", receipt_id, points, validated.item_count)
    return ReceiptIdResponse(id=receipt_id)


@app.get("/receipts/{receipt_id}/points", response_model=PointsResponse)
def get_receipt_points(receipt_id: str) -> PointsResponse:
    """Return the points awarded to a previously processed receipt."""
    points = score_store.get_points(receipt_id)
    if points is None:
        logger.info("receipt_not_found | id=%s", receipt_id)
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return PointsResponse(points=points)


@app.get("/receipts/{receipt_id}/breakdown", response_model=BreakdownResponse)
def get_receipt_breakdown(receipt_id: str) -> BreakdownResponse:
    """Return the per-rule contributions behind a receipt's points."""
    record = score_store.get(receipt_id)
    if record is None:
        logger.info("receipt_not_found | id=%s", receipt_id)
        raise HTTPException(status_code=404, detail=NOT_FOUND_DETAIL)
    return BreakdownResponse(id=record.id, points=record.points, rules=list(record.rules))


if __name__ == "__main__":
    setup_logging()
    port = int(os.getenv("PORT", str(DEFAULT_PORT)))
    uvicorn.run("api:app", host="0.0.0.0", port=port, reload=False)
