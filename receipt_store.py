"""
receipt_store.py - In-memory score storage.

Maps generated receipt ids to immutable ScoreRecord objects for the
lifetime of the process. There is no update or delete; a restart
empties the store.
"""

from __future__ import annotations

import threading
import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional

from logging_config import get_logger
from models import RuleResult, ScoreRecord

logger = get_logger(__name__)


def generate_receipt_id() -> str:
    """Return a fresh opaque receipt id (UUID4 string)."""
    return str(uuid.uuid4())


class ScoreStore:
    """Thread-safe id -> ScoreRecord mapping (resets on server restart)."""

    def __init__(self) -> None:
        self._records: dict[str, ScoreRecord] = {}
        self._lock = threading.Lock()

    def put(self, points: int, rules: Iterable[RuleResult] = ()) -> str:
        """Store a score under a new id and return the id."""
        if points < 0:
            raise ValueError(f"points must be non-negative, got {points}")

        rules = tuple(rules)
        created_at = datetime.now(timezone.utc).isoformat()
        with self._lock:
            record_id = generate_receipt_id()
            while record_id in self._records:
                record_id = generate_receipt_id()
            self._records[record_id] = ScoreRecord(
                id=record_id,
                points=points,
                rules=rules,
                created_at=created_at,
            )

        logger.debug("score_stored | id=%s | points=%d", record_id, points)
        return record_id

    def get(self, record_id: str) -> Optional[ScoreRecord]:
        with self._lock:
            return self._records.get(record_id)

    def get_points(self, record_id: str) -> Optional[int]:
        record = self.get(record_id)
        return None if record is None else record.points

    def __contains__(self, record_id: object) -> bool:
        with self._lock:
            return record_id in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


score_store = ScoreStore()
