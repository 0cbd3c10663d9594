"""
In-memory incident repository.
"""

import datetime
import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .records import IncidentRecord
from .validation import sanitize_record, validate_record

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    """Outcome of adding a batch of records to the repository."""
    added: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)


class IncidentRepository:
    """
    Thread-safe in-memory store of validated incident records.

    Records are sanitized and validated on the way in and returned in
    insertion order. Nothing is persisted.
    """

    def __init__(self):
        self._records: Dict[str, IncidentRecord] = {}
        self._lock = threading.Lock()

    def add(self, record: IncidentRecord, today: Optional[datetime.date] = None) -> IncidentRecord:
        """
        Sanitize, validate and store a record.

        Raises:
            ValueError: If the record is invalid or its id already exists
        """
        record = sanitize_record(record)
        is_valid, errors = validate_record(record, today)
        if not is_valid:
            raise ValueError(f"Invalid record {record.id or '<no id>'}: {'; '.join(errors)}")

        with self._lock:
            if record.id in self._records:
                raise ValueError(f"Duplicate record id: {record.id}")
            self._records[record.id] = record

        return record

    def add_batch(self, records: List[IncidentRecord],
                  today: Optional[datetime.date] = None) -> BatchResult:
        """Add records one by one, collecting failures instead of raising."""
        result = BatchResult()
        for record in records:
            try:
                self.add(record, today)
                result.added += 1
            except ValueError as e:
                result.failed += 1
                result.errors.append(str(e))

        logger.info(f"Added {result.added} records ({result.failed} rejected)")
        return result

    def get(self, record_id: str) -> Optional[IncidentRecord]:
        with self._lock:
            return self._records.get(record_id)

    def get_all(self) -> List[IncidentRecord]:
        with self._lock:
            return list(self._records.values())

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
