from __future__ import annotations
from typing import Dict, List, Optional
import threading

from swift_registry.errors import ConflictError, NotFoundError
from .models import CodeRecord


class InMemoryCodeStore:
    """Process-local store. Not durable; used by tests and local runs."""

    def __init__(self):
        self._records: Dict[str, CodeRecord] = {}
        self._lock = threading.Lock()

    def get(self, code: str) -> Optional[CodeRecord]:
        with self._lock:
            return self._records.get(code)

    def list_by_country(self, country_iso2: str) -> List[CodeRecord]:
        with self._lock:
            rows = [r for r in self._records.values() if r.country_iso2 == country_iso2]
        return sorted(rows, key=lambda r: r.code)

    def list_by_group_excluding(self, group_key: str, exclude_code: str) -> List[CodeRecord]:
        with self._lock:
            rows = [
                r for r in self._records.values()
                if r.headquarter_group_key == group_key and r.code != exclude_code
            ]
        return sorted(rows, key=lambda r: r.code)

    def insert(self, record: CodeRecord) -> CodeRecord:
        with self._lock:
            if record.code in self._records:
                raise ConflictError(f"SWIFT code {record.code} already exists.")
            self._records[record.code] = record
        return record

    def delete(self, code: str) -> CodeRecord:
        with self._lock:
            record = self._records.pop(code, None)
        if record is None:
            raise NotFoundError(f"SWIFT code '{code}' not found.")
        return record

    def upsert(self, record: CodeRecord) -> CodeRecord:
        with self._lock:
            self._records[record.code] = record
        return record

    def count(self) -> int:
        with self._lock:
            return len(self._records)
