from __future__ import annotations
from typing import List, Optional, Protocol

from .models import CodeRecord


class CodeStore(Protocol):
    """Storage contract keyed by ``CodeRecord.code``.

    Lookups are exact-match and case-sensitive; callers upper-case codes
    first. Listings are ordered ascending by code. Each call is atomic for
    the key it touches.
    """

    def get(self, code: str) -> Optional[CodeRecord]: ...

    def list_by_country(self, country_iso2: str) -> List[CodeRecord]: ...

    def list_by_group_excluding(self, group_key: str, exclude_code: str) -> List[CodeRecord]: ...

    def insert(self, record: CodeRecord) -> CodeRecord:
        """Store a new record; ConflictError if the code exists."""
        ...

    def delete(self, code: str) -> CodeRecord:
        """Remove and return a record; NotFoundError if absent."""
        ...

    def upsert(self, record: CodeRecord) -> CodeRecord:
        """Insert or replace by code. Used by bulk import only."""
        ...

    def count(self) -> int: ...
