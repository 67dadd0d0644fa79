from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from swift_registry.store.base import CodeStore
from swift_registry.store.models import CodeRecord


@dataclass(frozen=True)
class ResolvedRecord:
    record: CodeRecord
    branches: Optional[List[CodeRecord]] = None  # None for branch records, [] for a headquarters without branches

    def to_dict(self) -> Dict[str, Any]:
        out = self.record.to_dict()
        if self.branches is not None:
            out["branches"] = [b.to_dict() for b in self.branches]
        return out


def resolve(store: CodeStore, record: CodeRecord) -> ResolvedRecord:
    """Attach the live branch list to a headquarters record.

    Branches are every other record sharing the headquarters' group key,
    computed at read time (no stored parent reference), ascending by code.
    If a group holds more than one headquarters, each one lists all other
    members, other headquarters included.

    Branch records are returned without touching the store.
    """
    if not record.is_headquarter:
        return ResolvedRecord(record=record)
    branches = store.list_by_group_excluding(record.headquarter_group_key, record.code)
    return ResolvedRecord(record=record, branches=list(branches))
