"""Registry Store: keyed storage of CodeRecords.

- models.py: CodeRecord and the derived headquarters group key
- base.py: CodeStore protocol shared by all backends
- memory.py: lock-guarded in-process store
- sql.py: SQLAlchemy-backed durable store
"""

from .base import CodeStore
from .memory import InMemoryCodeStore
from .models import CodeRecord, group_key_for
from .sql import SqlCodeStore, create_store

__all__ = [
    "CodeRecord",
    "CodeStore",
    "InMemoryCodeStore",
    "SqlCodeStore",
    "create_store",
    "group_key_for",
]
