"""SQLAlchemy-backed CodeStore.

Uniqueness of ``swift_code`` is enforced by the primary key, so concurrent
inserts of the same code resolve to one success and one ConflictError.
``headquarter_group_key`` is a materialized index over the code prefix,
written from the record's code on every insert/upsert.
"""

from __future__ import annotations
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional

from sqlalchemy import (
    Boolean,
    Column,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    func,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import StaticPool

from swift_registry.errors import ConflictError, InternalError, NotFoundError
from .models import CodeRecord

metadata = MetaData()

swift_codes = Table(
    "swift_codes",
    metadata,
    Column("swift_code", String(11), primary_key=True),
    Column("bank_name", String(255), nullable=False),
    Column("address", String(512), nullable=False, default=""),
    Column("country_iso2", String(2), nullable=False, index=True),
    Column("country_name", String(255), nullable=False),
    Column("is_headquarter", Boolean, nullable=False),
    Column("headquarter_group_key", String(8), nullable=False, index=True),
)

_IN_MEMORY_URLS = ("sqlite://", "sqlite:///:memory:")


def _to_row(record: CodeRecord) -> Dict[str, Any]:
    return {
        "swift_code": record.code,
        "bank_name": record.bank_name,
        "address": record.address,
        "country_iso2": record.country_iso2,
        "country_name": record.country_name,
        "is_headquarter": record.is_headquarter,
        "headquarter_group_key": record.headquarter_group_key,
    }


def _from_row(row: Mapping[str, Any]) -> CodeRecord:
    return CodeRecord(
        code=row["swift_code"],
        bank_name=row["bank_name"],
        address=row["address"] or "",
        country_iso2=row["country_iso2"],
        country_name=row["country_name"],
        is_headquarter=bool(row["is_headquarter"]),
    )


def build_engine(database_url: str) -> Engine:
    if database_url in _IN_MEMORY_URLS:
        # one shared connection, otherwise every checkout sees an empty database
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(database_url, pool_pre_ping=True)


class SqlCodeStore:
    def __init__(self, engine: Engine):
        self._engine = engine
        metadata.create_all(engine)

    @contextmanager
    def _storage_errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            raise InternalError(f"Storage failure while {action}.") from e

    def get(self, code: str) -> Optional[CodeRecord]:
        stmt = select(swift_codes).where(swift_codes.c.swift_code == code)
        with self._storage_errors("fetching SWIFT code"):
            with self._engine.connect() as conn:
                row = conn.execute(stmt).mappings().first()
        return _from_row(row) if row is not None else None

    def list_by_country(self, country_iso2: str) -> List[CodeRecord]:
        stmt = (
            select(swift_codes)
            .where(swift_codes.c.country_iso2 == country_iso2)
            .order_by(swift_codes.c.swift_code.asc())
        )
        with self._storage_errors("listing SWIFT codes for country"):
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        return [_from_row(r) for r in rows]

    def list_by_group_excluding(self, group_key: str, exclude_code: str) -> List[CodeRecord]:
        stmt = (
            select(swift_codes)
            .where(
                swift_codes.c.headquarter_group_key == group_key,
                swift_codes.c.swift_code != exclude_code,
            )
            .order_by(swift_codes.c.swift_code.asc())
        )
        with self._storage_errors("listing branches"):
            with self._engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        return [_from_row(r) for r in rows]

    def insert(self, record: CodeRecord) -> CodeRecord:
        with self._storage_errors("creating SWIFT code"):
            try:
                with self._engine.begin() as conn:
                    conn.execute(insert(swift_codes).values(**_to_row(record)))
            except IntegrityError as e:
                raise ConflictError(f"SWIFT code {record.code} already exists.") from e
        return record

    def delete(self, code: str) -> CodeRecord:
        where = swift_codes.c.swift_code == code
        with self._storage_errors("deleting SWIFT code"):
            with self._engine.begin() as conn:
                row = conn.execute(select(swift_codes).where(where)).mappings().first()
                # rowcount guards against a concurrent delete between the two statements
                if row is None or conn.execute(delete(swift_codes).where(where)).rowcount == 0:
                    raise NotFoundError(f"SWIFT code '{code}' not found.")
        return _from_row(row)

    def upsert(self, record: CodeRecord) -> CodeRecord:
        values = _to_row(record)
        with self._storage_errors("upserting SWIFT code"):
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(swift_codes)
                    .where(swift_codes.c.swift_code == record.code)
                    .values(**values)
                )
                if result.rowcount == 0:
                    conn.execute(insert(swift_codes).values(**values))
        return record

    def count(self) -> int:
        with self._storage_errors("counting SWIFT codes"):
            with self._engine.connect() as conn:
                return conn.execute(select(func.count()).select_from(swift_codes)).scalar_one()

    def close(self) -> None:
        self._engine.dispose()


def create_store(database_url: str) -> SqlCodeStore:
    return SqlCodeStore(build_engine(database_url))
