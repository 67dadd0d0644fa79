from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

from swift_registry.errors import NotFoundError
from swift_registry.hierarchy import ResolvedRecord, resolve
from swift_registry.store.base import CodeStore
from swift_registry.store.models import CodeRecord
from swift_registry.utils.logging import get_logger
from swift_registry.validation import normalize_code, normalize_country_iso2, validate_code_input

logger = get_logger(__name__)

COUNTRY_NOT_FOUND = "Country Not Found"


@dataclass(frozen=True)
class CountryListing:
    country_iso2: str
    country_name: str
    records: List[CodeRecord]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "countryISO2": self.country_iso2,
            "countryName": self.country_name,
            "codes": [r.to_dict() for r in self.records],
        }


class CodeQueryService:
    """Composes validation, storage and hierarchy resolution.

    The store is injected at construction; there is no module-level handle.
    Errors from the store (ConflictError, NotFoundError, InternalError)
    propagate unchanged to the caller.
    """

    def __init__(self, store: CodeStore):
        self.store = store

    def get_by_code(self, code: str) -> ResolvedRecord:
        key = normalize_code(code)
        record = self.store.get(key)
        if record is None:
            logger.info("code_lookup_miss", swift_code=key)
            raise NotFoundError(f"SWIFT code '{code}' not found.")
        return resolve(self.store, record)

    def list_by_country(self, country_iso2: str) -> CountryListing:
        # Format is checked at the boundary; only casing is normalized here.
        iso2 = normalize_country_iso2(country_iso2)
        records = self.store.list_by_country(iso2)
        country_name = records[0].country_name if records else COUNTRY_NOT_FOUND
        return CountryListing(country_iso2=iso2, country_name=country_name, records=records)

    def create(self, data: Mapping[str, Any]) -> CodeRecord:
        record = validate_code_input(data)
        created = self.store.insert(record)
        logger.info(
            "code_created",
            swift_code=created.code,
            group_key=created.headquarter_group_key,
            is_headquarter=created.is_headquarter,
        )
        return created

    def delete(self, code: str) -> CodeRecord:
        deleted = self.store.delete(normalize_code(code))
        logger.info("code_deleted", swift_code=deleted.code)
        return deleted
