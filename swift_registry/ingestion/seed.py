from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, TextIO, Tuple
from pathlib import Path
import csv

from swift_registry.errors import RegistryError
from swift_registry.store.base import CodeStore
from swift_registry.store.models import CodeRecord
from swift_registry.utils.logging import get_logger
from swift_registry.validation import (
    is_headquarter_code,
    is_valid_country_iso2,
    is_valid_swift_code,
    normalize_code,
    normalize_country_iso2,
)

logger = get_logger(__name__)

COL_ISO2 = "COUNTRY ISO2 CODE"
COL_CODE = "SWIFT CODE"
COL_NAME = "NAME"
COL_ADDRESS = "ADDRESS"
COL_COUNTRY = "COUNTRY NAME"
REQUIRED_COLUMNS = (COL_CODE, COL_NAME, COL_ISO2, COL_COUNTRY)


@dataclass
class SeedResult:
    parsed: int = 0
    skipped: int = 0
    upserted: int = 0
    failed: int = 0


def parse_row(row: Dict[str, Optional[str]]) -> Tuple[Optional[CodeRecord], Optional[str]]:
    """Turn one CSV row into a CodeRecord, or return the reason it is skipped.

    The file has no headquarters column, so the flag is derived from the
    XXX branch suffix.
    """
    if any(not (row.get(col) or "").strip() for col in REQUIRED_COLUMNS):
        return None, "missing_required_field"
    code = normalize_code(row[COL_CODE])
    iso2 = normalize_country_iso2(row[COL_ISO2])
    if not is_valid_swift_code(code):
        return None, "invalid_swift_code"
    if not is_valid_country_iso2(iso2):
        return None, "invalid_country_iso2"
    record = CodeRecord(
        code=code,
        bank_name=row[COL_NAME].strip(),
        address=(row.get(COL_ADDRESS) or "").strip(),
        country_iso2=iso2,
        country_name=row[COL_COUNTRY].strip().upper(),
        is_headquarter=is_headquarter_code(code),
    )
    return record, None


def read_rows(fh: TextIO) -> Iterable[Dict[str, Optional[str]]]:
    reader = csv.DictReader(fh)
    if reader.fieldnames:
        reader.fieldnames = [h.strip() for h in reader.fieldnames]
    return reader


def seed_rows(store: CodeStore, rows: Iterable[Dict[str, Optional[str]]]) -> SeedResult:
    result = SeedResult()
    records: List[CodeRecord] = []
    for line_no, row in enumerate(rows, start=2):
        record, reason = parse_row(row)
        if record is None:
            result.skipped += 1
            logger.warning("seed_row_skipped", line=line_no, reason=reason, swift_code=row.get(COL_CODE))
            continue
        records.append(record)
    result.parsed = len(records)

    for record in records:
        try:
            store.upsert(record)
            result.upserted += 1
        except RegistryError as e:
            result.failed += 1
            logger.error("seed_upsert_failed", swift_code=record.code, error=e.message)

    logger.info(
        "seed_finished",
        parsed=result.parsed,
        skipped=result.skipped,
        upserted=result.upserted,
        failed=result.failed,
    )
    return result


def seed_file(store: CodeStore, path: str | Path) -> SeedResult:
    logger.info("seed_started", path=str(path))
    with open(path, newline="", encoding="utf-8-sig") as fh:
        return seed_rows(store, read_rows(fh))
