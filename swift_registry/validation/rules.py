from __future__ import annotations
from typing import Any, Dict, List, Mapping
import re

from swift_registry.errors import ValidationError
from swift_registry.store.models import CodeRecord

# 4 letters institution, 2 letters country, 2 alnum location, optional 3 alnum branch
SWIFT_CODE_RE = re.compile(r"^[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?$")
COUNTRY_ISO2_RE = re.compile(r"^[A-Z]{2}$")
HEADQUARTER_SUFFIX = "XXX"

_MIN_CODE_LEN = 8
_MAX_CODE_LEN = 11


def ascii_upper(value: str) -> str:
    # upper-casing non-ASCII can change length ("ß" -> "SS")
    return value.upper() if value.isascii() else value


def normalize_code(code: str) -> str:
    return ascii_upper(code.strip())


def normalize_country_iso2(iso2: str) -> str:
    return ascii_upper(iso2.strip())


def is_valid_swift_code(code: str) -> bool:
    return bool(SWIFT_CODE_RE.fullmatch(code))


def is_valid_country_iso2(iso2: str) -> bool:
    return bool(COUNTRY_ISO2_RE.fullmatch(iso2))


def is_headquarter_code(code: str) -> bool:
    return code.endswith(HEADQUARTER_SUFFIX)


def _required_str(data: Mapping[str, Any], field: str, errors: List[Dict[str, str]]) -> str | None:
    value = data.get(field)
    if value is None:
        errors.append({"field": field, "message": "Required"})
        return None
    if not isinstance(value, str):
        errors.append({"field": field, "message": "Expected a string"})
        return None
    return value.strip()


def validate_code_input(data: Mapping[str, Any]) -> CodeRecord:
    """Check raw create input and return a normalized CodeRecord.

    Keys are the wire names: swiftCode, bankName, address, countryISO2,
    countryName, isHeadquarter. Every violated rule is collected and
    reported together in a single ValidationError. The headquarters flag
    is taken as supplied; it is not compared with the code's suffix.
    """
    errors: List[Dict[str, str]] = []

    code = _required_str(data, "swiftCode", errors)
    if code is not None:
        code = ascii_upper(code)
        if not (_MIN_CODE_LEN <= len(code) <= _MAX_CODE_LEN):
            errors.append({"field": "swiftCode", "message": "SWIFT code must be 8 to 11 characters"})
        if not is_valid_swift_code(code):
            errors.append({"field": "swiftCode", "message": "Invalid SWIFT code format"})

    bank_name = _required_str(data, "bankName", errors)
    if bank_name is not None and not bank_name:
        errors.append({"field": "bankName", "message": "Bank name cannot be empty"})

    address = data.get("address")
    if address is None:
        address = ""
    elif not isinstance(address, str):
        errors.append({"field": "address", "message": "Expected a string"})
        address = ""

    iso2 = _required_str(data, "countryISO2", errors)
    if iso2 is not None:
        iso2 = ascii_upper(iso2)
        if not is_valid_country_iso2(iso2):
            errors.append({"field": "countryISO2", "message": "Country ISO2 must be 2 letters"})

    country_name = _required_str(data, "countryName", errors)
    if country_name is not None and not country_name:
        errors.append({"field": "countryName", "message": "Country name cannot be empty"})

    is_hq = data.get("isHeadquarter")
    if is_hq is None:
        errors.append({"field": "isHeadquarter", "message": "Required"})
    elif not isinstance(is_hq, bool):
        errors.append({"field": "isHeadquarter", "message": "Expected a boolean"})

    if errors:
        raise ValidationError("Invalid input data.", details=errors)

    return CodeRecord(
        code=code,
        bank_name=bank_name,
        address=address,
        country_iso2=iso2,
        country_name=country_name.upper(),
        is_headquarter=is_hq,
    )
