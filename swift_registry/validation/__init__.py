"""Input checks and normalization for SWIFT/BIC code records.

Pure functions, no store access. See `swift_registry/validation/rules.py`.
"""

from .rules import (
    COUNTRY_ISO2_RE,
    HEADQUARTER_SUFFIX,
    SWIFT_CODE_RE,
    ascii_upper,
    is_headquarter_code,
    is_valid_country_iso2,
    is_valid_swift_code,
    normalize_code,
    normalize_country_iso2,
    validate_code_input,
)

__all__ = [
    "COUNTRY_ISO2_RE",
    "HEADQUARTER_SUFFIX",
    "SWIFT_CODE_RE",
    "ascii_upper",
    "is_headquarter_code",
    "is_valid_country_iso2",
    "is_valid_swift_code",
    "normalize_code",
    "normalize_country_iso2",
    "validate_code_input",
]
