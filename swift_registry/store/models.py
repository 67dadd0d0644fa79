from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict

GROUP_KEY_LENGTH = 8


def group_key_for(code: str) -> str:
    """First 8 characters of a code: institution + country + location."""
    return code[:GROUP_KEY_LENGTH]


@dataclass(frozen=True)
class CodeRecord:
    code: str
    bank_name: str
    country_iso2: str
    country_name: str
    is_headquarter: bool
    address: str = ""

    @property
    def headquarter_group_key(self) -> str:
        # Always derived from the code, never set independently.
        return group_key_for(self.code)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "swiftCode": self.code,
            "bankName": self.bank_name,
            "address": self.address,
            "countryISO2": self.country_iso2,
            "countryName": self.country_name,
            "isHeadquarter": self.is_headquarter,
        }
