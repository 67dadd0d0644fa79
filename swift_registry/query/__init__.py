"""Query Service: the four registry operations consumed by callers."""

from .service import COUNTRY_NOT_FOUND, CodeQueryService, CountryListing

__all__ = ["COUNTRY_NOT_FOUND", "CodeQueryService", "CountryListing"]
