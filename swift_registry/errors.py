"""Error taxonomy shared by the validator, the stores and the query service.

Each error carries the HTTP status the API adapter answers with; nothing
below the adapter looks at it.
"""

from __future__ import annotations
from typing import Dict, List, Optional


class RegistryError(Exception):
    status: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RegistryError):
    status = 400

    def __init__(self, message: str, details: Optional[List[Dict[str, str]]] = None):
        super().__init__(message)
        self.details: List[Dict[str, str]] = list(details or [])


class ConflictError(RegistryError):
    status = 409


class NotFoundError(RegistryError):
    status = 404


class InternalError(RegistryError):
    status = 500
