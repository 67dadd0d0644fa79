"""Headquarters/branch resolution over the shared 8-character code prefix."""

from .core import ResolvedRecord, resolve

__all__ = ["ResolvedRecord", "resolve"]
