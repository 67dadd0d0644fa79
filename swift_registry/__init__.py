"""SWIFT/BIC code registry: headquarters/branch lookup, country listing, create and delete."""

__version__ = "0.1.0"
