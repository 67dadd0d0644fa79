"""Bulk CSV import of SWIFT codes (offline batch).

- seed.py: row parsing, normalization and upsert into a CodeStore
- cli.py: `python -m swift_registry.ingestion.cli <csv path>`
"""
