"""HTTP adapter (Flask) over the query service."""
