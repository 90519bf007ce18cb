"""Storage layer for persistence and bulk import.

Barrel export for the record store and importer.
"""

from .store import RedisCognateStore, create_redis
from .ingest import DataImporter, generate_prefixes, parse_tsv_line, parse_languages

__all__ = [
    # Store
    "RedisCognateStore",
    "create_redis",
    # Import
    "DataImporter",
    "generate_prefixes",
    "parse_tsv_line",
    "parse_languages",
]
