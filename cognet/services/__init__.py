"""Service layer implementations.

Barrel export for business logic services.
"""

from .graph import CognateGraph, GraphStats, build_graph
from .coordinates import CoordinateDeduplicator, OFFSETS
from .enrich import LanguageEnricher, LanguageTable
from .chains import ChainExtractor
from .search import CognateSearchService

__all__ = [
    "CognateGraph",
    "GraphStats",
    "build_graph",
    "CoordinateDeduplicator",
    "OFFSETS",
    "LanguageEnricher",
    "LanguageTable",
    "ChainExtractor",
    "CognateSearchService",
]
