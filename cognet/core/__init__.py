"""Core domain models and types.

Barrel export for clean imports across the application.
"""

from .types import (
    CognatePair,
    LanguageInfo,
    NodeId,
    ChainWord,
    CognateChain,
    ChainQueryResult,
    WordSuggestion,
    ImportStats,
)

__all__ = [
    "CognatePair",
    "LanguageInfo",
    "NodeId",
    "ChainWord",
    "CognateChain",
    "ChainQueryResult",
    "WordSuggestion",
    "ImportStats",
]
