"""Service contracts and interfaces.

Defines protocols for dependency injection and testing.
"""

from typing import Callable, Iterable, Optional, Protocol
from .types import CognatePair, LanguageInfo


class ICognateStore(Protocol):
    """Contract for the record store holding cognate pairs and languages."""

    async def get_cognate_pairs(self, concept_id: str) -> list[CognatePair]:
        """Return the ordered pair list for a concept, empty when unknown."""
        ...

    async def get_language_info(self, code: str) -> LanguageInfo:
        """Return one language record.

        Raises LanguageNotFoundError for unknown codes and
        CorruptRecordError when the record cannot be decoded.
        """
        ...

    async def get_language_infos(self, codes: Iterable[str]) -> dict[str, LanguageInfo]:
        """Return records for the known codes; unknown codes are omitted."""
        ...

    async def get_prefix_matches(self, prefix: str) -> list[str]:
        """Return `word|language|concept_id` members indexed under a prefix."""
        ...


class ICoordinateAdjuster(Protocol):
    """Contract for marker placement within one chain build."""

    def adjust(self, coordinates: Optional[list[float]]) -> Optional[list[float]]:
        """Return a placement that does not collide with earlier ones."""
        ...


# Resolves a language code or raises LanguageNotFoundError.
LanguageResolver = Callable[[str], LanguageInfo]
