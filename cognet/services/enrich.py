"""Language enrichment for chain words and suggestions.

Nothing is cached between requests. A chain build prefetches every
language its pairs mention in one batched store read, then resolves
codes from that snapshot while the graph is walked.
"""

from typing import Iterable, Optional

from cognet.core.contracts import ICognateStore
from cognet.core.types import CognatePair, LanguageInfo
from cognet.errors import LanguageNotFoundError
from cognet.observ import get_logger

logger = get_logger(__name__)


class LanguageTable:
    """Languages fetched for one chain build."""

    def __init__(self, languages: dict[str, LanguageInfo], requested: Iterable[str] = ()):
        self._languages = dict(languages)
        self._missing = {code for code in requested if code not in self._languages}

    def resolve(self, code: str) -> LanguageInfo:
        try:
            return self._languages[code]
        except KeyError:
            raise LanguageNotFoundError(code) from None

    def get(self, code: str) -> Optional[LanguageInfo]:
        return self._languages.get(code)

    @property
    def missing(self) -> set[str]:
        """Requested codes with no stored record."""
        return set(self._missing)


def languages_in(pairs: Iterable[CognatePair]) -> set[str]:
    """Distinct language codes referenced by a pair list."""
    codes: set[str] = set()
    for pair in pairs:
        codes.add(pair.lang1)
        codes.add(pair.lang2)
    return codes


class LanguageEnricher:
    """Resolves language codes to LanguageInfo via the record store."""

    def __init__(self, store: ICognateStore):
        self._store = store

    async def prefetch(self, codes: Iterable[str]) -> LanguageTable:
        """Fetch all codes in one round trip.

        Unknown codes are logged and left out of the table. Corrupt
        records and store failures propagate.
        """
        requested = sorted(set(codes))
        if not requested:
            return LanguageTable({})

        languages = await self._store.get_language_infos(requested)
        table = LanguageTable(languages, requested)
        if table.missing:
            logger.warning("languages_not_found", languages=sorted(table.missing))
        return table

