"""Cognate search service.

Word suggestions, concept lookups, and cognate chain discovery on top of
the record store.
"""

from typing import Optional

from cognet.core.contracts import ICognateStore
from cognet.core.types import (
    ChainQueryResult,
    CognateChain,
    CognatePair,
    WordSuggestion,
)
from cognet.errors import ChainDiscoveryError, CorruptRecordError, StoreUnavailableError
from cognet.observ import concept_context, get_logger, timer
from cognet.services.chains import ChainExtractor
from cognet.services.coordinates import CoordinateDeduplicator
from cognet.services.enrich import LanguageEnricher, languages_in
from cognet.services.graph import build_graph

logger = get_logger(__name__)


def parse_suggestion(member: str) -> Optional[tuple[str, str, str]]:
    """Split a `word|language|concept_id` index member."""
    parts = member.split("|")
    if len(parts) != 3:
        return None
    return parts[0], parts[1], parts[2]


def select_chain(
    chains: list[CognateChain],
    word: str,
    language: str
) -> list[CognateChain]:
    """First chain containing the (word, language) pair, or nothing."""
    for chain in chains:
        if any(w.word == word and w.language.code == language for w in chain):
            return [chain]
    return []


class CognateSearchService:
    """Read-side operations over stored cognate data."""

    def __init__(
        self,
        store: ICognateStore,
        suggestion_limit: int = 10,
        min_prefix_length: int = 2
    ):
        self._store = store
        self._enricher = LanguageEnricher(store)
        self._suggestion_limit = suggestion_limit
        self._min_prefix_length = min_prefix_length

    async def suggest_words(self, prefix: str) -> list[WordSuggestion]:
        """Words starting with `prefix`, one entry per distinct word."""
        if len(prefix) < self._min_prefix_length:
            return []

        prefix = prefix.lower()
        members = await self._store.get_prefix_matches(prefix)

        seen: set[str] = set()
        hits: list[tuple[str, str, str]] = []
        for member in members:
            parsed = parse_suggestion(member)
            if parsed is None:
                logger.debug("suggestion_member_malformed", member=member)
                continue

            word = parsed[0]
            if word in seen:
                continue
            seen.add(word)
            hits.append(parsed)

            if len(hits) >= self._suggestion_limit:
                break

        languages = await self._enricher.prefetch(language for _, language, _ in hits)
        return [
            WordSuggestion(
                word=word,
                language=language,
                concept_id=concept_id,
                language_info=languages.get(language)
            )
            for word, language, concept_id in hits
        ]

    async def get_cognates_by_concept(self, concept_id: str) -> list[CognatePair]:
        """All stored pairs for a concept."""
        return await self._store.get_cognate_pairs(concept_id)

    async def find_cognate_chains(
        self,
        concept_id: str,
        word: Optional[str] = None,
        language: Optional[str] = None
    ) -> ChainQueryResult:
        """Build the cognate chains of a concept.

        With both `word` and `language`, only the first chain holding that
        word is returned (or none). A concept without pairs yields no chains.

        Raises:
            ChainDiscoveryError: Stored data is unreadable or the store failed
        """
        with concept_context(concept_id):
            return await self._find_cognate_chains(concept_id, word, language)

    async def _find_cognate_chains(
        self,
        concept_id: str,
        word: Optional[str],
        language: Optional[str]
    ) -> ChainQueryResult:
        try:
            pairs = await self._store.get_cognate_pairs(concept_id)
            if not pairs:
                return ChainQueryResult(concept_id=concept_id)

            languages = await self._enricher.prefetch(languages_in(pairs))
        except (CorruptRecordError, StoreUnavailableError) as e:
            logger.error("chain_discovery_failed", error_code=e.code.value, error=e.message)
            raise ChainDiscoveryError(concept_id, e.message) from e

        with timer(logger, "chain_build", pair_count=len(pairs)):
            graph = build_graph(pairs)
            extractor = ChainExtractor(languages.resolve, CoordinateDeduplicator())
            chains = extractor.extract(graph)

        if word and language:
            chains = select_chain(chains, word, language)

        stats = graph.stats()
        logger.info(
            "chains_discovered",
            num_nodes=stats.num_nodes,
            num_edges=stats.num_edges,
            chain_count=len(chains)
        )
        return ChainQueryResult(concept_id=concept_id, chains=chains)
