"""Chain extraction over a cognate graph.

Each connected component becomes one chain, rendered in depth-first
preorder. Start nodes and neighbors are visited in sorted (language, word)
order so the same pairs always produce the same chains.
"""

from typing import Iterator, Optional

from cognet.core.contracts import ICoordinateAdjuster, LanguageResolver
from cognet.core.types import ChainWord, CognateChain, CognatePair, NodeId
from cognet.errors import LanguageNotFoundError
from cognet.observ import get_logger
from cognet.services.graph import CognateGraph

logger = get_logger(__name__)


def transliteration_for(pair: CognatePair, node: NodeId) -> str:
    """Pick the transliteration slot whose side of the pair is `node`."""
    if (pair.lang1, pair.word1) == node:
        return pair.translit1 or ""
    if (pair.lang2, pair.word2) == node:
        return pair.translit2 or ""
    return ""


class ChainExtractor:
    """Decomposes a graph into chains of enriched words.

    Args:
        resolve_language: Returns the LanguageInfo for a code or raises
            LanguageNotFoundError
        deduplicator: Fresh coordinate adjuster for this extraction
    """

    def __init__(
        self,
        resolve_language: LanguageResolver,
        deduplicator: ICoordinateAdjuster
    ):
        self._resolve_language = resolve_language
        self._deduplicator = deduplicator

    def extract(self, graph: CognateGraph) -> list[CognateChain]:
        visited: set[NodeId] = set()
        chains: list[CognateChain] = []

        for start in graph.nodes():
            if start in visited:
                continue

            walked, chain = self._walk(graph, start, visited)
            visited |= walked

            if not chain:
                logger.debug("chain_discarded", start=start, reason="no_renderable_words")
                continue
            chains.append(chain)

        return chains

    def _walk(
        self,
        graph: CognateGraph,
        start: NodeId,
        visited: set[NodeId]
    ) -> tuple[set[NodeId], CognateChain]:
        """Depth-first preorder walk from `start`.

        Uses a stack of neighbor iterators in place of recursion; the
        order in which words are emitted is the recursive preorder.
        """
        walked: set[NodeId] = set()
        chain: CognateChain = []

        # A walk root has no incoming edge; its first edge supplies the
        # transliteration.
        first = graph.neighbors(start)[0]
        self._visit(start, graph.edge(start, first), walked, chain)
        stack: list[tuple[NodeId, Iterator[NodeId]]] = [
            (start, iter(graph.neighbors(start)))
        ]

        while stack:
            node, pending = stack[-1]
            for neighbor in pending:
                if neighbor not in walked and neighbor not in visited:
                    self._visit(neighbor, graph.edge(node, neighbor), walked, chain)
                    stack.append((neighbor, iter(graph.neighbors(neighbor))))
                    break
            else:
                stack.pop()

        return walked, chain

    def _visit(
        self,
        node: NodeId,
        pair: CognatePair,
        walked: set[NodeId],
        chain: CognateChain
    ) -> None:
        walked.add(node)
        word = self._render(node, pair)
        if word is not None:
            chain.append(word)

    def _render(self, node: NodeId, pair: CognatePair) -> Optional[ChainWord]:
        try:
            info = self._resolve_language(node.language)
        except LanguageNotFoundError:
            logger.warning(
                "chain_word_skipped",
                language=node.language,
                word=node.word,
                reason="language_not_found"
            )
            return None

        placed = info.model_copy(
            update={"coordinates": self._deduplicator.adjust(info.coordinates)}
        )
        return ChainWord(
            word=node.word,
            transliteration=transliteration_for(pair, node),
            language=placed
        )
