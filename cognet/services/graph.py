"""Cognate relationship graph.

Builds an undirected graph over (language, word) identities from the flat
pair list of one concept. Each edge keeps the pair record that created it.
"""

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from cognet.core.types import CognatePair, NodeId


@dataclass
class GraphStats:
    """Graph statistics."""
    num_nodes: int
    num_edges: int
    avg_degree: float


@dataclass
class CognateGraph:
    """Adjacency mapping from node to neighbor -> originating pair.

    Edges are stored in both directions. When several pairs connect the
    same two nodes the last one added wins.
    """

    adjacency: dict[NodeId, dict[NodeId, CognatePair]] = field(default_factory=dict)

    def add_pair(self, pair: CognatePair) -> None:
        id1 = NodeId(pair.lang1, pair.word1)
        id2 = NodeId(pair.lang2, pair.word2)
        self.adjacency.setdefault(id1, {})[id2] = pair
        self.adjacency.setdefault(id2, {})[id1] = pair

    def nodes(self) -> list[NodeId]:
        """All nodes in tie-break order."""
        return sorted(self.adjacency)

    def neighbors(self, node: NodeId) -> list[NodeId]:
        """Neighbors of a node in tie-break order."""
        return sorted(self.adjacency.get(node, ()))

    def edge(self, a: NodeId, b: NodeId) -> CognatePair:
        return self.adjacency[a][b]

    def stats(self) -> GraphStats:
        degrees = [len(neighbors) for neighbors in self.adjacency.values()]
        # Self-pairs contribute a single adjacency entry.
        loops = sum(1 for node, neighbors in self.adjacency.items() if node in neighbors)
        num_edges = (sum(degrees) - loops) // 2 + loops
        return GraphStats(
            num_nodes=len(self.adjacency),
            num_edges=num_edges,
            avg_degree=sum(degrees) / len(degrees) if degrees else 0.0
        )

    def __contains__(self, node: object) -> bool:
        return node in self.adjacency

    def __iter__(self) -> Iterator[NodeId]:
        return iter(self.nodes())

    def __len__(self) -> int:
        return len(self.adjacency)


def build_graph(pairs: Iterable[CognatePair]) -> CognateGraph:
    """Build the concept graph from its pair records, in input order."""
    graph = CognateGraph()
    for pair in pairs:
        graph.add_pair(pair)
    return graph
