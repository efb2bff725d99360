"""
Token Graph

Typed-edge dependency graph over the tokens of one sentence.

Edges are stored undirected (networkx Graph) but keep their head/dependent
orientation. Path search only moves left to right through the sentence:
stepping from u to v costs 1.0 when u precedes v, and is forbidden otherwise.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

import networkx as nx

from .tokens import Dependency, Token


logger = logging.getLogger(__name__)


class Vertex:
    """A graph vertex wrapping a single token."""

    def __init__(self, token: Token):
        self.token = token

    @property
    def index(self) -> int:
        return self.token.index

    def __hash__(self):
        return hash(self.token)

    def __eq__(self, other):
        if type(other) is not type(self):
            return False
        return self.token == other.token

    def __repr__(self):
        return f"Vertex({self.token.verbose()})"

    def __str__(self):
        return str(self.token)


@dataclass(frozen=True)
class DependencyEdge:
    """
    A typed edge between two vertices.

    Attributes:
        type: Dependency label ("nsubj", "cop", ...)
        source: Head vertex
        target: Dependent vertex
    """
    type: str
    source: Vertex
    target: Vertex

    def other(self, vertex: Vertex) -> Vertex:
        """Return the endpoint opposite to vertex."""
        return self.target if vertex == self.source else self.source

    def __str__(self):
        return f"{self.type}({self.source}, {self.target})"


@dataclass
class GraphPath:
    """A path found by shortest-path search, in traversal order."""
    start: Vertex
    end: Vertex
    edges: List[DependencyEdge] = field(default_factory=list)
    vertices: List[Vertex] = field(default_factory=list)

    def __len__(self):
        return len(self.edges)


def left_to_right_weight(u: Vertex, v: Vertex, data: Dict) -> Optional[float]:
    """Traversal weight: 1.0 forward in the sentence, hidden (None) backwards."""
    return 1.0 if u.index < v.index else None


class TokenGraph:
    """
    Simple graph of vertices connected by typed dependency edges.

    At most one edge connects any two vertices and self-loops are never
    stored; a duplicate insertion is ignored.
    """

    def __init__(self, source=None):
        self.graph = nx.Graph()
        self.source = source

    @classmethod
    def from_dependencies(cls, dependencies: Iterable[Dependency], source=None) -> 'TokenGraph':
        """
        Build a graph from (type, head, dependent) triples.

        Args:
            dependencies: Typed dependencies of one sentence
            source: Definition the dependencies were parsed from

        Returns:
            New TokenGraph
        """
        token_graph = cls(source)
        for dep in dependencies:
            token_graph.add_edge(DependencyEdge(dep.type, Vertex(dep.head), Vertex(dep.dependent)))
        return token_graph

    @property
    def vertices(self) -> List[Vertex]:
        return list(self.graph.nodes)

    def edges(self) -> Iterator[DependencyEdge]:
        for _, _, data in self.graph.edges(data=True):
            yield data['edge']

    def __len__(self):
        return self.graph.number_of_nodes()

    def __contains__(self, vertex):
        return self.graph.has_node(vertex)

    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def add_vertex(self, vertex: Vertex):
        if not self.graph.has_node(vertex):
            self.graph.add_node(vertex)

    def add_edge(self, edge: DependencyEdge) -> bool:
        """
        Add an edge (and its endpoints).

        Returns:
            True if the edge was stored, False if it was a self-loop or a
            duplicate connection
        """
        self.add_vertex(edge.source)
        self.add_vertex(edge.target)

        if edge.source == edge.target or self.graph.has_edge(edge.source, edge.target):
            logger.debug(f"Ignoring edge {edge}: endpoints already connected")
            return False

        self.graph.add_edge(edge.source, edge.target, edge=edge)
        return True

    def get_edge(self, u: Vertex, v: Vertex) -> Optional[DependencyEdge]:
        """Edge connecting u and v in either orientation, if any."""
        data = self.graph.get_edge_data(u, v)
        return data['edge'] if data else None

    def neighbors(self, vertex: Vertex) -> List[Vertex]:
        if vertex not in self:
            return []
        return list(self.graph.neighbors(vertex))

    def shortest_path(self, start: Vertex, end: Vertex) -> Optional[GraphPath]:
        """
        Find the shortest left-to-right path between two vertices.

        Args:
            start: Starting vertex
            end: Ending vertex

        Returns:
            GraphPath, or None if a vertex is missing or no forward path exists
        """
        if start not in self or end not in self:
            logger.warning(f"Unable to compute shortest path: {start!r} or {end!r} not in graph")
            return None

        try:
            vertices = nx.dijkstra_path(self.graph, start, end, weight=left_to_right_weight)
        except nx.NetworkXNoPath:
            return None

        edges = [self.graph[u][v]['edge'] for u, v in zip(vertices, vertices[1:])]
        return GraphPath(start=start, end=end, edges=edges, vertices=vertices)

    def __repr__(self):
        return f"TokenGraph({len(self)} vertices, {self.number_of_edges()} edges)"
