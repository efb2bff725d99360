"""
Semantic Vertex

A composite vertex standing for a sense-tagged span of tokens.

It owns the disambiguation of the span and a private subgraph (networkx
DiGraph, dependent -> head arcs) of the plain vertices absorbed so far.
The vertex's own token is the head of the span, a sink of that subgraph.
"""

from typing import List, Optional

import networkx as nx

from ..exceptions import MergeConflictError
from .token_graph import DependencyEdge, Vertex
from .tokens import Disambiguation, Token


class SemanticVertex(Vertex):
    """
    Vertex for a disambiguated multi-token span.

    Two semantic vertices are equal iff they carry the same disambiguation,
    so the vertex stays hashable while its subgraph grows.
    """

    def __init__(self, head: Token, sense: Disambiguation):
        super().__init__(head)
        self.sense = sense
        self.subgraph = nx.DiGraph()
        self.subgraph.add_node(Vertex(head))

    @property
    def sense_id(self) -> str:
        return self.sense.sense_id

    @property
    def head(self) -> Token:
        return self.token

    @property
    def members(self) -> List[Vertex]:
        """Absorbed plain vertices, in sentence order."""
        return sorted(self.subgraph.nodes, key=lambda v: v.token)

    def internal_edges(self) -> List[DependencyEdge]:
        return [data['edge'] for _, _, data in self.subgraph.edges(data=True)]

    def contains(self, vertex: Vertex) -> bool:
        return self.subgraph.has_node(vertex)

    def add_internal_edge(self, edge: DependencyEdge):
        """Record an edge between two absorbed vertices as a dependent -> head arc."""
        if edge.source == edge.target:
            return
        self.subgraph.add_edge(edge.target, edge.source, edge=edge)

    def text_fragment(self, lemmatized: bool = False) -> str:
        """Covered text, lemmatized or as surface forms."""
        return " ".join(
            v.token.lemma if lemmatized else v.token.surface_form
            for v in self.members
        )

    def lemmas(self) -> List[str]:
        return [v.token.lemma for v in self.members]

    def merge_with(self, vertex: Vertex, edge: Optional[DependencyEdge]):
        """
        Absorb a vertex into this semantic vertex.

        Three cases, depending on how edge attaches vertex to the subgraph:
        (a) vertex is the head of an edge whose dependent is already absorbed:
            vertex becomes the new head
        (b) vertex is the dependent of an edge whose head is already absorbed
        (c) otherwise vertex is added with no internal edge

        Args:
            vertex: Plain or semantic vertex to absorb
            edge: Edge connecting vertex to an absorbed member

        Raises:
            MergeConflictError: If vertex carries a different sense, or no
                connecting edge was located
        """
        if isinstance(vertex, SemanticVertex) and vertex.sense != self.sense:
            raise MergeConflictError(
                f"Unable to merge '{vertex}' into '{self}': sense attachments differ", vertex
            )
        if edge is None:
            raise MergeConflictError(
                f"Unable to merge '{vertex}' into '{self}': nodes are not connected", vertex
            )

        if edge.source == vertex and self.contains(edge.target):
            self._absorb(vertex)
            self.add_internal_edge(edge)
            self.token = vertex.token
        elif edge.target == vertex and self.contains(edge.source):
            self._absorb(vertex)
            self.add_internal_edge(edge)
        else:
            self._absorb(vertex)

    def _absorb(self, vertex: Vertex):
        if isinstance(vertex, SemanticVertex):
            self.subgraph.add_nodes_from(vertex.subgraph.nodes)
            self.subgraph.add_edges_from(vertex.subgraph.edges(data=True))
        else:
            self.subgraph.add_node(vertex)

    def __hash__(self):
        return hash(self.sense)

    def __eq__(self, other):
        if not isinstance(other, SemanticVertex):
            return False
        return self.sense == other.sense

    def __repr__(self):
        return f"SemanticVertex({self.text_fragment()}|{self.sense}|{self.head})"

    def __str__(self):
        return self.sense_id
