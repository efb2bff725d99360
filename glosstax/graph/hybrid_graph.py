"""
Hybrid Graph

Syntactic-semantic graph: a TokenGraph where every sense-tagged span has been
collapsed into a single SemanticVertex, while the remaining tokens stay plain
vertices.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List

from ..exceptions import MergeConflictError
from .semantic_node import SemanticVertex
from .token_graph import DependencyEdge, TokenGraph, Vertex
from .tokens import Disambiguation


logger = logging.getLogger(__name__)


@dataclass
class MergeFailure:
    """A vertex dropped during hybrid assembly."""
    vertex: Vertex
    sense: Disambiguation
    error: MergeConflictError


def match_vertices_with_senses(vertices: Iterable[Vertex],
                               disambiguations: Iterable[Disambiguation]) -> Dict[Vertex, Disambiguation]:
    """
    Map each vertex to the disambiguation whose span covers its token index.

    When several spans cover the same vertex the longest one wins.

    Args:
        vertices: Vertices of a TokenGraph
        disambiguations: Sense attachments of the same sentence

    Returns:
        Dictionary from vertex to disambiguation (unmapped vertices omitted)
    """
    disambiguations = list(disambiguations)
    sense_map = {}

    for vertex in vertices:
        covering = [d for d in disambiguations if d.covers(vertex.index)]
        if covering:
            sense_map[vertex] = max(covering, key=lambda d: (d.match_length, d.confidence))

    return sense_map


class HybridGraph(TokenGraph):
    """
    TokenGraph whose sense-tagged spans are SemanticVertex instances.

    Attributes:
        semantic_vertices: Disambiguation -> SemanticVertex
        merge_failures: Vertices that could not be merged (dropped)
    """

    def __init__(self, source=None):
        super().__init__(source)
        self.semantic_vertices: Dict[Disambiguation, SemanticVertex] = {}
        self.merge_failures: List[MergeFailure] = []

    def add_vertex(self, vertex: Vertex):
        if vertex not in self and isinstance(vertex, SemanticVertex):
            self.semantic_vertices[vertex.sense] = vertex
        super().add_vertex(vertex)

    def __iter__(self) -> Iterator[SemanticVertex]:
        return iter(self.semantic_vertices.values())

    def semantic_vertex_list(self) -> List[SemanticVertex]:
        """Semantic vertices in sentence order of their heads."""
        return sorted(self.semantic_vertices.values(), key=lambda v: v.token)

    @classmethod
    def build_from(cls, graph: TokenGraph, sense_map: Dict[Vertex, Disambiguation]) -> 'HybridGraph':
        """
        Collapse the sense-tagged vertices of graph into semantic vertices.

        Vertices are processed in sentence order. The first vertex of each
        disambiguation creates its SemanticVertex; the following ones are
        merged into it through the edge connecting them to an absorbed member.
        When no such edge exists, an empty-typed placeholder edge is used and
        the vertex is absorbed disconnected.

        Args:
            graph: Source dependency graph
            sense_map: Vertex -> disambiguation mapping

        Returns:
            New HybridGraph sharing the source definition of graph
        """
        if isinstance(graph, HybridGraph):
            return graph

        hybrid = cls(graph.source)

        for vertex in sorted(sense_map, key=lambda v: v.token):
            sense = sense_map[vertex]

            if vertex not in graph:
                logger.warning(f"Vertex {vertex!r} in sense mapping not present in the source graph")
                continue

            semantic = hybrid.semantic_vertices.get(sense)
            if semantic is None:
                hybrid.add_vertex(SemanticVertex(vertex.token, sense))
                continue

            bridge = next(
                (member for member in semantic.members if graph.get_edge(vertex, member) is not None),
                None,
            )
            edge = graph.get_edge(vertex, bridge) if bridge is not None else None
            if edge is None:
                logger.debug(f"No edge connects {vertex!r} to {semantic!r}, using placeholder edge")
                edge = DependencyEdge("", vertex, vertex)

            try:
                semantic.merge_with(vertex, edge)
            except MergeConflictError as e:
                logger.error(f"{e}")
                hybrid.merge_failures.append(MergeFailure(vertex, sense, e))

        for edge in graph.edges():
            source = hybrid._resolve(edge.source, sense_map)
            target = hybrid._resolve(edge.target, sense_map)

            if source == target and isinstance(source, SemanticVertex):
                source.add_internal_edge(edge)
            else:
                hybrid.add_edge(DependencyEdge(edge.type, source, target))

        return hybrid

    def _resolve(self, vertex: Vertex, sense_map: Dict[Vertex, Disambiguation]) -> Vertex:
        sense = sense_map.get(vertex)
        if sense is not None and sense in self.semantic_vertices:
            return self.semantic_vertices[sense]
        return vertex

    def __repr__(self):
        return (f"HybridGraph({len(self)} vertices, {len(self.semantic_vertices)} semantic, "
                f"{self.number_of_edges()} edges)")
