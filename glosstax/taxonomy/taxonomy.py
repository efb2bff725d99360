"""
Taxonomy

Generic is-a structure over arbitrary hashable nodes. Each node points to its
superclasses through typed edges; the edge type is comparable, and the edge
with the lowest type is the node's primary superclass. Nodes without
outgoing edges are roots.

Traversals are iterative and detect cycles, raising TaxonomyCycleError
instead of looping on malformed input.
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import Callable, Dict, Generic, Hashable, Iterator, List, Optional, Set, TypeVar

import networkx as nx

from ..exceptions import TaxonomyCycleError


T = TypeVar('T', bound=Hashable)
E = TypeVar('E')


@total_ordering
@dataclass(frozen=True)
class TaxonomyEdge(Generic[T, E]):
    """Edge towards a superclass, ordered by edge type."""
    target: T
    edge_type: E

    def __lt__(self, other):
        if not isinstance(other, TaxonomyEdge):
            return NotImplemented
        return self.edge_type < other.edge_type

    def __str__(self):
        return f"{self.target}_{self.edge_type}"


class Taxonomy(Generic[T, E]):
    """
    Directed forest/DAG of subclass -> superclass edges.
    """

    def __init__(self, edge_map: Optional[Dict[T, Dict[T, E]]] = None):
        """
        Args:
            edge_map: node -> {superclass: edge type}
        """
        self._edges: Dict[T, Dict[T, E]] = {}
        self._targets: Set[T] = set()

        for node, superclasses in (edge_map or {}).items():
            for superclass, edge_type in superclasses.items():
                self.add_edge(node, superclass, edge_type)

    def add_edge(self, node: T, superclass: T, edge_type: E):
        """
        Add a subclass -> superclass edge.

        If the two nodes are already connected, the lowest edge type is kept.
        """
        current = self._edges.setdefault(node, {})
        if superclass not in current or edge_type < current[superclass]:
            current[superclass] = edge_type
        self._targets.add(superclass)

    def __iter__(self) -> Iterator[T]:
        """Iterate over nodes that have at least one superclass."""
        return iter(self._edges)

    def __contains__(self, node):
        return node in self._edges or node in self._targets

    @property
    def nodes(self) -> Set[T]:
        return set(self._edges) | self._targets

    @property
    def roots(self) -> Set[T]:
        return self._targets - set(self._edges)

    def is_root(self, node: T) -> bool:
        return node in self._targets and node not in self._edges

    def all_edges(self, node: T) -> List[TaxonomyEdge]:
        """Outgoing edges of node, sorted by edge type."""
        return sorted(TaxonomyEdge(target, edge_type)
                      for target, edge_type in self._edges.get(node, {}).items())

    def edges(self, node: T, predicate: Callable[[TaxonomyEdge], bool]) -> List[TaxonomyEdge]:
        return [edge for edge in self.all_edges(node) if predicate(edge)]

    def superclasses(self, node: T) -> List[T]:
        return [edge.target for edge in self.all_edges(node)]

    def primary_superclass(self, node: T) -> Optional[T]:
        """Superclass reached through the lowest-typed edge, if any."""
        edges = self.all_edges(node)
        return edges[0].target if edges else None

    def number_of_edges(self, predicate: Optional[Callable[[TaxonomyEdge], bool]] = None) -> int:
        if predicate is None:
            return sum(len(targets) for targets in self._edges.values())
        return sum(1 for node in self._edges for edge in self.all_edges(node) if predicate(edge))

    def has_superclass(self, node: T, superclass: T) -> bool:
        """
        Check whether superclass is reachable from node.

        Raises:
            TaxonomyCycleError: If a cycle is met before superclass is found
        """
        # Iterative DFS: nodes on the current branch are "open"
        open_nodes = {node}
        closed: Set[T] = set()
        stack = [(node, iter(self.superclasses(node)))]

        while stack:
            current, children = stack[-1]
            child = next(children, None)

            if child is None:
                stack.pop()
                open_nodes.discard(current)
                closed.add(current)
                continue

            if child == superclass:
                return True
            if child in open_nodes:
                raise TaxonomyCycleError(child)
            if child not in closed:
                open_nodes.add(child)
                stack.append((child, iter(self.superclasses(child))))

        return False

    def ancestor_chain(self, node: T, max_level: Optional[int] = None) -> List[T]:
        """
        Follow primary superclasses upwards from node.

        Args:
            node: Starting node (not included in the chain)
            max_level: Maximum number of hops (unbounded if None)

        Returns:
            Ancestors from the closest to the farthest

        Raises:
            TaxonomyCycleError: If the chain revisits a node
        """
        chain: List[T] = []
        seen = {node}
        current = node

        while max_level is None or len(chain) < max_level:
            superclass = self.primary_superclass(current)
            if superclass is None:
                break
            if superclass in seen:
                raise TaxonomyCycleError(superclass)

            chain.append(superclass)
            seen.add(superclass)
            current = superclass

        return chain

    def depth_of(self, node: T) -> int:
        """Length of the full ancestor chain, -1 for nodes without superclasses."""
        if node not in self._edges:
            return -1
        return len(self.ancestor_chain(node))

    def to_digraph(self) -> nx.DiGraph:
        """Export as a networkx DiGraph with an 'edge_type' attribute per arc."""
        digraph = nx.DiGraph()
        digraph.add_nodes_from(self.nodes)
        for node, targets in self._edges.items():
            for target, edge_type in targets.items():
                digraph.add_edge(node, target, edge_type=edge_type)
        return digraph

    def __repr__(self):
        return f"{type(self).__name__}({len(self.nodes)} nodes, {self.number_of_edges()} edges)"
