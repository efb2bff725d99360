"""
Relation Taxonomy

Taxonomy over relations whose edges are labelled with the generalization
strategy that produced them.
"""

from enum import IntEnum

from ..relation.relation import Relation
from .taxonomy import Taxonomy


class GeneralizationStrategy(IntEnum):
    """How a generalization edge was found (lower value takes precedence)."""
    HYPERNYM = 0
    SUBSTRING = 1

    def __str__(self):
        return self.name.lower()


class RelationTaxonomy(Taxonomy[Relation, GeneralizationStrategy]):
    """Is-a hierarchy of relations."""

    def merge(self, other: 'RelationTaxonomy') -> 'RelationTaxonomy':
        """Add the edges of other (lowest strategy wins on shared pairs)."""
        for node in other:
            for edge in other.all_edges(node):
                self.add_edge(node, edge.target, edge.edge_type)
        return self

    def number_of_edges_by_strategy(self, strategy: GeneralizationStrategy) -> int:
        return self.number_of_edges(lambda edge: edge.edge_type == strategy)
