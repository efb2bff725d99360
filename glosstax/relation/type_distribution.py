"""
Semantic Type Distribution

Distribution over the generalized types of a relation argument: every
argument concept is replaced by its k-th ancestor in the concept taxonomy
(or by its farthest ancestor when the chain is shorter, or by itself when it
has none), and the resulting types are frequency-normalized.
"""

from typing import Dict, Iterable

from ..utils.probability import ProbabilityDistribution
from .concept import Concept


def generalize_concept(concept: Concept, taxonomy, hypernym_level: int) -> Concept:
    """Ancestor of concept hypernym_level hops up (concept itself if none)."""
    if hypernym_level <= 0:
        return concept
    chain = taxonomy.ancestor_chain(concept, hypernym_level)
    return chain[-1] if chain else concept


class SemanticTypeDistribution(ProbabilityDistribution[Concept]):
    """Frequency distribution of generalized argument types."""

    def __init__(self, concepts: Iterable[Concept], taxonomy, hypernym_level: int = 1):
        """
        Args:
            concepts: Argument concepts (one per argument pair)
            taxonomy: Concept taxonomy providing ancestor_chain()
            hypernym_level: Hops used to generalize each concept
        """
        counts: Dict[Concept, float] = {}
        for concept in concepts:
            concept_type = generalize_concept(concept, taxonomy, hypernym_level)
            counts[concept_type] = counts.get(concept_type, 0.0) + 1.0

        super().__init__(counts)
        self.hypernym_level = hypernym_level
