"""
Relation Quality Scorer

Ranks relations with the empirical formula

    score = frequency / ((entropy + 1) * length)

where frequency is the number of argument pairs, entropy is the mean of the
domain and range type entropies, and length is the pattern length in edges.
Frequent relations with consistent argument types and short patterns rank
first.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .relation import Relation


@dataclass(frozen=True)
class Score:
    """Relation score with its components."""
    score: float
    entropy: float
    frequency: float
    length: float

    def __str__(self):
        return (f"[ score: {self.score:.4f}, entropy: {self.entropy:.4f}, "
                f"frequency: {self.frequency:g}, length: {self.length:g} ]")


class RelationQualityScorer:
    """Scores relations by frequency, type entropy and pattern length."""

    @staticmethod
    def entropy(relation: Relation) -> float:
        """
        Raises:
            EmptyRelationError: If the type distributions are not computed
        """
        return (0.5 * relation.require_domain_types().entropy()
                + 0.5 * relation.require_range_types().entropy())

    @staticmethod
    def frequency(relation: Relation) -> float:
        return float(relation.frequency)

    @staticmethod
    def length(relation: Relation) -> float:
        return float(relation.pattern.length)

    def score(self, relation: Relation) -> float:
        return self.frequency(relation) / ((self.entropy(relation) + 1) * self.length(relation))

    def score_complete(self, relation: Relation) -> Score:
        entropy = self.entropy(relation)
        frequency = self.frequency(relation)
        length = self.length(relation)
        return Score(frequency / ((entropy + 1) * length), entropy, frequency, length)

    def rank(self, relations: Iterable[Relation]) -> List[Tuple[Relation, Score]]:
        """Relations with their scores, best first (ties by signature)."""
        scored = [(relation, self.score_complete(relation)) for relation in relations]
        return sorted(scored, key=lambda item: (-item[1].score, item[0].signature))
