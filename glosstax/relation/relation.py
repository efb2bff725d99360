"""
Relations

A Relation groups every pattern sharing the same lemma signature. It keeps
the canonical pattern shape, the set of argument pairs extracted from the
source definitions, and the domain/range type distributions computed from
them.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..exceptions import EmptyRelationError, InconsistentPatternGroupError, NoPatternsError
from ..pattern.pattern import LEFT_PLACEHOLDER, RIGHT_PLACEHOLDER, Pattern, RelationPattern, render_vertex
from .concept import ArgumentPair, Concept
from .type_distribution import SemanticTypeDistribution


logger = logging.getLogger(__name__)


class Relation:
    """
    A typed relation between two argument concepts.

    Type distributions are computed lazily: adding argument pairs
    invalidates them, and add_extractions() or set_hypernym_level()
    recompute them.
    """

    def __init__(self, pattern: RelationPattern, taxonomy, hypernym_level: int = 1):
        """
        Args:
            pattern: Canonical relation pattern
            taxonomy: Concept taxonomy used to generalize argument types
            hypernym_level: Hops used to generalize argument concepts
        """
        self.pattern = pattern
        self.taxonomy = taxonomy
        self.hypernym_level = hypernym_level
        self.extractions: set = set()
        self._domain_types: Optional[SemanticTypeDistribution] = None
        self._range_types: Optional[SemanticTypeDistribution] = None

    @property
    def signature(self) -> str:
        return self.pattern.lemma_signature

    def add_argument_pair(self, pair: ArgumentPair):
        self.extractions.add(pair)
        self._domain_types = None
        self._range_types = None

    def add_extractions(self, pairs: Iterable[ArgumentPair]):
        """Add argument pairs and recompute the type distributions."""
        for pair in pairs:
            self.add_argument_pair(pair)
        self.compute_semantic_types()

    def compute_semantic_types(self):
        self._domain_types = SemanticTypeDistribution(self.domain, self.taxonomy, self.hypernym_level)
        self._range_types = SemanticTypeDistribution(self.range, self.taxonomy, self.hypernym_level)

    def set_hypernym_level(self, level: int):
        if level < 0:
            raise ValueError(f"Hypernym level must be non-negative, got {level}")
        self.hypernym_level = level
        self.compute_semantic_types()

    @property
    def domain(self) -> List[Concept]:
        return [pair.domain for pair in self.extractions]

    @property
    def range(self) -> List[Concept]:
        return [pair.range for pair in self.extractions]

    @property
    def frequency(self) -> int:
        return len(self.extractions)

    def domain_types(self) -> Optional[SemanticTypeDistribution]:
        """Domain type distribution, None until computed."""
        return self._domain_types

    def range_types(self) -> Optional[SemanticTypeDistribution]:
        """Range type distribution, None until computed."""
        return self._range_types

    def require_domain_types(self) -> SemanticTypeDistribution:
        if self._domain_types is None:
            raise EmptyRelationError(f"Domain types of '{self.signature}' not computed")
        return self._domain_types

    def require_range_types(self) -> SemanticTypeDistribution:
        if self._range_types is None:
            raise EmptyRelationError(f"Range types of '{self.signature}' not computed")
        return self._range_types

    def __hash__(self):
        return hash(self.signature)

    def __eq__(self, other):
        if not isinstance(other, Relation):
            return False
        return self.signature == other.signature

    def __repr__(self):
        return f"Relation('{self.signature}', {self.frequency} pairs)"

    def __str__(self):
        """Lemma signature with the arguments replaced by their most likely types."""
        left = self._domain_types.arg_max() if self._domain_types else None
        right = self._range_types.arg_max() if self._range_types else None

        tokens = [render_vertex(vertex, lemmatized=True) for vertex in self.pattern.nodes]
        tokens[self.pattern.left_argument_index] = f"<{left if left is not None else LEFT_PLACEHOLDER}>"
        tokens[self.pattern.right_argument_index] = f"<{right if right is not None else RIGHT_PLACEHOLDER}>"
        return " ".join(tokens)


@dataclass
class RelationBuildResult:
    """
    Outcome of building a relation from a pattern group.

    Attributes:
        relation: Built relation, None on failure
        dropped: Patterns discarded for having a different lemma signature
        error: Failure cause when no relation could be built
    """
    relation: Optional[Relation] = None
    dropped: List[Pattern] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.relation is not None


def argument_pair_from_pattern(pattern: Pattern) -> ArgumentPair:
    """Argument pair of the two extremes of a pattern."""
    start, end = pattern.extremes
    return ArgumentPair(
        Concept(start.sense_id, [start.text_fragment(lemmatized=True)]),
        Concept(end.sense_id, [end.text_fragment(lemmatized=True)]),
        source=pattern.source,
        confidence=pattern.argument_score(),
    )


def build_relation(patterns: Iterable[Pattern], taxonomy, hypernym_level: int = 1,
                   strict: bool = False) -> RelationBuildResult:
    """
    Build a Relation from a group of patterns sharing one lemma signature.

    The shortest pattern (ties broken by signature) gives the canonical
    shape. Patterns whose lemma signature differs are dropped.

    Args:
        patterns: Pattern group
        taxonomy: Concept taxonomy for the type distributions
        hypernym_level: Hops used to generalize argument concepts
        strict: Raise instead of dropping inconsistent patterns

    Returns:
        RelationBuildResult

    Raises:
        InconsistentPatternGroupError: In strict mode, on a signature mismatch
    """
    patterns = sorted(patterns, key=Pattern.sort_key)
    if not patterns:
        return RelationBuildResult(error=NoPatternsError("Empty set of patterns"))

    relation = Relation(patterns[0].relation_pattern, taxonomy, hypernym_level)
    result = RelationBuildResult(relation=relation)

    for pattern in patterns:
        if pattern.lemma_signature != relation.signature:
            error = InconsistentPatternGroupError(relation.signature, pattern.lemma_signature)
            if strict:
                raise error
            logger.warning(f"{error}: pattern dropped")
            result.dropped.append(pattern)
            continue

        relation.add_argument_pair(argument_pair_from_pattern(pattern))

    relation.compute_semantic_types()
    return result
