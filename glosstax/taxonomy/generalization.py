"""
Relation Generalization

Strategies deciding whether a relation r1 is a specialization of a relation
r2 (edge r1 -> r2 in the relation taxonomy). Both strategies only compare
relations whose patterns have the same syntactic skeleton and exactly one
semantic vertex between the arguments:

- Hypernym: the semantic vertex sense of r1 is a hyponym of r2's
      "X be a <dog> of Y"  ->  "X be a <animal> of Y"
- Substring: same head lemma, and r2's phrase is contained in r1's
      "X be a <sound collage artist> for Y"  ->  "X be a <artist> for Y"
"""

import itertools
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from tqdm import tqdm

from ..exceptions import GlossTaxError
from ..graph.semantic_node import SemanticVertex
from ..pattern.pattern import RelationPattern
from ..relation.concept import Concept
from ..relation.relation import Relation
from .relation_taxonomy import GeneralizationStrategy, RelationTaxonomy


logger = logging.getLogger(__name__)


@dataclass
class GeneralizationFailure:
    """A relation pair whose comparison raised an error."""
    specific: Relation
    general: Relation
    error: GlossTaxError

    def __str__(self):
        return f"{self.specific.signature} -> {self.general.signature}: {self.error}"


def only_one_semantic_vertex(pattern: RelationPattern) -> bool:
    return len(pattern.semantic_vertices) == 1


def equal_except_for_semantic_vertices(p1: RelationPattern, p2: RelationPattern) -> bool:
    """Same length and same lemma at every position not semantic in both."""
    if len(p1.nodes) != len(p2.nodes):
        return False

    for v1, v2 in zip(p1.nodes, p2.nodes):
        if isinstance(v1, SemanticVertex) and isinstance(v2, SemanticVertex):
            continue
        if v1.token.lemma != v2.token.lemma:
            return False
    return True


def comparable(r1: Relation, r2: Relation) -> bool:
    return (only_one_semantic_vertex(r1.pattern)
            and only_one_semantic_vertex(r2.pattern)
            and equal_except_for_semantic_vertices(r1.pattern, r2.pattern))


def nodes_inclusion(general: SemanticVertex, specific: SemanticVertex) -> bool:
    """
    Check whether general is a phrasal generalization of specific.

    Heads must share their lemma, and the lemmas of general must be a proper
    sub-multiset of those of specific.
    """
    if general.head.lemma != specific.head.lemma:
        return False

    general_lemmas = Counter(general.lemmas())
    specific_lemmas = Counter(specific.lemmas())
    included = all(specific_lemmas[lemma] >= count for lemma, count in general_lemmas.items())
    return included and general_lemmas != specific_lemmas


class Generalizer:
    """
    Base class for generalization strategies.

    Attributes:
        failures: Pairs skipped by the last taxonomize() call
    """

    strategy: GeneralizationStrategy = None
    failures: List[GeneralizationFailure]

    def is_generalization(self, r1: Relation, r2: Relation) -> bool:
        """True iff r2 generalizes r1."""
        raise NotImplementedError

    def edge_type(self, r1: Relation, r2: Relation) -> Optional[GeneralizationStrategy]:
        return self.strategy if self.is_generalization(r1, r2) else None

    def taxonomize(self, relations: Iterable[Relation], show_progress: bool = False) -> RelationTaxonomy:
        """
        Evaluate every pair of distinct relations in both directions.

        Args:
            relations: Relation set
            show_progress: Display a tqdm progress bar

        Returns:
            RelationTaxonomy with the discovered edges
        """
        relations = sorted(set(relations), key=lambda r: r.signature)
        taxonomy = RelationTaxonomy()
        done: Set[str] = set()
        self.failures = []

        name = type(self).__name__
        logger.info(f"[{name}] Starting set of relation nodes: {len(relations)} elements")

        pairs = itertools.combinations(relations, 2)
        total = len(relations) * (len(relations) - 1) // 2
        for r1, r2 in tqdm(pairs, total=total, desc=name, disable=not show_progress):
            for sub, sup in ((r1, r2), (r2, r1)):
                key = f"{sub.signature}_{sup.signature}"
                if key in done:
                    continue
                done.add(key)

                try:
                    if self.is_generalization(sub, sup):
                        taxonomy.add_edge(sub, sup, self.strategy)
                except GlossTaxError as e:
                    logger.warning(f"[{name}] Skipping {sub.signature} -> {sup.signature}: {e}")
                    self.failures.append(GeneralizationFailure(sub, sup, e))

        logger.info(f"[{name}] Generated taxonomy with {len(taxonomy.nodes)} nodes "
                    f"and {taxonomy.number_of_edges()} edges ({len(self.failures)} pairs skipped)")
        return taxonomy


class HypernymGeneralizer(Generalizer):
    """Generalization through hypernymy of the semantic vertex senses."""

    strategy = GeneralizationStrategy.HYPERNYM

    def __init__(self, concept_taxonomy):
        """
        Args:
            concept_taxonomy: Taxonomy providing is_superclass(candidate, concept)
        """
        self.concept_taxonomy = concept_taxonomy

    def is_generalization(self, r1: Relation, r2: Relation) -> bool:
        if not comparable(r1, r2):
            return False

        specific = Concept(r1.pattern.semantic_vertices[0].sense_id)
        general = Concept(r2.pattern.semantic_vertices[0].sense_id)
        return self.concept_taxonomy.is_superclass(general, specific)


class SubstringGeneralizer(Generalizer):
    """Generalization by dropping modifiers of the semantic vertex phrase."""

    strategy = GeneralizationStrategy.SUBSTRING

    def is_generalization(self, r1: Relation, r2: Relation) -> bool:
        if not comparable(r1, r2):
            return False

        return nodes_inclusion(r2.pattern.semantic_vertices[0], r1.pattern.semantic_vertices[0])


def make_generalizer(strategy: GeneralizationStrategy, concept_taxonomy=None) -> Generalizer:
    """Generalizer implementing strategy."""
    if strategy == GeneralizationStrategy.HYPERNYM:
        if concept_taxonomy is None:
            raise ValueError("Hypernym generalization requires a concept taxonomy")
        return HypernymGeneralizer(concept_taxonomy)
    if strategy == GeneralizationStrategy.SUBSTRING:
        return SubstringGeneralizer()
    raise ValueError(f"Unknown generalization strategy: {strategy}")


class TaxonomyInducer:
    """Runs several generalizers and merges their taxonomies."""

    def __init__(self, generalizers: List[Generalizer]):
        if not generalizers:
            raise ValueError("At least one generalizer is required")
        self.generalizers = generalizers
        self.failures: List[GeneralizationFailure] = []

    @classmethod
    def from_strategy_names(cls, names: Iterable[str], concept_taxonomy=None) -> 'TaxonomyInducer':
        return cls([make_generalizer(GeneralizationStrategy[name.upper()], concept_taxonomy)
                    for name in names])

    def induce(self, relations: Iterable[Relation], show_progress: bool = False) -> RelationTaxonomy:
        """
        Build the relation taxonomy.

        On a pair linked by more than one strategy, the lowest strategy wins.
        Pairs whose comparison raised a GlossTaxError are skipped and kept
        in self.failures.
        """
        relations = list(relations)
        taxonomy = RelationTaxonomy()
        self.failures = []
        for generalizer in self.generalizers:
            taxonomy.merge(generalizer.taxonomize(relations, show_progress))
            self.failures.extend(generalizer.failures)
        return taxonomy
