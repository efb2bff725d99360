"""
Taxonomy module for concept hierarchies and relation taxonomy induction.

This module provides:
- A generic taxonomy structure with cycle-safe traversals
- Concept taxonomies (edge file or WordNet backed)
- The relation taxonomy and its generalization strategies
"""

from .taxonomy import Taxonomy, TaxonomyEdge
from .concept_taxonomy import ConceptTaxonomy, WordNetConceptTaxonomy, ensure_wordnet_downloaded
from .relation_taxonomy import RelationTaxonomy, GeneralizationStrategy
from .generalization import (
    GeneralizationFailure,
    Generalizer,
    HypernymGeneralizer,
    SubstringGeneralizer,
    TaxonomyInducer,
    make_generalizer,
    only_one_semantic_vertex,
    equal_except_for_semantic_vertices,
    nodes_inclusion,
)

__all__ = [
    # Generic taxonomy
    'Taxonomy',
    'TaxonomyEdge',

    # Concept taxonomies
    'ConceptTaxonomy',
    'WordNetConceptTaxonomy',
    'ensure_wordnet_downloaded',

    # Relation taxonomy
    'RelationTaxonomy',
    'GeneralizationStrategy',

    # Generalization
    'GeneralizationFailure',
    'Generalizer',
    'HypernymGeneralizer',
    'SubstringGeneralizer',
    'TaxonomyInducer',
    'make_generalizer',
    'only_one_semantic_vertex',
    'equal_except_for_semantic_vertices',
    'nodes_inclusion',
]
