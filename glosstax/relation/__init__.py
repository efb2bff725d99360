"""
Relation module for aggregating patterns into typed relations.

This module provides:
- Concepts and argument pairs
- Relations with domain/range type distributions
- Relation construction from pattern groups
- Relation quality scoring
"""

from .concept import Concept, ArgumentPair
from .type_distribution import SemanticTypeDistribution, generalize_concept
from .relation import Relation, RelationBuildResult, build_relation, argument_pair_from_pattern
from .scoring import RelationQualityScorer, Score

__all__ = [
    # Concepts
    'Concept',
    'ArgumentPair',

    # Type distributions
    'SemanticTypeDistribution',
    'generalize_concept',

    # Relations
    'Relation',
    'RelationBuildResult',
    'build_relation',
    'argument_pair_from_pattern',

    # Scoring
    'RelationQualityScorer',
    'Score',
]
