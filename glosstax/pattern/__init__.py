"""
Pattern module for mining relation patterns from hybrid graphs.

This module provides:
- Relation patterns and their textual signatures
- Rejection predicates and the filter pipeline
- Shortest-path pattern mining
"""

from .pattern import (
    Pattern,
    RelationPattern,
    LEFT_PLACEHOLDER,
    RIGHT_PLACEHOLDER,
    MODIFIER_TYPES,
    REJECTION_PREDICATES,
    non_nominal_arguments,
    starts_with_modifier,
    ends_with_modifier,
)
from .pattern_filter import PatternFilter, default_pattern_filter
from .pattern_miner import PatternMiner

__all__ = [
    # Patterns
    'Pattern',
    'RelationPattern',
    'LEFT_PLACEHOLDER',
    'RIGHT_PLACEHOLDER',
    'MODIFIER_TYPES',

    # Filtering
    'REJECTION_PREDICATES',
    'non_nominal_arguments',
    'starts_with_modifier',
    'ends_with_modifier',
    'PatternFilter',
    'default_pattern_filter',

    # Mining
    'PatternMiner',
]
