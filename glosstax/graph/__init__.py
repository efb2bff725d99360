"""
Graph module for building syntactic-semantic graphs of definitions.

This module provides:
- Token, dependency and disambiguation value types
- Dependency graphs with left-to-right shortest paths
- Semantic vertices collapsing sense-tagged spans
- Hybrid graph assembly
"""

from .tokens import (
    Token,
    Dependency,
    Disambiguation,
    overlap,
    is_noun,
    is_verb,
    fix_dependencies,
)
from .token_graph import Vertex, DependencyEdge, GraphPath, TokenGraph
from .semantic_node import SemanticVertex
from .hybrid_graph import HybridGraph, MergeFailure, match_vertices_with_senses

__all__ = [
    # Tokens
    'Token',
    'Dependency',
    'Disambiguation',
    'overlap',
    'is_noun',
    'is_verb',
    'fix_dependencies',

    # Token graph
    'Vertex',
    'DependencyEdge',
    'GraphPath',
    'TokenGraph',

    # Semantic vertices
    'SemanticVertex',
    'HybridGraph',
    'MergeFailure',
    'match_vertices_with_senses',
]
