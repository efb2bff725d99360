"""
glosstax - relation taxonomy induction from dictionary definitions.

Parsed and sense-disambiguated definitions are turned into hybrid
syntactic-semantic graphs, relation patterns are mined between their sense
spans, patterns are aggregated into typed relations, and relations are
arranged into an is-a taxonomy.
"""

from .config import PipelineConfig, configure_logging
from .exceptions import (
    GlossTaxError,
    MergeConflictError,
    InvalidPatternError,
    EmptyRelationError,
    InconsistentPatternGroupError,
    NoPatternsError,
    TaxonomyCycleError,
)
from .pipeline import TaxonomyPipeline, PipelineOutput

__version__ = "0.1.0"

__all__ = [
    # Configuration
    'PipelineConfig',
    'configure_logging',

    # Errors
    'GlossTaxError',
    'MergeConflictError',
    'InvalidPatternError',
    'EmptyRelationError',
    'InconsistentPatternGroupError',
    'NoPatternsError',
    'TaxonomyCycleError',

    # Pipeline
    'TaxonomyPipeline',
    'PipelineOutput',
]
