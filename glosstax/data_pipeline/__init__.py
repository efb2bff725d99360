"""
Data pipeline for inducing relation taxonomies from definitions.

This module provides:
- Definition records and readers (JSONL, CoNLL, single-row dependencies)
- Thread-pooled batch processing with per-item failure records
- Graph and relation building stages
- JSON and text export
"""

from .definition import Definition, ProcessedDefinition
from .readers import (
    parse_conll,
    parse_single_row,
    definition_from_record,
    DefinitionReader,
    InMemoryDefinitionReader,
    JsonlDefinitionReader,
)
from .batching import (
    StageFailure,
    BatchOutput,
    make_batches,
    run_in_batches,
    collect_results,
    collect_failures,
)
from .graph_builder import GraphBuilder, build_graph
from .relation_builder import BuilderState, RelationBuilder
from .export import (
    relation_to_dict,
    relations_to_dict,
    taxonomy_to_dict,
    scores_to_dict,
    save_json,
    write_relation_text,
)

__all__ = [
    # Definitions
    'Definition',
    'ProcessedDefinition',
    'parse_conll',
    'parse_single_row',
    'definition_from_record',
    'DefinitionReader',
    'InMemoryDefinitionReader',
    'JsonlDefinitionReader',

    # Batching
    'StageFailure',
    'BatchOutput',
    'make_batches',
    'run_in_batches',
    'collect_results',
    'collect_failures',

    # Stages
    'GraphBuilder',
    'build_graph',
    'BuilderState',
    'RelationBuilder',

    # Export
    'relation_to_dict',
    'relations_to_dict',
    'taxonomy_to_dict',
    'scores_to_dict',
    'save_json',
    'write_relation_text',
]
