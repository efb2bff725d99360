"""
Taxonomy Induction Pipeline

Runs the full sequence on a collection of processed definitions:

    definitions -> hybrid graphs -> patterns -> relations
                -> relation taxonomy + ranked scores

Each stage runs in thread-pooled batches; recoverable per-item errors are
collected in PipelineOutput.failures instead of aborting the run.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from .config import PipelineConfig
from .data_pipeline.batching import StageFailure
from .data_pipeline.definition import ProcessedDefinition
from .data_pipeline.export import (
    relations_to_dict,
    save_json,
    scores_to_dict,
    taxonomy_to_dict,
    write_relation_text,
)
from .data_pipeline.graph_builder import GraphBuilder
from .data_pipeline.relation_builder import RelationBuilder
from .graph.hybrid_graph import HybridGraph
from .pattern.pattern import Pattern
from .pattern.pattern_filter import PatternFilter
from .relation.relation import Relation
from .relation.scoring import RelationQualityScorer, Score
from .taxonomy.generalization import TaxonomyInducer
from .taxonomy.relation_taxonomy import RelationTaxonomy


logger = logging.getLogger(__name__)


@dataclass
class PipelineOutput:
    """Everything produced by one pipeline run."""
    graphs: List[HybridGraph] = field(default_factory=list)
    relations: Set[Relation] = field(default_factory=set)
    taxonomy: RelationTaxonomy = field(default_factory=RelationTaxonomy)
    ranked: List[Tuple[Relation, Score]] = field(default_factory=list)
    failures: List[StageFailure] = field(default_factory=list)
    dropped_patterns: List[Pattern] = field(default_factory=list)

    def summary(self) -> str:
        return (f"{len(self.graphs)} graphs, {len(self.relations)} relations, "
                f"{self.taxonomy.number_of_edges()} taxonomy edges, "
                f"{len(self.failures)} failures")


class TaxonomyPipeline:
    """
    End-to-end relation taxonomy induction.

    Example:
        >>> pipeline = TaxonomyPipeline(PipelineConfig(), ConceptTaxonomy.from_file("edges.tsv"))
        >>> output = pipeline.run(JsonlDefinitionReader("definitions.jsonl"))
        >>> pipeline.save(output, "out/")
    """

    def __init__(self, config: Optional[PipelineConfig] = None, concept_taxonomy=None):
        """
        Args:
            config: Pipeline settings (defaults if omitted)
            concept_taxonomy: Concept hierarchy used for argument typing and
                hypernym generalization
        """
        self.config = config or PipelineConfig()
        if concept_taxonomy is None:
            raise ValueError("A concept taxonomy is required")
        self.concept_taxonomy = concept_taxonomy
        self.scorer = RelationQualityScorer()

    def build_graphs(self, definitions: Iterable[ProcessedDefinition]) -> GraphBuilder:
        builder = GraphBuilder(
            definitions,
            batch_size=self.config.batch_size,
            max_workers=self.config.max_workers,
            definition_filter=lambda d: d.is_processed,
            show_progress=self.config.show_progress,
        )
        builder.get_graphs()
        return builder

    def build_relations(self, graphs: Iterable[HybridGraph]) -> RelationBuilder:
        builder = RelationBuilder(
            graphs,
            self.concept_taxonomy,
            pattern_filter=PatternFilter.from_names(self.config.pattern_filters),
            hypernym_level=self.config.hypernym_level,
            batch_size=self.config.batch_size,
            max_workers=self.config.max_workers,
            strict=self.config.strict_relations,
            show_progress=self.config.show_progress,
        )
        builder.get_relations()
        return builder

    def induce_taxonomy(self, relations: Iterable[Relation]) -> Tuple[RelationTaxonomy, List[StageFailure]]:
        """Relation taxonomy plus the relation pairs that could not be compared."""
        if not self.config.strategies:
            return RelationTaxonomy(), []
        inducer = TaxonomyInducer.from_strategy_names(self.config.strategies, self.concept_taxonomy)
        taxonomy = inducer.induce(relations, show_progress=self.config.show_progress)
        failures = [StageFailure((f.specific, f.general), f.error) for f in inducer.failures]
        return taxonomy, failures

    def run(self, definitions: Iterable[ProcessedDefinition]) -> PipelineOutput:
        """
        Run every stage.

        Args:
            definitions: Processed definitions (unparsed or undisambiguated
                ones are skipped)

        Returns:
            PipelineOutput
        """
        start_time = time.time()
        logger.info("=" * 60)
        logger.info("TAXONOMY INDUCTION")
        logger.info("=" * 60)

        graph_builder = self.build_graphs(definitions)
        relation_builder = self.build_relations(graph_builder.graphs)
        taxonomy, taxonomy_failures = self.induce_taxonomy(relation_builder.relations)
        ranked = self.scorer.rank(relation_builder.relations)

        output = PipelineOutput(
            graphs=graph_builder.graphs,
            relations=relation_builder.relations,
            taxonomy=taxonomy,
            ranked=ranked,
            failures=graph_builder.failures + relation_builder.failures + taxonomy_failures,
            dropped_patterns=relation_builder.dropped_patterns,
        )

        logger.info(f"Finished in {time.time() - start_time:.1f} s: {output.summary()}")
        return output

    @staticmethod
    def save(output: PipelineOutput, output_dir: str):
        """
        Write relations.json, taxonomy.json, scores.json and relations.txt.
        """
        path = Path(output_dir)
        path.mkdir(parents=True, exist_ok=True)

        save_json(relations_to_dict(output.relations), str(path / "relations.json"))
        save_json(taxonomy_to_dict(output.taxonomy), str(path / "taxonomy.json"))
        save_json(scores_to_dict(output.ranked), str(path / "scores.json"))
        write_relation_text(output.ranked, str(path / "relations.txt"))
