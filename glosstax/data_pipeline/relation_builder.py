"""
Relation Builder

Mines patterns from hybrid graphs and aggregates them into relations.

Stage 1 (pattern extraction): each batch of graphs is mined in the thread
pool and its patterns are grouped by surface signature.
Stage 2 (relation building): patterns from all batches are regrouped by
lemma signature, and one relation is built per group in the pool.
"""

import logging
import time
from collections import defaultdict
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set

from ..exceptions import GlossTaxError
from ..graph.hybrid_graph import HybridGraph
from ..pattern.pattern import Pattern
from ..pattern.pattern_filter import PatternFilter, default_pattern_filter
from ..pattern.pattern_miner import PatternMiner
from ..relation.relation import Relation, RelationBuildResult, build_relation
from .batching import StageFailure, collect_failures, run_in_batches


logger = logging.getLogger(__name__)


class BuilderState(Enum):
    """Progress of a RelationBuilder."""
    READY = "ready"
    PATTERN_EXTRACTION = "pattern_extraction"
    RELATION_BUILDING = "relation_building"


class RelationBuilder:
    """
    Extracts relations from a collection of hybrid graphs.

    Attributes:
        pattern_map: batch id -> surface signature -> patterns
        failures: Per-item failures of both stages
        dropped_patterns: Patterns discarded for an inconsistent signature
    """

    def __init__(self, graphs: Iterable[HybridGraph], concept_taxonomy,
                 pattern_filter: Optional[PatternFilter] = None,
                 hypernym_level: int = 1,
                 batch_size: int = 100,
                 max_workers: int = 4,
                 strict: bool = False,
                 show_progress: bool = False):
        self.graphs = list(graphs)
        self.concept_taxonomy = concept_taxonomy
        self.filter = pattern_filter if pattern_filter is not None else default_pattern_filter()
        self.hypernym_level = hypernym_level
        self.batch_size = batch_size
        self.max_workers = max_workers
        self.strict = strict
        self.show_progress = show_progress

        self.state = BuilderState.READY
        self.pattern_map: Dict[int, Dict[str, Set[Pattern]]] = {}
        self.relations: Set[Relation] = set()
        self.failures: List[StageFailure] = []
        self.dropped_patterns: List[Pattern] = []

    def _mine(self, graph: HybridGraph) -> Set[Pattern]:
        return PatternMiner(graph, self.filter).identify_patterns()

    def extract_patterns(self) -> Dict[int, Dict[str, Set[Pattern]]]:
        """Mine every graph and group each batch's patterns by surface signature."""
        start_time = time.time()
        logger.info("Pattern extraction started")

        outputs = run_in_batches(
            self.graphs, self._mine,
            batch_size=self.batch_size,
            max_workers=self.max_workers,
            desc="Mining patterns",
            show_progress=self.show_progress,
        )

        self.pattern_map = {}
        for batch_id, output in outputs.items():
            grouped: Dict[str, Set[Pattern]] = defaultdict(set)
            for patterns in output.results:
                for pattern in patterns:
                    grouped[pattern.signature()].add(pattern)
            self.pattern_map[batch_id] = dict(grouped)

        self.failures.extend(collect_failures(outputs))
        self.state = BuilderState.PATTERN_EXTRACTION

        logger.info(f"Extracted {sum(len(g) for m in self.pattern_map.values() for g in m.values())} patterns "
                    f"in {time.time() - start_time:.1f} s")
        return self.pattern_map

    def pattern_groups(self) -> Dict[str, Set[Pattern]]:
        """All extracted patterns grouped by lemma signature."""
        groups: Dict[str, Set[Pattern]] = defaultdict(set)
        for batch in self.pattern_map.values():
            for patterns in batch.values():
                for pattern in patterns:
                    groups[pattern.lemma_signature].add(pattern)
        return dict(groups)

    def _build(self, patterns: Set[Pattern]) -> RelationBuildResult:
        return build_relation(patterns, self.concept_taxonomy, self.hypernym_level, strict=self.strict)

    def get_relations(self) -> Set[Relation]:
        """
        Build one relation per lemma signature (running extraction if needed).

        Raises:
            InconsistentPatternGroupError: In strict mode only
        """
        if self.state == BuilderState.RELATION_BUILDING:
            return self.relations
        if self.state != BuilderState.PATTERN_EXTRACTION:
            self.extract_patterns()

        start_time = time.time()
        groups = self.pattern_groups()
        logger.info(f"Relation building started on {len(groups)} pattern groups")

        outputs = run_in_batches(
            [groups[key] for key in sorted(groups)], self._build,
            batch_size=self.batch_size,
            max_workers=self.max_workers,
            desc="Building relations",
            show_progress=self.show_progress,
            recoverable=() if self.strict else (GlossTaxError,),
        )

        self.relations = set()
        for batch_id in sorted(outputs):
            for result in outputs[batch_id].results:
                self.dropped_patterns.extend(result.dropped)
                if result.ok:
                    self.relations.add(result.relation)
                else:
                    logger.warning(f"Relation skipped: {result.error}")
                    self.failures.append(StageFailure(None, result.error))
        self.failures.extend(collect_failures(outputs))

        self.state = BuilderState.RELATION_BUILDING
        logger.info(f"Built {len(self.relations)} relations ({len(self.dropped_patterns)} patterns dropped) "
                    f"in {time.time() - start_time:.1f} s")
        return self.relations
