"""
Graph Builder

Turns processed definitions into hybrid syntactic-semantic graphs, in
parallel batches.
"""

import logging
import time
from typing import Callable, Iterable, List, Optional

from ..graph.hybrid_graph import HybridGraph, match_vertices_with_senses
from ..graph.token_graph import TokenGraph
from .batching import StageFailure, collect_failures, collect_results, run_in_batches
from .definition import ProcessedDefinition


logger = logging.getLogger(__name__)


def build_graph(definition: ProcessedDefinition) -> HybridGraph:
    """
    Build the hybrid graph of a single definition.

    Args:
        definition: Parsed and disambiguated definition

    Returns:
        HybridGraph whose source is the definition
    """
    dependency_graph = TokenGraph.from_dependencies(definition.dependencies, source=definition)
    sense_map = match_vertices_with_senses(dependency_graph.vertices, definition.senses)
    graph = HybridGraph.build_from(dependency_graph, sense_map)

    logger.debug(f"Built {graph!r} for '{definition.id}': {definition.text}")
    for failure in graph.merge_failures:
        logger.debug(f"  dropped {failure.vertex!r}: {failure.error}")
    return graph


class GraphBuilder:
    """
    Builds hybrid graphs for a collection of definitions.

    Graphs are computed once, on the first call to get_graphs().
    """

    def __init__(self, definitions: Iterable[ProcessedDefinition],
                 batch_size: int = 100,
                 max_workers: int = 4,
                 definition_filter: Optional[Callable[[ProcessedDefinition], bool]] = None,
                 show_progress: bool = False):
        self.definitions = definitions
        self.batch_size = batch_size
        self.max_workers = max_workers
        self.definition_filter = definition_filter or (lambda definition: True)
        self.show_progress = show_progress

        self.graphs: List[HybridGraph] = []
        self.failures: List[StageFailure] = []
        self.done = False

    def _run(self):
        start_time = time.time()
        logger.info("Graph construction started")

        selected = (d for d in self.definitions if self.definition_filter(d))
        outputs = run_in_batches(
            selected, build_graph,
            batch_size=self.batch_size,
            max_workers=self.max_workers,
            desc="Building graphs",
            show_progress=self.show_progress,
        )

        self.graphs = collect_results(outputs)
        self.failures = collect_failures(outputs)
        self.done = True

        logger.info(f"Built {len(self.graphs)} graphs ({len(self.failures)} failures) "
                    f"in {time.time() - start_time:.1f} s")

    def get_graphs(self) -> List[HybridGraph]:
        if not self.done:
            self._run()
        return self.graphs

    def merge_failure_count(self) -> int:
        return sum(len(graph.merge_failures) for graph in self.get_graphs())
