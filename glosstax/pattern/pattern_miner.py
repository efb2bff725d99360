"""
Pattern Miner

Mines relation patterns from a hybrid graph: for every pair of semantic
vertices in sentence order, the shortest left-to-right path between them is
turned into a Pattern, and the resulting set goes through a PatternFilter.
"""

import logging
import time
from typing import Optional, Set

from ..exceptions import InvalidPatternError
from ..graph.hybrid_graph import HybridGraph
from ..graph.semantic_node import SemanticVertex
from .pattern import Pattern
from .pattern_filter import PatternFilter, default_pattern_filter


logger = logging.getLogger(__name__)


def pair_id(v1: SemanticVertex, v2: SemanticVertex) -> str:
    return f"{v1}_{v1.index}_{v2}_{v2.index}"


class PatternMiner:
    """
    Extracts patterns from one hybrid graph.

    The result is computed once; later calls to identify_patterns() return
    the cached set.
    """

    def __init__(self, graph: HybridGraph, pattern_filter: Optional[PatternFilter] = None):
        self.graph = graph
        self.filter = pattern_filter if pattern_filter is not None else default_pattern_filter()
        self.patterns: Set[Pattern] = set()
        self.done = False

    def identify_patterns(self) -> Set[Pattern]:
        return self.patterns if self.done else self._run()

    def _run(self) -> Set[Pattern]:
        start_time = time.time()
        source = self.graph.source
        logger.debug(f"Mining patterns from '{source}'")

        covered: Set[str] = set()
        patterns: Set[Pattern] = set()
        semantic_vertices = self.graph.semantic_vertex_list()

        for left in semantic_vertices:
            for right in semantic_vertices:
                if left == right or left.index >= right.index:
                    continue
                if pair_id(left, right) in covered or pair_id(right, left) in covered:
                    continue

                path = self.graph.shortest_path(left, right)
                if path is None:
                    continue

                try:
                    pattern = Pattern(path, source)
                except InvalidPatternError as e:
                    logger.debug(f"Path {' '.join(str(v) for v in path.vertices)} discarded: {e}")
                    continue

                patterns.add(pattern)
                covered.add(pair_id(left, right))
                logger.debug(f"Valid pattern: {pattern.signature(arguments=True)}")

        extracted = len(patterns)
        self.patterns = set(self.filter.apply(patterns))
        logger.debug(
            f"Extracted {extracted} patterns, filtered out {extracted - len(self.patterns)} "
            f"({len(self.patterns)} remaining) in {(time.time() - start_time) * 1000:.1f} ms"
        )

        self.done = True
        return self.patterns
