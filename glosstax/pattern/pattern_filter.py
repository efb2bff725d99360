"""
Pattern Filter

Ordered pipeline of rejection predicates. A pattern survives the filter
iff none of the active predicates holds for it.
"""

from typing import Callable, Iterable, List, Optional

from .pattern import Pattern, REJECTION_PREDICATES


Predicate = Callable[[Pattern], bool]


class PatternFilter:
    """Composable filter over mined patterns."""

    def __init__(self, predicates: Optional[Iterable[Predicate]] = None):
        self.pipeline: List[Predicate] = list(predicates or [])

    def add_filter(self, predicate: Predicate) -> 'PatternFilter':
        self.pipeline.append(predicate)
        return self

    def add_filters(self, *predicates: Predicate) -> 'PatternFilter':
        for predicate in predicates:
            self.add_filter(predicate)
        return self

    def clear(self) -> 'PatternFilter':
        self.pipeline.clear()
        return self

    def rejects(self, pattern: Pattern) -> bool:
        return any(predicate(pattern) for predicate in self.pipeline)

    def as_predicate(self) -> Predicate:
        """Single predicate accepting the patterns that pass every filter."""
        return lambda pattern: not self.rejects(pattern)

    def apply(self, patterns: Iterable[Pattern]) -> List[Pattern]:
        accept = self.as_predicate()
        return [pattern for pattern in patterns if accept(pattern)]

    def __len__(self):
        return len(self.pipeline)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> 'PatternFilter':
        """
        Build a filter from predicate names.

        Raises:
            ValueError: If a name is not a known rejection predicate
        """
        predicates = []
        for name in names:
            if name not in REJECTION_PREDICATES:
                raise ValueError(f"Unknown pattern filter: {name}")
            predicates.append(REJECTION_PREDICATES[name])
        return cls(predicates)


def default_pattern_filter() -> PatternFilter:
    """Filter with all built-in rejection predicates."""
    return PatternFilter.from_names(REJECTION_PREDICATES)
