"""
Errors

Typed errors raised across the taxonomy induction pipeline.

Stage drivers catch the recoverable ones (merge conflicts, invalid patterns,
inconsistent pattern groups) at the batch boundary and record them as
StageFailure entries instead of aborting sibling work.
"""


class GlossTaxError(Exception):
    """Base class for all pipeline errors."""
    pass


class MergeConflictError(GlossTaxError):
    """A vertex could not be merged into a semantic vertex."""

    def __init__(self, message: str, vertex=None):
        super().__init__(message)
        self.vertex = vertex


class InvalidPatternError(GlossTaxError):
    """A mined path does not encode a valid relation pattern."""

    def __init__(self, message: str, edges=None):
        super().__init__(message)
        self.edges = list(edges) if edges is not None else []


class EmptyRelationError(GlossTaxError):
    """Type distributions were requested before being computed."""
    pass


class InconsistentPatternGroupError(GlossTaxError):
    """A pattern group mixes different lemma signatures."""

    def __init__(self, expected: str, found: str):
        super().__init__(
            f"Inconsistent pattern group: expected '{expected}', found '{found}'"
        )
        self.expected = expected
        self.found = found


class NoPatternsError(GlossTaxError):
    """A relation was requested from an empty pattern set."""
    pass


class TaxonomyCycleError(GlossTaxError):
    """A taxonomy traversal ran into a cycle."""

    def __init__(self, node, message: str = None):
        super().__init__(message or f"Cycle detected at taxonomy node {node!r}")
        self.node = node
