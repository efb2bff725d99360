"""
Concepts and Argument Pairs

A Concept is a sense identifier with its known lexicalizations; two concepts
are the same iff their identifiers match. An ArgumentPair is one
(domain, range) instance of a relation.
"""

from typing import Iterable, List, Optional


class Concept:
    """A sense identifier with optional lexicalizations."""

    def __init__(self, id: str, lexicalizations: Optional[Iterable[str]] = None):
        self.id = id
        self.lexicalizations: List[str] = list(lexicalizations or [])

    def add_lexicalization(self, lexicalization: str):
        if lexicalization not in self.lexicalizations:
            self.lexicalizations.append(lexicalization)

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if not isinstance(other, Concept):
            return False
        return self.id == other.id

    def __repr__(self):
        return f"Concept({self.id!r})"

    def __str__(self):
        if self.lexicalizations:
            return f"{self.lexicalizations[0]}_{self.id}"
        return self.id


class ArgumentPair:
    """
    Domain and range concepts of one relation instance.

    Identity is the concept pair only: the same pair extracted from two
    definitions counts once.

    Attributes:
        domain: Left argument concept
        range: Right argument concept
        source: Definition the pair was extracted from
        confidence: Product of the two disambiguation confidences
    """

    def __init__(self, domain: Concept, range: Concept, source=None, confidence: float = float('nan')):
        self.domain = domain
        self.range = range
        self.source = source
        self.confidence = confidence

    def __hash__(self):
        return hash((self.domain, self.range))

    def __eq__(self, other):
        if not isinstance(other, ArgumentPair):
            return False
        return self.domain == other.domain and self.range == other.range

    def __repr__(self):
        return f"ArgumentPair({self.domain}, {self.range})"

    def __str__(self):
        return f"<{self.domain}\t{self.range}>"
