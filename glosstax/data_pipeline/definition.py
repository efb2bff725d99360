"""
Definitions

A Definition is an identified piece of text (typically a dictionary gloss).
A ProcessedDefinition also carries its dependency parse and its sense
disambiguations, both produced upstream.
"""

from dataclasses import dataclass, field
from typing import List

from ..graph.tokens import Dependency, Disambiguation


@dataclass
class Definition:
    """
    A definition to extract relations from.

    Attributes:
        id: Definition identifier
        text: Textual content
    """
    id: str
    text: str

    def __hash__(self):
        return hash((self.id, self.text))

    def __eq__(self, other):
        if not isinstance(other, Definition):
            return False
        return self.id == other.id and self.text == other.text

    def __str__(self):
        return self.text

    def verbose(self) -> str:
        return f"{self.id}\t{self.text}"


@dataclass(eq=False)
class ProcessedDefinition(Definition):
    """
    A parsed and disambiguated definition.

    Attributes:
        dependencies: Typed dependencies of the text
        senses: Sense disambiguations (token offsets into the same text)
    """
    dependencies: List[Dependency] = field(default_factory=list)
    senses: List[Disambiguation] = field(default_factory=list)

    @property
    def is_parsed(self) -> bool:
        return bool(self.dependencies)

    @property
    def is_disambiguated(self) -> bool:
        return bool(self.senses)

    @property
    def is_processed(self) -> bool:
        return self.is_parsed and self.is_disambiguated
