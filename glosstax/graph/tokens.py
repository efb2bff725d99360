"""
Tokens, Dependencies and Sense Disambiguations

Value types for the already-annotated input of a definition:
- Token: a tagged and lemmatized word with its sentence position
- Dependency: a typed (head, dependent) relation between two tokens
- Disambiguation: a sense attached to a span of tokens

Also provides the dependency-fixing step that unrolls copula and
conjunction constructions so the connective word shows up in mined patterns.
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import List, Set


SEPARATOR = "|"

# Verb tags outside the Penn Treebank "V*" family (Universal Dependencies)
UD_VERB_TAGS = {"VERB", "AUX"}


@total_ordering
@dataclass(frozen=True)
class Token:
    """
    A single word of a parsed sentence.

    Attributes:
        surface_form: Word as it appears in the text
        lemma: Lemmatized form
        pos: Part-of-speech tag (e.g., "NN", "VBZ")
        index: Position within the sentence
    """
    surface_form: str
    lemma: str
    pos: str
    index: int = 0

    def __lt__(self, other):
        if not isinstance(other, Token):
            return NotImplemented
        return (self.index, self.surface_form) < (other.index, other.surface_form)

    def __str__(self):
        return self.surface_form

    def verbose(self) -> str:
        return SEPARATOR.join([self.surface_form, self.lemma, self.pos, str(self.index)])


@dataclass(frozen=True)
class Dependency:
    """A typed dependency: type(head, dependent)."""
    type: str
    head: Token
    dependent: Token

    def __str__(self):
        return f"{self.type}({self.head}, {self.dependent})"


@dataclass(frozen=True)
class Disambiguation:
    """
    A sense attached to a token span.

    Attributes:
        start: First token offset (inclusive)
        end: Last token offset (exclusive)
        sense_id: Identifier of the attached sense
        confidence: Disambiguation confidence score
    """
    start: int
    end: int
    sense_id: str
    confidence: float = 0.0

    def __post_init__(self):
        if self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end}) for sense {self.sense_id}")

    @property
    def match_length(self) -> int:
        return self.end - self.start

    def covers(self, index: int) -> bool:
        """Check whether a token index falls inside this span."""
        return self.start <= index < self.end

    def __str__(self):
        return f"{self.start}_{self.end}_{self.sense_id}_{self.confidence}"


def overlap(d1: Disambiguation, d2: Disambiguation) -> bool:
    """Check whether d2 starts within the span of d1."""
    return d1.start <= d2.start <= d1.end


def is_noun(token: Token) -> bool:
    return token.pos.startswith("N")


def is_verb(token: Token) -> bool:
    return token.pos.startswith("V") or token.pos in UD_VERB_TAGS


def fix_dependencies(dependencies: List[Dependency]) -> List[Dependency]:
    """
    Unroll collapsed copula and conjunction constructions.

    With copulas the nominal root is attached directly to its subject, and
    with conjunctions the two conjuncts are attached directly to each other.
    Rewriting them lets the connective word appear between the two nouns:

        cop(album, is) + nsubj(album, Mother)  ->  cop(is, Mother) + nsubj(album, is)
        conj(artist, host) + cc(artist, and)   ->  conj(and, host)

    Args:
        dependencies: Original dependency list

    Returns:
        Updated dependency list (kept dependencies first, in original order)
    """
    to_remove: Set[int] = set()
    to_add: List[Dependency] = []

    def add(dep: Dependency):
        if dep not in to_add:
            to_add.append(dep)

    for i, cop in enumerate(dependencies):
        if cop.type != "cop":
            continue

        verb, noun = cop.dependent, cop.head
        for j, subj in enumerate(dependencies):
            if subj.type == "nsubj" and subj.head == noun:
                add(Dependency("cop", verb, subj.dependent))
                add(Dependency("nsubj", noun, verb))
                to_remove.update((i, j))
                break

    for i, conj in enumerate(dependencies):
        if conj.type != "conj":
            continue

        for cc in dependencies:
            if cc.type == "cc" and cc.head == conj.head:
                add(Dependency("conj", cc.dependent, conj.dependent))
                to_remove.add(i)
                break

    updated = [dep for i, dep in enumerate(dependencies) if i not in to_remove]
    updated.extend(to_add)
    return updated
