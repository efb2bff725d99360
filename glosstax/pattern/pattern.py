"""
Relation Patterns

A pattern is the shortest left-to-right path between two semantic vertices
of a hybrid graph. It is valid only if a verb (or copula) lies between its
two arguments.

Patterns are rendered as textual signatures by sorting the path tokens by
sentence position, e.g. "X be a bn:00002488n by Y". Semantic vertices are
rendered as their sense id, and arguments are replaced by the X/Y
placeholders unless explicitly included.
"""

from typing import Callable, Dict, List, Optional, Tuple

from ..exceptions import InvalidPatternError
from ..graph.semantic_node import SemanticVertex
from ..graph.token_graph import DependencyEdge, GraphPath, Vertex
from ..graph.tokens import Token, is_noun, is_verb


LEFT_PLACEHOLDER = "X"
RIGHT_PLACEHOLDER = "Y"

# Compound-noun and modifier dependency labels
MODIFIER_TYPES = {"nn", "compound", "ncmod", "acl"}


class RelationPattern:
    """
    Edge path between two vertices, with its verb and semantic vertices.

    Attributes:
        start: Left argument vertex
        end: Right argument vertex
        edges: Traversed edges, in traversal order
        vertices: Traversed vertices, in traversal order
        verb: Leading verb (or copula) token
        semantic_vertices: Semantic vertices strictly inside the path
    """

    def __init__(self, path: GraphPath):
        if not path.edges:
            raise InvalidPatternError("Empty path", path.edges)

        self.start = path.start
        self.end = path.end
        self.edges: Tuple[DependencyEdge, ...] = tuple(path.edges)
        self.vertices: Tuple[Vertex, ...] = tuple(path.vertices)

        interior = self.vertices[1:-1]
        self.verb: Optional[Token] = next((v.token for v in interior if is_verb(v.token)), None)
        if self.verb is None:
            raise InvalidPatternError("No verb node found", self.edges)

        self.semantic_vertices: List[SemanticVertex] = [
            v for v in interior if isinstance(v, SemanticVertex)
        ]

        self._signatures: Dict[Tuple[bool, bool], str] = {}
        self._nodes: Optional[List[Vertex]] = None

    def __len__(self):
        return len(self.edges)

    @property
    def length(self) -> int:
        return len(self.edges)

    def node_sequence(self, arguments: bool = True) -> List[Vertex]:
        """
        Path vertices sorted by sentence position.

        Args:
            arguments: If False, the argument vertices are replaced by
                placeholder vertices

        Returns:
            List of vertices
        """
        sequence = []
        for vertex in self.vertices:
            if not arguments and vertex == self.start:
                vertex = Vertex(Token(LEFT_PLACEHOLDER, LEFT_PLACEHOLDER, LEFT_PLACEHOLDER, self.start.index))
            elif not arguments and vertex == self.end:
                vertex = Vertex(Token(RIGHT_PLACEHOLDER, RIGHT_PLACEHOLDER, RIGHT_PLACEHOLDER, self.end.index))
            sequence.append(vertex)

        return sorted(sequence, key=lambda v: v.index)

    @property
    def nodes(self) -> List[Vertex]:
        """Sorted path vertices including the arguments."""
        if self._nodes is None:
            self._nodes = self.node_sequence(arguments=True)
        return self._nodes

    @property
    def left_argument_index(self) -> int:
        return self.nodes.index(self.start)

    @property
    def right_argument_index(self) -> int:
        return self.nodes.index(self.end)

    def signature(self, lemmatized: bool = False, arguments: bool = False) -> str:
        """
        Textual signature of the pattern (memoized per flag combination).

        Args:
            lemmatized: Use lemmas instead of surface forms
            arguments: Keep the argument tokens instead of X/Y placeholders

        Returns:
            Space-separated signature string
        """
        key = (lemmatized, arguments)
        if key not in self._signatures:
            self._signatures[key] = " ".join(
                render_vertex(vertex, lemmatized) for vertex in self.node_sequence(arguments)
            )
        return self._signatures[key]

    @property
    def lemma_signature(self) -> str:
        return self.signature(lemmatized=True, arguments=False)

    def __hash__(self):
        return hash(self.edges)

    def __eq__(self, other):
        if not isinstance(other, RelationPattern):
            return False
        return self.edges == other.edges

    def __str__(self):
        return self.signature()

    def __repr__(self):
        return f"RelationPattern('{self.signature()}')"


def render_vertex(vertex: Vertex, lemmatized: bool) -> str:
    """Semantic vertices render as their sense, plain ones as lemma or surface form."""
    if isinstance(vertex, SemanticVertex):
        return str(vertex)
    return vertex.token.lemma if lemmatized else vertex.token.surface_form


class Pattern:
    """
    A relation pattern together with the definition it was mined from.
    """

    def __init__(self, path: GraphPath, source=None):
        self.relation_pattern = RelationPattern(path)
        self.source = source

    @property
    def start(self) -> Vertex:
        return self.relation_pattern.start

    @property
    def end(self) -> Vertex:
        return self.relation_pattern.end

    @property
    def extremes(self) -> Tuple[Vertex, Vertex]:
        return self.start, self.end

    @property
    def edges(self) -> Tuple[DependencyEdge, ...]:
        return self.relation_pattern.edges

    @property
    def verb(self) -> Token:
        return self.relation_pattern.verb

    @property
    def semantic_vertices(self) -> List[SemanticVertex]:
        return self.relation_pattern.semantic_vertices

    @property
    def length(self) -> int:
        return self.relation_pattern.length

    def __len__(self):
        return self.relation_pattern.length

    def signature(self, lemmatized: bool = False, arguments: bool = False) -> str:
        return self.relation_pattern.signature(lemmatized, arguments)

    @property
    def lemma_signature(self) -> str:
        return self.relation_pattern.lemma_signature

    def argument_score(self) -> float:
        """Product of the two argument disambiguation confidences."""
        return self.start.sense.confidence * self.end.sense.confidence

    def pattern_score(self) -> float:
        """Product of the confidences of the semantic vertices inside the path."""
        score = 1.0
        for vertex in self.semantic_vertices:
            score *= vertex.sense.confidence
        return score

    def sort_key(self) -> Tuple[int, str, str]:
        return self.length, self.signature(), self.signature(arguments=True)

    def __hash__(self):
        return hash((self.relation_pattern, self.start, self.end, self.source))

    def __eq__(self, other):
        if not isinstance(other, Pattern):
            return False
        return (self.relation_pattern == other.relation_pattern
                and self.start == other.start
                and self.end == other.end
                and self.source == other.source)

    def __str__(self):
        return str(self.relation_pattern)

    def __repr__(self):
        return f"Pattern('{self.signature(arguments=True)}')"


# Rejection predicates: a pattern is discarded when any active one holds

def non_nominal_arguments(pattern: Pattern) -> bool:
    """Either argument is not a noun."""
    return not (is_noun(pattern.start.token) and is_noun(pattern.end.token))


def starts_with_modifier(pattern: Pattern) -> bool:
    """First edge is a compound-noun or modifier relation."""
    return pattern.edges[0].type in MODIFIER_TYPES


def ends_with_modifier(pattern: Pattern) -> bool:
    """Last edge is a compound-noun or modifier relation."""
    return pattern.edges[-1].type in MODIFIER_TYPES


REJECTION_PREDICATES: Dict[str, Callable[[Pattern], bool]] = {
    'non_nominal_arguments': non_nominal_arguments,
    'starts_with_modifier': starts_with_modifier,
    'ends_with_modifier': ends_with_modifier,
}
