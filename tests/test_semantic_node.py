"""
Tests for semantic vertex merging.
"""

import pytest

from glosstax.exceptions import MergeConflictError
from glosstax.graph import DependencyEdge, Disambiguation, SemanticVertex, Token, Vertex


SHEEPDOG = Disambiguation(3, 5, "sheepdog.n.01", 0.8)

sheep = Token("sheep", "sheep", "NN", 3)
dog = Token("dog", "dog", "NN", 4)


def test_head_moves_to_governor():
    """Absorbing the head of an internal dependency makes it the new head."""
    print("\n" + "="*60)
    print("TEST: Semantic Vertex Head Tracking")
    print("="*60)

    vertex = SemanticVertex(sheep, SHEEPDOG)
    edge = DependencyEdge("compound", Vertex(dog), Vertex(sheep))
    vertex.merge_with(Vertex(dog), edge)

    print(f"  {vertex!r}")

    assert vertex.head == dog
    assert vertex.index == 4
    assert vertex.text_fragment() == "sheep dog"
    assert vertex.lemmas() == ["sheep", "dog"]
    assert vertex.internal_edges() == [edge]

    print("\n[OK] Head updated!")


def test_dependent_keeps_head():
    vertex = SemanticVertex(dog, SHEEPDOG)
    edge = DependencyEdge("amod", Vertex(dog), Vertex(sheep))
    vertex.merge_with(Vertex(sheep), edge)

    assert vertex.head == dog
    assert vertex.contains(Vertex(sheep))
    assert len(vertex.internal_edges()) == 1


def test_head_is_a_sink_of_the_subgraph():
    vertex = SemanticVertex(sheep, SHEEPDOG)
    vertex.merge_with(Vertex(dog), DependencyEdge("compound", Vertex(dog), Vertex(sheep)))

    assert list(vertex.subgraph.edges()) == [(Vertex(sheep), Vertex(dog))]
    assert vertex.subgraph.out_degree(Vertex(vertex.head)) == 0
    assert vertex.subgraph.in_degree(Vertex(vertex.head)) == 1


def test_disconnected_merge_adds_no_edge():
    vertex = SemanticVertex(sheep, SHEEPDOG)
    placeholder = DependencyEdge("", Vertex(dog), Vertex(dog))
    vertex.merge_with(Vertex(dog), placeholder)

    assert vertex.contains(Vertex(dog))
    assert vertex.internal_edges() == []
    assert vertex.head == sheep


def test_merge_conflicting_sense_raises():
    vertex = SemanticVertex(sheep, SHEEPDOG)
    other = SemanticVertex(dog, Disambiguation(4, 5, "dog.n.01", 0.9))

    with pytest.raises(MergeConflictError):
        vertex.merge_with(other, DependencyEdge("compound", other, Vertex(sheep)))


def test_merge_without_edge_raises():
    vertex = SemanticVertex(sheep, SHEEPDOG)

    with pytest.raises(MergeConflictError) as excinfo:
        vertex.merge_with(Vertex(dog), None)
    assert excinfo.value.vertex == Vertex(dog)


def test_identity_is_the_sense():
    first = SemanticVertex(sheep, SHEEPDOG)
    second = SemanticVertex(dog, SHEEPDOG)

    assert first == second
    assert hash(first) == hash(second)
    assert str(first) == "sheepdog.n.01"
    assert first != Vertex(sheep)
