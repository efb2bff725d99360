"""
Tests for relation patterns, signatures and rejection filters.
"""

import pytest

from glosstax.exceptions import InvalidPatternError
from glosstax.graph import DependencyEdge, GraphPath, Token, Vertex
from glosstax.pattern import (
    Pattern,
    PatternFilter,
    default_pattern_filter,
    ends_with_modifier,
    non_nominal_arguments,
    starts_with_modifier,
)


def copula_pattern(graph):
    rex, dog = graph.semantic_vertex_list()
    return Pattern(graph.shortest_path(rex, dog), graph.source)


def test_copula_pattern(copula_graph):
    print("\n" + "="*60)
    print("TEST: Copula Pattern")
    print("="*60)

    pattern = copula_pattern(copula_graph)
    print(f"  {pattern.signature()}  |  {pattern.lemma_signature}  |  {pattern.signature(arguments=True)}")

    assert pattern.verb.surface_form == "is"
    assert pattern.length == len(pattern.edges) == 2
    assert pattern.signature() == "X is Y"
    assert pattern.lemma_signature == "X be Y"
    assert pattern.signature(arguments=True) == "rex.n.01 is dog.n.01"
    assert pattern.semantic_vertices == []
    assert pattern.argument_score() == 1.0
    assert pattern.source.id == "rex"

    print("\n[OK] Pattern signatures correct!")


def test_signature_is_memoized(copula_graph):
    pattern = copula_pattern(copula_graph)

    flags = [(False, False), (True, True), (False, True), (True, False)]
    first = {key: pattern.signature(lemmatized=key[0], arguments=key[1]) for key in flags}

    for lemmatized, arguments in reversed(flags):
        assert pattern.signature(lemmatized=lemmatized, arguments=arguments) is first[(lemmatized, arguments)]

    assert pattern.signature(arguments=True) is first[(False, True)]
    assert pattern.lemma_signature is first[(True, False)]
    assert first[(True, True)] != first[(True, False)]
    assert set(pattern.relation_pattern._signatures) == set(flags)


def test_interior_semantic_vertex(owner_graphs):
    graph = owner_graphs[0]
    rex = next(v for v in graph if v.sense_id == "rex.n.01")
    ann = next(v for v in graph if v.sense_id == "ann.n.01")

    pattern = Pattern(graph.shortest_path(rex, ann), graph.source)

    assert pattern.lemma_signature == "X be dog.n.01 Y"
    assert [v.sense_id for v in pattern.semantic_vertices] == ["dog.n.01"]
    assert pattern.pattern_score() == pytest.approx(0.8)
    assert pattern.argument_score() == pytest.approx(0.9)


def test_path_without_verb_is_invalid(owner_graphs):
    graph = owner_graphs[0]
    dog = next(v for v in graph if v.sense_id == "dog.n.01")
    ann = next(v for v in graph if v.sense_id == "ann.n.01")

    with pytest.raises(InvalidPatternError):
        Pattern(graph.shortest_path(dog, ann))


def test_empty_path_is_invalid():
    vertex = Vertex(Token("dog", "dog", "NN", 0))

    with pytest.raises(InvalidPatternError):
        Pattern(GraphPath(vertex, vertex, [], [vertex]))


def manual_pattern(first_type, last_type, start_pos="NN", end_pos="NN"):
    start = Vertex(Token("a", "a", start_pos, 0))
    verb = Vertex(Token("is", "be", "VBZ", 1))
    end = Vertex(Token("b", "b", end_pos, 2))
    edges = [DependencyEdge(first_type, verb, start), DependencyEdge(last_type, end, verb)]
    return Pattern(GraphPath(start, end, edges, [start, verb, end]))


def test_rejection_predicates():
    assert not non_nominal_arguments(manual_pattern("cop", "nsubj"))
    assert non_nominal_arguments(manual_pattern("cop", "nsubj", start_pos="JJ"))
    assert starts_with_modifier(manual_pattern("compound", "nsubj"))
    assert ends_with_modifier(manual_pattern("cop", "acl"))
    assert not ends_with_modifier(manual_pattern("cop", "nsubj"))


def test_pattern_filter_pipeline():
    keep = manual_pattern("cop", "nsubj")
    modifier = manual_pattern("nn", "nsubj")
    adjective = manual_pattern("cop", "nsubj", end_pos="JJ")

    pattern_filter = default_pattern_filter()
    assert len(pattern_filter) == 3
    assert pattern_filter.apply([keep, modifier, adjective]) == [keep]

    only_modifiers = PatternFilter().add_filter(starts_with_modifier)
    assert only_modifiers.apply([keep, modifier, adjective]) == [keep, adjective]
    assert PatternFilter().apply([modifier]) == [modifier]


def test_unknown_filter_name():
    with pytest.raises(ValueError):
        PatternFilter.from_names(["no_such_filter"])
