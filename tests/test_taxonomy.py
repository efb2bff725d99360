"""
Tests for the generic taxonomy and concept taxonomies.
"""

import pytest

from glosstax.exceptions import TaxonomyCycleError
from glosstax.relation import Concept
from glosstax.taxonomy import ConceptTaxonomy, Taxonomy, TaxonomyEdge, WordNetConceptTaxonomy


def test_has_superclass_is_transitive(concept_taxonomy):
    print("\n" + "="*60)
    print("TEST: Transitive Superclass Lookup")
    print("="*60)

    dog = Concept("dog.n.01")
    animal = Concept("animal.n.01")

    assert concept_taxonomy.has_superclass(dog, animal)
    assert concept_taxonomy.is_superclass(animal, dog)
    assert not concept_taxonomy.has_superclass(animal, dog)
    assert not concept_taxonomy.has_superclass(dog, dog)

    print("\n[OK] Superclass lookup works!")


def test_primary_superclass_uses_lowest_edge_type(concept_taxonomy):
    dog = Concept("dog.n.01")

    assert concept_taxonomy.superclasses(dog) == [Concept("canine.n.02"), Concept("pet.n.01")]
    assert concept_taxonomy.primary_superclass(dog) == Concept("canine.n.02")
    assert concept_taxonomy.primary_superclass(Concept("animal.n.01")) is None


def test_ancestor_chain_and_depth(concept_taxonomy):
    chain = concept_taxonomy.ancestor_chain(Concept("rex.n.01"))

    assert [c.id for c in chain] == ["dog.n.01", "canine.n.02", "carnivore.n.01", "animal.n.01"]
    assert [c.id for c in concept_taxonomy.ancestor_chain(Concept("rex.n.01"), 2)] == ["dog.n.01", "canine.n.02"]
    assert concept_taxonomy.depth_of(Concept("rex.n.01")) == 4
    assert concept_taxonomy.depth_of(Concept("animal.n.01")) == -1


def test_roots_and_counts(concept_taxonomy):
    assert concept_taxonomy.roots == {Concept("animal.n.01"), Concept("sheepdog.n.01"), Concept("pet.n.01")}
    assert concept_taxonomy.is_root(Concept("animal.n.01"))
    assert concept_taxonomy.number_of_edges() == 9
    assert concept_taxonomy.number_of_edges(lambda edge: edge.edge_type > 0) == 1


def test_lowest_edge_type_is_kept():
    taxonomy = Taxonomy()
    taxonomy.add_edge("a", "b", 2)
    taxonomy.add_edge("a", "b", 1)
    taxonomy.add_edge("a", "b", 3)

    assert taxonomy.all_edges("a") == [TaxonomyEdge("b", 1)]


def test_cycle_raises():
    taxonomy = Taxonomy({"a": {"b": 0}, "b": {"c": 0}, "c": {"a": 0}})

    with pytest.raises(TaxonomyCycleError):
        taxonomy.has_superclass("a", "z")
    with pytest.raises(TaxonomyCycleError):
        taxonomy.ancestor_chain("a")


def test_diamond_is_not_a_cycle():
    taxonomy = Taxonomy({"a": {"b": 0, "c": 1}, "b": {"d": 0}, "c": {"d": 0}})

    assert not taxonomy.has_superclass("a", "z")
    assert taxonomy.has_superclass("a", "d")


def test_to_digraph(concept_taxonomy):
    digraph = concept_taxonomy.to_digraph()

    assert digraph.number_of_edges() == 9
    assert digraph[Concept("dog.n.01")][Concept("pet.n.01")]['edge_type'] == 1


def test_from_file(tmp_path):
    path = tmp_path / "edges.tsv"
    path.write_text("# subclass\tsuperclass\ttype\n"
                    "dog.n.01\tcanine.n.02\t0\n"
                    "\n"
                    "canine.n.02\tcarnivore.n.01\t0\n", encoding='utf-8')

    taxonomy = ConceptTaxonomy.from_file(str(path))

    assert taxonomy.number_of_edges() == 2
    assert taxonomy.is_superclass(Concept("carnivore.n.01"), Concept("dog.n.01"))


def test_from_file_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConceptTaxonomy.from_file(str(tmp_path / "missing.tsv"))

    path = tmp_path / "bad.tsv"
    path.write_text("dog.n.01\tcanine.n.02\n", encoding='utf-8')
    with pytest.raises(ValueError):
        ConceptTaxonomy.from_file(str(path))


@pytest.fixture
def wordnet():
    try:
        from nltk.corpus import wordnet as wn
        wn.synsets('dog')
    except LookupError:
        pytest.skip("WordNet data not available")
    return WordNetConceptTaxonomy(download=False)


def test_wordnet_superclass(wordnet):
    dog = Concept("dog.n.01")

    assert wordnet.is_superclass(Concept("animal.n.01"), dog)
    assert not wordnet.is_superclass(dog, Concept("animal.n.01"))
    assert wordnet.primary_superclass(dog) is not None
    assert wordnet.ancestor_chain(dog, 1) == [wordnet.primary_superclass(dog)]


def test_wordnet_unknown_concept(wordnet):
    unknown = Concept("not_a_synset")

    assert wordnet.ancestor_chain(unknown, 1) == []
    assert wordnet.depth_of(unknown) == -1
    assert not wordnet.is_superclass(Concept("animal.n.01"), unknown)
