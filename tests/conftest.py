"""
Shared fixtures: small hand-annotated definitions and a concept taxonomy.
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from glosstax.data_pipeline import definition_from_record
from glosstax.data_pipeline.graph_builder import build_graph
from glosstax.taxonomy import ConceptTaxonomy


def make_record(id, words, dependencies, senses):
    """
    JSON-style definition record.

    Args:
        id: Definition id
        words: (surface, lemma, pos) per token
        dependencies: (type, head index, dependent index) triples
        senses: (start, end, sense id, confidence) spans
    """
    return {
        'id': id,
        'text': " ".join(surface for surface, _, _ in words),
        'tokens': [list(word) for word in words],
        'dependencies': [list(dep) for dep in dependencies],
        'senses': [list(sense) for sense in senses],
    }


# "Rex is a dog ."
COPULA_RECORD = make_record(
    'rex',
    [("Rex", "rex", "NNP"), ("is", "be", "VBZ"), ("a", "a", "DT"), ("dog", "dog", "NN"), (".", ".", ".")],
    [("nsubj", 3, 0), ("cop", 3, 1), ("det", 3, 2), ("punct", 3, 4)],
    [(0, 1, "rex.n.01", 1.0), (3, 4, "dog.n.01", 1.0)],
)


def owner_record(id, name, name_sense, noun_words, noun_sense, compound=False):
    """
    "<name> is a <noun words> of Ann", with an optional compound modifier.
    """
    words = [(name, name.lower(), "NNP"), ("is", "be", "VBZ"), ("a", "a", "DT")]
    words += noun_words
    head = len(words) - 1
    words += [("of", "of", "IN"), ("Ann", "ann", "NNP")]

    dependencies = [("nsubj", head, 0), ("cop", head, 1), ("det", head, 2),
                    ("nmod", head, head + 2), ("case", head + 2, head + 1)]
    if compound:
        dependencies.append(("compound", head, head - 1))

    senses = [(0, 1, name_sense, 0.9),
              (3, head + 1, noun_sense, 0.8),
              (head + 2, head + 3, "ann.n.01", 1.0)]
    return make_record(id, words, dependencies, senses)


DOG_RECORD = owner_record('rex_dog', "Rex", "rex.n.01", [("dog", "dog", "NN")], "dog.n.01")
ANIMAL_RECORD = owner_record('tom_animal', "Tom", "tom.n.01", [("animal", "animal", "NN")], "animal.n.01")
SHEEPDOG_RECORD = owner_record('max_sheepdog', "Max", "max.n.01",
                               [("sheep", "sheep", "NN"), ("dog", "dog", "NN")], "sheepdog.n.01",
                               compound=True)


@pytest.fixture
def copula_definition():
    return definition_from_record(COPULA_RECORD)


@pytest.fixture
def owner_definitions():
    return [definition_from_record(record) for record in (DOG_RECORD, ANIMAL_RECORD, SHEEPDOG_RECORD)]


@pytest.fixture
def copula_graph(copula_definition):
    return build_graph(copula_definition)


@pytest.fixture
def owner_graphs(owner_definitions):
    return [build_graph(definition) for definition in owner_definitions]


@pytest.fixture
def concept_taxonomy():
    return ConceptTaxonomy.from_edges([
        ("rex.n.01", "dog.n.01", 0),
        ("max.n.01", "sheepdog.n.01", 0),
        ("tom.n.01", "cat.n.01", 0),
        ("dog.n.01", "canine.n.02", 0),
        ("canine.n.02", "carnivore.n.01", 0),
        ("cat.n.01", "feline.n.01", 0),
        ("feline.n.01", "carnivore.n.01", 0),
        ("carnivore.n.01", "animal.n.01", 0),
        ("dog.n.01", "pet.n.01", 1),
    ])
