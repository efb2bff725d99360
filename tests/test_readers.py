"""
Tests for definition readers and dependency formats.
"""

import json

import pytest

from glosstax.data_pipeline import (
    InMemoryDefinitionReader,
    JsonlDefinitionReader,
    definition_from_record,
    parse_conll,
    parse_single_row,
)
from glosstax.graph import Dependency, Token

from conftest import COPULA_RECORD


CONLL = [
    "1\tRex\trex\tNNP\tNNP\t_\t4\tnsubj",
    "2\tis\tbe\tVBZ\tVBZ\t_\t4\tcop",
    "3\ta\ta\tDT\tDT\t_\t4\tdet",
    "4\tdog\tdog\tNN\tNN\t_\t0\troot",
]


def test_parse_conll():
    print("\n" + "="*60)
    print("TEST: CoNLL Parsing")
    print("="*60)

    dependencies = parse_conll(CONLL)
    for dep in dependencies:
        print(f"  {dep}")

    dog = Token("dog", "dog", "NN", 3)
    assert dependencies == [
        Dependency("nsubj", dog, Token("Rex", "rex", "NNP", 0)),
        Dependency("cop", dog, Token("is", "be", "VBZ", 1)),
        Dependency("det", dog, Token("a", "a", "DT", 2)),
    ]

    print("\n[OK] CoNLL parsed!")


def test_parse_conll_malformed():
    with pytest.raises(ValueError):
        parse_conll(["1\tRex\trex"])
    with pytest.raises(ValueError):
        parse_conll(["1\tRex\trex\tNNP\tNNP\t_\t9\tnsubj"])


def test_parse_single_row():
    line = "nsubj(dog_dog_NN_3, Rex_rex_NNP_0)\tcop(dog_dog_NN_3, is_be_VBZ_1)\tgarbage"

    dependencies = parse_single_row(line)

    assert len(dependencies) == 2
    assert dependencies[0].type == "nsubj"
    assert dependencies[0].head == Token("dog", "dog", "NN", 3)
    assert dependencies[1].dependent == Token("is", "be", "VBZ", 1)


def test_record_with_conll_is_fixed():
    record = {'id': 'rex', 'text': 'Rex is a dog', 'conll': CONLL,
              'senses': [{'start': 0, 'end': 1, 'sense': 'rex.n.01', 'confidence': 1.0}]}

    definition = definition_from_record(record)

    types = sorted(dep.type for dep in definition.dependencies)
    assert types == ["cop", "det", "nsubj"]
    assert Dependency("cop", Token("is", "be", "VBZ", 1), Token("Rex", "rex", "NNP", 0)) in definition.dependencies
    assert definition.senses[0].sense_id == "rex.n.01"
    assert definition.is_processed


def test_record_without_dependencies():
    with pytest.raises(ValueError):
        definition_from_record({'id': 'x', 'text': 'nothing'})


def test_jsonl_reader(tmp_path):
    path = tmp_path / "definitions.jsonl"
    with open(path, 'w', encoding='utf-8') as f:
        f.write(json.dumps(COPULA_RECORD) + "\n")
        f.write("not json\n")
        f.write("\n")
        f.write(json.dumps({'id': 'empty', 'text': 'no parse'}) + "\n")

    definitions = JsonlDefinitionReader(str(path)).read_definitions()

    assert [d.id for d in definitions] == ["rex"]
    assert definitions[0].text == "Rex is a dog ."


def test_jsonl_reader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        JsonlDefinitionReader(str(tmp_path / "missing.jsonl"))


def test_in_memory_reader(copula_definition):
    reader = InMemoryDefinitionReader([copula_definition])

    assert len(reader) == 1
    assert reader.read_definitions() == [copula_definition]
