"""
End-to-end tests for the taxonomy induction pipeline, its stage drivers,
configuration and export.
"""

import json

import pytest

from glosstax import PipelineConfig, TaxonomyPipeline
from glosstax.data_pipeline import (
    BuilderState,
    GraphBuilder,
    RelationBuilder,
    relations_to_dict,
    taxonomy_to_dict,
)
from glosstax.data_pipeline.definition import ProcessedDefinition
from glosstax.exceptions import InconsistentPatternGroupError, TaxonomyCycleError
from glosstax.taxonomy import ConceptTaxonomy, GeneralizationStrategy


def quiet_config(**overrides):
    settings = dict(batch_size=2, max_workers=2, show_progress=False)
    settings.update(overrides)
    return PipelineConfig(**settings)


def test_graph_builder_skips_unprocessed(owner_definitions):
    unparsed = ProcessedDefinition(id="raw", text="no annotations")
    builder = GraphBuilder(owner_definitions + [unparsed], batch_size=2,
                           definition_filter=lambda d: d.is_processed)

    graphs = builder.get_graphs()

    assert len(graphs) == 3
    assert builder.get_graphs() is graphs
    assert builder.failures == []
    assert builder.merge_failure_count() == 0


def test_relation_builder_stages(owner_graphs, concept_taxonomy):
    builder = RelationBuilder(owner_graphs, concept_taxonomy, batch_size=2)
    assert builder.state == BuilderState.READY

    pattern_map = builder.extract_patterns()
    assert builder.state == BuilderState.PATTERN_EXTRACTION
    assert sorted(pattern_map) == [1, 2]
    assert len(builder.pattern_groups()["X be Y"]) == 3

    relations = builder.get_relations()
    assert builder.state == BuilderState.RELATION_BUILDING
    assert sorted(r.signature for r in relations) == [
        "X be Y", "X be animal.n.01 Y", "X be dog.n.01 Y", "X be sheepdog.n.01 Y",
    ]
    assert builder.get_relations() is relations
    assert builder.dropped_patterns == []


def test_end_to_end(owner_definitions, concept_taxonomy):
    print("\n" + "="*60)
    print("TEST: End-to-End Taxonomy Induction")
    print("="*60)

    pipeline = TaxonomyPipeline(quiet_config(), concept_taxonomy)
    output = pipeline.run(owner_definitions)

    print(f"  {output.summary()}")
    for relation, score in output.ranked:
        print(f"  {relation}  {score}")

    assert len(output.graphs) == 3
    assert len(output.relations) == 4
    assert output.taxonomy.number_of_edges() == 2
    assert output.taxonomy.number_of_edges_by_strategy(GeneralizationStrategy.SUBSTRING) == 1
    assert output.failures == []
    assert output.ranked[0][0].signature == "X be Y"

    print("\n[OK] Pipeline finished!")


def test_results_independent_of_batch_size(owner_definitions, concept_taxonomy):
    signatures = []
    for batch_size in (1, 2, 10):
        output = TaxonomyPipeline(quiet_config(batch_size=batch_size), concept_taxonomy).run(owner_definitions)
        signatures.append(sorted(r.signature for r in output.relations))

    assert signatures[0] == signatures[1] == signatures[2]


def test_strategy_selection(owner_definitions, concept_taxonomy):
    output = TaxonomyPipeline(quiet_config(strategies=["substring"]), concept_taxonomy).run(owner_definitions)
    assert output.taxonomy.number_of_edges() == 1

    output = TaxonomyPipeline(quiet_config(strategies=[]), concept_taxonomy).run(owner_definitions)
    assert output.taxonomy.number_of_edges() == 0


def test_cyclic_concept_taxonomy_is_recorded(owner_definitions):
    print("\n" + "="*60)
    print("TEST: Cyclic Concept Taxonomy")
    print("="*60)

    cyclic = ConceptTaxonomy.from_edges([
        ("dog.n.01", "animal.n.01", 0),
        ("animal.n.01", "dog.n.01", 0),
    ])
    output = TaxonomyPipeline(quiet_config(), cyclic).run(owner_definitions)

    print(f"  {output.summary()}")
    for failure in output.failures:
        print(f"  {failure}")

    assert len(output.relations) == 4
    assert output.failures
    assert all(isinstance(f.error, TaxonomyCycleError) for f in output.failures)
    assert output.taxonomy.number_of_edges_by_strategy(GeneralizationStrategy.SUBSTRING) == 1

    print("\n[OK] Cycle recorded as a failure!")


def test_strict_relations_raise(owner_graphs, concept_taxonomy):
    builder = RelationBuilder(owner_graphs[:1], concept_taxonomy, strict=True)
    builder.extract_patterns()
    mixed = {p for group in builder.pattern_map[1].values() for p in group}

    with pytest.raises(InconsistentPatternGroupError):
        builder._build(mixed)


def test_save(owner_definitions, concept_taxonomy, tmp_path):
    pipeline = TaxonomyPipeline(quiet_config(), concept_taxonomy)
    output = pipeline.run(owner_definitions)

    pipeline.save(output, str(tmp_path / "out"))

    with open(tmp_path / "out" / "taxonomy.json", encoding='utf-8') as f:
        taxonomy = json.load(f)
    assert taxonomy == taxonomy_to_dict(output.taxonomy)
    assert {"source": "X be sheepdog.n.01 Y", "target": "X be dog.n.01 Y", "strategy": "substring"} in taxonomy['edges']
    assert taxonomy['roots'] == ["X be animal.n.01 Y"]

    with open(tmp_path / "out" / "relations.json", encoding='utf-8') as f:
        relations = json.load(f)['relations']
    copula = next(r for r in relations if r['signature'] == "X be Y")
    assert copula['frequency'] == 3
    assert {e['source'] for e in copula['extractions']} == {"rex_dog", "tom_animal", "max_sheepdog"}

    lines = (tmp_path / "out" / "relations.txt").read_text(encoding='utf-8').splitlines()
    assert len(lines) == 4


def test_relations_to_dict_sorted(owner_definitions, concept_taxonomy):
    output = TaxonomyPipeline(quiet_config(), concept_taxonomy).run(owner_definitions)

    signatures = [r['signature'] for r in relations_to_dict(output.relations)['relations']]
    assert signatures == sorted(signatures)


def test_pipeline_requires_taxonomy():
    with pytest.raises(ValueError):
        TaxonomyPipeline(quiet_config())


def test_config_validation_and_loading(tmp_path):
    with pytest.raises(ValueError):
        PipelineConfig(batch_size=0)
    with pytest.raises(ValueError):
        PipelineConfig(strategies=["telepathy"])
    with pytest.raises(ValueError):
        PipelineConfig(pattern_filters=["no_such_filter"])

    path = tmp_path / "config.json"
    path.write_text(json.dumps({"batch_size": 7, "hypernym_level": 2, "unknown": True}), encoding='utf-8')
    config = PipelineConfig.from_json(str(path))

    assert config.batch_size == 7
    assert config.hypernym_level == 2
    assert PipelineConfig.from_dict(config.to_dict()) == config

    with pytest.raises(FileNotFoundError):
        PipelineConfig.from_json(str(tmp_path / "missing.json"))
