"""
Relation Taxonomy Induction

Induces a taxonomy of typed relations from parsed and sense-disambiguated
dictionary definitions:
1. Hybrid syntactic-semantic graphs (one per definition)
2. Relation patterns between sense spans
3. Relations with domain/range type distributions
4. Relation taxonomy (hypernym and substring generalization)

Output:
- relations.json, taxonomy.json, scores.json
- relations.txt (ranked typed relations)
"""

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

import argparse

from glosstax import PipelineConfig, TaxonomyPipeline, configure_logging
from glosstax.data_pipeline import JsonlDefinitionReader
from glosstax.taxonomy import ConceptTaxonomy, WordNetConceptTaxonomy


def main():
    parser = argparse.ArgumentParser(description='Induce a relation taxonomy from definitions')
    parser.add_argument('--definitions', type=str, required=True,
                        help='JSONL file of processed definitions')
    parser.add_argument('--taxonomy', type=str, default=None,
                        help='Concept taxonomy edge file (SUBCLASS<TAB>SUPERCLASS<TAB>TYPE)')
    parser.add_argument('--wordnet', action='store_true',
                        help='Use WordNet as the concept taxonomy')
    parser.add_argument('--config', type=str, default=None,
                        help='Pipeline config JSON')
    parser.add_argument('--output-dir', type=str, default='data/relation_taxonomy',
                        help='Output directory')
    parser.add_argument('--hypernym-level', type=int, default=None,
                        help='Override the argument generalization level')
    parser.add_argument('--no-fix', action='store_true',
                        help='Do not rewrite copula and coordination dependencies')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Logging level (DEBUG, INFO, WARNING, ...)')

    args = parser.parse_args()

    if bool(args.taxonomy) == args.wordnet:
        parser.error("exactly one of --taxonomy and --wordnet is required")

    config = PipelineConfig.from_json(args.config) if args.config else PipelineConfig()
    if args.hypernym_level is not None:
        config.hypernym_level = args.hypernym_level
    if args.log_level:
        config.log_level = args.log_level
    configure_logging(config.log_level)

    print("="*70)
    print("RELATION TAXONOMY INDUCTION")
    print("="*70)
    print()

    print("[1/3] Loading concept taxonomy...")
    if args.wordnet:
        concept_taxonomy = WordNetConceptTaxonomy()
        print("  Using WordNet hypernymy")
    else:
        concept_taxonomy = ConceptTaxonomy.from_file(args.taxonomy)
        print(f"  Loaded {concept_taxonomy.number_of_edges()} edges from {args.taxonomy}")
    print()

    print("[2/3] Running pipeline...")
    reader = JsonlDefinitionReader(args.definitions, fix=not args.no_fix)
    pipeline = TaxonomyPipeline(config, concept_taxonomy)
    output = pipeline.run(reader)
    print()

    print("[3/3] Saving results...")
    pipeline.save(output, args.output_dir)
    print()

    print("="*70)
    print("TAXONOMY SUMMARY")
    print("="*70)
    print(f"Graphs: {len(output.graphs)}")
    print(f"Relations: {len(output.relations)}")
    print(f"Taxonomy edges: {output.taxonomy.number_of_edges()}")
    print(f"Dropped patterns: {len(output.dropped_patterns)}")
    print(f"Failures: {len(output.failures)}")
    print("="*70)
    print()

    print("Top relations:")
    for relation, score in output.ranked[:10]:
        print(f"  {relation}  {score}")
    print()
    print(f"Results saved to: {args.output_dir}")


if __name__ == "__main__":
    main()
