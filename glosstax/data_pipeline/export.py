"""
Export

Serialization of relations, relation taxonomies and scores to JSON and to
the plain-text relation listing.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from ..relation.relation import Relation
from ..relation.scoring import Score
from ..taxonomy.relation_taxonomy import RelationTaxonomy


logger = logging.getLogger(__name__)


def _types_to_dict(distribution) -> Dict[str, float]:
    if distribution is None:
        return {}
    return {concept.id: probability for concept, probability in distribution.descending()}


def relation_to_dict(relation: Relation) -> Dict:
    """JSON-ready view of a relation."""
    return {
        'signature': relation.signature,
        'pattern': relation.pattern.signature(),
        'typed': str(relation),
        'length': relation.pattern.length,
        'frequency': relation.frequency,
        'hypernym_level': relation.hypernym_level,
        'domain_types': _types_to_dict(relation.domain_types()),
        'range_types': _types_to_dict(relation.range_types()),
        'extractions': [
            {
                'domain': pair.domain.id,
                'range': pair.range.id,
                'source': getattr(pair.source, 'id', None),
                'confidence': pair.confidence,
            }
            for pair in sorted(relation.extractions, key=lambda p: (p.domain.id, p.range.id))
        ],
    }


def relations_to_dict(relations: Iterable[Relation]) -> Dict:
    return {
        'relations': [relation_to_dict(r) for r in sorted(relations, key=lambda r: r.signature)]
    }


def taxonomy_to_dict(taxonomy: RelationTaxonomy) -> Dict:
    """Nodes and strategy-labelled edges of a relation taxonomy."""
    edges = []
    for node in sorted(taxonomy, key=lambda r: r.signature):
        for edge in taxonomy.all_edges(node):
            edges.append({
                'source': node.signature,
                'target': edge.target.signature,
                'strategy': str(edge.edge_type),
            })

    return {
        'nodes': sorted(relation.signature for relation in taxonomy.nodes),
        'roots': sorted(relation.signature for relation in taxonomy.roots),
        'edges': edges,
    }


def scores_to_dict(ranked: List[Tuple[Relation, Score]]) -> Dict:
    return {
        'scores': [
            {
                'signature': relation.signature,
                'score': score.score,
                'entropy': score.entropy,
                'frequency': score.frequency,
                'length': score.length,
            }
            for relation, score in ranked
        ]
    }


def save_json(data: Dict, filepath: str):
    """Write data as indented UTF-8 JSON, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info(f"Saved {path}")


def write_relation_text(ranked: List[Tuple[Relation, Score]], filepath: str):
    """
    Write one ranked relation per line:

        TYPED RELATION \t SCORE COMPONENTS
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        for relation, score in ranked:
            f.write(f"{relation}\t{score}\n")
    logger.info(f"Saved {len(ranked)} relations to {path}")
