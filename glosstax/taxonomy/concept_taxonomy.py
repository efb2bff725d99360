"""
Concept Taxonomies

Read-only is-a hierarchies over concepts, queried when generalizing relation
arguments and when comparing relations by hypernymy.

Two backends answer the same queries, ancestor_chain(concept, level) and
is_superclass(candidate, concept):
- ConceptTaxonomy: loaded from a tab-separated edge file
      SUBCLASS_ID \t SUPERCLASS_ID \t EDGE_TYPE
  where EDGE_TYPE is an integer (lower = more reliable)
- WordNetConceptTaxonomy: Princeton WordNet through nltk, with synset names
  ("dog.n.01") as concept identifiers
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import nltk
from nltk.corpus import wordnet as wn
from nltk.corpus.reader.wordnet import WordNetError

from ..relation.concept import Concept
from .taxonomy import Taxonomy


logger = logging.getLogger(__name__)


class ConceptTaxonomy(Taxonomy[Concept, int]):
    """Concept hierarchy with integer reliability edge types."""

    @classmethod
    def from_edges(cls, edges: Iterable[Tuple[str, str, int]]) -> 'ConceptTaxonomy':
        """
        Build a taxonomy from (subclass id, superclass id, edge type) triples.
        """
        edge_map: Dict[Concept, Dict[Concept, int]] = {}
        for subclass, superclass, edge_type in edges:
            edge_map.setdefault(Concept(subclass), {})[Concept(superclass)] = int(edge_type)
        return cls(edge_map)

    @classmethod
    def from_file(cls, filepath: str) -> 'ConceptTaxonomy':
        """
        Load a taxonomy from a tab-separated edge file.

        Args:
            filepath: Path to the edge file

        Returns:
            Loaded ConceptTaxonomy

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a line cannot be parsed
        """
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Concept taxonomy not found: {filepath}")

        edges = []
        with open(path, 'r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith('#'):
                    continue

                fields = line.split('\t')
                if len(fields) != 3:
                    raise ValueError(f"{filepath}:{line_number}: expected 3 fields, got {len(fields)}")
                try:
                    edges.append((fields[0], fields[1], int(fields[2])))
                except ValueError:
                    raise ValueError(f"{filepath}:{line_number}: invalid edge type '{fields[2]}'")

        taxonomy = cls.from_edges(edges)
        logger.info(f"Loaded concept taxonomy from {filepath}: {taxonomy.number_of_edges()} edges")
        return taxonomy

    def is_superclass(self, candidate: Concept, concept: Concept) -> bool:
        """Check whether candidate is a (transitive) superclass of concept."""
        return self.has_superclass(concept, candidate)


def ensure_wordnet_downloaded():
    """Ensure WordNet data is downloaded."""
    try:
        wn.synsets('dog')
    except LookupError:
        logger.info("Downloading WordNet data...")
        nltk.download('wordnet', quiet=True)
        nltk.download('omw-1.4', quiet=True)
        logger.info("WordNet downloaded successfully")


class WordNetConceptTaxonomy:
    """
    Concept hierarchy backed by WordNet hypernymy.

    Instance hypernyms count as superclasses too, so named entities
    (e.g., "paris.n.01") generalize to their class ("national_capital.n.01").
    """

    def __init__(self, download: bool = True):
        if download:
            ensure_wordnet_downloaded()

    @staticmethod
    def _synset(concept: Concept):
        try:
            return wn.synset(concept.id)
        except (WordNetError, ValueError):
            logger.debug(f"No WordNet synset for concept {concept.id}")
            return None

    @staticmethod
    def _superclasses(synset) -> List:
        return synset.hypernyms() + synset.instance_hypernyms()

    @staticmethod
    def to_concept(synset) -> Concept:
        return Concept(synset.name(), [lemma.name().replace('_', ' ') for lemma in synset.lemmas()])

    def primary_superclass(self, concept: Concept) -> Optional[Concept]:
        synset = self._synset(concept)
        if synset is None:
            return None

        superclasses = self._superclasses(synset)
        return self.to_concept(superclasses[0]) if superclasses else None

    def ancestor_chain(self, concept: Concept, max_level: Optional[int] = None) -> List[Concept]:
        """Primary-hypernym chain of concept, closest first."""
        chain = []
        current = concept

        while max_level is None or len(chain) < max_level:
            superclass = self.primary_superclass(current)
            if superclass is None or superclass in chain:
                break
            chain.append(superclass)
            current = superclass

        return chain

    def is_superclass(self, candidate: Concept, concept: Concept) -> bool:
        """Check whether candidate is a (transitive) hypernym of concept."""
        synset = self._synset(concept)
        target = self._synset(candidate)
        if synset is None or target is None:
            return False

        return target in synset.closure(self._superclasses)

    def depth_of(self, concept: Concept) -> int:
        if self._synset(concept) is None:
            return -1
        return len(self.ancestor_chain(concept))
