"""
Definition Readers

Load parsed and disambiguated definitions. Two dependency formats are
understood:

CoNLL (one token per line, 1-based indices, HEAD = 0 for the root):
    INDEX \t TOKEN \t LEMMA \t POS \t POS_FINE \t _ \t HEAD \t TYPE

Single row (one sentence per line, tab-separated dependencies):
    TYPE(TOKEN_LEMMA_POS_INDEX, TOKEN_LEMMA_POS_INDEX) \t ...

Token indices are converted to 0-based positions, so that disambiguation
offsets index the same token list.

The JSONL reader expects one definition per line:
    {"id": "...", "text": "...",
     "conll": ["1\\tdog\\tdog\\tNN\\tNN\\t_\\t0\\troot", ...],
     "senses": [[start, end, "sense id", confidence], ...]}
or, instead of "conll", explicit tokens and dependencies:
    "tokens": [["Dogs", "dog", "NNS"], ...],
    "dependencies": [["nsubj", head_index, dependent_index], ...]
"""

import json
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, Iterator, List

from ..graph.tokens import Dependency, Disambiguation, Token, fix_dependencies
from .definition import ProcessedDefinition


logger = logging.getLogger(__name__)

DEPENDENCY_PATTERN = re.compile(r"([^(]+)\((.+), (.+)\)")


def parse_conll(lines: Iterable[str]) -> List[Dependency]:
    """
    Parse a CoNLL-formatted sentence.

    Args:
        lines: One token per line (blank lines and comments are skipped)

    Returns:
        Dependencies, excluding the attachment to the artificial root

    Raises:
        ValueError: If a line is malformed
    """
    rows = []
    for line in lines:
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        fields = line.split('\t')
        if len(fields) < 8:
            raise ValueError(f"Malformed CoNLL line (expected 8 fields): '{line}'")
        rows.append(fields)

    tokens: Dict[int, Token] = {}
    for fields in rows:
        index = int(fields[0])
        tokens[index] = Token(fields[1], fields[2], fields[4], index - 1)

    dependencies = []
    for fields in rows:
        head = int(fields[6])
        if head == 0:
            continue
        if head not in tokens:
            raise ValueError(f"Unknown head index {head} for token {fields[0]} ('{fields[1]}')")
        dependencies.append(Dependency(fields[7], tokens[head], tokens[int(fields[0])]))

    return dependencies


def _parse_row_token(text: str) -> Token:
    surface, lemma, pos, index = text.rsplit('_', 3)
    return Token(surface, lemma, pos, int(index))


def parse_single_row(line: str) -> List[Dependency]:
    """
    Parse a sentence in single-row format.

    Unparseable entries are logged and skipped.
    """
    dependencies = []
    for element in line.strip().split('\t'):
        if not element:
            continue

        match = DEPENDENCY_PATTERN.match(element)
        try:
            if match is None:
                raise ValueError("not a dependency")
            dependencies.append(Dependency(
                match.group(1),
                _parse_row_token(match.group(2)),
                _parse_row_token(match.group(3)),
            ))
        except ValueError as e:
            logger.error(f"Unable to parse '{element}': {e}")

    return dependencies


def _parse_senses(records: Iterable) -> List[Disambiguation]:
    senses = []
    for record in records:
        if isinstance(record, dict):
            senses.append(Disambiguation(int(record['start']), int(record['end']),
                                         record['sense'], float(record.get('confidence', 0.0))))
        else:
            start, end, sense_id = record[:3]
            confidence = record[3] if len(record) > 3 else 0.0
            senses.append(Disambiguation(int(start), int(end), sense_id, float(confidence)))
    return senses


def definition_from_record(record: Dict, fix: bool = True) -> ProcessedDefinition:
    """
    Build a ProcessedDefinition from a JSON record.

    Args:
        record: Decoded JSON object (see module docstring)
        fix: Apply fix_dependencies to the parsed dependencies

    Returns:
        ProcessedDefinition

    Raises:
        ValueError: If the record has no dependency information
    """
    if 'conll' in record:
        dependencies = parse_conll(record['conll'])
    elif 'tokens' in record and 'dependencies' in record:
        tokens = [Token(surface, lemma, pos, i) for i, (surface, lemma, pos) in enumerate(record['tokens'])]
        dependencies = [Dependency(dep_type, tokens[head], tokens[dependent])
                        for dep_type, head, dependent in record['dependencies']]
    else:
        raise ValueError(f"Definition {record.get('id')!r} has no 'conll' or 'tokens'/'dependencies' fields")

    if fix:
        dependencies = fix_dependencies(dependencies)

    text = record.get('text')
    if text is None:
        text = " ".join(t.surface_form for t in sorted({d.head for d in dependencies} | {d.dependent for d in dependencies}))

    return ProcessedDefinition(
        id=str(record['id']),
        text=text,
        dependencies=dependencies,
        senses=_parse_senses(record.get('senses', [])),
    )


class DefinitionReader:
    """Base class: an iterable source of processed definitions."""

    def __iter__(self) -> Iterator[ProcessedDefinition]:
        raise NotImplementedError

    def read_definitions(self) -> List[ProcessedDefinition]:
        return list(self)


class InMemoryDefinitionReader(DefinitionReader):
    """Reader over definitions already in memory."""

    def __init__(self, definitions: Iterable[ProcessedDefinition]):
        self.definitions = list(definitions)

    def __iter__(self) -> Iterator[ProcessedDefinition]:
        return iter(self.definitions)

    def __len__(self):
        return len(self.definitions)


class JsonlDefinitionReader(DefinitionReader):
    """
    Reader for JSON Lines files, one definition per line.

    Malformed lines are logged and skipped.
    """

    def __init__(self, filepath: str, fix: bool = True):
        self.path = Path(filepath)
        if not self.path.exists():
            raise FileNotFoundError(f"Definitions file not found: {filepath}")
        self.fix = fix

    def __iter__(self) -> Iterator[ProcessedDefinition]:
        with open(self.path, 'r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield definition_from_record(json.loads(line), fix=self.fix)
                except (ValueError, KeyError, IndexError, TypeError) as e:
                    logger.warning(f"{self.path}:{line_number}: skipping malformed definition ({e})")
