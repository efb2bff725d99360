"""
Pipeline Configuration

Settings shared by the stage drivers and the command-line scripts.
"""

import json
import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

PATTERN_FILTER_NAMES = ('non_nominal_arguments', 'starts_with_modifier', 'ends_with_modifier')
STRATEGY_NAMES = ('hypernym', 'substring')


@dataclass
class PipelineConfig:
    """Configuration for the taxonomy induction pipeline."""

    batch_size: int = 100             # Items per worker batch
    max_workers: int = 4              # Thread pool size
    hypernym_level: int = 1           # Hops used to generalize argument concepts
    strict_relations: bool = False    # Raise on inconsistent pattern groups
    pattern_filters: List[str] = field(default_factory=lambda: list(PATTERN_FILTER_NAMES))
    strategies: List[str] = field(default_factory=lambda: list(STRATEGY_NAMES))
    show_progress: bool = True        # tqdm progress bars
    log_level: str = "INFO"

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {self.batch_size}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be positive, got {self.max_workers}")
        if self.hypernym_level < 0:
            raise ValueError(f"hypernym_level must be non-negative, got {self.hypernym_level}")

        unknown = set(self.pattern_filters) - set(PATTERN_FILTER_NAMES)
        if unknown:
            raise ValueError(f"Unknown pattern filters: {sorted(unknown)}")

        unknown = set(self.strategies) - set(STRATEGY_NAMES)
        if unknown:
            raise ValueError(f"Unknown generalization strategies: {sorted(unknown)}")

    @classmethod
    def from_dict(cls, data: Dict) -> 'PipelineConfig':
        """Build a config from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, filepath: str) -> 'PipelineConfig':
        """Load a config from a JSON file."""
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        with open(path, 'r', encoding='utf-8') as f:
            return cls.from_dict(json.load(f))

    def to_dict(self) -> Dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def configure_logging(level: str = "INFO"):
    """Configure root logging for scripts."""
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(level=numeric, format=LOG_FORMAT)
