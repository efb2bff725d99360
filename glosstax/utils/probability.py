"""
Probability Distribution

Discrete distribution over hashable items, backed by a numpy array.

In linear space the weights are non-negative and sum to 1.0; in log space
they are natural logarithms of such weights. Absent items have probability
0.0 (linear) or -inf (log).
"""

from typing import Callable, Dict, Generic, Hashable, Iterable, Iterator, List, Optional, Tuple, TypeVar

import numpy as np


T = TypeVar('T', bound=Hashable)


class ProbabilityDistribution(Generic[T]):
    """
    Discrete probability distribution.

    Space conversions and pruning modify the distribution in place and
    return it, so calls can be chained.
    """

    def __init__(self, weights: Optional[Dict[T, float]] = None, log_space: bool = False):
        """
        Args:
            weights: Item -> weight. Linear weights are taken in absolute
                value and normalized; log-space weights are kept as given.
            log_space: Whether weights are log probabilities
        """
        weights = weights or {}
        self._items: List[T] = list(weights.keys())
        values = np.array([weights[item] for item in self._items], dtype=float)
        self.log_space = log_space

        if log_space:
            self._values = values
        else:
            self._values = np.abs(values)
            self._normalize()

    @classmethod
    def from_counts(cls, items: Iterable[T]) -> 'ProbabilityDistribution[T]':
        """Frequency distribution of the items of a multiset."""
        counts: Dict[T, float] = {}
        for item in items:
            counts[item] = counts.get(item, 0.0) + 1.0
        return cls(counts)

    def _normalize(self):
        total = self._values.sum()
        if total > 0:
            self._values = self._values / total

    def _linear_values(self) -> np.ndarray:
        return np.exp(self._values) if self.log_space else self._values

    def __len__(self):
        return len(self._items)

    def __contains__(self, item):
        return item in self._items

    def __iter__(self) -> Iterator[Tuple[T, float]]:
        return iter(self.descending())

    def number_of_entries(self) -> int:
        return len(self._items)

    def is_defined_for(self, item: T) -> bool:
        return item in self._items

    def probability_of(self, item: T) -> float:
        """Weight of item (in the current space)."""
        try:
            return float(self._values[self._items.index(item)])
        except ValueError:
            return float('-inf') if self.log_space else 0.0

    def arg_max(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items[int(np.argmax(self._values))]

    def arg_min(self) -> Optional[T]:
        if not self._items:
            return None
        return self._items[int(np.argmin(self._values))]

    def descending(self) -> List[Tuple[T, float]]:
        order = np.argsort(-self._values, kind='stable')
        return [(self._items[i], float(self._values[i])) for i in order]

    def ascending(self) -> List[Tuple[T, float]]:
        order = np.argsort(self._values, kind='stable')
        return [(self._items[i], float(self._values[i])) for i in order]

    def as_dict(self) -> Dict[T, float]:
        return {item: float(value) for item, value in zip(self._items, self._values)}

    def sample(self, rng: Optional[np.random.Generator] = None) -> Optional[T]:
        """
        Draw one item according to its probability.

        Args:
            rng: numpy random Generator (a fresh default one if omitted)

        Returns:
            Sampled item, or None for an empty distribution
        """
        if not self._items:
            return None

        rng = rng if rng is not None else np.random.default_rng()
        probabilities = self._linear_values()
        probabilities = probabilities / probabilities.sum()
        return self._items[int(rng.choice(len(self._items), p=probabilities))]

    def to_log_space(self) -> 'ProbabilityDistribution[T]':
        if not self.log_space:
            with np.errstate(divide='ignore'):
                self._values = np.log(self._values)
            self.log_space = True
        return self

    def to_linear_space(self) -> 'ProbabilityDistribution[T]':
        if self.log_space:
            self._values = np.exp(self._values)
            self.log_space = False
        return self

    def entropy(self) -> float:
        """Shannon entropy in nats (zero-probability items contribute 0)."""
        probabilities = self._linear_values()
        probabilities = probabilities[probabilities > 0]
        return float(-(probabilities * np.log(probabilities)).sum())

    def prune(self, predicate: Callable[[T], bool]) -> 'ProbabilityDistribution[T]':
        """Remove the items satisfying predicate and renormalize."""
        was_log = self.log_space
        self.to_linear_space()

        keep = [i for i, item in enumerate(self._items) if not predicate(item)]
        self._items = [self._items[i] for i in keep]
        self._values = self._values[keep]
        self._normalize()

        if was_log:
            self.to_log_space()
        return self

    def prune_below(self, threshold: float) -> 'ProbabilityDistribution[T]':
        """Remove the items whose linear probability is below threshold."""
        linear = dict(zip(self._items, self._linear_values()))
        return self.prune(lambda item: linear[item] < threshold)

    def __repr__(self):
        top = ", ".join(f"{item}: {value:.3f}" for item, value in self.descending()[:5])
        return f"ProbabilityDistribution({{{top}}}{', log' if self.log_space else ''})"
