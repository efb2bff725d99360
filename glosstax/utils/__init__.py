"""Utility modules."""

from .probability import ProbabilityDistribution

__all__ = ['ProbabilityDistribution']
