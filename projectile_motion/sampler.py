"""
Launch Parameter Sampler
========================
Normally distributed launch speed / angle for group-statistics shots,
drawn with the Box–Muller transform:

    z = sqrt(-2 ln U) · cos(2π V),   U, V ~ Uniform(0, 1)
    sample = mean + σ · z

A zero standard deviation returns the mean exactly without drawing.
"""

import math
from typing import Optional

import numpy as np


class NormalSampler:
    """
    Box–Muller normal sampler over a numpy random generator.

    Parameters
    ----------
    seed : int, optional
        Seed for ``numpy.random.default_rng``; None for fresh entropy.
    rng : numpy.random.Generator, optional
        Use an existing generator instead of seeding a new one.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def _open_uniform(self) -> float:
        # Generator.random() is on [0, 1); zero would break the log
        u = 0.0
        while u == 0.0:
            u = float(self.rng.random())
        return u

    def sample(self, mean: float, std_dev: float) -> float:
        if std_dev < 0:
            raise ValueError(f"Standard deviation must be non-negative, got {std_dev}")
        if std_dev == 0:
            return mean
        u = self._open_uniform()
        v = self._open_uniform()
        return mean + std_dev * math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)

    def sample_many(self, mean: float, std_dev: float, n: int) -> np.ndarray:
        """``n`` independent samples as an array."""
        return np.array([self.sample(mean, std_dev) for _ in range(n)])
