"""Shuffled train/test split of a sample list."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from stresskit.models import Sample


def train_test_split(
    samples: Sequence[Sample],
    train_ratio: float = 0.8,
    *,
    seed: int | None = None,
) -> tuple[list[Sample], list[Sample]]:
    """Shuffle samples and cut them into disjoint training and test sets.

    The input sequence is left untouched. The training set receives the first
    `int(len(samples) * train_ratio)` shuffled samples and the test set the rest.

    Args:
        samples (Sequence[Sample]): The full dataset.
        train_ratio (float): Fraction of samples for training, in `(0, 1]`.
        seed (int | None): Seed for the shuffle. `None` means non-deterministic.

    Returns:
        tuple[list[Sample], list[Sample]]: `(training_set, test_set)`.

    Raises:
        ValueError: If `train_ratio` is outside `(0, 1]`.
    """
    if not 0.0 < train_ratio <= 1.0:
        raise ValueError(f"train_ratio must be in (0, 1], got {train_ratio}.")

    order = np.random.default_rng(seed).permutation(len(samples))
    shuffled = [samples[index] for index in order]
    split_index = int(len(shuffled) * train_ratio)
    return shuffled[:split_index], shuffled[split_index:]
