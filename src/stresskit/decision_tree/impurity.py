"""Class counting, Gini impurity, purity checks, and majority voting over sample groups."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from stresskit.models import NO_PREDICTION, NUM_CLASSES, Sample


def class_counts(group: Sequence[Sample], num_classes: int = NUM_CLASSES) -> np.ndarray:
    """Count how many samples of each class a group contains.

    Labels outside `[0, num_classes)` are not counted.

    Args:
        group (Sequence[Sample]): Samples to count.
        num_classes (int): Number of classes; sets the length of the result.

    Returns:
        np.ndarray: Integer array of shape `(num_classes,)` where entry `i` is
            the number of samples labelled `i`.
    """
    labels = np.fromiter((sample.label for sample in group), dtype=np.int64, count=len(group))
    return np.bincount(labels, minlength=num_classes)[:num_classes]


def gini_impurity(group: Sequence[Sample], num_classes: int = NUM_CLASSES) -> float:
    """Compute the Gini impurity `1 - sum(p_i ** 2)` of a group.

    Args:
        group (Sequence[Sample]): Samples to measure.
        num_classes (int): Number of classes proportions are taken over.

    Returns:
        float: 0.0 for an empty or single-class group, up to
            `1 - 1 / num_classes` for a uniform mix.

    Examples:
        >>> group = [Sample(features=(1.0,), label=label) for label in (0, 0, 1, 1)]
        >>> gini_impurity(group)
        0.5
    """
    if not group:
        return 0.0
    proportions = class_counts(group, num_classes) / len(group)
    return 1.0 - float(np.sum(proportions**2))


def majority_vote(group: Sequence[Sample], num_classes: int = NUM_CLASSES) -> int:
    """Return the most frequent class in a group.

    Ties go to the lowest class index.

    Args:
        group (Sequence[Sample]): Samples to vote over.
        num_classes (int): Number of classes to count.

    Returns:
        int: The majority class, or `NO_PREDICTION` when `group` is empty.
    """
    if not group:
        return NO_PREDICTION
    # argmax returns the first index among equal maxima.
    return int(np.argmax(class_counts(group, num_classes)))


def is_pure(group: Sequence[Sample]) -> bool:
    """Return whether every sample in a group shares one label.

    Args:
        group (Sequence[Sample]): Samples to inspect.

    Returns:
        bool: `True` for groups of size 0 or 1, or when all labels are equal.
    """
    if len(group) <= 1:
        return True
    first_label = group[0].label
    return all(sample.label == first_label for sample in group)
