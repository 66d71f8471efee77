"""Exhaustive best-split search over every feature and every observed threshold."""

from __future__ import annotations

from collections.abc import Sequence

from stresskit.decision_tree.impurity import gini_impurity
from stresskit.decision_tree.models import SplitPredicate, SplitSearchResult
from stresskit.models import NUM_CLASSES, Sample


def find_best_split(group: Sequence[Sample], *, num_classes: int = NUM_CLASSES) -> SplitSearchResult:
    """Find the split predicate with the highest information gain for a group.

    Every feature is tried with every distinct value it takes in `group` as a
    threshold. Thresholds are visited in ascending order, so among splits with
    equal gain the one found first (lowest feature index, then lowest
    threshold) wins. Candidates that leave one side empty are skipped.

    Args:
        group (Sequence[Sample]): The samples reaching the node being split.
            All samples must share one feature count.
        num_classes (int): Number of classes impurity is measured over.

    Returns:
        SplitSearchResult: The winning predicate, its gain, and the two groups
            it produces. When no candidate has positive gain the result has
            no predicate, zero gain, and empty groups.

    Examples:
        >>> group = [Sample(features=(float(x),), label=y) for x, y in [(1, 0), (2, 0), (3, 1), (4, 1)]]
        >>> result = find_best_split(group)
        >>> str(result.predicate), result.gain
        ('feature[0] <= 2.0', 0.5)
    """
    if not group:
        return SplitSearchResult.none_found()

    parent_impurity = gini_impurity(group, num_classes)
    best = SplitSearchResult.none_found()

    for feature_index in range(group[0].feature_count):
        thresholds = sorted({sample.features[feature_index] for sample in group})
        for threshold in thresholds:
            predicate = SplitPredicate(feature_index=feature_index, threshold=threshold)
            left_group, right_group = partition(group, predicate)
            if not left_group or not right_group:
                continue

            gain = parent_impurity - _weighted_impurity(left_group, right_group, num_classes)
            if gain > best.gain:
                best = SplitSearchResult(
                    predicate=predicate,
                    gain=gain,
                    left_group=left_group,
                    right_group=right_group,
                )

    return best


def partition(group: Sequence[Sample], predicate: SplitPredicate) -> tuple[list[Sample], list[Sample]]:
    """Split a group in two by a predicate, preserving sample order.

    Args:
        group (Sequence[Sample]): Samples to partition.
        predicate (SplitPredicate): The test deciding each sample's side.

    Returns:
        tuple[list[Sample], list[Sample]]: `(left_group, right_group)` holding
            the same sample objects as `group`.
    """
    left_group: list[Sample] = []
    right_group: list[Sample] = []
    for sample in group:
        if predicate.test(sample.features):
            left_group.append(sample)
        else:
            right_group.append(sample)
    return left_group, right_group


def _weighted_impurity(left_group: list[Sample], right_group: list[Sample], num_classes: int) -> float:
    """Return the size-weighted mean impurity of the two sides of a split.

    Args:
        left_group (list[Sample]): Samples on the left side; non-empty.
        right_group (list[Sample]): Samples on the right side; non-empty.
        num_classes (int): Number of classes impurity is measured over.

    Returns:
        float: `p_left * gini(left) + (1 - p_left) * gini(right)`.
    """
    left_fraction = len(left_group) / (len(left_group) + len(right_group))
    return left_fraction * gini_impurity(left_group, num_classes) + (1.0 - left_fraction) * gini_impurity(
        right_group, num_classes
    )
