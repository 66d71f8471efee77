"""Core data contract shared by every classifier: samples, stress levels, and dataset validation."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from stresskit.exceptions import EmptyDatasetError, FeatureLengthMismatchError, InvalidLabelError

NUM_CLASSES: Final[int] = 3  # Low, Moderate, High
NO_PREDICTION: Final[int] = -1  # Majority vote over an empty group; not a class.


class StressLevel(IntEnum):
    """Ordered perceived-stress classes used as integer labels.

    Examples:
        >>> StressLevel(2).description
        'High Perceived Stress'
        >>> StressLevel.describe(7)
        'Unknown'
    """

    LOW = 0
    MODERATE = 1
    HIGH = 2

    @property
    def description(self) -> str:
        """Return the survey text for this stress level.

        Returns:
            str: The human-readable label, e.g. `"Moderate Stress"`.
        """
        return _DESCRIPTIONS[self]

    @classmethod
    def describe(cls, label: int) -> str:
        """Return the survey text for an integer label, or `"Unknown"`.

        Args:
            label (int): A predicted or actual class label.

        Returns:
            str: The stress level description, or `"Unknown"` for labels that
                are not a stress level (including `NO_PREDICTION`).
        """
        try:
            return cls(label).description
        except ValueError:
            return "Unknown"


_DESCRIPTIONS: Final[dict[StressLevel, str]] = {
    StressLevel.LOW: "Low Stress",
    StressLevel.MODERATE: "Moderate Stress",
    StressLevel.HIGH: "High Perceived Stress",
}


class Sample(BaseModel):
    """One encoded survey response: a feature vector and its stress label.

    Samples are frozen. Tree induction shares them by reference across
    branches and only ever regroups them.

    Attributes:
        features (tuple[float, ...]): Encoded feature values in a fixed order,
            e.g. `(20.0, 0.0, 1.0, 2.745, 0.0, 15.0, 20.0)`.
        label (int): Integer class label, normally a `StressLevel` value.

    Examples:
        >>> sample = Sample(features=(20.0, 0.0, 1.0), label=2)
        >>> sample.feature_count
        3
    """

    model_config = ConfigDict(frozen=True)

    features: tuple[float, ...] = Field(
        description="Encoded feature values in a fixed, dataset-wide order.",
    )
    label: int = Field(
        ge=0,
        description="Integer class label (0 = Low, 1 = Moderate, 2 = High).",
    )

    @property
    def feature_count(self) -> int:
        """Return the number of features in this sample.

        Returns:
            int: Length of `features`.
        """
        return len(self.features)


def validate_samples(samples: Sequence[Sample], *, num_classes: int = NUM_CLASSES) -> int:
    """Check a dataset against the shared data contract.

    Args:
        samples (Sequence[Sample]): The dataset to check.
        num_classes (int): Number of classes labels must fall within.

    Returns:
        int: The common feature count of the dataset.

    Raises:
        EmptyDatasetError: If `samples` is empty.
        FeatureLengthMismatchError: If any sample's feature count differs from
            the first sample's.
        InvalidLabelError: If any label is outside `[0, num_classes)`.
    """
    if not samples:
        raise EmptyDatasetError("Dataset contains no samples.")

    feature_count = samples[0].feature_count
    for position, sample in enumerate(samples):
        if sample.feature_count != feature_count:
            raise FeatureLengthMismatchError(expected=feature_count, actual=sample.feature_count, position=position)
        if not 0 <= sample.label < num_classes:
            raise InvalidLabelError(label=sample.label, num_classes=num_classes, position=position)
    return feature_count


def check_feature_count(sample: Sample, expected: int) -> None:
    """Raise when a sample to classify does not match the trained feature count.

    Args:
        sample (Sample): The sample about to be classified.
        expected (int): Feature count the model was trained on.

    Raises:
        FeatureLengthMismatchError: If the counts differ.
    """
    if sample.feature_count != expected:
        raise FeatureLengthMismatchError(expected=expected, actual=sample.feature_count)
