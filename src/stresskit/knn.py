"""k-nearest-neighbour classifier using Euclidean distance and majority voting."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger

from stresskit.exceptions import ModelNotTrainedError
from stresskit.logging import TRAINING_LEVEL
from stresskit.models import NUM_CLASSES, Sample, check_feature_count, validate_samples


class KNearestNeighbors:
    """Classify a sample by the majority label of its `k` closest training samples.

    Training only stores the data. Neighbours are ranked with a stable sort,
    so equally distant training samples keep their training order, and vote
    ties go to the lowest class index.

    Attributes:
        k (int): Number of neighbours consulted.
        num_classes (int): Number of classes labels are drawn from.
    """

    def __init__(self, k: int = 5, *, num_classes: int = NUM_CLASSES) -> None:
        """Initialize an untrained nearest-neighbour classifier.

        Args:
            k (int): Number of neighbours consulted per prediction.
            num_classes (int): Number of classes labels are drawn from.

        Raises:
            ValueError: If `k < 1` or `num_classes < 2`.
        """
        if k < 1:
            raise ValueError(f"k must be >= 1, got {k}.")
        if num_classes < 2:
            raise ValueError(f"num_classes must be >= 2, got {num_classes}.")
        self.k = k
        self.num_classes = num_classes
        self._features: np.ndarray | None = None
        self._labels: np.ndarray | None = None

    def __repr__(self) -> str:
        """Return the constructor call that reproduces this classifier's hyperparameters.

        Returns:
            str: e.g. `"KNearestNeighbors(k=5, num_classes=3)"`.
        """
        return f"{self.__class__.__name__}(k={self.k}, num_classes={self.num_classes})"

    def train(self, samples: Sequence[Sample]) -> None:
        """Store the training set.

        Args:
            samples (Sequence[Sample]): Training samples.

        Raises:
            EmptyDatasetError: If `samples` is empty.
            FeatureLengthMismatchError: If feature counts differ between samples.
            InvalidLabelError: If a label is outside `[0, num_classes)`.
        """
        validate_samples(samples, num_classes=self.num_classes)
        logger.log(TRAINING_LEVEL, "Training nearest neighbours", samples=len(samples), k=self.k)
        self._features = np.array([sample.features for sample in samples], dtype=np.float64)
        self._labels = np.array([sample.label for sample in samples], dtype=np.int64)

    def predict(self, sample: Sample) -> int:
        """Predict the class of one sample.

        Args:
            sample (Sample): The sample to classify. Its label is ignored.

        Returns:
            int: The majority class among the nearest `min(k, n_train)` neighbours.

        Raises:
            ModelNotTrainedError: If `train` has not been called.
            FeatureLengthMismatchError: If `sample` has a different feature count
                than the training set.
        """
        if self._features is None or self._labels is None:
            raise ModelNotTrainedError(self.__class__.__name__)
        check_feature_count(sample, self._features.shape[1])

        query = np.asarray(sample.features, dtype=np.float64)
        distances = np.sqrt(np.sum((self._features - query) ** 2, axis=1))
        nearest = np.argsort(distances, kind="stable")[: self.k]
        votes = np.bincount(self._labels[nearest], minlength=self.num_classes)
        return int(np.argmax(votes))
