"""Multinomial logistic (softmax) regression trained by per-sample gradient descent."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from loguru import logger

from stresskit.exceptions import ModelNotTrainedError
from stresskit.logging import TRAINING_LEVEL
from stresskit.models import NUM_CLASSES, Sample, check_feature_count, validate_samples

_INITIAL_WEIGHT_SCALE: float = 1.0 / 50.0  # Initial weights are uniform in [-0.01, 0.01).


class SoftmaxRegression:
    """Linear classifier producing a probability for each class via softmax.

    Weights start uniformly in `[-0.01, 0.01)` and biases at zero. Training
    visits the samples in order once per epoch and applies the cross-entropy
    gradient `p - onehot(label)` after each sample.

    Attributes:
        num_features (int): Length of the feature vectors the model accepts.
        num_classes (int): Number of output classes.
        learning_rate (float): SGD step size.
        epochs (int): Passes over the training set.
        weights (np.ndarray): Weight matrix of shape `(num_features, num_classes)`.
        biases (np.ndarray): Bias vector of shape `(num_classes,)`.
    """

    def __init__(
        self,
        num_features: int,
        num_classes: int = NUM_CLASSES,
        learning_rate: float = 0.01,
        epochs: int = 100,
        *,
        seed: int | None = None,
    ) -> None:
        """Initialize an untrained softmax regression model.

        Args:
            num_features (int): Length of the feature vectors.
            num_classes (int): Number of output classes.
            learning_rate (float): SGD step size.
            epochs (int): Passes over the training set.
            seed (int | None): Seed for weight initialisation.

        Raises:
            ValueError: If any size or rate is not positive.
        """
        if num_features < 1:
            raise ValueError(f"num_features must be >= 1, got {num_features}.")
        if num_classes < 2:
            raise ValueError(f"num_classes must be >= 2, got {num_classes}.")
        if learning_rate <= 0:
            raise ValueError(f"learning_rate must be > 0, got {learning_rate}.")
        if epochs < 1:
            raise ValueError(f"epochs must be >= 1, got {epochs}.")
        self.num_features = num_features
        self.num_classes = num_classes
        self.learning_rate = learning_rate
        self.epochs = epochs

        rng = np.random.default_rng(seed)
        self.weights = (rng.random((num_features, num_classes)) - 0.5) * _INITIAL_WEIGHT_SCALE
        self.biases = np.zeros(num_classes, dtype=np.float64)
        self._trained = False

    def __repr__(self) -> str:
        """Return the constructor call that reproduces this model's hyperparameters.

        Returns:
            str: e.g. `"SoftmaxRegression(num_features=7, num_classes=3, learning_rate=0.01, epochs=100)"`.
        """
        return (
            f"{self.__class__.__name__}(num_features={self.num_features}, num_classes={self.num_classes}, "
            f"learning_rate={self.learning_rate}, epochs={self.epochs})"
        )

    def train(self, samples: Sequence[Sample]) -> None:
        """Fit weights and biases with stochastic gradient descent.

        Training continues from the current parameters, so calling `train`
        again runs further epochs rather than starting over.

        Args:
            samples (Sequence[Sample]): Training samples with `num_features` features.

        Raises:
            EmptyDatasetError: If `samples` is empty.
            FeatureLengthMismatchError: If any sample has the wrong feature count.
            InvalidLabelError: If a label is outside `[0, num_classes)`.
        """
        validate_samples(samples, num_classes=self.num_classes)
        check_feature_count(samples[0], self.num_features)
        logger.log(
            TRAINING_LEVEL,
            "Training softmax regression",
            samples=len(samples),
            epochs=self.epochs,
            learning_rate=self.learning_rate,
        )

        features = np.array([sample.features for sample in samples], dtype=np.float64)
        targets = np.eye(self.num_classes)[[sample.label for sample in samples]]
        for _ in range(self.epochs):
            for row, target in zip(features, targets, strict=True):
                error = _softmax(row @ self.weights + self.biases) - target
                self.biases -= self.learning_rate * error
                self.weights -= self.learning_rate * np.outer(row, error)

        self._trained = True
        logger.info("Softmax regression trained", epochs=self.epochs)

    def predict_proba(self, sample: Sample) -> np.ndarray:
        """Return the class probabilities for one sample.

        Args:
            sample (Sample): The sample to score. Its label is ignored.

        Returns:
            np.ndarray: Probabilities of shape `(num_classes,)` summing to 1.

        Raises:
            ModelNotTrainedError: If `train` has not been called.
            FeatureLengthMismatchError: If `sample` has the wrong feature count.
        """
        if not self._trained:
            raise ModelNotTrainedError(self.__class__.__name__)
        check_feature_count(sample, self.num_features)
        return _softmax(np.asarray(sample.features, dtype=np.float64) @ self.weights + self.biases)

    def predict(self, sample: Sample) -> int:
        """Predict the most probable class for one sample.

        Args:
            sample (Sample): The sample to classify.

        Returns:
            int: The class with the highest probability; ties go to the lowest index.
        """
        return int(np.argmax(self.predict_proba(sample)))


def _softmax(scores: np.ndarray) -> np.ndarray:
    """Convert raw scores to probabilities, shifting by the maximum for stability.

    Args:
        scores (np.ndarray): 1-D array of raw class scores.

    Returns:
        np.ndarray: Probabilities of the same shape, summing to 1.
    """
    exponentials = np.exp(scores - np.max(scores))
    return exponentials / np.sum(exponentials)
