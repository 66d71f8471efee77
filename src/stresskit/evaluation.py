"""Test-set evaluation shared by all stress classifiers."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, Field
from sklearn.metrics import accuracy_score, confusion_matrix

from stresskit.exceptions import EmptyDatasetError
from stresskit.models import NUM_CLASSES, Sample


class StressClassifier(Protocol):
    """Training and prediction contract shared by every classifier in stresskit."""

    def train(self, samples: Sequence[Sample]) -> None: ...

    def predict(self, sample: Sample) -> int: ...


class EvaluationReport(BaseModel):
    """Accuracy and confusion matrix of a classifier on a test set.

    Attributes:
        accuracy (float): Fraction of samples predicted correctly.
        confusion_matrix (list[list[int]]): Counts indexed
            `[actual][predicted]`, with one row and column per class.
        sample_count (int): Number of samples evaluated.

    Examples:
        >>> report = EvaluationReport(accuracy=0.5, confusion_matrix=[[1, 1], [0, 0]], sample_count=2)
        >>> report.accuracy
        0.5
    """

    accuracy: float = Field(ge=0.0, le=1.0, description="Fraction of samples predicted correctly.")
    confusion_matrix: list[list[int]] = Field(
        description="Counts indexed [actual][predicted], one row and column per class.",
    )
    sample_count: int = Field(ge=1, description="Number of samples evaluated.")


def evaluate_classifier(
    model: StressClassifier,
    samples: Sequence[Sample],
    *,
    num_classes: int = NUM_CLASSES,
) -> EvaluationReport:
    """Score a trained classifier against labelled samples.

    Predictions outside the class range (such as an empty-leaf sentinel) count
    as wrong and do not appear in the confusion matrix.

    Args:
        model (StressClassifier): A trained classifier.
        samples (Sequence[Sample]): Labelled test samples.
        num_classes (int): Number of classes; sets the confusion matrix size.

    Returns:
        EvaluationReport: Accuracy, confusion matrix, and sample count.

    Raises:
        EmptyDatasetError: If `samples` is empty.
    """
    if not samples:
        raise EmptyDatasetError("Cannot evaluate a classifier on an empty test set.")

    actual = [sample.label for sample in samples]
    predicted = [model.predict(sample) for sample in samples]
    matrix = confusion_matrix(actual, predicted, labels=list(range(num_classes)))
    return EvaluationReport(
        accuracy=float(accuracy_score(actual, predicted)),
        confusion_matrix=matrix.tolist(),
        sample_count=len(samples),
    )
