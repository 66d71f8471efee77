"""stresskit: Perceived-stress classification from survey data."""

from loguru import logger

from stresskit.config import StressSettings
from stresskit.decision_tree import DecisionTreeClassifier
from stresskit.evaluation import EvaluationReport, evaluate_classifier
from stresskit.knn import KNearestNeighbors
from stresskit.logging import PACKAGE_NAME, enable_logging
from stresskit.logistic import SoftmaxRegression
from stresskit.models import Sample, StressLevel
from stresskit.preprocessing import load_samples
from stresskit.splitting import train_test_split

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the stresskit package by default

__all__ = [
    "DecisionTreeClassifier",
    "EvaluationReport",
    "KNearestNeighbors",
    "Sample",
    "SoftmaxRegression",
    "StressLevel",
    "StressSettings",
    "enable_logging",
    "evaluate_classifier",
    "load_samples",
    "train_test_split",
]
