"""Command-line driver: load survey data, train all classifiers, and report results."""

from __future__ import annotations

import argparse
import typing
from collections.abc import Sequence
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from stresskit.config import StressSettings
from stresskit.decision_tree import DecisionTreeClassifier
from stresskit.evaluation import StressClassifier, evaluate_classifier
from stresskit.knn import KNearestNeighbors
from stresskit.exceptions import EmptyDatasetError
from stresskit.logging import LogLevel, enable_logging
from stresskit.logistic import SoftmaxRegression
from stresskit.models import NUM_CLASSES, StressLevel
from stresskit.preprocessing import FEATURE_NAMES, load_samples
from stresskit.splitting import train_test_split


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser; every option overrides a `StressSettings` field.

    Returns:
        argparse.ArgumentParser: The configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="stresskit",
        description="Train stress-level classifiers on survey data and report their test accuracy.",
    )
    parser.add_argument("--data", type=Path, dest="data_path", help="CSV file of survey responses.")
    parser.add_argument("--train-ratio", type=float, help="Fraction of samples used for training.")
    parser.add_argument("--seed", type=int, help="Seed for shuffling and weight initialisation.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Emit log messages on stderr.")
    parser.add_argument(
        "--log-level",
        choices=typing.get_args(LogLevel.__value__),
        help="Minimum log level shown with --verbose.",
    )
    parser.add_argument("--rules", action="store_true", help="Print the decision tree as rules.")

    model_args = parser.add_argument_group("Model hyperparameters")
    model_args.add_argument("--max-depth", type=int, help="Decision tree depth limit.")
    model_args.add_argument("--min-samples-split", type=int, help="Minimum group size the tree will split.")
    model_args.add_argument("--k", type=int, dest="knn_k", help="Neighbours consulted by the nearest-neighbour model.")
    model_args.add_argument("--learning-rate", type=float, help="Softmax regression SGD step size.")
    model_args.add_argument("--epochs", type=int, help="Softmax regression passes over the training set.")
    return parser


def settings_from_args(args: argparse.Namespace) -> StressSettings:
    """Merge command-line overrides into settings read from the environment.

    Args:
        args (argparse.Namespace): Parsed command-line arguments.

    Returns:
        StressSettings: Settings with every explicitly given option applied.
    """
    overrides = {
        name: value
        for name, value in vars(args).items()
        if name in StressSettings.model_fields and value is not None
    }
    return StressSettings(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the full pipeline: load, split, train, smoke-test, and evaluate.

    Args:
        argv (Sequence[str] | None): Command-line arguments; `None` reads `sys.argv`.

    Returns:
        int: Process exit status, 0 on success and 1 when no usable data was found.

    Raises:
        SystemExit: With status 2 when an option is unknown or out of range.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValidationError as exc:
        parser.error(f"invalid settings: {exc}")

    if args.verbose:
        with enable_logging(level=settings.log_level):
            return _run(settings, print_rules=args.rules)
    return _run(settings, print_rules=args.rules)


def _run(settings: StressSettings, *, print_rules: bool) -> int:
    """Execute the pipeline with resolved settings.

    Args:
        settings (StressSettings): Resolved configuration.
        print_rules (bool): Whether to print the trained tree's rules.

    Returns:
        int: Process exit status.
    """
    print("--- Mental Health Stress Prediction ---")
    try:
        samples = load_samples(settings.data_path)
    except FileNotFoundError as exc:
        logger.error("Survey data missing", path=str(settings.data_path))
        print(f"Error: {exc}")
        return 1
    except EmptyDatasetError as exc:
        logger.error("Survey data empty", path=str(settings.data_path))
        print(f"Error: {exc}")
        return 1

    training_set, test_set = train_test_split(samples, settings.train_ratio, seed=settings.seed)
    print(f"Loaded {len(samples)} samples: {len(training_set)} for training, {len(test_set)} for testing.")
    if not training_set:
        print("Error: the training set is empty.")
        return 1

    tree = DecisionTreeClassifier(settings.max_depth, settings.min_samples_split)
    models: dict[str, StressClassifier] = {
        "Decision Tree": tree,
        "Softmax Regression": SoftmaxRegression(
            training_set[0].feature_count,
            NUM_CLASSES,
            settings.learning_rate,
            settings.epochs,
            seed=settings.seed,
        ),
        f"KNN (k={settings.knn_k})": KNearestNeighbors(settings.knn_k),
    }
    for name, model in models.items():
        model.train(training_set)
        print(f"=> {name} training complete.")

    if print_rules:
        print(f"\nDecision tree: depth {tree.depth}, {tree.leaf_count} leaves")
        for rule in tree.extract_rules(FEATURE_NAMES):
            print(f"  {rule}")

    if not test_set:
        print("\nTesting set is empty, cannot perform prediction test.")
        return 0

    student = test_set[0]
    print("\n--- Single prediction on one unseen student ---")
    print(f"  Features:     {list(student.features)}")
    print(f"  Actual label: {StressLevel.describe(student.label)}")
    for name, model in models.items():
        print(f"  {name + ' prediction:':<32}{StressLevel.describe(model.predict(student))}")

    print("\n--- Test set accuracy ---")
    for name, model in models.items():
        report = evaluate_classifier(model, test_set)
        print(f"  {name:<24}{report.accuracy:.3f}")
    return 0
