"""Runtime configuration for the stress classification pipeline."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from stresskit.logging import LogLevel


class StressSettings(BaseSettings):
    """Dataset location, split policy, and model hyperparameters.

    Values are read from `STRESSKIT_`-prefixed environment variables and an
    optional `.env` file, e.g. `STRESSKIT_MAX_DEPTH=6`. Defaults reproduce
    the reference run: a depth-10 tree, 5 nearest neighbours, and 100 epochs
    of softmax regression at learning rate 0.01 on an 80/20 split.

    Attributes:
        data_path (Path): CSV file of survey responses.
        train_ratio (float): Fraction of samples assigned to the training set.
        seed (int | None): Seed for shuffling and weight initialisation.
        max_depth (int): Decision tree depth limit.
        min_samples_split (int): Decision tree minimum group size to split.
        knn_k (int): Number of neighbours consulted by the nearest-neighbour model.
        learning_rate (float): Softmax regression SGD step size.
        epochs (int): Softmax regression passes over the training set.
        log_level (LogLevel): Minimum level shown when logging is enabled.
    """

    model_config = SettingsConfigDict(
        env_prefix="STRESSKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_path: Path = Field(default=Path("Processed.csv"), description="CSV file of survey responses.")
    train_ratio: float = Field(default=0.8, gt=0.0, le=1.0, description="Fraction of samples used for training.")
    seed: int | None = Field(default=None, description="Seed for shuffling and weight initialisation.")
    max_depth: int = Field(default=10, ge=0, description="Decision tree depth limit.")
    min_samples_split: int = Field(default=2, ge=1, description="Minimum group size the tree will split.")
    knn_k: int = Field(default=5, ge=1, description="Neighbours consulted by the nearest-neighbour model.")
    learning_rate: float = Field(default=0.01, gt=0.0, description="Softmax regression SGD step size.")
    epochs: int = Field(default=100, ge=1, description="Softmax regression passes over the training set.")
    log_level: LogLevel = Field(default="INFO", description="Minimum level shown when logging is enabled.")
