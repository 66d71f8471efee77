"""Tests for loguru logging in stresskit.

This module verifies that logging is disabled by default, that structured
records are produced while training and loading once enabled, and that the
`enable_logging` handle lifecycle behaves correctly.
"""

from __future__ import annotations

import contextlib
import io
import sys
import warnings
from collections.abc import Generator
from pathlib import Path
from typing import NamedTuple
from unittest import mock

import loguru
import pytest
from loguru import logger
from pytest_check import check

from stresskit.decision_tree import DecisionTreeClassifier
from stresskit.logging import (
    PACKAGE_NAME,
    TRAINING_LEVEL,
    TRAINING_LEVEL_NUMBER,
    LoggingHandle,
    _register_training_level,
    enable_logging,
)
from stresskit.models import Sample
from stresskit.preprocessing import load_samples


class LogSink(NamedTuple):
    """Log sink with records list and handler ID for cleanup.

    Attributes:
        records (list[loguru.Record]): List that accumulates log record dictionaries.
        handler_id (int): Logger handler ID for cleanup.
    """

    records: list[loguru.Record]
    handler_id: int


@contextlib.contextmanager
def capturing_sink(*, enable_stresskit: bool = True) -> Generator[list[loguru.Record]]:
    """Context manager that adds a loguru sink and yields the captured records list.

    Pass `enable_stresskit=False` to observe the logger state left by the code
    under test instead of forcing the package on.

    Args:
        enable_stresskit (bool): When True (default), enables the stresskit
            logger for the duration of the block and disables it on exit.

    Yields:
        Generator[list[loguru.Record]]: Records appended in arrival order.
    """
    captured_records: list[loguru.Record] = []

    def _sink(message: loguru.Message) -> None:
        """Append the raw record dict to the accumulated list.

        Args:
            message (loguru.Message): Loguru message object.
        """
        captured_records.append(message.record)

    handler_id = logger.add(_sink, level=0)
    if enable_stresskit:
        logger.enable(PACKAGE_NAME)
    try:
        yield captured_records
    finally:
        if enable_stresskit:
            logger.disable(PACKAGE_NAME)
        logger.remove(handler_id)


@pytest.fixture(autouse=True)
def restore_active_ids() -> Generator[None]:
    """Save and restore LoggingHandle._active_ids around each test.

    Yields:
        None: Nothing; used only for setup/teardown side effects.
    """
    saved_ids: set[int] = set(LoggingHandle._active_ids)

    yield

    added_ids = LoggingHandle._active_ids - saved_ids
    for handler_id in added_ids:
        with contextlib.suppress(ValueError):
            logger.remove(handler_id)
    LoggingHandle._active_ids.clear()
    LoggingHandle._active_ids.update(saved_ids)


@pytest.fixture
def log_sink() -> Generator[LogSink]:
    """Create a sink that captures every stresskit log record.

    Yields:
        Generator[LogSink]: Named tuple with records list and handler_id for cleanup.
    """
    captured_records: list[loguru.Record] = []

    def sink(message: loguru.Message) -> None:
        """Capture record dict from each log message.

        Args:
            message (loguru.Message): Log message with record attribute containing log details.
        """
        captured_records.append(message.record)

    handler_id = logger.add(sink, level=0)
    logger.enable(PACKAGE_NAME)

    yield LogSink(records=captured_records, handler_id=handler_id)

    logger.disable(PACKAGE_NAME)
    logger.remove(handler_id)


@pytest.fixture
def separable_samples() -> list[Sample]:
    """Two-feature samples that need two splits to separate.

    Returns:
        list[Sample]: Six samples across three classes.
    """
    return [
        Sample(features=(1.0, 5.0), label=0),
        Sample(features=(2.0, 6.0), label=0),
        Sample(features=(3.0, 1.0), label=1),
        Sample(features=(4.0, 2.0), label=1),
        Sample(features=(5.0, 9.0), label=2),
        Sample(features=(6.0, 8.0), label=2),
    ]


def _stresskit_records(records: list[loguru.Record]) -> list[loguru.Record]:
    """Keep only records emitted from inside the stresskit package.

    Args:
        records (list[loguru.Record]): Captured records.

    Returns:
        list[loguru.Record]: The stresskit records, in order.
    """
    return [record for record in records if (record["name"] or "").startswith(PACKAGE_NAME)]


def test_logging_disabled_by_default(separable_samples: list[Sample]) -> None:
    """Verify no stresskit records are captured while the package logger is disabled.

    Given: The stresskit logger disabled, a sink capturing all output
    When: A decision tree is trained
    Then: No stresskit records are captured
    """
    # Arrange - protect against test ordering issues
    logger.disable(PACKAGE_NAME)
    tree = DecisionTreeClassifier()

    # Act
    with capturing_sink(enable_stresskit=False) as captured_records:
        tree.train(separable_samples)

    # Assert
    assert _stresskit_records(captured_records) == []


class TestTrainingLogging:
    """Tests for records emitted while a decision tree is trained."""

    def test_training_entry_logged_at_training_level(self, log_sink: LogSink, separable_samples: list[Sample]) -> None:
        """Verify `train` emits one TRAINING record with the dataset shape and hyperparameters.

        Args:
            log_sink (LogSink): Fixture providing log sink for capturing records.
            separable_samples (list[Sample]): Training samples.
        """
        # Arrange
        tree = DecisionTreeClassifier(max_depth=4, min_samples_split=2)

        # Act
        tree.train(separable_samples)

        # Assert
        training_records = [r for r in log_sink.records if r["level"].name == TRAINING_LEVEL]
        with check:
            assert len(training_records) == 1
        extra = training_records[0]["extra"]
        with check:
            assert extra["samples"] == 6
        with check:
            assert extra["features"] == 2
        with check:
            assert extra["max_depth"] == 4

    def test_training_summary_logged_at_info(self, log_sink: LogSink, separable_samples: list[Sample]) -> None:
        """Verify a completed training run reports the resulting tree shape.

        Args:
            log_sink (LogSink): Fixture providing log sink for capturing records.
            separable_samples (list[Sample]): Training samples.
        """
        # Arrange
        tree = DecisionTreeClassifier()

        # Act
        tree.train(separable_samples)

        # Assert
        summaries = [r for r in log_sink.records if r["message"] == "Decision tree trained"]
        with check:
            assert len(summaries) == 1
        with check:
            assert summaries[0]["level"].name == "INFO"
        with check:
            assert summaries[0]["extra"]["leaves"] == tree.leaf_count
        with check:
            assert summaries[0]["extra"]["depth"] == tree.depth

    def test_each_split_logged_at_debug(self, log_sink: LogSink, separable_samples: list[Sample]) -> None:
        """Verify one DEBUG record is emitted per decision node.

        Args:
            log_sink (LogSink): Fixture providing log sink for capturing records.
            separable_samples (list[Sample]): Training samples.
        """
        # Arrange
        tree = DecisionTreeClassifier()

        # Act
        tree.train(separable_samples)

        # Assert
        split_records = [r for r in log_sink.records if r["message"] == "Split selected"]
        decision_count = tree.node_count - tree.leaf_count
        with check:
            assert len(split_records) == decision_count
        with check:
            assert all(r["level"].name == "DEBUG" for r in split_records)
        with check:
            assert all(r["extra"]["gain"] > 0 for r in split_records)


class TestLoaderLogging:
    """Tests for records emitted while loading survey data."""

    def test_load_logs_info_with_path_and_count(self, log_sink: LogSink, tmp_path: Path) -> None:
        """Verify loading a CSV with no usable records still reports the load at INFO.

        Args:
            log_sink (LogSink): Fixture providing log sink for capturing records.
            tmp_path (Path): Pytest temporary directory.
        """
        # Arrange - header only
        csv_path = tmp_path / "survey.csv"
        csv_path.write_text(",".join(f"c{i}" for i in range(38)) + "\n", encoding="utf-8")

        # Act
        samples = load_samples(csv_path)

        # Assert
        info_records = [r for r in _stresskit_records(log_sink.records) if r["level"].name == "INFO"]
        with check:
            assert samples == []
        with check:
            assert len(info_records) >= 1
        with check:
            assert any(r["extra"].get("samples") == 0 for r in info_records)


class TestTrainingLevelRegistration:
    """Tests for TRAINING custom log level registration edge cases."""

    def test_training_level_registered_with_correct_number(self) -> None:
        """Verify the TRAINING level is registered with the expected numeric value at import time."""
        # Act
        level = logger.level(TRAINING_LEVEL)

        # Assert
        assert level.no == TRAINING_LEVEL_NUMBER

    def test_duplicate_level_wrong_number_warns_not_raises(self) -> None:
        """Verify a numeric mismatch on TRAINING registration issues a warning, not an exception."""
        # Arrange - a level object whose .no disagrees with the expected value
        fake_level = mock.MagicMock(spec=["no"])
        fake_level.no = TRAINING_LEVEL_NUMBER + 1

        with (
            mock.patch("stresskit.logging.logger.level", return_value=fake_level),
            warnings.catch_warnings(record=True) as caught,
        ):
            warnings.simplefilter("always")
            # Act
            _register_training_level()

        # Assert
        with check:
            assert len(caught) == 1
        with check:
            assert issubclass(caught[0].category, UserWarning)
        with check:
            assert str(TRAINING_LEVEL_NUMBER) in str(caught[0].message)


class TestEnableLoggingLifecycle:
    """Tests for enable_logging handle creation, disable, and context manager."""

    def test_enable_logging_returns_logging_handle(self) -> None:
        """Verify enable_logging returns a LoggingHandle holding a handler ID."""
        # Act
        handle = enable_logging()

        # Assert
        with check:
            assert isinstance(handle, LoggingHandle)
        with check:
            assert handle.handler_id is not None

        handle.disable()

    def test_disable_double_call_safe(self) -> None:
        """Verify calling disable twice neither raises nor double-counts."""
        # Arrange
        handle = enable_logging()

        # Act
        handle.disable()
        handle.disable()

        # Assert
        with check:
            assert handle.handler_id is None
        with check:
            assert handle.handler_id not in LoggingHandle._active_ids

    def test_context_manager_re_disables_on_exit(self, separable_samples: list[Sample]) -> None:
        """Verify leaving the last handle's context silences stresskit again."""
        # Arrange
        logger.disable(PACKAGE_NAME)
        starting_count = LoggingHandle.get_active_handle_count()

        # Act
        with enable_logging():
            inside_count = LoggingHandle.get_active_handle_count()

        # Assert - nothing reaches a raw sink after exit when no other handle is active
        with check:
            assert inside_count == starting_count + 1
        with check:
            assert LoggingHandle.get_active_handle_count() == starting_count
        if starting_count == 0:
            with capturing_sink(enable_stresskit=False) as captured_records:
                DecisionTreeClassifier().train(separable_samples)
            with check:
                assert _stresskit_records(captured_records) == []

    def test_context_manager_exit_cleans_up_on_exception(self) -> None:
        """Verify the handler is released when the block raises."""
        # Arrange
        starting_count = LoggingHandle.get_active_handle_count()

        # Act
        with pytest.raises(RuntimeError), enable_logging():
            raise RuntimeError("boom")

        # Assert
        assert LoggingHandle.get_active_handle_count() == starting_count

    def test_independent_handles(self) -> None:
        """Verify two handles can be disabled independently."""
        # Arrange
        starting_count = LoggingHandle.get_active_handle_count()
        first = enable_logging()
        second = enable_logging(level="DEBUG")

        # Act
        first.disable()

        # Assert
        with check:
            assert LoggingHandle.get_active_handle_count() == starting_count + 1
        with check:
            assert second.handler_id in LoggingHandle._active_ids

        second.disable()


class TestEnableLoggingFiltering:
    """Tests for level filtering on the stderr handler."""

    @pytest.mark.parametrize(
        ("level", "present_levels", "absent_levels"),
        [
            ("TRAINING", ["TRAINING"], ["INFO", "DEBUG"]),
            ("INFO", ["TRAINING", "INFO"], ["DEBUG"]),
            ("DEBUG", ["TRAINING", "INFO", "DEBUG"], []),
        ],
        ids=["default-training-level", "info-level", "debug-level-captures-all"],
    )
    def test_enable_logging_level_filtering(
        self,
        monkeypatch: pytest.MonkeyPatch,
        separable_samples: list[Sample],
        level: str,
        present_levels: list[str],
        absent_levels: list[str],
    ) -> None:
        """Verify the handler renders only records at or above the configured level.

        Args:
            monkeypatch (pytest.MonkeyPatch): Pytest fixture for patching sys.stderr safely.
            separable_samples (list[Sample]): Training samples.
            level (str): The log level passed to enable_logging.
            present_levels (list[str]): Level names that must appear in stderr.
            absent_levels (list[str]): Level names that must not appear in stderr.
        """
        # Arrange
        captured_stderr = io.StringIO()
        monkeypatch.setattr(sys, "stderr", captured_stderr)
        handle = enable_logging(level=level)  # type: ignore[arg-type]

        # Act
        DecisionTreeClassifier().train(separable_samples)
        handle.disable()
        stderr_output = captured_stderr.getvalue()

        # Assert
        for expected_level in present_levels:
            with check:
                assert expected_level in stderr_output
        for excluded_level in absent_levels:
            with check:
                assert f"| {excluded_level}" not in stderr_output

    @pytest.mark.parametrize(
        ("log_format", "expected_present", "expected_absent"),
        [
            ("short", ["train"], ["stresskit.decision_tree.classifier"]),
            ("full", ["stresskit.decision_tree.classifier", "train"], []),
        ],
        ids=["short-format", "full-format"],
    )
    def test_enable_logging_format(
        self,
        monkeypatch: pytest.MonkeyPatch,
        separable_samples: list[Sample],
        log_format: str,
        expected_present: list[str],
        expected_absent: list[str],
    ) -> None:
        """Verify log_format controls which source-location tokens are rendered.

        Args:
            monkeypatch (pytest.MonkeyPatch): Pytest fixture for patching sys.stderr safely.
            separable_samples (list[Sample]): Training samples.
            log_format (str): The format passed to enable_logging.
            expected_present (list[str]): Substrings that must appear in stderr.
            expected_absent (list[str]): Substrings that must not appear in stderr.
        """
        # Arrange
        captured_stderr = io.StringIO()
        monkeypatch.setattr(sys, "stderr", captured_stderr)
        handle = enable_logging(log_format=log_format)  # type: ignore[arg-type]

        # Act
        DecisionTreeClassifier().train(separable_samples)
        handle.disable()
        stderr_output = captured_stderr.getvalue()

        # Assert
        for token in expected_present:
            with check:
                assert token in stderr_output
        for token in expected_absent:
            with check:
                assert token not in stderr_output
