"""Opt-in loguru output for stresskit.

stresskit never configures logging on import: the package logger is disabled
in `stresskit/__init__.py` and records only reach a sink after
`enable_logging()`. Model training is reported at a dedicated TRAINING level
that sits between INFO and WARNING, so the default view shows one line per
`train()` call and nothing else.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    that enabled output is not printed twice. Add your own handlers after
    importing stresskit.
"""

from __future__ import annotations

import contextlib
import sys
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

TRAINING_LEVEL: Final[str] = "TRAINING"
TRAINING_LEVEL_NUMBER: Final[int] = 25

type LogLevel = Literal["TRACE", "DEBUG", "INFO", "TRAINING", "WARNING", "ERROR", "CRITICAL"]

type LogFormat = Literal["short", "full"]

_FORMATS: Final[dict[str, str]] = {
    "short": "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{function}</cyan> - <level>{message}</level> {extra}",
    "full": "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "  # noqa: RUF027
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> {extra}",
}


def _register_training_level() -> None:
    """Create the TRAINING level unless loguru already knows it.

    loguru cannot renumber an existing level, so a TRAINING level registered
    elsewhere with another number is kept and reported with a UserWarning.
    """
    try:
        existing = logger.level(TRAINING_LEVEL)
    except ValueError:
        logger.level(TRAINING_LEVEL, no=TRAINING_LEVEL_NUMBER, icon="🌳")
        return
    if existing.no != TRAINING_LEVEL_NUMBER:
        warnings.warn(
            f"TRAINING level already registered with numeric value {existing.no}, expected {TRAINING_LEVEL_NUMBER}",
            stacklevel=2,
        )


_register_training_level()


class LoggingHandle:
    """One stderr sink opened by `enable_logging`.

    Handles share a set of open sink IDs. Closing the last open handle turns
    the stresskit logger off again.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     tree.train(samples)
    """

    _active_ids: ClassVar[set[int]] = set()

    def __init__(self, handler_id: int) -> None:
        """Track a sink that `enable_logging` has just added.

        Args:
            handler_id (int): ID returned by `logger.add`.
        """
        self.handler_id: int | None = handler_id
        LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's sink. Calling it again does nothing."""
        if self.handler_id is None:
            return
        LoggingHandle._active_ids.discard(self.handler_id)
        with contextlib.suppress(ValueError):
            logger.remove(self.handler_id)
        self.handler_id = None
        if not LoggingHandle._active_ids:
            logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Return this handle.

        Returns:
            LoggingHandle: This handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the sink, whether or not the block raised.

        Args:
            exc_type (type[BaseException] | None): The exception type, if raised.
            exc_val (BaseException | None): The exception instance, if raised.
            exc_tb (TracebackType | None): The traceback, if raised.
        """
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Return how many handles still have an open sink.

        Returns:
            int: Number of open handles.
        """
        return len(cls._active_ids)


def enable_logging(*, level: LogLevel = TRAINING_LEVEL, log_format: LogFormat = "short") -> LoggingHandle:
    """Turn stresskit logging on and print its records to stderr.

    Args:
        level (LogLevel): Lowest level printed. "TRAINING" shows each training
            call, "INFO" adds data loading and training summaries, and "DEBUG"
            adds every split chosen while a tree grows.
        log_format (LogFormat): "short" prints time, level, and function;
            "full" adds the date, module, and line number. Both append the
            record's structured fields.

    Returns:
        LoggingHandle: Closes the sink via `disable()` or a `with` block.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(sys.stderr, level=level, filter=_from_stresskit, format=_FORMATS[log_format])
    return LoggingHandle(handler_id)


def _from_stresskit(record: Record) -> bool:
    """Accept only records emitted inside the stresskit package.

    Args:
        record (Record): The loguru record.

    Returns:
        bool: True for stresskit records.
    """
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
