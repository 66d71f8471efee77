"""Shared fixtures for building raw survey exports."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import polars as pl
import pytest

SURVEY_COLUMN_COUNT = 38

# Cells of one well-formed response, by column position.
_DEFAULT_CELLS: dict[int, str] = {
    0: "18-22",
    1: "Male",
    4: "Second Year or Equivalent",
    5: "3.00 - 3.49",
    6: "No",
    18: "Moderate Stress",
    26: "10",
    37: "12",
}


def survey_row(overrides: dict[int, str | None] | None = None) -> list[str | None]:
    """Build one raw survey row with every column filled.

    Args:
        overrides (dict[int, str | None] | None): Cells to replace, by column position.

    Returns:
        list[str | None]: `SURVEY_COLUMN_COUNT` cells.
    """
    cells: dict[int, str | None] = {**_DEFAULT_CELLS, **(overrides or {})}
    return [cells.get(position, "n/a") for position in range(SURVEY_COLUMN_COUNT)]


def survey_frame(rows: list[list[str | None]]) -> pl.DataFrame:
    """Arrange raw rows into a string DataFrame in export column order.

    Args:
        rows (list[list[str | None]]): Rows built with `survey_row`.

    Returns:
        pl.DataFrame: One `pl.String` column per survey position.
    """
    width = len(rows[0]) if rows else SURVEY_COLUMN_COUNT
    return pl.DataFrame(
        {f"q{position}": [row[position] for row in rows] for position in range(width)},
        schema={f"q{position}": pl.String for position in range(width)},
    )


def stress_rows(count: int) -> list[list[str | None]]:
    """Build rows whose stress label follows the anxiety score.

    Args:
        count (int): Number of rows.

    Returns:
        list[list[str | None]]: Rows cycling through low, moderate, and high stress.
    """
    labels = ("Low Stress", "Moderate Stress", "High Perceived Stress")
    rows = []
    for index in range(count):
        level = index % 3
        rows.append(
            survey_row({
                18: labels[level],
                26: str(4 + 7 * level + index % 2),
                37: str(3 + 6 * level),
                1: "Female" if index % 2 else "Male",
            })
        )
    return rows


@pytest.fixture
def write_survey_csv(tmp_path: Path) -> Callable[[list[list[str | None]]], Path]:
    """Return a helper that writes raw rows to a CSV file with a header.

    Args:
        tmp_path (Path): Pytest temporary directory.

    Returns:
        Callable[[list[list[str | None]]], Path]: Writes the rows and returns the file path.
    """

    def _write(rows: list[list[str | None]]) -> Path:
        csv_path = tmp_path / "Processed.csv"
        survey_frame(rows).write_csv(csv_path)
        return csv_path

    return _write
