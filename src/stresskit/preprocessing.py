"""Survey record encoding and CSV loading into `Sample` objects."""

from __future__ import annotations

from pathlib import Path
from typing import Final

import polars as pl
from loguru import logger

from stresskit.exceptions import EmptyDatasetError, MalformedRecordError
from stresskit.models import Sample, StressLevel

# ---------------------------------------------------------------------------
# Record layout
# ---------------------------------------------------------------------------

FEATURE_NAMES: Final[tuple[str, ...]] = (
    "age",
    "gender",
    "academic_year",
    "cgpa",
    "scholarship",
    "anxiety_value",
    "depression_value",
)

# 0-based column positions in the survey export.
_AGE_COLUMN: Final[int] = 0
_GENDER_COLUMN: Final[int] = 1
_ACADEMIC_YEAR_COLUMN: Final[int] = 4
_CGPA_COLUMN: Final[int] = 5
_SCHOLARSHIP_COLUMN: Final[int] = 6
_STRESS_LABEL_COLUMN: Final[int] = 18
_ANXIETY_COLUMN: Final[int] = 26
_DEPRESSION_COLUMN: Final[int] = 37

# Representative values for open-ended ranges.
_AGE_BELOW_18: Final[float] = 17.0
_AGE_ABOVE_30: Final[float] = 31.0
_CGPA_BELOW_250: Final[float] = 2.49
_CGPA_OTHER: Final[float] = 3.0
_UNPARSEABLE_RANGE: Final[float] = 0.0

_ACADEMIC_YEARS: Final[tuple[str, ...]] = ("First Year", "Second Year", "Third Year", "Fourth Year")

# ---------------------------------------------------------------------------
# Public interface -- Field encoders
# ---------------------------------------------------------------------------


def encode_age(raw: str | None) -> float:
    """Encode an age range such as `"18-22"` as its midpoint.

    `"Below 18"` encodes to 17.0 and `"Above 30"` to 31.0. Unparseable values
    are logged and encoded as 0.0.

    Args:
        raw (str | None): The survey cell.

    Returns:
        float: The representative age.
    """
    text = _clean(raw)
    if text.casefold() == "below 18":
        return _AGE_BELOW_18
    if text.casefold() == "above 30":
        return _AGE_ABOVE_30
    try:
        return _range_midpoint(text)
    except ValueError:
        logger.warning("Could not parse age; using default", raw_value=raw, default=_UNPARSEABLE_RANGE)
        return _UNPARSEABLE_RANGE


def encode_gender(raw: str | None) -> float:
    """Encode gender: Female 0.0, Male 1.0, anything else (e.g. "Prefer not to say") 2.0.

    Args:
        raw (str | None): The survey cell.

    Returns:
        float: The gender code.
    """
    text = _clean(raw).casefold()
    if text == "female":
        return 0.0
    if text == "male":
        return 1.0
    return 2.0


def encode_academic_year(raw: str | None) -> float:
    """Encode academic year: First 0.0, Second 1.0, Third 2.0, Fourth 3.0, other 4.0.

    Args:
        raw (str | None): The survey cell, e.g. `"Second Year or Equivalent"`.

    Returns:
        float: The academic year code.
    """
    text = _clean(raw)
    for code, year in enumerate(_ACADEMIC_YEARS):
        if year in text:
            return float(code)
    return float(len(_ACADEMIC_YEARS))


def encode_cgpa(raw: str | None) -> float:
    """Encode a CGPA range such as `"2.50 - 2.99"` as its midpoint.

    `"Below 2.50"` encodes to 2.49 and `"Other"` to 3.0. Unparseable values
    are logged and encoded as 0.0.

    Args:
        raw (str | None): The survey cell.

    Returns:
        float: The representative CGPA.
    """
    text = _clean(raw)
    if text.casefold() == "below 2.50":
        return _CGPA_BELOW_250
    if text.casefold() == "other":
        return _CGPA_OTHER
    try:
        return _range_midpoint(text)
    except ValueError:
        logger.warning("Could not parse CGPA; using default", raw_value=raw, default=_UNPARSEABLE_RANGE)
        return _UNPARSEABLE_RANGE


def encode_scholarship(raw: str | None) -> float:
    """Encode waiver/scholarship status: Yes 1.0, anything else 0.0.

    Args:
        raw (str | None): The survey cell.

    Returns:
        float: 1.0 or 0.0.
    """
    return 1.0 if _clean(raw).casefold() == "yes" else 0.0


def encode_stress_label(raw: str | None) -> int:
    """Encode the stress label text as a `StressLevel` value.

    Args:
        raw (str | None): The survey cell, e.g. `"High Perceived Stress"`.

    Returns:
        int: 2 for high, 1 for moderate, 0 for anything else (low).
    """
    text = _clean(raw).casefold()
    if text == StressLevel.HIGH.description.casefold():
        return int(StressLevel.HIGH)
    if text == StressLevel.MODERATE.description.casefold():
        return int(StressLevel.MODERATE)
    return int(StressLevel.LOW)


def parse_score(raw: str | None, *, field: str) -> float:
    """Parse a numeric questionnaire score.

    Args:
        raw (str | None): The survey cell.
        field (str): Field name for error reporting.

    Returns:
        float: The parsed score.

    Raises:
        MalformedRecordError: If the cell is missing or not a number.
    """
    try:
        return float(_clean(raw))
    except ValueError as exc:
        raise MalformedRecordError(field=field, raw_value=raw) from exc


# ---------------------------------------------------------------------------
# Public interface -- Loading
# ---------------------------------------------------------------------------


def encode_record(row: tuple[str | None, ...]) -> Sample:
    """Encode one survey row into a `Sample`.

    Args:
        row (tuple[str | None, ...]): Raw cells of one CSV row, by position.

    Returns:
        Sample: Features in `FEATURE_NAMES` order and the stress label.

    Raises:
        MalformedRecordError: If the row is too short or a score is not numeric.
    """
    if len(row) <= _DEPRESSION_COLUMN:
        raise MalformedRecordError(field="record", raw_value=f"{len(row)} columns")
    features = (
        encode_age(row[_AGE_COLUMN]),
        encode_gender(row[_GENDER_COLUMN]),
        encode_academic_year(row[_ACADEMIC_YEAR_COLUMN]),
        encode_cgpa(row[_CGPA_COLUMN]),
        encode_scholarship(row[_SCHOLARSHIP_COLUMN]),
        parse_score(row[_ANXIETY_COLUMN], field="anxiety_value"),
        parse_score(row[_DEPRESSION_COLUMN], field="depression_value"),
    )
    return Sample(features=features, label=encode_stress_label(row[_STRESS_LABEL_COLUMN]))


def samples_from_frame(df: pl.DataFrame) -> list[Sample]:
    """Encode every row of a raw survey DataFrame, skipping malformed rows.

    Args:
        df (pl.DataFrame): Survey responses with columns in export order.

    Returns:
        list[Sample]: One sample per well-formed row, in row order.
    """
    samples: list[Sample] = []
    for row_number, row in enumerate(df.iter_rows()):
        try:
            samples.append(encode_record(row))
        except MalformedRecordError as exc:
            logger.warning("Skipping malformed record", row=row_number, field=exc.field, raw_value=exc.raw_value)
    return samples


def load_samples(path: str | Path) -> list[Sample]:
    """Load survey responses from a CSV export.

    The header row is skipped and every column is read as text before encoding.

    Args:
        path (str | Path): Location of the CSV file.

    Returns:
        list[Sample]: The encoded samples.

    Raises:
        FileNotFoundError: If `path` does not exist.
        EmptyDatasetError: If the file holds no data at all, not even a header.
    """
    csv_path = Path(path)
    if not csv_path.is_file():
        raise FileNotFoundError(f"Survey data not found: {csv_path}")

    try:
        df = pl.read_csv(csv_path, has_header=True, infer_schema=False, truncate_ragged_lines=True)
    except pl.exceptions.NoDataError as exc:
        logger.warning("Survey data file is empty", path=str(csv_path))
        raise EmptyDatasetError(f"Survey data file is empty: {csv_path}") from exc
    samples = samples_from_frame(df)
    logger.info("Survey data loaded", path=str(csv_path), rows=df.height, samples=len(samples))
    return samples


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _clean(raw: str | None) -> str:
    """Strip quotes and surrounding whitespace from a cell; `None` becomes `""`.

    Args:
        raw (str | None): The raw cell.

    Returns:
        str: The cleaned text.
    """
    if raw is None:
        return ""
    return raw.replace('"', "").strip()


def _range_midpoint(text: str) -> float:
    """Return the midpoint of a `"low-high"` range.

    Args:
        text (str): A cleaned range such as `"18-22"` or `"3.00 - 3.49"`.

    Returns:
        float: `(low + high) / 2`.

    Raises:
        ValueError: If `text` does not hold two numeric bounds.
    """
    parts = text.split("-")
    if len(parts) < 2:
        raise ValueError(f"Not a range: {text!r}")
    return (float(parts[0].strip()) + float(parts[1].strip())) / 2.0
