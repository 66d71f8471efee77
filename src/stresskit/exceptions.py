"""Custom exceptions for stresskit.

Model state exceptions:
- ModelNotTrainedError (subclass RuntimeError): Raised when a classifier is
  asked to predict before it has been trained.

Dataset contract exceptions:
- FeatureIndexError (subclass IndexError): Raised when a split predicate reads
  past the end of a feature vector.
- FeatureLengthMismatchError (subclass ValueError): Raised when samples in one
  dataset carry feature vectors of different lengths.
- InvalidLabelError (subclass ValueError): Raised when a label falls outside
  the configured class range.
- EmptyDatasetError (subclass ValueError): Raised when an operation needs at
  least one sample and received none.

Loader exceptions:
- MalformedRecordError (subclass ValueError): Raised when a survey field cannot
  be parsed. The loader catches it per record and skips the record.
"""

from __future__ import annotations


class ModelNotTrainedError(RuntimeError):
    """Raised when `predict` is called on a classifier that has not been trained.

    Attributes:
        model_name (str): Class name of the untrained model.

    Examples:
        >>> err = ModelNotTrainedError("DecisionTreeClassifier")
        >>> str(err)
        'DecisionTreeClassifier has not been trained yet. Call train() first.'
    """

    model_name: str

    def __init__(self, model_name: str) -> None:
        """Initialize ModelNotTrainedError.

        Args:
            model_name (str): Class name of the untrained model.
        """
        super().__init__(f"{model_name} has not been trained yet. Call train() first.")
        self.model_name = model_name


class FeatureIndexError(IndexError):
    """Raised when a feature index is outside the bounds of a feature vector.

    This signals that the caller mixed feature vectors of different lengths;
    it is never defaulted or silently ignored.

    Attributes:
        feature_index (int): The index that was requested.
        feature_count (int): Length of the feature vector that was read.
    """

    feature_index: int
    feature_count: int

    def __init__(self, feature_index: int, feature_count: int) -> None:
        """Initialize FeatureIndexError.

        Args:
            feature_index (int): The index that was requested.
            feature_count (int): Length of the feature vector that was read.
        """
        super().__init__(
            f"Feature index {feature_index} is out of bounds for a feature vector of length {feature_count}."
        )
        self.feature_index = feature_index
        self.feature_count = feature_count

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including index and vector length.
        """
        return f"{self.__class__.__name__}(feature_index={self.feature_index!r}, feature_count={self.feature_count!r})"


class FeatureLengthMismatchError(ValueError):
    """Raised when a sample's feature vector length differs from the dataset's.

    Attributes:
        expected (int): Feature count established by the first sample.
        actual (int): Feature count of the offending sample.
        position (int | None): Position of the offending sample in its
            dataset, when known.

    Examples:
        >>> err = FeatureLengthMismatchError(expected=7, actual=6, position=12)
        >>> err.position
        12
    """

    expected: int
    actual: int
    position: int | None

    def __init__(self, expected: int, actual: int, position: int | None = None) -> None:
        """Initialize FeatureLengthMismatchError.

        Args:
            expected (int): Feature count established by the first sample.
            actual (int): Feature count of the offending sample.
            position (int | None): Position of the offending sample, when known.
        """
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Expected {expected} features but found {actual}{where}.")
        self.expected = expected
        self.actual = actual
        self.position = position

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including both lengths and position.
        """
        return (
            f"{self.__class__.__name__}("
            f"expected={self.expected!r}, actual={self.actual!r}, position={self.position!r})"
        )


class InvalidLabelError(ValueError):
    """Raised when a sample label is outside `[0, num_classes)`.

    Attributes:
        label (int): The offending label.
        num_classes (int): Number of classes the model was configured with.
        position (int | None): Position of the offending sample, when known.
    """

    label: int
    num_classes: int
    position: int | None

    def __init__(self, label: int, num_classes: int, position: int | None = None) -> None:
        """Initialize InvalidLabelError.

        Args:
            label (int): The offending label.
            num_classes (int): Number of classes the model was configured with.
            position (int | None): Position of the offending sample, when known.
        """
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Label {label}{where} is outside the valid range [0, {num_classes}).")
        self.label = label
        self.num_classes = num_classes
        self.position = position


class EmptyDatasetError(ValueError):
    """Raised when an operation requires at least one sample and received none."""


class MalformedRecordError(ValueError):
    """Raised when a survey field cannot be parsed into a number.

    Attributes:
        field (str): Name of the field being parsed, e.g. `"anxiety_value"`.
        raw_value (str | None): The raw cell content.
    """

    field: str
    raw_value: str | None

    def __init__(self, field: str, raw_value: str | None) -> None:
        """Initialize MalformedRecordError.

        Args:
            field (str): Name of the field being parsed.
            raw_value (str | None): The raw cell content.
        """
        super().__init__(f"Could not parse {field} from {raw_value!r}")
        self.field = field
        self.raw_value = raw_value

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including field and raw value.
        """
        return f"{self.__class__.__name__}(field={self.field!r}, raw_value={self.raw_value!r})"
