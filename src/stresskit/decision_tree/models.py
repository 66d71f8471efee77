"""Tree node types, split predicates, split search results, and rule extraction models."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Annotated, Literal, NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from stresskit.exceptions import FeatureIndexError
from stresskit.models import NO_PREDICTION, Sample

# ---------------------------------------------------------------------------
# Public type aliases
# ---------------------------------------------------------------------------

type ConditionOp = Literal["<=", ">"]

# ---------------------------------------------------------------------------
# Public models -- Split predicate
# ---------------------------------------------------------------------------


class SplitPredicate(BaseModel):
    """A binary question on one feature: `features[feature_index] <= threshold`.

    A sample for which the test holds goes to the left branch; every other
    sample goes right.

    Attributes:
        feature_index (int): Position of the feature in the feature vector.
        threshold (float): Inclusive upper bound for the left branch.

    Examples:
        >>> predicate = SplitPredicate(feature_index=0, threshold=2.0)
        >>> predicate.test((1.5, 9.0))
        True
        >>> predicate.test((2.5, 9.0))
        False
    """

    model_config = ConfigDict(frozen=True)

    feature_index: int = Field(
        ge=0,
        description="Position of the tested feature in the feature vector.",
    )
    threshold: float = Field(
        description="Inclusive upper bound; values <= threshold go left.",
    )

    def test(self, features: Sequence[float]) -> bool:
        """Evaluate this predicate against a feature vector.

        Args:
            features (Sequence[float]): The feature vector to test.

        Returns:
            bool: `True` if the sample goes left, `False` if it goes right.

        Raises:
            FeatureIndexError: If `feature_index` is beyond the end of `features`.
        """
        try:
            value = features[self.feature_index]
        except IndexError as exc:
            raise FeatureIndexError(self.feature_index, len(features)) from exc
        return value <= self.threshold

    def __str__(self) -> str:
        """Return a compact representation such as `feature[5] <= 12.0`.

        Returns:
            str: The predicate as `"feature[<index>] <= <threshold>"`.
        """
        return f"feature[{self.feature_index}] <= {self.threshold}"


# ---------------------------------------------------------------------------
# Public models -- Tree nodes
# ---------------------------------------------------------------------------


class Leaf(BaseModel):
    """Terminal tree node holding a fixed predicted class.

    Attributes:
        kind (Literal["leaf"]): Discriminator field; always `"leaf"`.
        predicted_class (int): Class returned for every sample reaching this
            leaf. `NO_PREDICTION` only when the leaf was built from an empty
            group.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["leaf"] = Field(default="leaf", description='Discriminator field. Always "leaf".')
    predicted_class: int = Field(
        ge=NO_PREDICTION,
        description="Class predicted for samples reaching this leaf.",
    )


class Decision(BaseModel):
    """Internal tree node: a split predicate and two always-present subtrees.

    Attributes:
        kind (Literal["decision"]): Discriminator field; always `"decision"`.
        predicate (SplitPredicate): The question asked at this node.
        left (TreeNode): Subtree for samples where the predicate holds.
        right (TreeNode): Subtree for samples where it does not.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["decision"] = Field(default="decision", description='Discriminator field. Always "decision".')
    predicate: SplitPredicate = Field(description="The split predicate evaluated at this node.")
    left: Annotated[Leaf | Decision, Field(discriminator="kind")] = Field(
        description="Subtree for samples where the predicate holds.",
    )
    right: Annotated[Leaf | Decision, Field(discriminator="kind")] = Field(
        description="Subtree for samples where the predicate does not hold.",
    )


Decision.model_rebuild()

# Use this alias when accepting a node of either kind.
type TreeNode = Leaf | Decision


# ---------------------------------------------------------------------------
# Public models -- Split search result
# ---------------------------------------------------------------------------


class SplitSearchResult(NamedTuple):
    """The best split found for one group of samples.

    The groups hold references to the caller's samples, never copies.

    Attributes:
        predicate (SplitPredicate | None): The winning predicate, or `None`
            when no split reduces impurity.
        gain (float): Information gain of `predicate`; 0.0 when none was found.
        left_group (list[Sample]): Samples for which `predicate` holds.
        right_group (list[Sample]): The remaining samples.
    """

    predicate: SplitPredicate | None
    gain: float
    left_group: list[Sample]
    right_group: list[Sample]

    @classmethod
    def none_found(cls) -> SplitSearchResult:
        """Return the result used when no split improves on the parent group.

        Returns:
            SplitSearchResult: A result with no predicate, zero gain, and empty groups.
        """
        return cls(predicate=None, gain=0.0, left_group=[], right_group=[])


# ---------------------------------------------------------------------------
# Public models -- Rules
# ---------------------------------------------------------------------------


class RuleCondition(BaseModel):
    """One step along a root-to-leaf path, e.g. `cgpa <= 2.745` or `anxiety_value > 12.0`.

    Attributes:
        feature_index (int): Position of the tested feature.
        feature_name (str): Display name of the feature.
        operator (ConditionOp): `"<="` on a left branch, `">"` on a right branch.
        threshold (float): The split threshold.
    """

    model_config = ConfigDict(frozen=True)

    feature_index: int = Field(ge=0, description="Position of the tested feature.")
    feature_name: str = Field(description="Display name of the tested feature.")
    operator: ConditionOp = Field(description='"<=" for the left branch, ">" for the right branch.')
    threshold: float = Field(description="The split threshold.")

    def __str__(self) -> str:
        """Return the condition as `"<feature_name> <operator> <threshold>"`.

        Returns:
            str: Human-readable condition.
        """
        return f"{self.feature_name} {self.operator} {self.threshold}"


class DecisionRule(BaseModel):
    """The path to one leaf of a trained tree, together with its prediction.

    Attributes:
        conditions (list[RuleCondition]): Conditions from root to leaf. Empty
            for a tree that is a single leaf.
        prediction (int): Class predicted at the leaf.

    Examples:
        >>> rule = DecisionRule(
        ...     conditions=[
        ...         RuleCondition(feature_index=5, feature_name="anxiety_value", operator=">", threshold=12.0),
        ...     ],
        ...     prediction=2,
        ... )
        >>> str(rule)
        'IF anxiety_value > 12.0 THEN 2'
    """

    conditions: list[RuleCondition] = Field(
        description="Conditions along the root-to-leaf path; empty for a single-leaf tree.",
    )
    prediction: int = Field(description="Class predicted at the leaf.")

    def __str__(self) -> str:
        """Return the rule as `"IF <c1> AND <c2> THEN <prediction>"`.

        Returns:
            str: Human-readable rule. A rule without conditions renders as
                `"IF true THEN <prediction>"`.
        """
        premise = " AND ".join(str(condition) for condition in self.conditions) or "true"
        return f"IF {premise} THEN {self.prediction}"
