"""Decision tree classifier: recursive induction, prediction, and tree introspection."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger

from stresskit.decision_tree.impurity import is_pure, majority_vote
from stresskit.decision_tree.models import (
    Decision,
    DecisionRule,
    Leaf,
    RuleCondition,
    TreeNode,
)
from stresskit.decision_tree.search import find_best_split
from stresskit.exceptions import ModelNotTrainedError
from stresskit.logging import TRAINING_LEVEL
from stresskit.models import NUM_CLASSES, Sample, validate_samples

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

_DEFAULT_MAX_DEPTH: int = 10
_DEFAULT_MIN_SAMPLES_SPLIT: int = 2
_MIN_NUM_CLASSES: int = 2


class DecisionTreeClassifier:
    """Binary decision tree grown greedily by Gini impurity reduction.

    Each node asks whether one feature is `<=` a threshold taken from the
    training values. Growth stops at `max_depth`, when a group has fewer than
    `min_samples_split` samples, when a group is pure, or when no split
    reduces impurity. Leaves predict the majority class of their group.

    Both induction and traversal recurse once per tree level, so recursion
    depth never exceeds `max_depth + 1`.

    Attributes:
        max_depth (int): Maximum number of decisions on any root-to-leaf path.
        min_samples_split (int): Smallest group the builder will try to split.
        num_classes (int): Number of classes labels are drawn from.

    Examples:
        >>> samples = [Sample(features=(float(x),), label=y) for x, y in [(1, 0), (2, 0), (3, 1), (4, 1)]]
        >>> tree = DecisionTreeClassifier(max_depth=3, min_samples_split=2)
        >>> tree.train(samples)
        >>> tree.predict(Sample(features=(4.0,), label=0))
        1
    """

    def __init__(
        self,
        max_depth: int = _DEFAULT_MAX_DEPTH,
        min_samples_split: int = _DEFAULT_MIN_SAMPLES_SPLIT,
        *,
        num_classes: int = NUM_CLASSES,
    ) -> None:
        """Initialize an untrained classifier with fixed hyperparameters.

        Args:
            max_depth (int): Maximum tree depth; 0 yields a single leaf.
            min_samples_split (int): Minimum group size required to attempt a split.
            num_classes (int): Number of classes labels are drawn from.

        Raises:
            ValueError: If `max_depth < 0`, `min_samples_split < 1`, or
                `num_classes < 2`.
        """
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}.")
        if min_samples_split < 1:
            raise ValueError(f"min_samples_split must be >= 1, got {min_samples_split}.")
        if num_classes < _MIN_NUM_CLASSES:
            raise ValueError(f"num_classes must be >= {_MIN_NUM_CLASSES}, got {num_classes}.")
        self.max_depth = max_depth
        self.min_samples_split = min_samples_split
        self.num_classes = num_classes
        self._root: TreeNode | None = None

    def __repr__(self) -> str:
        """Return the constructor call that reproduces this classifier's hyperparameters.

        Returns:
            str: e.g. `"DecisionTreeClassifier(max_depth=10, min_samples_split=2, num_classes=3)"`.
        """
        return (
            f"{self.__class__.__name__}(max_depth={self.max_depth}, "
            f"min_samples_split={self.min_samples_split}, num_classes={self.num_classes})"
        )

    # ------------------------------------------------------------------
    # Training
    # ------------------------------------------------------------------

    def train(self, samples: Sequence[Sample]) -> None:
        """Grow a new tree from `samples`, replacing any previously trained tree.

        Args:
            samples (Sequence[Sample]): Training samples sharing one feature
                count, with labels in `[0, num_classes)`.

        Raises:
            EmptyDatasetError: If `samples` is empty.
            FeatureLengthMismatchError: If feature counts differ between samples.
            InvalidLabelError: If a label is outside `[0, num_classes)`.
        """
        feature_count = validate_samples(samples, num_classes=self.num_classes)
        logger.log(
            TRAINING_LEVEL,
            "Training decision tree",
            samples=len(samples),
            features=feature_count,
            max_depth=self.max_depth,
            min_samples_split=self.min_samples_split,
        )
        self._root = self._build_tree(list(samples), depth=0)
        logger.info("Decision tree trained", depth=self.depth, leaves=self.leaf_count, nodes=self.node_count)

    def _build_tree(self, group: list[Sample], depth: int) -> TreeNode:
        """Recursively build the subtree for one group of samples.

        Args:
            group (list[Sample]): Samples reaching this node.
            depth (int): Number of decisions above this node.

        Returns:
            TreeNode: A `Leaf` when a stopping condition holds or no split
                helps, otherwise a `Decision` over two recursively built subtrees.
        """
        if depth >= self.max_depth or len(group) < self.min_samples_split or is_pure(group):
            return Leaf(predicted_class=majority_vote(group, self.num_classes))

        best_split = find_best_split(group, num_classes=self.num_classes)
        if best_split.predicate is None or best_split.gain <= 0:
            return Leaf(predicted_class=majority_vote(group, self.num_classes))

        logger.debug(
            "Split selected",
            depth=depth,
            feature_index=best_split.predicate.feature_index,
            threshold=best_split.predicate.threshold,
            gain=round(best_split.gain, 6),
            left=len(best_split.left_group),
            right=len(best_split.right_group),
        )
        return Decision(
            predicate=best_split.predicate,
            left=self._build_tree(best_split.left_group, depth + 1),
            right=self._build_tree(best_split.right_group, depth + 1),
        )

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------

    @property
    def is_trained(self) -> bool:
        """Return whether a tree has been trained.

        Returns:
            bool: `True` once `train` has completed successfully.
        """
        return self._root is not None

    @property
    def root(self) -> TreeNode:
        """Return the root node of the trained tree.

        Returns:
            TreeNode: The root node.

        Raises:
            ModelNotTrainedError: If `train` has not been called.
        """
        if self._root is None:
            raise ModelNotTrainedError(self.__class__.__name__)
        return self._root

    def predict(self, sample: Sample) -> int:
        """Predict the class of one sample by walking the tree from the root.

        Args:
            sample (Sample): The sample to classify. Its label is ignored.

        Returns:
            int: The predicted class.

        Raises:
            ModelNotTrainedError: If `train` has not been called.
            FeatureIndexError: If a split reads past the end of `sample.features`.
        """
        return _traverse(self.root, sample.features)

    def predict_many(self, samples: Sequence[Sample]) -> list[int]:
        """Predict the class of each sample in order.

        Args:
            samples (Sequence[Sample]): Samples to classify.

        Returns:
            list[int]: One predicted class per sample.

        Raises:
            ModelNotTrainedError: If `train` has not been called.
        """
        root = self.root
        return [_traverse(root, sample.features) for sample in samples]

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def depth(self) -> int:
        """Return the length of the longest root-to-leaf path.

        Returns:
            int: 0 for a single-leaf tree.
        """
        return _node_depth(self.root)

    @property
    def leaf_count(self) -> int:
        """Return the number of leaves in the trained tree.

        Returns:
            int: Number of `Leaf` nodes.
        """
        return _count_nodes(self.root, leaves_only=True)

    @property
    def node_count(self) -> int:
        """Return the total number of nodes in the trained tree.

        Returns:
            int: Number of `Leaf` and `Decision` nodes.
        """
        return _count_nodes(self.root, leaves_only=False)

    def extract_rules(self, feature_names: Sequence[str] | None = None) -> list[DecisionRule]:
        """Describe every leaf of the trained tree as a rule.

        Rules are listed left to right. The left branch of a split contributes
        a `<=` condition and the right branch a `>` condition.

        Args:
            feature_names (Sequence[str] | None): Display names indexed by
                feature position. When `None`, names default to
                `"feature[<index>]"`.

        Returns:
            list[DecisionRule]: One rule per leaf.

        Raises:
            ModelNotTrainedError: If `train` has not been called.
        """
        rules: list[DecisionRule] = []
        _walk_tree(self.root, path_conditions=[], feature_names=feature_names, rules=rules)
        return rules


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _traverse(node: TreeNode, features: Sequence[float]) -> int:
    """Follow predicates from `node` down to a leaf and return its class.

    Args:
        node (TreeNode): The node to start from.
        features (Sequence[float]): The feature vector being classified.

    Returns:
        int: The predicted class stored at the leaf reached.
    """
    match node:
        case Leaf(predicted_class=predicted_class):
            return predicted_class
        case Decision(predicate=predicate, left=left, right=right):
            return _traverse(left if predicate.test(features) else right, features)
    raise TypeError(f"Unexpected tree node: {node!r}")


def _node_depth(node: TreeNode) -> int:
    """Return the height of the subtree rooted at `node`.

    Args:
        node (TreeNode): Subtree root.

    Returns:
        int: 0 for a leaf, otherwise one more than the deeper child.
    """
    if isinstance(node, Leaf):
        return 0
    return 1 + max(_node_depth(node.left), _node_depth(node.right))


def _count_nodes(node: TreeNode, *, leaves_only: bool) -> int:
    """Count nodes in the subtree rooted at `node`.

    Args:
        node (TreeNode): Subtree root.
        leaves_only (bool): Count only leaves when `True`.

    Returns:
        int: The node count.
    """
    if isinstance(node, Leaf):
        return 1
    own = 0 if leaves_only else 1
    return own + _count_nodes(node.left, leaves_only=leaves_only) + _count_nodes(node.right, leaves_only=leaves_only)


def _walk_tree(
    node: TreeNode,
    *,
    path_conditions: list[RuleCondition],
    feature_names: Sequence[str] | None,
    rules: list[DecisionRule],
) -> None:
    """Recursively walk a tree node and accumulate leaf rules.

    Args:
        node (TreeNode): The current node.
        path_conditions (list[RuleCondition]): Conditions from the root to `node`.
        feature_names (Sequence[str] | None): Optional display names by feature index.
        rules (list[DecisionRule]): Accumulator; leaf rules are appended in place.
    """
    if isinstance(node, Leaf):
        rules.append(DecisionRule(conditions=path_conditions, prediction=node.predicted_class))
        return

    index = node.predicate.feature_index
    name = feature_names[index] if feature_names is not None else f"feature[{index}]"
    threshold = node.predicate.threshold
    left_condition = RuleCondition(feature_index=index, feature_name=name, operator="<=", threshold=threshold)
    right_condition = RuleCondition(feature_index=index, feature_name=name, operator=">", threshold=threshold)

    _walk_tree(node.left, path_conditions=[*path_conditions, left_condition], feature_names=feature_names, rules=rules)
    _walk_tree(
        node.right, path_conditions=[*path_conditions, right_condition], feature_names=feature_names, rules=rules
    )
