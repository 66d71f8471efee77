"""Decision tree sub-package: node models, impurity, split search, and the classifier."""

from __future__ import annotations

from stresskit.decision_tree.classifier import DecisionTreeClassifier
from stresskit.decision_tree.impurity import class_counts, gini_impurity, is_pure, majority_vote
from stresskit.decision_tree.models import (
    ConditionOp,
    Decision,
    DecisionRule,
    Leaf,
    RuleCondition,
    SplitPredicate,
    SplitSearchResult,
    TreeNode,
)
from stresskit.decision_tree.search import find_best_split, partition

__all__ = [
    "ConditionOp",
    "Decision",
    "DecisionRule",
    "DecisionTreeClassifier",
    "Leaf",
    "RuleCondition",
    "SplitPredicate",
    "SplitSearchResult",
    "TreeNode",
    "class_counts",
    "find_best_split",
    "gini_impurity",
    "is_pure",
    "majority_vote",
    "partition",
]
