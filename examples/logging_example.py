"""Demonstrates how to enable and configure logging in stresskit.

stresskit logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.

- ``level``: the custom ``TRAINING`` level (numeric value 25, between INFO and
  WARNING) surfaces each ``train()`` call and is the default. ``"DEBUG"`` also
  shows every split chosen while a tree grows.
- ``log_format``: ``"short"`` or ``"full"`` (adds module and line number).
"""

from stresskit import DecisionTreeClassifier, KNearestNeighbors, Sample, enable_logging

samples = [
    Sample(features=(20.0, 1.0, 5.0), label=0),
    Sample(features=(21.0, 0.0, 9.0), label=0),
    Sample(features=(22.0, 0.0, 14.0), label=1),
    Sample(features=(20.0, 1.0, 16.0), label=1),
    Sample(features=(24.5, 0.0, 21.0), label=2),
    Sample(features=(28.5, 1.0, 25.0), label=2),
]

with enable_logging(level="DEBUG", log_format="full"):
    tree = DecisionTreeClassifier(max_depth=3)
    tree.train(samples)
    for rule in tree.extract_rules(["age", "gender", "anxiety_value"]):
        print(rule)

# Only the TRAINING record of this call is shown at the default level.
with enable_logging():
    KNearestNeighbors(k=3).train(samples)

# Logging is disabled again once every handle has been released.
tree.train(samples)
