"""Total orderings for the entities that appear in report views.

Each function returns a sort key; views pass the one they need to
``sorted`` or ``bisect`` explicitly rather than relying on the model
classes being orderable.
"""

from __future__ import annotations

from htmlreport.model.results import TestClass, TestMethod, TestOutcome


def class_sort_key(test_class: TestClass) -> str:
    """Classes sort alphabetically by fully-qualified name."""
    return test_class.name


def method_sort_key(method: TestMethod) -> tuple[str, str]:
    """Methods sort by class name, then method name."""
    return (method.test_class.name, method.name)


def outcome_sort_key(outcome: TestOutcome) -> tuple[int, str]:
    """Outcomes sort by start time, ties broken by method name."""
    return (outcome.start_millis, outcome.method_name)
