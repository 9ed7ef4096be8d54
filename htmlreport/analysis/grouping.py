"""Class-grouped and group-label views of test results."""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Mapping

from htmlreport.analysis.ordering import (
    class_sort_key,
    method_sort_key,
    outcome_sort_key,
)
from htmlreport.model.results import TestClass, TestMethod, TestOutcome


def group_by_class(
    outcomes: Iterable[TestOutcome],
) -> dict[TestClass, list[TestOutcome]]:
    """Group outcomes by test class.

    Keys iterate alphabetically by class name.  Each class's list is kept
    sorted by ``outcome_sort_key`` as outcomes are inserted; an outcome
    that ties with ones already present goes after them, so ties keep
    their arrival order.  An outcome equal in every field to one already
    placed is the same record reached twice and is dropped.

    Args:
        outcomes: Outcomes in any order, possibly containing duplicates.

    Returns:
        Mapping of TestClass to its sorted outcomes.  Empty input gives
        an empty mapping.
    """
    grouped: dict[TestClass, list[TestOutcome]] = {}
    seen: set[TestOutcome] = set()
    for outcome in outcomes:
        if outcome in seen:
            continue
        seen.add(outcome)
        results_for_class = grouped.setdefault(outcome.test_class, [])
        bisect.insort_right(results_for_class, outcome, key=outcome_sort_key)

    return {
        test_class: grouped[test_class]
        for test_class in sorted(grouped, key=class_sort_key)
    }


def group_by_label(
    methods_by_label: Mapping[str, Iterable[TestMethod]],
) -> dict[str, list[TestMethod]]:
    """Sort groups alphabetically and the methods within each group.

    Methods are deduplicated by identity (class and method name) and
    ordered by class name, then method name.  Labels left with no methods
    are omitted.
    """
    sorted_groups: dict[str, list[TestMethod]] = {}
    for label in sorted(methods_by_label):
        methods = sorted(set(methods_by_label[label]), key=method_sort_key)
        if methods:
            sorted_groups[label] = methods
    return sorted_groups
