"""Pass/fail/skip counts and percentages per test run.

Percentages are ``floor(100 * count / total)`` and are not rebalanced, so
they can sum to as little as 98.  A run with no tests reports 0% for
every status.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from htmlreport.model.results import TestRun


@dataclass(frozen=True)
class RunSummary:
    """Summary statistics for one test run (or a sum of runs)."""

    passed: int = 0
    failed: int = 0
    skipped: int = 0
    duration_millis: int = 0

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.skipped

    @property
    def passed_pct(self) -> int:
        return _percentage(self.passed, self.total)

    @property
    def failed_pct(self) -> int:
        return _percentage(self.failed, self.total)

    @property
    def skipped_pct(self) -> int:
        return _percentage(self.skipped, self.total)


def compute_summary(run: TestRun) -> RunSummary:
    """Count the test outcomes of a run.

    Configuration outcomes are not tests and are not counted.
    """
    return RunSummary(
        passed=len(run.passed),
        failed=len(run.failed),
        skipped=len(run.skipped),
        duration_millis=run.duration_millis,
    )


def compute_totals(summaries: Iterable[RunSummary]) -> RunSummary:
    """Sum several summaries into one."""
    passed = failed = skipped = duration = 0
    for s in summaries:
        passed += s.passed
        failed += s.failed
        skipped += s.skipped
        duration += s.duration_millis
    return RunSummary(
        passed=passed, failed=failed, skipped=skipped, duration_millis=duration,
    )


def _percentage(count: int, total: int) -> int:
    if total == 0:
        return 0
    return 100 * count // total
