"""Read-only snapshot of a test execution.

A result set holds suites; each suite holds the test runs the engine
produced for it, in engine order.  Every test run owns five outcome
buckets: passed, failed and skipped tests, plus failed and skipped
configuration (setup/teardown) records.
"""

from __future__ import annotations

from dataclasses import dataclass, field

PASSED = "passed"
FAILED = "failed"
SKIPPED = "skipped"

VALID_STATUSES = frozenset({PASSED, FAILED, SKIPPED})


@dataclass(frozen=True)
class TestClass:
    """A test class, identified by its fully-qualified name."""

    __test__ = False

    name: str


@dataclass(frozen=True)
class TestMethod:
    """A test method, identified by its owning class and method name.

    Group membership and description are metadata; they do not take part
    in equality, so the same method reached through different buckets
    compares equal.
    """

    __test__ = False

    test_class: TestClass
    name: str
    groups: tuple[str, ...] = field(default=(), compare=False)
    description: str = field(default="", compare=False)


@dataclass(frozen=True)
class TestOutcome:
    """One recorded result of one test method invocation."""

    __test__ = False

    method: TestMethod
    status: str
    start_millis: int = 0
    end_millis: int | None = None
    parameters: tuple[str, ...] = ()
    output: tuple[str, ...] = ()
    error: str | None = None
    is_configuration: bool = False

    def __post_init__(self) -> None:
        if self.status not in VALID_STATUSES:
            raise ValueError(f"Unknown outcome status: {self.status!r}")

    @property
    def test_class(self) -> TestClass:
        return self.method.test_class

    @property
    def method_name(self) -> str:
        return self.method.name

    @property
    def duration_millis(self) -> int:
        if self.end_millis is None:
            return 0
        return max(0, self.end_millis - self.start_millis)


@dataclass(frozen=True)
class TestRun:
    """One named execution context inside a suite."""

    __test__ = False

    name: str
    passed: tuple[TestOutcome, ...] = ()
    failed: tuple[TestOutcome, ...] = ()
    skipped: tuple[TestOutcome, ...] = ()
    failed_configurations: tuple[TestOutcome, ...] = ()
    skipped_configurations: tuple[TestOutcome, ...] = ()

    def all_outcomes(self) -> tuple[TestOutcome, ...]:
        """All outcomes across every bucket, configurations included."""
        return (
            self.passed
            + self.failed
            + self.skipped
            + self.failed_configurations
            + self.skipped_configurations
        )

    @property
    def start_millis(self) -> int:
        outcomes = self.all_outcomes()
        if not outcomes:
            return 0
        return min(o.start_millis for o in outcomes)

    @property
    def end_millis(self) -> int:
        outcomes = self.all_outcomes()
        if not outcomes:
            return 0
        return max(
            o.end_millis if o.end_millis is not None else o.start_millis
            for o in outcomes
        )

    @property
    def duration_millis(self) -> int:
        return self.end_millis - self.start_millis

    def methods_by_group(self) -> dict[str, list[TestMethod]]:
        """Group memberships declared by the methods of this run's tests."""
        groups: dict[str, list[TestMethod]] = {}
        for outcome in self.passed + self.failed + self.skipped:
            for label in outcome.method.groups:
                groups.setdefault(label, []).append(outcome.method)
        return groups


@dataclass(frozen=True)
class Suite:
    """A named collection of test runs produced by one execution pass."""

    name: str
    runs: tuple[TestRun, ...] = ()
    groups: dict[str, tuple[TestMethod, ...]] = field(
        default_factory=dict, compare=False, hash=False,
    )

    def methods_by_group(self) -> dict[str, list[TestMethod]]:
        """Declared group memberships merged with those found in the runs.

        The result may contain the same method several times under one
        label; callers that need a set deduplicate.
        """
        merged: dict[str, list[TestMethod]] = {
            label: list(methods) for label, methods in self.groups.items()
        }
        for run in self.runs:
            for label, methods in run.methods_by_group().items():
                merged.setdefault(label, []).extend(methods)
        return merged


@dataclass(frozen=True)
class ResultSet:
    """Everything the upstream test engine hands to the report."""

    suites: tuple[Suite, ...] = ()
    output: tuple[str, ...] = ()
