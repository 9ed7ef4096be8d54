"""Unit tests for the result model."""

from __future__ import annotations

import pytest

from htmlreport.model.results import (
    VALID_STATUSES,
    Suite,
    TestClass,
    TestMethod,
    TestOutcome,
    TestRun,
)


def _outcome(class_name: str, name: str, status: str = "passed", **kwargs) -> TestOutcome:
    groups = kwargs.pop("groups", ())
    return TestOutcome(
        method=TestMethod(TestClass(class_name), name, groups=groups),
        status=status,
        **kwargs,
    )


class TestIdentity:
    """Tests for equality of model entities."""

    def test_class_equality_by_name(self):
        assert TestClass("a.B") == TestClass("a.B")
        assert hash(TestClass("a.B")) == hash(TestClass("a.B"))
        assert TestClass("a.B") != TestClass("a.C")

    def test_method_equality_ignores_metadata(self):
        """Groups and description do not affect method identity."""
        a = TestMethod(TestClass("A"), "m", groups=("smoke",), description="x")
        b = TestMethod(TestClass("A"), "m")
        assert a == b
        assert len({a, b}) == 1

    def test_method_differs_by_class(self):
        assert TestMethod(TestClass("A"), "m") != TestMethod(TestClass("B"), "m")

    def test_outcomes_hashable(self):
        """Identical outcomes collapse in a set."""
        assert len({_outcome("A", "m"), _outcome("A", "m")}) == 1


class TestOutcomeFields:
    """Tests for TestOutcome."""

    def test_invalid_status_rejected(self):
        with pytest.raises(ValueError, match="Unknown outcome status"):
            _outcome("A", "m", status="broken")

    def test_valid_statuses(self):
        assert VALID_STATUSES == {"passed", "failed", "skipped"}

    def test_accessors(self):
        o = _outcome("A", "m", start_millis=100, end_millis=250)
        assert o.test_class == TestClass("A")
        assert o.method_name == "m"
        assert o.duration_millis == 150

    def test_duration_without_end(self):
        assert _outcome("A", "m", start_millis=100).duration_millis == 0


class TestTestRun:
    """Tests for TestRun derived values."""

    def test_empty_run_times(self):
        run = TestRun(name="empty")
        assert run.start_millis == 0
        assert run.end_millis == 0
        assert run.duration_millis == 0

    def test_all_outcomes_includes_configurations(self):
        run = TestRun(
            name="run",
            passed=(_outcome("A", "p"),),
            failed_configurations=(_outcome("A", "setUp", status="failed"),),
        )
        assert len(run.all_outcomes()) == 2

    def test_methods_by_group(self):
        """Group memberships come from the methods of test outcomes."""
        run = TestRun(
            name="run",
            passed=(_outcome("A", "m1", groups=("smoke", "fast")),),
            failed=(_outcome("B", "m2", status="failed", groups=("smoke",)),),
        )
        groups = run.methods_by_group()
        assert set(groups) == {"smoke", "fast"}
        assert [m.name for m in groups["smoke"]] == ["m1", "m2"]


class TestSuite:
    """Tests for Suite group merging."""

    def test_declared_and_derived_groups_merged(self):
        declared = TestMethod(TestClass("C"), "m3")
        run = TestRun(
            name="run",
            passed=(_outcome("A", "m1", groups=("smoke",)),),
        )
        suite = Suite(name="s", runs=(run,), groups={"smoke": (declared,), "slow": ()})
        groups = suite.methods_by_group()
        assert [m.name for m in groups["smoke"]] == ["m3", "m1"]
        assert groups["slow"] == []

    def test_declared_groups_not_mutated(self):
        declared = TestMethod(TestClass("C"), "m3")
        run = TestRun(name="run", passed=(_outcome("A", "m1", groups=("smoke",)),))
        suite = Suite(name="s", runs=(run,), groups={"smoke": (declared,)})
        suite.methods_by_group()
        assert suite.groups == {"smoke": (declared,)}
