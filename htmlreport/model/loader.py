"""Read results documents into the result model.

A results document is YAML (JSON is a subset and loads the same way)
listing suites, their test runs in engine order, and for each run the
outcome buckets.  The status of an outcome is implied by the bucket it
appears in.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from htmlreport.model.results import (
    FAILED,
    PASSED,
    SKIPPED,
    ResultSet,
    Suite,
    TestClass,
    TestMethod,
    TestOutcome,
    TestRun,
)

# Bucket name -> (status, is_configuration)
_BUCKETS: dict[str, tuple[str, bool]] = {
    "passed": (PASSED, False),
    "failed": (FAILED, False),
    "skipped": (SKIPPED, False),
    "failed_configurations": (FAILED, True),
    "skipped_configurations": (SKIPPED, True),
}


def load_results(path: Path) -> ResultSet:
    """Load a results document from disk.

    Args:
        path: Path to a YAML or JSON results document.

    Returns:
        The parsed ResultSet.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not valid YAML or is malformed.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid results document {path}: {e}") from e
    return parse_results(data)


def parse_results(data: Any) -> ResultSet:
    """Build a ResultSet from an already-parsed results document.

    Raises:
        ValueError: If the document is malformed.
    """
    if not isinstance(data, dict):
        raise ValueError("Results document must be a mapping")
    raw_suites = data.get("suites")
    if not isinstance(raw_suites, list):
        raise ValueError("Results document must contain a 'suites' list")

    suites = tuple(
        _parse_suite(raw, f"suites[{i}]") for i, raw in enumerate(raw_suites)
    )
    output = tuple(str(line) for line in data.get("output") or [])
    return ResultSet(suites=suites, output=output)


def _parse_suite(raw: Any, where: str) -> Suite:
    if not isinstance(raw, dict) or not raw.get("name"):
        raise ValueError(f"{where}: suite must be a mapping with a 'name'")

    runs = tuple(
        _parse_run(run, f"{where}.tests[{i}]")
        for i, run in enumerate(_as_list(raw.get("tests"), f"{where}.tests"))
    )

    groups: dict[str, tuple[TestMethod, ...]] = {}
    raw_groups = raw.get("groups") or {}
    if not isinstance(raw_groups, dict):
        raise ValueError(f"{where}.groups: must be a mapping")
    for label, members in raw_groups.items():
        groups[str(label)] = tuple(
            _parse_method(m, f"{where}.groups.{label}[{i}]")
            for i, m in enumerate(_as_list(members, f"{where}.groups.{label}"))
        )

    return Suite(name=str(raw["name"]), runs=runs, groups=groups)


def _parse_run(raw: Any, where: str) -> TestRun:
    if not isinstance(raw, dict) or not raw.get("name"):
        raise ValueError(f"{where}: test run must be a mapping with a 'name'")

    buckets: dict[str, tuple[TestOutcome, ...]] = {}
    for bucket, (status, is_configuration) in _BUCKETS.items():
        entries = _as_list(raw.get(bucket), f"{where}.{bucket}")
        buckets[bucket] = tuple(
            _parse_outcome(
                entry, status, is_configuration, f"{where}.{bucket}[{i}]",
            )
            for i, entry in enumerate(entries)
        )

    return TestRun(name=str(raw["name"]), **buckets)


def _parse_method(raw: Any, where: str) -> TestMethod:
    if not isinstance(raw, dict) or not raw.get("class") or not raw.get("method"):
        raise ValueError(f"{where}: must name a 'class' and a 'method'")
    return TestMethod(
        test_class=TestClass(str(raw["class"])),
        name=str(raw["method"]),
        groups=tuple(str(g) for g in raw.get("groups") or []),
        description=str(raw.get("description") or ""),
    )


def _parse_outcome(
    raw: Any, status: str, is_configuration: bool, where: str,
) -> TestOutcome:
    method = _parse_method(raw, where)
    end = raw.get("end_millis")
    error = raw.get("error")
    return TestOutcome(
        method=method,
        status=status,
        start_millis=int(raw.get("start_millis") or 0),
        end_millis=int(end) if end is not None else None,
        parameters=tuple(str(p) for p in raw.get("parameters") or []),
        output=tuple(str(line) for line in raw.get("output") or []),
        error=str(error) if error is not None else None,
        is_configuration=is_configuration,
    )


def _as_list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{where}: must be a list")
    return value
