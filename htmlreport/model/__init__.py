"""Result model and the loader that reads results documents into it."""

from htmlreport.model.loader import load_results, parse_results
from htmlreport.model.results import (
    ResultSet,
    Suite,
    TestClass,
    TestMethod,
    TestOutcome,
    TestRun,
)

__all__ = [
    "ResultSet",
    "Suite",
    "TestClass",
    "TestMethod",
    "TestOutcome",
    "TestRun",
    "load_results",
    "parse_results",
]
