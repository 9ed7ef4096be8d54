"""Grouping, ordering and summary statistics over the result model."""

from htmlreport.analysis.grouping import group_by_class, group_by_label
from htmlreport.analysis.summary import RunSummary, compute_summary, compute_totals

__all__ = [
    "RunSummary",
    "compute_summary",
    "compute_totals",
    "group_by_class",
    "group_by_label",
]
