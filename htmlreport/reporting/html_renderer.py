"""HTML page rendering for test reports.

Each page kind is a function from a context mapping to a complete HTML
string.  ``HtmlRenderer.render`` looks the page up by template name and
writes the result.  Output depends only on the context, so identical
input gives byte-identical pages.
"""

from __future__ import annotations

import html
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from htmlreport.model.results import TestClass, TestMethod, TestOutcome

# Status color mapping
STATUS_COLORS: dict[str, str] = {
    "passed": "#90EE90",
    "failed": "#FFB6C1",
    "skipped": "#FFFFAD",
}

# Status display labels
STATUS_LABELS: dict[str, str] = {
    "passed": "PASSED",
    "failed": "FAILED",
    "skipped": "SKIPPED",
}

# (context key, heading) in page order
RESULT_SECTIONS: tuple[tuple[str, str], ...] = (
    ("failed_configurations", "Failed Configurations"),
    ("skipped_configurations", "Skipped Configurations"),
    ("failed_tests", "Failed Tests"),
    ("skipped_tests", "Skipped Tests"),
    ("passed_tests", "Passed Tests"),
)

REPORT_CSS = """\
body {
    font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
    margin: 0;
    padding: 20px;
    background: #f5f5f5;
    color: #333;
}
h1 {
    margin: 0 0 10px 0;
    font-size: 24px;
}
h2 {
    font-size: 18px;
    margin: 24px 0 8px 0;
}
a {
    color: #1a5fb4;
}
.summary {
    display: flex;
    gap: 12px;
    flex-wrap: wrap;
    margin: 12px 0;
}
.summary-item {
    padding: 8px 14px;
    border-radius: 6px;
    font-weight: 600;
    font-size: 14px;
}
table.results {
    border-collapse: collapse;
    width: 100%;
    background: #fff;
    margin-bottom: 16px;
}
table.results th, table.results td {
    border: 1px solid #ddd;
    padding: 6px 10px;
    text-align: left;
    vertical-align: top;
    font-size: 13px;
}
table.results th.class-name {
    background: #e8e8e8;
}
.status-badge {
    display: inline-block;
    padding: 1px 8px;
    border-radius: 10px;
    font-size: 11px;
    font-weight: 600;
}
.parameters {
    color: #666;
}
pre {
    margin: 4px 0 0 0;
    white-space: pre-wrap;
    font-size: 12px;
}
.navigation ul {
    list-style: none;
    padding-left: 12px;
}
.group-name {
    font-weight: 600;
}
"""


class HtmlRenderer:
    """Renders report pages by template name."""

    def __init__(self) -> None:
        self.templates: dict[str, Callable[[Mapping[str, Any]], str]] = {
            "index.html": render_frameset,
            "overview.html": render_overview,
            "suites.html": render_suite_list,
            "groups.html": render_groups,
            "results.html": render_results,
            "output.html": render_output,
            "report.css": lambda context: REPORT_CSS,
        }

    def render(
        self, template_name: str, context: Mapping[str, Any], output_path: Path,
    ) -> None:
        """Render a page and write it to ``output_path``.

        Raises:
            KeyError: If template_name is not a known page.
        """
        try:
            template = self.templates[template_name]
        except KeyError:
            raise KeyError(f"Unknown template: {template_name}") from None
        content = template(context)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(content)


def render_frameset(context: Mapping[str, Any]) -> str:
    """Index page holding the navigation and main frames."""
    title = html.escape(str(context.get("title", "")))
    return "\n".join([
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="UTF-8">',
        f"<title>{title}</title>",
        "</head>",
        '<frameset cols="20%,*">',
        '<frame src="suites.html" name="suites">',
        '<frame src="overview.html" name="main">',
        "</frameset>",
        "</html>",
    ])


def render_overview(context: Mapping[str, Any]) -> str:
    """Summary table across every suite and test run."""
    parts: list[str] = [f"<h1>{html.escape(str(context.get('title', '')))}</h1>"]
    totals = context.get("totals")
    if totals is not None:
        parts.append(_render_summary(totals))

    entries = context.get("overview", [])
    if not entries:
        parts.append("<p>No suites were run.</p>")
        return _page(context, "Overview", "\n".join(parts))

    parts.append('<table class="results">')
    parts.append(
        "<tr><th>Test</th><th>Passed</th><th>Failed</th>"
        "<th>Skipped</th><th>Duration</th><th>Chart</th></tr>"
    )
    for entry in entries:
        parts.append(
            f'<tr><th class="class-name" colspan="6">'
            f"{html.escape(entry.suite.name)}</th></tr>"
        )
        for run_entry in entry.runs:
            s = run_entry.summary
            parts.append(
                "<tr>"
                f'<td><a href="{html.escape(run_entry.results_page, quote=True)}">'
                f"{html.escape(run_entry.run.name)}</a></td>"
                f"<td>{s.passed} ({s.passed_pct}%)</td>"
                f"<td>{s.failed} ({s.failed_pct}%)</td>"
                f"<td>{s.skipped} ({s.skipped_pct}%)</td>"
                f"<td>{_format_duration(s.duration_millis)}</td>"
                f'<td><img src="{html.escape(run_entry.chart_image, quote=True)}"'
                f' alt="{html.escape(run_entry.run.name, quote=True)}"'
                ' width="200"></td>'
                "</tr>"
            )
    parts.append("</table>")
    return _page(context, "Overview", "\n".join(parts))


def render_suite_list(context: Mapping[str, Any]) -> str:
    """Navigation listing of suites, their groups and their test runs."""
    target = ' target="main"' if context.get("frames") else ""
    home = "overview.html" if context.get("frames") else "index.html"
    parts: list[str] = ['<div class="navigation">']
    parts.append(f'<p><a href="{home}"{target}>Overview</a></p>')

    for entry in context.get("navigation", []):
        parts.append(f"<h2>{html.escape(entry.suite.name)}</h2>")
        parts.append("<ul>")
        if entry.groups_page is not None:
            parts.append(
                f'<li><a href="{html.escape(entry.groups_page, quote=True)}"'
                f"{target}>Groups</a></li>"
            )
        for run_entry in entry.runs:
            color = STATUS_COLORS["failed" if run_entry.summary.failed else "passed"]
            parts.append(
                f'<li style="border-left:4px solid {color};padding-left:6px">'
                f'<a href="{html.escape(run_entry.results_page, quote=True)}"'
                f"{target}>{html.escape(run_entry.run.name)}</a></li>"
            )
        parts.append("</ul>")

    parts.append("</div>")
    return _page(context, "Suites", "\n".join(parts))


def render_groups(context: Mapping[str, Any]) -> str:
    """Methods of one suite, listed under each group they belong to."""
    suite = context.get("suite")
    suite_name = suite.name if suite is not None else ""
    parts: list[str] = [f"<h1>{html.escape(suite_name)}: Groups</h1>"]

    groups: Mapping[str, list[TestMethod]] = context.get("groups", {})
    for label, methods in groups.items():
        parts.append(f'<h2 class="group-name">{html.escape(label)}</h2>')
        parts.append("<ul>")
        for method in methods:
            parts.append(
                f"<li>{html.escape(method.test_class.name)}."
                f"{html.escape(method.name)}</li>"
            )
        parts.append("</ul>")
    return _page(context, f"{suite_name} Groups", "\n".join(parts))


def render_results(context: Mapping[str, Any]) -> str:
    """Results of one test run, one table per non-empty outcome view."""
    run = context.get("result")
    run_name = run.name if run is not None else ""
    parts: list[str] = [f"<h1>{html.escape(run_name)}</h1>"]

    summary = context.get("summary")
    if summary is not None:
        parts.append(_render_summary(summary))

    chart = context.get("chart")
    if chart:
        parts.append(
            f'<img src="{html.escape(chart, quote=True)}"'
            f' alt="{html.escape(run_name, quote=True)}">'
        )

    for key, heading in RESULT_SECTIONS:
        view: Mapping[TestClass, list[TestOutcome]] = context.get(key) or {}
        if view:
            parts.append(_render_class_view(heading, view))

    return _page(context, run_name, "\n".join(parts))


def render_output(context: Mapping[str, Any]) -> str:
    """Log output captured during the test run."""
    lines = context.get("output", [])
    body = "\n".join([
        "<h1>Log Output</h1>",
        f"<pre>{html.escape(chr(10).join(lines))}</pre>",
    ])
    return _page(context, "Log Output", body)


def _page(context: Mapping[str, Any], heading: str, body: str) -> str:
    """Wrap a page body in the shared document shell."""
    title = str(context.get("title", ""))
    page_title = f"{title} - {heading}" if title and heading else title or heading
    parts: list[str] = [
        "<!DOCTYPE html>",
        '<html lang="en">',
        "<head>",
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f"<title>{html.escape(page_title)}</title>",
        '<link rel="stylesheet" href="report.css">',
    ]
    if context.get("custom_stylesheet"):
        parts.append('<link rel="stylesheet" href="custom.css">')
    parts.extend(["</head>", "<body>", body, "</body>", "</html>"])
    return "\n".join(parts)


def _render_summary(summary: Any) -> str:
    parts: list[str] = ['<div class="summary">']
    parts.append(
        f'<div class="summary-item" style="background:#e8e8e8">'
        f"Total: {summary.total}</div>"
    )
    parts.append(
        f'<div class="summary-item" style="background:{STATUS_COLORS["passed"]}">'
        f"Passed: {summary.passed} ({summary.passed_pct}%)</div>"
    )
    parts.append(
        f'<div class="summary-item" style="background:{STATUS_COLORS["failed"]}">'
        f"Failed: {summary.failed} ({summary.failed_pct}%)</div>"
    )
    parts.append(
        f'<div class="summary-item" style="background:{STATUS_COLORS["skipped"]}">'
        f"Skipped: {summary.skipped} ({summary.skipped_pct}%)</div>"
    )
    parts.append(
        f'<div class="summary-item" style="background:#e8e8e8">'
        f"Duration: {_format_duration(summary.duration_millis)}</div>"
    )
    parts.append("</div>")
    return "\n".join(parts)


def _render_class_view(
    heading: str, view: Mapping[TestClass, list[TestOutcome]],
) -> str:
    parts: list[str] = [f"<h2>{html.escape(heading)}</h2>"]
    parts.append('<table class="results">')
    for test_class, outcomes in view.items():
        parts.append(
            f'<tr><th class="class-name" colspan="3">'
            f"{html.escape(test_class.name)}</th></tr>"
        )
        for outcome in outcomes:
            parts.append(_render_outcome_row(outcome))
    parts.append("</table>")
    return "\n".join(parts)


def _render_outcome_row(outcome: TestOutcome) -> str:
    color = STATUS_COLORS.get(outcome.status, "#e8e8e8")
    label = STATUS_LABELS.get(outcome.status, outcome.status.upper())

    name = html.escape(outcome.method_name)
    if outcome.parameters:
        params = ", ".join(html.escape(p) for p in outcome.parameters)
        name += f' <span class="parameters">({params})</span>'
    if outcome.method.description:
        name += f"<br><small>{html.escape(outcome.method.description)}</small>"

    details: list[str] = []
    if outcome.error:
        details.append(f"<pre>{html.escape(outcome.error)}</pre>")
    if outcome.output:
        details.append(f"<pre>{html.escape(chr(10).join(outcome.output))}</pre>")

    return (
        "<tr>"
        f"<td>{name}</td>"
        f'<td><span class="status-badge" style="background:{color}">'
        f"{label}</span> {_format_duration(outcome.duration_millis)}</td>"
        f"<td>{''.join(details)}</td>"
        "</tr>"
    )


def _format_duration(millis: int) -> str:
    return f"{millis / 1000:.3f}s"
