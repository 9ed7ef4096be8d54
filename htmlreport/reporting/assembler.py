"""Assemble grouped, sorted page data for a report and drive its output.

Suites are walked in the order the test engine supplied them and test runs
in the order each suite returns them.  A 1-based suite index and a 1-based
run index name the output slots (``suite1_test2_results.html``), so the
same input always produces the same file names.

Pages are rendered through an injected renderer and charts through an
injected chart renderer.  A failed chart is reported and skipped; any
other failure aborts generation with a single ReportGenerationError.
Files written before the failure are left in place.
"""

from __future__ import annotations

import shutil
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from htmlreport.analysis.grouping import group_by_class, group_by_label
from htmlreport.analysis.summary import RunSummary, compute_summary, compute_totals
from htmlreport.config import ReportConfig
from htmlreport.model.results import ResultSet, Suite, TestMethod, TestRun
from htmlreport.reporting.charts import (
    ChartSegment,
    PieChartRenderer,
    build_pie_segments,
)
from htmlreport.reporting.html_renderer import HtmlRenderer

INDEX_FILE = "index.html"
SUITES_FILE = "suites.html"
OVERVIEW_FILE = "overview.html"
GROUPS_FILE = "groups.html"
RESULTS_FILE = "results.html"
OUTPUT_FILE = "output.html"
STYLESHEET_FILE = "report.css"
CUSTOM_STYLE_FILE = "custom.css"
CHART_FILE = "report.png"

# Context keys
TITLE_KEY = "title"
FRAMES_KEY = "frames"
CUSTOM_STYLESHEET_KEY = "custom_stylesheet"
SUITE_KEY = "suite"
SUITES_KEY = "suites"
OVERVIEW_KEY = "overview"
TOTALS_KEY = "totals"
NAVIGATION_KEY = "navigation"
GROUPS_KEY = "groups"
RESULT_KEY = "result"
SUMMARY_KEY = "summary"
CHART_KEY = "chart"
FAILED_CONFIG_KEY = "failed_configurations"
SKIPPED_CONFIG_KEY = "skipped_configurations"
FAILED_TESTS_KEY = "failed_tests"
SKIPPED_TESTS_KEY = "skipped_tests"
PASSED_TESTS_KEY = "passed_tests"
OUTPUT_KEY = "output"
SEGMENTS_KEY = "segments"


class ReportGenerationError(RuntimeError):
    """Report generation failed; ``__cause__`` holds the triggering error."""


class Renderer(Protocol):
    def render(
        self, template_name: str, context: Mapping[str, Any], output_path: Path,
    ) -> None: ...


class ChartRenderer(Protocol):
    def render_chart(
        self, title: str, segments: Sequence[ChartSegment], output_path: Path,
    ) -> None: ...


@dataclass(frozen=True)
class PageContext:
    """Data for one output artifact.

    ``slot`` is the file name inside the report directory and
    ``template`` names what the renderer should produce.  Chart pages use
    the ``report.png`` template and go to the chart renderer.
    """

    slot: str
    template: str
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def is_chart(self) -> bool:
        return self.template == CHART_FILE


@dataclass(frozen=True)
class RunEntry:
    """A test run together with its summary and output slots."""

    index: int
    run: TestRun
    summary: RunSummary
    results_page: str
    chart_image: str


@dataclass(frozen=True)
class SuiteEntry:
    """A suite with its aggregated groups and per-run entries."""

    index: int
    suite: Suite
    groups: dict[str, list[TestMethod]]
    groups_page: str | None
    runs: list[RunEntry]

    @property
    def totals(self) -> RunSummary:
        return compute_totals(r.summary for r in self.runs)


def results_slot(suite_index: int, run_index: int) -> str:
    return f"suite{suite_index}_test{run_index}_{RESULTS_FILE}"


def chart_slot(suite_index: int, run_index: int) -> str:
    return f"suite{suite_index}_test{run_index}_{CHART_FILE}"


def groups_slot(suite_index: int) -> str:
    return f"suite{suite_index}_{GROUPS_FILE}"


class ReportAssembler:
    """Turns a result set into page contexts and writes the report."""

    def __init__(
        self,
        config: ReportConfig | None = None,
        renderer: Renderer | None = None,
        chart_renderer: ChartRenderer | None = None,
    ) -> None:
        self.config = config if config is not None else ReportConfig()
        self.renderer = renderer if renderer is not None else HtmlRenderer()
        if chart_renderer is None:
            chart_renderer = PieChartRenderer(
                width=self.config.chart_width, height=self.config.chart_height,
            )
        self.chart_renderer = chart_renderer

    def build_entries(self, suites: Sequence[Suite]) -> list[SuiteEntry]:
        """Walk suites and runs in engine order, assigning output slots."""
        entries: list[SuiteEntry] = []
        for index, suite in enumerate(suites, start=1):
            groups = group_by_label(suite.methods_by_group())
            runs = [
                RunEntry(
                    index=index2,
                    run=run,
                    summary=compute_summary(run),
                    results_page=results_slot(index, index2),
                    chart_image=chart_slot(index, index2),
                )
                for index2, run in enumerate(suite.runs, start=1)
            ]
            entries.append(SuiteEntry(
                index=index,
                suite=suite,
                groups=groups,
                groups_page=groups_slot(index) if groups else None,
                runs=runs,
            ))
        return entries

    def assemble(self, result_set: ResultSet) -> list[PageContext]:
        """Build every page of the report, in output order.

        Args:
            result_set: Suites and captured output from the test engine.

        Returns:
            PageContext list: frameset index (frames mode only), overview,
            suite navigation, groups per suite with groups, results per
            run, chart per run, log output when there is any, and the
            stylesheet.
        """
        suites = list(result_set.suites)
        entries = self.build_entries(suites)
        frames = self.config.frames
        pages: list[PageContext] = []

        if frames:
            pages.append(self._page(INDEX_FILE, INDEX_FILE, {}))

        pages.append(self._page(
            OVERVIEW_FILE if frames else INDEX_FILE,
            OVERVIEW_FILE,
            {
                SUITES_KEY: suites,
                OVERVIEW_KEY: entries,
                TOTALS_KEY: compute_totals(e.totals for e in entries),
            },
        ))
        pages.append(self._page(
            SUITES_FILE, SUITES_FILE,
            {SUITES_KEY: suites, NAVIGATION_KEY: entries},
        ))

        for entry in entries:
            if entry.groups_page is not None:
                pages.append(self._page(
                    entry.groups_page, GROUPS_FILE,
                    {SUITE_KEY: entry.suite, GROUPS_KEY: entry.groups},
                ))

        for entry in entries:
            for run_entry in entry.runs:
                pages.append(self._results_page(run_entry))

        for entry in entries:
            for run_entry in entry.runs:
                pages.append(PageContext(
                    slot=run_entry.chart_image,
                    template=CHART_FILE,
                    context={
                        TITLE_KEY: run_entry.run.name,
                        SEGMENTS_KEY: build_pie_segments(run_entry.summary),
                    },
                ))

        if result_set.output:
            pages.append(self._page(
                OUTPUT_FILE, OUTPUT_FILE, {OUTPUT_KEY: list(result_set.output)},
            ))

        pages.append(PageContext(slot=STYLESHEET_FILE, template=STYLESHEET_FILE))
        return pages

    def generate(self, result_set: ResultSet, output_dir: Path) -> Path:
        """Write the full report under ``output_dir``.

        Returns:
            The report directory.

        Raises:
            ReportGenerationError: If any page or resource cannot be
                produced.  Chart failures are reported and do not raise.
        """
        report_dir = Path(output_dir) / self.config.report_directory
        try:
            report_dir.mkdir(parents=True, exist_ok=True)
            for page in self.assemble(result_set):
                target = report_dir / page.slot
                if page.is_chart:
                    self._render_chart(page, target)
                else:
                    self.renderer.render(page.template, page.context, target)
            self._copy_custom_stylesheet(report_dir)
        except Exception as e:
            raise ReportGenerationError("Failed generating HTML report.") from e
        return report_dir

    def _page(
        self, slot: str, template: str, context: dict[str, Any],
    ) -> PageContext:
        context = {
            TITLE_KEY: self.config.title,
            FRAMES_KEY: self.config.frames,
            CUSTOM_STYLESHEET_KEY: self.config.stylesheet is not None,
            **context,
        }
        return PageContext(slot=slot, template=template, context=context)

    def _results_page(self, run_entry: RunEntry) -> PageContext:
        run = run_entry.run
        return self._page(run_entry.results_page, RESULTS_FILE, {
            RESULT_KEY: run,
            SUMMARY_KEY: run_entry.summary,
            CHART_KEY: run_entry.chart_image,
            FAILED_CONFIG_KEY: group_by_class(run.failed_configurations),
            SKIPPED_CONFIG_KEY: group_by_class(run.skipped_configurations),
            FAILED_TESTS_KEY: group_by_class(run.failed),
            SKIPPED_TESTS_KEY: group_by_class(run.skipped),
            PASSED_TESTS_KEY: group_by_class(run.passed),
        })

    def _render_chart(self, page: PageContext, target: Path) -> None:
        try:
            self.chart_renderer.render_chart(
                page.context[TITLE_KEY], page.context[SEGMENTS_KEY], target,
            )
        except Exception as e:
            print(
                f"Warning: failed to create chart {page.slot}: {e}",
                file=sys.stderr,
            )

    def _copy_custom_stylesheet(self, report_dir: Path) -> None:
        stylesheet = self.config.stylesheet
        if stylesheet is not None:
            shutil.copyfile(stylesheet, report_dir / CUSTOM_STYLE_FILE)
