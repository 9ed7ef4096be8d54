"""Pass/fail/skip pie charts for test runs.

``build_pie_segments`` turns a run summary into the ordered chart dataset;
``PieChartRenderer`` draws a dataset to a PNG with matplotlib.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from htmlreport.analysis.summary import RunSummary  # noqa: E402

# Segment colors, assigned by dataset key index
PALETTE: tuple[str, ...] = ("green", "red", "blue")


@dataclass(frozen=True)
class ChartSegment:
    """One slice of a pie chart."""

    label: str
    count: int
    color: str


def segment_color(index: int, palette: Sequence[str] = PALETTE) -> str:
    """Color for the index-th dataset key, cycling through the palette."""
    return palette[index % len(palette)]


def build_pie_segments(summary: RunSummary) -> list[ChartSegment]:
    """Build the Passed/Failed/Skipped dataset for a run summary.

    Labels carry the integer percentage, e.g. ``Passed (70%)``.
    """
    entries = [
        ("Passed", summary.passed, summary.passed_pct),
        ("Failed", summary.failed, summary.failed_pct),
        ("Skipped", summary.skipped, summary.skipped_pct),
    ]
    return [
        ChartSegment(
            label=f"{name} ({pct}%)", count=count, color=segment_color(i),
        )
        for i, (name, count, pct) in enumerate(entries)
    ]


class PieChartRenderer:
    """Draws chart datasets as PNG pie charts without a legend."""

    def __init__(self, width: int = 400, height: int = 220, dpi: int = 100) -> None:
        self.width = width
        self.height = height
        self.dpi = dpi

    def render_chart(
        self,
        title: str,
        segments: Sequence[ChartSegment],
        output_path: Path,
    ) -> None:
        """Render one pie chart to ``output_path``.

        Zero-count segments are left out of the pie.  When every segment
        is zero a placeholder is drawn instead.

        Raises:
            ValueError: If output_path doesn't end in .png.
        """
        if not str(output_path).endswith(".png"):
            raise ValueError(f"output_path must end in .png, got: {output_path}")

        fig, ax = plt.subplots(
            figsize=(self.width / self.dpi, self.height / self.dpi),
            dpi=self.dpi,
        )
        try:
            visible = [s for s in segments if s.count > 0]
            if visible:
                ax.pie(
                    [s.count for s in visible],
                    labels=[s.label for s in visible],
                    colors=[s.color for s in visible],
                    startangle=90,
                    counterclock=False,
                    textprops={"fontsize": 8},
                )
                ax.axis("equal")
            else:
                ax.text(
                    0.5, 0.5, "No tests",
                    ha="center", va="center", transform=ax.transAxes,
                )
                ax.axis("off")
            ax.set_title(title, fontsize=10, fontweight="bold")

            output_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(output_path, dpi=self.dpi)
        finally:
            plt.close(fig)
