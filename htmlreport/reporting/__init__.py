"""Report assembly, HTML page rendering and chart rendering."""

from htmlreport.reporting.assembler import (
    PageContext,
    ReportAssembler,
    ReportGenerationError,
)
from htmlreport.reporting.charts import PieChartRenderer, build_pie_segments
from htmlreport.reporting.html_renderer import HtmlRenderer

__all__ = [
    "HtmlRenderer",
    "PageContext",
    "PieChartRenderer",
    "ReportAssembler",
    "ReportGenerationError",
    "build_pie_segments",
]
