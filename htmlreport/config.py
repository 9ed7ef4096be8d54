"""Report configuration.

Reads an optional YAML (or JSON) configuration file and merges it over
the defaults.  Explicit overrides, typically from the command line, take
precedence over the file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

# Default configuration values
DEFAULT_CONFIG: dict[str, Any] = {
    "frames": True,
    "title": "Test Results Report",
    "report_directory": "html",
    "stylesheet": None,
    "chart_width": 400,
    "chart_height": 220,
}


class ReportConfig:
    """Settings that shape the generated report."""

    def __init__(self, path: Path | None = None, **overrides: Any) -> None:
        self.path = path
        self._data: dict[str, Any] = dict(DEFAULT_CONFIG)
        if path is not None and path.exists():
            self._load()
        for key, value in overrides.items():
            if key not in DEFAULT_CONFIG:
                raise ValueError(f"Unknown config key: {key}")
            if value is not None:
                self._data[key] = value

    def _load(self) -> None:
        """Load config from the file."""
        assert self.path is not None
        try:
            data = yaml.safe_load(self.path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                self._data = {**DEFAULT_CONFIG, **data}
        except (yaml.YAMLError, OSError):
            self._data = dict(DEFAULT_CONFIG)

    @property
    def frames(self) -> bool:
        """Whether to write a frameset index with a navigation frame."""
        return bool(self._data.get("frames", DEFAULT_CONFIG["frames"]))

    @property
    def title(self) -> str:
        return str(self._data.get("title") or DEFAULT_CONFIG["title"])

    @property
    def report_directory(self) -> str:
        """Subdirectory of the output directory that receives the report."""
        return str(
            self._data.get("report_directory")
            or DEFAULT_CONFIG["report_directory"]
        )

    @property
    def stylesheet(self) -> Path | None:
        """Custom stylesheet to copy into the report (None = none)."""
        val = self._data.get("stylesheet")
        return Path(val) if val else None

    @property
    def chart_width(self) -> int:
        return int(self._data.get("chart_width", DEFAULT_CONFIG["chart_width"]))

    @property
    def chart_height(self) -> int:
        return int(
            self._data.get("chart_height", DEFAULT_CONFIG["chart_height"])
        )
