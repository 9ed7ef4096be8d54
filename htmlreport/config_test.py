"""Unit tests for the config module."""

from __future__ import annotations

import json
import tempfile
from pathlib import Path

import pytest

from htmlreport.config import DEFAULT_CONFIG, ReportConfig


def _assert_defaults(cfg: ReportConfig) -> None:
    assert cfg.frames is True
    assert cfg.title == DEFAULT_CONFIG["title"]
    assert cfg.report_directory == "html"
    assert cfg.stylesheet is None
    assert cfg.chart_width == 400
    assert cfg.chart_height == 220


class TestReportConfigCreate:
    """Tests for creating ReportConfig instances."""

    def test_no_path_uses_defaults(self):
        """No path gives default config values."""
        _assert_defaults(ReportConfig(None))

    def test_nonexistent_path_uses_defaults(self):
        """Nonexistent file path gives default config values."""
        with tempfile.TemporaryDirectory() as tmpdir:
            cfg = ReportConfig(Path(tmpdir) / "missing.yaml")
            _assert_defaults(cfg)

    def test_load_yaml_file(self):
        """Config is loaded from a YAML file."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "report.yaml"
            path.write_text("frames: false\ntitle: Nightly\nchart_width: 600\n")
            cfg = ReportConfig(path)
            assert cfg.frames is False
            assert cfg.title == "Nightly"
            assert cfg.chart_width == 600
            assert cfg.chart_height == 220  # default

    def test_load_json_file(self):
        """JSON config files are accepted."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "report.json"
            path.write_text(json.dumps({"report_directory": "out"}))
            cfg = ReportConfig(path)
            assert cfg.report_directory == "out"
            assert cfg.frames is True

    def test_load_utf8_file(self):
        """Config files are read as UTF-8."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "report.yaml"
            path.write_bytes("title: Prüfbericht\n".encode("utf-8"))
            assert ReportConfig(path).title == "Prüfbericht"

    def test_corrupted_file_uses_defaults(self):
        """Unparseable file falls back to defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "report.yaml"
            path.write_text("frames: [unclosed\n")
            cfg = ReportConfig(path)
            _assert_defaults(cfg)

    def test_non_mapping_file_uses_defaults(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "report.yaml"
            path.write_text("- just\n- a list\n")
            _assert_defaults(ReportConfig(path))


class TestReportConfigOverrides:
    """Tests for explicit overrides."""

    def test_override_wins_over_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "report.yaml"
            path.write_text("frames: true\ntitle: From file\n")
            cfg = ReportConfig(path, frames=False)
            assert cfg.frames is False
            assert cfg.title == "From file"

    def test_none_override_ignored(self):
        """A None override leaves the configured value alone."""
        cfg = ReportConfig(None, title=None, frames=None)
        assert cfg.title == DEFAULT_CONFIG["title"]
        assert cfg.frames is True

    def test_stylesheet_is_path(self):
        cfg = ReportConfig(None, stylesheet="styles/custom.css")
        assert cfg.stylesheet == Path("styles/custom.css")

    def test_unknown_override_rejected(self):
        with pytest.raises(ValueError, match="Unknown config key"):
            ReportConfig(None, colour="red")
