"""Tests for the report generator entry point."""

from __future__ import annotations

import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest

from htmlreport.main import main, parse_args
from htmlreport.reporting.assembler import ReportGenerationError

_RESULTS = """\
suites:
  - name: Smoke
    tests:
      - name: Unit
        passed:
          - {class: ClassA, method: method1, start_millis: 1}
        failed:
          - {class: ClassB, method: method2, start_millis: 2}
"""


class TestParseArgs:
    """Tests for command-line parsing."""

    def test_required_args(self):
        args = parse_args(["--results", "r.yaml", "--output-dir", "out"])
        assert args.results == Path("r.yaml")
        assert args.output_dir == Path("out")
        assert args.config_file is None
        assert args.frames is None
        assert args.stylesheet is None
        assert args.title is None

    def test_no_frames(self):
        args = parse_args(["--results", "r", "--output-dir", "o", "--no-frames"])
        assert args.frames is False

    def test_missing_results_rejected(self):
        with pytest.raises(SystemExit):
            parse_args(["--output-dir", "out"])


class TestMain:
    """Tests for main()."""

    def test_generates_report(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            results = Path(tmpdir) / "results.yaml"
            results.write_text(_RESULTS)
            out = Path(tmpdir) / "out"

            with patch("htmlreport.main.ReportAssembler") as mock_assembler:
                mock_assembler.return_value.generate.return_value = out / "html"
                rc = main(["--results", str(results), "--output-dir", str(out)])

            assert rc == 0
            config = mock_assembler.call_args.args[0]
            assert config.frames is True
            result_set = mock_assembler.return_value.generate.call_args.args[0]
            assert result_set.suites[0].name == "Smoke"
        assert "HTML report written to" in capsys.readouterr().out

    def test_cli_overrides_reach_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            results = Path(tmpdir) / "results.yaml"
            results.write_text(_RESULTS)
            with patch("htmlreport.main.ReportAssembler") as mock_assembler:
                mock_assembler.return_value.generate.return_value = Path(tmpdir)
                main([
                    "--results", str(results),
                    "--output-dir", tmpdir,
                    "--no-frames",
                    "--title", "Nightly",
                    "--stylesheet", "my.css",
                ])
            config = mock_assembler.call_args.args[0]
            assert config.frames is False
            assert config.title == "Nightly"
            assert config.stylesheet == Path("my.css")

    def test_missing_results_file(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            rc = main([
                "--results", str(Path(tmpdir) / "missing.yaml"),
                "--output-dir", tmpdir,
            ])
        assert rc == 1
        assert "Results file not found" in capsys.readouterr().err

    def test_invalid_results(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            results = Path(tmpdir) / "results.yaml"
            results.write_text("tests: []\n")
            rc = main(["--results", str(results), "--output-dir", tmpdir])
        assert rc == 1
        assert "Invalid results document" in capsys.readouterr().err

    def test_generation_failure(self, capsys):
        with tempfile.TemporaryDirectory() as tmpdir:
            results = Path(tmpdir) / "results.yaml"
            results.write_text(_RESULTS)
            with patch("htmlreport.main.ReportAssembler") as mock_assembler:
                error = ReportGenerationError("Failed generating HTML report.")
                error.__cause__ = OSError("disk full")
                mock_assembler.return_value.generate.side_effect = error
                rc = main(["--results", str(results), "--output-dir", tmpdir])
        assert rc == 1
        err = capsys.readouterr().err
        assert "Failed generating HTML report." in err
        assert "disk full" in err
