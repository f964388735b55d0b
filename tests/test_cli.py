"""Tests for the creditbanc command-line converter."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import json

import pytest

from creditbanc import cli
from creditbanc.cli import convert_file, main


@pytest.fixture
def report_file(tmp_path, sample_report):
    path = tmp_path / "jane.md"
    path.write_text(sample_report, encoding="utf-8")
    return path


class TestConvertFile:

    def test_both_formats_next_to_input(self, report_file):
        written = convert_file(report_file, None, "both", "Credit Report")
        assert [p.name for p in written] == ["jane.json", "jane.pdf"]
        assert all(p.parent == report_file.parent for p in written)

    def test_json_contents(self, report_file):
        (json_path,) = convert_file(report_file, None, "json", "Credit Report")
        data = json.loads(json_path.read_text(encoding="utf-8"))
        assert data["fullName"] == "Jane Doe"
        assert data["alerts"] == ["Late payment in March", "High utilization"]

    def test_pdf_into_out_dir(self, report_file, tmp_path):
        out_dir = tmp_path / "out" / "nested"
        (pdf_path,) = convert_file(report_file, out_dir, "pdf", "Credit Report")
        assert pdf_path == out_dir / "jane.pdf"
        assert pdf_path.read_bytes().startswith(b"%PDF")

    def test_missing_sections_warned(self, tmp_path, caplog):
        path = tmp_path / "partial.md"
        path.write_text("## Flags or Alerts\n- High utilization\n", encoding="utf-8")
        with caplog.at_level("WARNING"):
            convert_file(path, None, "json", "Credit Report")
        assert "partial.md: missing" in caplog.text


class TestMain:

    def test_success(self, report_file):
        assert main([str(report_file), "--format", "json"]) == 0
        assert (report_file.parent / "jane.json").exists()
        assert not (report_file.parent / "jane.pdf").exists()

    def test_multiple_inputs(self, report_file, tmp_path, sample_report):
        second = tmp_path / "john.md"
        second.write_text(sample_report, encoding="utf-8")
        out_dir = tmp_path / "out"
        assert main([str(report_file), str(second), "--out-dir", str(out_dir), "--format", "json"]) == 0
        assert sorted(p.name for p in out_dir.iterdir()) == ["jane.json", "john.json"]

    def test_unreadable_input_fails(self, report_file, tmp_path):
        missing = tmp_path / "nope.md"
        assert main([str(missing), str(report_file), "--format", "json"]) == 1
        assert (report_file.parent / "jane.json").exists()

    def test_bad_format_rejected(self, report_file):
        with pytest.raises(SystemExit):
            main([str(report_file), "--format", "docx"])

    def test_render_failure_skips_file_and_continues(self, report_file, tmp_path, sample_report, monkeypatch, caplog):
        def _boom(*_args, **_kwargs):
            raise RuntimeError("cannot identify image file")

        second = tmp_path / "john.md"
        second.write_text(sample_report, encoding="utf-8")
        monkeypatch.setattr(cli, "render_report_pdf", _boom)
        with caplog.at_level("ERROR"):
            assert main([str(report_file), str(second), "--format", "both"]) == 1
        assert "Could not convert" in caplog.text
        assert (tmp_path / "jane.json").exists()
        assert (tmp_path / "john.json").exists()
        assert not (tmp_path / "john.pdf").exists()
