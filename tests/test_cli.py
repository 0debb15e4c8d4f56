"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from conftest import build_package
from typer.testing import CliRunner

from office_meta import __version__
from office_meta import cli as cli_module
from office_meta.cli import app
from office_meta.meta import read_meta

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path: Path):
    """Keep settings deterministic and output inside tmp_path."""
    for name in (
        "OFFICE_META_CONFIG",
        "OFFICE_META_OUTPUT_DIR",
        "OFFICE_META_UTC_OFFSET",
        "OFFICE_META_SOFFICE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


class TestCLIVersion:
    """Tests for version command."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestCLIHelp:
    """Tests for help output."""

    def test_main_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "show" in result.stdout
        assert "set" in result.stdout
        assert "convert" in result.stdout

    def test_set_help(self):
        result = runner.invoke(app, ["set", "--help"])
        assert result.exit_code == 0
        for option in ("--title", "--created", "--offset", "--total-time", "--overwrite"):
            assert option in result.stdout


class TestCLIShow:
    """Tests for the show command."""

    def test_show_table(self, docx_path: Path):
        result = runner.invoke(app, ["show", str(docx_path)])
        assert result.exit_code == 0
        assert "Format: DOCX" in result.stdout
        assert "Quarterly Report" in result.stdout
        assert "2023-05-01 08:00:00 (UTC)" in result.stdout
        assert "42 min" in result.stdout

    def test_show_json(self, docx_path: Path):
        result = runner.invoke(app, ["show", str(docx_path), "--json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["creator"] == "Jane Doe"
        assert data["totalTime"] == 42

    def test_show_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["show", str(tmp_path / "missing.docx")])
        assert result.exit_code == 1
        assert "File not found" in result.output
        assert "Hint:" in result.output

    def test_show_invalid_container(self, tmp_path: Path):
        bogus = tmp_path / "bogus.docx"
        bogus.write_text("plain text")
        result = runner.invoke(app, ["show", str(bogus)])
        assert result.exit_code == 1
        assert "not a valid Office document" in result.output

    def test_show_legacy_doc_requires_flag(self, tmp_path: Path):
        doc = tmp_path / "old.doc"
        doc.write_bytes(b"legacy")
        result = runner.invoke(app, ["show", str(doc)])
        assert result.exit_code == 1
        assert "--convert-doc" in result.output


class TestCLISet:
    """Tests for the set command."""

    def test_set_writes_new_file(self, docx_path: Path, tmp_path: Path):
        result = runner.invoke(app, ["set", str(docx_path), "--title", "New Title"])
        assert result.exit_code == 0, result.output

        out = tmp_path / "office-meta-output" / "report.meta.docx"
        assert "New file created" in result.stdout
        assert read_meta(out)["title"] == "New Title"
        assert read_meta(docx_path)["title"] == "Quarterly Report"

    def test_set_overwrite(self, docx_path: Path):
        result = runner.invoke(app, ["set", str(docx_path), "--author", "Ada", "--overwrite"])
        assert result.exit_code == 0, result.output
        assert "Original file updated" in result.stdout
        assert read_meta(docx_path)["creator"] == "Ada"

    def test_set_output_path(self, docx_path: Path, tmp_path: Path):
        out = tmp_path / "custom.docx"
        result = runner.invoke(
            app, ["set", str(docx_path), "--keywords", "a, b", "--output", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert read_meta(out)["keywords"] == "a, b"

    def test_set_dates_with_offset(self, docx_path: Path, tmp_path: Path):
        out = tmp_path / "dated.docx"
        result = runner.invoke(
            app,
            [
                "set",
                str(docx_path),
                "--created",
                "2024-01-01 01:00:00",
                "--offset",
                "+5",
                "-o",
                str(out),
            ],
        )
        assert result.exit_code == 0, result.output
        assert read_meta(out)["created"] == "2023-12-31T20:00:00.000Z"

    def test_set_offset_from_environment(self, docx_path: Path, tmp_path: Path):
        out = tmp_path / "dated.docx"
        result = runner.invoke(
            app,
            ["set", str(docx_path), "--modified", "2024-06-01 12:00", "-o", str(out)],
            env={"OFFICE_META_UTC_OFFSET": "-2"},
        )
        assert result.exit_code == 0, result.output
        assert read_meta(out)["modified"] == "2024-06-01T14:00:00.000Z"

    def test_set_invalid_total_time_is_reported(self, docx_path: Path, tmp_path: Path):
        out = tmp_path / "out.docx"
        result = runner.invoke(
            app,
            ["set", str(docx_path), "--title", "T", "--total-time", "abc", "-o", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert "totalTime: skipped" in result.output
        meta = read_meta(out)
        assert meta["title"] == "T"
        assert meta["totalTime"] == 42

    def test_set_from_file(self, docx_path: Path, tmp_path: Path):
        updates = tmp_path / "updates.yaml"
        updates.write_text("updates:\n  subject: From file\n  totalTime: 7\n", encoding="utf-8")
        out = tmp_path / "out.docx"
        result = runner.invoke(
            app, ["set", str(docx_path), "--from-file", str(updates), "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        meta = read_meta(out)
        assert meta["subject"] == "From file"
        assert meta["totalTime"] == 7

    def test_set_requires_a_field(self, docx_path: Path):
        result = runner.invoke(app, ["set", str(docx_path)])
        assert result.exit_code == 1
        assert "No metadata fields given" in result.output

    def test_set_rejects_output_and_overwrite(self, docx_path: Path, tmp_path: Path):
        result = runner.invoke(
            app,
            ["set", str(docx_path), "--title", "x", "--overwrite", "-o", str(tmp_path / "o.docx")],
        )
        assert result.exit_code == 1

    def test_set_xlsx_unsupported(self, tmp_path: Path):
        book = build_package(tmp_path / "book.xlsx")
        result = runner.invoke(app, ["set", str(book), "--title", "x"])
        assert result.exit_code == 1
        assert "not supported for write" in result.output
        assert not (tmp_path / "office-meta-output").exists()

    def test_set_missing_app_stream(self, no_app_docx_path: Path):
        result = runner.invoke(app, ["set", str(no_app_docx_path), "--title", "x"])
        assert result.exit_code == 1
        assert "docProps/app.xml is missing" in result.output

    def test_set_invalid_offset(self, docx_path: Path):
        result = runner.invoke(
            app, ["set", str(docx_path), "--created", "2024-01-01", "--offset", "20"]
        )
        assert result.exit_code == 1
        assert "Invalid UTC offset" in result.output

    def test_set_converts_legacy_doc(self, tmp_path: Path, monkeypatch):
        doc = tmp_path / "old.doc"
        doc.write_bytes(b"legacy")

        def fake_convert(path, soffice_path=None):
            return build_package(Path(path).with_suffix(".docx"))

        monkeypatch.setattr(cli_module, "convert_doc_to_docx", fake_convert)
        result = runner.invoke(
            app, ["set", str(doc), "--title", "Converted", "--convert-doc", "--overwrite"]
        )
        assert result.exit_code == 0, result.output
        assert read_meta(tmp_path / "old.docx")["title"] == "Converted"


class TestCLIConfig:
    """Tests for the --config option."""

    def test_output_dir_from_config(self, docx_path: Path, tmp_path: Path):
        config = tmp_path / "settings.yaml"
        config.write_text(f"output_dir: {tmp_path / 'configured'}\n", encoding="utf-8")
        result = runner.invoke(
            app, ["--config", str(config), "set", str(docx_path), "--title", "Configured"]
        )
        assert result.exit_code == 0, result.output
        assert read_meta(tmp_path / "configured" / "report.meta.docx")["title"] == "Configured"

    def test_invalid_config(self, docx_path: Path, tmp_path: Path):
        result = runner.invoke(
            app, ["--config", str(tmp_path / "missing.yaml"), "show", str(docx_path)]
        )
        assert result.exit_code == 1
        assert "Config file not found" in result.output
