"""Integration tests for the render_resume.py command line."""

import importlib.util
from pathlib import Path

import pytest
from docx import Document
from loguru import logger
from pypdf import PdfReader
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).parents[2] / "scripts" / "render_resume.py"

runner = CliRunner()


@pytest.fixture
def cli(tmp_path, monkeypatch):
    script = importlib.util.spec_from_file_location("render_resume", SCRIPT_PATH)
    module = importlib.util.module_from_spec(script)
    script.loader.exec_module(module)
    monkeypatch.setattr(module, "LOGS_PATH", tmp_path / "logs")
    yield module.app
    logger.remove()


@pytest.fixture
def resume_file(fixtures_path):
    return str(fixtures_path / "jane_doe.yaml")


@pytest.mark.integration
def test_preview_title_is_the_subject(cli, resume_file, tmp_path):
    output_path = tmp_path / "preview.html"

    result = runner.invoke(cli, ["preview", resume_file, "-o", str(output_path)])

    assert result.exit_code == 0, result.output
    html = output_path.read_text(encoding="utf-8")
    assert "<title>Jane Doe Resume</title>" in html
    assert ".pdf" not in html


@pytest.mark.integration
def test_export_pdf(cli, resume_file, tmp_path):
    output_path = tmp_path / "jane.pdf"

    result = runner.invoke(cli, ["export", resume_file, "--format", "pdf", "-o", str(output_path)])

    assert result.exit_code == 0, result.output
    assert PdfReader(str(output_path)).metadata.title == "Jane Doe Resume"


@pytest.mark.integration
def test_export_docx_is_the_default(cli, resume_file, tmp_path):
    output_path = tmp_path / "jane.docx"

    result = runner.invoke(cli, ["export", resume_file, "-o", str(output_path)])

    assert result.exit_code == 0, result.output
    assert Document(str(output_path)).paragraphs[0].text == "Jane Doe"


@pytest.mark.integration
def test_export_unknown_format(cli, resume_file, tmp_path):
    result = runner.invoke(cli, ["export", resume_file, "--format", "odt", "-o", str(tmp_path / "jane.odt")])

    assert result.exit_code == 1
    assert not (tmp_path / "jane.odt").exists()
