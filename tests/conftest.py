"""Shared fixtures: a fake renderer command and a blank-PDF factory."""

import sys
from pathlib import Path

import pytest
from PyPDF2 import PdfWriter

from csvtopdf.contexts.rendering import RenderCommand
from csvtopdf.utils.config import load_settings

FAKE_RENDERER = Path(__file__).parent / "fixtures" / "fake_renderer.py"


@pytest.fixture
def fake_command() -> RenderCommand:
    """Renderer command that runs tests/fixtures/fake_renderer.py with this interpreter."""
    return RenderCommand(binary=sys.executable, args=(str(FAKE_RENDERER), "{input}", "{output}"))


@pytest.fixture
def fake_settings(tmp_path):
    """Run settings pointing at the fake renderer, staging under tmp_path/temp."""
    return load_settings(
        overrides={
            "renderer.binary": sys.executable,
            "renderer.args": [str(FAKE_RENDERER), "{input}", "{output}"],
            "renderer.timeout_s": 5.0,
            "staging.dir": str(tmp_path / "temp"),
        }
    )


@pytest.fixture
def make_pdf():
    """Factory writing a PDF of blank pages with the given width."""

    def _make_pdf(path: Path, width: float = 100, pages: int = 1) -> Path:
        writer = PdfWriter()
        for _ in range(pages):
            writer.add_blank_page(width=width, height=200)
        with path.open("wb") as f:
            writer.write(f)
        return path

    return _make_pdf


@pytest.fixture
def dirs(tmp_path):
    """Existing (staging_dir, output_dir) pair."""
    staging_dir = tmp_path / "staging"
    output_dir = tmp_path / "output"
    staging_dir.mkdir()
    output_dir.mkdir()
    return staging_dir, output_dir
