"""
Integration tests for the row renderer - runs a real subprocess (tests/fixtures/fake_renderer.py).
"""

import os
import sys
import time

import pytest
from omegaconf import OmegaConf
from PyPDF2 import PdfReader

from csvtopdf.contexts.rendering import RenderCommand, render_row
from csvtopdf.exceptions import RenderProcessError, RenderTimeoutError, StagingWriteError
from csvtopdf.results import RowFailure, RowSuccess


@pytest.mark.integration
def test_render_success_goes_to_output_dir(dirs, fake_command):
    staging_dir, output_dir = dirs

    status = render_row("Hello World!", 0, staging_dir, output_dir, False, command=fake_command)

    assert isinstance(status, RowSuccess)
    assert status.row_num == 0
    assert status.output_path == output_dir / "0.pdf"
    assert status.output_path.exists()
    assert (staging_dir / "injected-template-0.html").read_text(encoding="utf-8") == "Hello World!"
    assert PdfReader(str(status.output_path)).metadata["/Subject"] == "Hello World!"


@pytest.mark.integration
def test_render_consolidating_goes_to_staging_dir(dirs, fake_command):
    staging_dir, output_dir = dirs

    status = render_row("page", 4, staging_dir, output_dir, True, command=fake_command)

    assert isinstance(status, RowSuccess)
    assert status.output_path == staging_dir / "4.pdf"
    assert not (output_dir / "4.pdf").exists()


@pytest.mark.integration
def test_render_timeout_kills_renderer(dirs, fake_command):
    staging_dir, output_dir = dirs

    status = render_row("SLEEP", 3, staging_dir, output_dir, False, timeout=1.0, command=fake_command)

    assert isinstance(status, RowFailure)
    assert isinstance(status.error, RenderTimeoutError)
    assert status.error.row_num == 3
    assert status.error.timeout == 1.0
    assert not (output_dir / "3.pdf").exists()


@pytest.mark.integration
def test_render_nonzero_exit(dirs, fake_command):
    staging_dir, output_dir = dirs

    status = render_row("FAIL", 1, staging_dir, output_dir, False, command=fake_command)

    assert isinstance(status, RowFailure)
    assert isinstance(status.error, RenderProcessError)
    assert status.error.returncode == 3


@pytest.mark.integration
def test_render_clean_exit_without_output(dirs, fake_command):
    staging_dir, output_dir = dirs

    status = render_row("NOOUTPUT", 2, staging_dir, output_dir, False, command=fake_command)

    assert isinstance(status, RowFailure)
    assert isinstance(status.error, RenderProcessError)
    assert "no output" in str(status.error)


@pytest.mark.integration
def test_stale_output_not_reported_as_success(dirs, fake_command, make_pdf):
    staging_dir, output_dir = dirs
    make_pdf(output_dir / "2.pdf")

    status = render_row("NOOUTPUT", 2, staging_dir, output_dir, False, command=fake_command)

    assert isinstance(status, RowFailure)
    assert not (output_dir / "2.pdf").exists()


@pytest.mark.integration
def test_render_timeout_kills_renderer_helpers(dirs, fake_command):
    staging_dir, output_dir = dirs

    status = render_row("SPAWN", 2, staging_dir, output_dir, False, timeout=1.0, command=fake_command)

    assert isinstance(status.error, RenderTimeoutError)
    # The helper would write its marker 2.5s after starting if it had survived
    time.sleep(3.0)
    assert not (output_dir / "2.orphan").exists()


@pytest.mark.integration
def test_render_does_not_write_through_existing_staging_file(dirs, fake_command, tmp_path):
    staging_dir, output_dir = dirs
    user_file = tmp_path / "injected-template-0.html"
    user_file.write_text("USER FILE", encoding="utf-8")
    os.link(user_file, staging_dir / "injected-template-0.html")

    status = render_row("ROW TEXT", 0, staging_dir, output_dir, False, command=fake_command)

    assert isinstance(status, RowSuccess)
    assert (staging_dir / "injected-template-0.html").read_text(encoding="utf-8") == "ROW TEXT"
    assert user_file.read_text(encoding="utf-8") == "USER FILE"


@pytest.mark.integration
def test_render_missing_binary(dirs, tmp_path):
    staging_dir, output_dir = dirs
    command = RenderCommand(binary=str(tmp_path / "no-such-renderer"))

    status = render_row("x", 0, staging_dir, output_dir, False, command=command)

    assert isinstance(status, RowFailure)
    assert isinstance(status.error, RenderProcessError)
    assert status.error.returncode is None


@pytest.mark.integration
def test_render_staging_write_error(tmp_path, fake_command):
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    missing_staging = tmp_path / "does-not-exist"

    status = render_row("x", 0, missing_staging, output_dir, False, command=fake_command)

    assert isinstance(status, RowFailure)
    assert isinstance(status.error, StagingWriteError)
    assert status.error.path == missing_staging / "injected-template-0.html"


@pytest.mark.unit
def test_render_command_build(tmp_path):
    command = RenderCommand(binary="chromium")
    argv = command.build(tmp_path / "in.html", tmp_path / "0.pdf")

    assert argv[0] == "chromium"
    assert "--headless" in argv
    assert f"--print-to-pdf={tmp_path / '0.pdf'}" in argv
    assert argv[-1] == str(tmp_path / "in.html")


@pytest.mark.unit
def test_render_command_from_settings():
    settings = OmegaConf.create({"binary": sys.executable, "args": ["run.py", "{input}", "{output}"]})
    command = RenderCommand.from_settings(settings)

    assert command.build("a.html", "b.pdf") == [sys.executable, "run.py", "a.html", "b.pdf"]
