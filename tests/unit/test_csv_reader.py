"""Unit tests for CSV and template intake."""

import pytest

from csvtopdf.contexts.intake import load_template, read_rows
from csvtopdf.exceptions import ParseError


@pytest.mark.unit
def test_read_rows_excludes_header_by_default(tmp_path):
    csv_file = tmp_path / "people.csv"
    csv_file.write_text("name,city\nAnn,Oslo\nBob,Lima\n", encoding="utf-8")

    assert read_rows(csv_file) == [["Ann", "Oslo"], ["Bob", "Lima"]]


@pytest.mark.unit
def test_read_rows_include_first(tmp_path):
    csv_file = tmp_path / "people.csv"
    csv_file.write_text("name,city\nAnn,Oslo\n", encoding="utf-8")

    assert read_rows(csv_file, exclude_first=False) == [["name", "city"], ["Ann", "Oslo"]]


@pytest.mark.unit
def test_read_rows_quoted_fields(tmp_path):
    csv_file = tmp_path / "quoted.csv"
    csv_file.write_text('h1,h2\n"Smith, Jr.","line one\nline two"\n', encoding="utf-8")

    assert read_rows(csv_file) == [["Smith, Jr.", "line one\nline two"]]


@pytest.mark.unit
def test_read_rows_skips_blank_lines_and_bom(tmp_path):
    csv_file = tmp_path / "bom.csv"
    csv_file.write_bytes("\ufeffa,b\n\n1,2\n".encode("utf-8"))

    assert read_rows(csv_file, exclude_first=False) == [["a", "b"], ["1", "2"]]


@pytest.mark.unit
def test_read_rows_empty_file(tmp_path):
    csv_file = tmp_path / "empty.csv"
    csv_file.write_text("", encoding="utf-8")

    assert read_rows(csv_file) == []


@pytest.mark.unit
def test_read_rows_ragged_record_raises(tmp_path):
    csv_file = tmp_path / "ragged.csv"
    csv_file.write_text("a,b\n1,2\n3\n", encoding="utf-8")

    with pytest.raises(ParseError) as exc_info:
        read_rows(csv_file)

    assert exc_info.value.line_number == 3
    assert exc_info.value.source_path == csv_file


@pytest.mark.unit
def test_read_rows_bad_quoting_raises(tmp_path):
    csv_file = tmp_path / "bad.csv"
    csv_file.write_text('a,b\n"unterminated,2\n', encoding="utf-8")

    with pytest.raises(ParseError):
        read_rows(csv_file)


@pytest.mark.unit
def test_read_rows_missing_file_raises(tmp_path):
    with pytest.raises(ParseError, match="Error reading input file"):
        read_rows(tmp_path / "missing.csv")


@pytest.mark.unit
def test_load_template(tmp_path):
    template_file = tmp_path / "letter.html"
    template_file.write_text("<p>Dear <!--=0--></p>", encoding="utf-8")

    assert load_template(template_file) == "<p>Dear <!--=0--></p>"


@pytest.mark.unit
def test_load_template_missing_raises(tmp_path):
    with pytest.raises(ParseError, match="Error reading template"):
        load_template(tmp_path / "missing.html")
