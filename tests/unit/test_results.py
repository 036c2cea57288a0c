"""Unit tests for RowStatus and RunResult aggregation."""

from pathlib import Path

import pytest

from csvtopdf.exceptions import MergeError, RenderTimeoutError
from csvtopdf.results import RowFailure, RowSuccess, RunResult


@pytest.mark.unit
def test_record_partitions_rows():
    result = RunResult(row_count=3)
    timeout_error = RenderTimeoutError(1, 15.0)

    # Completion order differs from row order
    result.record(RowSuccess(2, Path("2.pdf")))
    result.record(RowFailure(1, timeout_error))
    result.record(RowSuccess(0, Path("0.pdf")))

    assert result.succeeded == {0: Path("0.pdf"), 2: Path("2.pdf")}
    assert result.failed == {1: timeout_error}
    assert result.is_complete
    assert result.success_count == 2
    assert result.failure_count == 1
    assert result.failed_rows() == [1]


@pytest.mark.unit
def test_ordered_outputs_sorted_by_row_number():
    result = RunResult(row_count=5)
    for row_num in [4, 0, 2, 1]:
        result.record(RowSuccess(row_num, Path(f"{row_num}.pdf")))

    assert result.ordered_outputs() == [Path("0.pdf"), Path("1.pdf"), Path("2.pdf"), Path("4.pdf")]
    assert not result.is_complete


@pytest.mark.unit
def test_record_rejects_duplicate_row():
    result = RunResult(row_count=2)
    result.record(RowSuccess(0, Path("0.pdf")))

    with pytest.raises(ValueError, match="reported twice"):
        result.record(RowFailure(0, RuntimeError("late")))


@pytest.mark.unit
@pytest.mark.parametrize("row_num", [-1, 2])
def test_record_rejects_out_of_range_row(row_num):
    result = RunResult(row_count=2)

    with pytest.raises(ValueError, match="outside"):
        result.record(RowSuccess(row_num, Path("x.pdf")))


@pytest.mark.unit
def test_all_succeeded_accounts_for_merge_error():
    result = RunResult(row_count=1)
    result.record(RowSuccess(0, Path("0.pdf")))
    assert result.all_succeeded

    result.merge_error = MergeError("boom")
    assert not result.all_succeeded
    # Merge failure leaves row results alone
    assert result.succeeded == {0: Path("0.pdf")}


@pytest.mark.unit
def test_status_ok_flag():
    assert RowSuccess(0, Path("0.pdf")).ok is True
    assert RowFailure(0, RuntimeError("x")).ok is False
