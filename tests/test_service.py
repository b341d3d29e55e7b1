from datetime import date

import pytest

from pairwork.errors import EmptyInput, FileTooLarge, NoOverlap, NoValidRecords
from pairwork.service import analyze_csv_bytes, analyze_rows

TODAY = date(2024, 6, 1)
HEADER = ["EmpID", "ProjectID", "DateFrom", "DateTo"]


def test_longest_pair_from_rows():
    rows = [
        HEADER,
        ["1", "10", "2024-01-01", "2024-01-10"],
        ["2", "10", "2024-01-05", "2024-01-15"],
    ]
    analysis = analyze_rows(rows, today=TODAY)

    assert (analysis.pair.key.low, analysis.pair.key.high) == (1, 2)
    assert analysis.pair.total_days_worked == 5
    assert analysis.stats.header_skipped
    assert analysis.intake is None


def test_no_rows_is_empty_input():
    with pytest.raises(EmptyInput):
        analyze_rows([], today=TODAY)


def test_header_only_is_empty_input():
    with pytest.raises(EmptyInput):
        analyze_rows([HEADER], today=TODAY)


def test_single_short_row_has_no_valid_records():
    with pytest.raises(NoValidRecords):
        analyze_rows([["1", "10"]], today=TODAY)


def test_all_rows_malformed():
    with pytest.raises(NoValidRecords):
        analyze_rows([HEADER, ["a", "b", "c"], ["1", "2", "not-a-date"]], today=TODAY)


def test_single_record_has_no_overlap():
    with pytest.raises(NoOverlap):
        analyze_rows([HEADER, ["1", "10", "2024-01-01", "NULL"]], today=TODAY)


def test_null_end_date_in_any_case_is_open():
    base = [["1", "10", "2024-05-01", "2024-05-21"]]
    for token in ("NULL", "null", "Null"):
        with_token = analyze_rows(base + [["2", "10", "2024-05-11", token]], today=TODAY)
        without = analyze_rows(base + [["2", "10", "2024-05-11"]], today=TODAY)
        assert with_token.pair.total_days_worked == without.pair.total_days_worked == 10


def test_bytes_pipeline_reports_intake():
    raw = b"EmpID;ProjectID;DateFrom;DateTo\n1;10;2024-01-01;2024-01-10\n2;10;2024-01-05;2024-01-15\n"
    analysis = analyze_csv_bytes(raw, today=TODAY)

    assert analysis.pair.total_days_worked == 5
    assert analysis.intake.delimiter == ";"


def test_blank_upload_is_empty_input():
    with pytest.raises(EmptyInput):
        analyze_csv_bytes(b"", today=TODAY)
    with pytest.raises(EmptyInput):
        analyze_csv_bytes(b"\n\n  \n", today=TODAY)


def test_upload_size_limit():
    with pytest.raises(FileTooLarge) as excinfo:
        analyze_csv_bytes(b"1,10,2024-01-01,NULL\n", today=TODAY, max_bytes=5)
    assert excinfo.value.status_code == 413
