from pairwork.intake import decode_upload, read_rows, sniff_delimiter


def test_comma_rows():
    raw = b"EmpID,ProjectID,DateFrom,DateTo\n143,12,2013-11-01,2014-01-05\n"
    result = read_rows(raw)

    assert result.delimiter == ","
    assert result.rows == [
        ["EmpID", "ProjectID", "DateFrom", "DateTo"],
        ["143", "12", "2013-11-01", "2014-01-05"],
    ]
    assert result.report["rows"] == 2


def test_semicolon_delimiter_is_detected():
    raw = b"1;10;2024-01-01;2024-01-10\n2;10;2024-01-05;2024-01-15\n"
    result = read_rows(raw)

    assert result.delimiter == ";"
    assert result.rows[1] == ["2", "10", "2024-01-05", "2024-01-15"]


def test_crlf_and_blank_lines():
    raw = b"1,10,2024-01-01,NULL\r\n\r\n,,,\r\n2,10,2024-01-05,NULL\r\n"
    result = read_rows(raw)

    assert result.rows == [
        ["1", "10", "2024-01-01", "NULL"],
        ["2", "10", "2024-01-05", "NULL"],
    ]
    assert result.report["encoding"]["newlines_changed"]


def test_utf8_bom_is_not_part_of_first_field():
    raw = b"\xef\xbb\xbfEmpID,ProjectID,DateFrom,DateTo\n1,10,2024-01-01,NULL\n"
    text, report = decode_upload(raw)

    assert text.startswith("EmpID")
    assert report["decode_used"] == "utf-8-sig"


def test_non_utf8_bytes_still_decode():
    raw = "Employé,Projet,Début,Fin\n1,10,2024-01-01,NULL\n".encode("latin-1")
    result = read_rows(raw)

    assert len(result.rows) == 2
    assert result.rows[1] == ["1", "10", "2024-01-01", "NULL"]


def test_unsniffable_text_defaults_to_comma():
    assert sniff_delimiter("") == (",", False)


def test_ragged_semicolon_rows_still_split():
    raw = b"1;10;2024-01-01;2024-01-10\n2;10;2024-01-05\n3;11;2024-01-05;NULL\n"
    result = read_rows(raw)

    assert result.delimiter == ";"
    assert result.rows[1] == ["2", "10", "2024-01-05"]


def test_stray_quote_does_not_swallow_following_lines():
    raw = (
        b'3,10,"2024-01-01,2024-01-10\n'
        + b"".join(b"%d,10,2024-01-05,2024-01-15\n" % emp for emp in range(100, 400))
    )
    result = read_rows(raw)

    assert len(result.rows) == 301
    assert result.rows[-1] == ["399", "10", "2024-01-05", "2024-01-15"]
    assert result.report["unreadable_lines"] == []


def test_oversized_field_line_is_skipped():
    raw = (
        b"1,10,2024-01-01,2024-01-10\n"
        b"2,10,2024-01-05,2024-01-15\n"
        b"4,10," + b"x" * 200_000 + b"\n"
        b"5,10,2024-01-05,NULL\n"
    )
    result = read_rows(raw)

    assert result.rows == [
        ["1", "10", "2024-01-01", "2024-01-10"],
        ["2", "10", "2024-01-05", "2024-01-15"],
        ["5", "10", "2024-01-05", "NULL"],
    ]
    assert result.report["unreadable_lines"] == [3]
