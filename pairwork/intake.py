"""
CSV intake: uploaded bytes -> rows of raw text fields.

Responsibilities:
- encoding detection + decoding
- newline normalization
- delimiter detection
- blank line removal

Field values are returned untouched; typing them is the normalizer's job.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List

from charset_normalizer import from_bytes

from .rules import CANDIDATE_DELIMITERS, DEFAULT_DELIMITER, SNIFF_SAMPLE_CHARS

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


@dataclass
class IntakeResult:
    rows: List[List[str]]
    encoding: str
    delimiter: str
    report: Dict[str, Any] = field(default_factory=dict)


def decode_upload(raw: bytes) -> tuple[str, Dict[str, Any]]:
    """
    Decode uploaded bytes to text with LF newlines.

    Rules:
    - Detect encoding best-effort via charset-normalizer.
    - A UTF-8 BOM is consumed, not kept as a character.
    - If decode fails, fall back to UTF-8, then to replacement characters.
    """
    detected = None
    match = from_bytes(raw).best()
    if match is not None:
        detected = match.encoding

    decode_used = detected or "utf-8"
    if raw.startswith(UTF8_BOM) and decode_used.lower().replace("-", "_") in ("utf_8", "utf8"):
        decode_used = "utf-8-sig"

    decode_fallback = False
    try:
        text = raw.decode(decode_used)
    except (UnicodeDecodeError, LookupError):
        decode_fallback = True
        try:
            text = raw.decode("utf-8-sig")
            decode_used = "utf-8-sig"
        except UnicodeDecodeError:
            text = raw.decode("utf-8", errors="replace")
            decode_used = "utf-8"

    newlines = {
        "crlf": text.count("\r\n"),
        "cr": text.count("\r") - text.count("\r\n"),
    }
    text = text.replace("\r\n", "\n").replace("\r", "\n")

    report = {
        "detected": detected,
        "decode_used": decode_used,
        "decode_fallback": decode_fallback,
        "newlines_changed": newlines["crlf"] > 0 or newlines["cr"] > 0,
    }
    return text, report


def sniff_delimiter(text: str) -> tuple[str, bool]:
    sample = text[:SNIFF_SAMPLE_CHARS]
    try:
        dialect = csv.Sniffer().sniff(sample, delimiters=CANDIDATE_DELIMITERS)
    except csv.Error:
        # Sniffer gives up on ragged rows (e.g. a missing end date column);
        # fall back to the most frequent candidate.
        counts = {d: sample.count(d) for d in CANDIDATE_DELIMITERS}
        best = max(CANDIDATE_DELIMITERS, key=lambda d: counts[d])
        return (best if counts[best] > 0 else DEFAULT_DELIMITER), False
    return dialect.delimiter, True


def split_rows(text: str, delimiter: str) -> tuple[List[List[str]], List[int]]:
    """
    Split text into rows, one line at a time.

    Rows never span lines, so a stray quote only affects its own line. Lines
    the csv module refuses (e.g. a field over the field size limit) are
    skipped and their 1-based line numbers returned.
    """
    rows: List[List[str]] = []
    unreadable: List[int] = []
    for number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        try:
            row = next(csv.reader([line], delimiter=delimiter), [])
        except csv.Error as exc:
            logger.warning("skipping unreadable line %d: %s", number, exc)
            unreadable.append(number)
            continue
        if any(cell.strip() for cell in row):
            rows.append(row)
    return rows, unreadable


def read_rows(raw: bytes) -> IntakeResult:
    text, encoding_report = decode_upload(raw)
    delimiter, sniffed = sniff_delimiter(text)
    rows, unreadable = split_rows(text, delimiter)

    logger.debug(
        "intake: encoding=%s delimiter=%r sniffed=%s rows=%d",
        encoding_report["decode_used"], delimiter, sniffed, len(rows),
    )

    return IntakeResult(
        rows=rows,
        encoding=encoding_report["decode_used"],
        delimiter=delimiter,
        report={
            "encoding": encoding_report,
            "delimiter": {"detected": delimiter, "sniffed": sniffed},
            "rows": len(rows),
            "unreadable_lines": unreadable,
        },
    )
