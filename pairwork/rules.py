"""
Deterministic parsing rules.

This file exists to make the accepted input shapes explicit and enforceable.
"""

import re

MIN_FIELDS = 3
NULL_TOKEN = "NULL"

# Order matters: the first format that matches wins, so ambiguous inputs such
# as 01/02/2024 resolve to MM/DD/YYYY.
DATE_FORMATS = (
    (re.compile(r"\d{4}-\d{2}-\d{2}"), "%Y-%m-%d"),  # YYYY-MM-DD
    (re.compile(r"\d{2}/\d{2}/\d{4}"), "%m/%d/%Y"),  # MM/DD/YYYY
    (re.compile(r"\d{2}/\d{2}/\d{4}"), "%d/%m/%Y"),  # DD/MM/YYYY
    (re.compile(r"\d{2}-\d{2}-\d{4}"), "%d-%m-%Y"),  # DD-MM-YYYY
    (re.compile(r"\d{2}-\d{2}-\d{4}"), "%m-%d-%Y"),  # MM-DD-YYYY
    (re.compile(r"\d{4}/\d{2}/\d{2}"), "%Y/%m/%d"),  # YYYY/MM/DD
    (re.compile(r"\d{2}\.\d{2}\.\d{4}"), "%d.%m.%Y"),  # DD.MM.YYYY
    (re.compile(r"\d{2}\.\d{2}\.\d{4}"), "%m.%d.%Y"),  # MM.DD.YYYY
)

CANDIDATE_DELIMITERS = [",", ";", "\t", "|"]
SNIFF_SAMPLE_CHARS = 4096
DEFAULT_DELIMITER = ","
