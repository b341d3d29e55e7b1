"""
Failures the service reports to its callers.

Malformed individual rows are never errors; they are dropped during
normalization. Only whole-input conditions are raised.
"""

from __future__ import annotations


class PairworkError(Exception):
    status_code = 400
    title = "Processing Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyInput(PairworkError):
    title = "Empty Input"

    def __init__(self, message: str = "The uploaded file contains no data rows. Please upload a file with employee records."):
        super().__init__(message)


class NoValidRecords(PairworkError):
    title = "No Valid Records"

    def __init__(self, message: str = "No valid employee records found in the CSV file. Please check the format."):
        super().__init__(message)


class NoOverlap(PairworkError):
    status_code = 404
    title = "No Overlap"

    def __init__(self, message: str = "No overlapping work periods found between employees. Please check your data."):
        super().__init__(message)


class UnsupportedFile(PairworkError):
    status_code = 422
    title = "Unsupported File"

    def __init__(self, message: str = "Only CSV files are supported"):
        super().__init__(message)


class FileTooLarge(PairworkError):
    status_code = 413
    title = "File Size Exceeded"

    def __init__(self, limit: int):
        super().__init__(f"The uploaded file is too large. Maximum size is {limit} bytes.")
        self.limit = limit
