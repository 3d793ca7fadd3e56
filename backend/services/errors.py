# backend/services/errors.py

from typing import Optional


class DatasetError(Exception):
    """Base class for every failure the dataset pipeline reports."""


class ValidationError(DatasetError):
    """Request input was malformed or not allowed (media type, size, name)."""


class NotFound(DatasetError):
    def __init__(self, name: str):
        super().__init__(f"Dataset not found: {name}")
        self.name = name


class ParseError(DatasetError):
    """
    Dataset content is not well-formed CSV, or a row's numeric fields
    do not parse. `line` is the 1-based source line when known.
    """

    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class IOFailure(DatasetError):
    """The backing medium could not be read or written."""


class Cancelled(DatasetError):
    """The caller stopped waiting for the result."""
