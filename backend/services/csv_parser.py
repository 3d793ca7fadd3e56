# backend/services/csv_parser.py

import asyncio
import contextlib
import csv
import io
import logging
import math
import re
import threading
from typing import BinaryIO, Iterator, List, Optional, Tuple

from anyio import to_thread

from models.plot_models import DataPoint
from services.errors import Cancelled, ParseError
from utils.data_store import DatasetStore

logger = logging.getLogger(__name__)

# ASCII base-10 only: optional sign, digits with optional fraction (or a bare
# fraction), optional exponent. No whitespace, underscores, hex, inf or nan.
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def parse_float(raw: str, line: int, column: str) -> float:
    if not _FLOAT_RE.fullmatch(raw):
        raise ParseError(f"{column} value {raw!r} is not a number", line)

    value = float(raw)
    if not math.isfinite(value):
        raise ParseError(f"{column} value {raw!r} is out of range", line)
    return value


class _LineTap:
    """Line iterator that remembers the raw text of the current record."""

    def __init__(self, lines: Iterator[str]):
        self._lines = lines
        self._buffer: List[str] = []

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self._buffer.append(line)
        return line

    def take(self) -> str:
        raw = "".join(self._buffer)
        self._buffer.clear()
        return raw


def has_bare_quote(record: str) -> bool:
    """
    True if a double quote appears inside a field that did not start with
    one. csv.reader keeps such quotes as literal text.
    """
    field_start = True
    quoted = False
    quote_seen = False

    for ch in record:
        if quoted:
            if quote_seen:
                quote_seen = False
                if ch == '"':
                    continue
                quoted = False
            elif ch == '"':
                quote_seen = True
                continue
            else:
                continue

        if ch in ",\r\n":
            field_start = True
        elif ch == '"':
            if not field_start:
                return True
            quoted = True
            field_start = False
        else:
            field_start = False

    return False


def iter_rows(stream: BinaryIO) -> Iterator[Tuple[int, List[str]]]:
    """
    Yield (line_number, fields) for every non-blank record.
    Comma separated, double-quote quoting, UTF-8.
    """
    text = io.TextIOWrapper(stream, encoding="utf-8", newline="")
    tap = _LineTap(text)
    reader = csv.reader(tap, strict=True)
    try:
        for row in reader:
            raw = tap.take()
            if not row:
                continue
            if has_bare_quote(raw):
                raise ParseError('bare " in non-quoted field', reader.line_num)
            yield reader.line_num, row
    except csv.Error as e:
        raise ParseError(f"malformed CSV: {e}", reader.line_num) from e
    except UnicodeDecodeError as e:
        raise ParseError(f"dataset is not valid UTF-8 text: {e.reason}") from e
    finally:
        text.close()


def rows_to_points(
    rows: Iterator[Tuple[int, List[str]]],
    cancel: Optional[threading.Event] = None,
) -> List[DataPoint]:
    """
    Drop the header row and turn every other row into a DataPoint.
    One bad row fails the whole dataset; nothing partial is returned.
    """
    header = next(rows, None)
    if header is None:
        raise ParseError("dataset is empty, expected a header row")

    points: List[DataPoint] = []
    for line, row in rows:
        if cancel is not None and cancel.is_set():
            raise Cancelled("parse cancelled by caller")

        if len(row) < 2:
            raise ParseError(f"expected at least 2 fields, found {len(row)}", line)

        x = parse_float(row[0], line, "x")
        y = parse_float(row[1], line, "y")
        points.append(DataPoint(x=x, y=y))

    return points


def parse_points(
    store: DatasetStore,
    name: str,
    cancel: Optional[threading.Event] = None,
) -> List[DataPoint]:
    """
    Read a stored dataset and return its (x, y) points in row order.

    Raises NotFound / IOFailure from the store unchanged, ParseError for
    malformed content, Cancelled if `cancel` is set mid-read.
    """
    stream = store.open(name)
    try:
        with contextlib.closing(iter_rows(stream)) as rows:
            return rows_to_points(rows, cancel)
    except ParseError as e:
        logger.warning("Rejected dataset %s: %s", name, e)
        raise
    finally:
        stream.close()


async def parse_points_async(store: DatasetStore, name: str) -> List[DataPoint]:
    """
    Run parse_points in a worker thread. If the awaiting request is
    cancelled, the await returns at once and the worker is told to stop
    at the next row.
    """
    cancel = threading.Event()
    try:
        return await to_thread.run_sync(
            parse_points, store, name, cancel, abandon_on_cancel=True
        )
    except asyncio.CancelledError:
        cancel.set()
        raise
