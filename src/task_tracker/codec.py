"""Encode and decode tasks as four-field CSV records.

The record layout is ``ID, Description, CreatedAt, IsCompleted``. Decoding is
lenient per field: a bad ID, timestamp or flag falls back to the zero value
of its type so one damaged cell cannot hide the rest of the task list. Only
structural damage (wrong field count, broken quoting) raises
:class:`~task_tracker.errors.DecodeError`.
"""

from __future__ import annotations

import csv
from typing import IO, Iterable, Sequence

from loguru import logger

from .constants import CSV_HEADER
from .errors import DecodeError
from .model import Task
from .utils import ZERO_TIME, format_rfc3339, parse_decimal, parse_rfc3339

FIELD_COUNT = len(CSV_HEADER)

_TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def _parse_int(raw: str) -> int:
    value = parse_decimal(raw)
    return 0 if value is None else value


def _parse_bool(raw: str) -> bool:
    if raw in _TRUE_VALUES:
        return True
    if raw not in _FALSE_VALUES:
        logger.debug("Unrecognised completion flag {!r}; treating as false", raw)
    return False


def encode(task: Task) -> list[str]:
    return [
        str(task.id),
        task.description,
        format_rfc3339(task.created_at),
        "true" if task.is_completed else "false",
    ]


def decode(record: Sequence[str], line: int | None = None) -> Task:
    """Decode one CSV record into a :class:`Task`.

    Args:
        record: The record's fields, in header order.
        line: Optional 1-based line number used in error messages.

    Returns:
        The decoded task, with zero values for any unparseable field.

    Raises:
        DecodeError: If the record does not have exactly four fields.
    """
    if len(record) != FIELD_COUNT:
        raise DecodeError(
            f"expected {FIELD_COUNT} fields, got {len(record)}",
            line=line,
        )
    raw_id, description, raw_created, raw_done = record
    created_at = parse_rfc3339(raw_created)
    if created_at is None:
        logger.debug("Unparseable timestamp {!r}; using zero time", raw_created)
        created_at = ZERO_TIME
    return Task(
        id=_parse_int(raw_id),
        description=description,
        created_at=created_at,
        is_completed=_parse_bool(raw_done),
    )


def read_tasks(stream: IO[str]) -> list[Task]:
    """Read every task record from ``stream``, skipping the leading header."""
    reader = csv.reader(stream, strict=True)
    tasks: list[Task] = []
    seen_header = False
    try:
        for record in reader:
            if not record:
                continue
            if not seen_header:
                seen_header = True
                continue
            tasks.append(decode(record, line=reader.line_num))
    except csv.Error as exc:
        raise DecodeError(f"malformed CSV: {exc}", line=reader.line_num) from exc
    return tasks


def write_tasks(stream: IO[str], tasks: Iterable[Task]) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    # The minimal writer only quotes "\n"; a bare "\r" would split the record on read.
    quoted = csv.writer(stream, lineterminator="\n", quoting=csv.QUOTE_ALL)
    writer.writerow(CSV_HEADER)
    for task in tasks:
        record = encode(task)
        if any("\r" in value for value in record):
            quoted.writerow(record)
        else:
            writer.writerow(record)
