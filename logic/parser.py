# logic/parser.py

from __future__ import annotations

import csv
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.error import URLError
from urllib.request import urlopen

import pandas as pd

from .utils import (
    DATE_FROM_COL,
    DATE_TO_COL,
    EMP_ID_COL,
    PROJECT_ID_COL,
    DateParseCache,
    _norm_header,
    parse_date_value,
    parse_id,
)


class BatchReadError(ValueError):
    """The raw input batch could not be read at all (as opposed to having no valid rows)."""


@dataclass(frozen=True)
class AssignmentRecord:
    employee_id: int
    project_id: int
    start: date
    end: Optional[date] = None  # None = still on the project

    def effective_end(self, today: date) -> date:
        return self.end if self.end is not None else today


@dataclass(frozen=True)
class ParseResult:
    records: Tuple[AssignmentRecord, ...]
    rows_read: int

    @property
    def rows_discarded(self) -> int:
        return self.rows_read - len(self.records)


Rows = Union[pd.DataFrame, Iterable[Mapping]]


def _normalize_row(row: Mapping) -> Dict[str, object]:
    return {_norm_header(k): v for k, v in row.items()}


def parse_rows(rows: Rows, log_func: Optional[Callable[[str], None]] = None) -> ParseResult:
    """
    Convert raw rows (column name -> raw value) into AssignmentRecords.

    Rows with a missing/invalid employee id, project id or start date are
    dropped. A missing end date means the assignment is still open.
    """
    log = (lambda m: None) if log_func is None else log_func

    if isinstance(rows, pd.DataFrame):
        rows = rows.to_dict("records")

    cache = DateParseCache()
    records: List[AssignmentRecord] = []
    rows_read = 0
    try:
        for raw in rows:
            rows_read += 1
            r = _normalize_row(raw)
            emp_id = parse_id(r.get(EMP_ID_COL))
            project_id = parse_id(r.get(PROJECT_ID_COL))
            if emp_id is None or project_id is None:
                continue
            start = parse_date_value(r.get(DATE_FROM_COL), cache)
            if start is None:
                continue
            end = parse_date_value(r.get(DATE_TO_COL), cache)
            records.append(AssignmentRecord(emp_id, project_id, start, end))
    finally:
        cache.clear()

    discarded = rows_read - len(records)
    log(f"📄 Parsed {rows_read} row(s): {len(records)} valid, {discarded} discarded.")
    return ParseResult(records=tuple(records), rows_read=rows_read)


# ----------------- CSV input -----------------

def _peek_start(src, size: int = 1024) -> bytes:
    """Return up to ``size`` bytes from the start of ``src`` without consuming it."""
    if hasattr(src, "read") and hasattr(src, "seek") and hasattr(src, "tell"):
        pos = src.tell()
        data = src.read(size)
        src.seek(pos)
        return data if isinstance(data, bytes) else str(data).encode("utf-8", "ignore")
    if isinstance(src, str) and src.startswith(("http://", "https://")):
        with urlopen(src) as resp:
            return resp.read(size)
    with open(src, "rb") as fh:
        return fh.read(size)


def _read_frame(src, **kwargs) -> pd.DataFrame:
    return pd.read_csv(
        src,
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        sep=None,
        engine="python",
        skip_blank_lines=True,
        **kwargs,
    )


def read_rows(src) -> List[Dict[str, str]]:
    """Read a CSV from an uploaded file, a path or a URL into raw text rows.

    Raises BatchReadError when the source cannot be read as CSV.
    """
    try:
        start = _peek_start(src)
    except (OSError, URLError) as exc:
        raise BatchReadError(f"Could not read the input: {exc}") from exc
    if b"<html" in start.lower():
        raise BatchReadError("The provided source returned HTML, not CSV. Check the URL or file.")
    if not start.strip():
        # header-less empty file: nothing to analyze, but readable
        return []

    try:
        try:
            df = _read_frame(src, encoding="utf-8-sig")
        except UnicodeDecodeError:
            # Some exports are not UTF-8 at all
            if hasattr(src, "seek"):
                src.seek(0)
            df = _read_frame(src, encoding="latin-1")
    except (pd.errors.ParserError, csv.Error) as exc:
        raise BatchReadError(
            "Could not parse CSV. The file may be invalid or use an unexpected delimiter."
        ) from exc
    except (OSError, URLError, pd.errors.EmptyDataError) as exc:
        raise BatchReadError(f"Could not read the input: {exc}") from exc

    return df.to_dict("records")


def parse_csv(src, log_func: Optional[Callable[[str], None]] = None) -> ParseResult:
    return parse_rows(read_rows(src), log_func=log_func)
