"""
Data layer for the work tracker.

Each session is persisted as a small CSV file under the logs directory:
a header line followed by one ``category,minutes`` row per configured
category.  Files are named after the day they belong to so that a later run
on the same calendar day can find and resume them.
"""
from __future__ import annotations

import logging
import os
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd

logger = logging.getLogger(__name__)

HEADER = "Category,TimeSpent(Minutes)"
LOG_PREFIX = "work_log_"

# --- File naming ---
# Fresh files:   work_log_<YYYYMMDD_HHMMSS>_<N>min.csv
# Same-day scan: anything starting with work_log_<YYYYMMDD>
_LOG_DATE_RE = re.compile(r"^work_log_(\d{8})")


def log_filename(session_start: datetime, session_minutes: int) -> str:
    """Return the file name for a session started at ``session_start``."""
    return f"{LOG_PREFIX}{session_start.strftime('%Y%m%d_%H%M%S')}_{session_minutes}min.csv"


def day_prefix(day: date) -> str:
    return f"{LOG_PREFIX}{day.strftime('%Y%m%d')}"


def parse_log_date(path: os.PathLike[str] | str) -> Optional[date]:
    """Return the calendar day encoded in a log file name, if any."""
    match = _LOG_DATE_RE.match(Path(path).name)
    if not match:
        return None
    try:
        return datetime.strptime(match.group(1), "%Y%m%d").date()
    except ValueError:
        return None


def list_logs(directory: os.PathLike[str] | str, prefix: str = LOG_PREFIX) -> List[Path]:
    """List log files in ``directory`` whose name starts with ``prefix``."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file() and p.name.startswith(prefix))


# --- Writing and reading ---
def write_log(path: os.PathLike[str] | str, categories: Iterable[str], totals: Mapping[str, int]) -> None:
    """
    Overwrite ``path`` with the totals for every configured category.

    Rows follow the order of ``categories``; categories without accrued
    time are written with 0.  The parent directory is created if needed.

    :raises OSError: if the directory or file cannot be written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = [HEADER]
    lines.extend(f"{category},{totals.get(category, 0)}" for category in categories)
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write("\n".join(lines) + "\n")


def read_log(path: os.PathLike[str] | str) -> Dict[str, int]:
    """
    Parse a saved log into ``{category: minutes}``.

    The first line is taken to be the header.  Rows that do not have exactly
    two fields, whose minutes are not a non-negative integer, or that are not
    valid UTF-8 are skipped.
    A category listed twice keeps its last value.

    :raises OSError: if the file cannot be read.
    """
    totals: Dict[str, int] = {}
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        next(f, None)  # header
        for lineno, raw in enumerate(f, start=2):
            line = raw.rstrip("\r\n")
            if not line.strip():
                continue
            fields = line.split(",")
            if len(fields) != 2 or "\ufffd" in line:
                logger.debug("Skipping malformed row %d in %s: %r", lineno, path, line)
                continue
            category, minutes_text = fields[0].strip(), fields[1].strip()
            try:
                minutes = int(minutes_text)
            except ValueError:
                logger.debug("Skipping row %d in %s with bad minutes: %r", lineno, path, line)
                continue
            if not category or minutes < 0:
                continue
            totals[category] = minutes
    return totals


def read_logs(
    directory: os.PathLike[str] | str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> List[Dict[str, Any]]:
    """
    Collect rows from every log in ``directory`` within a date range.

    Each record carries ``date``, ``file``, ``category`` and ``minutes``.
    Unreadable files are logged and left out.
    """
    records: List[Dict[str, Any]] = []
    for path in list_logs(directory):
        day = parse_log_date(path)
        if day is None:
            continue
        if start_date and day < start_date:
            continue
        if end_date and day > end_date:
            continue
        try:
            totals = read_log(path)
        except OSError:
            logger.warning("Could not read log %s", path, exc_info=True)
            continue
        for category, minutes in totals.items():
            records.append({"date": day, "file": path.name, "category": category, "minutes": minutes})
    return records


def group_by_file(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Fold per-category records into one entry per log file, newest day first."""
    files: Dict[str, Dict[str, Any]] = {}
    for rec in records:
        entry = files.setdefault(rec["file"], {"date": rec["date"], "file": rec["file"], "minutes": {}})
        entry["minutes"][rec["category"]] = rec["minutes"]
    return sorted(files.values(), key=lambda e: (e["date"], e["file"]), reverse=True)


def summarize_minutes(records: List[Dict[str, Any]]) -> pd.Series:
    """Total minutes per category, largest first."""
    if not records:
        return pd.Series(dtype="int64", name="minutes")
    df = pd.DataFrame(records)
    df["minutes"] = pd.to_numeric(df["minutes"], errors="coerce").fillna(0).astype("int64")
    return df.groupby("category")["minutes"].sum().sort_values(ascending=False)


def format_minutes(minutes: int) -> str:
    """Format minutes into ``HH:MM`` for display."""
    hours, mins = divmod(int(minutes), 60)
    return f"{hours:02d}:{mins:02d}"
