"""Locating and resuming today's log file.

``SessionStore`` knows which file the current session saves to.  At startup
it looks for a log written earlier on the same calendar day and, if the user
agrees, loads its totals and binds all later saves to that same file.
"""
from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from typing import Callable, Dict, List, Optional

from worktracker.data import day_prefix, list_logs, read_log

logger = logging.getLogger(__name__)


class SessionStore:
    """Owns the log directory and the file the session is bound to."""

    def __init__(self, directory: os.PathLike[str] | str) -> None:
        self.directory = Path(directory)
        self.bound_path: Optional[Path] = None

    def bind(self, path: os.PathLike[str] | str) -> None:
        self.bound_path = Path(path)

    def today_logs(self, today: date) -> List[Path]:
        """Logs in the directory that belong to ``today``."""
        return list_logs(self.directory, day_prefix(today))

    def resume_candidate(self, today: date) -> Optional[Path]:
        """
        Return the same-day log most recently modified, or ``None``.

        Modification time decides, not the file name; equal times fall back
        to the greater name.
        """
        candidates = []
        for path in self.today_logs(today):
            try:
                candidates.append((path.stat().st_mtime, path.name, path))
            except OSError:
                logger.warning("Could not stat %s", path, exc_info=True)
        if not candidates:
            return None
        return max(candidates)[2]

    def resume(self, path: os.PathLike[str] | str) -> Dict[str, int]:
        """
        Load the totals saved in ``path`` and bind future saves to it.

        If the file cannot be read the store stays unbound and an empty
        mapping is returned.
        """
        try:
            totals = read_log(path)
        except OSError:
            logger.exception("Could not resume from %s; starting a fresh session", path)
            return {}
        self.bind(path)
        logger.info("Resumed session from %s", path)
        return totals

    def check_previous_session(self, today: date, confirm: Callable[[Path], bool]) -> Dict[str, int]:
        """
        Offer to continue today's latest log.

        ``confirm`` is asked once with the candidate path; on a yes the
        candidate's totals are returned and the store is bound to it.
        """
        candidate = self.resume_candidate(today)
        if candidate is None:
            return {}
        if not confirm(candidate):
            logger.info("Previous session %s not resumed", candidate)
            return {}
        return self.resume(candidate)
