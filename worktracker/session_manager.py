"""High‑level session management for the work tracker.

The ``SessionManager`` is the one object the UI talks to.  It owns the
``TimeAccumulator`` for this run, the ``SessionStore`` that decides where
results are written, and the save routine shared by the save button and the
exit hook.
"""
from __future__ import annotations

import atexit
import logging
import signal
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from worktracker.accumulator import TimeAccumulator, ToggleEvent, whole_minutes_between
from worktracker.data import log_filename, write_log
from worktracker.session_store import SessionStore

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Coordinates one tracking session: toggles, resume and saving.
    """

    def __init__(
        self,
        categories: Iterable[str],
        store: SessionStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.accumulator = TimeAccumulator(categories)
        self.store = store
        self.clock = clock
        self.session_start: datetime = clock()
        self._hook_installed = False

    @property
    def categories(self) -> List[str]:
        return self.accumulator.categories

    def resume_previous(self, confirm: Callable[[Path], bool], today: Optional[date] = None) -> Dict[str, int]:
        """Offer today's latest log for resuming and seed the totals from it."""
        totals = self.store.check_previous_session(today or self.clock().date(), confirm)
        self.accumulator.seed(totals)
        return totals

    def toggle(self, category: str, now: Optional[datetime] = None) -> List[ToggleEvent]:
        return self.accumulator.toggle(category, now or self.clock())

    def save(self, now: Optional[datetime] = None) -> Optional[Path]:
        """
        Write the current totals to the session's log file.

        The first save of an unbound session names the file after the
        session start and the minutes elapsed since then; every later save
        overwrites that same file.  I/O errors are logged and ``None`` is
        returned, leaving the in-memory totals untouched for a later retry.
        """
        now = now or self.clock()
        path = self.store.bound_path
        if path is None:
            minutes = whole_minutes_between(self.session_start, now)
            path = self.store.directory / log_filename(self.session_start, minutes)
        try:
            write_log(path, self.categories, self.accumulator.totals())
        except OSError:
            logger.exception("Failed to save session to %s", path)
            return None
        if self.store.bound_path is None:
            self.store.bind(path)
        logger.info("Saved session to %s", path)
        return path

    def install_shutdown_hook(self) -> None:
        """
        Save automatically when the interpreter exits.

        SIGTERM is turned into a normal exit so the hook also runs when the
        process is asked to terminate.
        """
        if self._hook_installed:
            return
        atexit.register(self.save)
        try:
            signal.signal(signal.SIGTERM, _exit_on_signal)
        except ValueError:
            # signal handlers can only be set from the main thread
            logger.warning("Could not install SIGTERM handler; autosave runs on normal exit only")
        self._hook_installed = True


def _exit_on_signal(signum, frame) -> None:
    sys.exit(0)
