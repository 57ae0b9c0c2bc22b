"""History viewer for the work tracker.

The ``HistoryView`` window lists previously saved daily logs, one row per
file with the minutes recorded for each category.  It is read-only; the
files themselves are only written by the session save routine.
"""
from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Any, Dict, Optional

import customtkinter as ctk

from worktracker.data import format_minutes, group_by_file, read_logs
from worktracker.utils import format_user_date, parse_user_date


class HistoryView(ctk.CTkToplevel):
    """A toplevel window for browsing saved work logs."""

    def __init__(self, parent: ctk.CTk, logs_dir: os.PathLike[str] | str) -> None:
        super().__init__(parent)
        self.title("Work Log History")
        self.geometry("800x500")
        self.resizable(True, True)

        self.logs_dir = logs_dir
        self.start_date: date = date.today() - timedelta(days=30)
        self.end_date: Optional[date] = None

        self._build_filters()
        self._build_list()
        self.apply_filters()

    def _build_filters(self) -> None:
        frame = ctk.CTkFrame(self)
        frame.pack(fill="x", padx=10, pady=5)

        ctk.CTkLabel(frame, text="Start date (MM-DD-YYYY):").pack(side="left", padx=2)
        self.start_entry = ctk.CTkEntry(frame, width=100)
        self.start_entry.insert(0, format_user_date(self.start_date))
        self.start_entry.pack(side="left", padx=2)

        ctk.CTkLabel(frame, text="End date (optional):").pack(side="left", padx=2)
        self.end_entry = ctk.CTkEntry(frame, width=100)
        self.end_entry.pack(side="left", padx=2)

        btn = ctk.CTkButton(frame, text="Search", command=self.apply_filters)
        btn.pack(side="left", padx=5)

    def _build_list(self) -> None:
        self.list_frame = ctk.CTkScrollableFrame(self)
        self.list_frame.pack(fill="both", expand=True, padx=10, pady=5)
        header = ctk.CTkFrame(self.list_frame)
        header.pack(fill="x", pady=2)
        for text, width in [("Date", 90), ("File", 280), ("Total", 70), ("Categories", 300)]:
            ctk.CTkLabel(header, text=text, width=width, anchor="w").pack(side="left")

    def apply_filters(self) -> None:
        """Reload the logs matching the date range and display them."""
        self.start_date = parse_user_date(self.start_entry.get(), date.today() - timedelta(days=30))
        self.end_date = parse_user_date(self.end_entry.get())

        records = read_logs(self.logs_dir, self.start_date, self.end_date)
        for widget in self.list_frame.winfo_children()[1:]:
            widget.destroy()
        for entry in group_by_file(records):
            self._add_row(entry)

    def _add_row(self, entry: Dict[str, Any]) -> None:
        frame = ctk.CTkFrame(self.list_frame)
        frame.pack(fill="x", pady=1)
        details = ", ".join(f"{cat} {mins}m" for cat, mins in entry["minutes"].items())
        values = [
            format_user_date(entry["date"]),
            entry["file"],
            format_minutes(sum(entry["minutes"].values())),
            details,
        ]
        for val, width in zip(values, [90, 280, 70, 300]):
            ctk.CTkLabel(frame, text=str(val), width=width, anchor="w").pack(side="left")
