"""User interface for the work tracker.

This module builds the customtkinter main window: one button per configured
category, a save button and shortcuts to the history and analytics windows.
Button clicks are routed to the ``SessionManager``; the toggle events it
emits relabel the affected buttons through a category to button mapping.
"""
from __future__ import annotations

import logging
from pathlib import Path
from tkinter import messagebox
from typing import Dict

import customtkinter as ctk

from worktracker.accumulator import Status, ToggleEvent
from worktracker.analytics import AnalyticsView
from worktracker.config import Settings
from worktracker.session_manager import SessionManager
from worktracker.timeline import HistoryView
from worktracker.utils import button_label

logger = logging.getLogger(__name__)

BUTTON_HEIGHT = 60


class WorkTrackerApp(ctk.CTk):
    """Main application window for the work tracker."""

    def __init__(self, settings: Settings, manager: SessionManager) -> None:
        super().__init__()
        self.title("Work Tracker")
        self.settings = settings
        self.manager = manager
        self.buttons: Dict[str, ctk.CTkButton] = {}

        ctk.set_appearance_mode("light")

        # Ask about today's earlier session before any button exists
        self.lift()
        self.manager.resume_previous(self._confirm_resume)

        self._build_buttons()
        self.manager.accumulator.add_listener(self._on_toggle)

        rows = len(self.manager.categories) + 2
        self.geometry(f"300x{rows * BUTTON_HEIGHT}")
        self.protocol("WM_DELETE_WINDOW", self.on_exit)

    def _confirm_resume(self, path: Path) -> bool:
        return messagebox.askyesno(
            "Continue Previous Session",
            "A log file for today exists. Do you want to continue the previous session?\n\n"
            f"{path.name}",
            parent=self,
        )

    def _build_buttons(self) -> None:
        """Create one toggle button per category plus the action buttons."""
        accumulator = self.manager.accumulator
        for category in self.manager.categories:
            btn = ctk.CTkButton(
                self,
                text=button_label(
                    category,
                    accumulator.is_running(category),
                    accumulator.total(category),
                    self.settings.display_minutes,
                ),
                command=lambda c=category: self.manager.toggle(c),
            )
            btn.pack(pady=5, padx=10, fill="both", expand=True)
            self.buttons[category] = btn

        actions = ctk.CTkFrame(self)
        actions.pack(pady=5, padx=10, fill="x")
        ctk.CTkButton(actions, text="History", width=90, command=self.open_history_view).pack(side="left", padx=2)
        ctk.CTkButton(actions, text="Analytics", width=90, command=self.open_analytics_view).pack(side="left", padx=2)

        btn_save = ctk.CTkButton(self, text="Save to CSV", command=self.on_save)
        btn_save.pack(pady=(5, 10), padx=10, fill="both", expand=True)

    def _on_toggle(self, event: ToggleEvent) -> None:
        """Relabel the button belonging to ``event.category``."""
        btn = self.buttons.get(event.category)
        if btn is None:
            return
        btn.configure(
            text=button_label(
                event.category,
                event.status is Status.STARTED,
                event.total,
                self.settings.display_minutes,
            )
        )

    def on_save(self) -> None:
        """Save the current totals and tell the user where they went."""
        path = self.manager.save()
        if path is None:
            messagebox.showerror("Save failed", "Could not save the work log. See the log output for details.", parent=self)
        else:
            messagebox.showinfo("Saved", f"Data saved to {path}", parent=self)

    def open_history_view(self) -> None:
        """Open the saved log history and bring it to front."""
        hv = HistoryView(self, self.manager.store.directory)
        hv.focus()
        hv.lift()

    def open_analytics_view(self) -> None:
        """Open the analytics dashboard and bring it to front."""
        av = AnalyticsView(self, self.manager.store.directory)
        av.focus()
        av.lift()

    def on_exit(self) -> None:
        """Close the window; autosave, if enabled, runs at interpreter exit."""
        logger.info("Closing work tracker")
        self.destroy()
