"""Analytics dashboard for the work tracker.

The ``AnalyticsView`` window sums the minutes recorded in saved logs over a
chosen date range and shows the split between categories as a matplotlib
pie chart embedded in the window.
"""
from __future__ import annotations

import os
from datetime import date, timedelta
from typing import Optional

import customtkinter as ctk
import matplotlib

# Use a non‑interactive backend suitable for embedding in tkinter
matplotlib.use("Agg")
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from worktracker.data import format_minutes, read_logs, summarize_minutes  # noqa: E402
from worktracker.utils import format_user_date, parse_user_date  # noqa: E402


class AnalyticsView(ctk.CTkToplevel):
    """A toplevel window displaying a chart of minutes per category."""

    def __init__(self, parent: ctk.CTk, logs_dir: os.PathLike[str] | str) -> None:
        super().__init__(parent)
        self.title("Analytics Dashboard")
        self.geometry("900x600")
        self.resizable(True, True)

        self.logs_dir = logs_dir
        self.start_date: date = date.today() - timedelta(days=30)
        self.end_date: Optional[date] = None

        self._build_controls()
        self._build_chart_area()
        self.refresh_chart()

    def _build_controls(self) -> None:
        frame = ctk.CTkFrame(self)
        frame.pack(fill="x", padx=10, pady=5)
        ctk.CTkLabel(frame, text="Start date (MM-DD-YYYY):").pack(side="left", padx=2)
        self.start_entry = ctk.CTkEntry(frame, width=100)
        self.start_entry.insert(0, format_user_date(self.start_date))
        self.start_entry.pack(side="left", padx=2)

        ctk.CTkLabel(frame, text="End date (optional):").pack(side="left", padx=2)
        self.end_entry = ctk.CTkEntry(frame, width=100)
        self.end_entry.pack(side="left", padx=2)

        btn = ctk.CTkButton(frame, text="Update", command=self.refresh_chart)
        btn.pack(side="left", padx=5)

        self.total_label = ctk.CTkLabel(frame, text="")
        self.total_label.pack(side="left", padx=10)

    def _build_chart_area(self) -> None:
        self.chart_frame = ctk.CTkFrame(self)
        self.chart_frame.pack(fill="both", expand=True, padx=10, pady=5)
        self.canvas: Optional[FigureCanvasTkAgg] = None

    def refresh_chart(self) -> None:
        """Recompute the per-category totals and redraw the chart."""
        self.start_date = parse_user_date(self.start_entry.get(), date.today() - timedelta(days=30))
        self.end_date = parse_user_date(self.end_entry.get())

        totals = summarize_minutes(read_logs(self.logs_dir, self.start_date, self.end_date))
        totals = totals[totals > 0]
        self.total_label.configure(text=f"Total: {format_minutes(int(totals.sum()))}")
        if self.canvas:
            self.canvas.get_tk_widget().destroy()
            self.canvas = None
        if totals.empty:
            return

        fig = Figure(figsize=(6, 4))
        ax = fig.add_subplot(111)
        ax.pie(totals.values.tolist(), labels=totals.index.tolist(), autopct="%1.1f%%", startangle=90)
        ax.axis("equal")
        end_text = format_user_date(self.end_date) or "Present"
        ax.set_title(f"Time by Category ({format_user_date(self.start_date)} – {end_text})")
        fig.tight_layout()
        self.canvas = FigureCanvasTkAgg(fig, master=self.chart_frame)
        self.canvas.draw()
        self.canvas.get_tk_widget().pack(fill="both", expand=True)
