"""Command line entry point for the work tracker (``python -m worktracker``).

Reads the settings file, prepares the session (including the exit autosave
when enabled) and opens the customtkinter window defined in
``worktracker.ui``.
"""
from __future__ import annotations

import argparse
import logging
import sys

from worktracker import config
from worktracker.config import ConfigError, load_settings
from worktracker.session_manager import SessionManager
from worktracker.session_store import SessionStore

logger = logging.getLogger("worktracker")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="worktracker")
    parser.add_argument("--config", default=config.CONFIG_PATH, help="Settings file (default: %(default)s)")
    parser.add_argument("--logs-dir", default=config.LOGS_DIR, help="Directory for CSV logs (default: %(default)s)")
    parser.add_argument("--debug", action="store_true", default=config.DEBUG_MODE, help="Verbose logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {config.VERSION}")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        logger.error("%s", exc)
        return 1

    manager = SessionManager(settings.categories, SessionStore(args.logs_dir))
    if settings.autosave_on_exit:
        manager.install_shutdown_hook()

    # Imported late so a bad config is reported without touching the display
    from worktracker.ui import WorkTrackerApp

    app = WorkTrackerApp(settings, manager)
    app.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
