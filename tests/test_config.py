"""Unit tests for settings loading and button captions."""
import io
import tempfile
import unittest
import datetime
from pathlib import Path
from unittest.mock import patch
from worktracker.config import VERSION, ConfigError, load_settings, parse_bool, parse_categories
from worktracker.utils import button_label, parse_user_date


class TestLoadSettings(unittest.TestCase):
    """Parsing the key=value settings file."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "config.txt"

    def _write(self, text: str) -> str:
        self.path.write_text(text, encoding="utf-8")
        return str(self.path)

    def test_full_file(self) -> None:
        path = self._write(
            "# tracker settings\n"
            "categories=Work,Break,Email\n"
            "displayMinutes=true\n"
            "autoSaveOnExit=TRUE\n"
        )

        settings = load_settings(path)

        self.assertEqual(settings.categories, ["Work", "Break", "Email"])
        self.assertTrue(settings.display_minutes)
        self.assertTrue(settings.autosave_on_exit)

    def test_flags_default_to_false(self) -> None:
        """Missing or non-'true' flags are off."""
        settings = load_settings(self._write("categories = Work\ndisplayMinutes=yes\n"))

        self.assertEqual(settings.categories, ["Work"])
        self.assertFalse(settings.display_minutes)
        self.assertFalse(settings.autosave_on_exit)

    def test_colon_separator_and_bang_comment(self) -> None:
        settings = load_settings(self._write("! comment\ncategories: Work, Break\n"))

        self.assertEqual(settings.categories, ["Work", "Break"])

    def test_key_without_value_is_false(self) -> None:
        """A bare key line is accepted and reads as an unset flag."""
        settings = load_settings(self._write("categories=Work,Break\nautoSaveOnExit\ndisplayMinutes\n"))

        self.assertEqual(settings.categories, ["Work", "Break"])
        self.assertFalse(settings.autosave_on_exit)
        self.assertFalse(settings.display_minutes)

    def test_bare_categories_key_is_fatal(self) -> None:
        with self.assertRaises(ConfigError):
            load_settings(self._write("categories\n"))

    def test_missing_file_is_fatal(self) -> None:
        with self.assertRaises(ConfigError):
            load_settings(str(self.path))

    def test_missing_categories_is_fatal(self) -> None:
        with self.assertRaises(ConfigError):
            load_settings(self._write("displayMinutes=true\n"))

    def test_empty_categories_is_fatal(self) -> None:
        with self.assertRaises(ConfigError):
            load_settings(self._write("categories= , ,\n"))

    def test_parse_categories_keeps_order_and_drops_duplicates(self) -> None:
        self.assertEqual(parse_categories("Work, Break,,Work ,Email"), ["Work", "Break", "Email"])

    def test_parse_bool(self) -> None:
        self.assertTrue(parse_bool(" True "))
        self.assertFalse(parse_bool("1"))
        self.assertFalse(parse_bool(None))


class TestButtonLabel(unittest.TestCase):
    """Caption rules for category buttons."""

    def test_running_reads_stop(self) -> None:
        self.assertEqual(button_label("Work", True, 12, False), "Stop Work")

    def test_idle_reads_start(self) -> None:
        self.assertEqual(button_label("Work", False, 12, False), "Start Work")

    def test_minutes_appended_when_enabled(self) -> None:
        self.assertEqual(button_label("Work", True, 12, True), "Stop Work (12 min)")
        self.assertEqual(button_label("Break", False, 0, True), "Start Break (0 min)")

    def test_parse_user_date(self) -> None:
        self.assertEqual(parse_user_date("01-02-2025"), datetime.date(2025, 1, 2))
        self.assertIsNone(parse_user_date("2025-01-02"))
        self.assertEqual(parse_user_date("", datetime.date(2024, 1, 1)), datetime.date(2024, 1, 1))


class TestMainStartup(unittest.TestCase):
    """Startup failures are reported instead of opening the window."""

    def test_missing_config_exits_with_error(self) -> None:
        from worktracker.__main__ import main

        with tempfile.TemporaryDirectory() as tmp_dir:
            missing = str(Path(tmp_dir) / "config.txt")
            with self.assertLogs("worktracker", level="ERROR"):
                code = main(["--config", missing, "--logs-dir", tmp_dir])

        self.assertEqual(code, 1)

    def test_version_flag_prints_and_exits(self) -> None:
        from worktracker.__main__ import main

        with patch("sys.stdout", new_callable=io.StringIO) as out:
            with self.assertRaises(SystemExit) as ctx:
                main(["--version"])

        self.assertEqual(ctx.exception.code, 0)
        self.assertEqual(out.getvalue().strip(), f"worktracker {VERSION}")


if __name__ == "__main__":
    unittest.main()
