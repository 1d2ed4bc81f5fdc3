"""Tests for exception types and user-facing error messages."""

import unittest

from classcal.exceptions.errors import (
    ClassCalError,
    ConfigLoadError,
    EmptyResultError,
    MissingClassNameError,
    MissingDatesError,
    MissingInstitutionError,
    MissingPeriodsError,
    ScheduleValidationError,
)
from classcal.ui.error_messages import get_user_friendly_error


class TestCustomExceptions(unittest.TestCase):
    """Test custom exception classes."""

    def test_config_load_error(self):
        """Verify ConfigLoadError stores source and reason."""
        error = ConfigLoadError("periods.json", "invalid JSON")
        self.assertEqual(error.source, "periods.json")
        self.assertEqual(error.reason, "invalid JSON")
        self.assertIn("periods.json", str(error))
        self.assertIsInstance(error, ClassCalError)

    def test_validation_kinds(self):
        """Verify each validation failure reports its kind."""
        expected = {
            MissingInstitutionError: "MissingInstitution",
            MissingClassNameError: "MissingClassName",
            MissingDatesError: "MissingDates",
            MissingPeriodsError: "MissingPeriods",
            EmptyResultError: "EmptyResult",
        }
        for error_type, kind in expected.items():
            error = error_type()
            self.assertIsInstance(error, ScheduleValidationError)
            self.assertEqual(error.kind, kind)
            self.assertTrue(str(error))

    def test_custom_message(self):
        error = MissingInstitutionError("Unknown institution 'east'.")
        self.assertEqual(str(error), "Unknown institution 'east'.")

    def test_empty_result_counts(self):
        """Verify EmptyResultError stores skip counts."""
        error = EmptyResultError(skipped_dates=3, skipped_periods=1)
        self.assertEqual(error.skipped_dates, 3)
        self.assertEqual(error.skipped_periods, 1)
        self.assertIn("3", str(error))


class TestUserFriendlyErrors(unittest.TestCase):
    """Test conversion of errors to display messages."""

    def test_missing_fields_ask_to_fill_in(self):
        self.assertIn("class name", get_user_friendly_error(MissingClassNameError()))
        self.assertIn("date", get_user_friendly_error(MissingDatesError()))
        self.assertIn("period", get_user_friendly_error(MissingPeriodsError()))
        self.assertIn("institution", get_user_friendly_error(MissingInstitutionError()))

    def test_empty_result_points_at_formats(self):
        message = get_user_friendly_error(EmptyResultError(1, 0))
        self.assertIn("YYYY-MM-DD", message)

    def test_config_error_mentions_disabled(self):
        message = get_user_friendly_error(ConfigLoadError("x.json", "configuration file not found"))
        self.assertIn("configuration file not found", message)
        self.assertIn("disabled", message)

    def test_unknown_error(self):
        self.assertEqual(get_user_friendly_error(RuntimeError("boom")), "An error occurred: boom")


if __name__ == "__main__":
    unittest.main()
