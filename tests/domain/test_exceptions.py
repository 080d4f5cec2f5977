"""Tests for method timing exceptions."""

import pytest

from method_timing.domain.exceptions import (
    ClockError,
    ConfigurationError,
    MethodTimingError,
    NoSuchMethodError,
    UnwrappableMethodError,
)


class Report:
    """Owner type used in messages."""


class TestExceptionHierarchy:
    """Test exception taxonomy."""

    @pytest.mark.parametrize(
        "error",
        [
            NoSuchMethodError(Report, "missing"),
            UnwrappableMethodError(Report, "__init__", "reserved protocol method"),
            ClockError("render", 5.0, 4.0),
            ConfigurationError("bad"),
        ],
    )
    def test_all_derive_from_base(self, error):
        """Test every error can be caught as MethodTimingError."""
        assert isinstance(error, MethodTimingError)

    def test_no_such_method_is_attribute_error(self):
        """Test generic AttributeError handlers keep working."""
        assert isinstance(NoSuchMethodError(Report, "missing"), AttributeError)

    def test_unwrappable_is_type_error(self):
        """Test generic TypeError handlers keep working."""
        error = UnwrappableMethodError(Report, "__init__", "reserved")
        assert isinstance(error, TypeError)

    def test_configuration_error_is_value_error(self):
        """Test generic ValueError handlers keep working."""
        assert isinstance(ConfigurationError("bad"), ValueError)


class TestExceptionMessages:
    """Test exception messages and attributes."""

    def test_no_such_method_message(self):
        """Test message names owner and method."""
        error = NoSuchMethodError(Report, "missing")

        assert str(error) == "Report has no method 'missing'"
        assert error.owner is Report
        assert error.method_name == "missing"

    def test_no_such_method_reason(self):
        """Test optional reason is appended."""
        error = NoSuchMethodError(Report, "size", "attribute is not callable")
        assert "(attribute is not callable)" in str(error)

    def test_unwrappable_message(self):
        """Test message carries the reason."""
        error = UnwrappableMethodError(Report, "__init__", "reserved protocol method")

        assert "Report.__init__" in str(error)
        assert error.reason == "reserved protocol method"

    def test_clock_error_attributes(self):
        """Test clock readings are kept for diagnostics."""
        error = ClockError("render", 5.0, 4.5)

        assert error.method_name == "render"
        assert error.start == 5.0
        assert error.end == 4.5
        assert "backwards" in str(error)
