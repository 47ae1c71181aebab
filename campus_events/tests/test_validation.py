"""Tests for form validation."""

from datetime import date, datetime

import pytest

from campus_events.validation import (
    EventFormValidator,
    ValidationResult,
    get_event_form_validator,
)


class TestValidationResult:
    """Test ValidationResult class"""

    def test_valid_result(self):
        result = ValidationResult()

        assert result.is_valid is True
        assert bool(result) is True
        assert str(result) == "Valid"

    def test_invalid_result(self):
        result = ValidationResult()
        result.add_error("Missing name")
        result.add_error("Missing date")

        assert result.is_valid is False
        assert bool(result) is False
        assert str(result) == "Invalid: Missing name; Missing date"


class TestEventFormValidator:
    """Test EventFormValidator class"""

    @pytest.fixture
    def validator(self):
        return EventFormValidator()

    def test_valid_form(self, validator, event_form):
        assert validator.validate_event_form(event_form)

    def test_date_object_accepted(self, validator, event_form):
        event_form["date"] = date(2024, 3, 15)
        assert validator.validate_event_form(event_form)

    @pytest.mark.parametrize("field", ["name", "type", "date", "time", "location", "max_capacity"])
    def test_required_fields(self, validator, event_form, field):
        del event_form[field]
        result = validator.validate_event_form(event_form)

        assert not result
        assert f"Required field '{field}' is missing or empty" in result.errors

    def test_empty_string_counts_as_missing(self, validator, event_form):
        event_form["name"] = ""
        assert not validator.validate_event_form(event_form)

    def test_invalid_type(self, validator, event_form):
        event_form["type"] = "Concert"
        result = validator.validate_event_form(event_form)
        assert "Invalid event type: Concert" in result.errors

    def test_invalid_date(self, validator, event_form):
        event_form["date"] = "15/03/2024"
        assert not validator.validate_event_form(event_form)

    @pytest.mark.parametrize("value", ["2pm", "24:00", "9:5", "12:60"])
    def test_invalid_time(self, validator, event_form, value):
        event_form["time"] = value
        assert not validator.validate_event_form(event_form)

    @pytest.mark.parametrize("value", [0, -5, "abc"])
    def test_invalid_capacity(self, validator, event_form, value):
        event_form["max_capacity"] = value
        assert not validator.validate_event_form(event_form)

    def test_name_too_long(self, validator, event_form):
        event_form["name"] = "x" * 201
        assert not validator.validate_event_form(event_form)

    def test_collects_all_errors(self, validator):
        result = validator.validate_event_form({})
        assert len(result.errors) == len(EventFormValidator.REQUIRED_EVENT_FIELDS)


class TestEventFormTypes:
    """Test that form values of the wrong type are rejected, not coerced."""

    @pytest.fixture
    def validator(self):
        return EventFormValidator()

    @pytest.mark.parametrize("field", ["name", "location", "description", "time"])
    def test_text_fields_must_be_strings(self, validator, event_form, field):
        event_form[field] = 123
        result = validator.validate_event_form(event_form)

        assert not result
        assert f"Field '{field}' must be text" in result.errors

    def test_datetime_rejected(self, validator, event_form):
        event_form["date"] = datetime(2024, 3, 15, 9, 30)
        assert not validator.validate_event_form(event_form)

    def test_non_string_date_rejected(self, validator, event_form):
        event_form["date"] = 20240315
        assert "Invalid date format: 20240315" in validator.validate_event_form(event_form).errors

    @pytest.mark.parametrize("value", [2.9, True, False, "2.5", "²", [2]])
    def test_capacity_must_be_whole(self, validator, event_form, value):
        event_form["max_capacity"] = value
        result = validator.validate_event_form(event_form)

        assert f"Invalid maximum capacity: {value}" in result.errors

    @pytest.mark.parametrize("value", [2, 2.0, "25", " 25 "])
    def test_whole_capacity_accepted(self, validator, event_form, value):
        event_form["max_capacity"] = value
        assert validator.validate_event_form(event_form)

    def test_unhashable_type_rejected(self, validator, event_form):
        event_form["type"] = ["Workshop"]
        assert not validator.validate_event_form(event_form)


class TestPastDateWarning:
    """Test the warning for events dated before today."""

    def test_past_date_warns(self, event_form):
        result = EventFormValidator().validate_event_form(event_form, today=date(2024, 4, 1))

        assert result
        assert result.warnings == ["Event date 2024-03-15 is in the past"]
        assert str(result) == "Valid (1 warnings)"

    def test_same_day_no_warning(self, event_form):
        result = EventFormValidator().validate_event_form(event_form, today=date(2024, 3, 15))
        assert result.warnings == []

    def test_no_today_no_warning(self, event_form):
        event_form["date"] = "1999-01-01"
        assert EventFormValidator().validate_event_form(event_form).warnings == []


class TestStudentForm:
    """Test student form validation."""

    @pytest.fixture
    def validator(self):
        return get_event_form_validator()

    def test_valid(self, validator):
        assert validator.validate_student_form({"name": "Alex", "email": "alex@university.edu"})

    def test_missing_name(self, validator):
        assert not validator.validate_student_form({"name": " ", "email": "alex@university.edu"})

    def test_bad_email(self, validator):
        result = validator.validate_student_form({"name": "Alex", "email": "alex@"})
        assert "Invalid email format: alex@" in result.errors


def test_store_shares_global_validator(store):
    assert get_event_form_validator() is get_event_form_validator()
    assert store.validator is get_event_form_validator()
