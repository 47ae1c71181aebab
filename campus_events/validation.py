"""
Form Validation

Validation for the event creation form and the student profile form.
Results collect every problem at once so the form can show them together.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional

import structlog

from campus_events.models.event import EventType


logger = structlog.get_logger(__name__)


class ValidationResult:
    """Result of validation operations"""

    def __init__(self, is_valid: bool = True, errors: Optional[List[str]] = None,
                 warnings: Optional[List[str]] = None):
        self.is_valid = is_valid
        self.errors = errors or []
        self.warnings = warnings or []

    def add_error(self, error: str):
        """Add an error to the validation result"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning to the validation result"""
        self.warnings.append(warning)

    def __bool__(self):
        """Return True if validation passed"""
        return self.is_valid

    def __str__(self):
        """String representation of validation result"""
        if self.is_valid:
            warnings_str = f" ({len(self.warnings)} warnings)" if self.warnings else ""
            return f"Valid{warnings_str}"
        else:
            return f"Invalid: {'; '.join(self.errors)}"


class EventFormValidator:
    """Validates event creation and student forms"""

    REQUIRED_EVENT_FIELDS = ('name', 'type', 'date', 'time', 'location', 'max_capacity')
    TEXT_FIELDS = ('name', 'time', 'location', 'description')

    def __init__(self):
        self.logger = logger.bind(component="event_form_validator")

        self.max_name_length = 200
        self.time_pattern = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')
        self.email_pattern = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')

    def validate_event_form(self, form: Dict[str, Any], today: Optional[date] = None) -> ValidationResult:
        """
        Validate the fields of a new event.

        Args:
            form: Mapping with name, type, date, time, location, description
                and max_capacity
            today: When given, an event dated before it gets a warning

        Returns:
            ValidationResult indicating success/failure
        """
        result = ValidationResult()

        for field in self.REQUIRED_EVENT_FIELDS:
            value = form.get(field)
            if value is None or (isinstance(value, str) and not value.strip()):
                result.add_error(f"Required field '{field}' is missing or empty")

        for field in self.TEXT_FIELDS:
            value = form.get(field)
            if value is not None and not isinstance(value, str):
                result.add_error(f"Field '{field}' must be text")

        name = form.get('name')
        if isinstance(name, str) and len(name) > self.max_name_length:
            result.add_error(f"Name too long: {len(name)} > {self.max_name_length}")

        event_type = form.get('type')
        if event_type and (not isinstance(event_type, str) or event_type not in {t.value for t in EventType}):
            result.add_error(f"Invalid event type: {event_type}")

        event_date = self._parse_date(form.get('date'), result)
        if event_date and today and event_date < today:
            result.add_warning(f"Event date {event_date.isoformat()} is in the past")

        event_time = form.get('time')
        if isinstance(event_time, str) and event_time.strip() and not self.time_pattern.match(event_time):
            result.add_error(f"Invalid time format: {event_time}")

        capacity = form.get('max_capacity')
        if capacity is not None and capacity != "":
            if not self._is_whole_number(capacity):
                result.add_error(f"Invalid maximum capacity: {capacity}")
            elif int(capacity) <= 0:
                result.add_error("Maximum capacity must be a positive number")

        if not result:
            self.logger.debug("Event form rejected", errors=result.errors)

        return result

    @staticmethod
    def _parse_date(value: Any, result: ValidationResult) -> Optional[date]:
        """Calendar date of the form, or None after recording why it is invalid."""
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, datetime):
            result.add_error(f"Invalid date: expected a calendar date, got a timestamp {value.isoformat()}")
            return None
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            try:
                return date.fromisoformat(value.strip())
            except ValueError:
                pass
        result.add_error(f"Invalid date format: {value}")
        return None

    @staticmethod
    def _is_whole_number(value: Any) -> bool:
        if isinstance(value, bool):
            return False
        if isinstance(value, int):
            return True
        if isinstance(value, float):
            return value.is_integer()
        return isinstance(value, str) and value.strip().isdecimal()

    def validate_student_form(self, form: Dict[str, Any]) -> ValidationResult:
        """Validate a new student's name and email."""
        result = ValidationResult()

        if not form.get('name') or not str(form['name']).strip():
            result.add_error("Required field 'name' is missing or empty")

        email = form.get('email')
        if not email:
            result.add_error("Required field 'email' is missing or empty")
        elif not self.email_pattern.match(str(email)):
            result.add_error(f"Invalid email format: {email}")

        return result


# Global validator instance
_event_form_validator = EventFormValidator()


def get_event_form_validator() -> EventFormValidator:
    """Get the global event form validator instance"""
    return _event_form_validator
