"""Domain errors raised by the event store.

Every error is a user-correctable condition. The message is short enough to
show as a notification description and ``title`` is the notification title.
"""

from typing import List, Optional


class CampusEventsError(Exception):
    """Base class for all campus event errors"""

    title = "Error"
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class EventValidationError(CampusEventsError):
    """Raised when an event form is missing or has invalid fields"""

    title = "Error"
    default_message = "Please fill in all required fields"

    def __init__(self, errors: List[str], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors


class UnknownEventError(CampusEventsError):
    """Raised when an event id is not in the session"""

    title = "Event Not Found"

    def __init__(self, event_id: str):
        super().__init__(f"No event with id '{event_id}'")
        self.event_id = event_id


class UnknownStudentError(CampusEventsError):
    """Raised when a student id is not in the session"""

    title = "Student Not Found"

    def __init__(self, student_id: str):
        super().__init__(f"No student with id '{student_id}'")
        self.student_id = student_id


class EventFullError(CampusEventsError):
    """Raised when an event has no spots left"""

    title = "Registration Failed"
    default_message = "Event is full"


class DuplicateError(CampusEventsError):
    """Raised when an action was already performed for a student and event"""
    pass


class AlreadyRegisteredError(DuplicateError):
    title = "Registration Failed"
    default_message = "Already registered for this event"


class AttendanceAlreadyMarkedError(DuplicateError):
    title = "Attendance Failed"
    default_message = "Attendance already marked for this event"


class FeedbackAlreadySubmittedError(DuplicateError):
    title = "Submission Failed"
    default_message = "Feedback already submitted for this event"


class NotEventDayError(CampusEventsError):
    """Raised when attendance is marked on any day but the event day"""

    title = "Attendance Failed"
    default_message = "Attendance can only be marked on the event day"


class AttendanceClosedError(CampusEventsError):
    """Raised when attendance is marked for a completed event"""

    title = "Attendance Failed"
    default_message = "Attendance is closed for this event"


class NotRegisteredError(CampusEventsError):
    """Raised when attendance is marked without a registration"""

    title = "Attendance Failed"
    default_message = "You must be registered to mark attendance"


class FeedbackNotAllowedError(CampusEventsError):
    """Raised when feedback requires attendance and the student did not attend"""

    title = "Submission Failed"
    default_message = "Only attendees can leave feedback for this event"


class InvalidRatingError(CampusEventsError):
    """Raised when a feedback rating is missing or outside 1-5"""

    title = "Rating Required"
    default_message = "Please select a rating before submitting feedback."


class CommentTooLongError(CampusEventsError):
    """Raised when feedback comments exceed the allowed length"""

    title = "Submission Failed"

    def __init__(self, length: int, max_length: int):
        super().__init__(f"Comments are too long: {length} > {max_length} characters")
        self.length = length
        self.max_length = max_length
