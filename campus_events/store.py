"""
In-memory Event Store

Holds the events, students, registrations and feedback of one session and
exposes the mutations the admin and student screens perform. Registrations
and feedback are stored once, keyed by ``(student_id, event_id)``; the
per-event and per-student views are built by lookup in the snapshot methods.

Every mutation checks all of its preconditions before changing anything, so
a rejected call leaves the store exactly as it was.
"""

from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import uuid4

import structlog

from campus_events.errors import (
    AlreadyRegisteredError,
    AttendanceAlreadyMarkedError,
    AttendanceClosedError,
    CampusEventsError,
    CommentTooLongError,
    DuplicateError,
    EventFullError,
    EventValidationError,
    FeedbackAlreadySubmittedError,
    FeedbackNotAllowedError,
    InvalidRatingError,
    NotEventDayError,
    NotRegisteredError,
    UnknownEventError,
    UnknownStudentError,
)
from campus_events.models.config import CampusEventsConfig
from campus_events.models.event import (
    Event,
    EventSnapshot,
    EventStatus,
    EventType,
    Feedback,
    Registration,
    Student,
    StudentSnapshot,
)
from campus_events.validation import get_event_form_validator


logger = structlog.get_logger(__name__)

PairKey = Tuple[str, str]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


class EventStore:
    """Session-wide store of campus events and student activity"""

    def __init__(self, config: Optional[CampusEventsConfig] = None,
                 clock: Callable[[], datetime] = utc_now):
        """
        Initialize an empty store.

        Args:
            config: Application configuration (feedback rules)
            clock: Returns the current time; attendance uses its date
        """
        self.config = config or CampusEventsConfig()
        self.clock = clock
        self.validator = get_event_form_validator()
        self.logger = logger.bind(component="event_store")

        self._events: Dict[str, Event] = {}
        self._students: Dict[str, Student] = {}
        self._registrations: Dict[PairKey, Registration] = {}
        self._feedback: Dict[PairKey, Feedback] = {}

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_event(self, event_id: str) -> Event:
        try:
            return self._events[event_id]
        except KeyError:
            raise UnknownEventError(event_id) from None

    def get_student(self, student_id: str) -> Student:
        try:
            return self._students[student_id]
        except KeyError:
            raise UnknownStudentError(student_id) from None

    def list_events(self) -> List[Event]:
        return list(self._events.values())

    def list_students(self) -> List[Student]:
        return list(self._students.values())

    def get_registration(self, event_id: str, student_id: str) -> Optional[Registration]:
        return self._registrations.get((student_id, event_id))

    def get_feedback(self, event_id: str, student_id: str) -> Optional[Feedback]:
        return self._feedback.get((student_id, event_id))

    def is_registered(self, event_id: str, student_id: str) -> bool:
        return (student_id, event_id) in self._registrations

    def has_submitted_feedback(self, event_id: str, student_id: str) -> bool:
        return (student_id, event_id) in self._feedback

    def registrations_for_event(self, event_id: str) -> List[Registration]:
        return [reg for reg in self._registrations.values() if reg.event_id == event_id]

    def feedback_for_event(self, event_id: str) -> List[Feedback]:
        return [fb for fb in self._feedback.values() if fb.event_id == event_id]

    def available_spots(self, event_id: str) -> int:
        event = self.get_event(event_id)
        return event.max_capacity - len(self.registrations_for_event(event_id))

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def event_snapshot(self, event_id: str) -> EventSnapshot:
        """Event with copies of its registrations and feedback attached."""
        event = self.get_event(event_id)
        return EventSnapshot(
            event=event.model_copy(),
            registrations=[reg.model_copy() for reg in self.registrations_for_event(event_id)],
            feedback=[fb.model_copy() for fb in self.feedback_for_event(event_id)],
        )

    def event_snapshots(self) -> List[EventSnapshot]:
        return [self.event_snapshot(event_id) for event_id in self._events]

    def student_snapshot(self, student_id: str) -> StudentSnapshot:
        """Student with the ids of the events they registered for and attended."""
        student = self.get_student(student_id)
        registrations = [reg for reg in self._registrations.values() if reg.student_id == student_id]
        return StudentSnapshot(
            student=student.model_copy(),
            registrations=[reg.event_id for reg in registrations],
            attended_events=[reg.event_id for reg in registrations if reg.attended],
        )

    def student_snapshots(self) -> List[StudentSnapshot]:
        return [self.student_snapshot(student_id) for student_id in self._students]

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def _reject(self, error: CampusEventsError, action: str, **context: Any) -> CampusEventsError:
        self.logger.warning(f"{action} rejected", error=error.message,
                            error_type=type(error).__name__, **context)
        return error

    def create_event(self, form: Dict[str, Any]) -> Event:
        """
        Create a new upcoming event from the admin form.

        Args:
            form: Mapping with name, type, date, time, location, description
                and max_capacity

        Returns:
            The created event

        Raises:
            EventValidationError: If a required field is missing or invalid
        """
        result = self.validator.validate_event_form(form, today=self.clock().date())
        if not result:
            raise self._reject(EventValidationError(result.errors), "Event creation", errors=result.errors)
        if result.warnings:
            self.logger.warning("Event form accepted with warnings", warnings=result.warnings)

        event_date = form['date']
        if not isinstance(event_date, date):
            event_date = date.fromisoformat(event_date.strip())

        event = Event(
            id=new_id("event"),
            name=form['name'].strip(),
            type=EventType(form['type']),
            date=event_date,
            time=form['time'].strip(),
            location=form['location'].strip(),
            description=(form.get('description') or "").strip(),
            max_capacity=int(form['max_capacity']),
            status=EventStatus.UPCOMING,
            created_at=self.clock(),
        )
        self._events[event.id] = event
        self.logger.info("Event created", event_id=event.id, name=event.name)
        return event

    def add_student(self, name: str, email: str, student_id: Optional[str] = None) -> Student:
        """Add a student to the session directory."""
        result = self.validator.validate_student_form({"name": name, "email": email})
        if not result:
            raise self._reject(EventValidationError(result.errors, "Please provide a name and a valid email"),
                               "Student creation", errors=result.errors)

        student_id = student_id or new_id("student")
        if student_id in self._students:
            raise self._reject(DuplicateError(f"Student '{student_id}' already exists"),
                               "Student creation", student_id=student_id)

        student = Student(id=student_id, name=name.strip(), email=email.lower(), created_at=self.clock())
        self._students[student.id] = student
        self.logger.info("Student added", student_id=student.id)
        return student

    def register(self, event_id: str, student_id: str) -> Registration:
        """
        Register a student for an event.

        Capacity is checked before duplicates, so a full event reports
        ``EventFullError`` even to a student who is already registered.

        Raises:
            EventFullError: If no spots are left
            AlreadyRegisteredError: If the student already holds a registration
        """
        self.get_student(student_id)
        if self.available_spots(event_id) <= 0:
            raise self._reject(EventFullError(), "Registration", event_id=event_id, student_id=student_id)
        if self.is_registered(event_id, student_id):
            raise self._reject(AlreadyRegisteredError(), "Registration", event_id=event_id, student_id=student_id)

        registration = Registration(
            id=new_id("reg"),
            student_id=student_id,
            event_id=event_id,
            registered_at=self.clock(),
            attended=False,
        )
        self._registrations[(student_id, event_id)] = registration
        self.logger.info("Student registered", event_id=event_id, student_id=student_id,
                         registration_id=registration.id)
        return registration.model_copy()

    def mark_attendance(self, event_id: str, student_id: str, today: Optional[date] = None) -> Registration:
        """
        Mark a registered student as attended on the day of the event.

        Args:
            event_id: Event being attended
            student_id: Student checking in
            today: Calendar date to check against; defaults to the clock's date

        Raises:
            AttendanceClosedError: If the event is completed
            NotEventDayError: If today is not the event date
            NotRegisteredError: If the student has no registration
            AttendanceAlreadyMarkedError: If attendance was already recorded
        """
        event = self.get_event(event_id)
        today = today or self.clock().date()

        if event.status == EventStatus.COMPLETED:
            raise self._reject(AttendanceClosedError(), "Attendance", event_id=event_id, student_id=student_id,
                               status=event.status.value)
        if event.date != today:
            raise self._reject(NotEventDayError(), "Attendance", event_id=event_id, student_id=student_id,
                               event_date=event.date.isoformat(), today=today.isoformat())

        registration = self.get_registration(event_id, student_id)
        if registration is None:
            raise self._reject(NotRegisteredError(), "Attendance", event_id=event_id, student_id=student_id)
        if registration.attended:
            raise self._reject(AttendanceAlreadyMarkedError(), "Attendance", event_id=event_id,
                               student_id=student_id)

        registration.attended = True
        self.logger.info("Attendance marked", event_id=event_id, student_id=student_id)
        return registration.model_copy()

    def submit_feedback(self, event_id: str, student_id: str, rating: Any, comments: str = "") -> Feedback:
        """
        Record a student's rating and comments for an event.

        Raises:
            InvalidRatingError: If rating is not an integer from 1 to 5
            CommentTooLongError: If trimmed comments exceed the configured length
            FeedbackNotAllowedError: If the student is not registered, or
                attendance is required and missing
            FeedbackAlreadySubmittedError: If the student already left feedback
        """
        self.get_event(event_id)
        self.get_student(student_id)

        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise self._reject(InvalidRatingError(), "Feedback", event_id=event_id, student_id=student_id,
                               rating=rating)

        comments = (comments or "").strip()
        max_length = self.config.feedback_comment_max_length
        if len(comments) > max_length:
            raise self._reject(CommentTooLongError(len(comments), max_length), "Feedback",
                               event_id=event_id, student_id=student_id)

        registration = self.get_registration(event_id, student_id)
        if registration is None:
            raise self._reject(FeedbackNotAllowedError("You must be registered to leave feedback"), "Feedback",
                               event_id=event_id, student_id=student_id)
        if self.config.feedback_requires_attendance and not registration.attended:
            raise self._reject(FeedbackNotAllowedError(), "Feedback", event_id=event_id, student_id=student_id)

        if self.has_submitted_feedback(event_id, student_id):
            raise self._reject(FeedbackAlreadySubmittedError(), "Feedback", event_id=event_id,
                               student_id=student_id)

        feedback = Feedback(
            id=new_id("fb"),
            student_id=student_id,
            event_id=event_id,
            rating=rating,
            comments=comments,
            submitted_at=self.clock(),
        )
        self._feedback[(student_id, event_id)] = feedback
        self.logger.info("Feedback submitted", event_id=event_id, student_id=student_id, rating=rating)
        return feedback.model_copy()

    # ------------------------------------------------------------------
    # Fixture loading
    # ------------------------------------------------------------------

    def load_event(self, event: Event) -> Event:
        """Add a pre-built event, keeping its id, status and timestamps."""
        self._events[event.id] = event
        return event

    def load_registration(self, registration: Registration) -> Registration:
        """
        Add a pre-built registration without the capacity or date checks.

        Pair uniqueness and references are still enforced.
        """
        self.get_event(registration.event_id)
        self.get_student(registration.student_id)
        key = (registration.student_id, registration.event_id)
        if key in self._registrations:
            raise AlreadyRegisteredError()
        self._registrations[key] = registration
        return registration.model_copy()

    def load_feedback(self, feedback: Feedback) -> Feedback:
        """Add a pre-built feedback record; one per student and event."""
        self.get_event(feedback.event_id)
        self.get_student(feedback.student_id)
        key = (feedback.student_id, feedback.event_id)
        if key in self._feedback:
            raise FeedbackAlreadySubmittedError()
        self._feedback[key] = feedback
        return feedback.model_copy()
