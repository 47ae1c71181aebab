"""Event-related data models."""

from datetime import date, datetime
from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class EventType(str, Enum):
    """Kind of campus event."""

    WORKSHOP = "Workshop"
    FEST = "Fest"
    SEMINAR = "Seminar"


class EventStatus(str, Enum):
    """Lifecycle status of an event."""

    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"


class Event(BaseModel):
    """Event information model."""

    id: str
    name: str
    type: EventType
    date: date
    time: str  # 24-hour "HH:MM"
    location: str
    description: str = ""
    max_capacity: int = Field(gt=0)
    status: EventStatus = EventStatus.UPCOMING
    created_at: datetime


class Student(BaseModel):
    """Student profile."""

    id: str
    name: str
    email: str
    created_at: datetime


class Registration(BaseModel):
    """A student's registration for an event."""

    id: str
    student_id: str
    event_id: str
    registered_at: datetime
    attended: bool = False


class Feedback(BaseModel):
    """Rating and comments a student left for an event."""

    id: str
    student_id: str
    event_id: str
    rating: int = Field(ge=1, le=5)
    comments: str = ""
    submitted_at: datetime


class EventSnapshot(BaseModel):
    """Event together with its registrations, attendees and feedback.

    Built by the store on demand; the registration and feedback records are
    the store's own, looked up by event id.
    """

    event: Event
    registrations: List[Registration] = Field(default_factory=list)
    feedback: List[Feedback] = Field(default_factory=list)

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def attendees(self) -> List[str]:
        """Student ids marked as attended, in registration order."""
        return [reg.student_id for reg in self.registrations if reg.attended]

    @property
    def available_spots(self) -> int:
        return self.event.max_capacity - len(self.registrations)

    @property
    def is_full(self) -> bool:
        return self.available_spots <= 0


class StudentSnapshot(BaseModel):
    """Student together with the events they registered for and attended."""

    student: Student
    registrations: List[str] = Field(default_factory=list)
    attended_events: List[str] = Field(default_factory=list)

    @property
    def id(self) -> str:
        return self.student.id

    @property
    def name(self) -> str:
        return self.student.name
