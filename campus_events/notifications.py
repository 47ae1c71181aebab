"""Notification messages shown after each user action."""

from enum import Enum

from pydantic import BaseModel

from campus_events.errors import CampusEventsError
from campus_events.models.event import Event


class NotificationVariant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


class Notification(BaseModel):
    """Transient message for the notification surface."""

    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    def __str__(self) -> str:
        return f"{self.title}: {self.description}"


def event_created(event: Event) -> Notification:
    return Notification(title="Event Created", description=f"{event.name} has been successfully created.")


def registration_succeeded(event: Event) -> Notification:
    return Notification(
        title="Registration Successful!",
        description=f"You've successfully registered for {event.name}",
    )


def attendance_marked(event: Event) -> Notification:
    return Notification(
        title="Attendance Marked!",
        description=f"Your attendance for {event.name} has been recorded",
    )


def feedback_submitted(event: Event) -> Notification:
    return Notification(
        title="Feedback Submitted!",
        description=f"Thank you for your feedback on {event.name}",
    )


def from_error(error: CampusEventsError) -> Notification:
    """Failure notification for a rejected action."""
    return Notification(title=error.title, description=error.message, variant=NotificationVariant.DESTRUCTIVE)
