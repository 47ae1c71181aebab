"""Derived report models. Recomputed on every query, never stored."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class EventReport(BaseModel):
    """Metrics for a single event."""

    event_id: str
    event_name: str
    total_registrations: int
    attendance_percentage: int
    average_feedback_score: float
    popularity_score: float


class StudentReport(BaseModel):
    """Participation metrics for a single student."""

    student_id: str
    student_name: str
    events_attended: int
    events_registered: int
    participation_score: int


class DashboardSummary(BaseModel):
    """Totals shown at the top of the admin dashboard."""

    total_events: int = 0
    total_registrations: int = 0
    total_attendees: int = 0
    average_attendance: int = 0


class FeedbackEntry(BaseModel):
    """Feedback line in a downloadable event report."""

    model_config = ConfigDict(populate_by_name=True)

    rating: int
    comments: str
    submitted_at: datetime = Field(alias="submittedAt")


class EventReportDocument(BaseModel):
    """Downloadable report for one event, serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    event_name: str = Field(alias="eventName")
    event_type: str = Field(alias="eventType")
    date: str
    time: str
    location: str
    total_registrations: int = Field(alias="totalRegistrations")
    attendance_percentage: int = Field(alias="attendancePercentage")
    average_feedback_score: float = Field(alias="averageFeedbackScore")
    popularity_score: float = Field(alias="popularityScore")
    feedback: List[FeedbackEntry] = Field(default_factory=list)
