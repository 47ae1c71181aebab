"""
Reporting and Ranking

Builds event and student reports from store snapshots and ranks them for
the admin "most popular events" and "most active students" panels.
Sorting is stable, so equal scores keep the order of the input.
"""

from typing import Iterable, List, Sequence

from campus_events.metrics import attendance_percentage, average_feedback_score, popularity_score, round_half_up
from campus_events.models.event import EventSnapshot, StudentSnapshot
from campus_events.models.report import DashboardSummary, EventReport, StudentReport


def generate_event_report(event: EventSnapshot) -> EventReport:
    """Combine the per-event metrics into an EventReport."""
    return EventReport(
        event_id=event.event.id,
        event_name=event.event.name,
        total_registrations=len(event.registrations),
        attendance_percentage=attendance_percentage(event),
        average_feedback_score=average_feedback_score(event),
        popularity_score=popularity_score(event),
    )


def generate_student_report(student: StudentSnapshot, events: Iterable[EventSnapshot]) -> StudentReport:
    """
    Build a participation report for one student.

    Attendance is counted from the events' attendee lists and weighted twice
    as much as a registration.

    Args:
        student: Student with their registered event ids
        events: Every event in the session

    Returns:
        StudentReport for the student
    """
    attended = sum(1 for event in events if student.id in event.attendees)
    registered = len(student.registrations)

    return StudentReport(
        student_id=student.id,
        student_name=student.name,
        events_attended=attended,
        events_registered=registered,
        participation_score=attended * 2 + registered,
    )


def get_top_active_students(
    students: Iterable[StudentSnapshot],
    events: Iterable[EventSnapshot],
    limit: int = 3,
) -> List[StudentReport]:
    """Students with the highest participation score, best first."""
    events = list(events)
    reports = [generate_student_report(student, events) for student in students]
    reports.sort(key=lambda report: report.participation_score, reverse=True)
    return reports[:limit]


def get_most_popular_events(reports: Iterable[EventReport], limit: int = 3) -> List[EventReport]:
    """Event reports with the highest popularity score, best first."""
    ranked = sorted(reports, key=lambda report: report.popularity_score, reverse=True)
    return ranked[:limit]


def build_dashboard_summary(events: Sequence[EventSnapshot]) -> DashboardSummary:
    """Totals across every event in the session."""
    total_registrations = sum(len(event.registrations) for event in events)
    total_attendees = sum(len(event.attendees) for event in events)

    average_attendance = 0
    if total_registrations > 0:
        average_attendance = round_half_up(100 * total_attendees, total_registrations)

    return DashboardSummary(
        total_events=len(events),
        total_registrations=total_registrations,
        total_attendees=total_attendees,
        average_attendance=average_attendance,
    )
