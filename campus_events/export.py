"""
Event Report Export

Builds the downloadable per-event report and writes it as indented JSON to
``<event-name-slug>-report.json``.
"""

import json
import re
from datetime import date, datetime
from pathlib import Path
from typing import Union

import structlog

from campus_events.models.event import EventSnapshot
from campus_events.models.report import EventReportDocument, FeedbackEntry
from campus_events.reports import generate_event_report


logger = structlog.get_logger(__name__)

_MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def format_date(value: Union[date, str]) -> str:
    """ISO date to long form, e.g. ``2024-03-15`` -> ``March 15, 2024``."""
    if isinstance(value, str):
        value = date.fromisoformat(value)
    return f"{_MONTHS[value.month - 1]} {value.day}, {value.year}"


def format_time(value: str) -> str:
    """24-hour ``HH:MM`` to a 12-hour clock, e.g. ``14:00`` -> ``2:00 PM``."""
    parsed = datetime.strptime(value, "%H:%M")
    hour = parsed.hour % 12 or 12
    suffix = "AM" if parsed.hour < 12 else "PM"
    return f"{hour}:{parsed.minute:02d} {suffix}"


def report_slug(event_name: str) -> str:
    """Whitespace runs become hyphens, then lower-case."""
    return re.sub(r"\s+", "-", event_name).lower()


def report_filename(event_name: str) -> str:
    return f"{report_slug(event_name)}-report.json"


def build_report_document(event: EventSnapshot) -> EventReportDocument:
    """Combine event details, metrics and feedback into the report document."""
    report = generate_event_report(event)
    return EventReportDocument(
        event_name=event.event.name,
        event_type=event.event.type.value,
        date=format_date(event.event.date),
        time=format_time(event.event.time),
        location=event.event.location,
        total_registrations=report.total_registrations,
        attendance_percentage=report.attendance_percentage,
        average_feedback_score=report.average_feedback_score,
        popularity_score=report.popularity_score,
        feedback=[
            FeedbackEntry(rating=fb.rating, comments=fb.comments, submitted_at=fb.submitted_at)
            for fb in event.feedback
        ],
    )


def render_report(document: EventReportDocument) -> str:
    """Serialize a report document as JSON with two-space indentation."""
    return json.dumps(document.model_dump(mode="json", by_alias=True), indent=2)


def write_report(event: EventSnapshot, output_dir: Union[str, Path] = ".") -> Path:
    """
    Write the report for one event to disk.

    Args:
        event: Event snapshot to report on
        output_dir: Directory the file is written to; created if missing

    Returns:
        Path of the written file
    """
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / report_filename(event.event.name)
    path.write_text(render_report(build_report_document(event)), encoding="utf-8")

    logger.info("Event report written", event_id=event.event.id, path=str(path))
    return path
