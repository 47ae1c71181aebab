"""Per-event metrics used by reports and rankings.

All functions take an ``EventSnapshot`` and are pure. Rounding is half-up
and done on integers so the results match what users see on screen.
"""

from campus_events.models.event import EventSnapshot


def round_half_up(numerator: int, denominator: int) -> int:
    """Round numerator / denominator to the nearest integer, halves up."""
    return (2 * numerator + denominator) // (2 * denominator)


def attendance_percentage(event: EventSnapshot) -> int:
    """Share of registered students marked as attended, 0-100.

    Returns 0 for an event without registrations.
    """
    registrations = len(event.registrations)
    if registrations == 0:
        return 0
    return round_half_up(100 * len(event.attendees), registrations)


def average_feedback_score(event: EventSnapshot) -> float:
    """Mean feedback rating rounded to one decimal place, 0 without feedback."""
    count = len(event.feedback)
    if count == 0:
        return 0
    total = sum(fb.rating for fb in event.feedback)
    return round_half_up(10 * total, count) / 10


def popularity_score(event: EventSnapshot) -> float:
    """Registrations plus average rating weighted by the number of ratings."""
    return len(event.registrations) + average_feedback_score(event) * len(event.feedback)
