"""
Event Collection Views

Filter, search and sort the event list for the student "browse" screen and
the admin "manage" screen. Views return new lists and never touch the
snapshots they are given.
"""

from enum import Enum
from typing import Callable, Iterable, List, Literal, Sequence, Tuple, Union

from pydantic import BaseModel

from campus_events.metrics import attendance_percentage, popularity_score
from campus_events.models.event import EventSnapshot, EventStatus, EventType


ALL_TYPES = "all"


class SortKey(str, Enum):
    """Sort orders offered by the event lists."""

    DATE = "date"
    REGISTRATIONS = "registrations"
    ATTENDANCE = "attendance"
    POPULARITY = "popularity"


class EventQuery(BaseModel):
    """Search box, type dropdown and sort dropdown of an event list."""

    search: str = ""
    event_type: Union[EventType, Literal["all"]] = ALL_TYPES
    sort_by: SortKey = SortKey.DATE


# Fields matched by the search box in each view
STUDENT_SEARCH_FIELDS: Tuple[str, ...] = ("name", "description", "location")
ADMIN_SEARCH_FIELDS: Tuple[str, ...] = ("name", "location")


def matches_search(event: EventSnapshot, term: str, fields: Sequence[str]) -> bool:
    """Case-insensitive substring match on any of ``fields``."""
    needle = term.lower()
    return any(needle in getattr(event.event, field).lower() for field in fields)


def matches_type(event: EventSnapshot, event_type: Union[EventType, str]) -> bool:
    if event_type == ALL_TYPES:
        return True
    return event.event.type == event_type


def _sort_key(sort_by: SortKey) -> Callable[[EventSnapshot], object]:
    if sort_by == SortKey.REGISTRATIONS:
        return lambda event: len(event.registrations)
    if sort_by == SortKey.ATTENDANCE:
        return attendance_percentage
    if sort_by == SortKey.POPULARITY:
        return popularity_score
    return lambda event: event.event.date


def filter_and_sort(
    events: Iterable[EventSnapshot],
    query: EventQuery,
    search_fields: Sequence[str],
    date_descending: bool,
) -> List[EventSnapshot]:
    """
    Apply a query to an event list.

    Args:
        events: Events to show
        query: Search term, type filter and sort key
        search_fields: Event fields the search term is matched against
        date_descending: Newest first when sorting by date

    Returns:
        New list of the matching events in display order
    """
    visible = [
        event for event in events
        if matches_search(event, query.search, search_fields) and matches_type(event, query.event_type)
    ]

    # Every metric key ranks highest first; only date direction depends on the view
    reverse = date_descending if query.sort_by == SortKey.DATE else True
    return sorted(visible, key=_sort_key(query.sort_by), reverse=reverse)


def browse_events(events: Iterable[EventSnapshot], query: EventQuery) -> List[EventSnapshot]:
    """Student view: events that are not completed, soonest first by default."""
    open_events = [event for event in events if event.event.status != EventStatus.COMPLETED]
    return filter_and_sort(open_events, query, STUDENT_SEARCH_FIELDS, date_descending=False)


def manage_events(events: Iterable[EventSnapshot], query: EventQuery) -> List[EventSnapshot]:
    """Admin view: every event, latest first by default."""
    return filter_and_sort(events, query, ADMIN_SEARCH_FIELDS, date_descending=True)


def registered_events(events: Iterable[EventSnapshot], student_id: str) -> List[EventSnapshot]:
    """Events the student holds a registration for, in list order."""
    return [
        event for event in events
        if any(reg.student_id == student_id for reg in event.registrations)
    ]
