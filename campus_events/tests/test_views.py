"""Tests for the filtered and sorted event views."""

from datetime import date

import pytest
from pydantic import ValidationError

from campus_events.models.event import EventStatus, EventType
from campus_events.tests.factories import make_snapshot
from campus_events.views import (
    EventQuery,
    SortKey,
    browse_events,
    manage_events,
    matches_search,
    registered_events,
    STUDENT_SEARCH_FIELDS,
)


@pytest.fixture
def events():
    return [
        make_snapshot(
            event_id="ml", name="Machine Learning Workshop", event_type=EventType.WORKSHOP,
            event_date=date(2024, 3, 20), location="CS Lab", description="Neural networks",
            registrations=10, attended=5, ratings=[5, 4],
        ),
        make_snapshot(
            event_id="fest", name="Spring Fest", event_type=EventType.FEST,
            event_date=date(2024, 3, 10), location="Main Quad", description="Music and food",
            registrations=40, attended=38,
        ),
        make_snapshot(
            event_id="career", name="Career Seminar", event_type=EventType.SEMINAR,
            event_date=date(2024, 4, 2), location="Auditorium", description="Hands-on resume work",
            registrations=5, attended=0, ratings=[5, 5, 5, 5, 5, 5],
        ),
        make_snapshot(
            event_id="old", name="Winter Workshop", event_type=EventType.WORKSHOP,
            event_date=date(2024, 1, 5), location="Workshop Room", status=EventStatus.COMPLETED,
            registrations=2, attended=2,
        ),
    ]


def _ids(events):
    return [event.event.id for event in events]


class TestEventQuery:
    """Test EventQuery defaults and parsing."""

    def test_defaults(self):
        query = EventQuery()
        assert query.search == ""
        assert query.event_type == "all"
        assert query.sort_by == SortKey.DATE

    def test_parses_type_and_sort(self):
        query = EventQuery(event_type="Seminar", sort_by="popularity")
        assert query.event_type == EventType.SEMINAR
        assert query.sort_by == SortKey.POPULARITY

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationError):
            EventQuery(event_type="Concert")


class TestSearch:
    """Test search matching."""

    def test_case_insensitive(self, events):
        assert matches_search(events[0], "MACHINE", STUDENT_SEARCH_FIELDS)

    def test_empty_term_matches(self, events):
        assert all(matches_search(event, "", STUDENT_SEARCH_FIELDS) for event in events)

    def test_student_view_searches_description(self, events):
        visible = browse_events(events, EventQuery(search="resume"))
        assert _ids(visible) == ["career"]

    def test_admin_view_ignores_description(self, events):
        visible = manage_events(events, EventQuery(search="resume"))
        assert visible == []

    def test_admin_view_searches_location(self, events):
        visible = manage_events(events, EventQuery(search="quad"))
        assert _ids(visible) == ["fest"]


class TestBrowseEvents:
    """Test the student browse view."""

    def test_hides_completed_events(self, events):
        assert "old" not in _ids(browse_events(events, EventQuery()))

    def test_date_ascending_by_default(self, events):
        assert _ids(browse_events(events, EventQuery())) == ["fest", "ml", "career"]

    def test_type_filter(self, events):
        visible = browse_events(events, EventQuery(event_type="Workshop"))
        assert _ids(visible) == ["ml"]

    def test_search_and_type_both_required(self, events):
        """'work' matches several events but none of them is a Fest"""
        visible = browse_events(events, EventQuery(search="work", event_type="Fest"))
        assert visible == []

    def test_popularity_sort(self, events):
        # ml: 10 + 4.5*2 = 19, fest: 40, career: 5 + 5*6 = 35
        visible = browse_events(events, EventQuery(sort_by="popularity"))
        assert _ids(visible) == ["fest", "career", "ml"]

    def test_does_not_modify_input(self, events):
        before = _ids(events)
        browse_events(events, EventQuery(sort_by="registrations"))
        assert _ids(events) == before


class TestManageEvents:
    """Test the admin management view."""

    def test_includes_completed_events(self, events):
        assert "old" in _ids(manage_events(events, EventQuery()))

    def test_date_descending_by_default(self, events):
        assert _ids(manage_events(events, EventQuery())) == ["career", "ml", "fest", "old"]

    def test_registrations_sort(self, events):
        visible = manage_events(events, EventQuery(sort_by=SortKey.REGISTRATIONS))
        assert _ids(visible) == ["fest", "ml", "career", "old"]

    def test_attendance_sort(self, events):
        # old 100%, fest 95%, ml 50%, career 0%
        visible = manage_events(events, EventQuery(sort_by=SortKey.ATTENDANCE))
        assert _ids(visible) == ["old", "fest", "ml", "career"]

    def test_search_with_seminar_filter_is_empty(self, events):
        visible = manage_events(events, EventQuery(search="work", event_type="Seminar"))
        assert visible == []

    def test_search_with_type_filter(self, events):
        visible = manage_events(events, EventQuery(search="work", event_type="Workshop"))
        assert _ids(visible) == ["ml", "old"]

    def test_equal_keys_keep_input_order(self):
        events = [
            make_snapshot(event_id="b", registrations=3),
            make_snapshot(event_id="a", registrations=3),
            make_snapshot(event_id="c", registrations=3),
        ]
        visible = manage_events(events, EventQuery(sort_by="registrations"))
        assert _ids(visible) == ["b", "a", "c"]


class TestRegisteredEvents:
    """Test the "my registrations" view."""

    def test_filters_by_student(self, events):
        # make_snapshot registers student-0 .. student-N-1
        assert _ids(registered_events(events, "student-7")) == ["ml", "fest"]
        assert _ids(registered_events(events, "student-99")) == []
