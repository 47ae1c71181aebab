"""Demo data loaded into a new session."""

from datetime import timedelta

import structlog

from campus_events.models.event import Event, EventStatus, EventType, Feedback, Registration
from campus_events.store import EventStore


logger = structlog.get_logger(__name__)

CURRENT_STUDENT_ID = "student-1"

DEMO_STUDENTS = [
    ("student-1", "Alex Johnson", "alex.johnson@university.edu"),
    ("student-2", "Sarah Chen", "sarah.chen@university.edu"),
    ("student-3", "Michael Brown", "michael.brown@university.edu"),
    ("student-4", "Emily Davis", "emily.davis@university.edu"),
    ("student-5", "David Wilson", "david.wilson@university.edu"),
]

# (id, name, type, days from today, time, location, description, capacity, status)
DEMO_EVENTS = [
    ("event-1", "AI & Machine Learning Workshop", EventType.WORKSHOP, -14, "14:00", "Computer Science Lab 101",
     "Hands-on introduction to neural networks and model training", 30, EventStatus.COMPLETED),
    ("event-2", "Spring Cultural Fest", EventType.FEST, -7, "18:00", "Main Quad",
     "Music, dance and food stalls from student clubs", 200, EventStatus.COMPLETED),
    ("event-3", "Career Development Seminar", EventType.SEMINAR, 0, "10:00", "Auditorium B",
     "Resume reviews and interview tips from alumni", 80, EventStatus.UPCOMING),
    ("event-4", "Web Development Bootcamp", EventType.WORKSHOP, 5, "09:30", "Engineering Building 204",
     "Build and deploy a full-stack web application in a day", 25, EventStatus.UPCOMING),
    ("event-5", "Sustainability Seminar", EventType.SEMINAR, 12, "15:00", "Library Conference Room",
     "Campus sustainability initiatives and how to get involved", 50, EventStatus.UPCOMING),
]

# (student id, event id, attended)
DEMO_REGISTRATIONS = [
    ("student-1", "event-1", True),
    ("student-2", "event-1", True),
    ("student-3", "event-1", False),
    ("student-1", "event-2", True),
    ("student-2", "event-2", True),
    ("student-4", "event-2", True),
    ("student-5", "event-2", False),
    ("student-2", "event-3", False),
    ("student-3", "event-3", False),
    ("student-2", "event-4", False),
    ("student-5", "event-5", False),
]

# (student id, event id, rating, comments)
DEMO_FEEDBACK = [
    ("student-1", "event-1", 5, "Great hands-on session, the examples were very clear."),
    ("student-2", "event-1", 4, "Useful, but it could have been longer."),
    ("student-1", "event-2", 5, "Best fest so far!"),
    ("student-4", "event-2", 4, ""),
]


def seed_demo_data(store: EventStore) -> EventStore:
    """
    Fill a store with demo students, events, registrations and feedback.

    Event dates are relative to the store clock so that one event always
    takes place today.
    """
    now = store.clock()
    today = now.date()

    for student_id, name, email in DEMO_STUDENTS:
        store.add_student(name, email, student_id=student_id)

    for event_id, name, event_type, offset, time, location, description, capacity, status in DEMO_EVENTS:
        store.load_event(Event(
            id=event_id,
            name=name,
            type=event_type,
            date=today + timedelta(days=offset),
            time=time,
            location=location,
            description=description,
            max_capacity=capacity,
            status=status,
            created_at=now - timedelta(days=30),
        ))

    for index, (student_id, event_id, attended) in enumerate(DEMO_REGISTRATIONS, 1):
        store.load_registration(Registration(
            id=f"reg-{index}",
            student_id=student_id,
            event_id=event_id,
            registered_at=now - timedelta(days=20),
            attended=attended,
        ))

    for index, (student_id, event_id, rating, comments) in enumerate(DEMO_FEEDBACK, 1):
        store.load_feedback(Feedback(
            id=f"fb-{index}",
            student_id=student_id,
            event_id=event_id,
            rating=rating,
            comments=comments,
            submitted_at=now - timedelta(days=3),
        ))

    logger.info("Demo data loaded", students=len(DEMO_STUDENTS), events=len(DEMO_EVENTS),
                registrations=len(DEMO_REGISTRATIONS), feedback=len(DEMO_FEEDBACK))
    return store
