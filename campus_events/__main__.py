"""Command line entry point for campus events.

Every invocation works on a fresh in-memory session, seeded with the demo
data unless ``CAMPUS_EVENTS_SEED_DEMO_DATA=false``.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

import structlog

from campus_events.errors import CampusEventsError
from campus_events.export import format_date, format_time, write_report
from campus_events.fixtures import CURRENT_STUDENT_ID, seed_demo_data
from campus_events.models.config import CampusEventsConfig
from campus_events.models.event import EventType
from campus_events import notifications
from campus_events.reports import (
    build_dashboard_summary,
    generate_event_report,
    get_most_popular_events,
    get_top_active_students,
)
from campus_events.store import EventStore
from campus_events.views import ALL_TYPES, EventQuery, SortKey, browse_events, manage_events


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send both stdlib and structlog output to stderr at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Campus Events - event management and reporting")
    parser.add_argument(
        "--output",
        choices=["json", "pretty"],
        default="pretty",
        help="Output format (json or pretty-printed)",
    )
    parser.add_argument(
        "--student",
        default=CURRENT_STUDENT_ID,
        help=f"Student id acting in student commands (default: {CURRENT_STUDENT_ID})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    events = subparsers.add_parser("events", help="List events")
    events.add_argument("--view", choices=["student", "admin"], default="student")
    events.add_argument("--search", default="", help="Search term")
    events.add_argument("--type", dest="event_type", default=ALL_TYPES,
                        choices=[ALL_TYPES] + [t.value for t in EventType])
    events.add_argument("--sort", dest="sort_by", default=SortKey.DATE.value,
                        choices=[key.value for key in SortKey])

    subparsers.add_parser("dashboard", help="Show admin dashboard totals")

    top_students = subparsers.add_parser("top-students", help="Most active students")
    top_students.add_argument("--limit", type=int, default=None)

    popular = subparsers.add_parser("popular-events", help="Most popular events")
    popular.add_argument("--limit", type=int, default=None)

    report = subparsers.add_parser("report", help="Write the downloadable report for an event")
    report.add_argument("event_id")
    report.add_argument("--output-dir", default=None)

    create = subparsers.add_parser("create-event", help="Create a new event")
    create.add_argument("--name", required=True)
    create.add_argument("--type", dest="event_type", required=True, choices=[t.value for t in EventType])
    create.add_argument("--date", required=True, help="YYYY-MM-DD")
    create.add_argument("--time", required=True, help="HH:MM (24-hour)")
    create.add_argument("--location", required=True)
    create.add_argument("--description", default="")
    create.add_argument("--capacity", type=int, required=True)

    register = subparsers.add_parser("register", help="Register for an event")
    register.add_argument("event_id")

    attend = subparsers.add_parser("attend", help="Mark attendance for today's event")
    attend.add_argument("event_id")

    feedback = subparsers.add_parser("feedback", help="Submit feedback for an event")
    feedback.add_argument("event_id")
    feedback.add_argument("--rating", type=int, required=True)
    feedback.add_argument("--comments", default="")

    return parser


def _print_events(store: EventStore, args) -> None:
    query = EventQuery(search=args.search, event_type=args.event_type, sort_by=args.sort_by)
    snapshots = store.event_snapshots()
    visible = browse_events(snapshots, query) if args.view == "student" else manage_events(snapshots, query)

    if args.output == "json":
        print(json.dumps([generate_event_report(event).model_dump() for event in visible], indent=2))
        return

    if not visible:
        print("No events found. Try adjusting your search terms or filters.")
        return

    for event in visible:
        details = event.event
        report = generate_event_report(event)
        print(f"\n{details.name} [{details.type.value}] ({details.status.value})")
        print(f"  {format_date(details.date)} at {format_time(details.time)}, {details.location}")
        print(f"  {len(event.registrations)}/{details.max_capacity} registered, "
              f"{report.attendance_percentage}% attendance, "
              f"{report.average_feedback_score}/5 rating")


def _print_models(models, output: str, line) -> None:
    if output == "json":
        print(json.dumps([model.model_dump(mode="json") for model in models], indent=2))
        return
    for index, model in enumerate(models, 1):
        print(f"{index}. {line(model)}")


def run(args, config: CampusEventsConfig, store: EventStore) -> int:
    """Execute one parsed command against ``store``. Returns the exit code."""
    student_id = args.student

    try:
        if args.command == "events":
            _print_events(store, args)

        elif args.command == "dashboard":
            summary = build_dashboard_summary(store.event_snapshots())
            if args.output == "json":
                print(json.dumps(summary.model_dump(), indent=2))
            else:
                print(f"Total events:        {summary.total_events}")
                print(f"Total registrations: {summary.total_registrations}")
                print(f"Total attendees:     {summary.total_attendees}")
                print(f"Average attendance:  {summary.average_attendance}%")

        elif args.command == "top-students":
            limit = config.top_students_limit if args.limit is None else args.limit
            ranked = get_top_active_students(store.student_snapshots(), store.event_snapshots(), limit)
            _print_models(ranked, args.output, lambda r: (
                f"{r.student_name} - score {r.participation_score} "
                f"({r.events_attended} attended, {r.events_registered} registered)"
            ))

        elif args.command == "popular-events":
            limit = config.popular_events_limit if args.limit is None else args.limit
            reports = [generate_event_report(event) for event in store.event_snapshots()]
            _print_models(get_most_popular_events(reports, limit), args.output, lambda r: (
                f"{r.event_name} - score {r.popularity_score} "
                f"({r.total_registrations} registrations, {r.attendance_percentage}% attendance)"
            ))

        elif args.command == "report":
            path = write_report(store.event_snapshot(args.event_id), args.output_dir or config.report_output_dir)
            print(path)

        elif args.command == "create-event":
            event = store.create_event({
                "name": args.name,
                "type": args.event_type,
                "date": args.date,
                "time": args.time,
                "location": args.location,
                "description": args.description,
                "max_capacity": args.capacity,
            })
            print(notifications.event_created(event))

        elif args.command == "register":
            store.register(args.event_id, student_id)
            print(notifications.registration_succeeded(store.get_event(args.event_id)))

        elif args.command == "attend":
            store.mark_attendance(args.event_id, student_id)
            print(notifications.attendance_marked(store.get_event(args.event_id)))

        elif args.command == "feedback":
            store.submit_feedback(args.event_id, student_id, args.rating, args.comments)
            print(notifications.feedback_submitted(store.get_event(args.event_id)))

    except CampusEventsError as e:
        print(notifications.from_error(e), file=sys.stderr)
        return 1

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run the campus events CLI."""
    args = build_parser().parse_args(argv)
    config = CampusEventsConfig()
    configure_logging(config.log_level)

    store = EventStore(config)
    if config.seed_demo_data:
        seed_demo_data(store)

    logger.debug(f"Running command: {args.command}")
    return run(args, config, store)


if __name__ == "__main__":
    sys.exit(main())
