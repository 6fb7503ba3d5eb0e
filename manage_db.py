#!/usr/bin/env python3
"""
Database management script for Scene
"""

import sys
import argparse

from scene.database import init_database, get_database
from scene.models.event import Event
from scene.models.attendee import Attendee


def init_database_cmd():
    """Initialize database and create tables"""
    init_database()


def list_events():
    """List all events with their occupancy"""
    database = get_database()
    database.connect(reuse_if_open=True)
    events = list(Event.select().order_by(Event.date_time.desc()))
    if events:
        print("\n📋 Events:")
        print("-" * 100)
        print(f"{'ID':<38} {'Name':<30} {'Date':<17} {'Taken':>8} {'Paid'}")
        print("-" * 100)
        for event in events:
            taken = Attendee.select().where(Attendee.event == event).count()
            paid = f"${event.effective_price}" if event.is_paid else "free"
            print(f"{event.id:<38} {event.name[:30]:<30} {event.date_time.strftime('%Y-%m-%d %H:%M'):<17} "
                  f"{taken:>3}/{event.capacity:<4} {paid}")
    else:
        print("No events found in database")
    database.close()


def list_attendees(event_id):
    """List attendees of an event"""
    database = get_database()
    database.connect(reuse_if_open=True)
    try:
        event = Event.get_by_id(event_id)
    except Event.DoesNotExist:
        print(f"❌ Event {event_id} not found")
        database.close()
        sys.exit(1)

    attendees = list(Attendee.select().where(Attendee.event == event).order_by(Attendee.rsvp_date))
    print(f"\n📋 Attendees of {event.name} ({len(attendees)}/{event.capacity}):")
    print("-" * 90)
    for attendee in attendees:
        print(f"{attendee.id:<38} {attendee.name[:20]:<20} {attendee.email[:25]:<25} {attendee.status}")
    database.close()


def main():
    parser = argparse.ArgumentParser(description='Manage Scene database')
    parser.add_argument('command', choices=['init', 'list-events', 'list-attendees'],
                        help='Command to execute')
    parser.add_argument('event_id', nargs='?', help='Event ID for list-attendees')

    args = parser.parse_args()

    if args.command == 'init':
        init_database_cmd()
    elif args.command == 'list-events':
        list_events()
    elif args.command == 'list-attendees':
        if not args.event_id:
            print("❌ Event ID required for list-attendees command")
            print("Usage: python manage_db.py list-attendees <event_id>")
            sys.exit(1)
        list_attendees(args.event_id)


if __name__ == '__main__':
    main()
