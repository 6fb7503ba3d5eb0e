"""
Attendance and revenue summary for an event
"""

from decimal import Decimal
from peewee import fn, Case

from scene.admission import get_event_or_404
from scene.models.attendee import (Attendee, STATUS_PAID, STATUS_UNPAID, STATUS_CONFIRMED,
                                   STATUS_WAITLIST)


def _count_status(status):
    return fn.SUM(Case(None, [(Attendee.status == status, 1)], 0))


def summarize(event_id):
    """
    Count an event's attendees by status and derive its revenue.

    Revenue is paid_count x ticket_price for paid events and 0 for free events.

    Returns:
        dict: total, paid_count, unpaid_count, confirmed_count, waitlist_count,
        revenue (Decimal), capacity, event_date (datetime)

    Raises:
        NotFound: If the event does not exist
    """
    event = get_event_or_404(event_id)

    stats = (Attendee
             .select(fn.COUNT(Attendee.id).alias('total'),
                     _count_status(STATUS_PAID).alias('paid_count'),
                     _count_status(STATUS_UNPAID).alias('unpaid_count'),
                     _count_status(STATUS_CONFIRMED).alias('confirmed_count'),
                     _count_status(STATUS_WAITLIST).alias('waitlist_count'))
             .where(Attendee.event == event)
             .dicts()
             .get())

    # SUM over no rows is NULL
    summary = {key: int(value or 0) for key, value in stats.items()}

    if event.is_paid:
        summary['revenue'] = summary['paid_count'] * event.effective_price
    else:
        summary['revenue'] = Decimal('0')

    summary['capacity'] = event.capacity
    summary['event_date'] = event.date_time
    return summary
