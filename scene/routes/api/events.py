"""
Event API endpoints

Event creation and listing for organizers, public RSVP intake, payment
reminders and per-event analytics.
"""

from flask import Blueprint, jsonify, current_app
from flask_login import login_required, current_user

from scene.admission import admit
from scene.analytics import summarize
from scene.decorators import event_owner_required
from scene.errors import ValidationFailure
from scene.models.event import Event
from scene.models.attendee import Attendee
from scene.notification import send_payment_reminders
from scene.utils import (get_json_body, get_str, get_bool, is_valid_email, parse_datetime, parse_price,
                         parse_positive_int)

bp = Blueprint('events', __name__, url_prefix='/events')

PAYMENT_METHODS = ['none', 'stripe', 'cash', 'transfer', 'other']


def validate_event_data(name, date_time, capacity, is_paid, ticket_price, payment_method,
                        custom_questions, description=None, location=None):
    """
    Validate event data for required fields and value ranges.

    Returns (is_valid, error_message)
    """
    if not name or not name.strip():
        return False, "Event name is required."

    if len(name.strip()) > 255:
        return False, f"Event name must be 255 characters or less. Current length: {len(name.strip())}"

    if description and len(description) > 5000:
        return False, f"Event description must be 5000 characters or less. Current length: {len(description)}"

    if location and len(location) > 255:
        return False, f"Location must be 255 characters or less. Current length: {len(location)}"

    if date_time is None:
        return False, "dateTime must be an ISO-8601 timestamp."

    if capacity is None:
        return False, "Capacity must be a positive whole number."

    if ticket_price is None:
        return False, "Ticket price must be a non-negative amount."

    if is_paid and ticket_price <= 0:
        return False, "Paid events need a ticket price above zero."

    if payment_method not in PAYMENT_METHODS:
        return False, f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}"

    if not isinstance(custom_questions, list):
        return False, "customQuestions must be a list."

    seen_ids = set()
    for index, question in enumerate(custom_questions, start=1):
        if isinstance(question, str):
            question = {'question': question}
        if not isinstance(question, dict) or not str(question.get('question') or '').strip():
            return False, f"Custom question {index} needs a 'question' text."
        question_id = str(question.get('id', f'q{index}'))
        if question_id in seen_ids:
            return False, f"Duplicate custom question id '{question_id}'."
        if not isinstance(question.get('required', False), bool):
            return False, f"Custom question {index}: 'required' must be true or false."
        seen_ids.add(question_id)

    return True, None


@bp.route('', methods=['POST'])
@login_required
def create_event():
    """Create a new event owned by the current user"""
    data = get_json_body()

    name = get_str(data, 'name')
    description = get_str(data, 'description') or None
    location = get_str(data, 'location') or None
    date_time = parse_datetime(data.get('dateTime'))
    capacity = parse_positive_int(data.get('capacity'))
    is_paid = get_bool(data, 'isPaid')
    ticket_price = parse_price(data.get('ticketPrice'))
    payment_method = get_str(data, 'paymentMethod') or 'none'
    custom_questions = data.get('customQuestions') or []

    is_valid, error_message = validate_event_data(
        name, date_time, capacity, is_paid, ticket_price, payment_method, custom_questions,
        description=description, location=location,
    )
    if not is_valid:
        raise ValidationFailure(error_message)

    event = Event(
        organizer=current_user.id,
        name=name,
        description=description,
        location=location,
        date_time=date_time,
        capacity=capacity,
        is_paid=is_paid,
        ticket_price=ticket_price if is_paid else 0,
        payment_method=payment_method,
        payment_instructions=get_str(data, 'paymentInstructions'),
        image_url=get_str(data, 'imageUrl') or None,
    )
    event.set_custom_questions(custom_questions)
    event.save(force_insert=True)

    current_app.logger.info(f"User {current_user.id} created event {event.id}")
    return jsonify({'eventId': event.id, 'message': 'Event created successfully'})


@bp.route('', methods=['GET'])
@login_required
def list_events():
    """Return the current user's events, latest schedule first"""
    events = (Event.select()
              .where(Event.organizer == current_user.id)
              .order_by(Event.date_time.desc()))
    return jsonify([event.to_dict() for event in events])


@bp.route('/<event_id>', methods=['GET'])
@event_owner_required
def event_detail(event):
    attendees = Attendee.select().where(Attendee.event == event).order_by(Attendee.rsvp_date)
    return jsonify({**event.to_dict(), 'attendees': [a.to_dict() for a in attendees]})


@bp.route('/<event_id>/rsvp', methods=['POST'])
def rsvp(event_id):
    """
    Register a guest for an event.

    Expects JSON with 'name', 'email' and optional 'answers' (question id -> answer).
    Free events confirm immediately; paid events start out 'unpaid'.
    """
    data = get_json_body()
    name = get_str(data, 'name')
    email = get_str(data, 'email')

    if not name:
        raise ValidationFailure('Name is required')
    if not is_valid_email(email):
        raise ValidationFailure('A valid email is required')

    attendee = admit(event_id, name=name, email=email, answers=data.get('answers'))
    return jsonify({'attendeeId': attendee.id, 'status': attendee.status, 'message': 'RSVP successful'})


@bp.route('/<event_id>/send-reminders', methods=['POST'])
@event_owner_required
def send_reminders(event):
    """Email a payment reminder to every unpaid attendee"""
    count, sent = send_payment_reminders(event)
    return jsonify({
        'message': f'Reminders sent to {count} attendees',
        'count': count,
        'sent': sent,
    })


@bp.route('/<event_id>/analytics', methods=['GET'])
@event_owner_required
def analytics(event):
    summary = summarize(event.id)
    return jsonify({
        'total': summary['total'],
        'paidCount': summary['paid_count'],
        'unpaidCount': summary['unpaid_count'],
        'confirmedCount': summary['confirmed_count'],
        'waitlistCount': summary['waitlist_count'],
        'revenue': float(summary['revenue']),
        'capacity': summary['capacity'],
        'eventDate': summary['event_date'].isoformat(),
    })
