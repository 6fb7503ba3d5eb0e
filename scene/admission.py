"""
Admission and payment workflow for event attendees

Admission decides the initial status of an RSVP against the event's capacity.
The payment lifecycle moves a paid-event attendee from 'unpaid' to 'paid'
once the payment gateway reports a completed payment.

Capacity counts every attendee row of the event regardless of status. The
count and the insert run under a per-event lock inside a single IMMEDIATE
transaction, so two RSVPs for the last spot can never both be admitted.
"""

import logging
import threading
import weakref
from decimal import Decimal, ROUND_HALF_UP

from scene.database import database
from scene.errors import NotFound, CapacityExceeded, InvalidTransition, ValidationFailure
from scene.models.event import Event
from scene.models.attendee import Attendee, STATUS_UNPAID, STATUS_PAID, STATUS_CONFIRMED

logger = logging.getLogger(__name__)

# Entries vanish once no admission holds a reference to the lock
_event_locks = weakref.WeakValueDictionary()
_event_locks_guard = threading.Lock()


def _event_lock(event_id):
    with _event_locks_guard:
        lock = _event_locks.get(event_id)
        if lock is None:
            lock = _event_locks[event_id] = threading.Lock()
        return lock


def get_event_or_404(event_id):
    try:
        return Event.get_by_id(event_id)
    except Event.DoesNotExist:
        raise NotFound('Event not found')


def get_attendee_or_404(attendee_id):
    try:
        return Attendee.get_by_id(attendee_id)
    except Attendee.DoesNotExist:
        raise NotFound('Attendee not found')


def validate_answers(event, answers):
    """
    Check RSVP answers against the event's custom questions.

    Args:
        event: Event instance
        answers: Mapping of question id -> answer (None is treated as empty)

    Returns:
        dict: The answers, with keys coerced to strings

    Raises:
        ValidationFailure: If answers is not a mapping or a required question is unanswered
    """
    if answers is None:
        answers = {}
    if not isinstance(answers, dict):
        raise ValidationFailure('answers must be an object mapping question ids to answers')

    answers = {str(key): value for key, value in answers.items()}

    missing = []
    for question in event.get_custom_questions():
        if not question.get('required'):
            continue
        answer = answers.get(question['id'])
        if answer is None or (isinstance(answer, str) and not answer.strip()):
            missing.append(question.get('question') or question['id'])

    if missing:
        raise ValidationFailure(f"Missing answers for required questions: {', '.join(missing)}")

    return answers


def initial_status(event):
    return STATUS_UNPAID if event.is_paid else STATUS_CONFIRMED


def admit(event_id, name, email, answers=None):
    """
    Register a guest for an event.

    Args:
        event_id: ID of the event
        name: Guest name
        email: Guest email
        answers: Optional mapping of custom question id -> answer

    Returns:
        Attendee: The newly created attendee ('confirmed' for free events,
        'unpaid' for paid events)

    Raises:
        NotFound: If the event does not exist
        ValidationFailure: If the answers do not satisfy the event's questions
        CapacityExceeded: If the event already has as many attendees as its capacity
    """
    event = get_event_or_404(event_id)
    answers = validate_answers(event, answers)

    with _event_lock(event.id):
        with database.atomic(lock_type='IMMEDIATE'):
            current_count = Attendee.select().where(Attendee.event == event).count()
            if current_count >= event.capacity:
                logger.info(f"Rejected RSVP for event {event.id}: {current_count}/{event.capacity} spots taken")
                raise CapacityExceeded('Event is full')

            attendee = Attendee(event=event, name=name, email=email, status=initial_status(event))
            attendee.set_answers(answers)
            attendee.save(force_insert=True)

    logger.info(f"Admitted attendee {attendee.id} to event {event.id} as '{attendee.status}'")
    return attendee


def confirm_payment(attendee_id, payment_reference):
    """
    Record an externally confirmed payment for an attendee.

    Only 'unpaid' attendees move to 'paid'. Repeating a confirmation with the
    same payment reference is a no-op, so revenue is never counted twice.

    Returns:
        Attendee: The attendee in 'paid' status

    Raises:
        ValidationFailure: If the payment reference is empty
        NotFound: If the attendee does not exist
        InvalidTransition: If the attendee is not awaiting payment
    """
    payment_reference = str(payment_reference or '').strip()
    if not payment_reference:
        raise ValidationFailure('paymentId is required')

    with database.atomic(lock_type='IMMEDIATE'):
        attendee = get_attendee_or_404(attendee_id)

        if attendee.status == STATUS_PAID:
            if attendee.payment_id == payment_reference:
                logger.info(f"Payment {payment_reference} already recorded for attendee {attendee.id}")
                return attendee
            raise InvalidTransition('Payment already confirmed for this attendee')

        if attendee.status != STATUS_UNPAID:
            raise InvalidTransition(f"Cannot confirm payment for an attendee with status '{attendee.status}'")

        updated = (Attendee
                   .update(status=STATUS_PAID, payment_id=payment_reference)
                   .where((Attendee.id == attendee.id) & (Attendee.status == STATUS_UNPAID))
                   .execute())
        if not updated:
            raise InvalidTransition('Attendee is no longer awaiting payment')

    attendee.status = STATUS_PAID
    attendee.payment_id = payment_reference
    logger.info(f"Recorded payment {payment_reference} for attendee {attendee.id}")
    return attendee


def amount_in_minor_units(price):
    """Convert a decimal price (e.g. 10.50) to integer cents (1050)"""
    return int((Decimal(price) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))


def start_payment(attendee_id, gateway, currency='usd'):
    """
    Create a payment intent for an unpaid attendee's ticket.

    Args:
        attendee_id: ID of the attendee
        gateway: Payment gateway (see scene.payments)
        currency: ISO currency code passed to the gateway

    Returns:
        dict: client_secret, amount (minor units) and currency

    Raises:
        NotFound: If the attendee does not exist
        InvalidTransition: If the attendee has nothing to pay
        DependencyUnavailable: If no payment gateway is configured
    """
    attendee = get_attendee_or_404(attendee_id)
    if attendee.status != STATUS_UNPAID:
        raise InvalidTransition('Attendee has no outstanding payment')

    event = attendee.event
    amount = amount_in_minor_units(event.effective_price)
    client_secret = gateway.create_payment_intent(
        amount=amount,
        currency=currency,
        metadata={'attendeeId': attendee.id, 'eventId': event.id},
    )
    return {'client_secret': client_secret, 'amount': amount, 'currency': currency}
