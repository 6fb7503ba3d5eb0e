"""
Tests for RSVP admission and the payment status lifecycle.
"""
import gc
import threading
from decimal import Decimal
from unittest.mock import Mock

import pytest

from scene import admission
from scene.admission import admit, confirm_payment, start_payment, amount_in_minor_units
from scene.errors import (NotFound, CapacityExceeded, InvalidTransition, ValidationFailure,
                          DependencyUnavailable)
from scene.models.attendee import Attendee, STATUS_WAITLIST
from scene.payments import DisabledGateway


class TestAdmit:

    def test_free_event_confirms(self, make_event):
        event = make_event()
        attendee = admit(event.id, 'Alex', 'alex@example.com')
        assert attendee.status == 'confirmed'
        assert Attendee.get_by_id(attendee.id).event_id == event.id

    def test_paid_event_starts_unpaid(self, make_event):
        event = make_event(is_paid=True, ticket_price=Decimal('25.00'))
        attendee = admit(event.id, 'Alex', 'alex@example.com')
        assert attendee.status == 'unpaid'
        assert attendee.payment_id is None

    def test_unknown_event_creates_nothing(self, make_event):
        make_event()
        with pytest.raises(NotFound):
            admit('no-such-event', 'Alex', 'alex@example.com')
        assert Attendee.select().count() == 0

    def test_last_spot_then_full(self, make_event):
        event = make_event(capacity=1)
        assert admit(event.id, 'First', 'first@example.com').status == 'confirmed'
        with pytest.raises(CapacityExceeded):
            admit(event.id, 'Second', 'second@example.com')
        assert Attendee.select().where(Attendee.event == event).count() == 1

    def test_waitlisted_attendees_take_a_spot(self, make_event):
        event = make_event(capacity=1)
        Attendee.create(event=event, name='Wait', email='wait@example.com', status=STATUS_WAITLIST)
        with pytest.raises(CapacityExceeded):
            admit(event.id, 'Late', 'late@example.com')

    def test_event_lock_released_after_admission(self, make_event):
        event = make_event()
        admit(event.id, 'Alex', 'alex@example.com')
        gc.collect()
        assert event.id not in admission._event_locks

    def test_fresh_ids(self, make_event):
        event = make_event(capacity=3)
        ids = {admit(event.id, f'Guest {i}', f'g{i}@example.com').id for i in range(3)}
        assert len(ids) == 3

    def test_answers_are_stored(self, make_event):
        event = make_event(custom_questions=[{'id': 'diet', 'question': 'Dietary needs?'}])
        attendee = admit(event.id, 'Alex', 'alex@example.com', answers={'diet': 'vegan'})
        assert Attendee.get_by_id(attendee.id).get_answers() == {'diet': 'vegan'}

    def test_required_question_must_be_answered(self, make_event):
        event = make_event(custom_questions=[
            {'id': 'tshirt', 'question': 'T-shirt size', 'required': True},
            {'question': 'Anything else?'},
        ])
        with pytest.raises(ValidationFailure) as excinfo:
            admit(event.id, 'Alex', 'alex@example.com', answers={'q2': 'no'})
        assert 'T-shirt size' in str(excinfo.value)
        assert Attendee.select().count() == 0

        attendee = admit(event.id, 'Alex', 'alex@example.com', answers={'tshirt': 'M'})
        assert attendee.get_answers() == {'tshirt': 'M'}

    def test_answers_must_be_a_mapping(self, make_event):
        event = make_event()
        with pytest.raises(ValidationFailure):
            admit(event.id, 'Alex', 'alex@example.com', answers=['vegan'])

    @pytest.mark.parametrize('capacity', [1, 3, 5])
    def test_concurrent_rsvps_never_oversell(self, make_event, capacity):
        event = make_event(capacity=capacity)
        results = []
        results_lock = threading.Lock()
        start = threading.Barrier(12)

        def attempt(i):
            start.wait()
            try:
                attendee = admit(event.id, f'Guest {i}', f'guest{i}@example.com')
                outcome = attendee.status
            except CapacityExceeded:
                outcome = 'full'
            with results_lock:
                results.append(outcome)

        threads = [threading.Thread(target=attempt, args=(i,)) for i in range(12)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count('confirmed') == capacity
        assert results.count('full') == 12 - capacity
        assert Attendee.select().where(Attendee.event == event).count() == capacity


class TestConfirmPayment:

    def test_unpaid_becomes_paid(self, make_event):
        event = make_event(is_paid=True, ticket_price=Decimal('10.00'))
        attendee = admit(event.id, 'Alex', 'alex@example.com')

        confirmed = confirm_payment(attendee.id, 'pi_123')

        assert confirmed.status == 'paid'
        stored = Attendee.get_by_id(attendee.id)
        assert stored.status == 'paid'
        assert stored.payment_id == 'pi_123'

    def test_unknown_attendee(self):
        with pytest.raises(NotFound):
            confirm_payment('missing', 'pi_123')

    def test_repeat_with_same_reference_is_noop(self, make_event):
        event = make_event(is_paid=True, ticket_price=Decimal('10.00'))
        attendee = admit(event.id, 'Alex', 'alex@example.com')
        confirm_payment(attendee.id, 'pi_123')

        again = confirm_payment(attendee.id, 'pi_123')

        assert again.status == 'paid'
        assert again.payment_id == 'pi_123'

    def test_second_reference_is_rejected(self, make_event):
        event = make_event(is_paid=True, ticket_price=Decimal('10.00'))
        attendee = admit(event.id, 'Alex', 'alex@example.com')
        confirm_payment(attendee.id, 'pi_123')

        with pytest.raises(InvalidTransition):
            confirm_payment(attendee.id, 'pi_456')
        assert Attendee.get_by_id(attendee.id).payment_id == 'pi_123'

    def test_free_attendee_cannot_be_marked_paid(self, make_event):
        attendee = admit(make_event().id, 'Alex', 'alex@example.com')
        with pytest.raises(InvalidTransition):
            confirm_payment(attendee.id, 'pi_123')
        assert Attendee.get_by_id(attendee.id).status == 'confirmed'

    def test_reference_required(self, make_event):
        event = make_event(is_paid=True, ticket_price=Decimal('10.00'))
        attendee = admit(event.id, 'Alex', 'alex@example.com')
        with pytest.raises(ValidationFailure):
            confirm_payment(attendee.id, '  ')
        assert Attendee.get_by_id(attendee.id).status == 'unpaid'


class TestStartPayment:

    def test_amount_in_cents(self, make_event):
        event = make_event(is_paid=True, ticket_price=Decimal('12.35'))
        attendee = admit(event.id, 'Alex', 'alex@example.com')
        gateway = Mock()
        gateway.create_payment_intent.return_value = 'pi_secret_abc'

        payment = start_payment(attendee.id, gateway, currency='eur')

        assert payment == {'client_secret': 'pi_secret_abc', 'amount': 1235, 'currency': 'eur'}
        gateway.create_payment_intent.assert_called_once_with(
            amount=1235,
            currency='eur',
            metadata={'attendeeId': attendee.id, 'eventId': event.id},
        )

    def test_paid_attendee_has_nothing_to_pay(self, make_event):
        event = make_event(is_paid=True, ticket_price=Decimal('10.00'))
        attendee = admit(event.id, 'Alex', 'alex@example.com')
        confirm_payment(attendee.id, 'pi_1')
        with pytest.raises(InvalidTransition):
            start_payment(attendee.id, Mock())

    def test_disabled_gateway(self, make_event):
        event = make_event(is_paid=True, ticket_price=Decimal('10.00'))
        attendee = admit(event.id, 'Alex', 'alex@example.com')
        with pytest.raises(DependencyUnavailable):
            start_payment(attendee.id, DisabledGateway())

    def test_rounding(self):
        assert amount_in_minor_units(Decimal('0.005')) == 1
        assert amount_in_minor_units(Decimal('19.99')) == 1999
