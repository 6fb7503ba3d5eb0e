"""
Attendee payment API endpoints

Both endpoints are unauthenticated: guests pay for their own RSVP using the
attendee id they received when registering.
"""

from flask import Blueprint, jsonify, current_app

from scene.admission import start_payment, confirm_payment
from scene.utils import get_json_body

bp = Blueprint('attendees', __name__, url_prefix='/attendees')


@bp.route('/<attendee_id>/payment', methods=['POST'])
def create_payment(attendee_id):
    """Create a payment intent for the attendee's ticket"""
    gateway = current_app.extensions['scene.payments']
    payment = start_payment(attendee_id, gateway, currency=current_app.config['PAYMENT_CURRENCY'])
    return jsonify({
        'clientSecret': payment['client_secret'],
        'amount': payment['amount'],
        'currency': payment['currency'],
    })


@bp.route('/<attendee_id>/confirm-payment', methods=['POST'])
def confirm(attendee_id):
    """Record the gateway's payment reference and mark the attendee paid"""
    data = get_json_body()
    attendee = confirm_payment(attendee_id, data.get('paymentId'))
    return jsonify({'message': 'Payment confirmed', 'status': attendee.status})
