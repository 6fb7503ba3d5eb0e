"""
AI copywriting endpoints

Served by the configured copywriter (see scene.copywriter). Without an LLM
key, description enhancement returns 503 and promo ideas fall back to a
recombination of the event's own details.
"""

from flask import Blueprint, jsonify, current_app
from flask_login import login_required

from scene.errors import ValidationFailure
from scene.utils import get_json_body, get_str, get_bool

bp = Blueprint('ai', __name__, url_prefix='/ai')


@bp.route('/enhance-description', methods=['POST'])
@login_required
def enhance_description():
    data = get_json_body()
    event_name = get_str(data, 'eventName')
    description = get_str(data, 'description')
    if not event_name or not description:
        raise ValidationFailure('eventName and description are required')

    copywriter = current_app.extensions['scene.copywriter']
    return jsonify({'enhancedDescription': copywriter.enhance_description(event_name, description)})


@bp.route('/generate-promo-ideas', methods=['POST'])
@login_required
def generate_promo_ideas():
    data = get_json_body()
    event_name = get_str(data, 'eventName')
    if not event_name:
        raise ValidationFailure('eventName is required')

    copywriter = current_app.extensions['scene.copywriter']
    promo_ideas = copywriter.generate_promo_ideas(
        event_name,
        description=get_str(data, 'description') or None,
        date_time=get_str(data, 'dateTime') or None,
        location=get_str(data, 'location') or None,
        is_paid=get_bool(data, 'isPaid'),
        ticket_price=data.get('ticketPrice'),
    )
    return jsonify({'promoIdeas': promo_ideas})
