"""
Event message board endpoints

Anyone with the event link can read and post messages.
"""

from flask import Blueprint, jsonify

from scene.admission import get_event_or_404
from scene.errors import ValidationFailure
from scene.models.message import Message
from scene.utils import get_json_body, get_str, is_valid_email

bp = Blueprint('messages', __name__, url_prefix='/events')

MAX_MESSAGE_LENGTH = 2000


@bp.route('/<event_id>/messages', methods=['GET'])
def list_messages(event_id):
    event = get_event_or_404(event_id)
    messages = Message.select().where(Message.event == event).order_by(Message.created_at.asc())
    return jsonify([message.to_dict() for message in messages])


@bp.route('/<event_id>/messages', methods=['POST'])
def post_message(event_id):
    event = get_event_or_404(event_id)
    data = get_json_body()

    sender_name = get_str(data, 'senderName')
    sender_email = get_str(data, 'senderEmail') or None
    text = get_str(data, 'message')

    if not sender_name:
        raise ValidationFailure('senderName is required')
    if sender_email and not is_valid_email(sender_email):
        raise ValidationFailure('senderEmail is not a valid email')
    if not text:
        raise ValidationFailure('message is required')
    if len(text) > MAX_MESSAGE_LENGTH:
        raise ValidationFailure(f'message must be {MAX_MESSAGE_LENGTH} characters or less')

    message = Message.create(event=event, sender_name=sender_name, sender_email=sender_email, message=text)
    return jsonify({'messageId': message.id, 'message': 'Message sent'})
