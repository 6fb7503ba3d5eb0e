"""
Shared decorators for scene

Authorization decorators used across the API blueprints.
"""

from functools import wraps
from flask import jsonify
from flask_login import current_user

from scene.admission import get_event_or_404
from scene.errors import Forbidden


def event_owner_required(f):
    """
    Decorator to require that the current user organizes the event in the URL.

    The wrapped view receives the loaded Event instead of the raw event_id.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return jsonify({'success': False, 'error': 'Authorization required'}), 401
        event = get_event_or_404(kwargs.pop('event_id'))
        if event.organizer_id != current_user.id:
            raise Forbidden('Only the event organizer can access this')
        return f(event, *args, **kwargs)
    return decorated_function
