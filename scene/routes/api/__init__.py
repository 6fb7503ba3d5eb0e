"""
API Blueprint Registry

This module creates and configures the main API blueprint and registers all API sub-modules.
All API endpoints are prefixed with /api/
"""

from flask import Blueprint
from . import auth, events, attendees, messages, media, ai, status

# Main API blueprint
bp = Blueprint('api', __name__, url_prefix='/api')

# Register sub-blueprints
bp.register_blueprint(auth.bp)
bp.register_blueprint(events.bp)
bp.register_blueprint(attendees.bp)
bp.register_blueprint(messages.bp)
bp.register_blueprint(media.bp)
bp.register_blueprint(ai.bp)
bp.register_blueprint(status.bp)
