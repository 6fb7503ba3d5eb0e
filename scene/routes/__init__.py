"""
Route registration for scene

This module registers all blueprint routes with the Flask application.
"""


def register_routes(app):
    """Register all application blueprints"""
    from .api import bp as api_bp

    app.register_blueprint(api_bp)
