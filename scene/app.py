#!/usr/bin/env python3

import os
from datetime import timedelta

from flask import Flask, jsonify
from flask_cors import CORS
from flask_login import LoginManager
from flask_jwt_extended import JWTManager, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError
from werkzeug.exceptions import HTTPException
from dotenv import load_dotenv

from scene.database import init_database
from scene.errors import SceneError
from scene.models.user import User
from scene.payments import build_payment_gateway
from scene.copywriter import build_copywriter

# Load environment variables
load_dotenv()

app = Flask(__name__)

# Configure Flask app
app.secret_key = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
app.config['JWT_SECRET_KEY'] = os.getenv('JWT_SECRET_KEY', 'dev-jwt-secret-change-in-production')
app.config['JWT_ACCESS_TOKEN_EXPIRES'] = timedelta(hours=int(os.getenv('JWT_EXPIRES_HOURS', '168')))
app.config['PAYMENT_CURRENCY'] = os.getenv('PAYMENT_CURRENCY', 'usd')

# Initialize database
init_database()

CORS(app, origins=os.getenv('CORS_ORIGINS', '*'))
jwt = JWTManager(app)

# Flask-Login resolves the bearer token into current_user for @login_required
login_manager = LoginManager()
login_manager.init_app(app)


@login_manager.request_loader
def load_user_from_request(request):
    """Load user from the Authorization: Bearer <token> header"""
    scheme, _, token = request.headers.get('Authorization', '').partition(' ')
    if scheme.lower() != 'bearer' or not token:
        return None
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException) as e:
        app.logger.warning(f"Rejected bearer token: {e}")
        return None
    return User.get_or_none(User.id == claims['sub'])


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'success': False, 'error': 'Authorization required'}), 401


# Optional integrations - only enabled if API keys are present
app.extensions['scene.payments'] = build_payment_gateway()
app.extensions['scene.copywriter'] = build_copywriter()

if app.extensions['scene.payments'].enabled:
    app.logger.info("✓ Stripe payments enabled")
else:
    app.logger.info("⚠ Stripe payments disabled (no STRIPE_SECRET_KEY)")

if app.extensions['scene.copywriter'].enabled:
    app.logger.info("✓ AI copywriting enabled")
else:
    app.logger.info("⚠ AI copywriting disabled (no LLM_API_KEY)")


@app.errorhandler(SceneError)
def handle_scene_error(error):
    return jsonify(error.to_dict()), error.status_code


@app.errorhandler(HTTPException)
def handle_http_error(error):
    return jsonify({'success': False, 'error': error.description}), error.code


@app.errorhandler(Exception)
def handle_unexpected_error(error):
    app.logger.error(f"Unhandled error: {error}", exc_info=True)
    return jsonify({'success': False, 'error': 'An unexpected error occurred'}), 500


# Register route blueprints
from scene.routes import register_routes
register_routes(app)
