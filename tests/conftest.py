"""
Pytest configuration and shared fixtures for all tests.
"""
import os
import tempfile
from datetime import datetime
from decimal import Decimal

import pytest

# Point the app at a throwaway database before anything imports scene.database
_db_dir = tempfile.mkdtemp(prefix='scene-tests-')
os.environ['DATABASE_PATH'] = os.path.join(_db_dir, 'scene_test.db')
# Empty values win over a developer's .env, keeping optional integrations disabled
os.environ['STRIPE_SECRET_KEY'] = ''
os.environ['LLM_API_KEY'] = ''
os.environ['MAILTRAP_API_TOKEN'] = ''

from flask_jwt_extended import create_access_token

from scene.app import app as flask_app
from scene.database import database, get_models
from scene.models.event import Event
from scene.models.user import User
from scene.payments import DisabledGateway
from scene.copywriter import FallbackCopywriter


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    flask_app.config.update({
        'TESTING': True,
        'JWT_SECRET_KEY': 'test-jwt-secret-with-enough-length-for-hs256',
    })
    yield flask_app


@pytest.fixture(autouse=True)
def db(app):
    """Create clean tables for each test."""
    models = get_models()
    database.connect(reuse_if_open=True)
    database.drop_tables(models, safe=True)
    database.create_tables(models)
    yield database
    app.extensions['scene.payments'] = DisabledGateway()
    app.extensions['scene.copywriter'] = FallbackCopywriter()


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def organizer(db):
    user = User(email='host@example.com', name='Robin Host')
    user.set_password('correct-horse-battery')
    user.save(force_insert=True)
    return user


@pytest.fixture
def other_user(db):
    user = User(email='someone@example.com', name='Sam Else')
    user.set_password('another-password')
    user.save(force_insert=True)
    return user


def _bearer(app, user):
    with app.app_context():
        token = create_access_token(identity=user.id)
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def auth_headers(app, organizer):
    return _bearer(app, organizer)


@pytest.fixture
def other_headers(app, other_user):
    return _bearer(app, other_user)


@pytest.fixture
def make_event(organizer):
    """Factory for events owned by the organizer fixture."""
    def _make_event(**overrides):
        fields = {
            'organizer': organizer,
            'name': 'Rooftop Jazz: Summer Session',
            'description': 'Live trio and sunset views',
            'location': 'Pier 7',
            'date_time': datetime(2030, 6, 1, 19, 30),
            'capacity': 10,
            'is_paid': False,
            'ticket_price': Decimal('0'),
        }
        fields.update(overrides)
        questions = fields.pop('custom_questions', None)
        event = Event(**fields)
        event.set_custom_questions(questions or [])
        event.save(force_insert=True)
        return event
    return _make_event
