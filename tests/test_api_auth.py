"""
Tests for registration, login and bearer-token authentication.
"""
import pytest


def test_register_returns_token(client):
    response = client.post('/api/auth/register', json={
        'email': 'New.Organizer@Example.com',
        'password': 'long-enough-pw',
        'name': 'New Organizer',
    })
    assert response.status_code == 200
    body = response.get_json()
    assert body['token']
    assert body['user']['email'] == 'new.organizer@example.com'

    me = client.get('/api/auth/me', headers={'Authorization': f"Bearer {body['token']}"})
    assert me.status_code == 200
    assert me.get_json()['name'] == 'New Organizer'


def test_register_duplicate_email(client, organizer):
    response = client.post('/api/auth/register', json={
        'email': organizer.email,
        'password': 'long-enough-pw',
        'name': 'Copy',
    })
    assert response.status_code == 409


def test_register_validation(client):
    response = client.post('/api/auth/register', json={'email': 'bad', 'password': 'x', 'name': ''})
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_register_requires_json(client):
    response = client.post('/api/auth/register', data='not json', content_type='text/plain')
    assert response.status_code == 400


def test_login(client, organizer):
    response = client.post('/api/auth/login', json={
        'email': 'host@example.com',
        'password': 'correct-horse-battery',
    })
    assert response.status_code == 200
    assert response.get_json()['user']['id'] == organizer.id


def test_login_wrong_password(client, organizer):
    response = client.post('/api/auth/login', json={'email': 'host@example.com', 'password': 'nope'})
    assert response.status_code == 401
    assert response.get_json()['error'] == 'Invalid credentials'


def test_login_unknown_email(client):
    response = client.post('/api/auth/login', json={'email': 'ghost@example.com', 'password': 'whatever'})
    assert response.status_code == 401


def test_protected_route_without_token(client):
    assert client.get('/api/events').status_code == 401


def test_protected_route_with_garbage_token(client):
    response = client.get('/api/events', headers={'Authorization': 'Bearer not-a-jwt'})
    assert response.status_code == 401


@pytest.mark.parametrize('payload', [
    {'email': 42, 'password': 'long-enough-pass', 'name': 'Robin'},
    {'email': 'new@example.com', 'password': 12345678, 'name': 'Robin'},
    {'email': 'new@example.com', 'password': 'long-enough-pass', 'name': ['Robin']},
])
def test_register_wrong_typed_fields(client, payload):
    response = client.post('/api/auth/register', json=payload)
    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_login_wrong_typed_fields(client, organizer):
    response = client.post('/api/auth/login', json={'email': 'host@example.com', 'password': None})
    assert response.status_code == 401
    response = client.post('/api/auth/login', json={'email': {'$ne': ''}, 'password': 'x'})
    assert response.status_code == 400


def test_password_whitespace_is_kept(client):
    client.post('/api/auth/register', json={'email': 'pad@example.com', 'password': '  spaced out  ', 'name': 'Pad'})
    assert client.post('/api/auth/login', json={
        'email': 'pad@example.com', 'password': '  spaced out  ',
    }).status_code == 200
    assert client.post('/api/auth/login', json={
        'email': 'pad@example.com', 'password': 'spaced out',
    }).status_code == 401
