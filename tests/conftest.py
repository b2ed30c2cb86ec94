import pytest

from app import create_app
from extensions import db

PASSWORD = 'secret123'

LISTING_FIELDS = {
    'title': 'Cozy room near Thamel',
    'description': 'A bright, quiet room with shared kitchen and wifi.',
    'price': 1000,
    'location': 'Thamel, Kathmandu',
    'type': 'Room',
}


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['UPLOAD_FOLDER'] = str(tmp_path / 'uploads')

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth(token):
    return {'Authorization': f'Bearer {token}'}


def register(client, name, email, role=None, password=PASSWORD):
    body = {'name': name, 'email': email, 'password': password}
    if role:
        body['role'] = role
    return client.post('/api/auth/register', json=body)


def make_account(client, name, email, role=None):
    response = register(client, name, email, role)
    assert response.status_code == 201, response.get_json()
    data = response.get_json()['data']
    return {'id': data['user']['id'], 'token': data['token'], 'email': email}


def create_listing(client, token, **overrides):
    body = dict(LISTING_FIELDS, **overrides)
    response = client.post('/api/listings', json=body, headers=auth(token))
    assert response.status_code == 201, response.get_json()
    return response.get_json()['data']


def approve(client, admin_token, listing_id, approved=True):
    response = client.patch(
        f'/api/listings/{listing_id}/status',
        json={'isApproved': approved},
        headers=auth(admin_token)
    )
    assert response.status_code == 200, response.get_json()
    return response.get_json()['data']


@pytest.fixture
def owner(client):
    return make_account(client, 'Olivia Owner', 'owner@example.com', 'Owner')


@pytest.fixture
def other_owner(client):
    return make_account(client, 'Oscar Owner', 'oscar@example.com', 'Owner')


@pytest.fixture
def tenant(client):
    return make_account(client, 'Tara Tenant', 'tenant@example.com')


@pytest.fixture
def admin(client):
    return make_account(client, 'Ada Admin', 'admin@example.com', 'Admin')
