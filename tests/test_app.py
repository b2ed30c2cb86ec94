import pytest


def test_index(client):
    body = client.get('/').get_json()

    assert body['success'] is True
    assert body['message'] == 'GharSathi API is running'


def test_health(client):
    response = client.get('/health')

    assert response.status_code == 200
    assert response.get_json()['status'] == 'healthy'


def test_api_test_route(client):
    body = client.get('/api/test').get_json()

    assert body['success'] is True
    assert body['environment'] == 'testing'
    assert 'timestamp' in body


def test_unknown_route(client):
    response = client.get('/api/nothing-here')

    assert response.status_code == 404
    assert response.get_json() == {'success': False, 'message': 'API endpoint not found'}


def test_method_not_allowed(client):
    response = client.delete('/api/auth/login')

    assert response.status_code == 405
    assert response.get_json()['success'] is False


@pytest.fixture
def broken_client(app):
    def explode():
        raise RuntimeError('database exploded')

    app.add_url_rule('/api/explode', 'explode', explode)
    return app.test_client()


def test_unhandled_error_hides_detail(broken_client):
    response = broken_client.get('/api/explode')

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Internal server error'}


def test_unhandled_error_detail_when_enabled(app, broken_client):
    app.config['SHOW_ERROR_DETAILS'] = True

    response = broken_client.get('/api/explode')

    assert response.status_code == 500
    assert response.get_json()['error'] == 'database exploded'
