import pytest

from extensions import db
from app.models import Booking, Listing
from app.services import listing_service
from app.services.storage_service import StorageError, StorageService
from tests.conftest import LISTING_FIELDS, approve, auth, create_listing


class RecordingStorage(StorageService):
    """Deletes succeed except for URLs listed in `broken`"""

    def __init__(self, broken=()):
        self.broken = set(broken)
        self.deleted = []

    def delete_file(self, url):
        if url in self.broken:
            raise StorageError(f'cannot delete {url}')
        self.deleted.append(url)


def test_create_listing_starts_unapproved(client, owner):
    listing = create_listing(client, owner['token'], latitude=27.7, longitude=85.3)

    assert listing['ownerId'] == owner['id']
    assert listing['isApproved'] is False
    assert listing['type'] == 'Room'
    assert listing['price'] == 1000
    assert listing['images'] == []
    assert listing['latitude'] == 27.7


def test_auto_approve_flag(client, app, owner):
    app.config['AUTO_APPROVE_LISTINGS'] = True

    listing = create_listing(client, owner['token'])

    assert listing['isApproved'] is True


def test_create_requires_fields(client, owner):
    response = client.post('/api/listings', json={'title': 'Only a title'}, headers=auth(owner['token']))

    assert response.status_code == 400
    assert response.get_json()['message'] == (
        'Please provide all required fields: title, description, price, location, type'
    )


def test_create_aggregates_field_errors(client, owner):
    body = dict(LISTING_FIELDS, title='Tiny', description='Too short', type='Castle', latitude=120)
    response = client.post('/api/listings', json=body, headers=auth(owner['token']))
    message = response.get_json()['message']

    assert response.status_code == 400
    assert 'Title must be at least 5 characters long' in message
    assert 'Description must be at least 20 characters long' in message
    assert 'Type must be either Room, Hostel, Apartment, or Flat' in message
    assert 'Latitude must be between -90 and 90' in message


@pytest.mark.parametrize('price', [
    0, -5, 'free', True, 'NaN', 'Infinity', '-inf', float('nan'), float('inf'), 10 ** 400,
])
def test_create_rejects_non_positive_price(client, owner, price):
    body = dict(LISTING_FIELDS, price=price)
    response = client.post('/api/listings', json=body, headers=auth(owner['token']))

    assert response.status_code == 400
    assert 'Price must be a positive number' in response.get_json()['message']


def test_public_browse_only_shows_approved(client, owner, admin):
    hidden = create_listing(client, owner['token'], title='Hidden hostel bed')
    shown = create_listing(client, owner['token'], title='Visible hostel bed')
    approve(client, admin['token'], shown['id'])

    body = client.get('/api/listings').get_json()

    assert body['count'] == 1
    assert [item['id'] for item in body['data']] == [shown['id']]
    assert hidden['id'] not in [item['id'] for item in body['data']]
    assert body['data'][0]['owner'] == {
        'id': owner['id'],
        'name': 'Olivia Owner',
        'email': owner['email'],
    }


def test_browse_filters(client, owner, admin):
    room = create_listing(client, owner['token'], title='Budget room', price=500, type='Room')
    flat = create_listing(client, owner['token'], title='Family flat', price=1500, type='Flat')
    apt = create_listing(client, owner['token'], title='Sunny place', price=2500,
                         type='Apartment', location='Apartment Row, Pokhara')
    for listing in (room, flat, apt):
        approve(client, admin['token'], listing['id'])

    def ids(query):
        return {item['id'] for item in client.get(f'/api/listings{query}').get_json()['data']}

    assert ids('?type=Flat') == {flat['id']}
    assert ids('?type=All') == {room['id'], flat['id'], apt['id']}
    assert ids('?type=Castle') == set()
    assert ids('?minPrice=500&maxPrice=1500') == {room['id'], flat['id']}
    assert ids('?minPrice=1500') == {flat['id'], apt['id']}
    assert ids('?maxPrice=499') == set()
    # search matches title OR location, case-insensitively
    assert ids('?search=apartment') == {apt['id']}
    assert ids('?search=BUDGET') == {room['id']}
    assert ids('?search=kathmandu') == {room['id'], flat['id']}


def test_search_treats_wildcards_literally(client, owner, admin):
    listing = create_listing(client, owner['token'], title='Room with 100% sunlight')
    plain = create_listing(client, owner['token'], title='Room with 1000 sunlight')
    for item in (listing, plain):
        approve(client, admin['token'], item['id'])

    assert client.get('/api/listings?search=sunlight').get_json()['count'] == 2
    assert client.get('/api/listings?search=100%25').get_json()['count'] == 1
    assert client.get('/api/listings?search=%25').get_json()['count'] == 1


def test_browse_is_newest_first(client, owner, admin):
    first = create_listing(client, owner['token'], title='First listing')
    second = create_listing(client, owner['token'], title='Second listing')
    for listing in (first, second):
        approve(client, admin['token'], listing['id'])

    data = client.get('/api/listings').get_json()['data']

    assert [item['id'] for item in data] == [second['id'], first['id']]


def test_my_listings_includes_unapproved(client, owner, other_owner):
    first = create_listing(client, owner['token'], title='First listing')
    second = create_listing(client, owner['token'], title='Second listing')
    create_listing(client, other_owner['token'], title='Not mine at all')

    body = client.get('/api/listings/my-listings', headers=auth(owner['token'])).get_json()

    assert body['count'] == 2
    assert [item['id'] for item in body['data']] == [second['id'], first['id']]


def test_admin_sees_everything_with_owner(client, owner, admin):
    listing = create_listing(client, owner['token'])

    body = client.get('/api/listings/admin/all', headers=auth(admin['token'])).get_json()

    assert body['count'] == 1
    assert body['data'][0]['id'] == listing['id']
    assert body['data'][0]['isApproved'] is False
    assert body['data'][0]['owner']['email'] == owner['email']


def test_get_listing_by_id(client, owner):
    listing = create_listing(client, owner['token'])

    response = client.get(f"/api/listings/{listing['id']}")

    assert response.status_code == 200
    assert response.get_json()['data']['owner']['name'] == 'Olivia Owner'


@pytest.mark.parametrize('listing_id', ['not-an-id', '0', '-3', '²', '99999999999999999999999'])
def test_get_listing_malformed_id(client, listing_id):
    response = client.get(f'/api/listings/{listing_id}')

    assert response.status_code == 400
    assert response.get_json() == {'success': False, 'message': 'Invalid listing ID'}


def test_get_listing_largest_id_is_not_found(client):
    response = client.get(f'/api/listings/{2 ** 63 - 1}')

    assert response.status_code == 404


def test_get_listing_not_found(client):
    response = client.get('/api/listings/9999')

    assert response.status_code == 404
    assert response.get_json()['message'] == 'Listing not found'


def test_update_is_partial(client, owner):
    listing = create_listing(client, owner['token'])

    response = client.put(
        f"/api/listings/{listing['id']}",
        json={'title': 'Renovated cozy room', 'images': ['https://cdn.example.com/a.jpg']},
        headers=auth(owner['token'])
    )
    data = response.get_json()['data']

    assert response.status_code == 200
    assert data['title'] == 'Renovated cozy room'
    assert data['images'] == ['https://cdn.example.com/a.jpg']
    assert data['price'] == listing['price']
    assert data['description'] == listing['description']


def test_update_rejects_zero_price(client, owner):
    listing = create_listing(client, owner['token'])

    response = client.put(f"/api/listings/{listing['id']}", json={'price': 0}, headers=auth(owner['token']))

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Price must be a positive number'


@pytest.mark.parametrize('price', ['Infinity', '-Infinity', 'nan', float('inf')])
def test_update_rejects_non_finite_price(client, owner, price):
    listing = create_listing(client, owner['token'])

    response = client.put(f"/api/listings/{listing['id']}", json={'price': price}, headers=auth(owner['token']))

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Price must be a positive number'
    assert client.get(f"/api/listings/{listing['id']}").get_json()['data']['price'] == 1000


def test_browse_ignores_non_finite_price_bounds(client, owner, admin):
    listing = create_listing(client, owner['token'])
    approve(client, admin['token'], listing['id'])

    for query in ('?minPrice=nan', '?maxPrice=nan', '?minPrice=-inf&maxPrice=inf'):
        body = client.get(f'/api/listings{query}').get_json()
        assert body['count'] == 1, query


def test_update_validates_present_fields(client, owner):
    listing = create_listing(client, owner['token'])

    response = client.put(
        f"/api/listings/{listing['id']}",
        json={'title': '', 'type': 'Castle'},
        headers=auth(owner['token'])
    )

    assert response.status_code == 400
    assert 'Title is required' in response.get_json()['message']
    assert 'Type must be either' in response.get_json()['message']


def test_update_ignores_protected_fields(client, owner, other_owner):
    listing = create_listing(client, owner['token'])

    response = client.put(
        f"/api/listings/{listing['id']}",
        json={'isApproved': True, 'ownerId': other_owner['id'], 'price': 1200},
        headers=auth(owner['token'])
    )
    data = response.get_json()['data']

    assert data['isApproved'] is False
    assert data['ownerId'] == owner['id']
    assert data['price'] == 1200


def test_update_requires_exact_owner(client, owner, other_owner, admin):
    listing = create_listing(client, owner['token'])

    for account in (other_owner, admin):
        response = client.put(
            f"/api/listings/{listing['id']}", json={'price': 1}, headers=auth(account['token'])
        )
        assert response.status_code == 403
        assert response.get_json()['message'] == 'You are not authorized to update this listing'


def test_update_missing_listing(client, owner):
    response = client.put('/api/listings/9999', json={'price': 10}, headers=auth(owner['token']))

    assert response.status_code == 404


def test_delete_listing(client, app, owner):
    listing = create_listing(client, owner['token'])

    response = client.delete(f"/api/listings/{listing['id']}", headers=auth(owner['token']))

    assert response.status_code == 200
    assert response.get_json() == {'success': True, 'message': 'Listing deleted successfully'}
    assert client.get(f"/api/listings/{listing['id']}").status_code == 404


def test_delete_requires_exact_owner(client, owner, other_owner, admin):
    listing = create_listing(client, owner['token'])

    for account in (other_owner, admin):
        response = client.delete(f"/api/listings/{listing['id']}", headers=auth(account['token']))
        assert response.status_code == 403

    assert client.get(f"/api/listings/{listing['id']}").status_code == 200


def test_delete_cleans_up_images_best_effort(client, app, owner, monkeypatch):
    images = [f'https://cdn.example.com/listings/{n}.jpg' for n in range(4)]
    listing = create_listing(client, owner['token'], images=images)
    storage = RecordingStorage(broken={images[1]})
    monkeypatch.setattr(listing_service, 'get_storage_service', lambda: storage)

    response = client.delete(f"/api/listings/{listing['id']}", headers=auth(owner['token']))

    assert response.status_code == 200
    assert sorted(storage.deleted) == sorted(images[:1] + images[2:])
    with app.app_context():
        assert db.session.get(Listing, listing['id']) is None


def test_delete_removes_booking_requests(client, app, owner, tenant):
    listing = create_listing(client, owner['token'])
    client.post('/api/bookings', json={'listingId': listing['id']}, headers=auth(tenant['token']))

    client.delete(f"/api/listings/{listing['id']}", headers=auth(owner['token']))

    with app.app_context():
        assert Booking.query.count() == 0


def test_set_approval(client, owner, admin):
    listing = create_listing(client, owner['token'])

    approved = approve(client, admin['token'], listing['id'])
    assert approved['isApproved'] is True

    response = client.patch(
        f"/api/listings/{listing['id']}/status",
        json={'isApproved': False},
        headers=auth(admin['token'])
    )
    assert response.get_json()['message'] == 'Listing rejected successfully'
    assert response.get_json()['data']['isApproved'] is False


@pytest.mark.parametrize('body', [{'isApproved': 'yes'}, {'isApproved': 1}, {}])
def test_set_approval_requires_boolean(client, owner, admin, body):
    listing = create_listing(client, owner['token'])

    response = client.patch(
        f"/api/listings/{listing['id']}/status", json=body, headers=auth(admin['token'])
    )

    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid status provided'


def test_set_approval_missing_listing(client, admin):
    response = client.patch(
        '/api/listings/9999/status', json={'isApproved': True}, headers=auth(admin['token'])
    )

    assert response.status_code == 404
