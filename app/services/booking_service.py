"""
Booking Service
Booking requests and the owner accept/reject state machine:

    Pending --accept--> Accepted
    Pending --reject--> Rejected

Accepted and Rejected are terminal.
"""

from sqlalchemy.exc import IntegrityError

from extensions import db
from app.errors import Conflict, InvalidOperation, NotFound, ValidationError
from app.models.booking import Booking, BookingStatus
from app.models.listing import Listing
from app.utils.validators import parse_id, validate_booking_message

DUPLICATE_BOOKING_MESSAGE = 'You have already sent a request for this listing'


def _newest_first(query):
    return query.order_by(Booking.created_at.desc(), Booking.id.desc())


def create_booking(tenant, data):
    data = data if isinstance(data, dict) else {}

    if data.get('listingId') in (None, ''):
        raise ValidationError('listingId is required')

    listing_id = parse_id(data['listingId'], 'listing')
    message = validate_booking_message(data.get('message'))

    listing = db.session.get(Listing, listing_id)
    if not listing:
        raise NotFound('Listing not found')

    if listing.owner_id == tenant.id:
        raise InvalidOperation('You cannot book your own listing')

    if Booking.query.filter_by(listing_id=listing.id, tenant_id=tenant.id).first():
        raise Conflict(DUPLICATE_BOOKING_MESSAGE)

    booking = Booking(
        listing_id=listing.id,
        tenant_id=tenant.id,
        owner_id=listing.owner_id,
        status=BookingStatus.PENDING,
        message=message
    )
    db.session.add(booking)
    try:
        db.session.commit()
    except IntegrityError:
        # (listing_id, tenant_id) unique constraint caught a concurrent request
        db.session.rollback()
        raise Conflict(DUPLICATE_BOOKING_MESSAGE)
    return booking


def list_owner_bookings(owner):
    return _newest_first(Booking.query.filter_by(owner_id=owner.id)).all()


def list_tenant_bookings(tenant):
    return _newest_first(Booking.query.filter_by(tenant_id=tenant.id)).all()


def update_booking_status(booking_id, owner, status):
    """
    Accept or reject a pending request.

    Lookup is by id AND owner together, so a caller who does not own the
    booking gets NotFound rather than Forbidden.
    """
    if status not in BookingStatus.decisions():
        raise InvalidOperation('Invalid status')

    booking = Booking.query.filter_by(
        id=parse_id(booking_id, 'booking'),
        owner_id=owner.id
    ).first()

    if not booking:
        raise NotFound('Booking not found')

    if booking.is_decided:
        raise InvalidOperation(f'Booking request has already been {booking.status.value.lower()}')

    booking.status = BookingStatus(status)
    db.session.commit()
    return booking
