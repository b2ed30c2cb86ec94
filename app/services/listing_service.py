"""
Listing Service
Listing CRUD, public search and admin moderation
"""

from flask import current_app

from extensions import db
from app.errors import Forbidden, NotFound, ValidationError
from app.models.listing import Listing, ListingType
from app.services.storage_service import get_storage_service
from app.utils.validators import parse_id, validate_listing_fields

ALL_TYPES = 'All'


def _newest_first(query):
    return query.order_by(Listing.created_at.desc(), Listing.id.desc())


def _escape_like(term):
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def get_listing_or_404(listing_id):
    listing = db.session.get(Listing, parse_id(listing_id, 'listing'))
    if not listing:
        raise NotFound('Listing not found')
    return listing


def get_owned_listing(listing_id, user, action='update'):
    """Fetch a listing the caller owns exactly (admins get no bypass here)"""
    listing = get_listing_or_404(listing_id)
    if not listing.is_owned_by(user):
        raise Forbidden(f'You are not authorized to {action} this listing')
    return listing


def create_listing(owner, data):
    fields = validate_listing_fields(data)
    listing = Listing(
        owner_id=owner.id,
        images=fields.pop('images', []),
        is_approved=bool(current_app.config.get('AUTO_APPROVE_LISTINGS', False)),
        **fields
    )
    db.session.add(listing)
    db.session.commit()
    return listing


def list_approved_listings(listing_type=None, min_price=None, max_price=None, search=None):
    """Public browse: approved listings only, newest first"""
    query = Listing.query.filter(Listing.is_approved.is_(True))

    if listing_type and listing_type != ALL_TYPES:
        if listing_type not in ListingType.values():
            return []
        query = query.filter(Listing.type == ListingType(listing_type))

    if min_price is not None:
        query = query.filter(Listing.price >= min_price)

    if max_price is not None:
        query = query.filter(Listing.price <= max_price)

    if search:
        pattern = f'%{_escape_like(search.strip())}%'
        query = query.filter(db.or_(
            Listing.title.ilike(pattern, escape='\\'),
            Listing.location.ilike(pattern, escape='\\'),
        ))

    return _newest_first(query).all()


def list_owner_listings(owner):
    return _newest_first(Listing.query.filter_by(owner_id=owner.id)).all()


def list_all_listings():
    return _newest_first(Listing.query).all()


def update_listing(listing_id, user, data):
    """Partial update: only keys present in `data` are validated and written"""
    listing = get_owned_listing(listing_id, user, 'update')

    for field, value in validate_listing_fields(data, partial=True).items():
        setattr(listing, field, value)

    db.session.commit()
    return listing


def delete_listing(listing_id, user):
    """
    Delete a listing and, best-effort, its stored images.

    Image deletions all run before the record is removed; any that fail are
    logged and otherwise ignored.
    """
    listing = get_owned_listing(listing_id, user, 'delete')

    images = list(listing.images or [])
    if images:
        failures = get_storage_service().delete_files(images)
        if failures:
            current_app.logger.warning(
                f'Listing {listing.id}: {len(failures)} of {len(images)} images could not be deleted'
            )

    db.session.delete(listing)
    db.session.commit()


def set_listing_approval(listing_id, approved):
    if not isinstance(approved, bool):
        raise ValidationError('Invalid status provided')

    listing = get_listing_or_404(listing_id)
    listing.is_approved = approved
    db.session.commit()
    return listing
