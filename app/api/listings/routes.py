"""
Listing Routes
"""

from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db, limiter
from app.services import listing_service
from app.utils.decorators import admin_required, owner_required
from app.utils.responses import success_response, error_response, list_response
from app.utils.validators import parse_number

listings_bp = Blueprint('listings', __name__)


@listings_bp.route('/', methods=['GET'], strict_slashes=False)
@limiter.limit("100 per hour")
def get_listings():
    """Browse approved listings with filters"""
    try:
        listings = listing_service.list_approved_listings(
            listing_type=request.args.get('type'),
            min_price=request.args.get('minPrice', type=parse_number),
            max_price=request.args.get('maxPrice', type=parse_number),
            search=request.args.get('search'),
        )

        return list_response([listing.to_dict(include_owner=True) for listing in listings])

    except SQLAlchemyError as e:
        current_app.logger.error(f'Get listings error: {str(e)}')
        return error_response('Failed to fetch listings. Please try again.', 500, e)


@listings_bp.route('/', methods=['POST'], strict_slashes=False)
@jwt_required()
@owner_required()
def create_listing():
    """Create a new listing (owner only)"""
    try:
        listing = listing_service.create_listing(current_user, request.get_json(silent=True))

        return success_response(
            data=listing.to_dict(),
            message='Listing created successfully',
            status=201
        )

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Create listing error: {str(e)}')
        return error_response('Failed to create listing. Please try again.', 500, e)


@listings_bp.route('/my-listings', methods=['GET'])
@jwt_required()
@owner_required()
def get_my_listings():
    """Get current owner's listings, approved or not"""
    try:
        listings = listing_service.list_owner_listings(current_user)
        return list_response([listing.to_dict() for listing in listings])

    except SQLAlchemyError as e:
        current_app.logger.error(f'Get owner listings error: {str(e)}')
        return error_response('Failed to fetch listings. Please try again.', 500, e)


@listings_bp.route('/admin/all', methods=['GET'])
@jwt_required()
@admin_required()
def get_admin_listings():
    """Every listing regardless of approval (admin only)"""
    try:
        listings = listing_service.list_all_listings()
        return list_response([listing.to_dict(include_owner=True) for listing in listings])

    except SQLAlchemyError as e:
        current_app.logger.error(f'Get admin listings error: {str(e)}')
        return error_response('Failed to fetch listings', 500, e)


@listings_bp.route('/<listing_id>', methods=['GET'])
def get_listing(listing_id):
    """Get single listing by ID"""
    try:
        listing = listing_service.get_listing_or_404(listing_id)
        return success_response(data=listing.to_dict(include_owner=True))

    except SQLAlchemyError as e:
        current_app.logger.error(f'Get listing {listing_id} error: {str(e)}')
        return error_response('Failed to fetch listing details', 500, e)


@listings_bp.route('/<listing_id>', methods=['PUT'])
@jwt_required()
@owner_required()
def update_listing(listing_id):
    """Partially update a listing (listing owner only)"""
    try:
        listing = listing_service.update_listing(
            listing_id, current_user, request.get_json(silent=True)
        )

        return success_response(
            data=listing.to_dict(),
            message='Listing updated successfully'
        )

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Update listing {listing_id} error: {str(e)}')
        return error_response('Failed to update listing. Please try again.', 500, e)


@listings_bp.route('/<listing_id>', methods=['DELETE'])
@jwt_required()
@owner_required()
def delete_listing(listing_id):
    """Delete a listing and its images (listing owner only)"""
    try:
        listing_service.delete_listing(listing_id, current_user)
        return success_response(message='Listing deleted successfully')

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Delete listing {listing_id} error: {str(e)}')
        return error_response('Failed to delete listing. Please try again.', 500, e)


@listings_bp.route('/<listing_id>/status', methods=['PATCH'])
@jwt_required()
@admin_required()
def update_listing_status(listing_id):
    """Approve or reject a listing (admin only)"""
    try:
        data = request.get_json(silent=True) or {}
        approved = data.get('isApproved') if isinstance(data, dict) else None
        listing = listing_service.set_listing_approval(listing_id, approved)

        return success_response(
            data=listing.to_dict(),
            message=f"Listing {'approved' if listing.is_approved else 'rejected'} successfully"
        )

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Update listing {listing_id} status error: {str(e)}')
        return error_response('Failed to update listing status', 500, e)
