"""
Bookings Blueprint
"""

from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db
from app.services import booking_service
from app.utils.decorators import owner_required
from app.utils.responses import success_response, error_response, list_response

bookings_bp = Blueprint('bookings', __name__)


@bookings_bp.route('/', methods=['POST'], strict_slashes=False)
@jwt_required()
def create_booking():
    """Send a booking request for a listing"""
    try:
        booking = booking_service.create_booking(current_user, request.get_json(silent=True))

        return success_response(
            data=booking.to_dict(),
            message='Booking request sent successfully',
            status=201
        )

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Create booking error: {str(e)}')
        return error_response('Failed to create booking request', 500, e)


@bookings_bp.route('/owner', methods=['GET'])
@jwt_required()
@owner_required()
def get_owner_bookings():
    """Requests received on the current owner's listings"""
    try:
        bookings = booking_service.list_owner_bookings(current_user)

        return list_response([
            booking.to_dict(include_listing=True, include_tenant=True)
            for booking in bookings
        ])

    except SQLAlchemyError as e:
        current_app.logger.error(f'Get owner bookings error: {str(e)}')
        return error_response('Failed to fetch bookings', 500, e)


@bookings_bp.route('/my-bookings', methods=['GET'])
@jwt_required()
def get_my_bookings():
    """Requests the current user has sent"""
    try:
        bookings = booking_service.list_tenant_bookings(current_user)
        return list_response([booking.to_dict(include_listing=True) for booking in bookings])

    except SQLAlchemyError as e:
        current_app.logger.error(f'Get tenant bookings error: {str(e)}')
        return error_response('Failed to fetch bookings', 500, e)


@bookings_bp.route('/<booking_id>/status', methods=['PATCH'])
@jwt_required()
@owner_required()
def update_booking_status(booking_id):
    """Accept or reject a booking request"""
    try:
        data = request.get_json(silent=True) or {}
        status = data.get('status') if isinstance(data, dict) else None
        booking = booking_service.update_booking_status(booking_id, current_user, status)

        return success_response(
            data=booking.to_dict(),
            message=f'Booking request {booking.status.value.lower()}'
        )

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Update booking {booking_id} status error: {str(e)}')
        return error_response('Failed to update booking status', 500, e)
