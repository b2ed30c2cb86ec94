"""
Authentication Routes
"""

from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required, current_user
from sqlalchemy.exc import SQLAlchemyError

from extensions import db, limiter
from app.services import identity_service
from app.utils.responses import success_response, error_response

auth_bp = Blueprint('auth', __name__)


@auth_bp.route('/register', methods=['POST'])
@limiter.limit("10 per hour")
def register():
    """Register a new user"""
    try:
        user, token = identity_service.register_user(request.get_json(silent=True))

        return success_response(
            data={'user': user.to_dict(), 'token': token},
            message='Registration successful',
            status=201
        )

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Registration error: {str(e)}')
        return error_response('Registration failed. Please try again.', 500, e)


@auth_bp.route('/login', methods=['POST'])
@limiter.limit("50 per hour")
def login():
    """Login user"""
    try:
        user, token = identity_service.authenticate_user(request.get_json(silent=True))

        return success_response(
            data={'user': user.to_dict(), 'token': token},
            message='Login successful'
        )

    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Login error: {str(e)}')
        return error_response('Login failed. Please try again.', 500, e)


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_current_user():
    """Get current authenticated user"""
    return success_response(data=current_user.to_dict())
