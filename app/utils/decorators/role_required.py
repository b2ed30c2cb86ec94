"""
Role gates

Stack these under @jwt_required(), which authenticates the request and binds
the principal:

    @bp.route('/admin/all')
    @jwt_required()
    @admin_required()
    def view(): ...
"""

from functools import wraps

from flask_jwt_extended import get_current_user

from app.errors import Forbidden
from app.models.user import UserRole


def role_required(required, message):
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            user = get_current_user()
            if not user.has_role(required):
                raise Forbidden(message)
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def owner_required():
    """Owner or Admin"""
    return role_required(
        UserRole.OWNER,
        'Access denied. This resource is only available to property owners.'
    )


def admin_required():
    return role_required(
        UserRole.ADMIN,
        'Access denied. This resource is only available to administrators.'
    )
