"""
JWT callbacks

Maps each authentication outcome of @jwt_required() to a 401 with its own
message, and resolves the token subject to a User (the request principal).
"""

from app.errors import InvalidToken, TokenExpired, Unauthenticated
from app.services.identity_service import find_user_by_id


def register_jwt_handlers(jwt):

    @jwt.user_lookup_loader
    def load_principal(_jwt_header, jwt_data):
        try:
            user_id = int(jwt_data['sub'])
        except (KeyError, TypeError, ValueError):
            return None
        return find_user_by_id(user_id)

    @jwt.user_lookup_error_loader
    def principal_not_found(_jwt_header, _jwt_data):
        return Unauthenticated('User not found. Please login again.').to_response()

    @jwt.unauthorized_loader
    def missing_token(_reason):
        return Unauthenticated().to_response()

    @jwt.invalid_token_loader
    def invalid_token(_reason):
        return InvalidToken().to_response()

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_payload):
        return TokenExpired().to_response()
