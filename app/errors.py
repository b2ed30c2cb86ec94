"""
API Error Types
Domain errors raised by services and rendered by the app error handler
"""

from flask import jsonify


class ApiError(Exception):
    """Base class for errors that map to a client-facing response"""

    status_code = 400
    default_message = 'Bad request'

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {'success': False, 'message': self.message}

    def to_response(self):
        return jsonify(self.to_dict()), self.status_code


class ValidationError(ApiError):
    """Malformed, missing or out-of-range input"""

    default_message = 'Validation failed'

    def __init__(self, messages):
        if isinstance(messages, (list, tuple)):
            messages = ', '.join(messages)
        super().__init__(messages)


class InvalidReference(ApiError):
    default_message = 'Invalid ID'


class Conflict(ApiError):
    default_message = 'Resource already exists'


class InvalidOperation(ApiError):
    default_message = 'Operation not allowed'


class Unauthenticated(ApiError):
    status_code = 401
    default_message = 'Not authorized. Please login to access this resource.'


class InvalidToken(Unauthenticated):
    default_message = 'Invalid token. Please login again.'


class TokenExpired(Unauthenticated):
    default_message = 'Token expired. Please login again.'


class Forbidden(ApiError):
    status_code = 403
    default_message = 'Access denied'


class NotFound(ApiError):
    status_code = 404
    default_message = 'Resource not found'
