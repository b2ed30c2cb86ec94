"""
Credential Service
Password hashing and bearer token issue/verification
"""

from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from extensions import bcrypt
from app.errors import InvalidToken, TokenExpired


def hash_password(password):
    """One-way bcrypt hash with a fresh random salt"""
    return bcrypt.generate_password_hash(password).decode('utf-8')


def verify_password(password, hashed):
    """
    Check a plaintext password against a stored hash.

    Fails closed: a missing or malformed hash yields False instead of an
    exception.
    """
    if not password or not hashed:
        return False
    try:
        return bcrypt.check_password_hash(hashed, password)
    except (ValueError, TypeError) as e:
        current_app.logger.warning(f'Password verification error: {str(e)}')
        return False


def issue_token(user_id):
    """Signed access token carrying only the user id (expiry from JWT_ACCESS_TOKEN_EXPIRES)"""
    return create_access_token(identity=str(user_id))


def verify_token(token):
    """
    Decode a bearer token and return the user id it was issued for.

    Raises:
        TokenExpired: signature is valid but the token has expired
        InvalidToken: anything else (bad signature, malformed, wrong subject)
    """
    try:
        decoded = decode_token(token)
    except ExpiredSignatureError:
        raise TokenExpired()
    except (PyJWTError, JWTExtendedException):
        raise InvalidToken()

    try:
        return int(decoded['sub'])
    except (KeyError, TypeError, ValueError):
        raise InvalidToken()
