"""
Identity Service
Registration, login and admin provisioning
"""

from flask import current_app
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import undefer

from extensions import db
from app.errors import Conflict, Unauthenticated, ValidationError
from app.models.user import User, UserRole
from app.services.credential_service import issue_token
from app.utils.validators import validate_registration

DUPLICATE_EMAIL_MESSAGE = 'Email already registered. Please login instead.'
INVALID_CREDENTIALS_MESSAGE = 'Invalid email or password'


def normalize_email(email):
    return email.strip().lower() if isinstance(email, str) else ''


def find_user_by_id(user_id):
    """Principal lookup; the password hash stays unloaded"""
    return db.session.get(User, user_id)


def find_user_by_email(email, with_password=False):
    query = User.query.filter_by(email=normalize_email(email))
    if with_password:
        query = query.options(undefer(User.password_hash))
    return query.first()


def create_user(name, email, password, role=UserRole.TENANT):
    """Persist a new user, hashing the password before the insert"""
    user = User(name=name, email=normalize_email(email), role=role)
    user.set_password(password)

    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # unique index on users.email lost a race with another insert
        db.session.rollback()
        raise Conflict(DUPLICATE_EMAIL_MESSAGE)
    return user


def register_user(data):
    """Validate a registration body, create the user and issue a token"""
    name, email, password, role = validate_registration(data)

    if find_user_by_email(email):
        raise Conflict(DUPLICATE_EMAIL_MESSAGE)

    user = create_user(name, email, password, role)
    current_app.logger.info(f'Registered user {user.id} as {user.role.value}')
    return user, issue_token(user.id)


def authenticate_user(data):
    """Check credentials; unknown email and wrong password fail identically"""
    data = data if isinstance(data, dict) else {}
    email = data.get('email')
    password = data.get('password')

    if not email or not password:
        raise ValidationError('Please provide email and password')

    user = find_user_by_email(email, with_password=True)
    if not user or not user.check_password(password):
        raise Unauthenticated(INVALID_CREDENTIALS_MESSAGE)

    return user, issue_token(user.id)


def provision_admin(email, password, name='System Admin'):
    """
    Create an Admin account, or promote the existing account with this email.

    Returns (user, created). The password is only set for new accounts.
    """
    user = find_user_by_email(email)
    if user:
        if user.role != UserRole.ADMIN:
            user.role = UserRole.ADMIN
            db.session.commit()
            current_app.logger.info(f'Promoted user {user.id} to Admin')
        return user, False

    name, email, password, _ = validate_registration({
        'name': name,
        'email': email,
        'password': password,
    })
    user = create_user(name, email, password, UserRole.ADMIN)
    current_app.logger.info(f'Created admin user {user.id}')
    return user, True
