"""
Input validation helpers
Field rules for users, listings and bookings. Errors for several fields are
collected and raised together as one ValidationError.
"""

import math
import re

from app.errors import InvalidReference, ValidationError
from app.models.listing import ListingType
from app.models.user import UserRole

EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$')

LISTING_REQUIRED_FIELDS = ['title', 'description', 'price', 'location', 'type']
BOOKING_MESSAGE_MAX_LENGTH = 500

# Largest value a signed 64-bit INTEGER primary key can hold
MAX_ID = 2 ** 63 - 1


def parse_id(value, label='resource'):
    """Convert a path or body id into an integer primary key"""
    if isinstance(value, bool):
        raise InvalidReference(f'Invalid {label} ID')
    if isinstance(value, int):
        ident = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        ident = int(value.strip())
    else:
        raise InvalidReference(f'Invalid {label} ID')
    if not 0 < ident <= MAX_ID:
        raise InvalidReference(f'Invalid {label} ID')
    return ident


def is_blank(value):
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value):
    """Finite float from a number or numeric string, else None (NaN and inf included)"""
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _check_text(value, label, errors, min_length=1, max_length=None):
    if not isinstance(value, str) or not value.strip():
        errors.append(f'{label} is required')
        return None
    value = value.strip()
    if len(value) < min_length:
        errors.append(f'{label} must be at least {min_length} characters long')
    elif max_length is not None and len(value) > max_length:
        errors.append(f'{label} cannot exceed {max_length} characters')
    return value


def _check_coordinate(value, label, bound, errors):
    if value is None:
        return None
    number = parse_number(value)
    if number is None or not -bound <= number <= bound:
        errors.append(f'{label} must be between -{bound} and {bound}')
    return number


def validate_listing_fields(data, partial=False):
    """
    Validate listing input and return the cleaned attribute values.

    With partial=False every required field must be present. With
    partial=True only the keys present in `data` are validated and returned,
    so an omitted key leaves the stored value untouched while a present but
    falsy value (e.g. price 0) is still checked.
    """
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    if not partial:
        missing = [field for field in LISTING_REQUIRED_FIELDS if is_blank(data.get(field))]
        if missing:
            raise ValidationError(
                'Please provide all required fields: ' + ', '.join(LISTING_REQUIRED_FIELDS)
            )

    errors = []
    cleaned = {}

    if 'title' in data:
        cleaned['title'] = _check_text(data['title'], 'Title', errors, 5, 100)
    if 'description' in data:
        cleaned['description'] = _check_text(data['description'], 'Description', errors, 20, 2000)
    if 'location' in data:
        cleaned['location'] = _check_text(data['location'], 'Location', errors)

    if 'price' in data:
        price = parse_number(data['price'])
        if price is None or price <= 0:
            errors.append('Price must be a positive number')
        cleaned['price'] = price

    if 'type' in data:
        if data['type'] not in ListingType.values():
            errors.append('Type must be either Room, Hostel, Apartment, or Flat')
        else:
            cleaned['type'] = ListingType(data['type'])

    if 'latitude' in data:
        cleaned['latitude'] = _check_coordinate(data['latitude'], 'Latitude', 90, errors)
    if 'longitude' in data:
        cleaned['longitude'] = _check_coordinate(data['longitude'], 'Longitude', 180, errors)

    if 'images' in data:
        images = data['images'] if data['images'] is not None else []
        if not isinstance(images, list) or not all(
            isinstance(url, str) and url.strip() for url in images
        ):
            errors.append('All image URLs must be valid strings')
        else:
            cleaned['images'] = [url.strip() for url in images]

    if errors:
        raise ValidationError(errors)

    return cleaned


def validate_registration(data):
    """Validate a registration body and return (name, email, password, role)"""
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')

    name = data.get('name')
    email = data.get('email')
    password = data.get('password')

    if is_blank(name) or is_blank(email) or not password:
        raise ValidationError('Please provide name, email, and password')

    if not isinstance(password, str) or len(password) < 6:
        raise ValidationError('Password must be at least 6 characters long')

    errors = []
    name = _check_text(name, 'Name', errors, 2, 50)

    email = email.strip().lower() if isinstance(email, str) else ''
    if not EMAIL_PATTERN.match(email):
        errors.append('Please provide a valid email address')

    role = data.get('role') or UserRole.TENANT.value
    if role not in UserRole.values():
        errors.append('Invalid role. Must be Tenant, Owner, or Admin')

    if errors:
        raise ValidationError(errors)

    return name, email, password, UserRole(role)


def validate_booking_message(message):
    if message is None:
        return None
    if not isinstance(message, str):
        raise ValidationError('Message must be a string')
    message = message.strip()
    if len(message) > BOOKING_MESSAGE_MAX_LENGTH:
        raise ValidationError(f'Message cannot exceed {BOOKING_MESSAGE_MAX_LENGTH} characters')
    return message or None
