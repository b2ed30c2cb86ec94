"""
API Package
"""

# Import all blueprints for easy access
from app.api.auth import auth_bp
from app.api.listings import listings_bp
from app.api.bookings import bookings_bp
from app.api.upload import upload_bp

__all__ = [
    'auth_bp',
    'listings_bp',
    'bookings_bp',
    'upload_bp',
]
