"""
Models package initialization
Import all models here for easy access
"""

from app.models.user import User, UserRole
from app.models.listing import Listing, ListingType
from app.models.booking import Booking, BookingStatus

__all__ = [
    'User',
    'UserRole',
    'Listing',
    'ListingType',
    'Booking',
    'BookingStatus',
]
