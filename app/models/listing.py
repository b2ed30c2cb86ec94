"""
Listing Model
"""

from extensions import db
from datetime import datetime
from enum import Enum


class ListingType(str, Enum):
    """Listing type enum"""
    ROOM = 'Room'
    HOSTEL = 'Hostel'
    APARTMENT = 'Apartment'
    FLAT = 'Flat'

    @classmethod
    def values(cls):
        return [listing_type.value for listing_type in cls]


class Listing(db.Model):
    """Rentable property listing"""

    __tablename__ = 'listings'

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # Basic Information
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)
    price = db.Column(db.Float, nullable=False)
    type = db.Column(
        db.Enum(ListingType, values_callable=lambda types: [t.value for t in types]),
        nullable=False
    )

    # Location
    location = db.Column(db.String(255), nullable=False)
    latitude = db.Column(db.Float, nullable=True)
    longitude = db.Column(db.Float, nullable=True)

    # Images (ordered list of URLs)
    images = db.Column(db.JSON, default=list, nullable=False)

    # Moderation
    is_approved = db.Column(db.Boolean, default=False, nullable=False, index=True)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    bookings = db.relationship('Booking', backref='listing', lazy='dynamic',
                               cascade='all, delete-orphan')

    def __init__(self, **kwargs):
        """Initialize listing"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def is_owned_by(self, user):
        return user is not None and self.owner_id == user.id

    def to_summary(self):
        """Short form embedded in booking responses"""
        return {
            'id': self.id,
            'title': self.title,
            'location': self.location,
            'images': list(self.images or []),
            'price': self.price,
        }

    def to_dict(self, include_owner=False):
        """Convert listing to dictionary"""
        data = {
            'id': self.id,
            'ownerId': self.owner_id,
            'title': self.title,
            'description': self.description,
            'price': self.price,
            'location': self.location,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'type': self.type.value,
            'images': list(self.images or []),
            'isApproved': self.is_approved,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

        if include_owner:
            data['owner'] = self.owner.to_summary() if self.owner else None

        return data

    def __repr__(self):
        return f'<Listing {self.title}>'
