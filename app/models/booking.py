"""
Booking Model
"""

from extensions import db
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    """Booking status enum"""
    PENDING = 'Pending'
    ACCEPTED = 'Accepted'
    REJECTED = 'Rejected'

    @classmethod
    def decisions(cls):
        """Statuses an owner may move a pending request to"""
        return [cls.ACCEPTED.value, cls.REJECTED.value]


class Booking(db.Model):
    """Booking request from a tenant for a listing"""

    __tablename__ = 'bookings'
    __table_args__ = (
        db.UniqueConstraint('listing_id', 'tenant_id', name='uq_bookings_listing_tenant'),
    )

    id = db.Column(db.Integer, primary_key=True)
    listing_id = db.Column(db.Integer, db.ForeignKey('listings.id', ondelete='CASCADE'),
                           nullable=False, index=True)
    tenant_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    # Copied from the listing when the request is created
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    status = db.Column(
        db.Enum(BookingStatus, values_callable=lambda statuses: [s.value for s in statuses]),
        default=BookingStatus.PENDING,
        nullable=False
    )
    message = db.Column(db.String(500))

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    tenant = db.relationship('User', foreign_keys=[tenant_id])
    owner = db.relationship('User', foreign_keys=[owner_id])

    def __init__(self, **kwargs):
        """Initialize booking"""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    @property
    def is_decided(self):
        return self.status != BookingStatus.PENDING

    def to_dict(self, include_listing=False, include_tenant=False):
        """Convert booking to dictionary"""
        data = {
            'id': self.id,
            'listingId': self.listing_id,
            'tenantId': self.tenant_id,
            'ownerId': self.owner_id,
            'status': self.status.value,
            'message': self.message,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

        if include_listing:
            data['listing'] = self.listing.to_summary() if self.listing else None

        if include_tenant:
            data['tenant'] = self.tenant.to_summary() if self.tenant else None

        return data

    def __repr__(self):
        return f'<Booking {self.id} - Listing {self.listing_id}>'
