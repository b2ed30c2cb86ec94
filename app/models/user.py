"""
User Model
"""

from extensions import db
from datetime import datetime
from enum import Enum
from sqlalchemy.orm import deferred


class UserRole(str, Enum):
    """User roles enum, ordered by capability"""
    TENANT = 'Tenant'
    OWNER = 'Owner'
    ADMIN = 'Admin'

    @classmethod
    def values(cls):
        return [role.value for role in cls]

    @property
    def rank(self):
        return _ROLE_RANKS[self]

    def satisfies(self, required):
        """True when this role has at least the capabilities of `required`"""
        return self.rank >= UserRole(required).rank


_ROLE_RANKS = {
    UserRole.TENANT: 0,
    UserRole.OWNER: 1,
    UserRole.ADMIN: 2,
}


class User(db.Model):
    """User model for authentication and profile"""

    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(50), nullable=False)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    # Deferred: only loaded when a query asks for it (login)
    password_hash = deferred(db.Column(db.String(255), nullable=False))

    role = db.Column(
        db.Enum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.TENANT,
        nullable=False
    )

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    listings = db.relationship('Listing', backref='owner', lazy='dynamic',
                               foreign_keys='Listing.owner_id')

    def __init__(self, name, email, role=UserRole.TENANT, **kwargs):
        self.name = name
        self.email = email
        self.role = role

        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def set_password(self, password):
        """Hash and set password; call only when the password is being written"""
        from app.services.credential_service import hash_password
        self.password_hash = hash_password(password)

    def check_password(self, password):
        """Verify password against hash"""
        from app.services.credential_service import verify_password
        return verify_password(password, self.password_hash)

    def has_role(self, required):
        return self.role.satisfies(required)

    def to_summary(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
        }

    def to_dict(self):
        """Convert user to dictionary (password hash is never included)"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<User {self.email}>'
