"""
Listings Blueprint
"""

from app.api.listings.routes import listings_bp

__all__ = ['listings_bp']
