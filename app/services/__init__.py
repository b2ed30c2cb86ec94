"""
Services Package
Business logic and external service integrations
"""

from app.services.storage_service import (
    S3Service,
    LocalStorageService,
    StorageError,
    get_storage_service,
)

__all__ = [
    'S3Service',
    'LocalStorageService',
    'StorageError',
    'get_storage_service',
]
