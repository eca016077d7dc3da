"""
File storage infrastructure.
"""

from .storage_service import SupabaseStorageService, StorageError, get_storage_service

__all__ = [
    "SupabaseStorageService",
    "StorageError",
    "get_storage_service",
]
