"""
School Site Services
Core business logic with NO HTTP dependencies.
"""

from .gallery import GalleryService, ReconcileResult
from .schedule import ScheduleService
from .upload import UploadService
from .auth import AuthService

__all__ = [
    'GalleryService',
    'ReconcileResult',
    'ScheduleService',
    'UploadService',
    'AuthService',
]
