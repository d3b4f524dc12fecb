"""
School Site App Package
School website backend: schedules, image gallery and uploads.
"""

from .config import VERSION, VERSION_NAME
from .models import db

__version__ = VERSION
__all__ = ['db', 'VERSION', 'VERSION_NAME']
