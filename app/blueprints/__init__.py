"""
School Site Blueprints
HTTP routes - thin wrappers around services.
"""

from .public import public_bp
from .auth import auth_bp
from .schedules import schedules_bp
from .uploads import uploads_bp
from .cron import cron_bp

__all__ = [
    'public_bp',
    'auth_bp',
    'schedules_bp',
    'uploads_bp',
    'cron_bp',
]
