"""
School Site Configuration
All constants and environment variables.
"""

import os


# =============================================================================
# ENVIRONMENT
# =============================================================================

ENV = os.environ.get('ENV', 'development')
IS_PRODUCTION = ENV == 'production'
DEBUG = not IS_PRODUCTION
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# Database
DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///schoolsite_dev.db')
if DATABASE_URL.startswith('postgres://'):
    DATABASE_URL = DATABASE_URL.replace('postgres://', 'postgresql://', 1)

# Auth
SECRET_KEY = os.environ.get('SECRET_KEY', 'schoolsite-dev-secret')
TOKEN_MAX_AGE = int(os.environ.get('TOKEN_MAX_AGE', 30 * 24 * 3600))  # 30 days
ADMIN_USERNAME = os.environ.get('ADMIN_USERNAME', 'admin')
ADMIN_PASSWORD = os.environ.get('ADMIN_PASSWORD', 'schoolsite-dev-admin')
CRON_SECRET = os.environ.get('CRON_SECRET', 'schoolsite-cron-secret')

# CORS
CORS_ORIGINS = [
    origin.strip()
    for origin in os.environ.get('CORS_ORIGINS', '*').split(',')
    if origin.strip()
]

# Feature flags
ENABLE_ADMIN = os.environ.get('ENABLE_ADMIN', 'true').lower() == 'true'
ENABLE_SCHEDULER = os.environ.get('START_SCHEDULER', 'false').lower() == 'true'
SCHEDULER_TIMEZONE = os.environ.get('SCHEDULER_TIMEZONE', 'Asia/Ho_Chi_Minh')


# =============================================================================
# UPLOADS
# =============================================================================

UPLOAD_FOLDER = os.environ.get(
    'UPLOAD_FOLDER',
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'uploads')
)
PUBLIC_BASE_URL = os.environ.get('PUBLIC_BASE_URL', '').rstrip('/')
MAX_UPLOAD_MB = int(os.environ.get('MAX_UPLOAD_MB', 10))
ALLOWED_IMAGE_EXTENSIONS = frozenset(
    ext.strip().lower().lstrip('.')
    for ext in os.environ.get('ALLOWED_IMAGE_EXTENSIONS', 'jpg,jpeg,png,gif,webp').split(',')
    if ext.strip()
)

# Uploaded files younger than this are never swept, even when unreferenced,
# so an edit whose uploads finished but whose save is still pending survives.
ORPHAN_GRACE_HOURS = int(os.environ.get('ORPHAN_GRACE_HOURS', 24))


# =============================================================================
# API
# =============================================================================

API_PREFIX = '/api/v1'


# =============================================================================
# VERSION INFO
# =============================================================================

VERSION = '1.0.0'
VERSION_NAME = 'Schedules Gallery'
FEATURES = ['schedules', 'ordered_gallery', 'image_upload', 'orphan_sweep']


def flask_settings() -> dict:
    """Settings copied into ``app.config`` by the app factory."""
    return {
        'SQLALCHEMY_DATABASE_URI': DATABASE_URL,
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'SECRET_KEY': SECRET_KEY,
        'TOKEN_MAX_AGE': TOKEN_MAX_AGE,
        'ADMIN_USERNAME': ADMIN_USERNAME,
        'ADMIN_PASSWORD': ADMIN_PASSWORD,
        'CRON_SECRET': CRON_SECRET,
        'UPLOAD_FOLDER': UPLOAD_FOLDER,
        'PUBLIC_BASE_URL': PUBLIC_BASE_URL,
        'MAX_CONTENT_LENGTH': MAX_UPLOAD_MB * 1024 * 1024,
        'ALLOWED_IMAGE_EXTENSIONS': ALLOWED_IMAGE_EXTENSIONS,
        'ORPHAN_GRACE_HOURS': ORPHAN_GRACE_HOURS,
    }
