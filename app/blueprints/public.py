"""
Public Blueprint
Health checks and service info.
"""

import time
from flask import Blueprint, jsonify

from app.config import VERSION, VERSION_NAME, FEATURES, API_PREFIX

public_bp = Blueprint('public', __name__)


@public_bp.route('/')
def home():
    """API root - shows service info."""
    return jsonify({
        'service': 'School Site API',
        'version': VERSION,
        'version_name': VERSION_NAME,
        'status': 'online',
        'features': FEATURES,
        'endpoints': {
            'schedules': f'{API_PREFIX}/schedules',
            'create_schedule': f'POST {API_PREFIX}/schedules',
            'update_schedule': f'PUT {API_PREFIX}/schedules/<id>',
            'delete_schedule': f'DELETE {API_PREFIX}/schedules/<id>',
            'upload': f'POST {API_PREFIX}/upload',
            'login': f'POST {API_PREFIX}/auth/login',
        }
    })


@public_bp.route('/health')
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'timestamp': int(time.time()),
        'version': VERSION
    })
