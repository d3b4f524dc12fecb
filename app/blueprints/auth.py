"""
Auth Blueprint
Login endpoint plus the protect/admin route guards.
"""

from functools import wraps
import logging

from flask import Blueprint, jsonify, request, g

from app.config import API_PREFIX
from app.services.auth import AuthService
from app.blueprints.common import json_body

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix=f'{API_PREFIX}/auth')


def protect(fn):
    """Require a valid bearer token."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        auth_header = request.headers.get('Authorization', '')
        token = auth_header[7:] if auth_header.startswith('Bearer ') else None

        payload = AuthService.verify_token(token) if token else None
        if payload is None:
            return jsonify({'success': False, 'error': 'Not authorized, token failed'}), 401

        g.user = payload
        return fn(*args, **kwargs)
    return wrapper


def admin(fn):
    """Require the admin role. Apply after @protect."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        user = g.get('user') or {}
        if user.get('role') != 'admin':
            return jsonify({'success': False, 'error': 'Not authorized as an admin'}), 403
        return fn(*args, **kwargs)
    return wrapper


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Exchange admin credentials for a bearer token.

    Request body:
    {
        "username": "admin",
        "password": "..."
    }
    """
    data = json_body()

    if not AuthService.check_credentials(data.get('username'), data.get('password')):
        logger.warning(f"Failed login for {data.get('username')!r}")
        return jsonify({'success': False, 'error': 'Invalid username or password'}), 401

    return jsonify({
        'success': True,
        'token': AuthService.issue_token(data['username'], role='admin'),
        'role': 'admin'
    })
