"""
Auth Service
Signed bearer tokens for the admin console.
"""

from typing import Optional
import hmac
import logging

from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

logger = logging.getLogger(__name__)

TOKEN_SALT = 'schoolsite-auth'


class AuthService:
    """Token issue and verification. Identity storage is out of scope."""

    @staticmethod
    def _serializer() -> URLSafeTimedSerializer:
        return URLSafeTimedSerializer(current_app.config['SECRET_KEY'], salt=TOKEN_SALT)

    @staticmethod
    def issue_token(username: str, role: str = 'admin') -> str:
        return AuthService._serializer().dumps({'sub': username, 'role': role})

    @staticmethod
    def verify_token(token: str) -> Optional[dict]:
        """Return the token payload, or None if it is invalid or expired."""
        try:
            return AuthService._serializer().loads(
                token, max_age=current_app.config['TOKEN_MAX_AGE']
            )
        except SignatureExpired:
            logger.info("Rejected expired token")
            return None
        except BadSignature:
            return None

    @staticmethod
    def check_credentials(username: str, password: str) -> bool:
        """Compare against the configured admin account."""
        if not isinstance(username, str) or not isinstance(password, str):
            return False
        expected_user = current_app.config['ADMIN_USERNAME']
        expected_password = current_app.config['ADMIN_PASSWORD']
        return (
            hmac.compare_digest(username.encode(), expected_user.encode())
            and hmac.compare_digest(password.encode(), expected_password.encode())
        )
