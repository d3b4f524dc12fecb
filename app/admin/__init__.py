"""
Admin Module
ISOLATED - Can be completely removed/disabled for production.

This module contains:
- Maintenance endpoints (orphaned upload sweep)
- Scheduler controls
- Debug routes

To disable: Set ENABLE_ADMIN=false in environment
"""

from .admin_bp import admin_bp

__all__ = ['admin_bp']
