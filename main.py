"""
School Site Backend
REST API for the school website and its admin console.

FEATURES:
- Monthly schedules with an ordered image gallery
- Image upload and static serving
- Token-protected admin routes
- Daily sweep of orphaned uploads

ARCHITECTURE:
- Blueprints: HTTP layer (thin wrappers)
- Services: Business logic (no HTTP)
- Admin: Isolated, feature-flagged
"""

import os
import logging
from flask import Flask, jsonify
from flask_cors import CORS
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

# App imports
from app.config import (
    ENV, IS_PRODUCTION, ENABLE_ADMIN, ENABLE_SCHEDULER, SCHEDULER_TIMEZONE,
    CORS_ORIGINS, LOG_LEVEL, flask_settings
)
from app.errors import SchoolSiteError
from app.models import db

# =============================================================================
# LOGGING
# =============================================================================

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# =============================================================================
# APP FACTORY
# =============================================================================

def create_app(overrides=None):
    """Create and configure the Flask application."""
    app = Flask(__name__)

    app.config.update(flask_settings())
    if overrides:
        app.config.update(overrides)

    CORS(app, origins=CORS_ORIGINS, methods=['GET', 'POST', 'PUT', 'DELETE'], supports_credentials=True)

    # Initialize extensions
    db.init_app(app)

    # Register blueprints
    register_blueprints(app)
    register_error_handlers(app)

    # Create tables
    with app.app_context():
        db.create_all()
        logger.info("✅ Database tables created")

    return app


def register_blueprints(app):
    """
    Register blueprints based on environment and feature flags.

    PRODUCTION: Core blueprints only
    DEVELOPMENT: Core + Admin
    """
    from app.blueprints import (
        public_bp,
        auth_bp,
        schedules_bp,
        uploads_bp,
        cron_bp,
    )

    # Core blueprints - always registered
    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(schedules_bp)
    app.register_blueprint(uploads_bp)
    app.register_blueprint(cron_bp)

    logger.info(f"✅ Core blueprints registered (ENV={ENV})")

    # Admin blueprints - conditional
    if ENABLE_ADMIN or not IS_PRODUCTION:
        from app.admin import admin_bp
        app.register_blueprint(admin_bp)
        logger.info("✅ Admin blueprint registered (ENABLE_ADMIN=true)")
    else:
        logger.info("⚠️ Admin blueprint DISABLED (production mode)")


def register_error_handlers(app):
    """Translate service errors into JSON responses."""

    @app.errorhandler(SchoolSiteError)
    def handle_service_error(error):
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error.message}")
        return jsonify({'success': False, 'error': error.message}), error.status_code

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'success': False, 'error': 'Not found'}), 404

    @app.errorhandler(413)
    def handle_too_large(error):
        return jsonify({'success': False, 'error': 'Image is too large'}), 413


# =============================================================================
# SCHEDULER
# =============================================================================

scheduler = None


def scheduled_upload_sweep():
    """Daily removal of uploads that no schedule references."""
    from app.blueprints.cron import sweep_uploads

    with app.app_context():
        try:
            result = sweep_uploads()
            logger.info(f"[Scheduler] Upload sweep removed {len(result.removed)} files")
        except Exception as e:
            logger.error(f"[Scheduler] Upload sweep error: {e}")


def start_scheduler():
    """Initialize and start the background scheduler."""
    global scheduler

    if scheduler is not None:
        logger.info("[Scheduler] Already running")
        return

    scheduler = BackgroundScheduler(daemon=True, timezone=SCHEDULER_TIMEZONE)

    # Orphaned upload sweep - 03:00 local time
    scheduler.add_job(
        scheduled_upload_sweep,
        CronTrigger(hour=3, minute=0, timezone=SCHEDULER_TIMEZONE),
        id='upload_sweep',
        replace_existing=True,
        max_instances=1
    )

    scheduler.start()

    # Set scheduler reference in admin module if available
    if ENABLE_ADMIN or not IS_PRODUCTION:
        from app.admin.admin_bp import set_scheduler
        set_scheduler(scheduler)

    logger.info("[Scheduler] ✅ Started successfully!")
    logger.info(f"  - Upload sweep: daily 03:00 ({SCHEDULER_TIMEZONE})")


def stop_scheduler():
    """Stop the scheduler gracefully."""
    global scheduler
    if scheduler:
        scheduler.shutdown()
        scheduler = None
        logger.info("[Scheduler] Stopped")


# =============================================================================
# CREATE APP INSTANCE
# =============================================================================

app = create_app()


# =============================================================================
# MAIN
# =============================================================================

# Start the scheduler (only when explicitly enabled)
if ENABLE_SCHEDULER:
    start_scheduler()

if __name__ == '__main__':
    start_scheduler()
    port = int(os.environ.get('PORT', 5000))
    app.run(host='0.0.0.0', port=port, debug=not IS_PRODUCTION)
