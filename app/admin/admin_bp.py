"""
Admin Blueprint
ISOLATED - This entire module can be disabled/removed for production.

Contains:
- Upload sweep trigger
- Scheduler status
- Database statistics

To disable: Set ENABLE_ADMIN=false (see main.py)
"""

from flask import Blueprint, jsonify
import logging

from app.config import API_PREFIX
from app.models import Schedule
from app.blueprints.auth import protect, admin
from app.blueprints.common import json_body
from app.services.schedule import ScheduleService

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__, url_prefix=f'{API_PREFIX}/admin')


# =============================================================================
# MAINTENANCE ENDPOINTS
# =============================================================================

@admin_bp.route('/sweep-uploads', methods=['POST'])
@protect
@admin
def admin_sweep_uploads():
    """
    Manually delete orphaned uploads.

    Request body (optional):
    {
        "grace_hours": 0    # override ORPHAN_GRACE_HOURS for this run
    }
    """
    from app.blueprints.cron import sweep_uploads

    data = json_body()
    grace_hours = data.get('grace_hours')
    if grace_hours is not None:
        try:
            grace_hours = max(0, int(grace_hours))
        except (TypeError, ValueError):
            return jsonify({'success': False, 'error': 'grace_hours must be an integer'}), 400

    result = sweep_uploads(grace_hours=grace_hours)
    logger.info(f"Admin upload sweep removed {len(result.removed)} files")

    return jsonify({
        'success': True,
        'message': 'Upload sweep complete',
        'result': result.to_dict()
    })


# =============================================================================
# SCHEDULER ADMIN ENDPOINTS
# =============================================================================

# Global scheduler reference (set by main.py)
_scheduler = None


def set_scheduler(scheduler):
    """Set scheduler reference for admin control."""
    global _scheduler
    _scheduler = scheduler


@admin_bp.route('/scheduler-status', methods=['GET'])
@protect
@admin
def admin_scheduler_status():
    """Check scheduler status."""
    if _scheduler is None:
        return jsonify({'status': 'not_running', 'jobs': []})

    jobs = []
    for job in _scheduler.get_jobs():
        jobs.append({
            'id': job.id,
            'next_run': str(job.next_run_time) if job.next_run_time else None
        })

    return jsonify({
        'status': 'running',
        'jobs': jobs
    })


# =============================================================================
# DEBUG / DEV ENDPOINTS
# =============================================================================

@admin_bp.route('/db-stats', methods=['GET'])
@protect
@admin
def get_db_stats():
    """Get database statistics."""
    schedules = ScheduleService.list_schedules()

    return jsonify({
        'success': True,
        'stats': {
            'schedules': Schedule.query.count(),
            'images': sum(len(s.images or []) for s in schedules),
            'referenced_images': len(ScheduleService.referenced_images()),
            'latest_month': schedules[0].month.strftime('%Y-%m') if schedules else None,
        }
    })
