"""
Cron Blueprint
Endpoints for scheduled tasks triggered by external cron services.
"""

from flask import Blueprint, jsonify, request, current_app
from datetime import datetime
import logging

from app.config import API_PREFIX
from app.blueprints.common import json_body
from app.services.schedule import ScheduleService
from app.services.upload import UploadService, SweepResult

logger = logging.getLogger(__name__)

cron_bp = Blueprint('cron', __name__, url_prefix=f'{API_PREFIX}/cron')


def verify_cron_secret():
    """Verify cron secret from header or body."""
    auth_header = request.headers.get('Authorization', '')
    body_data = json_body()

    provided_secret = None
    if auth_header.startswith('Bearer '):
        provided_secret = auth_header[7:]
    elif body_data.get('cron_secret'):
        provided_secret = body_data.get('cron_secret')

    return provided_secret == current_app.config['CRON_SECRET']


def sweep_uploads(grace_hours=None) -> SweepResult:
    """Remove stored images that no schedule references. Needs an app context."""
    referenced = ScheduleService.referenced_images()
    return UploadService.sweep_orphans(referenced, grace_hours=grace_hours)


@cron_bp.route('/sweep-uploads', methods=['POST'])
def cron_sweep_uploads():
    """Cron endpoint: delete orphaned uploads."""
    if not verify_cron_secret():
        return jsonify({'success': False, 'error': 'Unauthorized'}), 401

    result = sweep_uploads()
    return jsonify({
        'success': True,
        'message': 'Upload sweep complete',
        'result': result.to_dict(),
        'timestamp': datetime.utcnow().isoformat()
    })
