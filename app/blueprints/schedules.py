"""
Schedules Blueprint
Monthly schedule listing and admin management.
"""

from flask import Blueprint, jsonify

from app.config import API_PREFIX
from app.blueprints.auth import protect, admin
from app.blueprints.common import json_body
from app.services.gallery import GalleryService
from app.services.schedule import (
    ScheduleService, CreateScheduleRequest, UpdateScheduleRequest, UNSET
)

schedules_bp = Blueprint('schedules', __name__, url_prefix=f'{API_PREFIX}/schedules')


@schedules_bp.route('', methods=['GET'])
def get_schedules():
    """List all schedules, most recent month first."""
    schedules = ScheduleService.list_schedules()
    return jsonify([ScheduleService.schedule_to_dict(s) for s in schedules])


@schedules_bp.route('', methods=['POST'])
@protect
@admin
def create_schedule():
    """
    Create a schedule.

    Request body:
    {
        "month": "2024-06",                  # REQUIRED
        "title": "June timetable",           # optional
        "scheduleImgURL": ["https://..."]    # REQUIRED, already uploaded, in display order
    }
    """
    data = json_body()

    create_request = CreateScheduleRequest(
        month=data.get('month'),
        title=data.get('title'),
        images=GalleryService.normalize_images(data.get('scheduleImgURL')),
    )

    schedule = ScheduleService.create_schedule(create_request)

    return jsonify(ScheduleService.schedule_to_dict(schedule)), 201


@schedules_bp.route('/<int:schedule_id>', methods=['PUT'])
@protect
@admin
def update_schedule(schedule_id):
    """
    Update a schedule. Any subset of the fields may be sent.

    Request body:
    {
        "title": "...",
        "month": "2024-07",
        "scheduleImgURL": ["https://...", "https://..."]
    }
    """
    data = json_body()

    update_request = UpdateScheduleRequest(
        title=data['title'] if 'title' in data else UNSET,
        month=data['month'] if 'month' in data else UNSET,
        images=GalleryService.normalize_images(data['scheduleImgURL']) if 'scheduleImgURL' in data else UNSET,
    )

    schedule = ScheduleService.update_schedule(schedule_id, update_request)

    return jsonify(ScheduleService.schedule_to_dict(schedule))


@schedules_bp.route('/<int:schedule_id>', methods=['DELETE'])
@protect
@admin
def delete_schedule(schedule_id):
    """Delete a schedule."""
    ScheduleService.delete_schedule(schedule_id)
    return jsonify({'success': True, 'message': 'Schedule removed'})
