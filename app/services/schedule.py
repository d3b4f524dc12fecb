"""
Schedule Service
Handles schedule CRUD operations with NO HTTP dependencies.
"""

from typing import Any, Dict, List, Optional
from dataclasses import dataclass
from datetime import date
import logging
import re

from app.models import db, Schedule, TITLE_MAX_LENGTH
from app.errors import ValidationError, NotFound

logger = logging.getLogger(__name__)

MONTH_PATTERN = re.compile(r'^(\d{4})-(\d{1,2})(?:$|[-T ])')


class _Unset:
    """Marker for a field the caller did not send."""

    def __repr__(self):
        return 'UNSET'

    def __bool__(self):
        return False


UNSET: Any = _Unset()


@dataclass
class CreateScheduleRequest:
    """Data required to create a schedule."""
    month: Any
    images: Optional[List[str]]
    title: Optional[str] = None


@dataclass
class UpdateScheduleRequest:
    """Fields to change on a schedule. UNSET fields are left untouched."""
    title: Any = UNSET
    month: Any = UNSET
    images: Any = UNSET


class ScheduleService:
    """
    Schedule CRUD service.
    Handles database operations for schedules.
    """

    @staticmethod
    def parse_month(value: Any) -> date:
        """
        Parse a month value into the first day of that month.

        Accepts `date` objects, 'YYYY-MM', 'YYYY-MM-DD' and ISO datetimes.
        """
        if isinstance(value, date):
            return date(value.year, value.month, 1)

        if not isinstance(value, str) or not value.strip():
            raise ValidationError('Missing required field: month')

        match = MONTH_PATTERN.match(value.strip())
        if not match:
            raise ValidationError(f'Invalid month: {value!r} (expected YYYY-MM)')

        year, month = int(match.group(1)), int(match.group(2))
        if not 1 <= month <= 12:
            raise ValidationError(f'Invalid month: {value!r} (expected YYYY-MM)')

        try:
            return date(year, month, 1)
        except ValueError:
            raise ValidationError(f'Invalid month: {value!r} (year out of range)')

    @staticmethod
    def validate_title(title: Any) -> Optional[str]:
        """Titles are optional text no longer than the title column."""
        if title is None:
            return None
        if not isinstance(title, str):
            raise ValidationError('Title must be a string')
        if len(title) > TITLE_MAX_LENGTH:
            raise ValidationError(f'Title must be at most {TITLE_MAX_LENGTH} characters')
        return title

    @staticmethod
    def validate_images(images: Any) -> List[str]:
        """Check an already-merged image list before it is stored."""
        if not images or not isinstance(images, list):
            raise ValidationError('At least one image is required')

        for url in images:
            if not isinstance(url, str) or not url.strip():
                raise ValidationError('Image URLs must be non-empty strings')

        return list(images)

    @staticmethod
    def list_schedules() -> List[Schedule]:
        """All schedules, most recent month first."""
        return Schedule.query.order_by(Schedule.month.desc(), Schedule.id.desc()).all()

    @staticmethod
    def get_schedule(schedule_id: int) -> Optional[Schedule]:
        """Get schedule by ID."""
        return db.session.get(Schedule, schedule_id)

    @staticmethod
    def require_schedule(schedule_id: int) -> Schedule:
        """Get schedule by ID or raise NotFound."""
        schedule = ScheduleService.get_schedule(schedule_id)
        if schedule is None:
            raise NotFound('Schedule not found')
        return schedule

    @staticmethod
    def create_schedule(request: CreateScheduleRequest) -> Schedule:
        """
        Create a new schedule.

        Args:
            request: CreateScheduleRequest with the merged image list

        Returns:
            The persisted Schedule
        """
        month = ScheduleService.parse_month(request.month)
        images = ScheduleService.validate_images(request.images)
        title = ScheduleService.validate_title(request.title)

        schedule = Schedule(
            month=month,
            title=title,
            images=images,
        )
        db.session.add(schedule)
        db.session.commit()

        logger.info(f"✅ Schedule created: #{schedule.id} {month:%Y-%m} ({len(images)} images)")

        return schedule

    @staticmethod
    def update_schedule(schedule_id: int, request: UpdateScheduleRequest) -> Schedule:
        """
        Update a schedule in place.

        Each field is optional. An empty or null month counts as omitted;
        a provided image list must be non-empty.
        """
        schedule = ScheduleService.require_schedule(schedule_id)

        # Validate everything before touching the row
        updates = {}
        if request.title is not UNSET:
            updates['title'] = ScheduleService.validate_title(request.title)
        if request.month is not UNSET and request.month:
            updates['month'] = ScheduleService.parse_month(request.month)
        if request.images is not UNSET:
            updates['images'] = ScheduleService.validate_images(request.images)

        for name, value in updates.items():
            setattr(schedule, name, value)
        changed = list(updates)

        if not changed:
            return schedule

        db.session.commit()

        logger.info(f"📝 Schedule updated: #{schedule.id} ({', '.join(changed)})")

        return schedule

    @staticmethod
    def delete_schedule(schedule_id: int) -> None:
        """Delete a schedule or raise NotFound."""
        schedule = ScheduleService.require_schedule(schedule_id)

        db.session.delete(schedule)
        db.session.commit()

        logger.info(f"🗑️ Schedule removed: #{schedule_id}")

    @staticmethod
    def referenced_images() -> set:
        """Every image URL referenced by any schedule."""
        urls = set()
        for (images,) in db.session.query(Schedule.images).all():
            urls.update(images or [])
        return urls

    @staticmethod
    def schedule_to_dict(schedule: Schedule) -> Dict[str, Any]:
        """Convert schedule to API response dict."""
        return {
            'id': schedule.id,
            '_id': schedule.id,
            'month': schedule.month.strftime('%Y-%m') if schedule.month else None,
            'title': schedule.title,
            'scheduleImgURL': list(schedule.images or []),
            'created_at': schedule.created_at.isoformat() if schedule.created_at else None,
            'updated_at': schedule.updated_at.isoformat() if schedule.updated_at else None,
        }
