"""
Console Service
Client-side mirror of the admin console: staged schedule edits and the
HTTP client that submits them.
"""

from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field, replace
import logging

import requests

from app.config import API_PREFIX
from app.errors import ApiError, UploadFailure, ValidationError
from app.services.gallery import GalleryService, ReconcileResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingFile:
    """A new image selected in the console, not uploaded yet."""
    filename: str
    content: bytes
    content_type: str = 'application/octet-stream'


@dataclass(frozen=True)
class ScheduleDraft:
    """
    Staged state of the create/edit form.

    Every edit returns a new draft; the draft itself is passed to
    submit_draft rather than read from shared UI state.
    """
    month: Optional[str] = None
    title: str = ''
    images: Tuple[str, ...] = ()
    pending: Tuple[PendingFile, ...] = ()

    @classmethod
    def from_schedule(cls, schedule: Dict[str, Any]) -> 'ScheduleDraft':
        """Build an edit draft from a schedule as returned by the API."""
        images = GalleryService.normalize_images(schedule.get('scheduleImgURL')) or []
        return cls(
            month=schedule.get('month'),
            title=schedule.get('title') or '',
            images=tuple(images),
        )

    def move_image(self, index: int, direction: int) -> 'ScheduleDraft':
        return replace(self, images=tuple(GalleryService.move_image(self.images, index, direction)))

    def remove_image(self, index: int) -> 'ScheduleDraft':
        return replace(self, images=tuple(GalleryService.remove_image(self.images, index)))

    def stage_files(self, files: List[PendingFile]) -> 'ScheduleDraft':
        """Append newly selected files after the ones already staged."""
        return replace(self, pending=self.pending + tuple(files))

    def unstage_file(self, index: int) -> 'ScheduleDraft':
        return replace(self, pending=tuple(GalleryService.remove_image(self.pending, index)))


class SchoolApiClient:
    """
    Thin HTTP client for the school site API.
    Used by the console mirror and by scripts.
    """

    def __init__(self, base_url: str, token: Optional[str] = None,
                 session: Optional[requests.Session] = None, timeout: float = 30):
        self.base_url = base_url.rstrip('/') + API_PREFIX
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        if not self.token:
            return {}
        return {'Authorization': f'Bearer {self.token}'}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs
            )
        except requests.exceptions.RequestException as e:
            raise ApiError(f'{method} {path} failed: {e}', status_code=503)

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get('error') if isinstance(body, dict) else None
            message = message or response.reason
            raise ApiError(message or f'HTTP {response.status_code}', status_code=response.status_code)

        return response.json()

    def login(self, username: str, password: str) -> str:
        data = self._request('POST', '/auth/login', json={'username': username, 'password': password})
        self.token = data['token']
        return self.token

    def list_schedules(self) -> List[Dict[str, Any]]:
        return self._request('GET', '/schedules')

    def upload_image(self, file: PendingFile) -> str:
        """
        Upload one image and return its URL.

        Any failure is reported as UploadFailure so the reconciler can skip it.
        """
        try:
            data = self._request(
                'POST',
                '/upload',
                files={'image': (file.filename, file.content, file.content_type)},
            )
        except ApiError as e:
            raise UploadFailure(f'{file.filename}: {e.message}')

        url = data.get('image_url') if isinstance(data, dict) else None
        if not url:
            raise UploadFailure(f'{file.filename}: no image_url in response')
        return url

    def create_schedule(self, month: str, images: List[str], title: Optional[str] = None) -> Dict[str, Any]:
        return self._request('POST', '/schedules', json={
            'month': month,
            'title': title,
            'scheduleImgURL': images,
        })

    def update_schedule(self, schedule_id: int, **fields) -> Dict[str, Any]:
        """Send only the given fields; `images` is sent as scheduleImgURL."""
        body = dict(fields)
        if 'images' in body:
            body['scheduleImgURL'] = body.pop('images')
        return self._request('PUT', f'/schedules/{schedule_id}', json=body)

    def delete_schedule(self, schedule_id: int) -> Dict[str, Any]:
        return self._request('DELETE', f'/schedules/{schedule_id}')


@dataclass
class SubmitResult:
    """What the console shows after a submit."""
    schedule: Dict[str, Any]
    reconcile: ReconcileResult
    warnings: List[str] = field(default_factory=list)


def submit_draft(client: SchoolApiClient, draft: ScheduleDraft,
                 schedule_id: Optional[int] = None) -> SubmitResult:
    """
    Upload the draft's pending files in order, merge them after the
    retained images and save the schedule.

    Creates a schedule when `schedule_id` is None, updates it otherwise.
    """
    if not draft.month:
        raise ValidationError('Please select a month')
    if schedule_id is None and not draft.pending:
        raise ValidationError('Please select a month and at least one image')

    merged = GalleryService.reconcile(draft.images, draft.pending, client.upload_image)
    warnings = [f'Upload failed: {f.filename} ({f.reason})' for f in merged.failed]

    if schedule_id is None:
        schedule = client.create_schedule(draft.month, merged.images, title=draft.title)
    else:
        schedule = client.update_schedule(
            schedule_id,
            title=draft.title,
            month=draft.month,
            images=merged.images,
        )

    logger.info(f"Schedule {schedule.get('id')} saved with {len(merged.images)} images")

    return SubmitResult(schedule=schedule, reconcile=merged, warnings=warnings)
