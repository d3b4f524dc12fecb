"""
Upload Service
Stores uploaded images and cleans up files no schedule references.
"""

from typing import Optional, Set
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from urllib.parse import urlparse
import logging
import os
import posixpath
import uuid

from flask import current_app, has_request_context, request
from werkzeug.utils import secure_filename

from app.errors import ValidationError, UploadFailure

logger = logging.getLogger(__name__)

UPLOADS_URL_PATH = '/uploads/'


@dataclass
class SweepResult:
    """Outcome of an orphaned-upload sweep."""
    removed: list = field(default_factory=list)
    kept_recent: int = 0
    referenced: int = 0

    def to_dict(self) -> dict:
        return {
            'removed': len(self.removed),
            'removed_files': self.removed,
            'kept_recent': self.kept_recent,
            'referenced': self.referenced,
        }


class UploadService:
    """
    Image storage on the local filesystem.
    Files are served back by the uploads blueprint.
    """

    @staticmethod
    def upload_folder() -> str:
        folder = current_app.config['UPLOAD_FOLDER']
        os.makedirs(folder, exist_ok=True)
        return folder

    @staticmethod
    def allowed_file(filename: str) -> bool:
        """Check the extension against ALLOWED_IMAGE_EXTENSIONS."""
        if not filename or '.' not in filename:
            return False
        ext = filename.rsplit('.', 1)[1].lower()
        return ext in current_app.config['ALLOWED_IMAGE_EXTENSIONS']

    @staticmethod
    def public_url(name: str) -> str:
        """Build the stable URL a stored file is served from."""
        base = current_app.config.get('PUBLIC_BASE_URL')
        if not base and has_request_context():
            base = request.host_url.rstrip('/')
        return f"{base or ''}{UPLOADS_URL_PATH}{name}"

    @staticmethod
    def save_image(file) -> str:
        """
        Store one uploaded image.

        Args:
            file: werkzeug FileStorage from the multipart form

        Returns:
            The public URL of the stored image
        """
        if file is None or not file.filename:
            raise ValidationError('No image file provided')

        if not UploadService.allowed_file(file.filename):
            allowed = ', '.join(sorted(current_app.config['ALLOWED_IMAGE_EXTENSIONS']))
            raise ValidationError(f'Unsupported image type. Allowed: {allowed}')

        original = secure_filename(file.filename) or 'image'
        ext = file.filename.rsplit('.', 1)[1].lower()
        name = f"{uuid.uuid4().hex}.{ext}"
        path = os.path.join(UploadService.upload_folder(), name)

        try:
            file.save(path)
        except OSError as e:
            logger.error(f"Failed to store upload {original}: {e}")
            raise UploadFailure(f'Could not store image: {original}')

        logger.info(f"📷 Image stored: {original} -> {name}")

        return UploadService.public_url(name)

    @staticmethod
    def stored_name(url: str) -> Optional[str]:
        """File name behind one of our upload URLs, or None for foreign URLs."""
        path = urlparse(url).path
        if not path.startswith(UPLOADS_URL_PATH):
            return None
        return posixpath.basename(path) or None

    @staticmethod
    def is_stored_image(name: str) -> bool:
        """Only visible image files are candidates for the sweep."""
        return not name.startswith('.') and UploadService.allowed_file(name)

    @staticmethod
    def sweep_orphans(referenced_urls: Set[str], grace_hours: Optional[int] = None) -> SweepResult:
        """
        Delete stored files that no schedule references.

        Files modified within the grace period are kept because an edit may
        have uploaded them without saving the schedule yet.
        """
        if grace_hours is None:
            grace_hours = current_app.config['ORPHAN_GRACE_HOURS']

        referenced_names = {
            name for name in (UploadService.stored_name(url) for url in referenced_urls) if name
        }
        cutoff = datetime.now() - timedelta(hours=grace_hours)
        folder = UploadService.upload_folder()
        result = SweepResult()

        for entry in sorted(os.scandir(folder), key=lambda e: e.name):
            if not entry.is_file() or not UploadService.is_stored_image(entry.name):
                continue
            if entry.name in referenced_names:
                result.referenced += 1
                continue
            if datetime.fromtimestamp(entry.stat().st_mtime) > cutoff:
                result.kept_recent += 1
                continue

            os.remove(entry.path)
            result.removed.append(entry.name)

        logger.info(
            f"🧹 Upload sweep: removed {len(result.removed)}, "
            f"kept {result.kept_recent} recent, {result.referenced} referenced"
        )

        return result
