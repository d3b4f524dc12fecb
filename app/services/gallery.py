"""
Gallery Service
Ordered image list reconciliation with NO HTTP dependencies.
"""

from typing import Any, Callable, List, Optional, Sequence
from dataclasses import dataclass, field
import logging

from app.errors import NoImagesAvailable, UploadFailure

logger = logging.getLogger(__name__)


@dataclass
class FailedUpload:
    """A pending file whose upload was skipped."""
    index: int
    filename: Optional[str]
    reason: str


@dataclass
class ReconcileResult:
    """Result of merging retained images with freshly uploaded ones."""
    images: List[str]
    uploaded: List[str] = field(default_factory=list)
    failed: List[FailedUpload] = field(default_factory=list)


class GalleryService:
    """
    Ordered gallery logic.
    Pure functions, no database access.
    """

    @staticmethod
    def normalize_images(value: Any) -> Optional[List[str]]:
        """
        Normalize an incoming image field to a list.

        A bare string becomes a one-element list; None stays None so callers
        can tell "omitted" from "empty".
        """
        if value is None:
            return None
        if isinstance(value, str):
            return [value]
        if isinstance(value, (list, tuple)):
            return list(value)
        return [value]

    @staticmethod
    def move_image(images: Sequence[str], index: int, direction: int) -> List[str]:
        """
        Swap the image at `index` with its neighbour at `index + direction`.

        Returns the list unchanged when either position is out of bounds.
        """
        if direction not in (-1, 1):
            raise ValueError('direction must be -1 or +1')

        result = list(images)
        target = index + direction
        if not 0 <= index < len(result) or not 0 <= target < len(result):
            return result

        result[index], result[target] = result[target], result[index]
        return result

    @staticmethod
    def remove_image(images: Sequence[str], index: int) -> List[str]:
        """Return the list without the entry at `index`."""
        result = list(images)
        if 0 <= index < len(result):
            del result[index]
        return result

    @staticmethod
    def reconcile(
        retained: Sequence[str],
        pending: Sequence[Any],
        upload: Callable[[Any], Optional[str]],
    ) -> ReconcileResult:
        """
        Build the final image list for a create or update.

        Pending files are uploaded one at a time in order; their position
        in the result depends only on that order, so uploads must never run
        concurrently.

        Args:
            retained: Existing URLs to keep, already in display order
            pending: Files staged for upload, in display order
            upload: Callable taking one file and returning its URL

        Returns:
            ReconcileResult with `retained ++ successful uploads`

        Raises:
            NoImagesAvailable: if the merged list is empty
        """
        uploaded = []
        failed = []

        for index, file in enumerate(pending):
            filename = getattr(file, 'filename', None)
            try:
                url = upload(file)
            except UploadFailure as e:
                logger.warning(f"Upload {index + 1}/{len(pending)} ({filename}) skipped: {e.message}")
                failed.append(FailedUpload(index=index, filename=filename, reason=e.message))
                continue

            if not url:
                logger.warning(f"Upload {index + 1}/{len(pending)} ({filename}) returned no URL, skipped")
                failed.append(FailedUpload(index=index, filename=filename, reason='No URL returned'))
                continue

            uploaded.append(url)

        images = list(retained) + uploaded
        if not images:
            raise NoImagesAvailable()

        if failed:
            logger.info(f"Reconciled {len(images)} images ({len(failed)} uploads failed)")

        return ReconcileResult(images=images, uploaded=uploaded, failed=failed)
