"""Tests for ordered gallery reconciliation and reordering."""

import pytest

from app.errors import NoImagesAvailable, UploadFailure, ValidationError
from app.services.gallery import GalleryService
from app.services.console import PendingFile


def make_uploader(results):
    """Uploader returning/raising the scripted result for each file, recording call order."""
    calls = []

    def upload(file):
        calls.append(file.filename)
        outcome = results[file.filename]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    upload.calls = calls
    return upload


def files(*names):
    return [PendingFile(filename=name, content=b'img') for name in names]


# ========================== reconcile ======================================


def test_retained_then_uploads_in_order():
    upload = make_uploader({'c.jpg': 'urlC', 'd.jpg': 'urlD'})

    result = GalleryService.reconcile(['urlB', 'urlA'], files('c.jpg', 'd.jpg'), upload)

    assert result.images == ['urlB', 'urlA', 'urlC', 'urlD']
    assert result.uploaded == ['urlC', 'urlD']
    assert result.failed == []


def test_uploads_run_one_by_one_in_pending_order():
    upload = make_uploader({'1.jpg': 'u1', '2.jpg': 'u2', '3.jpg': 'u3'})

    GalleryService.reconcile([], files('1.jpg', '2.jpg', '3.jpg'), upload)

    assert upload.calls == ['1.jpg', '2.jpg', '3.jpg']


def test_failed_first_upload_is_dropped_not_replaced():
    upload = make_uploader({
        'bad.jpg': UploadFailure('server error'),
        'good.jpg': 'urlX',
    })

    result = GalleryService.reconcile([], files('bad.jpg', 'good.jpg'), upload)

    assert result.images == ['urlX']
    assert len(result.failed) == 1
    assert result.failed[0].index == 0
    assert result.failed[0].filename == 'bad.jpg'
    assert result.failed[0].reason == 'server error'


def test_upload_returning_no_url_counts_as_failure():
    upload = make_uploader({'a.jpg': None, 'b.jpg': 'urlB'})

    result = GalleryService.reconcile(['urlA'], files('a.jpg', 'b.jpg'), upload)

    assert result.images == ['urlA', 'urlB']
    assert [f.filename for f in result.failed] == ['a.jpg']


def test_all_uploads_fail_with_retained_images_keeps_retained():
    upload = make_uploader({'a.jpg': UploadFailure('x'), 'b.jpg': UploadFailure('y')})

    result = GalleryService.reconcile(['urlKeep'], files('a.jpg', 'b.jpg'), upload)

    assert result.images == ['urlKeep']
    assert len(result.failed) == 2


def test_all_uploads_fail_without_retained_raises():
    upload = make_uploader({'a.jpg': UploadFailure('x'), 'b.jpg': UploadFailure('y')})

    with pytest.raises(NoImagesAvailable):
        GalleryService.reconcile([], files('a.jpg', 'b.jpg'), upload)


def test_nothing_retained_and_nothing_pending_raises():
    with pytest.raises(NoImagesAvailable):
        GalleryService.reconcile([], [], make_uploader({}))


def test_no_images_available_is_a_validation_error():
    assert issubclass(NoImagesAvailable, ValidationError)


def test_retained_only_makes_no_upload_calls():
    upload = make_uploader({})

    result = GalleryService.reconcile(['urlA', 'urlB'], [], upload)

    assert result.images == ['urlA', 'urlB']
    assert upload.calls == []


def test_unexpected_errors_propagate():
    upload = make_uploader({'a.jpg': RuntimeError('bug')})

    with pytest.raises(RuntimeError):
        GalleryService.reconcile(['urlA'], files('a.jpg'), upload)


def test_reconcile_does_not_mutate_retained():
    retained = ['urlA']
    GalleryService.reconcile(retained, files('b.jpg'), make_uploader({'b.jpg': 'urlB'}))
    assert retained == ['urlA']


# ========================== move / remove ==================================


def test_move_image_swaps_with_neighbour():
    assert GalleryService.move_image(['a', 'b', 'c'], 1, -1) == ['b', 'a', 'c']
    assert GalleryService.move_image(['a', 'b', 'c'], 1, 1) == ['a', 'c', 'b']


def test_move_first_up_is_noop():
    images = ['a', 'b', 'c']
    assert GalleryService.move_image(images, 0, -1) == images
    assert GalleryService.move_image(GalleryService.move_image(images, 0, -1), 0, -1) == images


def test_move_last_down_is_noop():
    images = ['a', 'b', 'c']
    assert GalleryService.move_image(images, 2, 1) == images


def test_move_out_of_range_index_is_noop():
    assert GalleryService.move_image(['a', 'b'], 5, -1) == ['a', 'b']
    assert GalleryService.move_image([], 0, 1) == []


def test_move_rejects_other_directions():
    with pytest.raises(ValueError):
        GalleryService.move_image(['a', 'b'], 0, 2)


def test_move_returns_new_list():
    images = ['a', 'b']
    moved = GalleryService.move_image(images, 0, 1)
    assert moved == ['b', 'a']
    assert images == ['a', 'b']


def test_remove_image_shifts_following_entries():
    assert GalleryService.remove_image(['a', 'b', 'c', 'd'], 1) == ['a', 'c', 'd']


def test_remove_is_destructive():
    removed = GalleryService.remove_image(['a', 'b', 'c'], 0)
    restored = removed + ['a']
    assert restored != ['a', 'b', 'c']


def test_remove_out_of_range_is_noop():
    assert GalleryService.remove_image(['a'], 3) == ['a']


# ========================== normalize ======================================


def test_normalize_images():
    assert GalleryService.normalize_images(None) is None
    assert GalleryService.normalize_images('urlA') == ['urlA']
    assert GalleryService.normalize_images(('a', 'b')) == ['a', 'b']
    assert GalleryService.normalize_images([]) == []
