"""
Uploads Blueprint
Image upload endpoint and static serving of stored images.
"""

from flask import Blueprint, jsonify, request, current_app, send_from_directory

from app.config import API_PREFIX
from app.blueprints.auth import protect, admin
from app.services.upload import UploadService

uploads_bp = Blueprint('uploads', __name__)


@uploads_bp.route(f'{API_PREFIX}/upload', methods=['POST'])
@protect
@admin
def upload_image():
    """
    Store a single image.

    Multipart form field: image
    Response: {"image_url": "https://.../uploads/<name>"}
    """
    image_url = UploadService.save_image(request.files.get('image'))
    return jsonify({'success': True, 'image_url': image_url})


@uploads_bp.route('/uploads/<path:filename>', methods=['GET'])
def serve_upload(filename):
    """Serve a stored image."""
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)
