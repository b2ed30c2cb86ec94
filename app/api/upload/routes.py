"""
Image Upload Routes
"""

from flask import Blueprint, request, current_app
from flask_jwt_extended import jwt_required

from app.errors import ValidationError
from app.services.storage_service import StorageError, get_storage_service
from app.utils.decorators import owner_required
from app.utils.responses import success_response, error_response

upload_bp = Blueprint('upload', __name__)


def read_image_files(files, max_files, max_size):
    """
    Validate multipart image parts and read their bytes.

    Returns a list of (bytes, filename, content_type).
    """
    files = [file for file in files if file and file.filename]

    if not files:
        raise ValidationError('No image files provided')

    if len(files) > max_files:
        raise ValidationError(f'Maximum {max_files} images allowed')

    images = []
    for file in files:
        if not (file.mimetype or '').startswith('image/'):
            raise ValidationError('Not an image! Please upload only images.')

        data = file.read()
        if not data:
            raise ValidationError(f'{file.filename} is empty')
        if len(data) > max_size:
            raise ValidationError(
                f'{file.filename} exceeds the {max_size // (1024 * 1024)}MB size limit'
            )
        images.append((data, file.filename, file.mimetype))

    return images


@upload_bp.route('/images', methods=['POST'])
@jwt_required()
@owner_required()
def upload_images():
    """Upload listing images and return their public URLs"""
    images = read_image_files(
        request.files.getlist('images'),
        max_files=current_app.config['UPLOAD_MAX_FILES'],
        max_size=current_app.config['UPLOAD_MAX_FILE_SIZE'],
    )

    try:
        image_urls = get_storage_service().upload_files(images)
    except StorageError as e:
        current_app.logger.error(f'Image upload error: {str(e)}')
        return error_response('Failed to upload images. Please try again.', 500, e)

    return success_response(
        data=image_urls,
        message='Images uploaded successfully',
        count=len(image_urls)
    )
