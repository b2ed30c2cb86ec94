"""
Image Storage Service
Uploads listing images to AWS S3, or to local disk when S3 is not configured
"""

import io
import logging
import os
import uuid
from concurrent.futures import ThreadPoolExecutor
from urllib.parse import urlparse

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from flask import current_app
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

CONTENT_TYPE_EXTENSIONS = {
    'image/jpeg': 'jpg',
    'image/jpg': 'jpg',
    'image/png': 'png',
    'image/gif': 'gif',
    'image/webp': 'webp',
    'image/bmp': 'bmp',
    'image/svg+xml': 'svg',
}

MAX_DELETE_WORKERS = 8


class StorageError(Exception):
    """Raised when the object store rejects an upload or delete"""


def file_extension(filename, content_type):
    """Pick an extension from the filename, falling back to the MIME type"""
    if filename and '.' in filename:
        ext = filename.rsplit('.', 1)[1].lower()
        if ext.isalnum():
            return ext
    return CONTENT_TYPE_EXTENSIONS.get((content_type or '').lower(), 'bin')


class StorageService:
    """Shared batch helpers; subclasses implement upload_file/delete_file"""

    def upload_file(self, data, filename=None, content_type=None):
        raise NotImplementedError

    def delete_file(self, url):
        raise NotImplementedError

    def upload_files(self, files):
        """
        Upload several images

        Args:
            files: iterable of (bytes, filename, content_type)

        Returns:
            List of public URLs, in input order

        On failure the images already stored are removed again and the
        StorageError is re-raised.
        """
        urls = []
        try:
            for data, filename, content_type in files:
                urls.append(self.upload_file(data, filename, content_type))
        except StorageError:
            self.delete_files(urls)
            raise
        return urls

    def delete_files(self, urls):
        """
        Delete every URL concurrently and wait for all of them.

        Individual failures never raise; they are logged and returned as
        a list of (url, error) pairs.
        """
        urls = [url for url in urls or [] if url]
        if not urls:
            return []

        def _delete(url):
            try:
                self.delete_file(url)
                return None
            except Exception as e:
                return url, e

        with ThreadPoolExecutor(max_workers=min(MAX_DELETE_WORKERS, len(urls))) as pool:
            results = list(pool.map(_delete, urls))

        failures = [result for result in results if result is not None]
        for url, error in failures:
            logger.warning('Image delete failed for %s: %s', url, error)
        return failures


class S3Service(StorageService):
    """Service for handling S3 uploads"""

    def __init__(self, bucket_name, region='us-east-1', access_key_id=None,
                 secret_access_key=None, folder='listings', max_dimensions=(1200, 800)):
        self.bucket_name = bucket_name
        self.region = region
        self.access_key_id = access_key_id
        self.secret_access_key = secret_access_key
        self.folder = folder.strip('/')
        self.max_dimensions = max_dimensions
        self._client = None

    @classmethod
    def from_config(cls, config):
        return cls(
            bucket_name=config['S3_BUCKET_NAME'],
            region=config.get('AWS_REGION', 'us-east-1'),
            access_key_id=config.get('AWS_ACCESS_KEY_ID'),
            secret_access_key=config.get('AWS_SECRET_ACCESS_KEY'),
            folder=config.get('S3_IMAGE_FOLDER', 'listings'),
            max_dimensions=tuple(config.get('IMAGE_MAX_DIMENSIONS', (1200, 800))),
        )

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                's3',
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                region_name=self.region
            )
        return self._client

    def public_url(self, key):
        return f"https://{self.bucket_name}.s3.{self.region}.amazonaws.com/{key}"

    def key_from_url(self, url):
        """
        Extract the object key from a public URL
        Format: https://bucket-name.s3.region.amazonaws.com/folder/filename.ext
        """
        parsed = urlparse(url)
        if not parsed.netloc.startswith(f"{self.bucket_name}.s3."):
            raise StorageError(f'URL does not belong to bucket {self.bucket_name}')
        key = parsed.path.lstrip('/')
        if not key:
            raise StorageError('URL has no object key')
        return key

    def compress_image(self, data):
        """
        Downscale an image to fit max_dimensions and re-encode as JPEG.

        Returns the new bytes, or None when the data cannot be decoded.
        """
        try:
            img = Image.open(io.BytesIO(data))

            # Convert RGBA to RGB if necessary
            if img.mode in ('RGBA', 'LA', 'P'):
                background = Image.new('RGB', img.size, (255, 255, 255))
                if img.mode == 'P':
                    img = img.convert('RGBA')
                background.paste(img, mask=img.split()[-1] if img.mode in ('RGBA', 'LA') else None)
                img = background
            elif img.mode != 'RGB':
                img = img.convert('RGB')

            img.thumbnail(self.max_dimensions, Image.Resampling.LANCZOS)

            output = io.BytesIO()
            img.save(output, format='JPEG', quality=85, optimize=True)
            return output.getvalue()
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.info('Image compression skipped: %s', e)
            return None

    def upload_file(self, data, filename=None, content_type=None):
        ext = file_extension(filename, content_type)

        if ext in ('jpg', 'jpeg', 'png'):
            compressed = self.compress_image(data)
            if compressed is not None:
                data, ext, content_type = compressed, 'jpg', 'image/jpeg'

        key = f"{self.folder}/{uuid.uuid4().hex}.{ext}"
        try:
            self.client.upload_fileobj(
                io.BytesIO(data),
                self.bucket_name,
                key,
                ExtraArgs={
                    'ACL': 'public-read',
                    'ContentType': content_type or f'image/{ext}'
                }
            )
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f'S3 upload failed: {str(e)}') from e

        return self.public_url(key)

    def delete_file(self, url):
        key = self.key_from_url(url)
        try:
            self.client.delete_object(Bucket=self.bucket_name, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise StorageError(f'S3 delete failed: {str(e)}') from e

    def delete_files(self, urls):
        # create the client before worker threads share it
        _ = self.client
        return super().delete_files(urls)


class LocalStorageService(StorageService):
    """
    Fallback service for local file storage
    Use this in development if you don't have AWS S3 configured
    """

    def __init__(self, root, subfolder='listings', url_prefix='/uploads'):
        self.root = root
        self.subfolder = subfolder
        self.url_prefix = url_prefix.rstrip('/')

    @classmethod
    def from_config(cls, config, root_path):
        folder = config.get('UPLOAD_FOLDER', 'uploads')
        if not os.path.isabs(folder):
            folder = os.path.join(root_path, '..', folder)
        return cls(os.path.abspath(folder))

    def path_for_url(self, url):
        prefix = f"{self.url_prefix}/"
        if not url.startswith(prefix):
            raise StorageError(f'Not a local upload URL: {url}')
        relative = url[len(prefix):]
        path = os.path.abspath(os.path.join(self.root, relative))
        if not path.startswith(self.root + os.sep):
            raise StorageError(f'Not a local upload URL: {url}')
        return path

    def upload_file(self, data, filename=None, content_type=None):
        ext = file_extension(filename, content_type)
        name = f"{uuid.uuid4().hex}.{ext}"
        folder = os.path.join(self.root, self.subfolder)
        try:
            os.makedirs(folder, exist_ok=True)
            with open(os.path.join(folder, name), 'wb') as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f'Local upload failed: {str(e)}') from e
        return f"{self.url_prefix}/{self.subfolder}/{name}"

    def delete_file(self, url):
        path = self.path_for_url(url)
        try:
            os.remove(path)
        except OSError as e:
            raise StorageError(f'Local delete failed: {str(e)}') from e


def s3_configured(config):
    return bool(config.get('AWS_ACCESS_KEY_ID') and config.get('S3_BUCKET_NAME'))


def get_storage_service():
    """Storage backend for the current app: S3 when configured, else local disk"""
    config = current_app.config
    if s3_configured(config):
        return S3Service.from_config(config)
    return LocalStorageService.from_config(config, current_app.root_path)
