import logging
import os
import uuid
from contextlib import contextmanager
from fastapi import UploadFile
from typing import Iterator, Optional
from ..config import settings
from ..utils.exceptions import FileTooLargeError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
CSV_CONTENT_TYPES = ('text/csv',)

class UploadService:
    @staticmethod
    def is_csv_upload(filename: Optional[str], content_type: Optional[str]) -> bool:
        """Accept by declared media type or by a .csv extension"""
        if content_type and content_type.split(';')[0].strip().lower() in CSV_CONTENT_TYPES:
            return True
        return bool(filename) and filename.lower().endswith('.csv')

    @staticmethod
    @contextmanager
    def temporary_upload_path(filename: Optional[str] = None) -> Iterator[str]:
        """Yield a unique path under UPLOAD_DIR and remove the file on exit, whatever happens"""
        upload_dir = settings.UPLOAD_DIR
        os.makedirs(upload_dir, exist_ok=True)
        extension = os.path.splitext(filename or '')[1] or '.csv'
        file_path = os.path.join(upload_dir, f"file-{uuid.uuid4().hex}{extension}")
        try:
            yield file_path
        finally:
            if os.path.exists(file_path):
                try:
                    os.remove(file_path)
                except OSError as e:
                    logger.error("[UploadService] Error cleaning up file %s: %s", file_path, e)

    @staticmethod
    async def save_upload(upload: UploadFile, file_path: str, max_bytes: int) -> int:
        """Copy the upload to disk in chunks, stopping once it passes max_bytes"""
        size = 0
        with open(file_path, 'wb') as f:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > max_bytes:
                    raise FileTooLargeError(max_bytes // (1024 * 1024))
                f.write(chunk)
        return size
