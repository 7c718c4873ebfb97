"""
drive/client.py
---------------
Read-only access to Drive file metadata.
"""

import threading
import time
from typing import Iterable

import httplib2
from googleapiclient.errors import HttpError

from models.drive_file import API_FIELDS, DriveFile
from utils.logger import get_logger

logger = get_logger(__name__)

# network failures below the HTTP layer, retried like server errors
_TRANSPORT_ERRORS = (OSError, httplib2.HttpLib2Error)


class DriveClientError(Exception):
    """Raised when Drive operations fail."""


class DriveFileNotFoundError(DriveClientError):
    """Raised when a file does not exist or is not visible to the bot's account."""


def _status_of(error: HttpError) -> int:
    return int(getattr(error.resp, "status", 0) or 0)


def _is_retryable(status: int) -> bool:
    """Rate limited or server side trouble."""
    return status == 429 or 500 <= status < 600


class DriveClient:
    """
    Fetches file metadata from Google Drive with retry logic.

    The googleapiclient transport (httplib2) is not thread-safe, so calls
    made from worker threads are serialized.
    """

    def __init__(self, service, max_retries: int = 3, retry_delay: float = 2.0):
        """
        Args:
            service: Drive v3 resource from ``drive.auth.build_drive_service``.
            max_retries: Maximum attempts for retryable failures.
            retry_delay: Base delay in seconds, multiplied by the attempt number.
        """
        self.service = service
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay
        self._lock = threading.Lock()

    def get_file(self, file_id: str) -> DriveFile:
        """
        Fetch the metadata shown in an embed for one file.

        Raises:
            DriveFileNotFoundError: If Drive answers 404.
            DriveClientError: On any other failure, after retries.
        """
        for attempt in range(1, self.max_retries + 1):
            try:
                with self._lock:
                    resource = (
                        self.service.files()
                        .get(fileId=file_id, fields=API_FIELDS, supportsAllDrives=True)
                        .execute()
                    )
                return DriveFile.from_api(resource)
            except HttpError as e:
                status = _status_of(e)
                if status == 404:
                    raise DriveFileNotFoundError(f"File {file_id} not found") from e
                if not _is_retryable(status) or attempt == self.max_retries:
                    raise DriveClientError(
                        f"Failed to get file {file_id}: HTTP {status}"
                    ) from e
                logger.warning(
                    f"Retry {attempt}/{self.max_retries} for file {file_id} after HTTP {status}"
                )
                time.sleep(self.retry_delay * attempt)
            except _TRANSPORT_ERRORS as e:
                if attempt == self.max_retries:
                    raise DriveClientError(f"Failed to get file {file_id}: {e!r}") from e
                logger.warning(
                    f"Retry {attempt}/{self.max_retries} for file {file_id} after {e!r}"
                )
                time.sleep(self.retry_delay * attempt)
            except (KeyError, ValueError) as e:
                raise DriveClientError(f"Unexpected metadata for file {file_id}: {e}") from e

        raise DriveClientError(f"Failed to get file {file_id}")

    def get_files(self, file_ids: Iterable[str]) -> list[DriveFile]:
        """
        Fetch several files in order, skipping those that cannot be fetched.

        Returns:
            The files that were fetched successfully.
        """
        files = []
        for file_id in file_ids:
            try:
                files.append(self.get_file(file_id))
            except DriveFileNotFoundError:
                logger.warning(f"Drive file {file_id} not found or not shared with the bot")
            except DriveClientError as e:
                logger.warning(f"Skipping Drive file {file_id}: {e}")
        return files
