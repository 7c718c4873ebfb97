"""
Google Drive integration package.

Handles OAuth2 authentication and read-only access to file metadata.
"""

from .auth import DriveAuthError, build_drive_service, load_credentials
from .client import DriveClient, DriveClientError, DriveFileNotFoundError

__all__ = [
    "DriveAuthError",
    "DriveClient",
    "DriveClientError",
    "DriveFileNotFoundError",
    "build_drive_service",
    "load_credentials",
]
