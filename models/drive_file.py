"""
models/drive_file.py
--------------------
Domain model for a file fetched from the Google Drive API.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as date_parser

from models.file_type import FileType

# fields requested from files.get, see DriveFile.from_api
API_FIELDS = "id, name, webViewLink, mimeType, modifiedTime"


@dataclass(frozen=True)
class DriveFile:
    """
    A Drive file as shown in an embed.

    Attributes:
        id: Drive file ID.
        name: File name as shown in Drive.
        web_view_link: Link that opens the file in the browser.
        mime_type: MIME type reported by Drive.
        modified_time: Last modification time (timezone aware).
    """
    id: str
    name: str
    web_view_link: str
    mime_type: str
    modified_time: Optional[datetime] = None

    @property
    def file_type(self) -> FileType:
        return FileType.from_mime_type(self.mime_type)

    @classmethod
    def from_api(cls, resource: dict[str, Any]) -> "DriveFile":
        """
        Build a DriveFile from a Drive v3 file resource.

        Raises:
            KeyError: If ``id`` or ``name`` is missing.
        """
        modified = resource.get("modifiedTime")
        modified_time = date_parser.isoparse(modified) if modified else None
        if modified_time is not None and modified_time.tzinfo is None:
            modified_time = modified_time.replace(tzinfo=timezone.utc)
        return cls(
            id=resource["id"],
            name=resource["name"],
            web_view_link=resource.get("webViewLink", ""),
            mime_type=resource.get("mimeType", ""),
            modified_time=modified_time,
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.file_type.name}) {self.web_view_link}"
