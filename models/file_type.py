"""
models/file_type.py
-------------------
Google Workspace file types and the embed colour used for each.
See https://developers.google.com/drive/api/guides/mime-types
"""

from enum import Enum
from typing import Optional

_GOOGLE_APPS_PREFIX = "application/vnd.google-apps."


class FileType(Enum):
    """Kind of Drive file, keyed by its Google Apps MIME type."""

    DOCS = ("document", 0x4285F4)
    SHEETS = ("spreadsheet", 0x0F9D58)
    SLIDES = ("presentation", 0xF4B400)
    FORMS = ("form", 0x7627BB)
    OTHER = (None, 0xE3E5E8)

    def __init__(self, subtype: Optional[str], color: int):
        self.mime_type: Optional[str] = _GOOGLE_APPS_PREFIX + subtype if subtype else None
        self.color = color

    @classmethod
    def from_mime_type(cls, mime_type: Optional[str]) -> "FileType":
        """Return the type with this MIME type, or OTHER."""
        for member in cls:
            if member.mime_type is not None and member.mime_type == mime_type:
                return member
        return cls.OTHER
