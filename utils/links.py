"""
utils/links.py
--------------
Finds URLs in message text and extracts Google Drive file IDs from them.
"""

import re
from typing import Optional
from urllib.parse import unquote, urlsplit

DRIVE_HOSTS = frozenset({"drive.google.com", "docs.google.com"})
# path segments that precede a file or folder id, e.g. /file/d/<id>/view
_ID_PREFIX_SEGMENTS = frozenset({"d", "folders"})

_URL_PATTERN = re.compile(r"https?://[^\s<>\"'`|]+", re.IGNORECASE)
_FILE_ID_PATTERN = re.compile(r"[-\w]+", re.ASCII)
_TRAILING_PUNCTUATION = ".,:;!?*~"
_BRACKETS = {")": "(", "]": "[", "}": "{"}


def _trim(url: str) -> str:
    """Strip sentence punctuation and unbalanced closing brackets."""
    while url:
        last = url[-1]
        if last in _TRAILING_PUNCTUATION:
            url = url[:-1]
        elif last in _BRACKETS and url.count(last) > url.count(_BRACKETS[last]):
            url = url[:-1]
        else:
            break
    return url


def extract_urls(text: str) -> list[str]:
    """Return the http(s) URLs found in ``text`` in order of appearance."""
    urls = []
    for match in _URL_PATTERN.finditer(text):
        url = _trim(match.group(0))
        try:
            host = urlsplit(url).hostname
        except ValueError:
            continue
        if host:
            urls.append(url)
    return urls


def extract_file_id(url: str) -> Optional[str]:
    """
    Extract the Drive file or folder ID from a Google Drive/Docs URL.

    Examples:
        https://docs.google.com/document/d/<id>/edit -> <id>
        https://drive.google.com/drive/folders/<id> -> <id>

    Returns:
        The ID, or None if the URL is not a Drive link.
    """
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except ValueError:
        return None
    if parts.scheme.lower() not in ("http", "https") or host not in DRIVE_HOSTS:
        return None

    segments = [unquote(segment) for segment in parts.path.split("/")[1:]]
    for index, segment in enumerate(segments):
        if segment in _ID_PREFIX_SEGMENTS:
            for candidate in segments[index + 1:]:
                if _FILE_ID_PATTERN.fullmatch(candidate):
                    return candidate
            return None
    return None


def extract_file_ids(text: str) -> list[str]:
    """Distinct Drive file IDs linked from ``text``, first occurrence first."""
    ids: list[str] = []
    for url in extract_urls(text):
        file_id = extract_file_id(url)
        if file_id and file_id not in ids:
            ids.append(file_id)
    return ids
