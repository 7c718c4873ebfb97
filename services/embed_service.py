"""
services/embed_service.py
-------------------------
Builds the Discord embeds shown for Drive files and reads them back.

The ID of the source message is hidden in the first embed title with
zero-width characters, so the embeds message can later be matched to the
message that triggered it without storing anything.
"""

from typing import Iterable, Optional, Sequence

import discord

from models.drive_file import DriveFile
from utils import zero_width
from utils.links import extract_file_id

# Discord API limits
MAX_EMBEDS_PER_MESSAGE = 10
MAX_TITLE_LENGTH = 256
_ELLIPSIS = "…"


def _fit_title(name: str, room: int) -> str:
    if len(name) <= room:
        return name
    return name[: max(room - 1, 0)] + _ELLIPSIS


def build_embeds(source_message_id: int | str, files: Sequence[DriveFile]) -> list[discord.Embed]:
    """
    Create one embed per Drive file.

    Args:
        source_message_id: ID of the message containing the links.
        files: Files to show, in link order. Only the first
            MAX_EMBEDS_PER_MESSAGE are used.

    Returns:
        Embeds ready to send; the first title carries the hidden source ID.
    """
    hidden = zero_width.MARKER + zero_width.encode(str(source_message_id))
    embeds = []
    for index, file in enumerate(files[:MAX_EMBEDS_PER_MESSAGE]):
        if index == 0:
            title = _fit_title(file.name, MAX_TITLE_LENGTH - len(hidden))
            title = zero_width.append(title, str(source_message_id))
        else:
            title = _fit_title(file.name, MAX_TITLE_LENGTH)
        embeds.append(
            discord.Embed(
                title=title,
                url=file.web_view_link or None,
                colour=discord.Colour(file.file_type.color),
                timestamp=file.modified_time,
            )
        )
    return embeds


def source_message_id_of(message: discord.Message) -> Optional[str]:
    """Hidden source message ID of an embeds message, if it has one."""
    if not message.embeds:
        return None
    title = message.embeds[0].title
    if not title:
        return None
    return zero_width.decode_appended(title)


def embed_file_ids(embeds: Iterable[discord.Embed]) -> list[str]:
    """Drive file IDs of all embeds that link to Google Drive."""
    ids = []
    for embed in embeds:
        if embed.url:
            file_id = extract_file_id(embed.url)
            if file_id:
                ids.append(file_id)
    return ids
