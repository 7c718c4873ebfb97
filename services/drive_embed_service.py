"""
services/drive_embed_service.py
-------------------------------
Business logic for replacing Drive link previews with rich embeds.

Workflow for a message with Drive links:
    1. Extract the Drive file IDs from the message content.
    2. Find the embeds message we already sent for it (edits only).
    3. Fetch the files from Drive and send or edit the embeds message.
    4. Suppress Discord's own previews when they only repeat our links.
"""

import asyncio
from typing import Iterable, Optional

import discord

from drive.client import DriveClient
from services.embed_service import build_embeds, embed_file_ids, source_message_id_of
from utils.links import extract_file_ids
from utils.logger import get_logger

logger = get_logger(__name__)


class DriveEmbedService:
    """
    Keeps a bot embeds message in sync with each message linking Drive files.

    Nothing is stored: the embeds message is found again by scanning the
    few messages after the source message for our hidden source ID.
    """

    def __init__(
        self,
        client: discord.Client,
        drive_client: DriveClient,
        history_size: int = 5,
        max_retries: int = 3,
        retry_delay: float = 3.0,
    ):
        self.client = client
        self.drive_client = drive_client
        self.history_size = history_size
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    def is_self(self, author: discord.abc.User) -> bool:
        """True if ``author`` is this bot."""
        return self.client.user is not None and author.id == self.client.user.id

    async def handle_message(self, message: discord.Message) -> None:
        """Post embeds for a newly created message."""
        await self._replace_embeds(message, is_new=True)

    async def handle_edit(self, message: discord.Message) -> None:
        """Refresh the embeds of an edited message."""
        await self._replace_embeds(message, is_new=False)

    async def handle_delete(self, channel: discord.abc.Messageable, message_id: int) -> None:
        """Delete our embeds message when its source message is deleted."""
        embeds_message = await self.find_embeds_message(channel, message_id)
        if embeds_message is None:
            return
        try:
            await embeds_message.delete()
            logger.info(f"Deleted embeds message {embeds_message.id} for source {message_id}")
        except discord.NotFound:
            pass

    async def handle_bulk_delete(
        self, channel: discord.abc.Messageable, message_ids: Iterable[int]
    ) -> None:
        for message_id in message_ids:
            await self.handle_delete(channel, message_id)

    async def find_embeds_message(
        self, channel: discord.abc.Messageable, source_message_id: int
    ) -> Optional[discord.Message]:
        """
        Find the embeds message sent for ``source_message_id``.

        Only the ``history_size`` messages following the source are searched.
        """
        source_id = str(source_message_id)
        async for message in channel.history(
            limit=self.history_size,
            after=discord.Object(id=int(source_message_id)),
            oldest_first=True,
        ):
            if self.is_self(message.author) and source_message_id_of(message) == source_id:
                return message
        return None

    async def _replace_embeds(self, source: discord.Message, is_new: bool) -> None:
        channel = source.channel
        file_ids = extract_file_ids(source.content or "")
        if not file_ids:
            return

        embeds_message = None if is_new else await self.find_embeds_message(channel, source.id)

        # typing indicator shows the bot is working; skipped for refreshes
        if embeds_message is None:
            await channel.typing()

        files = await asyncio.to_thread(self.drive_client.get_files, file_ids)
        if not files:
            logger.info(f"No Drive files could be fetched for message {source.id}")
            return

        embeds = build_embeds(source.id, files)
        if embeds_message is None:
            await channel.send(embeds=embeds)
            logger.info(f"Sent {len(embeds)} embed(s) for message {source.id}")
        else:
            await embeds_message.edit(embeds=embeds)
            logger.info(f"Updated {len(embeds)} embed(s) for message {source.id}")

        await self._suppress_duplicate_previews(source, file_ids)

    async def _suppress_duplicate_previews(
        self, source: discord.Message, file_ids: list[str]
    ) -> None:
        """
        Hide Discord's link previews on ``source`` if they only show our files.

        Discord may add the previews some time after the message is sent,
        so the message is fetched again a few times until it has embeds.
        """
        updated = source
        for attempt in range(self.max_retries):
            if not updated.embeds:
                if attempt != 0:
                    await asyncio.sleep(self.retry_delay)
                try:
                    updated = await source.channel.fetch_message(source.id)
                except discord.NotFound:
                    # source deleted meanwhile
                    return
                continue

            previews = updated.embeds
            preview_ids = embed_file_ids(previews)
            if len(previews) == len(preview_ids) and set(preview_ids) <= set(file_ids):
                try:
                    await source.edit(suppress=True)
                    logger.info(f"Suppressed link previews of message {source.id}")
                except discord.NotFound:
                    pass
            return
