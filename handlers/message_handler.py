"""
handlers/message_handler.py
---------------------------
Handles message create, edit and delete events from the Discord gateway.
Delegates all logic to DriveEmbedService.

Raw events are used for edits and deletes so that messages missing from
the client cache (e.g. sent before the bot started) are handled too.
"""

from functools import wraps
from typing import Callable, Optional

import discord

from security.guards import guild_only
from security.rate_limiter import rate_limited
from services.drive_embed_service import DriveEmbedService
from utils.links import extract_file_ids
from utils.logger import get_logger

logger = get_logger(__name__)


def drive_links_only(func: Callable):
    """Decorator that skips messages without Google Drive links."""
    @wraps(func)
    async def wrapper(message: discord.Message, *args, **kwargs):
        if not extract_file_ids(message.content or ""):
            return
        return await func(message, *args, **kwargs)

    return wrapper


@guild_only
@drive_links_only
@rate_limited
async def process_new_message(message: discord.Message, service: DriveEmbedService) -> None:
    """Post Drive embeds for a new message."""
    await service.handle_message(message)


@guild_only
@drive_links_only
@rate_limited
async def process_edited_message(message: discord.Message, service: DriveEmbedService) -> None:
    """Refresh Drive embeds for an edited message."""
    await service.handle_edit(message)


def is_content_edit(payload: discord.RawMessageUpdateEvent) -> bool:
    """
    True if an update event may have changed the message text.

    Discord also sends updates when it attaches link previews or when
    embeds get suppressed; those must not trigger another refresh.
    """
    data = payload.data
    if "content" not in data or data.get("edited_timestamp") is None:
        return False
    cached = payload.cached_message
    return cached is None or cached.content != data["content"]


async def _resolve_channel(client: discord.Client, channel_id: int) -> Optional[discord.abc.Messageable]:
    channel = client.get_channel(channel_id)
    if channel is not None:
        return channel
    try:
        return await client.fetch_channel(channel_id)
    except (discord.NotFound, discord.Forbidden):
        logger.warning(f"Cannot access channel {channel_id}")
        return None


def register_handlers(client: discord.Client, service: DriveEmbedService) -> None:
    """Attach the gateway event handlers to ``client``."""

    @client.event
    async def on_ready() -> None:
        logger.info(f"Logged in as {client.user} in {len(client.guilds)} guild(s).")

    @client.event
    async def on_message(message: discord.Message) -> None:
        if service.is_self(message.author):
            return
        try:
            await process_new_message(message, service)
        except Exception:
            logger.exception(f"Failed to handle new message {message.id}")

    @client.event
    async def on_raw_message_edit(payload: discord.RawMessageUpdateEvent) -> None:
        if payload.guild_id is None or not is_content_edit(payload):
            return
        try:
            channel = await _resolve_channel(client, payload.channel_id)
            if channel is None:
                return
            try:
                message = await channel.fetch_message(payload.message_id)
            except discord.NotFound:
                return
            if service.is_self(message.author):
                return
            await process_edited_message(message, service)
        except Exception:
            logger.exception(f"Failed to handle edit of message {payload.message_id}")

    @client.event
    async def on_raw_message_delete(payload: discord.RawMessageDeleteEvent) -> None:
        if payload.guild_id is None:
            return
        cached = payload.cached_message
        if cached is not None and service.is_self(cached.author):
            return
        try:
            channel = await _resolve_channel(client, payload.channel_id)
            if channel is not None:
                await service.handle_delete(channel, payload.message_id)
        except Exception:
            logger.exception(f"Failed to handle deletion of message {payload.message_id}")

    @client.event
    async def on_raw_bulk_message_delete(payload: discord.RawBulkMessageDeleteEvent) -> None:
        if payload.guild_id is None:
            return
        try:
            channel = await _resolve_channel(client, payload.channel_id)
            if channel is not None:
                await service.handle_bulk_delete(channel, sorted(payload.message_ids))
        except Exception:
            logger.exception(f"Failed to handle bulk deletion in channel {payload.channel_id}")
