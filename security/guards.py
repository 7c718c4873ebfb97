"""
security/guards.py
------------------
Access guard for message handlers.
Only guild messages are processed, optionally from whitelisted guilds only.
"""

from functools import wraps
from typing import Callable

import discord

from config import ALLOWED_GUILD_IDS
from utils.logger import get_logger

logger = get_logger(__name__)


def guild_only(func: Callable):
    """
    Decorator that restricts a message handler to allowed guilds.

    Usage:
        @guild_only
        async def my_handler(message, service):
            ...

    Behavior:
        - Direct messages are ignored.
        - If ALLOWED_GUILD_IDS is empty, ALL guilds are allowed.
        - If the list is set, messages from other guilds are dropped and logged.
    """
    @wraps(func)
    async def wrapper(message: discord.Message, *args, **kwargs):
        guild = message.guild
        if guild is None:
            return

        if ALLOWED_GUILD_IDS and guild.id not in ALLOWED_GUILD_IDS:
            logger.warning(
                f"🚫 Ignoring message from non-whitelisted guild: guild_id={guild.id}, "
                f"name={guild.name}"
            )
            return

        return await func(message, *args, **kwargs)

    return wrapper
