"""
security/rate_limiter.py
-------------------------
Rate limiting middleware to protect the Drive API quota.
Limits the number of messages per author the bot processes within a time window.
"""

import time
from collections import defaultdict
from functools import wraps
from typing import Callable

import discord

from config import RATE_LIMIT_MESSAGES, RATE_LIMIT_WINDOW_SECONDS
from utils.logger import get_logger

logger = get_logger(__name__)

# In-memory storage for rate tracking: {author_id: [timestamp1, timestamp2, ...]}
_user_timestamps: dict[int, list[float]] = defaultdict(list)


def _cleanup(user_id: int) -> None:
    """Remove expired timestamps for a user and forget idle authors."""
    cutoff = time.time() - RATE_LIMIT_WINDOW_SECONDS
    idle = [uid for uid, stamps in _user_timestamps.items() if not stamps or stamps[-1] <= cutoff]
    for uid in idle:
        del _user_timestamps[uid]
    if user_id in _user_timestamps:
        _user_timestamps[user_id] = [
            t for t in _user_timestamps[user_id] if t > cutoff
        ]


def rate_limited(func: Callable):
    """
    Decorator that enforces rate limiting per message author.

    Configuration (via .env):
        RATE_LIMIT_MESSAGES: Max processed messages per window (default: 20).
        RATE_LIMIT_WINDOW_SECONDS: Window duration in seconds (default: 60).

    Behavior:
        - Tracks processed message timestamps per author.
        - If exceeded, the message is skipped and a warning is logged.
          Nothing is posted to the channel.
    """
    @wraps(func)
    async def wrapper(message: discord.Message, *args, **kwargs):
        user_id = message.author.id
        _cleanup(user_id)

        if len(_user_timestamps[user_id]) >= RATE_LIMIT_MESSAGES:
            logger.warning(f"⚠️ Rate limit hit for user {user_id}, skipping message {message.id}")
            return

        _user_timestamps[user_id].append(time.time())
        return await func(message, *args, **kwargs)

    return wrapper
