from __future__ import annotations

import sys
from pathlib import Path
from types import SimpleNamespace

import discord
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

BOT_ID = 1000
USER_ID = 2000
GUILD_ID = 3000


def not_found() -> discord.NotFound:
    response = SimpleNamespace(status=404, reason="Not Found")
    return discord.NotFound(response, {"code": 10008, "message": "Unknown Message"})


class FakeMessage:
    def __init__(self, id, channel, author_id=USER_ID, content="", embeds=None, guild_id=GUILD_ID):
        self.id = id
        self.channel = channel
        self.author = SimpleNamespace(id=author_id)
        self.content = content
        self.embeds = list(embeds or [])
        self.guild = SimpleNamespace(id=guild_id, name="guild") if guild_id else None
        self.edits: list[dict] = []
        self.deleted = False

    async def edit(self, **kwargs):
        self.edits.append(kwargs)
        if "embeds" in kwargs:
            self.embeds = kwargs["embeds"]
        if kwargs.get("suppress"):
            self.embeds = []
        return self

    async def delete(self):
        self.deleted = True
        self.channel.messages.pop(self.id, None)


class FakeChannel:
    """In-memory stand-in for a Discord text channel."""

    def __init__(self):
        self.messages: dict[int, FakeMessage] = {}
        self.sent: list[FakeMessage] = []
        self.typing_count = 0
        self.history_calls: list[dict] = []
        # message id -> list of embeds lists returned by successive fetches
        self.fetch_results: dict[int, list] = {}
        self._next_id = 900_000

    def add(self, message: FakeMessage) -> FakeMessage:
        self.messages[message.id] = message
        return message

    async def typing(self):
        self.typing_count += 1

    async def send(self, embeds=None, **kwargs):
        self._next_id += 1
        message = FakeMessage(self._next_id, self, author_id=BOT_ID, embeds=embeds)
        self.sent.append(message)
        return self.add(message)

    async def fetch_message(self, message_id):
        if message_id not in self.messages:
            raise not_found()
        message = self.messages[message_id]
        pending = self.fetch_results.get(message_id)
        if pending:
            message.embeds = pending.pop(0)
        return message

    async def history(self, limit=100, after=None, oldest_first=False):
        self.history_calls.append({"limit": limit, "after": after.id if after else None})
        ids = sorted(m for m in self.messages if after is None or m > after.id)
        if not oldest_first:
            ids.reverse()
        for message_id in ids[:limit]:
            yield self.messages[message_id]


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def bot_client():
    return SimpleNamespace(user=SimpleNamespace(id=BOT_ID))
