import logging
from typing import List

import discord

from discord_dungeon.exceptions import TransportError

logger = logging.getLogger(__name__)


def split_message(text: str, max_chars: int = 2000) -> List[str]:
    """Break *text* on line boundaries into chunks Discord will accept."""
    if len(text) <= max_chars:
        return [text]
    chunks = []
    buffer = ""
    for line in text.split("\n"):
        while len(line) > max_chars:
            if buffer:
                chunks.append(buffer.rstrip("\n"))
                buffer = ""
            chunks.append(line[:max_chars])
            line = line[max_chars:]
        if buffer and len(buffer) + len(line) > max_chars:
            chunks.append(buffer.rstrip("\n"))
            buffer = ""
        buffer += line + "\n"
    if buffer.strip():
        chunks.append(buffer.rstrip("\n"))
    return chunks


class DiscordNotifier:
    """Sends replies, typing indicators and reactions through a discord.py client.

    A reply anchored to a thread timestamp goes into the thread with that id.
    Threads started from a message share the message's id, so the first reply
    to a new journey opens the thread on the message that started it.
    """
    MAX_MESSAGE_CHARS = 2000
    MAX_THREAD_NAME_CHARS = 100

    def __init__(self, bot):
        self.bot = bot

    async def _get_channel(self, channel_id):
        channel = self.bot.get_channel(int(channel_id))
        if channel is None:
            channel = await self.bot.fetch_channel(int(channel_id))
        return channel

    def _thread_name(self, content: str) -> str:
        name = " ".join((content or "").split())
        if not name:
            name = "A new journey"
        return name[: self.MAX_THREAD_NAME_CHARS]

    async def _get_thread(self, channel_id, thread_timestamp):
        thread = self.bot.get_channel(int(thread_timestamp))
        if thread is not None:
            return thread
        try:
            return await self.bot.fetch_channel(int(thread_timestamp))
        except discord.NotFound:
            pass
        channel = await self._get_channel(channel_id)
        message = await channel.fetch_message(int(thread_timestamp))
        logger.debug(f"Opening a thread on message {thread_timestamp} in channel {channel_id}")
        return await message.create_thread(name=self._thread_name(message.clean_content))

    async def send(self, channel_id, text: str, thread_timestamp=None):
        try:
            if thread_timestamp:
                target = await self._get_thread(channel_id, thread_timestamp)
            else:
                target = await self._get_channel(channel_id)
            for chunk in split_message(text, self.MAX_MESSAGE_CHARS):
                await target.send(chunk)
        except (discord.HTTPException, ValueError) as e:
            raise TransportError(f"Could not send to channel {channel_id} (thread {thread_timestamp}): {e}") from e

    async def indicate_typing(self, channel_id):
        try:
            channel = await self._get_channel(channel_id)
            await channel.typing()
        except (discord.HTTPException, ValueError) as e:
            raise TransportError(f"Could not show typing in channel {channel_id}: {e}") from e

    async def react(self, symbol: str, channel_id, event_timestamp):
        try:
            channel = await self._get_channel(channel_id)
            message = await channel.fetch_message(int(event_timestamp))
            await message.add_reaction(symbol)
        except (discord.HTTPException, ValueError) as e:
            raise TransportError(f"Could not react to message {event_timestamp}: {e}") from e
