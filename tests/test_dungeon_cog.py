from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from discord_dungeon.cogs.dungeon import Dungeon


def _message(channel, content="hello", author_id=101, message_id=55):
    message = MagicMock()
    message.channel = channel
    message.content = content
    message.author = MagicMock(id=author_id)
    message.id = message_id
    return message


def test_channel_message():
    channel = MagicMock(spec=discord.TextChannel)
    channel.id = 10
    event = Dungeon.event_from_message(_message(channel))

    assert event.channel_id == "10"
    assert event.author_id == "101"
    assert event.event_timestamp == "55"
    assert event.thread_timestamp is None
    assert event.direct is False


def test_thread_message():
    thread = MagicMock(spec=discord.Thread)
    thread.id = 1000
    event = Dungeon.event_from_message(_message(thread))

    assert event.channel_id == "1000"
    assert event.thread_timestamp == "1000"
    assert event.in_thread


def test_direct_message():
    dm = MagicMock(spec=discord.DMChannel)
    dm.id = 20
    event = Dungeon.event_from_message(_message(dm, content=None))

    assert event.direct is True
    assert event.text == ""


@pytest.mark.asyncio
async def test_system_messages_are_skipped():
    cog = Dungeon(MagicMock())
    cog.dungeon_master = MagicMock(handle_event=AsyncMock())
    message = _message(MagicMock(spec=discord.TextChannel))
    message.is_system.return_value = True

    await cog.on_message(message)

    cog.dungeon_master.handle_event.assert_not_awaited()


@pytest.mark.asyncio
async def test_messages_are_handed_to_the_dungeon_master():
    cog = Dungeon(MagicMock())
    cog.dungeon_master = MagicMock(handle_event=AsyncMock())
    channel = MagicMock(spec=discord.TextChannel)
    channel.id = 10
    message = _message(channel)
    message.is_system.return_value = False

    await cog.on_message(message)

    event = cog.dungeon_master.handle_event.await_args.args[0]
    assert event.text == "hello"
