from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from discord_dungeon.classes.notifier import DiscordNotifier, split_message
from discord_dungeon.exceptions import TransportError


def _http_error(cls=discord.HTTPException, status=500):
    return cls(MagicMock(status=status, reason="error"), "boom")


# ── split_message ──────────────────────────────────────────


def test_short_messages_are_untouched():
    assert split_message("hello") == ["hello"]
    assert split_message("") == [""]


def test_split_on_line_boundaries():
    text = "\n".join(["a" * 6, "b" * 6, "c" * 6])
    assert split_message(text, max_chars=14) == ["a" * 6 + "\n" + "b" * 6, "c" * 6]


def test_overlong_lines_are_sliced():
    chunks = split_message("x" * 25, max_chars=10)
    assert chunks == ["x" * 10, "x" * 10, "x" * 5]


def test_no_chunk_exceeds_the_limit():
    text = "\n".join("line %d " % i * 7 for i in range(300))
    chunks = split_message(text, max_chars=2000)
    assert len(chunks) > 1
    assert all(0 < len(chunk) <= 2000 for chunk in chunks)


# ── DiscordNotifier ────────────────────────────────────────


def _bot(channels=None):
    channels = channels or {}
    bot = MagicMock()
    bot.get_channel.side_effect = lambda channel_id: channels.get(channel_id)
    bot.fetch_channel = AsyncMock(side_effect=_http_error(discord.NotFound, 404))
    return bot


@pytest.mark.asyncio
async def test_send_to_channel():
    channel = MagicMock(send=AsyncMock())
    await DiscordNotifier(_bot({10: channel})).send("10", "hello")
    channel.send.assert_awaited_once_with("hello")


@pytest.mark.asyncio
async def test_send_into_existing_thread():
    thread = MagicMock(send=AsyncMock())
    await DiscordNotifier(_bot({1000: thread})).send("10", "hello", "1000")
    thread.send.assert_awaited_once_with("hello")


@pytest.mark.asyncio
async def test_send_opens_thread_on_the_starting_message():
    thread = MagicMock(send=AsyncMock())
    message = MagicMock(clean_content="@dungeon You wake up.")
    message.create_thread = AsyncMock(return_value=thread)
    channel = MagicMock(send=AsyncMock())
    channel.fetch_message = AsyncMock(return_value=message)

    await DiscordNotifier(_bot({10: channel})).send("10", "_groggily wakes up..._", "1000")

    channel.fetch_message.assert_awaited_once_with(1000)
    message.create_thread.assert_awaited_once_with(name="@dungeon You wake up.")
    thread.send.assert_awaited_once_with("_groggily wakes up..._")
    channel.send.assert_not_awaited()


@pytest.mark.asyncio
async def test_long_replies_are_split():
    channel = MagicMock(send=AsyncMock())
    await DiscordNotifier(_bot({10: channel})).send("10", "word\n" * 1000)
    assert channel.send.await_count > 1


@pytest.mark.asyncio
async def test_send_failures_become_transport_errors():
    channel = MagicMock(send=AsyncMock(side_effect=_http_error()))
    with pytest.raises(TransportError):
        await DiscordNotifier(_bot({10: channel})).send("10", "hello")


@pytest.mark.asyncio
async def test_react_to_message():
    message = MagicMock(add_reaction=AsyncMock())
    channel = MagicMock(fetch_message=AsyncMock(return_value=message))
    await DiscordNotifier(_bot({10: channel})).react("👋", "10", "55")
    channel.fetch_message.assert_awaited_once_with(55)
    message.add_reaction.assert_awaited_once_with("👋")


@pytest.mark.asyncio
async def test_indicate_typing():
    channel = MagicMock(typing=AsyncMock())
    await DiscordNotifier(_bot({10: channel})).indicate_typing("10")
    channel.typing.assert_awaited_once()


@pytest.mark.asyncio
async def test_unknown_channel_is_a_transport_error():
    with pytest.raises(TransportError):
        await DiscordNotifier(_bot()).indicate_typing("10")
