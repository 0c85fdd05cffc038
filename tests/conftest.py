import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from flask import Flask

from discord_dungeon.classes.app_config import AppConfig
from discord_dungeon.classes.database_handler import DatabaseHandler
from discord_dungeon.classes.dungeon_master import DungeonMaster
from discord_dungeon.classes.identity import Identity
from discord_dungeon.classes.intent_classifier import IntentClassifier
from discord_dungeon.classes.intents import ChatEvent
from discord_dungeon.classes.session_repository import SessionRepository
from discord_dungeon.models.base import db

BOT_ID = "900"
BANKER_ID = "500"
PLAY_CHANNEL_ID = "777"
CREATOR_ID = "101"
COMPANION_ID = "102"
STRANGER_ID = "103"


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({
        "dungeon": {
            "self_id": BOT_ID,
            "banker_id": BANKER_ID,
            "play_channel_id": PLAY_CHANNEL_ID,
            "cost_gp": 5,
        },
        "database": {"uri": "sqlite:///:memory:"},
        "narrative_engine": {
            "base_url": "https://engine.test/",
            "email": "dm@example.com",
            "password": "hunter2",
            "timeout": 5,
        },
    }))
    return path


@pytest.fixture
def config(config_file):
    return AppConfig(str(config_file))


@pytest.fixture
def database(config):
    handler = DatabaseHandler(config, Flask("discord_dungeon_tests"))
    handler.create_tables()
    yield handler
    with handler.app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def repository(database):
    return SessionRepository(database.app)


@pytest.fixture
def classifier():
    return IntentClassifier(self_id=BOT_ID, banker_id=BANKER_ID)


class FakeResolver:
    """Resolves every id to a predictable display name."""

    def __init__(self, unknown_ids=()):
        self.unknown_ids = set(unknown_ids)
        self.resolve = AsyncMock(side_effect=self._resolve)

    async def _resolve(self, user_id):
        from discord_dungeon.exceptions import TransportError
        if user_id in self.unknown_ids:
            raise TransportError(f"unknown user {user_id}")
        return Identity(id=user_id, display_name=f"user-{user_id}")

    async def resolve_many(self, user_ids):
        return [await self.resolve(user_id) for user_id in user_ids]


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def notifier():
    return AsyncMock()


@pytest.fixture
def engine():
    engine = MagicMock()
    engine.create_playthrough = AsyncMock(return_value=("42", "You stand at the edge of a forest."))
    engine.submit_turn = AsyncMock(return_value="The wizard turns to face you.")
    return engine


@pytest.fixture
def make_master(classifier, engine, notifier, resolver):
    def _make(repository):
        return DungeonMaster(
            classifier=classifier,
            repository=repository,
            engine=engine,
            notifier=notifier,
            resolver=resolver,
            cost_gp=5,
            banker_id=BANKER_ID,
            play_channel_id=PLAY_CHANNEL_ID,
        )
    return _make


def make_event(text, author_id=CREATOR_ID, thread=None, event_ts="1000", channel_id="10", direct=False):
    return ChatEvent(
        channel_id=channel_id,
        author_id=author_id,
        text=text,
        event_timestamp=event_ts,
        thread_timestamp=thread,
        direct=direct,
    )


def sent_texts(notifier):
    return [c.args[1] for c in notifier.send.await_args_list]
