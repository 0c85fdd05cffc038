"""Runs a journey from the first prompt through payment and every turn after.

A session starts unpaid when someone mentions the bot with a prompt outside
any thread. The banker's transfer message in that thread activates it: the
narrative engine opens a playthrough, the session is marked paid and the
opening text is posted. From then on every mention in the thread by the
creator or a companion is one turn.

Each handler is a short run of fallible steps. Failures surface as
``TransportError``, ``RepositoryError`` or ``EngineError`` and are turned into
one notice in ``handle_event``; steps that already succeeded stay done.
"""
import asyncio, logging
from typing import Dict, Optional

from discord_dungeon.classes import replies
from discord_dungeon.classes.authorization import is_authorized
from discord_dungeon.classes.intent_classifier import IntentClassifier
from discord_dungeon.classes.intents import (
    INTENT_TYPES,
    ChatEvent,
    DirectMessage,
    Help,
    Input,
    Intent,
    Mention,
    ReceiveMoney,
    StartJourney,
    Unrecognized,
)
from discord_dungeon.classes.payment import PaymentOutcome, reconcile
from discord_dungeon.classes.session_repository import Session, StoryItemKind
from discord_dungeon.exceptions import (
    EngineError,
    RepositoryError,
    SessionNotFound,
    TransportError,
)

logger = logging.getLogger(__name__)


class DungeonMaster:
    def __init__(
        self,
        classifier: IntentClassifier,
        repository,
        engine,
        notifier,
        resolver,
        cost_gp: int = 5,
        banker_id: str = None,
        play_channel_id: str = None,
        bot_name: str = "dungeon",
    ):
        self.classifier = classifier
        self.repository = repository
        self.engine = engine
        self.notifier = notifier
        self.resolver = resolver
        self.cost_gp = cost_gp
        self.banker_id = banker_id
        self.play_channel_id = play_channel_id
        self.bot_name = bot_name
        self._locks: Dict[str, asyncio.Lock] = {}
        self.handlers = {
            StartJourney: self.start_journey,
            ReceiveMoney: self.receive_money,
            Input: self.take_turn,
            DirectMessage: self.explain_direct_messages,
            Mention: self.wave,
            Help: self.help,
            Unrecognized: self.ignore,
        }
        missing = [intent_type.__name__ for intent_type in INTENT_TYPES if intent_type not in self.handlers]
        if missing:
            raise RuntimeError(f"No handler registered for intents: {', '.join(missing)}")

    def _get_lock(self, thread_key: str) -> asyncio.Lock:
        lock = self._locks.get(thread_key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[thread_key] = lock
        return lock

    def should_discard(self, event: ChatEvent) -> bool:
        if not event.author_id:
            return True
        # Never react to our own replies.
        return event.author_id == self.classifier.self_id

    async def handle_event(self, event: ChatEvent) -> Optional[Intent]:
        if self.should_discard(event):
            logger.debug(f"Discarding event {event.event_timestamp} from {event.author_id!r}")
            return None
        intent = self.classifier.classify(event)
        handler = self.handlers[type(intent)]
        intent_name = type(intent).__name__
        try:
            await handler(intent)
        except TransportError as e:
            logger.error(f"Chat platform error while handling {intent_name} {event.event_timestamp}: {e}")
            await self._notify_failure(intent, replies.TRANSPORT_ERROR)
        except RepositoryError as e:
            logger.error(f"Database error while handling {intent_name} {event.event_timestamp}: {e}")
            await self._notify_failure(intent, replies.REPOSITORY_ERROR)
        except EngineError as e:
            logger.error(f"Narrative engine error while handling {intent_name} {event.event_timestamp}: {e}")
            await self._notify_failure(intent, replies.ENGINE_ERROR)
        except Exception:
            logger.exception(f"Unexpected error while handling {intent_name} {event.event_timestamp}")
            await self._notify_failure(intent, replies.GENERIC_ERROR)
        return intent

    async def _notify_failure(self, intent: Intent, text: str):
        try:
            await self.reply(intent, text)
        except Exception:
            logger.exception(f"Could not deliver the failure notice for {intent.event.event_timestamp}")

    async def reply(self, intent: Intent, text: str):
        await self.notifier.send(intent.channel_id, text, intent.thread_key)

    async def _show_typing(self, intent: Intent):
        try:
            await self.notifier.indicate_typing(intent.channel_id)
        except TransportError as e:
            logger.debug(f"Typing indicator failed, carrying on: {e}")

    async def start_journey(self, intent: StartJourney):
        logger.info(f"Starting a journey for {intent.author_id} on {intent.thread_key}")
        creator = await self.resolver.resolve(intent.author_id)
        companions = await self.resolver.resolve_many(intent.companion_ids)
        async with self._get_lock(intent.thread_key):
            try:
                existing = self.repository.get_session_by_thread(intent.thread_key)
            except SessionNotFound:
                existing = None
            if existing is not None:
                logger.warning(f"Thread {intent.thread_key} already has session {existing.record_id}; ignoring repeat delivery.")
                return
            session = self.repository.create_session(
                intent.thread_key,
                creator,
                companions,
                self.cost_gp,
                intent.prompt,
            )
        logger.info(f"Session {session.record_id} created for {creator} with {len(companions)} companion(s)")
        await self.reply(intent, replies.WAKING_UP)
        await self.reply(intent, replies.cost_request(session.cost_gp))

    async def receive_money(self, intent: ReceiveMoney):
        logger.info(f"Received {intent.amount_gp}GP on thread {intent.thread_key}")
        async with self._get_lock(intent.thread_key):
            try:
                session = self.repository.get_session_by_thread(intent.thread_key)
            except SessionNotFound as e:
                logger.info(f"Received money, but there is no journey here: {e}")
                await self.reply(intent, replies.FLATTERED)
                return

            if session.paid:
                logger.info(f"Received money for already paid session {session.record_id}")
                await self.reply(intent, replies.ALREADY_PAID)
                return

            outcome = reconcile(session.cost_gp, intent.amount_gp)
            if not outcome.activates:
                logger.info(f"Session {session.record_id} expected {session.cost_gp}GP but got {intent.amount_gp}GP")
                await self.reply(intent, replies.wrong_amount(session.cost_gp, intent.amount_gp))
                return

            if outcome is PaymentOutcome.OVER:
                logger.info(f"Session {session.record_id} expected {session.cost_gp}GP and got {intent.amount_gp}GP")
                await self.reply(intent, replies.overpaid_ack(intent.amount_gp))
            elif intent.reason and intent.reason.strip():
                await self.reply(intent, replies.reason_ack(intent.reason))
            else:
                await self.reply(intent, replies.STANDARD_ACK)
            await self.reply(intent, replies.ELEVATOR_MUSIC)
            await self._show_typing(intent)
            await self.activate(intent, session)

    async def activate(self, intent: Intent, session: Session) -> Session:
        # A failure before mark_paid_and_activated leaves the session unpaid, so
        # the next transfer retries with a fresh playthrough.
        engine_session_id, first_output = await self.engine.create_playthrough(session.prompt)
        session = self.repository.mark_paid_and_activated(session, engine_session_id)
        logger.info(f"Session {session.record_id} is active as playthrough {engine_session_id}")
        self.repository.append_story_item(session, StoryItemKind.OUTPUT, None, first_output)
        await self.reply(intent, replies.MENTION_REMINDER)
        await self.reply(intent, first_output)
        return session

    async def take_turn(self, intent: Input):
        async with self._get_lock(intent.thread_key):
            try:
                session = self.repository.get_session_by_thread(intent.thread_key)
            except SessionNotFound as e:
                logger.info(f"Input attempted without a journey: {e}")
                await self.reply(intent, replies.NO_JOURNEY)
                return

            author = await self.resolver.resolve(intent.author_id)
            if not is_authorized(session, author):
                logger.info(f"Input attempted by {author} on session {session.record_id}, which is not theirs")
                await self.reply(intent, replies.NOT_YOUR_JOURNEY)
                return

            if not session.paid or not session.engine_session_id:
                await self.reply(intent, replies.awaiting_payment(session.cost_gp))
                return

            self.repository.append_story_item(session, StoryItemKind.INPUT, author, intent.text)
            await self._show_typing(intent)
            output = await self.engine.submit_turn(session.engine_session_id, intent.text)
            self.repository.append_story_item(session, StoryItemKind.OUTPUT, None, output)
            await self.reply(intent, output)

    async def explain_direct_messages(self, intent: DirectMessage):
        text = replies.direct_message_text(self.banker_id, self.play_channel_id, f"@{self.bot_name}")
        await self.notifier.send(intent.channel_id, text)

    async def wave(self, intent: Mention):
        await self.notifier.react(replies.WAVE, intent.channel_id, intent.event.event_timestamp)

    async def help(self, intent: Help):
        await self.reply(intent, replies.help_text(f"@{self.bot_name}"))

    async def ignore(self, intent: Unrecognized):
        logger.debug(f"Ignoring unrecognized message {intent.event.event_timestamp}")
