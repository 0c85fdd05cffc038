"""Turns one chat event into exactly one intent.

Rules are tried in a fixed order and the first match wins:

    Help, Mention, DirectMessage, StartJourney, ReceiveMoney, Input

Anything else is ``Unrecognized``. Help, Mention and DirectMessage are
checked first so the longer "mention + text" shapes never shadow them.
StartJourney and Input share a shape and are told apart only by whether the
event sits inside a thread. ReceiveMoney is tried before Input, which is
the catch-all for threaded replies addressed to the bot.

Examples of journeys this accepts:

    <@BOT> You are a lone traveler searching for a wizard in the middle of
    a gigantic forest.

    <@BOT> (with <@U1> and <@U2>) You are a hacker in the year 2999 in the
    future-city of Neosporia.
"""
import logging, re
from typing import Callable, List, Optional

from discord_dungeon.classes.identity import MENTION_PATTERN, mention_ids
from discord_dungeon.classes.intents import (
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

logger = logging.getLogger(__name__)

_START_JOURNEY_REGEX = re.compile(
    r"^" + MENTION_PATTERN + r" (?:\((?P<companions>[^)]*)\) )?(?P<prompt>.*)$",
    re.DOTALL,
)
_RECEIVE_MONEY_REGEX = re.compile(
    r'^I shall transfer (?P<amount>[0-9,]+)gp to ' + MENTION_PATTERN
    + r' immediately(?: for "(?P<reason>.*)")?.*$',
    re.DOTALL,
)
_GP_AMOUNT_REGEX = re.compile(r"^(?:\d+|\d{1,3}(?:,\d{3})+)$")
_INPUT_REGEX = re.compile(r"^" + MENTION_PATTERN + r" (?P<text>.+)$", re.DOTALL)


def parse_gp_amount(raw: str) -> Optional[int]:
    """``"1,500"`` -> 1500. Returns None for anything that is not a plain or comma-grouped integer."""
    if not _GP_AMOUNT_REGEX.match(raw or ""):
        return None
    return int(raw.replace(",", ""))


class IntentClassifier:
    def __init__(self, self_id: str, banker_id: str):
        if not self_id:
            raise ValueError("The classifier needs the bot's own user id.")
        self.self_id = str(self_id)
        self.banker_id = str(banker_id) if banker_id else None
        self.rules: List[Callable[[ChatEvent], Optional[Intent]]] = [
            self.parse_help,
            self.parse_mention,
            self.parse_direct_message,
            self.parse_start_journey,
            self.parse_receive_money,
            self.parse_input,
        ]

    def _self_mentions(self):
        return (f"<@{self.self_id}>", f"<@!{self.self_id}>")

    def classify(self, event: ChatEvent) -> Intent:
        for rule in self.rules:
            intent = rule(event)
            if intent is not None:
                logger.debug(f"Event {event.event_timestamp} classified as {type(intent).__name__}")
                return intent
        logger.debug(f"Event {event.event_timestamp} did not match any rule: {event.text!r}")
        return Unrecognized(event=event)

    def parse_help(self, event: ChatEvent) -> Optional[Help]:
        text = (event.text or "").strip()
        if text in tuple(mention + " help" for mention in self._self_mentions()):
            return Help(event=event)
        return None

    def parse_mention(self, event: ChatEvent) -> Optional[Mention]:
        if (event.text or "").strip() in self._self_mentions():
            return Mention(event=event)
        return None

    def parse_direct_message(self, event: ChatEvent) -> Optional[DirectMessage]:
        if event.direct:
            return DirectMessage(event=event, author_id=event.author_id, text=event.text)
        return None

    def parse_start_journey(self, event: ChatEvent) -> Optional[StartJourney]:
        if event.in_thread:
            return None
        match = _START_JOURNEY_REGEX.match(event.text or "")
        if match is None:
            return None
        if match.group(1) != self.self_id:
            return None
        prompt = match.group("prompt").strip()
        if not prompt:
            return None
        return StartJourney(
            event=event,
            author_id=event.author_id,
            companion_ids=tuple(mention_ids(match.group("companions") or "")),
            prompt=prompt,
        )

    def parse_receive_money(self, event: ChatEvent) -> Optional[ReceiveMoney]:
        if not event.in_thread:
            return None
        match = _RECEIVE_MONEY_REGEX.match(event.text or "")
        if match is None:
            return None
        amount = parse_gp_amount(match.group("amount"))
        if amount is None:
            return None
        recipient_id = match.group(2)
        # Only the banker can move money, and only money sent to us counts.
        if self.banker_id is None or event.author_id != self.banker_id:
            return None
        if recipient_id != self.self_id:
            return None
        return ReceiveMoney(
            event=event,
            author_id=event.author_id,
            recipient_id=recipient_id,
            amount_gp=amount,
            reason=match.group("reason"),
        )

    def parse_input(self, event: ChatEvent) -> Optional[Input]:
        if not event.in_thread:
            return None
        match = _INPUT_REGEX.match(event.text or "")
        if match is None or match.group(1) != self.self_id:
            return None
        text = match.group("text").strip()
        if not text:
            return None
        return Input(event=event, author_id=event.author_id, text=text)
