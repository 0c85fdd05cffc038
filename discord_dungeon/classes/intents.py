from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class ChatEvent:
    channel_id: str
    author_id: str
    text: str
    event_timestamp: str
    thread_timestamp: Optional[str] = None
    # Set by the chat adapter for 1:1 conversations.
    direct: bool = False

    @property
    def in_thread(self) -> bool:
        return bool(self.thread_timestamp)


@dataclass(frozen=True)
class Intent:
    event: ChatEvent

    @property
    def channel_id(self) -> str:
        return self.event.channel_id

    @property
    def thread_key(self) -> Optional[str]:
        """Thread that replies to this intent are anchored to."""
        return self.event.thread_timestamp


@dataclass(frozen=True)
class StartJourney(Intent):
    author_id: str
    companion_ids: Tuple[str, ...]
    prompt: str

    @property
    def thread_key(self) -> str:
        # A new journey opens its thread on the message that started it.
        return self.event.event_timestamp


@dataclass(frozen=True)
class ReceiveMoney(Intent):
    author_id: str
    recipient_id: str
    amount_gp: int
    reason: Optional[str] = None


@dataclass(frozen=True)
class Input(Intent):
    author_id: str
    text: str


@dataclass(frozen=True)
class DirectMessage(Intent):
    author_id: str
    text: str


@dataclass(frozen=True)
class Mention(Intent):
    pass


@dataclass(frozen=True)
class Help(Intent):
    pass


@dataclass(frozen=True)
class Unrecognized(Intent):
    pass


# The closed set of variants a classifier may return. Dispatch tables are
# checked against this at construction.
INTENT_TYPES = (
    StartJourney,
    ReceiveMoney,
    Input,
    DirectMessage,
    Mention,
    Help,
    Unrecognized,
)
