"""Sessions and story items, stored through Flask-SQLAlchemy.

Records keep identities in their text form (see ``identity.py``); everything
handed back to callers is a plain dataclass, detached from the ORM session,
so handlers can hold on to it across ``await`` points.
"""
import dataclasses, logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from discord_dungeon.classes.app_config import AppConfig
from discord_dungeon.classes.identity import (
    Identity,
    identities_from_string,
    identities_to_string,
    identity_from_string,
)
from discord_dungeon.exceptions import (
    IdentityParseError,
    RepositoryError,
    SessionConflict,
    SessionNotFound,
)
from discord_dungeon.models.base import db
from discord_dungeon.models.dungeon import DungeonSession, DungeonStoryItem

logger = logging.getLogger(__name__)


class StoryItemKind(Enum):
    INPUT = "Input"
    OUTPUT = "Output"


@dataclass(frozen=True)
class Session:
    record_id: int
    thread_key: str
    creator: Identity
    companions: List[Identity] = field(default_factory=list)
    cost_gp: int = 0
    paid: bool = False
    prompt: str = ""
    engine_session_id: Optional[str] = None


@dataclass(frozen=True)
class StoryItem:
    session_record_id: int
    kind: StoryItemKind
    author: Optional[Identity]
    value: str


def session_from_record(record: DungeonSession) -> Session:
    try:
        creator = identity_from_string(record.creator)
        companions = identities_from_string(record.companions) if record.companions else []
    except IdentityParseError as e:
        raise RepositoryError(f"Session {record.id} has an unreadable identity field: {e}") from e
    return Session(
        record_id=record.id,
        thread_key=record.thread_key,
        creator=creator,
        companions=companions,
        cost_gp=record.cost_gp,
        paid=bool(record.paid),
        prompt=record.prompt,
        engine_session_id=record.engine_session_id or None,
    )


def story_item_from_record(record: DungeonStoryItem) -> StoryItem:
    return StoryItem(
        session_record_id=record.session_id,
        kind=StoryItemKind(record.kind),
        author=identity_from_string(record.author) if record.author else None,
        value=record.value,
    )


class SessionRepository:
    def __init__(self, app=None):
        self.app = app or AppConfig.get_flask()
        if self.app is None:
            raise RuntimeError("No Flask app is registered; build a DatabaseHandler first.")

    def _commit(self, action: str):
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Database error while trying to {action}: {e}")
            raise RepositoryError(f"Could not {action}: {e}") from e

    def create_session(
        self,
        thread_key: str,
        creator: Identity,
        companions: List[Identity],
        cost_gp: int,
        prompt: str,
    ) -> Session:
        with self.app.app_context():
            record = DungeonSession(
                thread_key=thread_key,
                creator=creator.to_string(),
                companions=identities_to_string(companions),
                cost_gp=cost_gp,
                paid=False,
                prompt=prompt,
            )
            db.session.add(record)
            self._commit(f"create a session for thread {thread_key}")
            logger.info(f"Created session {record.id} for thread {thread_key}")
            return session_from_record(record)

    def get_session_by_thread(self, thread_key: str) -> Session:
        with self.app.app_context():
            try:
                records = (
                    DungeonSession.query.filter_by(thread_key=thread_key)
                    .limit(2)
                    .all()
                )
            except SQLAlchemyError as e:
                raise RepositoryError(f"Could not look up thread {thread_key}: {e}") from e
            if len(records) > 1:
                raise SessionConflict(f"Too many sessions for thread {thread_key}; thread keys are not unique.")
            if not records:
                raise SessionNotFound(f"No session found for thread {thread_key}.")
            return session_from_record(records[0])

    def mark_paid_and_activated(self, session: Session, engine_session_id: str) -> Session:
        """Flip ``paid`` and store the playthrough id in one conditional update.

        The update only applies to a record that is still unpaid, so a second
        activation racing the first cannot overwrite its playthrough id.
        """
        with self.app.app_context():
            try:
                updated = DungeonSession.query.filter_by(
                    id=session.record_id, paid=False
                ).update(
                    {
                        "paid": True,
                        "engine_session_id": str(engine_session_id),
                        "updated": db.func.now(),
                    },
                    synchronize_session=False,
                )
            except SQLAlchemyError as e:
                db.session.rollback()
                raise RepositoryError(f"Could not activate session {session.record_id}: {e}") from e
            self._commit(f"activate session {session.record_id}")
            if updated == 0:
                raise SessionConflict(
                    f"Session {session.record_id} was already activated, or no longer exists."
                )
        return dataclasses.replace(session, paid=True, engine_session_id=str(engine_session_id))

    def append_story_item(
        self,
        session: Session,
        kind: StoryItemKind,
        author: Optional[Identity],
        value: str,
    ) -> StoryItem:
        if kind is StoryItemKind.INPUT and author is None:
            raise ValueError("Input story items need an author.")
        if kind is StoryItemKind.OUTPUT and author is not None:
            raise ValueError("Output story items cannot have an author.")
        with self.app.app_context():
            record = DungeonStoryItem(
                session_id=session.record_id,
                kind=kind.value,
                author=author.to_string() if author is not None else None,
                value=value,
            )
            db.session.add(record)
            self._commit(f"log a story item for session {session.record_id}")
        return StoryItem(
            session_record_id=session.record_id,
            kind=kind,
            author=author,
            value=value,
        )

    def list_story_items(self, session: Session) -> List[StoryItem]:
        with self.app.app_context():
            try:
                records = (
                    DungeonStoryItem.query.filter_by(session_id=session.record_id)
                    .order_by(DungeonStoryItem.id.asc())
                    .all()
                )
            except SQLAlchemyError as e:
                raise RepositoryError(f"Could not read the story for session {session.record_id}: {e}") from e
            return [story_item_from_record(record) for record in records]
