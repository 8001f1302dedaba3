"""
Conversation store: thread persistence for the chat orchestrator.

All public reads go through `@transactional` methods that open a session
from the injected `session_factory`, so the store never touches an ambient
connection. ORM rows are converted into `ChatThread` models before the
session closes.

Ownership is enforced in every lookup: a thread id that is unknown,
malformed, or owned by another user yields `None`, never an exception.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional, Union
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from textclass_chat.api.exceptions import PersistenceFailure
from textclass_chat.api.models import (
    AssistantChatMessage,
    AuthenticatedUser,
    ChatThread,
    ClassificationResult,
    UserChatMessage,
)
from textclass_chat.database.daos.conversation_dao import ConversationDao
from textclass_chat.database.daos.user_message_dao import UserMessagesDao
from textclass_chat.database.entities.conversations import ChatThread as ChatThreadRow
from textclass_chat.database.entities.messages import ThreadMessage
from textclass_chat.database.helpers.transactionManagement import transactional

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite returns naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _parse_thread_id(thread_id: Union[str, UUID, None]) -> Optional[UUID]:
    if thread_id is None or isinstance(thread_id, UUID):
        return thread_id
    try:
        return UUID(str(thread_id).strip())
    except ValueError:
        return None


def _message_from_row(row: ThreadMessage):
    if row.role == "USER":
        return UserChatMessage(content=row.message_text, timestamp=_as_utc(row.date_created_on))
    classification = None
    if row.classification_result is not None:
        classification = ClassificationResult(
            result=row.classification_result,
            confidence=row.classification_confidence,
        )
    return AssistantChatMessage(
        content=row.message_text,
        timestamp=_as_utc(row.date_created_on),
        model_type=row.model_type,
        classification=classification,
    )


def _message_to_row(thread_id: UUID, position: int, message) -> ThreadMessage:
    row = ThreadMessage(
        message_id=uuid.uuid4(),
        thread_id=thread_id,
        position=position,
        role=message.role,
        message=message.content,
        date_created_on=message.timestamp,
    )
    if isinstance(message, AssistantChatMessage):
        row.model_type = message.model_type
        if message.classification is not None:
            row.classification_result = message.classification.result
            row.classification_confidence = message.classification.confidence
    return row


def _thread_from_row(row: ChatThreadRow) -> ChatThread:
    thread = ChatThread(
        id=row.id,
        user_id=row.user_id,
        title=row.title,
        messages=[_message_from_row(message) for message in row.messages],
        created_at=_as_utc(row.created_at),
    )
    thread._stored_message_count = len(thread.messages)
    return thread


class ConversationStore:
    """
    Reads and writes chat threads.

    Parameters
    ----------
    session_factory : sessionmaker
        Factory producing SQLAlchemy sessions bound to the application engine.
    default_title : str
        Title given to newly created threads.
    clock : callable, optional
        Returns the current UTC time; injectable for deterministic tests.
    """

    def __init__(self, session_factory, default_title: str = "New Chat", clock: Optional[Callable[[], datetime]] = None):
        self.session_factory = session_factory
        self.default_title = default_title
        self.clock = clock or _utcnow
        self.conversation_dao = ConversationDao()
        self.message_dao = UserMessagesDao()

    @transactional
    def find_thread(self, user: AuthenticatedUser, thread_id: Union[str, UUID, None], session: Session = None) -> Optional[ChatThread]:
        """Return the user's thread with this id, or None when it is missing, malformed or foreign."""
        parsed = _parse_thread_id(thread_id)
        if parsed is None:
            return None
        row = self.conversation_dao.fetchThreadByIdAndUserId(session, parsed, user.id)
        if row is None:
            return None
        return _thread_from_row(row)

    @transactional
    def create_thread(self, user: AuthenticatedUser, session: Session = None) -> ChatThread:
        """Insert an empty thread owned by `user`."""
        row = ChatThreadRow(
            thread_id=uuid.uuid4(),
            title=self.default_title,
            user_id=user.id,
            created_at=self.clock(),
        )
        self.conversation_dao.createThread(session, row)
        logger.info("Created thread %s for user %s", row.id, user.id)
        return ChatThread(id=row.id, user_id=row.user_id, title=row.title, messages=[], created_at=row.created_at)

    @transactional
    def list_threads(self, user: AuthenticatedUser, session: Session = None) -> List[ChatThread]:
        """Return all threads of `user` with their messages, newest first."""
        rows = self.conversation_dao.fetchThreadsByUserId(session, user.id)
        return [_thread_from_row(row) for row in rows]

    @transactional
    def rename_thread(self, user: AuthenticatedUser, thread_id: Union[str, UUID, None], title: str, session: Session = None) -> Optional[ChatThread]:
        parsed = _parse_thread_id(thread_id)
        if parsed is None:
            return None
        row = self.conversation_dao.fetchThreadByIdAndUserId(session, parsed, user.id)
        if row is None:
            return None
        self.conversation_dao.updateThread(session, row.id, title, self.clock())
        return _thread_from_row(row)

    def save_thread(self, thread: ChatThread) -> None:
        """
        Persist the messages appended to `thread` since it was loaded.

        The whole batch is written in one transaction together with the
        thread's `last_updated`; the stored title is left alone so a rename
        made meanwhile survives. If another writer has appended to the thread
        in the meantime nothing is written.

        Raises
        ------
        PersistenceFailure
            On a concurrent modification or any database error.
        """
        try:
            self._save_thread(thread)
        except SQLAlchemyError as e:
            logger.exception("Failed to save thread %s", thread.id)
            raise PersistenceFailure(f"Could not save thread {thread.id}") from e
        thread._stored_message_count = len(thread.messages)

    @transactional
    def _save_thread(self, thread: ChatThread, session: Session = None) -> None:
        stored = self.message_dao.countMessagesByThreadId(session, thread.id)
        if stored != thread._stored_message_count:
            raise PersistenceFailure(
                f"Thread {thread.id} was modified concurrently "
                f"({stored} stored messages, {thread._stored_message_count} expected)"
            )
        for position, message in enumerate(thread.messages[stored:], start=stored):
            self.message_dao.createMessage(session, _message_to_row(thread.id, position, message))
        self.conversation_dao.touchThread(session, thread.id, self.clock())
