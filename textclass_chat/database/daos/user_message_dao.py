"""
Thread Message DAO

Purpose
-------
Data-access helpers for `ThreadMessage` rows:
- Append messages to a thread
- Fetch a thread's messages in insertion order
- Count a thread's stored messages (used as the optimistic version check)

Messages are append-only, so there is no update or delete method.
"""

import logging
from typing import List
from uuid import UUID

from sqlalchemy import asc, func
from sqlalchemy.orm import Session

from textclass_chat.database.entities.messages import ThreadMessage

logger = logging.getLogger(__name__)


class UserMessagesDao:
    """
    Data Access Object (DAO) for managing thread messages.
    """

    def createMessage(self, session: Session, threadMessage: ThreadMessage) -> ThreadMessage:
        """
        Create a new message record.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        threadMessage : ThreadMessage
            Message entity instance to be added.

        Returns
        -------
        ThreadMessage
            The message object that was added.
        """
        try:
            session.add(threadMessage)
            return threadMessage
        except Exception:
            logger.exception("Error in UserMessagesDao.createMessage")
            raise

    def fetchMessagesByThreadId(self, session: Session, thread_id: UUID) -> List[ThreadMessage]:
        """
        Fetch all messages in a thread, ordered by position (ascending).
        """
        try:
            return (
                session.query(ThreadMessage)
                .filter(ThreadMessage.thread_id == thread_id)
                .order_by(asc(ThreadMessage.position))
                .all()
            )
        except Exception:
            logger.exception("Error in UserMessagesDao.fetchMessagesByThreadId")
            raise

    def countMessagesByThreadId(self, session: Session, thread_id: UUID) -> int:
        try:
            return (
                session.query(func.count(ThreadMessage.id))
                .filter(ThreadMessage.thread_id == thread_id)
                .scalar()
            )
        except Exception:
            logger.exception("Error in UserMessagesDao.countMessagesByThreadId")
            raise
