"""
Thread DAO

Purpose
-------
Provides a thin data-access layer for the `ChatThread` ORM entity:
- Create threads
- Query a single thread by id + owner, or all threads of an owner
- Update `title` and `last_updated`, or touch `last_updated` alone

Design
------
- Requires an active SQLAlchemy `Session` supplied by the caller (no session
  creation inside the DAO). This keeps transaction boundaries in the store
  layer where they belong.
- Ownership is part of every single-thread query: a thread that belongs to
  somebody else is indistinguishable from a missing one.

Usage
-----
.. code-block:: python

    dao = ConversationDao()
    with session_factory() as session:
        dao.createThread(session, ChatThread(thread_id=..., title="New Chat", user_id=..., created_at=...))
        session.commit()

        threads = dao.fetchThreadsByUserId(session, user_id)
        thread = dao.fetchThreadByIdAndUserId(session, thread_id, user_id)

Error Handling
--------------
- Methods catch generic `Exception`, log the error and re-raise.
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session

from textclass_chat.database.entities.conversations import ChatThread

logger = logging.getLogger(__name__)


class ConversationDao:
    """
    Data Access Object (DAO) for managing ChatThread entities.
    Provides CRUD operations on the `chat_thread` table.
    """

    def createThread(self, session: Session, thread: ChatThread):
        """
        Create a new thread record.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        thread : ChatThread
            Thread entity instance to be added.
        """
        try:
            session.add(thread)
            session.flush()
        except Exception:
            logger.exception("Error in ConversationDao.createThread")
            raise

    def fetchThreadsByUserId(self, session: Session, user_id: UUID):
        """
        Fetch all threads belonging to a specific user, newest first.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_id : UUID
            Unique identifier of the user.

        Returns
        -------
        list[ChatThread]
            List of threads for the given user.
        """
        try:
            threads = (
                session.query(ChatThread)
                .filter(ChatThread.user_id == user_id)
                .order_by(desc(ChatThread.created_at))
                .all()
            )
            return threads
        except Exception:
            logger.exception("Error in ConversationDao.fetchThreadsByUserId")
            raise

    def fetchThreadByIdAndUserId(self, session: Session, thread_id: UUID, user_id: UUID):
        """
        Fetch one thread by id, restricted to its owner.

        Returns
        -------
        ChatThread | None
            The thread, or None when it does not exist or belongs to another user.
        """
        try:
            return (
                session.query(ChatThread)
                .filter(ChatThread.id == thread_id)
                .filter(ChatThread.user_id == user_id)
                .one_or_none()
            )
        except Exception:
            logger.exception("Error in ConversationDao.fetchThreadByIdAndUserId")
            raise

    def updateThread(self, session: Session, thread_id: UUID, title: str, timestamp: datetime):
        """
        Update the title and last updated timestamp of a thread.

        Raises
        ------
        NoResultFound
            If the thread does not exist.
        """
        try:
            thread = session.query(ChatThread).filter(ChatThread.id == thread_id).one()
            thread.title = title
            thread.last_updated = timestamp
        except Exception:
            logger.exception("Error in ConversationDao.updateThread")
            raise

    def touchThread(self, session: Session, thread_id: UUID, timestamp: datetime):
        """Update only `last_updated`, leaving the title as stored."""
        try:
            thread = session.query(ChatThread).filter(ChatThread.id == thread_id).one()
            thread.last_updated = timestamp
        except Exception:
            logger.exception("Error in ConversationDao.touchThread")
            raise
