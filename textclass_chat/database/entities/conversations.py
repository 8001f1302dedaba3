"""
ChatThread ORM Model
====================

The ``ChatThread`` ORM model represents a user-owned chat thread stored in the
``chat_thread`` table.

Key features
~~~~~~~~~~~~
- UUID primary key (``id``)
- Human-readable title (``title``), a placeholder until renamed
- Foreign key to the owning user (``user_id`` → ``app_user.id``), never
  reassigned after creation
- Timezone-aware ``created_at`` (listing order) and ``last_updated`` timestamps

Integration notes
~~~~~~~~~~~~~~~~~
- Messages live in ``thread_message`` and are loaded in ``position`` order
  through the ``messages`` relationship.
- The conversation store converts rows into ``ChatThread`` API models; ORM
  instances never leave a transaction.
"""

from textclass_chat.database.config.connection_engine import declarativeBase
from sqlalchemy import ForeignKey, DateTime, TEXT, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship
from uuid import UUID
from datetime import datetime, timezone
from typing import List


class ChatThread(declarativeBase):
    """
    ORM model for the `chat_thread` table.

    Attributes
    ----------
    id : UUID
        Primary key. Unique identifier for the thread.
    title : str
        Human-readable title of the thread.
    user_id : UUID
        Foreign key reference to the `app_user` table (the owner of the thread).
    created_at : datetime
        Creation timestamp (UTC). Threads are listed newest first by this column.
    last_updated : datetime
        Timestamp of the last persisted turn (UTC).
    messages : list[ThreadMessage]
        Messages of the thread ordered by position.
    """

    __tablename__ = 'chat_thread'

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True
    )
    """Primary key. UUID of the thread."""

    title: Mapped[str] = mapped_column(
        TEXT, nullable=False
    )
    """Title of the thread (cannot be null)."""

    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('app_user.id'), nullable=False, index=True
    )
    """Foreign key reference to the `app_user` table (owner)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    """Timestamp when the thread was created (UTC, timezone-aware)."""

    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    """Timestamp when the thread was last saved (UTC, timezone-aware)."""

    messages: Mapped[List["ThreadMessage"]] = relationship(
        order_by="ThreadMessage.position", lazy="selectin"
    )

    def __init__(self, thread_id: UUID, title: str, user_id: UUID, created_at):
        """
        Initialize a new ChatThread object.

        Parameters
        ----------
        thread_id : UUID
            Unique identifier for the thread.
        title : str
            Title of the thread.
        user_id : UUID
            The ID of the user who owns this thread.
        created_at : datetime | str
            Creation timestamp. Accepts datetime or ISO8601 string.
        """
        self.id = thread_id
        self.title = title
        self.user_id = user_id
        if isinstance(created_at, str):
            created_at = datetime.fromisoformat(created_at)
        self.created_at = created_at
        self.last_updated = created_at

    def __str__(self) -> str:
        return (
            f"User: id:{self.user_id}, thread: {self.title}, time_created: {self.created_at}"
        )
