"""
ThreadMessage ORM Model
=======================

The ``ThreadMessage`` ORM model represents a single message record within a
chat thread. Each message is tied to a ``ChatThread`` via a foreign key and is
never updated or deleted once inserted.

Key features
~~~~~~~~~~~~
- UUID primary key (``id``)
- Foreign key reference to ``chat_thread.id`` (``thread_id``)
- Insertion index (``position``), unique per thread
- Sender role (``role``): ``USER`` or ``ASSISTANT``
- Assistant-only columns: ``model_type`` and the classification verdict
  (``classification_result``, ``classification_confidence``)

"""

from textclass_chat.database.config.connection_engine import declarativeBase
from sqlalchemy import ForeignKey, DateTime, TEXT, Integer, Float, Uuid, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from uuid import UUID
from datetime import datetime, timezone
from typing import Optional


class ThreadMessage(declarativeBase):
    """
    ORM model for the `thread_message` table.

    Attributes
    ----------
    id : UUID
        Primary key. Unique identifier for the message.
    thread_id : UUID
        Foreign key reference to the `chat_thread` table.
    position : int
        0-based insertion index within the thread.
    role : str
        "USER" or "ASSISTANT".
    message_text : str
        Content of the message.
    date_created_on : datetime
        Timestamp when the message was created.
    model_type : int | None
        Model selector used for the reply (assistant messages only).
    classification_result : str | None
        Label returned by the classifier (assistant messages only).
    classification_confidence : float | None
        Confidence returned by the classifier, when it sends one.
    """

    __tablename__ = 'thread_message'
    __table_args__ = (
        UniqueConstraint("thread_id", "position", name="ux_thread_message_thread_id_position"),
    )

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True
    )
    """Primary key. UUID of the message."""

    thread_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('chat_thread.id'), nullable=False, index=True
    )
    """Foreign key to the thread this message belongs to."""

    position: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    """Insertion index of the message inside its thread."""

    role: Mapped[str] = mapped_column(
        TEXT, nullable=False
    )
    """Role of the message sender (USER or ASSISTANT)."""

    message_text: Mapped[str] = mapped_column(
        TEXT, nullable=False
    )
    """Text content of the message (cannot be null)."""

    date_created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    """Timestamp when the message was created. Defaults to current UTC time."""

    model_type: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True
    )

    classification_result: Mapped[Optional[str]] = mapped_column(
        TEXT, nullable=True
    )

    classification_confidence: Mapped[Optional[float]] = mapped_column(
        Float, nullable=True
    )

    def __init__(
        self,
        message_id: UUID,
        thread_id: UUID,
        position: int,
        role: str,
        message: str,
        date_created_on,
        model_type: int | None = None,
        classification_result: str | None = None,
        classification_confidence: float | None = None,
    ):
        """
        Initialize a new ThreadMessage object.

        Parameters
        ----------
        message_id : UUID
            Unique identifier of the message.
        thread_id : UUID
            ID of the thread this message belongs to.
        position : int
            Insertion index within the thread.
        role : str
            The role of the sender (USER/ASSISTANT).
        message : str
            The content of the message.
        date_created_on : datetime | str
            Timestamp when the message was created. Accepts datetime or ISO8601 string.
        model_type : int | None, optional
            Model selector used for an assistant reply.
        classification_result : str | None, optional
            Label returned by the classifier.
        classification_confidence : float | None, optional
            Confidence returned by the classifier.
        """
        self.id = message_id
        self.thread_id = thread_id
        self.position = position
        self.role = role
        self.message_text = message
        self.model_type = model_type
        self.classification_result = classification_result
        self.classification_confidence = classification_confidence
        if isinstance(date_created_on, str):
            self.date_created_on = datetime.fromisoformat(date_created_on)
        else:
            self.date_created_on = date_created_on

    def __str__(self) -> str:
        return (
            f"Thread: id:{self.thread_id}, "
            f"position: {self.position}, "
            f"role: {self.role}, "
            f"message: {self.message_text}, "
            f"time_created: {self.date_created_on}"
        )
