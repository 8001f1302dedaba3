"""
User ORM Model
==============

The ``User`` ORM model represents a registered user in the system. It maps to the
``app_user`` table and holds the credentials checked at login.

Key features
~~~~~~~~~~~~
- UUID primary key (``id``)
- Unique email address used as the login name
- bcrypt password hash (never the plaintext)
- Timezone-aware creation timestamp (UTC)

"""

from textclass_chat.database.config.connection_engine import declarativeBase
from sqlalchemy import VARCHAR, TEXT, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from uuid import UUID
import uuid
from datetime import datetime, timezone


class User(declarativeBase):
    """
    ORM model for the `app_user` table.
    Represents a registered user in the system.

    Attributes
    ----------
    id : UUID
        Primary key. Unique identifier for the user.
    email : str
        Email address of the user (unique, max 255 chars).
    password : str
        bcrypt hash of the user's password.
    date_created_on : datetime
        Timestamp when the account was registered.
    """

    __tablename__ = "app_user"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), primary_key=True
    )
    """Primary key. UUID of the user."""

    email: Mapped[str] = mapped_column(
        VARCHAR(255), nullable=False, unique=True, index=True
    )
    """Email address of the user (max length 255)."""

    password: Mapped[str] = mapped_column(
        TEXT, nullable=False
    )
    """Hashed password of the user."""

    date_created_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    """Datetime when the user registered. Defaults to current UTC time."""

    def __init__(self, email: str, password: str, date_created_on):
        """
        Initialize a new User object.

        Parameters
        ----------
        email : str
            Email address of the user.
        password : str
            Hashed password of the user.
        date_created_on : datetime | str
            Registration timestamp. Can be a datetime object or ISO8601 string.
        """
        self.id = uuid.uuid4()
        self.email = email
        self.password = password
        if isinstance(date_created_on, str):
            self.date_created_on = datetime.fromisoformat(date_created_on)
        else:
            self.date_created_on = date_created_on

    def __str__(self) -> str:
        return f"User: id:{self.id}, email: {self.email}"
