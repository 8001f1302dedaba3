"""
Entities Package — SQLAlchemy 2.0 ORM Models (UUID + UTC)
=========================================================

The `entities` package defines the ORM models of the application, mapping
database tables to Python classes using SQLAlchemy 2.0-typed mappings.
These classes form the persistence backbone and are consumed by DAOs
(`daos` package) to perform CRUD operations.

Tech Stack & Conventions
------------------------
- Generic `Uuid` columns (native UUID on PostgreSQL, CHAR(32) on SQLite)
- Timezone-aware timestamps (UTC)
- SQLAlchemy 2.0 style `Mapped[...]` + `mapped_column(...)`
- Clear foreign keys for relational integrity

Contents
--------
- User
    A registered user: unique email and bcrypt password hash.

- ChatThread
    A thread owned by one user.
    * Fields: `id`, `title`, `user_id` (FK → app_user.id), `created_at`, `last_updated`
    * `messages` relationship ordered by position

- ThreadMessage
    One append-only message within a thread.
    * Fields: `id`, `thread_id` (FK → chat_thread.id), `position`, `role`,
      `message_text`, `date_created_on`
    * Assistant-only: `model_type`, `classification_result`, `classification_confidence`
"""

from textclass_chat.database.entities.user import User
from textclass_chat.database.entities.conversations import ChatThread
from textclass_chat.database.entities.messages import ThreadMessage

__all__ = ["User", "ChatThread", "ThreadMessage"]
