"""
DAOs Package — Data Access Layer (SQLAlchemy 2.0)
=================================================

The `daos` package provides the Data Access Layer for the application.
It encapsulates all interactions with SQLAlchemy ORM entities, providing
clean CRUD APIs for the store layer while hiding direct query details.

Conventions
-----------
- SQLAlchemy 2.0 typed mappings (Mapped[...] / mapped_column)
- Session lifecycle (open/commit/rollback) is handled by callers
- DAOs log and surface exceptions so upper layers decide error policy

Contents
--------
- UserDao
    * Creates users with password hashing
    * Fetches users by email or id

- ConversationDao
    * Creates threads
    * Fetches threads by owner (newest first) or by id + owner
    * Updates thread title and last-updated timestamp, or the timestamp alone

- UserMessagesDao
    * Appends messages to a thread
    * Fetches messages by thread (insertion order)
    * Counts a thread's stored messages
"""
