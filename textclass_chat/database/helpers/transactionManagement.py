"""
Database Transaction Management
===============================

This module provides utilities for managing SQLAlchemy database sessions
using Python context variables and a decorator-based transaction wrapper.

Store methods decorated with ``@transactional`` run inside a managed
transaction opened from the store's own ``session_factory``; the session is
passed to the method as the ``session`` keyword argument.

Key features
~~~~~~~~~~~~
- Context variable to store the active session
- Implicit reuse of an existing session by nested store calls
- Automatic commit and rollback handling
- Clean session closure after execution
- No module-level engine: the session factory is injected into each store

"""

from functools import wraps
import contextvars

db_session_context = contextvars.ContextVar("db_session_context", default=None)
"""Context variable storing the active SQLAlchemy session."""


def transactional(func):
    """
    Decorator to wrap store methods in a managed SQLAlchemy transaction.

    Ensures that:
    - If a session already exists in context, it is reused.
    - Otherwise, a new session is created from ``self.session_factory``,
      committed, and closed.
    - On errors, the session is rolled back and closed.

    Parameters
    ----------
    func : callable
        The method to wrap. It must accept a `session` keyword argument.

    Returns
    -------
    callable
        The wrapped method, executed within a database transaction.

    Example
    -------
    >>> class UserStore:
    ...     def __init__(self, session_factory):
    ...         self.session_factory = session_factory
    ...
    ...     @transactional
    ...     def add(self, user, session=None):
    ...         session.add(user)
    """
    @wraps(func)
    def wrap_func(self, *args, **kwargs):
        session = db_session_context.get()
        if session is not None:
            return func(self, *args, session=session, **kwargs)

        session = self.session_factory()
        token = db_session_context.set(session)

        try:
            result = func(self, *args, session=session, **kwargs)
            session.flush()
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
            db_session_context.reset(token)

        return result

    return wrap_func
