"""
The `helpers` package provides utility functions and decorators
that support database operations and cross-cutting concerns.

Contents
--------
- transactionManagement
    Provides tools for database transaction management:
        - Context variable (`db_session_context`) for propagating the active session across store calls
        - `@transactional` decorator for wrapping store methods in a managed transaction:
            - Reuses an existing session if one is active in context
            - Otherwise opens one from the store's injected `session_factory`, commits, and closes it
            - Rolls back the session on errors
"""
