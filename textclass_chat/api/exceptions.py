"""
Error taxonomy shared by the stores, the classification client and the
chat orchestrator.

A missing or foreign thread is not an error: the conversation store returns
``None`` and the orchestrator starts a fresh thread.
"""


class Unauthenticated(Exception):
    """No valid session identifies the caller."""

    def __init__(self, detail: str = "Unauthenticated"):
        super().__init__(detail)
        self.detail = detail


class ClassificationUnavailable(Exception):
    """The remote classifier could not produce a usable label."""


class PersistenceFailure(Exception):
    """A thread could not be written to the conversation store."""
