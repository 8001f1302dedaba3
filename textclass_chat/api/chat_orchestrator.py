"""
Chat-turn orchestration.

A turn takes the caller's utterance, asks the classification service for a
category, writes a reply describing the verdict and persists both messages
on the thread. Classification failures never fail the turn: the reply is
replaced by a fixed apology.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol, Union
from uuid import UUID

from textclass_chat.api.categories import MODEL_NAMES, find_category, model_name, resolve_label
from textclass_chat.api.exceptions import ClassificationUnavailable, Unauthenticated
from textclass_chat.api.models import (
    AssistantChatMessage,
    AuthenticatedUser,
    ChatThread,
    ClassificationResult,
    UserChatMessage,
)

logger = logging.getLogger(__name__)

DEGRADED_REPLY = "Sorry, I couldn't classify your text right now. Please try again in a moment."


class Classifier(Protocol):
    def classify(self, text: str, model_type: int) -> ClassificationResult: ...


def format_reply(classification: ClassificationResult, model_type: int) -> str:
    """Describe a classifier verdict in a short sentence."""
    display_label, description = resolve_label(classification.result)
    reply = (
        f"According to the {model_name(model_type)} model, this text belongs to the category "
        f"**{display_label}** ({description})."
    )
    if classification.confidence is not None:
        reply += f" Confidence: {classification.confidence:.0%}."
    return reply


class ChatOrchestrator:
    """
    Runs chat turns against a conversation store and a classifier.

    Parameters
    ----------
    store : ConversationStore
        Thread persistence (`find_thread`, `create_thread`, `save_thread`).
    classifier : Classifier
        Anything with `classify(text, model_type) -> ClassificationResult`.
    default_model_type : int
        Selector used when a turn does not name one.
    clock : callable, optional
        Returns the current UTC time for message timestamps.
    """

    def __init__(self, store, classifier: Classifier, default_model_type: int = 1, clock: Optional[Callable[[], datetime]] = None):
        if default_model_type not in MODEL_NAMES:
            raise ValueError(f"unsupported default model_type {default_model_type!r}")
        self.store = store
        self.classifier = classifier
        self.default_model_type = default_model_type
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def handle_turn(
        self,
        user: Optional[AuthenticatedUser],
        thread_id: Union[str, UUID, None],
        utterance: Optional[str],
        model_type: Optional[int] = None,
    ) -> ChatThread:
        """
        Run one turn and return the full updated thread.

        - A missing `user` raises `Unauthenticated` before any store access.
        - An unknown or foreign `thread_id` starts a new thread.
        - A blank `utterance` appends nothing and skips the classifier.
        - Otherwise a USER message and an ASSISTANT reply are appended and the
          thread is saved in one write (`PersistenceFailure` propagates).
        """
        if user is None:
            raise Unauthenticated()
        if model_type is None:
            model_type = self.default_model_type
        if model_type not in MODEL_NAMES:
            raise ValueError(f"unsupported model_type {model_type!r}")

        thread = None
        if thread_id:
            thread = self.store.find_thread(user, thread_id)
            if thread is None:
                logger.info("Thread %s not available to user %s, starting a new one", thread_id, user.id)
        if thread is None:
            thread = self.store.create_thread(user)

        if utterance and utterance.strip():
            thread.messages.append(UserChatMessage(content=utterance, timestamp=self.clock()))
            thread.messages.append(self._reply(utterance, model_type))

        self.store.save_thread(thread)
        return thread

    def _reply(self, utterance: str, model_type: int) -> AssistantChatMessage:
        try:
            classification = self.classifier.classify(utterance, model_type)
        except ClassificationUnavailable as e:
            logger.warning("Classification unavailable, sending degraded reply: %s", e)
            return AssistantChatMessage(content=DEGRADED_REPLY, timestamp=self.clock(), model_type=model_type)

        if find_category(classification.result) is None:
            logger.warning("Classifier returned unmapped label %r", classification.result)
        return AssistantChatMessage(
            content=format_reply(classification, model_type),
            timestamp=self.clock(),
            model_type=model_type,
            classification=classification,
        )
