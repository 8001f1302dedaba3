"""
Pydantic models used for request/response validation and API data contracts.

The thread and message models double as the domain objects passed between
the conversation store and the chat orchestrator. Thread payloads use
camelCase field names on the wire (`createdAt`, `modelType`, ...).
"""

from datetime import datetime
from typing import Annotated, List, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClassificationResult(CamelModel):
    """Verdict of the remote classifier."""
    model_config = ConfigDict(frozen=True)

    result: str
    """Label as returned by the classifier (diacritic-stripped form)."""
    confidence: Optional[float] = Field(None, ge=0.0, le=1.0)
    """Confidence score, when the classifier sends one."""


class UserChatMessage(CamelModel):
    """A message typed by the user."""
    model_config = ConfigDict(frozen=True)

    role: Literal["USER"] = "USER"
    content: str
    timestamp: datetime


class AssistantChatMessage(CamelModel):
    """A reply produced by the orchestrator."""
    model_config = ConfigDict(frozen=True)

    role: Literal["ASSISTANT"] = "ASSISTANT"
    content: str
    timestamp: datetime
    model_type: Optional[int] = None
    """Model selector the reply was produced with."""
    classification: Optional[ClassificationResult] = None
    """Classifier verdict; absent on degraded replies."""


ChatMessage = Annotated[Union[UserChatMessage, AssistantChatMessage], Field(discriminator="role")]
"""Tagged union of the two message variants, keyed on `role`."""


class ThreadOut(CamelModel):
    """A thread and its complete, ordered message sequence, as sent to clients."""
    id: UUID
    title: str
    messages: List[ChatMessage] = Field(default_factory=list)
    created_at: datetime


class ChatThread(ThreadOut):
    """
    A thread as handled by the store and the orchestrator: the client view
    plus its owner.

    `_stored_message_count` records how many messages were already persisted
    when the thread was loaded; the conversation store appends only the
    messages past that point.
    """
    user_id: UUID = Field(exclude=True)

    _stored_message_count: int = PrivateAttr(default=0)


class AuthenticatedUser(BaseModel):
    """Identity of the caller resolved from a session token."""
    id: UUID
    email: str


class UserCredentials(BaseModel):
    """
    Represents login or registration credentials for a user.
    """
    email: str
    """The email address of the user."""
    password: str
    """The plaintext password provided for authentication."""


class UserAuthentication(BaseModel):
    """
    Authentication result returned after login attempts.
    """
    authenticated: bool
    """Whether the authentication was successful."""
    detail: str
    """Additional information or error message."""
    user_details: AuthenticatedUser | None
    """User details if authenticated, otherwise None."""


class LoginResponse(BaseModel):
    user_details: AuthenticatedUser
    access_token: str
    token_type: str = "bearer"


class ChatTurnRequest(CamelModel):
    """
    Body of `POST /api/chat`. Every field is optional: an empty body creates
    a new thread.
    """
    thread_id: Optional[str] = None
    """Thread to continue; unknown or foreign ids start a new thread."""
    utterance: Optional[str] = None
    """Text to classify; blank text appends nothing."""
    model_selector: Optional[Literal[1, 2]] = None
    """1 = ViT5, 2 = PhoBERT; defaults to the configured model."""


class RenameThreadRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)


class CategoryOut(CamelModel):
    api_label: str
    display_label: str
    description: str


class CategoriesOut(CamelModel):
    categories: List[CategoryOut]
    models: dict[int, str]
