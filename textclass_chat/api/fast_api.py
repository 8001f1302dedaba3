"""
FastAPI Router — Auth • Threads • Chat turns • Categories
=========================================================

Purpose
-------
Defines the HTTP API for:
- Authentication: register, login, logout, current user
- Threads: list the caller's threads, run a chat turn, rename a thread
- The static category table used by the classifier

Key Notes
---------
- Input validation via Pydantic models in `textclass_chat.api.models`.
- Session: signed JWT, sent back as the HttpOnly cookie `token` at login and
  also accepted as an `Authorization: Bearer` header.
- Every thread endpoint rejects callers without a valid session with 401
  before any thread is read or written.
- Stores, orchestrator and settings are taken from `app.state`, where the
  application factory puts them.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Cookie, Depends, Header, HTTPException, Request, Response

from textclass_chat.api.categories import CATEGORIES, MODEL_NAMES
from textclass_chat.api.chat_orchestrator import ChatOrchestrator
from textclass_chat.api.models import (
    AuthenticatedUser,
    CategoriesOut,
    CategoryOut,
    ChatTurnRequest,
    LoginResponse,
    RenameThreadRequest,
    ThreadOut,
    UserCredentials,
)
from textclass_chat.api.utils import create_access_token, verify_token
from textclass_chat.database.config.config import Settings
from textclass_chat.database.core.conversation_store import ConversationStore
from textclass_chat.database.core.credential_store import CredentialStore

router = APIRouter()
"""Creates the FastAPI router in which we define its routes"""

TOKEN_COOKIE = "token"


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credential_store(request: Request) -> CredentialStore:
    return request.app.state.credential_store


def get_conversation_store(request: Request) -> ConversationStore:
    return request.app.state.conversation_store


def get_orchestrator(request: Request) -> ChatOrchestrator:
    return request.app.state.orchestrator


def get_current_user(
    token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_settings),
    credential_store: CredentialStore = Depends(get_credential_store),
) -> AuthenticatedUser:
    """Resolve the caller from the bearer header or the `token` cookie, or reject with 401."""
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            token = credentials.strip()
    if not token:
        raise HTTPException(status_code=401, detail="Unauthenticated")
    subject = verify_token(token, settings)
    if not subject:
        raise HTTPException(status_code=401, detail="Unauthenticated")
    try:
        user_id = UUID(subject)
    except ValueError:
        raise HTTPException(status_code=401, detail="Unauthenticated")
    user = credential_store.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="Unauthenticated")
    return user


@router.post('/api/auth/register', status_code=201)
def register(data: UserCredentials, credential_store: CredentialStore = Depends(get_credential_store)):
    """Register a new account. Returns 400 with the reason when validation fails."""
    res = credential_store.register_user(email=data.email, password=data.password)
    if not res['res']:
        raise HTTPException(status_code=400, detail=res['detail'])
    return {"detail": res['detail']}


@router.post('/api/auth/login', response_model=LoginResponse)
def login(
    data: UserCredentials,
    response: Response,
    settings: Settings = Depends(get_settings),
    credential_store: CredentialStore = Depends(get_credential_store),
):
    """Authenticate a user and set a signed JWT cookie.

    Request body:
        UserCredentials {email, password}

    Behavior:
        - Verifies credentials via `CredentialStore.login_user`.
        - On success, creates a JWT whose subject is the user id and sets it
          as the HttpOnly cookie `token`; the token is also returned so
          non-browser clients can send it as a bearer header.
        - On failure, 401 with the reason.
    """
    auth = credential_store.login_user(email=data.email, password=data.password)
    if not auth.authenticated:
        raise HTTPException(status_code=401, detail=auth.detail)
    user = auth.user_details
    access_token = create_access_token({'sub': str(user.id), 'email': user.email}, settings)
    response.set_cookie(
        key=TOKEN_COOKIE,
        value=access_token,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return LoginResponse(user_details=user, access_token=access_token)


@router.post('/api/auth/logout')
async def logout(response: Response):
    """Drop the session cookie."""
    response.delete_cookie(TOKEN_COOKIE)
    return {"detail": "Logged out"}


@router.get('/api/auth/me', response_model=AuthenticatedUser)
def me(user: AuthenticatedUser = Depends(get_current_user)):
    return user


@router.get('/api/chat', response_model=List[ThreadOut])
def list_threads(
    user: AuthenticatedUser = Depends(get_current_user),
    conversation_store: ConversationStore = Depends(get_conversation_store),
):
    """All threads of the caller with their messages, newest first."""
    return conversation_store.list_threads(user)


@router.post('/api/chat', response_model=ThreadOut)
def chat_turn(
    data: Optional[ChatTurnRequest] = None,
    user: AuthenticatedUser = Depends(get_current_user),
    orchestrator: ChatOrchestrator = Depends(get_orchestrator),
):
    """Run one chat turn.

    Request body (all optional):
        {threadId, utterance, modelSelector}

    Behavior:
        - Continues `threadId` when the caller owns it, otherwise starts a new thread.
        - A blank utterance appends nothing (an empty body simply creates a thread).
        - Returns the updated or created thread.
    """
    data = data or ChatTurnRequest()
    return orchestrator.handle_turn(
        user=user,
        thread_id=data.thread_id,
        utterance=data.utterance,
        model_type=data.model_selector,
    )


@router.patch('/api/chat/{thread_id}', response_model=ThreadOut)
def rename_thread(
    thread_id: str,
    data: RenameThreadRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    conversation_store: ConversationStore = Depends(get_conversation_store),
):
    """Rename one of the caller's threads."""
    title = data.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="Title must not be blank")
    thread = conversation_store.rename_thread(user, thread_id, title)
    if thread is None:
        raise HTTPException(status_code=404, detail="Thread not found")
    return thread


@router.get('/api/categories', response_model=CategoriesOut)
async def categories():
    """The fixed category table and the selectable models."""
    return CategoriesOut(
        categories=[CategoryOut(**category._asdict()) for category in CATEGORIES],
        models=MODEL_NAMES,
    )
