"""
FastAPI application bootstrap with: \n
- An application factory wiring settings, database engine, stores, classification client and chat orchestrator \n
- Lifespan-managed schema creation and resource release \n
- CORS configured for the frontend \n
- Exception handlers for the chat error taxonomy \n

Environment contract (from `settings`): \n
- FRONTEND_URL: allowed CORS origin. \n
- DB_*: database location. \n
- CLASSIFIER_URL / CLASSIFIER_TIMEOUT_SECONDS: remote classifier. \n
- LOG_LEVEL: root logging level. \n
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from textclass_chat.api.chat_orchestrator import ChatOrchestrator
from textclass_chat.api.classification_client import ClassificationClient
from textclass_chat.api.exceptions import PersistenceFailure, Unauthenticated
from textclass_chat.api.fast_api import router
from textclass_chat.database.config.config import Settings, settings as default_settings
from textclass_chat.database.config.connection_engine import build_engine, metadata
from textclass_chat.database.core.conversation_store import ConversationStore
from textclass_chat.database.core.credential_store import CredentialStore

logger = logging.getLogger("uvicorn")
"""Logger instance for capturing and emitting Uvicorn server logs."""


def _configure_logging(level: str) -> None:
    root_logger = logging.getLogger()
    if root_logger.handlers:
        return
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def create_app(
    settings: Optional[Settings] = None,
    engine: Optional[Engine] = None,
    classifier=None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Parameters
    ----------
    settings : Settings, optional
        Configuration; defaults to the `.env`-backed singleton.
    engine : Engine, optional
        Database engine; built from `settings` when omitted.
    classifier : optional
        Object with `classify(text, model_type)`; an HTTP
        `ClassificationClient` pointed at `settings.CLASSIFIER_URL` when omitted.
    """
    settings = settings or default_settings
    _configure_logging(settings.LOG_LEVEL)

    engine = engine or build_engine(settings)
    session_factory = sessionmaker(bind=engine)
    conversation_store = ConversationStore(session_factory, default_title=settings.DEFAULT_THREAD_TITLE)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        App lifespan manager.

        Notes
        ------------
        - On startup: create missing tables, open the classifier HTTP client
          (unless one was injected) and build the chat orchestrator.
        - On shutdown: close the classifier client opened here and dispose of the engine pool.
        """
        logger.info("Creating database schema on %s", engine.url.render_as_string(hide_password=True))
        metadata.create_all(engine)
        active_classifier = classifier or ClassificationClient(
            settings.CLASSIFIER_URL, timeout=settings.CLASSIFIER_TIMEOUT_SECONDS
        )
        app.state.orchestrator = ChatOrchestrator(
            conversation_store,
            active_classifier,
            default_model_type=settings.DEFAULT_MODEL_TYPE,
        )
        try:
            yield
        finally:
            if classifier is None:
                active_classifier.close()
            engine.dispose()
            logger.info("App shutting down.")

    app = FastAPI(title="Text Classification Chat API", lifespan=lifespan)

    app.state.settings = settings
    app.state.credential_store = CredentialStore(session_factory)
    app.state.conversation_store = conversation_store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.FRONTEND_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Unauthenticated)
    async def unauthenticated_handler(request: Request, exc: Unauthenticated):
        return JSONResponse(status_code=401, content={"detail": exc.detail})

    @app.exception_handler(PersistenceFailure)
    async def persistence_failure_handler(request: Request, exc: PersistenceFailure):
        logger.error("Persistence failure on %s: %s", request.url.path, exc)
        return JSONResponse(status_code=500, content={"detail": "Could not save the conversation"})

    app.include_router(router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


# Instantiate the FastAPI app for `uvicorn textclass_chat.main:app`
app = create_app()
