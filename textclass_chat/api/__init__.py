"""
API Package — FastAPI Router • Models • JWT Utils • Classification
==================================================================

Mission
-------
This package defines the backend's HTTP interface and the chat-turn logic
behind it: FastAPI routing, JWT auth, the client of the remote text
classifier and the orchestrator that turns a verdict into a reply.

Contents
--------
- fast_api
    FastAPI router with endpoints for:
      • Auth: register, login, logout, current user
      • Chat: list threads, run a chat turn, rename a thread
      • Categories: the fixed label table and the selectable models

- models
    Pydantic data contracts:
      • UserChatMessage / AssistantChatMessage (tagged on `role`), ChatThread
      • ClassificationResult
      • UserCredentials, UserAuthentication, LoginResponse (auth)
      • ChatTurnRequest, RenameThreadRequest, CategoriesOut

- utils
    JWT helpers:
      • create_access_token(payload, settings) — issues signed JWTs with exp
      • verify_token(token, settings) — validates JWTs and extracts the subject

- categories
    The ten diacritic-stripped labels of the classifier, their display forms
    and English descriptions, plus the model selector names.

- classification_client
    httpx client of the remote classification service.

- chat_orchestrator
    Runs one chat turn: resolve or create the thread, classify, reply, save.

- exceptions
    Unauthenticated, ClassificationUnavailable, PersistenceFailure.

Operational Notes
-----------------
- Security: auth via HttpOnly `token` cookie (JWT) or `Authorization: Bearer`.
- A classifier outage degrades the reply, it never fails the turn.
"""
