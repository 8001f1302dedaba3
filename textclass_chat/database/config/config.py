"""
Configuration — Pydantic v2 Settings (env / .env)
=================================================

Purpose
-------
Centralized, strongly-typed application configuration using:
- Pydantic v2 `BaseSettings` for environment-driven values
- `pydantic-settings` v2 for `.env` loading and model config

Load Order & Behavior
---------------------
- Values are read from the environment; if not present, `.env` is used.
- Every field has a development default so the app and the tests can be
  imported without a `.env`; production deployments override them.
- `extra="ignore"`: unknown env vars are ignored (not an error).

Usage
-----
from textclass_chat.database.config.config import settings

classifier_url = settings.CLASSIFIER_URL
timeout = settings.CLASSIFIER_TIMEOUT_SECONDS

Security
--------
- Never commit secrets or the `.env` file to source control.
- Always set `SECRET_KEY` outside of local development.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    FRONTEND_URL: str = Field("http://localhost:3000", description="Base URL of the frontend client application (CORS origin).")
    DB_DRIVER_NAME: str = Field("sqlite", description="SQLAlchemy driver name (e.g., `postgresql+psycopg2`, `sqlite`).")
    DB_USERNAME: Optional[str] = Field(None, description="Database username credential.")
    DB_PASSWORD: Optional[str] = Field(None, description="Database password credential.")
    DB_HOST: Optional[str] = Field(None, description="Hostname or IP address of the database server.")
    DB_PORT: Optional[int] = Field(None, description="Port of the database server.")
    DB_DATABASE_NAME: str = Field("chat.db", description="Name of the database (file path for SQLite).")
    SECRET_KEY: str = Field("dev-secret-key-change-me", description="Secret key used to sign session tokens.")
    ALGORITHM: str = Field("HS256", description="JWT signing algorithm.")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24, description="Duration (in minutes) before access tokens expire.")
    COOKIE_SECURE: bool = Field(False, description="Send the session cookie over HTTPS only.")
    CLASSIFIER_URL: str = Field("http://localhost:8000/predict", description="Endpoint of the remote text classification service.")
    CLASSIFIER_TIMEOUT_SECONDS: float = Field(10.0, description="Timeout applied to every classification request.")
    DEFAULT_MODEL_TYPE: int = Field(1, description="Model selector used when a turn does not name one (1 = ViT5, 2 = PhoBERT).")
    DEFAULT_THREAD_TITLE: str = Field("New Chat", description="Title given to newly created threads.")
    LOG_LEVEL: str = Field("INFO", description="Root logging level.")


# Singleton instance of Settings, ready to be imported across the app
settings = Settings()
"""Defines a Settings object that contains the contents of the .env file"""
