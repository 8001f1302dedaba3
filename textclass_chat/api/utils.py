"""
JWT utilities for issuing and verifying access tokens.

Functions
---------
create_access_token(data: dict, settings: Settings) -> str
    Creates a signed JWT access token with an expiration (`exp`) claim.
verify_token(token: str, settings: Settings) -> str | None
    Verify a JWT's signature & expiration and return the subject (`sub`) if valid.

Settings used
-------------
SECRET_KEY : str
    HMAC signing key for JWTs.
ALGORITHM : str
    JWT signing algorithm (e.g., "HS256").
ACCESS_TOKEN_EXPIRE_MINUTES : int
    Token lifetime window in minutes.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from jose import jwt, JWTError

from textclass_chat.database.config.config import Settings

logger = logging.getLogger(__name__)


def create_access_token(data: dict, settings: Settings) -> str:
    """
    Create a signed JWT access token.

    Parameters
    ----------
    data : dict
        Claims to embed in the token. `sub` carries the user id.
    settings : Settings
        Provides the signing key, algorithm and token lifetime.

    Returns
    -------
    str
        Encoded JWT string.
    """
    encoding = data.copy()
    # exp is a NumericDate (seconds since epoch)
    expires = int(datetime.now(timezone.utc).timestamp()) + settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    encoding.update({"exp": expires})
    return jwt.encode(encoding, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str, settings: Settings) -> Optional[str]:
    """
    Verify a JWT and return its subject.

    Returns
    ----------
    str | None
        The `sub` claim (subject) if the token is valid, otherwise None
        (invalid signature, expired, malformed).
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return payload.get("sub")
    except JWTError as e:
        logger.info("Rejected session token: %s", e)
        return None
