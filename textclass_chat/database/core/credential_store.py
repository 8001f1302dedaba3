"""
Credential store: registration, login and user lookup.

Every method is wrapped with the `@transactional` decorator, which opens a
session from the injected `session_factory` and manages commit / rollback.
"""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from textclass_chat.api.models import AuthenticatedUser, UserAuthentication
from textclass_chat.crypt.encrypt_decrypt import EncryptionDec
from textclass_chat.database.daos.user_dao import UserDao
from textclass_chat.database.entities.user import User
from textclass_chat.database.helpers.transactionManagement import transactional

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """Holds user records: unique email and bcrypt password hash."""

    def __init__(self, session_factory):
        self.session_factory = session_factory
        self.user_dao = UserDao()

    @transactional
    def register_user(self, email: str, password: str, session: Session = None) -> dict:
        """
        Validate the credentials and create a new user.

        Returns
        -------
        dict
            - On success: {'res': True, 'detail': 'Account created successfully'}
            - On failure: {'res': False, 'detail': <reason>}
        """
        enc = EncryptionDec()
        email = normalize_email(email or "")
        if not email or not password:
            return {"res": False, "detail": "Email and password are required"}
        if not enc.is_valid_email(email):
            return {"res": False, "detail": "Invalid email format"}
        if not enc.is_valid_password(password):
            return {"res": False, "detail": "Password must be at least 6 characters long and at most 72 bytes"}
        if len(self.user_dao.fetchUserByEmail(session=session, email=email)) > 0:
            return {"res": False, "detail": "An account with this email already exists"}

        user = User(
            email=email,
            password=password,
            date_created_on=datetime.now(timezone.utc),
        )
        self.user_dao.createUser(session=session, user_data=user)
        logger.info("Registered user %s", user.id)
        return {"res": True, "detail": "Account created successfully"}

    @transactional
    def login_user(self, email: str, password: str, session: Session = None) -> UserAuthentication:
        """
        Authenticate a user by email and password.

        Notes
        -----
        - Uses `EncryptionDec.check_passwords` (bcrypt) for verification.
        - An unknown email and a wrong password produce different details.
        """
        enc = EncryptionDec()
        users_fetched = self.user_dao.fetchUserByEmail(session, normalize_email(email or ""))
        if len(users_fetched) == 0:
            return UserAuthentication(
                authenticated=False,
                detail="No account found with this email address",
                user_details=None,
            )
        user = users_fetched[0]
        if not enc.check_passwords(password or "", user.password):
            return UserAuthentication(authenticated=False, detail="Incorrect password", user_details=None)
        return UserAuthentication(
            authenticated=True,
            detail="",
            user_details=AuthenticatedUser(id=user.id, email=user.email),
        )

    @transactional
    def get_user(self, user_id: UUID, session: Session = None) -> Optional[AuthenticatedUser]:
        user = self.user_dao.fetchUserById(session, user_id)
        if user is None:
            return None
        return AuthenticatedUser(id=user.id, email=user.email)
