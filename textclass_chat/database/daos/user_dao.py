"""
User DAO

Purpose
-------
Provides a thin data-access layer for the `User` ORM entity:
- Create users (hashing the password on the way in)
- Query by email or by id

Design
------
- Requires an active SQLAlchemy `Session` supplied by the caller (no session
  creation inside the DAO). Transaction boundaries live in the store layer.

Error Handling
--------------
- Each method catches generic `Exception`, logs it and re-raises.

Return Values
-------------
- createUser(...) -> bool
- fetchUserByEmail(...) -> list[User] (at most one row due to limit(1))
- fetchUserById(...) -> User | None
"""

import logging
from uuid import UUID

from sqlalchemy.orm import Session

from textclass_chat.crypt.encrypt_decrypt import EncryptionDec
from textclass_chat.database.entities.user import User

logger = logging.getLogger(__name__)


class UserDao:
    """
    Data Access Object (DAO) for managing User entities.
    """

    def createUser(self, session: Session, user_data: User) -> bool:
        """
        Create a new user in the database with a hashed password.

        Parameters
        ----------
        session : Session
            Active SQLAlchemy session.
        user_data : User
            User entity object whose `password` holds the plaintext password.

        Returns
        -------
        bool
            True if user creation is successful.
        """
        try:
            enc = EncryptionDec()
            user_data.password = enc.hash_password(text=user_data.password)
            session.add(user_data)
            session.flush()
            return True
        except Exception:
            logger.exception("Error in UserDao.createUser")
            raise

    def fetchUserByEmail(self, session: Session, email: str):
        """
        Fetch a user by email.

        Returns
        -------
        list[User]
            A list containing the matching user (at most one due to limit(1)).
        """
        try:
            users = session.query(User).filter(User.email == email).limit(1).all()
            return users
        except Exception:
            logger.exception("Error in UserDao.fetchUserByEmail")
            raise

    def fetchUserById(self, session: Session, user_id: UUID):
        try:
            return session.get(User, user_id)
        except Exception:
            logger.exception("Error in UserDao.fetchUserById")
            raise
