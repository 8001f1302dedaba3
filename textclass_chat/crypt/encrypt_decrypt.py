import bcrypt
import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


class EncryptionDec:
    """
    Utility class for password hashing and credential validation.

    Methods
    -------
    hash_password(text: str) -> str
        Hashes a plaintext password using bcrypt with a generated salt.
    check_passwords(plain_text: str, passwd: str) -> bool
        Verifies a plaintext password against a hashed password.
    is_valid_password(password: str) -> bool
        Validates the password length rules:
        - At least 6 characters
        - At most 72 bytes once UTF-8 encoded
    is_valid_email(email: str) -> bool
        Validates the shape of an email address.
    """

    def hash_password(self, text: str) -> str:
        """
        Hash a plaintext password using bcrypt.

        Parameters
        ----------
        text : str
            The plaintext password.

        Returns
        -------
        str
            The bcrypt-hashed password (UTF-8 decoded).
        """
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(text.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    def check_passwords(self, plain_text: str, passwd: str) -> bool:
        """
        Verify if a plaintext password matches a hashed password.

        Parameters
        ----------
        plain_text : str
            The plaintext password to check.
        passwd : str
            The previously hashed password to verify against.

        Returns
        -------
        bool
            True if the password matches, False otherwise.
        """
        encoded = plain_text.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        return bcrypt.checkpw(encoded, passwd.encode("utf-8"))

    def is_valid_password(self, password: str) -> bool:
        """
        Validate that a password meets the length rules.

        Parameters
        ----------
        password : str
            The plaintext password to validate.

        Returns
        -------
        bool
            True if password is valid, False otherwise.
        """
        if len(password) < MIN_PASSWORD_LENGTH:
            return False
        return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES

    def is_valid_email(self, email: str) -> bool:
        return bool(EMAIL_PATTERN.match(email))
