"""
The `crypt` package provides cryptographic utilities that secure
authentication workflows and user data.

It centralizes password hashing and credential validation in order to
enforce consistent security practices across the application.

Contents
--------
- encrypt_decrypt
    Utility module exposing the `EncryptionDec` class:
        * `hash_password` — securely hashes plaintext passwords using bcrypt
        * `check_passwords` — verifies a plaintext password against a hashed one
        * `is_valid_password` — validates password length (6 characters to 72 bytes)
        * `is_valid_email` — validates the shape of an email address
"""
