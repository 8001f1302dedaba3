import unittest

from textclass_chat.crypt.encrypt_decrypt import EncryptionDec


class EncryptionDecTests(unittest.TestCase):
    def setUp(self) -> None:
        self.enc = EncryptionDec()

    def test_hash_and_check(self) -> None:
        hashed = self.enc.hash_password("secret123")
        self.assertNotEqual("secret123", hashed)
        self.assertTrue(self.enc.check_passwords("secret123", hashed))
        self.assertFalse(self.enc.check_passwords("secret124", hashed))

    def test_overlong_password_never_matches(self) -> None:
        hashed = self.enc.hash_password("a" * 72)
        self.assertFalse(self.enc.check_passwords("a" * 73, hashed))

    def test_password_rules(self) -> None:
        self.assertFalse(self.enc.is_valid_password("12345"))
        self.assertTrue(self.enc.is_valid_password("123456"))
        self.assertTrue(self.enc.is_valid_password("a" * 72))
        self.assertFalse(self.enc.is_valid_password("a" * 73))
        # 30 characters, 60 bytes
        self.assertTrue(self.enc.is_valid_password("ă" * 30))
        self.assertFalse(self.enc.is_valid_password("ă" * 40))

    def test_email_rules(self) -> None:
        self.assertTrue(self.enc.is_valid_email("reader@example.com"))
        self.assertFalse(self.enc.is_valid_email("reader@example"))
        self.assertFalse(self.enc.is_valid_email("reader example@example.com"))
        self.assertFalse(self.enc.is_valid_email(""))


if __name__ == "__main__":
    unittest.main()
