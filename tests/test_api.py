import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from textclass_chat.api.classification_client import ClassificationClient
from textclass_chat.api.exceptions import PersistenceFailure
from textclass_chat.api.utils import create_access_token
from textclass_chat.database.config.config import Settings
from textclass_chat.main import create_app

from tests.base import PASSWORD, FakeClassifier, make_engine


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.settings = Settings(SECRET_KEY="test-secret", LOG_LEVEL="WARNING")
        self.classifier = FakeClassifier()
        self.app = create_app(settings=self.settings, engine=make_engine(), classifier=self.classifier)
        self.client = TestClient(self.app)
        self.client.__enter__()

    def tearDown(self) -> None:
        self.client.__exit__(None, None, None)

    def _register(self, email: str, password: str = PASSWORD):
        return self.client.post("/api/auth/register", json={"email": email, "password": password})

    def _login(self, email: str, password: str = PASSWORD):
        return self.client.post("/api/auth/login", json={"email": email, "password": password})

    def _bearer(self, email: str) -> dict:
        self._register(email)
        token = self._login(email).json()["access_token"]
        return {"Authorization": f"Bearer {token}"}


class AuthApiTests(ApiTestCase):
    def test_register_then_login_sets_cookie(self) -> None:
        self.assertEqual(201, self._register("Reader@Example.com").status_code)

        response = self._login("reader@example.com")

        self.assertEqual(200, response.status_code)
        self.assertIn("token", response.cookies)
        self.assertEqual("reader@example.com", response.json()["user_details"]["email"])

        me = self.client.get("/api/auth/me")
        self.assertEqual(200, me.status_code)
        self.assertEqual("reader@example.com", me.json()["email"])

    def test_register_rejects_invalid_input(self) -> None:
        self.assertEqual(201, self._register("reader@example.com").status_code)

        duplicate = self._register("reader@example.com")
        self.assertEqual(400, duplicate.status_code)
        self.assertEqual("An account with this email already exists", duplicate.json()["detail"])

        self.assertEqual(400, self._register("not-an-email").status_code)
        self.assertEqual(400, self._register("short@example.com", "12345").status_code)

    def test_login_failures(self) -> None:
        self._register("reader@example.com")

        wrong = self._login("reader@example.com", "wrong-password")
        self.assertEqual(401, wrong.status_code)
        self.assertEqual("Incorrect password", wrong.json()["detail"])

        unknown = self._login("nobody@example.com")
        self.assertEqual(401, unknown.status_code)
        self.assertEqual("No account found with this email address", unknown.json()["detail"])

    def test_logout_clears_session(self) -> None:
        self._register("reader@example.com")
        self._login("reader@example.com")

        self.assertEqual(200, self.client.post("/api/auth/logout").status_code)
        self.assertEqual(401, self.client.get("/api/auth/me").status_code)

    def test_rejects_bad_and_expired_tokens(self) -> None:
        self._register("reader@example.com")
        user_id = self._login("reader@example.com").json()["user_details"]["id"]
        self.client.cookies.clear()

        garbage = self.client.get("/api/chat", headers={"Authorization": "Bearer not-a-token"})
        self.assertEqual(401, garbage.status_code)

        expired = create_access_token(
            {"sub": user_id},
            Settings(SECRET_KEY="test-secret", ACCESS_TOKEN_EXPIRE_MINUTES=-1),
        )
        response = self.client.get("/api/chat", headers={"Authorization": f"Bearer {expired}"})
        self.assertEqual(401, response.status_code)


    def test_bearer_scheme_is_case_insensitive(self) -> None:
        self._register("reader@example.com")
        token = self._login("reader@example.com").json()["access_token"]
        self.client.cookies.clear()

        for scheme in ("bearer", "BEARER"):
            with self.subTest(scheme=scheme):
                response = self.client.get("/api/auth/me", headers={"Authorization": f"{scheme} {token}"})
                self.assertEqual(200, response.status_code)


class AppLifecycleTests(unittest.TestCase):
    def test_default_classifier_client_lives_within_lifespan(self) -> None:
        app = create_app(settings=Settings(SECRET_KEY="test-secret", LOG_LEVEL="WARNING"), engine=make_engine())
        self.assertFalse(hasattr(app.state, "orchestrator"))

        with TestClient(app):
            client = app.state.orchestrator.classifier
            self.assertIsInstance(client, ClassificationClient)
            self.assertFalse(client._client.is_closed)

        self.assertTrue(client._client.is_closed)


class ChatApiTests(ApiTestCase):
    def test_unauthenticated_chat_is_rejected_without_side_effects(self) -> None:
        self.assertEqual(401, self.client.get("/api/chat").status_code)
        response = self.client.post("/api/chat", json={"utterance": "hello", "modelSelector": 1})
        self.assertEqual(401, response.status_code)
        self.assertEqual("Unauthenticated", response.json()["detail"])
        self.assertEqual([], self.classifier.calls)

        headers = self._bearer("reader@example.com")
        self.assertEqual([], self.client.get("/api/chat", headers=headers).json())

    def test_empty_body_creates_thread(self) -> None:
        headers = self._bearer("reader@example.com")

        response = self.client.post("/api/chat", headers=headers)

        self.assertEqual(200, response.status_code)
        body = response.json()
        self.assertEqual({"id", "title", "messages", "createdAt"}, set(body))
        self.assertEqual("New Chat", body["title"])
        self.assertEqual([], body["messages"])

    def test_chat_turn_round_trip(self) -> None:
        headers = self._bearer("reader@example.com")
        thread_id = self.client.post("/api/chat", headers=headers, json={}).json()["id"]

        response = self.client.post(
            "/api/chat",
            headers=headers,
            json={"threadId": thread_id, "utterance": "How good is this product", "modelSelector": 2},
        )

        self.assertEqual(200, response.status_code)
        body = response.json()
        self.assertEqual(thread_id, body["id"])
        user_message, reply = body["messages"]
        self.assertEqual({"role": "USER", "content": "How good is this product"}, {k: user_message[k] for k in ("role", "content")})
        self.assertEqual("ASSISTANT", reply["role"])
        self.assertIn("PhoBERT", reply["content"])
        self.assertEqual(2, reply["modelType"])
        self.assertEqual({"result": "Kinh doanh", "confidence": None}, reply["classification"])

        threads = self.client.get("/api/chat", headers=headers).json()
        self.assertEqual(1, len(threads))
        self.assertEqual(2, len(threads[0]["messages"]))

    def test_cookie_session_is_accepted(self) -> None:
        self._register("reader@example.com")
        self._login("reader@example.com")

        response = self.client.post("/api/chat", json={"utterance": "text"})

        self.assertEqual(200, response.status_code)
        self.assertEqual(1, response.json()["messages"][1]["modelType"])

    def test_foreign_thread_is_not_visible(self) -> None:
        alice = self._bearer("alice@example.com")
        bob = self._bearer("bob@example.com")
        alice_thread = self.client.post("/api/chat", headers=alice, json={"utterance": "secret"}).json()

        response = self.client.post("/api/chat", headers=bob, json={"threadId": alice_thread["id"], "utterance": "hi"})

        self.assertNotEqual(alice_thread["id"], response.json()["id"])
        alice_threads = self.client.get("/api/chat", headers=alice).json()
        self.assertEqual(2, len(alice_threads[0]["messages"]))

    def test_rejects_unknown_model_selector(self) -> None:
        headers = self._bearer("reader@example.com")
        response = self.client.post("/api/chat", headers=headers, json={"utterance": "text", "modelSelector": 3})
        self.assertEqual(422, response.status_code)

    def test_rename_thread(self) -> None:
        headers = self._bearer("reader@example.com")
        thread_id = self.client.post("/api/chat", headers=headers).json()["id"]

        renamed = self.client.patch(f"/api/chat/{thread_id}", headers=headers, json={"title": "Thể thao"})
        self.assertEqual(200, renamed.status_code)
        self.assertEqual("Thể thao", renamed.json()["title"])

        self.assertEqual(400, self.client.patch(f"/api/chat/{thread_id}", headers=headers, json={"title": "   "}).status_code)
        other = self._bearer("other@example.com")
        self.assertEqual(404, self.client.patch(f"/api/chat/{thread_id}", headers=other, json={"title": "x"}).status_code)

    def test_persistence_failure_is_reported(self) -> None:
        headers = self._bearer("reader@example.com")
        store = self.app.state.conversation_store
        with patch.object(store, "save_thread", side_effect=PersistenceFailure("disk full")):
            response = self.client.post("/api/chat", headers=headers, json={"utterance": "text"})

        self.assertEqual(500, response.status_code)
        self.assertEqual("Could not save the conversation", response.json()["detail"])


class MiscApiTests(ApiTestCase):
    def test_categories(self) -> None:
        body = self.client.get("/api/categories").json()
        self.assertEqual(10, len(body["categories"]))
        self.assertIn({"apiLabel": "Suc khoe", "displayLabel": "Sức khỏe", "description": "Health"}, body["categories"])
        self.assertEqual({"1": "ViT5", "2": "PhoBERT"}, body["models"])

    def test_health(self) -> None:
        self.assertEqual({"status": "healthy"}, self.client.get("/health").json())


if __name__ == "__main__":
    unittest.main()
