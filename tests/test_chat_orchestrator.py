import unittest
import uuid

from sqlalchemy import func, select

from textclass_chat.api.chat_orchestrator import DEGRADED_REPLY, ChatOrchestrator, format_reply
from textclass_chat.api.exceptions import ClassificationUnavailable, Unauthenticated
from textclass_chat.api.models import ClassificationResult
from textclass_chat.database.entities.conversations import ChatThread as ChatThreadRow

from tests.base import FakeClassifier, StoreTestCase


class ChatOrchestratorTests(StoreTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.user = self._register("reader@example.com")
        self.classifier = FakeClassifier()
        self.orchestrator = ChatOrchestrator(self._store, self.classifier, clock=self._clock)

    def _thread_rows(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count(ChatThreadRow.id)))

    def test_turn_appends_user_message_and_reply(self) -> None:
        thread = self.orchestrator.handle_turn(self.user, None, "Bóng đá Việt Nam thắng lớn", 1)

        self.assertEqual(2, len(thread.messages))
        self.assertEqual("USER", thread.messages[0].role)
        self.assertEqual("Bóng đá Việt Nam thắng lớn", thread.messages[0].content)
        self.assertEqual("ASSISTANT", thread.messages[1].role)
        self.assertEqual([("Bóng đá Việt Nam thắng lớn", 1)], self.classifier.calls)

        persisted = self._store.find_thread(self.user, thread.id)
        self.assertEqual(2, len(persisted.messages))

    def test_phobert_business_reply(self) -> None:
        thread = self.orchestrator.handle_turn(self.user, None, "How good is this product", 2)

        reply = thread.messages[-1]
        self.assertIn("PhoBERT", reply.content)
        self.assertIn("Kinh doanh", reply.content)
        self.assertIn("Business", reply.content)
        self.assertEqual(2, reply.model_type)
        self.assertEqual("Kinh doanh", reply.classification.result)

    def test_reply_restores_diacritics(self) -> None:
        self.classifier.result = "Suc khoe"
        thread = self.orchestrator.handle_turn(self.user, None, "Vaccine mới", 1)
        self.assertIn("**Sức khỏe** (Health)", thread.messages[-1].content)
        self.assertIn("ViT5", thread.messages[-1].content)

    def test_turn_continues_existing_thread(self) -> None:
        first = self.orchestrator.handle_turn(self.user, None, "one", 1)
        second = self.orchestrator.handle_turn(self.user, str(first.id), "two", 2)

        self.assertEqual(first.id, second.id)
        self.assertEqual(4, len(second.messages))
        self.assertEqual(4, len(self._store.find_thread(self.user, first.id).messages))

    def test_blank_utterance_skips_classifier(self) -> None:
        thread = self.orchestrator.handle_turn(self.user, None, None)
        for utterance in ("", "   \n"):
            thread = self.orchestrator.handle_turn(self.user, str(thread.id), utterance)

        self.assertEqual([], thread.messages)
        self.assertEqual([], self.classifier.calls)
        self.assertEqual(1, self._thread_rows())

    def test_default_model_type_is_used(self) -> None:
        orchestrator = ChatOrchestrator(self._store, self.classifier, default_model_type=2)
        orchestrator.handle_turn(self.user, None, "text")
        self.assertEqual([("text", 2)], self.classifier.calls)

    def test_missing_user_is_unauthenticated(self) -> None:
        with self.assertRaises(Unauthenticated):
            self.orchestrator.handle_turn(None, None, "hello", 1)
        self.assertEqual([], self.classifier.calls)
        self.assertEqual(0, self._thread_rows())

    def test_foreign_thread_starts_new_thread(self) -> None:
        other = self._register("other@example.com")
        foreign = self.orchestrator.handle_turn(other, None, "private", 1)

        thread = self.orchestrator.handle_turn(self.user, str(foreign.id), "mine", 1)

        self.assertNotEqual(foreign.id, thread.id)
        self.assertEqual(self.user.id, thread.user_id)
        self.assertEqual(2, len(self._store.find_thread(other, foreign.id).messages))

    def test_unknown_thread_id_starts_new_thread(self) -> None:
        thread = self.orchestrator.handle_turn(self.user, str(uuid.uuid4()), "hi", 1)
        self.assertEqual(2, len(thread.messages))
        self.assertEqual(1, self._thread_rows())

    def test_classifier_failure_sends_degraded_reply(self) -> None:
        self.classifier.error = ClassificationUnavailable("classifier returned 503")

        thread = self.orchestrator.handle_turn(self.user, None, "text", 2)

        reply = thread.messages[-1]
        self.assertEqual(DEGRADED_REPLY, reply.content)
        self.assertIsNone(reply.classification)
        self.assertEqual(2, reply.model_type)
        self.assertEqual(2, len(self._store.find_thread(self.user, thread.id).messages))

    def test_unmapped_label_passes_through(self) -> None:
        self.classifier.result = "Du lich"
        thread = self.orchestrator.handle_turn(self.user, None, "text", 1)
        self.assertIn("**Du lich**", thread.messages[-1].content)

    def test_rejects_unsupported_model_type(self) -> None:
        with self.assertRaises(ValueError):
            self.orchestrator.handle_turn(self.user, None, "text", 7)
        self.assertEqual(0, self._thread_rows())


class FormatReplyTests(unittest.TestCase):
    def test_includes_confidence_when_present(self) -> None:
        reply = format_reply(ClassificationResult(result="The thao", confidence=0.87), 1)
        self.assertEqual(
            "According to the ViT5 model, this text belongs to the category **Thể thao** (Sports). Confidence: 87%.",
            reply,
        )

    def test_omits_confidence_when_absent(self) -> None:
        reply = format_reply(ClassificationResult(result="Vi tinh"), 2)
        self.assertNotIn("Confidence", reply)
        self.assertIn("Computing and Technology", reply)


if __name__ == "__main__":
    unittest.main()
