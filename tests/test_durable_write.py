from unittest.mock import Mock, patch

from app.services.conversation_service import ConversationRecord, log_conversation
from app.services.durable_write import DurableWriteRetrier

PAYLOAD = {"text_hash": "abc", "agent_type": "LEXI", "storage": "redis", "access_count": 1}


class TestDurableWriteRetrier:
    def test_first_attempt_success(self, retrier, db_session, sleeps):
        assert retrier.write("voice_cache", PAYLOAD) is True

        db_session.execute.assert_called_once()
        db_session.commit.assert_called_once()
        db_session.close.assert_called_once()
        assert sleeps == []

    def test_retries_then_succeeds(self, retrier, db_session, sleeps):
        db_session.execute.side_effect = [Exception("connection reset"), None]

        assert retrier.write("voice_cache", PAYLOAD) is True
        assert db_session.execute.call_count == 2
        assert sleeps == [0.4]

    def test_gives_up_after_three_attempts(self, retrier, db_session, sleeps):
        db_session.execute.side_effect = Exception("db down")

        result = retrier.write("conversations", {"session_id": "x"})

        assert result is False
        assert db_session.execute.call_count == 3
        assert db_session.rollback.call_count == 3
        assert db_session.close.call_count == 3

    def test_backoff_is_linear_and_strictly_increasing(self, retrier, db_session, sleeps):
        db_session.execute.side_effect = Exception("db down")

        retrier.write("conversations", {"session_id": "x"})

        assert sleeps == [0.4, 0.8]
        assert all(earlier < later for earlier, later in zip(sleeps, sleeps[1:]))

    def test_session_factory_failure_does_not_raise(self, sleeps):
        factory = Mock(side_effect=Exception("pool exhausted"))
        retrier = DurableWriteRetrier(factory, sleep=sleeps.append)

        assert retrier.write("conversations", {"session_id": "x"}) is False
        assert factory.call_count == 3

    def test_unknown_table_is_a_failed_write(self, retrier, session_factory):
        assert retrier.write("no_such_table", {"a": 1}) is False
        session_factory.assert_not_called()

    @patch("app.services.durable_write.logger")
    def test_logs_error_only_after_final_attempt(self, mock_logger, retrier, db_session):
        db_session.execute.side_effect = [Exception("1"), Exception("2"), None]
        retrier.write("voice_cache", PAYLOAD)
        mock_logger.error.assert_not_called()

        db_session.execute.side_effect = Exception("down")
        retrier.write("voice_cache", PAYLOAD)
        mock_logger.error.assert_called_once()


class TestLogConversation:
    def test_writes_conversation_payload(self):
        retrier = Mock()
        retrier.write.return_value = True
        record = ConversationRecord(
            session_id="+2348012345678",
            platform="whatsapp",
            message="hi",
            response="hello",
            agent="LEXI",
        )

        assert log_conversation(retrier, record) is True
        retrier.write.assert_called_once_with(
            "conversations",
            {
                "session_id": "+2348012345678",
                "platform": "whatsapp",
                "message": "hi",
                "response": "hello",
                "agent": "LEXI",
                "cost": 0,
            },
        )
