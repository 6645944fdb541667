"""Tests for wire and domain models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from coachai.models.chat import ChatSession, ChatSessionCreate, Message, Sender, Technology
from coachai.models.session import Credentials, RefreshResponse, SignInResponse


class TestSessionModels:
    """Tests for token payloads."""

    def test_sign_in_response_accepts_misspelt_refresh_field(self):
        data = SignInResponse.model_validate(
            {"accessToken": "tok1", "refreshTokem": "ref1", "expirationTime": None}
        )

        assert data.refresh_token == "ref1"

    def test_sign_in_response_accepts_correct_refresh_field(self):
        data = SignInResponse.model_validate({"accessToken": "tok1", "refreshToken": "ref1"})

        assert data.refresh_token == "ref1"
        assert data.expiration_time is None

    def test_sign_in_response_requires_tokens(self):
        with pytest.raises(ValidationError):
            SignInResponse.model_validate({"accessToken": "tok1"})

    def test_refresh_response(self):
        data = RefreshResponse.model_validate(
            {"accessToken": "tok2", "expirationDate": "2030-01-01T00:00:00"}
        )

        assert data.expiration_time == datetime(2030, 1, 1)

    def test_password_hidden_from_repr(self):
        assert "Secret123" not in repr(Credentials(email="a@b.cd", password="Secret123"))


class TestChatModels:
    """Tests for chat payloads."""

    def test_message_from_wire(self):
        message = Message.model_validate(
            {"value": "Hi", "senderType": "Ai", "createdAt": "2024-01-15T10:00:00"}
        )

        assert message.sender == Sender.ASSISTANT
        assert message.is_user is False

    def test_message_timestamp_parsed_when_possible(self):
        message = Message.model_validate(
            {"value": "Hi", "senderType": "User", "createdAt": "2024-01-15T10:00:00"}
        )

        assert message.timestamp == datetime(2024, 1, 15, 10, 0, 0)

    def test_message_keeps_unparseable_timestamp(self):
        message = Message.model_validate(
            {"value": "Hi", "senderType": "User", "createdAt": "t0"}
        )

        assert message.timestamp == "t0"

    @pytest.mark.parametrize("raw", ["Assistant", "ai", "AI"])
    def test_sender_aliases(self, raw):
        assert Sender(raw) == Sender.ASSISTANT

    def test_message_is_immutable(self):
        message = Message(text="Hi", sender=Sender.USER, timestamp=datetime.now())

        with pytest.raises(ValidationError):
            message.text = "changed"

    def test_chat_session_from_wire(self):
        chat = ChatSession.model_validate(
            {
                "id": "c1",
                "name": "Prep",
                "technology": "DevOps",
                "grade": "Trainee",
                "questionsAmount": 3,
                "createdAt": "2024-01-15T10:00:00",
            }
        )

        assert chat.question_count == 3
        assert chat.title == "Prep - DevOps (Trainee)"

    def test_create_request_wire_format(self):
        request = ChatSessionCreate(name="Prep", technology=Technology.JAVA, grade="Senior")

        assert request.model_dump(by_alias=True) == {
            "id": request.id,
            "name": "Prep",
            "technology": "Java",
            "grade": "Senior",
            "questionsAmount": 5,
        }
