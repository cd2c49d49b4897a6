"""
Test suite for the chat and chatbot HTTP endpoints.

Service layer is mocked; the rate limiter and exception handlers are real.

System role: Verification of HTTP contracts, rate limit headers and error mapping
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from dsa_assistant.api.deps import (
    ServiceCache,
    get_chat_service,
    get_embedding_service,
    get_service_cache,
    get_tutor_chat_service,
)
from dsa_assistant.api.main import create_app
from dsa_assistant.application.services.embedding_service import EmbedAllResult
from dsa_assistant.configs import Settings
from dsa_assistant.configs.rate_limit import RateLimitSettings
from dsa_assistant.core.exceptions import (
    ContentNotFoundError,
    InternalInconsistencyError,
    ProviderError,
)
from dsa_assistant.models.chat import (
    ChapterReference,
    ChatHistoryPage,
    ChatMessageResponse,
    ChatResponse,
)

HEADERS = {"X-User-Id": "alice"}


@pytest.fixture
def service_cache() -> ServiceCache:
    """Service cache with a limit of 2 requests per minute and no real providers."""
    settings = Settings(rate_limit=RateLimitSettings(requests_per_minute=2, window_size_seconds=60))
    return ServiceCache(settings=settings, embedding_provider=AsyncMock(), completion_provider=AsyncMock())


@pytest.fixture
def mock_chat_service() -> AsyncMock:
    service = AsyncMock()
    service.ask = AsyncMock(
        return_value=ChatResponse(
            id=f"chat_{uuid.uuid4()}",
            content="An array is contiguous memory.",
            confidence_score=0.82,
            related_chapters=[
                ChapterReference(chapter_id=uuid.uuid4(), chapter_title="Arrays", relevance_score=1.0)
            ],
            timestamp=datetime.now(timezone.utc),
        )
    )
    service.history = AsyncMock(
        return_value=ChatHistoryPage(items=[], total=0, page=0, size=20, has_more=False)
    )
    return service


@pytest.fixture
def mock_embedding_service() -> AsyncMock:
    service = AsyncMock()
    service.embed_document = AsyncMock(return_value=3)
    service.embed_all_lessons = AsyncMock(
        return_value=EmbedAllResult(lessons_processed=2, lessons_failed=1, chunks_created=7)
    )
    return service


@pytest.fixture
def mock_tutor_service() -> AsyncMock:
    service = AsyncMock()
    service.process_message = AsyncMock(
        return_value=ChatMessageResponse(
            id="msg_1",
            content="A stack is LIFO.",
            timestamp=datetime.now(timezone.utc),
        )
    )
    return service


@pytest.fixture
def client(service_cache, mock_chat_service, mock_embedding_service, mock_tutor_service) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_service_cache] = lambda: service_cache
    app.dependency_overrides[get_chat_service] = lambda: mock_chat_service
    app.dependency_overrides[get_embedding_service] = lambda: mock_embedding_service
    app.dependency_overrides[get_tutor_chat_service] = lambda: mock_tutor_service
    return TestClient(app)


class TestAskEndpoint:
    """Test suite for POST /api/v1/chat/ask."""

    def test_ask_returns_answer_with_rate_limit_headers(self, client, mock_chat_service) -> None:
        # Act
        response = client.post("/api/v1/chat/ask", json={"message": "What is an array?"}, headers=HEADERS)

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["content"] == "An array is contiguous memory."
        assert body["related_chapters"][0]["chapter_title"] == "Arrays"
        assert response.headers["X-RateLimit-Limit"] == "2"
        assert response.headers["X-RateLimit-Remaining"] == "1"
        mock_chat_service.ask.assert_awaited_once_with("What is an array?", "alice")

    def test_ask_over_limit_returns_429(self, client, mock_chat_service) -> None:
        # Arrange
        for _ in range(2):
            assert client.post("/api/v1/chat/ask", json={"message": "q"}, headers=HEADERS).status_code == 200

        # Act
        response = client.post("/api/v1/chat/ask", json={"message": "q"}, headers=HEADERS)

        # Assert
        assert response.status_code == 429
        assert response.json()["error_type"] == "rate_limited"
        assert response.headers["X-RateLimit-Remaining"] == "0"
        assert int(response.headers["Retry-After"]) > 0
        assert mock_chat_service.ask.await_count == 2

    def test_rate_limit_is_per_user(self, client) -> None:
        for _ in range(2):
            client.post("/api/v1/chat/ask", json={"message": "q"}, headers=HEADERS)

        response = client.post("/api/v1/chat/ask", json={"message": "q"}, headers={"X-User-Id": "bob"})

        assert response.status_code == 200

    def test_missing_user_header_returns_400(self, client) -> None:
        response = client.post("/api/v1/chat/ask", json={"message": "What is an array?"})

        assert response.status_code == 400
        assert response.json()["error_type"] == "invalid_argument"

    @pytest.mark.parametrize("message", ["", "   ", "z" * 2001])
    def test_invalid_message_returns_400(self, client, mock_chat_service, message) -> None:
        response = client.post("/api/v1/chat/ask", json={"message": message}, headers=HEADERS)

        assert response.status_code == 400
        mock_chat_service.ask.assert_not_called()

    def test_provider_failure_returns_503(self, client, mock_chat_service) -> None:
        mock_chat_service.ask.side_effect = ProviderError("timed out", provider="embedding")

        response = client.post("/api/v1/chat/ask", json={"message": "q"}, headers=HEADERS)

        assert response.status_code == 503
        assert response.json()["error"] == "AI service temporarily unavailable. Please try again later."

    def test_internal_inconsistency_returns_500(self, client, mock_chat_service) -> None:
        mock_chat_service.ask.side_effect = InternalInconsistencyError("count mismatch")

        response = client.post("/api/v1/chat/ask", json={"message": "q"}, headers=HEADERS)

        assert response.status_code == 500
        assert response.json()["error_type"] == "internal_error"


class TestEmbedEndpoints:
    """Test suite for the embedding endpoints."""

    def test_embed_content(self, client, mock_embedding_service) -> None:
        # Arrange
        lesson_id = uuid.uuid4()

        # Act
        response = client.post(
            "/api/v1/chat/embed-content",
            json={"lesson_id": str(lesson_id), "chunk_size": 300, "chunk_overlap": 30},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["chunks_created"] == 3
        assert body["status"] == "SUCCESS"
        mock_embedding_service.embed_document.assert_awaited_once_with(
            lesson_id, chunk_size=300, chunk_overlap=30
        )

    def test_embed_content_unknown_lesson_returns_404(self, client, mock_embedding_service) -> None:
        lesson_id = uuid.uuid4()
        mock_embedding_service.embed_document.side_effect = ContentNotFoundError("Lesson", lesson_id)

        response = client.post("/api/v1/chat/embed-content", json={"lesson_id": str(lesson_id)})

        assert response.status_code == 404
        assert response.json()["error"] == f"Lesson not found with id: {lesson_id}"

    def test_embed_content_overlap_not_below_size_returns_400(self, client) -> None:
        response = client.post(
            "/api/v1/chat/embed-content",
            json={"lesson_id": str(uuid.uuid4()), "chunk_size": 50, "chunk_overlap": 50},
        )

        assert response.status_code == 400

    def test_embed_all(self, client) -> None:
        response = client.post("/api/v1/chat/embed-all")

        assert response.status_code == 200
        body = response.json()
        assert body["lessons_processed"] == 2
        assert body["lessons_failed"] == 1
        assert body["chunks_created"] == 7


class TestHistoryAndStatus:
    """Test suite for history and rate limit status endpoints."""

    def test_history_passes_paging(self, client, mock_chat_service) -> None:
        response = client.get("/api/v1/chat/history?page=2&size=5", headers=HEADERS)

        assert response.status_code == 200
        mock_chat_service.history.assert_awaited_once_with("alice", page=2, size=5)

    def test_history_rejects_negative_page(self, client) -> None:
        response = client.get("/api/v1/chat/history?page=-1", headers=HEADERS)

        assert response.status_code == 400

    def test_rate_limit_status_does_not_consume(self, client) -> None:
        # Arrange
        client.post("/api/v1/chat/ask", json={"message": "q"}, headers=HEADERS)

        # Act
        first = client.get("/api/v1/chat/rate-limit", headers=HEADERS)
        second = client.get("/api/v1/chat/rate-limit", headers=HEADERS)

        # Assert
        assert first.json()["remaining_requests"] == 1
        assert second.json()["remaining_requests"] == 1
        assert first.json()["allowed"] is True
        assert first.headers["X-RateLimit-Limit"] == "2"


class TestChatbotEndpoint:
    """Test suite for POST /api/v1/chatbot/chat."""

    def test_chatbot_reply(self, client, mock_tutor_service) -> None:
        response = client.post("/api/v1/chatbot/chat", json={"message": "What is a stack?"}, headers=HEADERS)

        assert response.status_code == 200
        assert response.json()["content"] == "A stack is LIFO."
        assert response.json()["role"] == "assistant"
        mock_tutor_service.process_message.assert_awaited_once_with("What is a stack?")

    def test_chatbot_shares_rate_limit_window(self, client) -> None:
        for _ in range(2):
            client.post("/api/v1/chat/ask", json={"message": "q"}, headers=HEADERS)

        response = client.post("/api/v1/chatbot/chat", json={"message": "q"}, headers=HEADERS)

        assert response.status_code == 429
