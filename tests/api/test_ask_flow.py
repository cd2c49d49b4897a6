"""
End-to-end API flow over SQLite with deterministic providers.

Index a lesson, ask about it, then read the interaction back from history.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from dsa_assistant.api.deps import ServiceCache, get_service_cache
from dsa_assistant.api.main import create_app
from dsa_assistant.boundary.db import get_async_db
from dsa_assistant.configs import Settings
from dsa_assistant.configs.rate_limit import RateLimitSettings


@pytest.fixture
def app(test_async_db, embedding_provider, completion_provider, rag_settings):
    settings = Settings(rag=rag_settings, rate_limit=RateLimitSettings(requests_per_minute=5))
    cache = ServiceCache(
        settings=settings,
        embedding_provider=embedding_provider,
        completion_provider=completion_provider,
    )

    async def override_db():
        yield test_async_db

    application = create_app()
    application.dependency_overrides[get_async_db] = override_db
    application.dependency_overrides[get_service_cache] = lambda: cache
    return application


@pytest.mark.asyncio
async def test_index_ask_and_history(app, seeded_content, completion_provider):
    headers = {"X-User-Id": "alice"}

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        embed = await ac.post(
            "/api/v1/chat/embed-content",
            json={"lesson_id": str(seeded_content.arrays_lesson_id)},
        )
        assert embed.status_code == 200
        assert embed.json()["chunks_created"] == 2

        ask = await ac.post("/api/v1/chat/ask", json={"message": "What is an array?"}, headers=headers)
        assert ask.status_code == 200
        body = ask.json()
        assert body["id"].startswith("chat_")
        assert body["content"] == "Generated answer"
        assert body["confidence_score"] > 0.5
        assert [c["chapter_title"] for c in body["related_chapters"]] == ["Arrays"]
        assert ask.headers["X-RateLimit-Remaining"] == "4"

        history = await ac.get("/api/v1/chat/history", headers=headers)

    assert history.status_code == 200
    page = history.json()
    assert page["total"] == 1
    assert page["has_more"] is False
    item = page["items"][0]
    assert item["status"] == "completed"
    assert item["question"] == "What is an array?"
    assert item["response"] == "Generated answer"
    assert item["related_chapter_ids"] == [str(seeded_content.arrays_chapter_id)]
    assert len(completion_provider.calls) == 1


@pytest.mark.asyncio
async def test_unknown_lesson_returns_404(app, seeded_content):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.post(
            "/api/v1/chat/embed-content",
            json={"lesson_id": "00000000-0000-0000-0000-000000000000"},
        )

    assert response.status_code == 404
    assert response.json()["error_type"] == "not_found"
