"""
Unit tests for the moderation HTTP client.

Requests are served by ``httpx.MockTransport``; nothing leaves the process.
"""

import json

import httpx
import pytest

from dashitoon.moderation import ModerationAnalysis, ModerationClient, ModerationError

BASE_URL = "http://mock-moderation/v1"


def _client(handler) -> ModerationClient:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ModerationClient(BASE_URL, api_key="sk-test", model="omni-moderation-latest", client=http)


class TestModerateReview:
    async def test_flagged_result(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "id": "modr-1",
                    "results": [
                        {
                            "flagged": True,
                            "categories": {"harassment": True, "violence": False, "hate": True},
                            "category_scores": {"harassment": 0.91, "violence": 0.02, "hate": 0.7},
                        }
                    ],
                },
            )

        client = _client(handler)
        analysis = await client.moderate_review("You are all idiots")
        await client.aclose()

        assert isinstance(analysis, ModerationAnalysis)
        assert analysis.flagged is True
        assert analysis.flagged_categories == ["harassment", "hate"]
        assert seen["url"] == f"{BASE_URL}/moderations"
        assert seen["auth"] == "Bearer sk-test"
        assert seen["body"] == {"input": "You are all idiots", "model": "omni-moderation-latest"}

    async def test_clean_result(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"results": [{"flagged": False, "categories": {"harassment": False}}]})

        analysis = await _client(handler).moderate_review("A lovely slow burn.")

        assert analysis.flagged is False
        assert analysis.flagged_categories == []

    async def test_http_error_raises_moderation_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, text="rate limited")

        with pytest.raises(ModerationError) as exc_info:
            await _client(handler).moderate_review("text")

        assert exc_info.value.status_code == 429
        assert exc_info.value.details == "rate limited"

    async def test_transport_error_raises_moderation_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ModerationError, match="unreachable"):
            await _client(handler).moderate_review("text")

    @pytest.mark.parametrize("payload", [{"results": []}, {"unexpected": True}, ["not", "a", "dict"]])
    async def test_unexpected_shape(self, payload):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=payload)

        with pytest.raises(ModerationError, match="Unexpected response shape"):
            await _client(handler).moderate_review("text")
