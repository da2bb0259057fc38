from __future__ import annotations

import logging
from typing import Optional, Protocol

import httpx

from .errors import ModerationError
from .models import ModerationAnalysis


class ModerationService(Protocol):
    """Anything able to screen review text."""

    async def moderate_review(self, text: str) -> ModerationAnalysis: ...

    async def aclose(self) -> None: ...


class ModerationClient:
    """
    Async HTTP client for an OpenAI-compatible moderation API.

    Responsibilities:
    - moderate_review: POST {base_url}/moderations with {"input": text}

    Failures are raised as ``ModerationError``; the caller decides whether to retry.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    async def moderate_review(self, text: str) -> ModerationAnalysis:
        body: dict[str, str] = {"input": text}
        if self.model:
            body["model"] = self.model
        try:
            self._logger.debug("ModerationClient.moderate_review: POST %s/moderations", self.base_url)
            r = await self._client.post(f"{self.base_url}/moderations", headers=self._headers(), json=body)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ModerationError(
                f"Moderation request failed: {e.response.status_code}",
                status_code=e.response.status_code,
                details=e.response.text,
            ) from e
        except httpx.RequestError as e:
            raise ModerationError(f"Moderation service unreachable: {e}") from e

        data = r.json()
        results = data.get("results") if isinstance(data, dict) else None
        if not results:
            raise ModerationError("Unexpected response shape from moderation", status_code=r.status_code, details=data)
        analysis = ModerationAnalysis.model_validate(results[0])
        self._logger.debug("ModerationClient.moderate_review: flagged=%s", analysis.flagged)
        return analysis

    async def aclose(self) -> None:
        await self._client.aclose()
