# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: Hyperbolic HTTP client (/completions, /embeddings).

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from infrastructures.llm.errors import (
    LlmProviderError,
    LlmRateLimitError,
    LlmTimeoutError,
    LlmTransportError,
)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class HyperbolicResponse:
    raw: Dict[str, Any]
    latency_ms: int


class HyperbolicClient:
    """Raw JSON-over-HTTP access to the Hyperbolic API.

    Status mapping:
      - 429 -> LlmRateLimitError
      - any other non-2xx -> LlmProviderError carrying the status and body
      - network failures -> LlmTimeoutError / LlmTransportError

    Without an injected `http_client` every call opens and closes its own
    httpx.AsyncClient, so nothing stays open between calls.
    """

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        provider_tag: str = "hyperbolic",
        timeout_seconds: int = 60,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.base_url = (base_url or "").rstrip("/")
        self.api_key = api_key
        self.provider_tag = provider_tag
        self.timeout_seconds = max(1, int(timeout_seconds))
        self._http_client = http_client

    def _headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _url(self, path: str) -> str:
        if path.startswith("/"):
            return f"{self.base_url}{path}"
        return f"{self.base_url}/{path}"

    async def _send(self, url: str, payload: Dict[str, Any], timeout: httpx.Timeout) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(url, headers=self._headers(), json=payload, timeout=timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            return await client.post(url, headers=self._headers(), json=payload)

    async def _post_json(self, path: str, payload: Dict[str, Any]) -> HyperbolicResponse:
        t0 = _now_ms()
        timeout = httpx.Timeout(float(self.timeout_seconds))
        url = self._url(path)

        try:
            resp = await self._send(url, payload, timeout)
        except httpx.TimeoutException as e:
            raise LlmTimeoutError(provider=self.provider_tag) from e
        except httpx.HTTPError as e:
            raise LlmTransportError(str(e) or type(e).__name__, provider=self.provider_tag) from e

        latency = _now_ms() - t0
        if resp.status_code == 429:
            raise LlmRateLimitError(provider=self.provider_tag, details={"text": resp.text[:5000]})
        if not resp.is_success:
            raise LlmProviderError(
                f"Hyperbolic API error: {resp.status_code} - {resp.text[:5000]}",
                provider=self.provider_tag,
                upstream_status=resp.status_code,
                details={"status_code": resp.status_code, "text": resp.text[:5000]},
            )

        try:
            j = resp.json()
        except ValueError as e:
            raise LlmProviderError(
                "invalid json from upstream",
                provider=self.provider_tag,
                upstream_status=resp.status_code,
                details={"text": resp.text[:5000]},
            ) from e
        if not isinstance(j, dict):
            raise LlmProviderError(
                "unexpected json shape from upstream",
                provider=self.provider_tag,
                upstream_status=resp.status_code,
                details={"text": resp.text[:5000]},
            )

        return HyperbolicResponse(raw=j, latency_ms=int(latency))

    async def completions(self, *, payload: Dict[str, Any]) -> HyperbolicResponse:
        return await self._post_json("/completions", payload)

    async def embeddings(self, *, payload: Dict[str, Any]) -> HyperbolicResponse:
        return await self._post_json("/embeddings", payload)
