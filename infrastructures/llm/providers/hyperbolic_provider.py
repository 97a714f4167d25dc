# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: Hyperbolic provider adapter (prompt-style completions + embeddings).

from __future__ import annotations

import asyncio
import json
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

import httpx

from domains.llm_request_domain import LlmMessage, LlmRole, TurnLike
from infrastructures.keys import FileEnvKeySource, KeySource
from infrastructures.llm.clients.hyperbolic_client import HyperbolicClient
from infrastructures.llm.errors import LlmConfigError, LlmError, LlmProviderError
from infrastructures.llm.preprocess.strict_format import strict_format
from infrastructures.llm.providers.provider_base import LlmProviderBase
from infrastructures.vconfig import vconfig
from infrastructures.vlogger import vlogger

MODEL_PREFIX = "hyperbolic/"
API_KEY_NAME = "HYPERBOLIC_API_KEY"
EMBEDDING_MODEL = "text-embedding-3-small"
FALLBACK_REPLY = "My brain disconnected, try again."

TEMPERATURE = 0.7
MAX_TOKENS = 1024


def _now_ms() -> float:
    return time.time() * 1000.0


def _extract_model_name(model_id: str) -> str:
    """`hyperbolic/<model>` -> `<model>`."""

    if not model_id or not model_id.startswith(MODEL_PREFIX):
        raise LlmConfigError(
            f'Hyperbolic model names must start with "{MODEL_PREFIX}"',
            provider="hyperbolic",
            details={"model_name": model_id},
        )
    return model_id[len(MODEL_PREFIX) :]


def build_prompt(messages: Iterable[LlmMessage]) -> str:
    """Flatten role-tagged turns into one completion prompt ending in `Assistant:`."""

    prompt = ""
    for m in messages:
        if m.role == LlmRole.system:
            prompt += f"System: {m.content}\n\n"
        elif m.role == LlmRole.user:
            prompt += f"Human: {m.content}\n"
        elif m.role == LlmRole.assistant:
            prompt += f"Assistant: {m.content}\n"
    return prompt + "Assistant:"


class HyperbolicProvider(LlmProviderBase):
    """Hyperbolic adapter.

    Every outbound call goes through a per-instance throttle gate that keeps
    call starts at least `min_interval_ms` apart. Completions retry on 429
    with a fixed backoff; embeddings never retry.
    """

    provider_name = "hyperbolic"

    def __init__(
        self,
        model_name: str,
        url: Optional[str] = None,
        *,
        key_source: Optional[KeySource] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        formatter: Callable[[Iterable[TurnLike]], List[LlmMessage]] = strict_format,
        min_interval_ms: int = 1000,
        max_attempts: int = 3,
        retry_backoff_seconds: float = 2.0,
        timeout_seconds: Optional[int] = None,
    ) -> None:
        self.model_name = _extract_model_name(model_name)
        self.url = (url or vconfig.hyperbolic_base_url).rstrip("/")

        source = key_source if key_source is not None else FileEnvKeySource()
        self._api_key = source.get_key(API_KEY_NAME)

        self._formatter = formatter
        self._min_interval_ms = max(0, int(min_interval_ms))
        self._max_attempts = max(1, int(max_attempts))
        self._retry_backoff_seconds = max(0.0, float(retry_backoff_seconds))
        self._last_request_ms = 0.0
        self._last_request_mono: Optional[float] = None
        self._gate = asyncio.Lock()

        self._client = HyperbolicClient(
            base_url=self.url,
            api_key=self._api_key,
            provider_tag=self.provider_name,
            timeout_seconds=int(timeout_seconds or vconfig.hyperbolic_timeout_seconds),
            http_client=http_client,
        )

    @property
    def min_interval_ms(self) -> int:
        return self._min_interval_ms

    @property
    def last_request_ms(self) -> float:
        return self._last_request_ms

    async def _check_rate_limit(self) -> None:
        async with self._gate:
            if self._last_request_mono is not None:
                elapsed_ms = (time.monotonic() - self._last_request_mono) * 1000.0
                if elapsed_ms < self._min_interval_ms:
                    await asyncio.sleep((self._min_interval_ms - elapsed_ms) / 1000.0)
            self._last_request_mono = time.monotonic()
            self._last_request_ms = max(self._last_request_ms, _now_ms())

    # -----------------------------
    # Payload builders
    # -----------------------------

    def _build_messages(self, turns: Iterable[TurnLike], system_message: Optional[str]) -> List[LlmMessage]:
        msgs = list(self._formatter(turns))
        if system_message:
            msgs.insert(0, LlmMessage(role=LlmRole.system, content=system_message))
        return msgs

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "prompt": prompt,
            "model": self.model_name,
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
            "stream": False,
        }

    # -----------------------------
    # Response mapping
    # -----------------------------

    def _parse_text(self, raw: Dict[str, Any]) -> str:
        try:
            text = raw["choices"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            raise LlmProviderError(
                "completion response has no choices[0].text",
                provider=self.provider_name,
                details={"raw": raw},
            ) from e
        if not isinstance(text, str):
            raise LlmProviderError(
                "completion choices[0].text is not a string",
                provider=self.provider_name,
                details={"raw": raw},
            )
        return text.strip()

    def _parse_embedding(self, raw: Dict[str, Any]) -> List[float]:
        try:
            vec = raw["data"][0]["embedding"]
        except (KeyError, IndexError, TypeError) as e:
            raise LlmProviderError(
                "embedding response has no data[0].embedding",
                provider=self.provider_name,
                details={"raw": raw},
            ) from e
        # bool is an int subclass
        if not isinstance(vec, list) or not all(
            isinstance(x, (int, float)) and not isinstance(x, bool) for x in vec
        ):
            raise LlmProviderError(
                "embedding data[0].embedding is not a list of numbers",
                provider=self.provider_name,
                details={"raw": raw},
            )
        return list(vec)

    # -----------------------------
    # Public API
    # -----------------------------

    async def generate(self, turns: Iterable[TurnLike], system_message: Optional[str] = None) -> str:
        await self._check_rate_limit()

        try:
            payload = self._build_payload(build_prompt(self._build_messages(turns, system_message)))
        except Exception:
            vlogger.exception("hyperbolic prompt build failed model=%s", self.model_name)
            return FALLBACK_REPLY
        vlogger.debug("hyperbolic request payload=%s", json.dumps(payload, ensure_ascii=False, indent=2))

        attempts_left = self._max_attempts
        while attempts_left > 0:
            vlogger.info("sending request to hyperbolic model=%s attempts_left=%s", self.model_name, attempts_left)
            try:
                resp = await self._client.completions(payload=payload)
                text = self._parse_text(resp.raw)
                vlogger.info("hyperbolic response model=%s latency_ms=%s", self.model_name, resp.latency_ms)
                return text
            except LlmError as e:
                if not e.is_rate_limited:
                    vlogger.error(
                        "hyperbolic request failed model=%s status=%s error=%s details=%s",
                        self.model_name,
                        e.upstream_status,
                        e,
                        e.details,
                    )
                    return FALLBACK_REPLY
                attempts_left -= 1
                vlogger.warning("hyperbolic rate limited model=%s attempts_left=%s", self.model_name, attempts_left)
                if attempts_left > 0:
                    await asyncio.sleep(self._retry_backoff_seconds)
            except Exception:
                vlogger.exception("hyperbolic request crashed model=%s", self.model_name)
                return FALLBACK_REPLY

        vlogger.error("hyperbolic retries exhausted model=%s", self.model_name)
        return FALLBACK_REPLY

    async def embed(self, text: str) -> Optional[List[float]]:
        await self._check_rate_limit()

        try:
            resp = await self._client.embeddings(payload={"input": text, "model": EMBEDDING_MODEL})
            return self._parse_embedding(resp.raw)
        except LlmError as e:
            if e.is_rate_limited:
                vlogger.info("rate limited on hyperbolic embeddings, falling back to word overlap")
                return None
            vlogger.error(
                "hyperbolic embedding failed status=%s error=%s details=%s",
                e.upstream_status,
                e,
                e.details,
            )
            return None
        except Exception:
            vlogger.exception("hyperbolic embedding crashed, falling back to word overlap")
            return None
