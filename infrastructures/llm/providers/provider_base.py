# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: Provider interface contracts (no business logic).

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from domains.llm_request_domain import TurnLike


class LlmProviderBase(ABC):
    """All providers implement a unified interface.

    Notes:
      - Implementations are pure I/O adapters for one vendor HTTP API.
      - Request-time failures are absorbed by the adapter: `generate` returns a
        fallback reply and `embed` returns None, so agent loops need no retry
        logic of their own.
    """

    provider_name: str

    @abstractmethod
    async def generate(self, turns: Iterable[TurnLike], system_message: Optional[str] = None) -> str:
        raise NotImplementedError

    @abstractmethod
    async def embed(self, text: str) -> Optional[List[float]]:
        raise NotImplementedError
