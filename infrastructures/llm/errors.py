# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: LLM infrastructure error types (no business logic).

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class LlmError(Exception):
    """Base error for LLM infrastructure.

    `upstream_status` is what the remote service actually answered, if anything.
    """

    code: str
    message: str
    provider: Optional[str] = None
    upstream_status: Optional[int] = None
    details: Optional[Dict[str, Any]] = None

    def __str__(self) -> str:
        if self.upstream_status is not None:
            return f"{self.code}: {self.message} (upstream_status={self.upstream_status})"
        return f"{self.code}: {self.message}"

    @property
    def is_rate_limited(self) -> bool:
        return self.upstream_status == 429


class LlmConfigError(LlmError):
    def __init__(self, message: str, *, provider: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            code="llm.config_error",
            message=message,
            provider=provider,
            details=details,
        )


class LlmCredentialError(LlmError):
    def __init__(self, message: str, *, key_name: Optional[str] = None):
        super().__init__(
            code="llm.credential_error",
            message=message,
            details={"key_name": key_name} if key_name else None,
        )


class LlmProviderError(LlmError):
    def __init__(
        self,
        message: str,
        *,
        provider: Optional[str] = None,
        code: str = "llm.provider_error",
        upstream_status: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            provider=provider,
            upstream_status=upstream_status,
            details=details,
        )


class LlmRateLimitError(LlmProviderError):
    def __init__(self, message: str = "LLM rate limited", *, provider: Optional[str] = None, details=None):
        super().__init__(
            message,
            provider=provider,
            code="llm.rate_limited",
            upstream_status=429,
            details=details,
        )


class LlmTransportError(LlmProviderError):
    def __init__(self, message: str, *, provider: Optional[str] = None, code: str = "llm.transport_error"):
        super().__init__(message, provider=provider, code=code)


class LlmTimeoutError(LlmTransportError):
    def __init__(self, message: str = "LLM request timed out", *, provider: Optional[str] = None):
        super().__init__(message, provider=provider, code="llm.timeout")
