# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: Provider-agnostic conversation turn contracts (no business logic).

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field


class LlmRole(str, Enum):
    system = "system"
    user = "user"
    assistant = "assistant"


class LlmMessage(BaseModel):
    """One conversation turn. Immutable: normalization builds new turns."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    role: LlmRole = Field(...)
    content: str = Field("")


TurnLike = Union[LlmMessage, Mapping[str, Any]]


def to_message(turn: TurnLike) -> LlmMessage:
    if isinstance(turn, LlmMessage):
        return turn
    return LlmMessage.model_validate(dict(turn))
