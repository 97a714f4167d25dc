# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: Deterministic turn normalization (strict user/assistant alternation).

from __future__ import annotations

from typing import Iterable, List

from domains.llm_request_domain import LlmMessage, LlmRole, TurnLike, to_message

FILLER_CONTENT = "_"


def _filler() -> LlmMessage:
    return LlmMessage(role=LlmRole.user, content=FILLER_CONTENT)


def strict_format(turns: Iterable[TurnLike]) -> List[LlmMessage]:
    """Rewrite turns so roles alternate and the sequence starts with a user turn.

    - system turns are folded into user turns with a `SYSTEM: ` prefix
    - back-to-back assistant turns get a filler user turn between them
    - other back-to-back turns of the same role are merged with a newline
    - an empty sequence becomes a single filler user turn

    The input turns are not modified.
    """

    out: List[LlmMessage] = []
    prev_role = None

    for t in turns or []:
        src = to_message(t)
        role = src.role
        content = (src.content or "").strip()
        if role == LlmRole.system:
            role = LlmRole.user
            content = f"SYSTEM: {content}"

        msg = LlmMessage(role=role, content=content)
        if role == prev_role and role == LlmRole.assistant:
            out.append(_filler())
            out.append(msg)
        elif role == prev_role:
            last = out[-1]
            out[-1] = LlmMessage(role=last.role, content=f"{last.content}\n{content}")
        else:
            out.append(msg)
        prev_role = role

    if out and out[0].role != LlmRole.user:
        out.insert(0, _filler())
    if not out:
        out.append(_filler())
    return out
