# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: LLM HTTP clients (infrastructure only).

from infrastructures.llm.clients.hyperbolic_client import HyperbolicClient, HyperbolicResponse

__all__ = [
    "HyperbolicClient",
    "HyperbolicResponse",
]
