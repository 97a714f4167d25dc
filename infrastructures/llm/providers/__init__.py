# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: Provider adapters.

from infrastructures.llm.providers.provider_base import LlmProviderBase
from infrastructures.llm.providers.hyperbolic_provider import HyperbolicProvider

__all__ = [
    "LlmProviderBase",
    "HyperbolicProvider",
]
