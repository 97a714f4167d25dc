# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: Shared fixtures.

from __future__ import annotations

import pytest

from infrastructures.keys import StaticKeySource


@pytest.fixture
def key_source() -> StaticKeySource:
    return StaticKeySource({"HYPERBOLIC_API_KEY": "test-key"})
