# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: API key lookup (keys.json first, then process environment).

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Protocol

from infrastructures.llm.errors import LlmCredentialError
from infrastructures.vconfig import vconfig
from infrastructures.vlogger import vlogger


class KeySource(Protocol):
    def get_key(self, name: str) -> str:
        ...


class StaticKeySource:
    """In-memory key source."""

    def __init__(self, keys: Optional[Mapping[str, str]] = None) -> None:
        self._keys: Dict[str, str] = dict(keys or {})

    def get_key(self, name: str) -> str:
        value = self._keys.get(name)
        if not value:
            raise LlmCredentialError(f"API key not found: {name}", key_name=name)
        return value


class FileEnvKeySource:
    """Look a key up in a JSON keys file, falling back to the environment.

    The keys file is a flat JSON object (`{"HYPERBOLIC_API_KEY": "..."}`).
    A missing file is not an error; an unreadable or malformed one is.
    """

    def __init__(self, keys_file: Optional[str] = None, *, environ: Optional[Mapping[str, str]] = None) -> None:
        self.keys_file = Path(keys_file or vconfig.keys_file)
        self._environ = environ if environ is not None else os.environ

    def _load_file(self) -> Dict[str, str]:
        if not self.keys_file.is_file():
            return {}
        try:
            with open(self.keys_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise LlmCredentialError(f"cannot read keys file: {self.keys_file}") from e
        if not isinstance(data, dict):
            raise LlmCredentialError(f"keys file must contain a JSON object: {self.keys_file}")
        return data

    def get_key(self, name: str) -> str:
        value = self._load_file().get(name)
        if not value:
            value = self._environ.get(name)
        if not value:
            vlogger.error("api key missing name=%s keys_file=%s", name, self.keys_file)
            raise LlmCredentialError(f"API key not found in {self.keys_file} or environment: {name}", key_name=name)
        return str(value)
