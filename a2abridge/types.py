"""Core types shared across the bridge."""

from __future__ import annotations

import re
import uuid
from typing import TypeAlias

PeerName: TypeAlias = str
TaskId: TypeAlias = str
ContextId: TypeAlias = str

_WHITESPACE = re.compile(r"\s+")


def new_id() -> str:
    return uuid.uuid4().hex


def sanitize_name(name: str) -> PeerName:
    """Strip all whitespace so the name can prefix a tool identifier."""
    return _WHITESPACE.sub("", name)
