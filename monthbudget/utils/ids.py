"""Mini README: Identifier factories injected into commands and sessions.

Structure:
    * IdFactory - callable alias returning a fresh identifier string.
    * uuid_ids - default collision-resistant factory based on UUID4.
    * SequentialIds - deterministic ``prefix_0001`` style factory for tests and demos.
"""

from __future__ import annotations

import uuid
from typing import Callable

IdFactory = Callable[[], str]


def uuid_ids() -> str:
    """Return a random UUID4 rendered as 32 hexadecimal characters."""

    return uuid.uuid4().hex


class SequentialIds:
    """Generate predictable identifiers such as ``fixed_0001``."""

    def __init__(self, prefix: str = "id", start: int = 0) -> None:
        self.prefix = prefix
        self._sequence = start

    def __call__(self) -> str:
        self._sequence += 1
        return f"{self.prefix}_{self._sequence:04d}"
