"""
Where passwords come from.

The checker only needs something with ``read() -> bytes``; the masked
terminal prompt is one implementation, an in-memory value is another.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from typing import Protocol

import click


class PasswordSource(Protocol):
    """Anything that can hand over one password."""

    def read(self) -> bytes:
        ...


class PromptPasswordSource:
    """Prompt on the terminal without echoing input."""

    def __init__(self, prompt: str = "Password (chars won't show)"):
        self.prompt = prompt

    def read(self) -> bytes:
        password = click.prompt(self.prompt, hide_input=True)
        return password.encode("utf-8")


class StaticPasswordSource:
    """Return a fixed password, e.g. in tests or when piped in."""

    def __init__(self, password: bytes | str):
        if isinstance(password, str):
            password = password.encode("utf-8")
        self._password = password

    def read(self) -> bytes:
        return self._password
