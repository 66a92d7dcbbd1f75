"""Confirmation capabilities for destructive actions."""

from collections.abc import Awaitable, Callable
from typing import Protocol


class Confirmer(Protocol):
    async def __call__(self, message: str) -> bool: ...


class AlwaysConfirm:
    """Answers yes; for scripted use where the caller already confirmed."""

    async def __call__(self, message: str) -> bool:
        return True


class ConsolePrompt:
    """Asks on the terminal, reading the answer from the client's input lines."""

    def __init__(
        self,
        read_line: Callable[[], Awaitable[str | None]],
        write: Callable[[str], None] = print,
    ) -> None:
        self.read_line = read_line
        self.write = write

    async def __call__(self, message: str) -> bool:
        self.write(f"{message} [y/N]")
        answer = await self.read_line()
        return (answer or "").strip().lower() in ("y", "yes")
