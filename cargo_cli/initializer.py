"""The ``cargo new`` collaborator.

The orchestrator only needs ``await initializer.run(args) -> exit code``;
``CargoInitializer`` is the production implementation and tests substitute a
fake that simulates success, failure or missing output without spawning a
process.
"""

from __future__ import annotations

import asyncio
from typing import Protocol, Sequence


class Initializer(Protocol):
    async def run(self, args: Sequence[str]) -> int:
        """Run the project initializer and return its exit code."""


class CargoInitializer:
    """Runs ``cargo <args>`` and waits for it without a timeout.

    The child's stdout and stderr are discarded; cargo's own failure message
    is not shown, only its exit code is propagated.
    """

    def __init__(self, cargo: str = "cargo") -> None:
        self.cargo = cargo

    def command(self, args: Sequence[str]) -> list[str]:
        return [self.cargo, *args]

    async def run(self, args: Sequence[str]) -> int:
        process = await asyncio.create_subprocess_exec(
            *self.command(args),
            stdout=asyncio.subprocess.DEVNULL,
            stderr=asyncio.subprocess.DEVNULL,
        )
        return await process.wait()
