"""
Deterministic generation client.

Returns fixed or computed text without contacting any service. Used by the
test suite and for wiring flows together before a real backend is configured.
"""

from __future__ import annotations

import asyncio
from typing import Callable

from genflow.generation.base import GenerationClient


class StaticGenerationClient(GenerationClient):
    """
    Generation client that answers from a fixed response.

    Example:
        client = StaticGenerationClient("Hello Alice!")
        client = StaticGenerationClient(lambda prompt: prompt.upper())
        client = StaticGenerationClient(error=RuntimeError("backend down"))
    """

    def __init__(
        self,
        response: str | Callable[[str], str] = "",
        error: Exception | None = None,
        delay: float = 0.0,
    ):
        """
        Initialize the static client.

        Args:
            response: Text to return, or a function of the prompt
            error: If set, raised from every generate call
            delay: Seconds to sleep before answering
        """
        self.response = response
        self.error = error
        self.delay = delay
        self.prompts: list[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)

        if self.delay:
            await asyncio.sleep(self.delay)

        if self.error is not None:
            raise self.error

        if callable(self.response):
            return self.response(prompt)
        return self.response
