"""
Abstract generation interface.

This module defines the contract every generation backend implements.
Flows only depend on this interface, so a deterministic client can stand in
for the real service in tests and offline runs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class GenerationClient(ABC):
    """
    Abstract base class for generation backends.

    A client turns a rendered prompt into generated text. Implementations
    raise GenerationError on failure and let asyncio.CancelledError
    propagate so a cancelled caller aborts the in-flight request.
    """

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """
        Generate text for a prompt.

        Raises:
            GenerationError: If the backend call fails
        """
        pass

    async def aclose(self) -> None:
        """Release any resources held by the client."""
        pass
