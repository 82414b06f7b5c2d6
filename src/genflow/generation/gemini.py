"""
Google Gemini generation backend.

Wraps the google-genai async client behind the GenerationClient interface.

Example:
    from genflow.config import GenerationConfig
    from genflow.generation.gemini import GeminiGenerationClient

    client = GeminiGenerationClient(GenerationConfig.from_env())
    text = await client.generate("Explain Python in two sentences.")
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from google import genai

from genflow.config import GenerationConfig
from genflow.errors import GenerationError
from genflow.generation.base import GenerationClient

logger = logging.getLogger(__name__)


class GeminiGenerationClient(GenerationClient):
    """
    Generation client backed by the Gemini API.

    Each call is bounded by config.timeout_seconds. Cancelling the awaiting
    task cancels the underlying SDK request.
    """

    def __init__(
        self,
        config: GenerationConfig,
        client: Any | None = None,
    ):
        """
        Initialize the Gemini client.

        Args:
            config: Generation settings (API key, model, timeout)
            client: Pre-built google-genai client (defaults to one built from config)
        """
        self.config = config
        self._client = client or genai.Client(api_key=config.api_key)
        logger.info(f"Initialized Gemini client (model={config.model})")

    async def generate(self, prompt: str) -> str:
        try:
            response = await asyncio.wait_for(
                self._client.aio.models.generate_content(
                    model=self.config.model,
                    contents=prompt,
                ),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise GenerationError(
                f"Gemini request timed out after {self.config.timeout_seconds}s"
            ) from e
        except Exception as e:
            raise GenerationError(f"Gemini request failed: {e}") from e

        text = response.text
        if not text:
            raise GenerationError("Gemini returned an empty response")
        return text

    async def aclose(self) -> None:
        await self._client.aio.aclose()
        logger.info("Closed Gemini client")
