"""Generation backends for genflow."""

from genflow.generation.base import GenerationClient
from genflow.generation.gemini import GeminiGenerationClient
from genflow.generation.static import StaticGenerationClient

__all__ = [
    "GenerationClient",
    "GeminiGenerationClient",
    "StaticGenerationClient",
]
