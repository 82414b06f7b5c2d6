"""
genflow - Named prompt flows over a generative-AI backend.

A flow validates typed input, renders a prompt, calls a generation client
and returns typed output. Flows live in a registry and can be served over
HTTP with one POST endpoint per flow.
"""

from genflow.config import GenerationConfig, ServerConfig
from genflow.core.flow import PromptFlow
from genflow.core.models import FlowDescriptor, PromptTemplate, TemplateFormat
from genflow.core.registry import FlowRegistry
from genflow.errors import (
    ConfigurationError,
    DuplicateNameError,
    GenerationError,
    GenflowError,
    NotFoundError,
    RegistryError,
    ValidationError,
)
from genflow.generation.base import GenerationClient

__version__ = "0.1.0"
__all__ = [
    "FlowRegistry",
    "PromptFlow",
    "PromptTemplate",
    "FlowDescriptor",
    "TemplateFormat",
    "GenerationClient",
    "GenerationConfig",
    "ServerConfig",
    "GenflowError",
    "ConfigurationError",
    "GenerationError",
    "ValidationError",
    "RegistryError",
    "NotFoundError",
    "DuplicateNameError",
]
