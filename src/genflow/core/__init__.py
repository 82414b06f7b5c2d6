"""Core models, flows and registry."""

from genflow.core.flow import PromptFlow
from genflow.core.models import FlowDescriptor, PromptTemplate, TemplateFormat
from genflow.core.registry import FlowRegistry

__all__ = [
    "FlowRegistry",
    "PromptFlow",
    "PromptTemplate",
    "FlowDescriptor",
    "TemplateFormat",
]
