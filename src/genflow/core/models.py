"""
Core data models for prompt flows.

Templates render flow input into a prompt string; descriptors are the
read-only, serializable view of a registered flow.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

import xxhash
from jinja2 import StrictUndefined, Template, TemplateError
from pydantic import BaseModel, Field, model_validator

from genflow.errors import ValidationError


class TemplateFormat(str, Enum):
    """Supported template formats."""
    FSTRING = "fstring"      # {variable}
    JINJA2 = "jinja2"        # {{ variable }}


class PromptTemplate(BaseModel):
    """
    A prompt template with its variables and content hash.

    The hash identifies the template text across processes, so two flows
    built from the same template report the same template_hash.
    """
    template: str
    format: TemplateFormat = TemplateFormat.FSTRING

    # Computed on validation
    content_hash: str = ""
    variables: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def compute_fields(self) -> PromptTemplate:
        """Compute hash and extract variables after model creation."""
        content = f"{self.template}|{self.format.value}"
        self.content_hash = xxhash.xxh64(content.encode()).hexdigest()
        self.variables = self._extract_variables()
        return self

    def _extract_variables(self) -> list[str]:
        """Extract variable names from template based on format."""
        if self.format == TemplateFormat.FSTRING:
            # Match {var} but not {{escaped}}
            pattern = r"(?<!\{)\{([a-zA-Z_][a-zA-Z0-9_]*)\}(?!\})"
        else:
            pattern = r"\{\{\s*([a-zA-Z_][a-zA-Z0-9_]*)\s*\}\}"
        return sorted(set(re.findall(pattern, self.template)))

    def render(self, variables: dict[str, Any]) -> str:
        """
        Render the template with provided variables.

        Raises:
            ValidationError: If a template variable is missing
        """
        if self.format == TemplateFormat.FSTRING:
            try:
                return self.template.format(**variables)
            except KeyError as e:
                raise ValidationError(f"Missing required variable: {e}")

        try:
            return Template(self.template, undefined=StrictUndefined).render(**variables)
        except TemplateError as e:
            raise ValidationError(f"Template rendering failed: {e}")


class FlowDescriptor(BaseModel):
    """Serializable summary of a registered flow."""
    name: str
    description: str | None = None
    input_schema: dict[str, Any]
    output_schema: dict[str, Any]
    template: str | None = None
    template_hash: str | None = None
