"""
PromptFlow - a named, typed operation backed by one generation call.

A flow validates its input against a pydantic model, renders a prompt with a
pure function, asks the generation client for text, and maps that text into
its output model.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable, Mapping

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from genflow.core.models import FlowDescriptor, PromptTemplate, TemplateFormat
from genflow.errors import GenerationError, ValidationError
from genflow.generation.base import GenerationClient

logger = logging.getLogger(__name__)


class PromptFlow(BaseModel):
    """
    A named prompt flow.

    Flows are immutable once constructed and hold no per-call state, so one
    flow can serve any number of concurrent invocations.

    Example:
        flow = PromptFlow(
            name="jokeGenerator",
            input_model=JokeInput,
            output_model=JokeOutput,
            render=lambda data: f"Tell a joke about {data.topic}.",
            client=client,
        )
        result = await flow.run({"topic": "programming"})
        print(result.joke)
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str = Field(min_length=1)
    input_model: type[BaseModel]
    output_model: type[BaseModel]
    render: Callable[[Any], str]
    client: GenerationClient
    description: str | None = None
    template: PromptTemplate | None = None

    @classmethod
    def from_template(
        cls,
        name: str,
        template: str | PromptTemplate,
        input_model: type[BaseModel],
        output_model: type[BaseModel],
        client: GenerationClient,
        format: TemplateFormat = TemplateFormat.FSTRING,
        description: str | None = None,
    ) -> PromptFlow:
        """
        Create a flow whose prompt is a template over the input fields.

        Args:
            name: Flow name
            template: Template string or a prepared PromptTemplate
            input_model: Pydantic model for flow input
            output_model: Pydantic model for flow output
            client: Generation client the flow calls
            format: Template format when template is a string
            description: Human-readable description

        Raises:
            ValueError: If the template uses a variable the input model lacks
        """
        if isinstance(template, str):
            template = PromptTemplate(template=template, format=format)

        unknown = set(template.variables) - set(input_model.model_fields)
        if unknown:
            raise ValueError(
                f"Template for flow '{name}' references unknown fields: {sorted(unknown)}"
            )

        prompt_template = template
        return cls(
            name=name,
            input_model=input_model,
            output_model=output_model,
            render=lambda data: prompt_template.render(data.model_dump()),
            client=client,
            description=description,
            template=prompt_template,
        )

    def validate_input(self, data: BaseModel | Mapping[str, Any]) -> BaseModel:
        """
        Coerce raw input into the flow's input model.

        Raises:
            ValidationError: If the data does not match the input schema
        """
        if isinstance(data, self.input_model):
            return data
        if isinstance(data, BaseModel):
            data = data.model_dump()

        try:
            return self.input_model.model_validate(data)
        except pydantic.ValidationError as e:
            raise ValidationError(f"Invalid input for flow '{self.name}': {e}") from e

    def parse_output(self, text: str) -> BaseModel:
        """
        Map generated text into the flow's output model.

        A single-field output model receives the text as-is. Wider models
        expect a JSON object, optionally wrapped in surrounding prose.

        Raises:
            GenerationError: If the text cannot populate the output model
        """
        fields = list(self.output_model.model_fields)

        try:
            if len(fields) == 1:
                return self.output_model.model_validate({fields[0]: text})
            return self.output_model.model_validate(self._first_json_object(text))
        except pydantic.ValidationError as e:
            raise GenerationError(
                f"Flow '{self.name}' produced output that does not match "
                f"{self.output_model.__name__}: {e}"
            ) from e

    def _first_json_object(self, text: str) -> dict[str, Any]:
        """Decode the first JSON object in text, ignoring anything around it."""
        decoder = json.JSONDecoder()
        start = text.find("{")
        while start != -1:
            try:
                value, _ = decoder.raw_decode(text, start)
            except json.JSONDecodeError:
                value = None
            if isinstance(value, dict):
                return value
            start = text.find("{", start + 1)

        raise GenerationError(
            f"Flow '{self.name}' produced no JSON object for {self.output_model.__name__}"
        )

    async def run(self, data: BaseModel | Mapping[str, Any]) -> BaseModel:
        """
        Run the flow once.

        Args:
            data: Input model instance or a mapping of its fields

        Returns:
            An instance of the flow's output model

        Raises:
            ValidationError: If the input is invalid
            GenerationError: If the generation call fails
            asyncio.CancelledError: If the caller cancels while generating
        """
        validated = self.validate_input(data)
        prompt = self.render(validated)

        logger.debug(f"Running flow {self.name} ({len(prompt)} prompt chars)")

        try:
            text = await self.client.generate(prompt)
        except asyncio.CancelledError:
            logger.info(f"Flow {self.name} cancelled during generation")
            raise
        except Exception as e:
            raise GenerationError(f"failed to run flow '{self.name}': {e}") from e

        return self.parse_output(text)

    def run_sync(self, data: BaseModel | Mapping[str, Any]) -> BaseModel:
        """Run the flow on a fresh event loop. Not for use inside async code."""
        return asyncio.run(self.run(data))

    def describe(self) -> FlowDescriptor:
        """Get the serializable descriptor for this flow."""
        return FlowDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.input_model.model_json_schema(),
            output_schema=self.output_model.model_json_schema(),
            template=self.template.template if self.template else None,
            template_hash=self.template.content_hash if self.template else None,
        )
