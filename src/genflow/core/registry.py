"""
FlowRegistry - the named collection of prompt flows.

Flows are registered once at process start. After that the registry is only
read, both for direct invocation and for HTTP dispatch.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterator

from pydantic import BaseModel

from genflow.core.flow import PromptFlow
from genflow.core.models import FlowDescriptor, PromptTemplate, TemplateFormat
from genflow.errors import DuplicateNameError, NotFoundError
from genflow.generation.base import GenerationClient

logger = logging.getLogger(__name__)


class FlowRegistry:
    """
    Main interface for defining and looking up flows.

    The registry is built around one generation client, passed in
    explicitly, which every flow defined through it shares.

    Example:
        client = GeminiGenerationClient(GenerationConfig.from_env())
        registry = FlowRegistry(client)

        registry.define_flow(
            "jokeGenerator",
            JokeInput,
            JokeOutput,
            template="Create a clean, family-friendly joke about {topic}.",
        )

        @registry.flow("greeting", GreetingInput, GreetingOutput)
        def greeting_prompt(data: GreetingInput) -> str:
            return f"Create a friendly greeting for {data.name} in {data.language}."

        result = await registry.get("greeting").run({"name": "Alice", "language": "english"})
    """

    def __init__(self, client: GenerationClient | None = None):
        """
        Initialize the registry.

        Args:
            client: Default generation client for flows defined here
        """
        self.client = client
        self._flows: dict[str, PromptFlow] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._flows

    def __len__(self) -> int:
        return len(self._flows)

    def __iter__(self) -> Iterator[PromptFlow]:
        return iter(self._flows.values())

    # =========================================================================
    # Registration
    # =========================================================================

    def register(self, flow: PromptFlow) -> PromptFlow:
        """
        Register a flow under its name.

        Raises:
            DuplicateNameError: If a flow with this name is already registered
        """
        if flow.name in self._flows:
            raise DuplicateNameError(f"Flow '{flow.name}' is already registered")

        self._flows[flow.name] = flow
        logger.info(f"Registered flow: {flow.name}")
        return flow

    def define_flow(
        self,
        name: str,
        input_model: type[BaseModel],
        output_model: type[BaseModel],
        render: Callable[[BaseModel], str] | None = None,
        template: str | PromptTemplate | None = None,
        format: TemplateFormat = TemplateFormat.FSTRING,
        description: str | None = None,
        client: GenerationClient | None = None,
    ) -> PromptFlow:
        """
        Create a flow and register it.

        Exactly one of render or template must be given.

        Args:
            name: Unique flow name
            input_model: Pydantic model for flow input
            output_model: Pydantic model for flow output
            render: Function turning validated input into a prompt
            template: Prompt template over the input fields
            format: Template format when template is a string
            description: Human-readable description
            client: Generation client (defaults to the registry's client)

        Returns:
            The registered PromptFlow

        Raises:
            ValueError: If neither or both of render/template are given,
                or no client is available
            DuplicateNameError: If the name is taken
        """
        if (render is None) == (template is None):
            raise ValueError("Provide exactly one of 'render' or 'template'")

        client = client or self.client
        if client is None:
            raise ValueError(f"No generation client available for flow '{name}'")

        if template is not None:
            flow = PromptFlow.from_template(
                name=name,
                template=template,
                input_model=input_model,
                output_model=output_model,
                client=client,
                format=format,
                description=description,
            )
        else:
            flow = PromptFlow(
                name=name,
                input_model=input_model,
                output_model=output_model,
                render=render,
                client=client,
                description=description,
            )

        return self.register(flow)

    def flow(
        self,
        name: str,
        input_model: type[BaseModel],
        output_model: type[BaseModel],
        description: str | None = None,
    ) -> Callable[[Callable[[BaseModel], str]], Callable[[BaseModel], str]]:
        """
        Decorator form of define_flow over a render function.

        The decorated function is returned unchanged so it stays testable
        on its own.
        """
        def decorator(render: Callable[[BaseModel], str]) -> Callable[[BaseModel], str]:
            self.define_flow(
                name,
                input_model,
                output_model,
                render=render,
                description=description or render.__doc__,
            )
            return render

        return decorator

    # =========================================================================
    # Lookup
    # =========================================================================

    def get(self, name: str) -> PromptFlow:
        """
        Get a flow by name.

        Raises:
            NotFoundError: If no flow has this name
        """
        flow = self._flows.get(name)
        if flow is None:
            raise NotFoundError(f"Flow '{name}' not found")
        return flow

    def names(self) -> list[str]:
        """Get registered flow names in registration order."""
        return list(self._flows)

    def list(self) -> list[FlowDescriptor]:
        """Describe all registered flows in registration order."""
        return [flow.describe() for flow in self._flows.values()]
