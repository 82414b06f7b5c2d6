"""
Sample flows: a greeting writer and a joke generator.

These are the two flows served by `genflow serve`.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from genflow.core.registry import FlowRegistry
from genflow.generation.base import GenerationClient

GREETING_TEMPLATE = (
    "Create a friendly greeting for {name} in {language}. "
    "Keep it warm and welcoming."
)
JOKE_TEMPLATE = (
    "Create a clean, family-friendly joke about {topic}. "
    "Keep it short and funny."
)


class GreetingInput(BaseModel):
    """Input for greeting generation."""
    name: str = Field(min_length=1, description="The person's name")
    language: str = Field(
        min_length=1,
        description="Language for greeting (english, spanish, french)",
    )


class GreetingOutput(BaseModel):
    """The generated greeting."""
    greeting: str = Field(description="The generated greeting")


class JokeInput(BaseModel):
    """Input for joke generation."""
    topic: str = Field(min_length=1, description="The topic for the joke")


class JokeOutput(BaseModel):
    """The generated joke."""
    joke: str = Field(description="The generated joke")


def register_sample_flows(registry: FlowRegistry) -> FlowRegistry:
    """Define the greeting and jokeGenerator flows on a registry."""
    registry.define_flow(
        "greeting",
        GreetingInput,
        GreetingOutput,
        template=GREETING_TEMPLATE,
        description="Write a warm greeting for a person in a given language",
    )
    registry.define_flow(
        "jokeGenerator",
        JokeInput,
        JokeOutput,
        template=JOKE_TEMPLATE,
        description="Write a short, family-friendly joke about a topic",
    )
    return registry


def create_sample_registry(client: GenerationClient) -> FlowRegistry:
    """Create a registry holding the sample flows, bound to a client."""
    return register_sample_flows(FlowRegistry(client))
