"""Ready-made flows."""

from genflow.flows.samples import (
    GreetingInput,
    GreetingOutput,
    JokeInput,
    JokeOutput,
    create_sample_registry,
    register_sample_flows,
)

__all__ = [
    "GreetingInput",
    "GreetingOutput",
    "JokeInput",
    "JokeOutput",
    "create_sample_registry",
    "register_sample_flows",
]
