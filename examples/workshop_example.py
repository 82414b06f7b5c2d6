"""
Example: Defining and running prompt flows

This example demonstrates how to:
1. Build a Gemini client from an explicit config
2. Define flows from a template, a render function and a decorator
3. Run flows directly, one after another and concurrently
4. Serve the same flows over HTTP

Requires GEMINI_API_KEY in the environment.
"""

import asyncio

from pydantic import BaseModel, Field

from genflow import FlowRegistry, GenerationConfig, GenerationError, TemplateFormat
from genflow.api.server import create_app, run_server
from genflow.flows import register_sample_flows
from genflow.generation import GeminiGenerationClient


class HaikuInput(BaseModel):
    subject: str = Field(min_length=1)


class HaikuOutput(BaseModel):
    haiku: str


class TaskListInput(BaseModel):
    goal: str = Field(min_length=1)
    items: int = Field(default=3, ge=1, le=10)


class TaskListOutput(BaseModel):
    tasks: list[str]


def setup_registry() -> FlowRegistry:
    """Create a registry with the sample flows plus two of our own."""
    client = GeminiGenerationClient(GenerationConfig.from_env())
    registry = register_sample_flows(FlowRegistry(client))

    # Template flow: the prompt is a Jinja2 template over the input fields
    registry.define_flow(
        "haiku",
        HaikuInput,
        HaikuOutput,
        template="Write a haiku about {{ subject }}. Reply with the haiku only.",
        format=TemplateFormat.JINJA2,
    )

    # Decorator flow: multi-field output is parsed from a JSON reply
    @registry.flow("taskList", TaskListInput, TaskListOutput)
    def task_list_prompt(data: TaskListInput) -> str:
        """Plan a short todo list for a goal."""
        return (
            f"Create a simple {data.items}-item todo list for {data.goal}. "
            'Reply with JSON only, shaped like {"tasks": ["..."]}.'
        )

    return registry


async def run_examples(registry: FlowRegistry) -> None:
    try:
        await _run_examples(registry)
    finally:
        await registry.client.aclose()


async def _run_examples(registry: FlowRegistry) -> None:
    print("=== Haiku ===")
    result = await registry.get("haiku").run({"subject": "a new development team"})
    print(result.haiku)

    print("\n=== Task List ===")
    try:
        tasks = await registry.get("taskList").run(
            {"goal": "setting up a new development environment"}
        )
        for i, task in enumerate(tasks.tasks, 1):
            print(f"{i}. {task}")
    except GenerationError as e:
        print(f"Error generating task list: {e}")

    print("\n=== Greetings (concurrent) ===")
    people = [
        {"name": "Alice", "language": "english"},
        {"name": "Bob", "language": "spanish"},
        {"name": "Claire", "language": "french"},
    ]
    greeting = registry.get("greeting")
    results = await asyncio.gather(
        *(greeting.run(person) for person in people),
        return_exceptions=True,
    )
    for person, outcome in zip(people, results):
        if isinstance(outcome, Exception):
            print(f"Error greeting {person['name']}: {outcome}")
        else:
            print(f"{person['name']} ({person['language']}): {outcome.greeting}")


def main():
    """Run all examples, then serve the flows."""
    asyncio.run(run_examples(setup_registry()))

    # Fresh client for the server's event loop
    registry = setup_registry()

    print("\nServing flows on http://127.0.0.1:3400")
    for descriptor in registry.list():
        print(f"  POST http://127.0.0.1:3400/{descriptor.name}")
    run_server(create_app(registry))


if __name__ == "__main__":
    main()
