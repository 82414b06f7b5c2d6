"""
Command-line interface for genflow.

Usage:
    genflow serve                       # Serve the sample flows over HTTP
    genflow flows                       # List the sample flows
    genflow run <flow> --data '<json>'  # Run one flow
    genflow generate "<prompt>"         # One free-form generation
    genflow demo                        # Run the sample flows end to end
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from genflow.config import GenerationConfig, ServerConfig
from genflow.errors import ConfigurationError, GenflowError
from genflow.flows.samples import create_sample_registry
from genflow.generation.base import GenerationClient
from genflow.generation.gemini import GeminiGenerationClient
from genflow.generation.static import StaticGenerationClient

app = typer.Typer(
    name="genflow",
    help="Named prompt flows over a generation backend",
    no_args_is_help=True,
)

console = Console()

DEMO_GREETINGS = [
    {"name": "Bob", "language": "spanish"},
    {"name": "Claire", "language": "french"},
]


def _load_config() -> GenerationConfig:
    """Load generation config, exiting with status 1 if it is incomplete."""
    try:
        return GenerationConfig.from_env()
    except ConfigurationError as e:
        rprint(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _create_client(config: GenerationConfig) -> GenerationClient:
    return GeminiGenerationClient(config)


@app.callback()
def main(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
):
    """Named prompt flows over a generation backend."""
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        rprint(f"[red]Invalid log level: {log_level}. Use DEBUG, INFO, WARNING or ERROR[/red]")
        raise typer.Exit(1)

    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default: GENFLOW_HOST or 127.0.0.1)"),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (default: GENFLOW_PORT or 3400)"),
):
    """Serve the sample flows over HTTP."""
    from genflow.api.server import create_app, run_server

    config = _load_config()
    try:
        server_config = ServerConfig.from_env()
    except ConfigurationError as e:
        rprint(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    server_config = ServerConfig(
        host=host or server_config.host,
        port=port or server_config.port,
    )

    client = _create_client(config)
    registry = create_sample_registry(client)
    base_url = server_config.base_url

    lines = [f"Starting server on {base_url}", "", "Flows available at:"]
    lines += [f"  POST {base_url}/{name}" for name in registry.names()]
    lines += [
        "",
        "Sample curl commands:",
        f'  curl -X POST "{base_url}/greeting" \\',
        '    -H "Content-Type: application/json" \\',
        """    -d '{"data": {"name": "Alice", "language": "english"}}'""",
        "",
        f'  curl -X POST "{base_url}/jokeGenerator" \\',
        '    -H "Content-Type: application/json" \\',
        """    -d '{"data": {"topic": "programming"}}'""",
    ]
    console.print(Panel("\n".join(lines), title="genflow", highlight=False))

    run_server(create_app(registry, client), server_config.host, server_config.port)


@app.command()
def flows(
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List the sample flows."""
    # Describing flows never calls the backend, so no credential is needed.
    registry = create_sample_registry(StaticGenerationClient())
    descriptors = registry.list()

    if json_output:
        print(json.dumps([d.model_dump(mode="json") for d in descriptors], indent=2))
        return

    table = Table(title="Flows")
    table.add_column("Name", style="cyan")
    table.add_column("Input")
    table.add_column("Output")
    table.add_column("Description", style="dim")

    for descriptor in descriptors:
        table.add_row(
            descriptor.name,
            ", ".join(descriptor.input_schema.get("properties", {})),
            ", ".join(descriptor.output_schema.get("properties", {})),
            descriptor.description or "",
        )

    console.print(table)


@app.command()
def run(
    flow_name: str = typer.Argument(..., help="Flow name"),
    data: str = typer.Option(..., "--data", "-d", help="Flow input as a JSON object"),
):
    """Run one flow and print its output as JSON."""
    try:
        payload = json.loads(data)
    except json.JSONDecodeError as e:
        rprint(f"[red]Invalid JSON for --data: {e}[/red]")
        raise typer.Exit(1)

    client = _create_client(_load_config())

    async def _run() -> Any:
        try:
            return await create_sample_registry(client).get(flow_name).run(payload)
        finally:
            await client.aclose()

    try:
        result = asyncio.run(_run())
    except GenflowError as e:
        rprint(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    print(result.model_dump_json(indent=2))


@app.command()
def generate(
    prompt: str = typer.Argument(..., help="Prompt text"),
):
    """Send one free-form prompt and print the generated text."""
    client = _create_client(_load_config())

    async def _generate() -> str:
        try:
            return await client.generate(prompt)
        finally:
            await client.aclose()

    try:
        text = asyncio.run(_generate())
    except GenflowError as e:
        rprint(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    print(text)


@app.command()
def demo():
    """Run the sample flows with sample inputs."""
    client = _create_client(_load_config())
    registry = create_sample_registry(client)
    greeting = registry.get("greeting")
    joke = registry.get("jokeGenerator")

    async def _demo() -> int:
        failures = 0
        try:
            rprint("[bold]=== Testing Greeting Flow ===[/bold]")
            try:
                result = await greeting.run({"name": "Alice", "language": "english"})
                rprint(f"Greeting Result: {result.greeting}")
            except GenflowError as e:
                failures += 1
                rprint(f"[red]Error running greeting flow: {e}[/red]")

            rprint("\n[bold]=== Testing Joke Flow ===[/bold]")
            try:
                result = await joke.run({"topic": "programming"})
                rprint(f"Joke Result: {result.joke}")
            except GenflowError as e:
                failures += 1
                rprint(f"[red]Error running joke flow: {e}[/red]")

            rprint("\n[bold]=== Testing Multiple Greetings ===[/bold]")
            for person in DEMO_GREETINGS:
                try:
                    result = await greeting.run(person)
                except GenflowError as e:
                    failures += 1
                    rprint(f"[red]Error greeting {person['name']}: {e}[/red]")
                    continue
                rprint(f"{person['name']} ({person['language']}): {result.greeting}")
        finally:
            await client.aclose()
        return failures

    failures = asyncio.run(_demo())
    if failures:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
