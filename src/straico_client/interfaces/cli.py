"""CLI: Typer app for one-off completions, image generation, and the proxy."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import List, Optional

import httpx
import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.markup import escape
from rich.panel import Panel

from straico_client.application import complete
from straico_client.config import load_config
from straico_client.domain import (
    EmptySelectionError,
    ImageRequest,
    MarkupDecodeError,
    UpstreamError,
)
from straico_client.domain.requests import build_completion_request
from straico_client.infrastructure import build_straico_client

app = typer.Typer(help="straico: Straico API client and OpenAI-compatible proxy.")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _client_or_exit():
    config = load_config()
    try:
        return config, build_straico_client(config.straico)
    except ValueError as e:
        rprint(f"[red]{escape(str(e))}[/red]")
        sys.exit(1)


def _run_or_exit(coro, base_url: str):
    """Run *coro*, turning transport and parse failures into a message + exit 1."""
    try:
        return asyncio.run(coro)
    except httpx.ConnectError as e:
        rprint(f"[red]Straico unreachable.[/red]\n  URL: {base_url}\n  Error: {escape(str(e))}")
    except httpx.TimeoutException:
        rprint("[red]Straico read timeout.[/red] Increase straico.timeout_s in config.")
    except httpx.HTTPStatusError as e:
        rprint(
            f"[red]Straico returned {e.response.status_code}.[/red]\n"
            f"  URL: {e.request.url}\n  Body: {escape(e.response.text[:500])}"
        )
    except (UpstreamError, EmptySelectionError) as e:
        rprint(f"[red]{escape(str(e))}[/red]")
    except MarkupDecodeError as e:
        rprint(f"[red]Model returned malformed tool call markup.[/red]\n  {escape(e.reason)}\n  Span: {escape(e.span)}")
    except ValidationError as e:
        rprint(f"[red]Unexpected Straico response shape.[/red]\n{escape(str(e))}")
    sys.exit(1)


@app.command("complete")
def complete_cmd(
    prompt: str = typer.Argument(..., help="Prompt text sent to Straico."),
    model: Optional[List[str]] = typer.Option(
        None, "--model", "-m", help="Model id; repeat for up to four models. Defaults to config."
    ),
    temperature: Optional[float] = typer.Option(None, help="Sampling temperature (0-2)."),
    max_tokens: Optional[int] = typer.Option(None, help="Maximum completion tokens."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """Request a completion and print it in canonical (OpenAI) JSON."""
    _setup_logging(verbose)
    config, client = _client_or_exit()
    try:
        request = build_completion_request(
            prompt, model or [config.straico.model], temperature=temperature, max_tokens=max_tokens,
        )
    except ValidationError as e:
        rprint(f"[red]Invalid request.[/red]\n{escape(str(e))}")
        sys.exit(1)

    completion = _run_or_exit(complete(client, request), config.straico.base_url)
    rprint(f"[dim]Model: {completion.model}  Id: {completion.id}[/dim]")
    # Plain echo: rich would hard-wrap long strings and break the JSON.
    typer.echo(json.dumps(completion.model_dump(mode="json"), indent=2, ensure_ascii=False))


@app.command()
def image(
    description: str = typer.Argument(..., help="What the image should show."),
    model: str = typer.Option("openai/dall-e-3", "--model", "-m", help="Image model id."),
    size: str = typer.Option("square", help="square | landscape | portrait"),
    variations: int = typer.Option(1, help="Number of images (1-4)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose (DEBUG) logging to stderr."),
) -> None:
    """Generate images and print their URLs."""
    _setup_logging(verbose)
    config, client = _client_or_exit()
    try:
        request = ImageRequest(model=model, description=description, size=size, variations=variations)
    except ValidationError as e:
        rprint(f"[red]Invalid request.[/red]\n{escape(str(e))}")
        sys.exit(1)

    data = _run_or_exit(client.create_image(request), config.straico.base_url)
    rprint(
        Panel.fit(
            "\n".join(escape(url) for url in data.images)
            + f"\n\n[bold]Zip:[/bold] {escape(data.zip)}"
            + f"\n[bold]Price:[/bold] {data.price.total} ({data.price.quantity_images} x {data.price.price_per_image})"
        )
    )


@app.command()
def serve(host: Optional[str] = None, port: Optional[int] = None) -> None:
    """Run the OpenAI-compatible proxy (FastAPI + uvicorn)."""
    import uvicorn

    config = load_config()
    uvicorn.run(
        "straico_client.interfaces.http_api:app",
        host=host or config.proxy.host,
        port=port or config.proxy.port,
        reload=False,
    )
