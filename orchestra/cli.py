"""Orchestra CLI application using Typer and Rich."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from orchestra import __version__
from orchestra.config import OrchestraSettings, get_settings, load_settings
from orchestra.core.exceptions import OrchestraError
from orchestra.log import setup_logging

# Initialize CLI app and console
app = typer.Typer(
    name="orchestra",
    help="Multi-provider LLM orchestration - consensus and debate across models",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()

CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Path to a YAML config file (defaults to ORCHESTRA_* environment)",
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"[bold cyan]Orchestra[/bold cyan] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Orchestra - query several LLM providers and combine their answers."""
    pass


def _load_settings(config: Optional[Path]) -> OrchestraSettings:
    """Load settings from file or environment, exiting on errors."""
    try:
        settings = load_settings(config) if config else get_settings()
    except OrchestraError as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1)

    setup_logging(settings.log_level, console=Console(stderr=True))

    if not settings.providers:
        console.print(
            "[red]Error:[/red] No providers configured. "
            "Pass --config or set ORCHESTRA_PROVIDERS."
        )
        raise typer.Exit(1)

    return settings


def _split(value: Optional[str]) -> list[str] | None:
    if not value:
        return None
    names = [v.strip() for v in value.split(",") if v.strip()]
    return names or None


def _run(coro):
    """Run a coroutine, turning Orchestra errors into a clean exit."""
    try:
        return asyncio.run(coro)
    except OrchestraError as e:
        console.print(f"\n[red]Error:[/red] {e}")
        raise typer.Exit(1)


@app.command()
def query(
    prompt: str = typer.Argument(..., help="Prompt to send"),
    provider: Optional[str] = typer.Option(
        None,
        "--provider",
        "-p",
        help="Provider name (defaults to the configured default provider)",
    ),
    config: Optional[Path] = CONFIG_OPTION,
) -> None:
    """
    Send a prompt to a single provider.

    Examples:
        orchestra query "What are the benefits of type hints?" -p anthropic
    """
    from orchestra.analysis.orchestrator import Orchestra
    from orchestra.core.models import QueryOptions
    from orchestra.output.formatters import ResultFormatter

    settings = _load_settings(config)

    async def run_query():
        orchestra = Orchestra(settings)
        return await orchestra.query(prompt, QueryOptions(provider=provider))

    with console.status("Waiting for provider..."):
        response = _run(run_query())

    ResultFormatter(console).display_response(response)


@app.command()
def consensus(
    prompt: str = typer.Argument(..., help="Prompt to send to every provider"),
    providers: Optional[str] = typer.Option(
        None,
        "--providers",
        "-p",
        help="Comma-separated provider names (default: all registered)",
    ),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show dissenting responses",
    ),
) -> None:
    """
    Get a majority answer from several providers in one parallel round.

    Examples:
        orchestra consensus "Microservices or a monolith for a startup?"
        orchestra consensus "Pick a database" -p anthropic,simulated -v
    """
    from orchestra.analysis.orchestrator import Orchestra
    from orchestra.core.models import ConsensusOptions
    from orchestra.output.formatters import ResultFormatter

    settings = _load_settings(config)

    async def run_consensus():
        orchestra = Orchestra(settings)
        return await orchestra.consensus(
            prompt, ConsensusOptions(providers=_split(providers))
        )

    with console.status("Collecting responses..."):
        result = _run(run_consensus())

    ResultFormatter(console).display_consensus(result, verbose=verbose)


@app.command()
def debate(
    prompt: str = typer.Argument(..., help="Question to debate"),
    providers: Optional[str] = typer.Option(
        None,
        "--providers",
        "-p",
        help="Comma-separated provider names (default: all registered)",
    ),
    rounds: Optional[int] = typer.Option(
        None,
        "--rounds",
        "-r",
        min=1,
        help="Maximum number of rounds",
    ),
    threshold: Optional[float] = typer.Option(
        None,
        "--threshold",
        "-t",
        min=0.0,
        max=1.0,
        help="Agreement needed to stop early",
    ),
    config: Optional[Path] = CONFIG_OPTION,
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show each round's arguments",
    ),
) -> None:
    """
    Run a multi-round debate until providers agree or rounds run out.

    Examples:
        orchestra debate "Is functional programming better than OOP?" -r 2 -t 0.8
    """
    from orchestra.analysis.orchestrator import Orchestra
    from orchestra.core.enums import OrchestraEvent
    from orchestra.core.models import DebateOptions
    from orchestra.output.formatters import ResultFormatter

    settings = _load_settings(config)

    with console.status("Debating...") as status:

        async def run_debate():
            orchestra = Orchestra(settings)
            orchestra.on(
                OrchestraEvent.DEBATE_ROUND,
                lambda e: status.update(
                    f"Round {e['round']} agreement {e['agreement']:.0%}..."
                ),
            )
            return await orchestra.debate(
                prompt,
                DebateOptions(
                    providers=_split(providers),
                    max_rounds=rounds,
                    threshold=threshold,
                ),
            )

        result = _run(run_debate())

    ResultFormatter(console).display_debate(result, verbose=verbose)


@app.command()
def health(config: Optional[Path] = CONFIG_OPTION) -> None:
    """Probe every configured provider."""
    from orchestra.analysis.orchestrator import Orchestra
    from orchestra.output.formatters import ResultFormatter

    settings = _load_settings(config)

    async def run_health():
        return await Orchestra(settings).health_check()

    with console.status("Checking providers..."):
        results = _run(run_health())

    ResultFormatter(console).display_health(results)

    if not all(results.values()):
        raise typer.Exit(1)


@app.command()
def providers(config: Optional[Path] = CONFIG_OPTION) -> None:
    """List configured providers."""
    settings = _load_settings(config)

    table = Table(title="Configured Providers")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Model")
    table.add_column("Default")

    for name, provider_config in settings.providers.items():
        table.add_row(
            name,
            provider_config.kind.value,
            provider_config.model or "-",
            "yes" if name == settings.default_provider else "",
        )

    console.print(table)

    threshold = settings.consensus_threshold
    threshold_text = "default (0.7)" if threshold is None else f"{threshold:g}"
    timeout_text = f"{settings.timeout:g}ms" if settings.timeout else "none"

    console.print(
        Panel(
            f"Consensus threshold: {threshold_text}\n"
            f"Max debate rounds: {settings.max_debate_rounds or 'default (3)'}\n"
            f"Timeout: {timeout_text}",
            title="Settings",
            border_style="blue",
        )
    )


if __name__ == "__main__":
    app()
