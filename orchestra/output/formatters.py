"""Rich console formatters for displaying orchestration results."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from orchestra.core.models import ConsensusResult, DebateResult, Response


def agreement_color(value: float) -> str:
    """Map an agreement or confidence score to a display color."""
    if value >= 0.8:
        return "bold green"
    elif value >= 0.6:
        return "green"
    elif value >= 0.4:
        return "yellow"
    return "red"


class ResultFormatter:
    """Formats orchestration results for Rich console output."""

    PREVIEW_LENGTH = 120

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def _preview(self, text: str) -> str:
        text = " ".join(text.split())
        if len(text) <= self.PREVIEW_LENGTH:
            return escape(text)
        return escape(text[: self.PREVIEW_LENGTH - 3] + "...")

    def display_response(self, response: Response) -> None:
        """Display a single provider response."""
        details = [f"Provider: {response.provider}"]
        if response.model:
            details.append(f"Model: {response.model}")
        if response.latency_ms is not None:
            details.append(f"Latency: {response.latency_ms:.0f}ms")
        if response.tokens:
            details.append(f"Tokens: {response.tokens.total}")
        if response.cost is not None:
            details.append(f"Cost: ${response.cost:.4f}")

        self.console.print(
            Panel(
                f"{escape(response.content)}\n\n[dim]{' | '.join(details)}[/dim]",
                title="Response",
                border_style="blue",
            )
        )

    def display_consensus(self, result: ConsensusResult, verbose: bool = False) -> None:
        """Display a consensus result."""
        color = agreement_color(result.agreement)

        self.console.print()
        self.console.print(
            Panel(
                f"{escape(result.result)}\n\n"
                f"Agreement: [{color}]{result.agreement:.0%}[/{color}] | "
                f"Confidence: {result.confidence:.0%}\n"
                f"Providers: {', '.join(result.providers)}\n"
                f"[dim]{escape(result.reasoning)}[/dim]",
                title="Consensus",
                border_style=color.replace("bold ", ""),
            )
        )

        if verbose and result.dissenting:
            table = Table(title="Dissenting Responses", show_header=True)
            table.add_column("Provider", style="cyan")
            table.add_column("Response")
            for response in result.dissenting:
                table.add_row(response.provider, self._preview(response.content))
            self.console.print(table)

        meta = result.metadata
        self.console.print(
            f"[dim]Rounds: {meta.rounds} | Time: {meta.total_time_ms:.0f}ms | "
            f"Cost: ${meta.total_cost:.4f}[/dim]"
        )

    def display_debate(self, result: DebateResult, verbose: bool = False) -> None:
        """Display a debate result with a per-round summary."""
        table = Table(title="Debate Rounds", show_header=True)
        table.add_column("Round", justify="right")
        table.add_column("Agreement", justify="right")
        if verbose:
            table.add_column("Arguments")

        for debate_round in result.rounds:
            color = agreement_color(debate_round.agreement)
            row = [
                str(debate_round.round),
                f"[{color}]{debate_round.agreement:.0%}[/{color}]",
            ]
            if verbose:
                row.append(
                    "\n".join(
                        f"[cyan]{arg.provider}[/cyan]: {self._preview(arg.content)}"
                        for arg in debate_round.arguments
                    )
                )
            table.add_row(*row)

        self.console.print()
        self.console.print(table)

        color = agreement_color(result.agreement)
        self.console.print(
            Panel(
                f"{escape(result.decision)}\n\n"
                f"Final agreement: [{color}]{result.agreement:.0%}[/{color}] "
                f"after {len(result.rounds)} round(s)\n"
                f"Participants: {', '.join(result.participants)}",
                title="Decision",
                border_style=color.replace("bold ", ""),
            )
        )

    def display_health(self, health: dict[str, bool]) -> None:
        """Display provider health as a table."""
        table = Table(title="Provider Health", show_header=True)
        table.add_column("Provider", style="cyan")
        table.add_column("Status")

        for name, healthy in health.items():
            status = "[green]healthy[/green]" if healthy else "[red]unhealthy[/red]"
            table.add_row(name, status)

        self.console.print(table)
