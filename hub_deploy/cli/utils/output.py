# hub_deploy/cli/utils/output.py
"""Output formatting utilities"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ...models import DeploymentOutcome
from ...utils.output import console


def format_deploy_result(outcome: DeploymentOutcome,
                         output_console: Optional[Console] = None) -> None:
    """Format and display the deployment summary

    Dry runs print nothing here; the pipeline already printed its footer.
    """
    out = output_console or console
    if outcome.dry_run:
        return

    lines = [
        f"[bold]Service URL:[/bold]  [yellow]{escape(outcome.service_url or 'unknown')}[/yellow]",
    ]
    if outcome.custom_url:
        lines.append(f"[bold]Custom URL:[/bold]   [yellow]{escape(outcome.custom_url)}[/yellow]")
    lines.append(f"[bold]Image:[/bold]        [yellow]{escape(str(outcome.image))}[/yellow]")

    if outcome.warnings:
        lines.append("")
        lines.append("[bold yellow]Warnings:[/bold yellow]")
        for warning in outcome.warnings:
            lines.append(f"  • {escape(warning)}")

    panel = Panel(
        "\n".join(lines),
        title="Deployment Complete!",
        border_style="green"
    )
    out.print()
    out.print(panel)


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message"""
    if error:
        console.print(f"[red]Error:[/red] {escape(message)}: {escape(str(error))}", soft_wrap=True)
    else:
        console.print(f"[red]Error:[/red] {escape(message)}", soft_wrap=True)

