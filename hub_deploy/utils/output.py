"""Console output for the deployment stages"""

from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..models.config import RunConfig

console = Console()


class StageReporter:
    """Prints the banner, numbered stage headers and stage messages"""

    def __init__(self, output_console: Optional[Console] = None):
        self.console = output_console or console

    def banner(self, config: RunConfig) -> None:
        rule = "=" * 38
        self.console.print(f"[green]{rule}[/green]")
        self.console.print("[green]  Hub Chat Deployment[/green]")
        self.console.print(f"[green]{rule}[/green]")
        self.console.print()
        rows = [
            ("Project", config.project_id),
            ("Region", config.region),
            ("Service", config.service_name),
            ("Image", str(config.image)),
            ("Git Hash", config.build_hash),
            ("Build", config.strategy.value),
        ]
        for label, value in rows:
            self.console.print(f"{label + ':':<12}[yellow]{escape(value)}[/yellow]",
                               highlight=False, soft_wrap=True)
        self.console.print()

    def dry_run_header(self) -> None:
        self.console.print("[yellow]\\[DRY RUN] Would execute the following:[/yellow]")
        self.console.print()

    def dry_run_footer(self) -> None:
        self.console.print()
        self.console.print("[yellow]\\[DRY RUN] No changes were made[/yellow]")

    def stage(self, step: int, total: int, title: str, skipped: bool = False) -> None:
        color = "yellow" if skipped else "green"
        self.console.print(f"[{color}]\\[{step}/{total}] {title}[/{color}]")

    def note(self, message: str) -> None:
        self.console.print(f"      {message}", highlight=False)

    def command(self, line: str) -> None:
        """Echo a command that dry-run mode did not execute"""
        self.console.print(f"  {line}", markup=False, highlight=False, soft_wrap=True)

    def success(self, message: str) -> None:
        self.console.print(f"[green]{escape(message)}[/green]", soft_wrap=True)

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]{escape(message)}[/yellow]", soft_wrap=True)

    def blank(self) -> None:
        self.console.print()
