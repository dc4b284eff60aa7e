"""Progress output on stderr, so stdout stays clean for reports."""

from rich.console import Console
from rich.markup import escape


class ProjectTelemetry:
    """TelemetryPort implementation backed by a stderr rich console."""

    def __init__(self, name: str, quiet: bool = False, console: Console | None = None) -> None:
        self.name = name
        self.quiet = quiet
        self.console = console or Console(stderr=True)

    def step(self, message: str) -> None:
        if not self.quiet:
            self.console.print(f"[dim]\\[{self.name}][/dim] {escape(message)}")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]\\[{self.name}] {escape(message)}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[bold red]\\[{self.name}] {escape(message)}[/bold red]")
