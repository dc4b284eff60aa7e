"""CLI entry points for the thread-safety linter - Thin Controller using Typer."""

import logging
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from thread_safety_linter.domain.config import ConfigurationLoader
from thread_safety_linter.domain.entities import Severity
from thread_safety_linter.domain.protocols import (
    FileSystemProtocol,
    ReporterProtocol,
    TelemetryPort,
    TreeLoaderProtocol,
)
from thread_safety_linter.domain.rules import InstanceVariableInClassMethodRule
from thread_safety_linter.infrastructure.reporters import JsonReporter, TerminalReporter
from thread_safety_linter.use_cases.check_trees import CheckTreesUseCase

EXIT_OK = 0
EXIT_OFFENSES = 1
EXIT_USAGE = 2


class OutputFormat(str, Enum):
    TERMINAL = "terminal"
    JSON = "json"


class SeverityOption(str, Enum):
    INFO = Severity.INFO.value
    WARNING = Severity.WARNING.value
    ERROR = Severity.ERROR.value


@dataclass(frozen=True)
class CLIDependencies:
    """Explicit dependencies for the CLI. All dependencies injected at composition root."""

    config_loader: ConfigurationLoader
    telemetry: TelemetryPort
    filesystem: FileSystemProtocol
    tree_loader: TreeLoaderProtocol


class CLIAppFactory:
    """Creates the Typer app."""

    @staticmethod
    def build_reporter(output_format: OutputFormat) -> ReporterProtocol:
        if output_format is OutputFormat.JSON:
            return JsonReporter()
        return TerminalReporter()

    @staticmethod
    def configure_logging(verbose: bool) -> None:
        """Debug output on request; otherwise warnings reach stderr through the last-resort handler."""
        if not verbose:
            return
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    @staticmethod
    def create_app(deps: CLIDependencies) -> typer.Typer:
        """Create the Typer app with explicitly injected dependencies. No Service Locator."""
        app = typer.Typer(
            name="thread-safety-lint",
            help="Flag instance variables used in Ruby class methods, read from parser tree dumps.",
            add_completion=False,
        )

        @app.command()
        def check(
            paths: list[Path] = typer.Argument(..., help="Tree dump files or directories to check"),  # noqa: B008
            output_format: OutputFormat = typer.Option(
                OutputFormat.TERMINAL, "--format", help="Report format"),
            jobs: int = typer.Option(1, "--jobs", "-j", min=1, help="Worker threads"),
            severity: SeverityOption | None = typer.Option(
                None, "--severity", help="Override the configured offense severity"),
            verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr"),
        ) -> None:
            """Check tree dumps for instance variables in class methods."""
            CLIAppFactory.configure_logging(verbose)

            missing = [str(p) for p in paths if not deps.filesystem.exists(str(p))]
            if missing:
                for path in missing:
                    deps.telemetry.error(f"Path not found: {path}")
                sys.exit(EXIT_USAGE)

            config_loader = deps.config_loader
            if severity is not None:
                config_loader = config_loader.with_severity(Severity(severity.value))

            use_case = CheckTreesUseCase(
                tree_loader=deps.tree_loader,
                filesystem=deps.filesystem,
                telemetry=deps.telemetry,
                config_loader=config_loader,
            )
            result = use_case.execute([str(p) for p in paths], jobs=jobs)
            CLIAppFactory.build_reporter(output_format).report(result)

            if result.error_count:
                deps.telemetry.warning(f"{result.error_count} file(s) could not be checked.")
            sys.exit(EXIT_OFFENSES if result.should_fail() else EXIT_OK)

        @app.command()
        def rules() -> None:
            """List the rules this linter provides."""
            rule = InstanceVariableInClassMethodRule
            console = Console()
            console.print(f"[bold]{rule.code}[/bold]  [#00EEFF]{rule.symbol}[/]")
            console.print(f"    {escape(rule.description)}")

        return app
