"""Reporter implementations - terminal tables and JSON documents."""

import json
import sys
from typing import TYPE_CHECKING, TextIO, TypedDict

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from thread_safety_linter.domain.entities import CheckResult, Offense


class OffenseRow(TypedDict):
    """Row of the JSON report for one offense."""

    path: str
    line: int | None
    column: int | None
    end_line: int | None
    end_column: int | None
    code: str
    symbol: str
    severity: str
    message: str


class TerminalReporter:
    """Renders offenses as a rich table followed by a one-line summary."""

    _SEVERITY_STYLES = {"info": "cyan", "warning": "yellow", "error": "bold red"}

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def report(self, result: "CheckResult") -> None:
        if not result.enabled:
            self.console.print("Rule disabled in configuration; nothing checked.")
            return

        offenses = result.offenses
        if offenses:
            table = Table(title="[THREAD SAFETY] Instance variables in class methods", header_style="bold")
            table.add_column("Location", style="#00EEFF", no_wrap=True)
            table.add_column("Code")
            table.add_column("Severity")
            table.add_column("Message")
            for offense in offenses:
                style = self._SEVERITY_STYLES.get(offense.severity.value, "")
                table.add_row(
                    escape(offense.position),
                    offense.code,
                    f"[{style}]{offense.severity.value}[/{style}]" if style else offense.severity.value,
                    offense.message,
                )
            self.console.print(table)

        for report in result.reports:
            if report.failed:
                self.console.print(f"[red]Could not check {escape(report.path)}:[/red] {escape(report.error or '')}")

        files = len(result.reports)
        if not offenses and not result.error_count:
            self.console.print(f"✅ No offenses in {files} file(s).")
            return
        self.console.print(
            f"{files} file(s) checked, {result.offense_count} offense(s), "
            f"{result.error_count} file(s) with errors."
        )


class JsonReporter:
    """Writes a machine-readable document for CI tooling."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream or sys.stdout

    @staticmethod
    def offense_row(offense: "Offense") -> OffenseRow:
        location = offense.location
        return {
            "path": offense.path,
            "line": location.line if location else None,
            "column": location.column + 1 if location else None,
            "end_line": location.end_line if location else None,
            "end_column": location.end_column + 1 if location else None,
            "code": offense.code,
            "symbol": offense.symbol,
            "severity": offense.severity.value,
            "message": offense.message,
        }

    def report(self, result: "CheckResult") -> None:
        document = {
            "enabled": result.enabled,
            "severity": result.severity.value,
            "files": [
                {
                    "path": report.path,
                    "error": report.error,
                    "offenses": [self.offense_row(offense) for offense in report.offenses],
                }
                for report in result.reports
            ],
            "summary": {
                "files": len(result.reports),
                "offenses": result.offense_count,
                "errors": result.error_count,
            },
        }
        json.dump(document, self.stream, indent=2)
        self.stream.write("\n")
