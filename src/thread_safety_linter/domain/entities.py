from dataclasses import dataclass, field
from enum import Enum

from thread_safety_linter.domain.nodes import Node, SourceRange


class Severity(Enum):
    """Severity attached to reported offenses."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def blocks(self) -> bool:
        """Whether an offense at this severity fails a check run."""
        return self is not Severity.INFO


@dataclass(frozen=True)
class Offense:
    """One access to instance-scoped state in a class-level context."""

    code: str
    symbol: str
    message: str
    location: SourceRange | None
    node: Node = field(repr=False, compare=False)
    path: str = ""
    severity: Severity = Severity.WARNING

    @classmethod
    def from_node(
        cls,
        *,
        code: str,
        symbol: str,
        message: str,
        node: Node,
        location: SourceRange | None,
        path: str = "",
        severity: Severity = Severity.WARNING,
    ) -> "Offense":
        """Build an Offense anchored at ``location`` within ``path``."""
        return cls(
            code=code,
            symbol=symbol,
            message=message,
            location=location,
            node=node,
            path=path,
            severity=severity,
        )

    @property
    def position(self) -> str:
        """``path:line:col`` string for terminal output."""
        where = str(self.location) if self.location else "?:?"
        return f"{self.path}:{where}" if self.path else where


@dataclass(frozen=True)
class FileReport:
    """Outcome of checking one tree dump."""

    path: str
    offenses: tuple[Offense, ...] = ()
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


@dataclass(frozen=True)
class CheckResult:
    """Aggregate result of a check run, reports ordered by path."""

    reports: tuple[FileReport, ...] = ()
    severity: Severity = Severity.WARNING
    enabled: bool = True

    @property
    def offenses(self) -> list[Offense]:
        return [offense for report in self.reports for offense in report.offenses]

    @property
    def offense_count(self) -> int:
        return sum(len(report.offenses) for report in self.reports)

    @property
    def error_count(self) -> int:
        return sum(1 for report in self.reports if report.failed)

    def has_blocking_offenses(self) -> bool:
        return self.severity.blocks and self.offense_count > 0

    def should_fail(self) -> bool:
        """Exit non-zero on blocking offenses or on files that could not be read."""
        return self.has_blocking_offenses() or self.error_count > 0
