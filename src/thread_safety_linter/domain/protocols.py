"""Ports the use cases depend on. Implementations live in infrastructure."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from thread_safety_linter.domain.entities import CheckResult
    from thread_safety_linter.domain.nodes import Node


class TreeLoaderProtocol(Protocol):
    """Turns a tree dump file into a root Node."""

    suffixes: tuple[str, ...]

    def supports(self, path: str) -> bool: ...
    def load(self, path: str) -> "Node": ...


class FileSystemProtocol(Protocol):
    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        ...

    def exists(self, path: str) -> bool:
        """Check that path exists."""
        ...

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory."""
        ...

    def glob_files(self, path: str, suffixes: tuple[str, ...]) -> list[str]:
        """Files under path (recursive if directory) ending in one of suffixes."""
        ...

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read file content."""
        ...


class TelemetryPort(Protocol):
    """Progress and diagnostics channel for the user (stderr)."""

    def step(self, message: str) -> None: ...
    def error(self, message: str) -> None: ...
    def warning(self, message: str) -> None: ...


class ReporterProtocol(Protocol):
    def report(self, result: "CheckResult") -> None:
        """Render a check result to the user."""
        ...
