"""Filesystem Gateway - Infrastructure implementation of FileSystemProtocol."""

from pathlib import Path

from thread_safety_linter.domain.protocols import FileSystemProtocol


class FileSystemGateway(FileSystemProtocol):
    """Infrastructure implementation of FileSystemProtocol using pathlib."""

    def resolve_path(self, path: str) -> str:
        """Resolve and normalize a path string."""
        return str(Path(path).resolve())

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def is_directory(self, path: str) -> bool:
        """Check if path is a directory."""
        return Path(path).is_dir()

    def glob_files(self, path: str, suffixes: tuple[str, ...]) -> list[str]:
        """Get all dump files in path (recursive if directory), sorted."""
        path_obj = Path(path)
        if path_obj.is_dir():
            return sorted(
                str(p) for p in path_obj.rglob("*") if p.is_file() and p.suffix in suffixes
            )
        return [str(path_obj)] if path_obj.suffix in suffixes else []

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read text content of a file."""
        return Path(path).read_text(encoding=encoding)
