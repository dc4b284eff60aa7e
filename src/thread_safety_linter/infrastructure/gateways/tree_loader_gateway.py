"""Tree Loader Gateway - picks a dump reader from the file suffix."""

from pathlib import Path

from thread_safety_linter.domain.constants import JSON_SUFFIXES, SEXP_SUFFIXES
from thread_safety_linter.domain.errors import TreeFormatError
from thread_safety_linter.domain.nodes import Node
from thread_safety_linter.domain.protocols import FileSystemProtocol, TreeLoaderProtocol
from thread_safety_linter.infrastructure.gateways.json_tree_gateway import JsonTreeGateway
from thread_safety_linter.infrastructure.gateways.sexp_gateway import SExpressionGateway


class TreeLoaderGateway(TreeLoaderProtocol):
    """Loads ``.json`` dumps as JSON and ``.sexp``/``.ast``/``.txt`` dumps as s-expressions."""

    suffixes: tuple[str, ...] = JSON_SUFFIXES + SEXP_SUFFIXES

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        sexp_gateway: SExpressionGateway | None = None,
        json_gateway: JsonTreeGateway | None = None,
    ) -> None:
        self._filesystem = filesystem
        self._sexp_gateway = sexp_gateway or SExpressionGateway()
        self._json_gateway = json_gateway or JsonTreeGateway()

    def supports(self, path: str) -> bool:
        return Path(path).suffix.lower() in self.suffixes

    def load(self, path: str) -> Node:
        """Read and parse one dump. OSError and TreeFormatError propagate."""
        suffix = Path(path).suffix.lower()
        if suffix not in self.suffixes:
            raise TreeFormatError(f"unsupported tree dump type '{suffix or path}'")
        text = self._filesystem.read_text(path)
        if suffix in JSON_SUFFIXES:
            return self._json_gateway.read(text)
        return self._sexp_gateway.read(text)
