from typing import TYPE_CHECKING, Any, cast

from thread_safety_linter.domain.config import ConfigurationLoader
from thread_safety_linter.infrastructure.config_file_loader import ConfigFileLoader
from thread_safety_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway
from thread_safety_linter.infrastructure.gateways.tree_loader_gateway import TreeLoaderGateway
from thread_safety_linter.interface.telemetry import ProjectTelemetry

if TYPE_CHECKING:
    from thread_safety_linter.domain.protocols import (
        FileSystemProtocol,
        TelemetryPort,
        TreeLoaderProtocol,
    )


class ThreadSafetyContainer:
    """Dependency Injection Container for the thread-safety linter."""

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        self._singletons: dict[str, Any] = {}
        self._register_defaults(config_dict)

    def _register_defaults(self, config_dict: dict[str, object] | None) -> None:
        """Register default implementations for protocols."""
        if config_dict is None:
            config_dict = ConfigFileLoader.load_config_from_fs()
        self.register_singleton("ConfigurationLoader", ConfigurationLoader(config_dict))
        self.register_singleton("TelemetryPort", ProjectTelemetry("THREAD SAFETY"))

        filesystem = FileSystemGateway()
        self.register_singleton("FileSystemGateway", filesystem)
        self.register_singleton("TreeLoaderGateway", TreeLoaderGateway(filesystem))

    def register_singleton(self, key: str, instance: Any) -> None:
        """Register a singleton instance."""
        self._singletons[key] = instance

    def get(self, key: str) -> Any:
        """Retrieve a dependency by key. Prefer explicit get_* methods for type safety."""
        if key in self._singletons:
            return self._singletons[key]
        raise ValueError(f"Dependency '{key}' not registered.")

    def get_config_loader(self) -> ConfigurationLoader:
        return cast(ConfigurationLoader, self.get("ConfigurationLoader"))

    def get_telemetry_port(self) -> "TelemetryPort":
        """Return the telemetry/UI port."""
        return cast("TelemetryPort", self.get("TelemetryPort"))

    def get_filesystem_gateway(self) -> "FileSystemProtocol":
        return cast("FileSystemProtocol", self.get("FileSystemGateway"))

    def get_tree_loader(self) -> "TreeLoaderProtocol":
        return cast("TreeLoaderProtocol", self.get("TreeLoaderGateway"))
