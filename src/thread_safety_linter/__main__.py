"""Package entry point - composition root. Wire dependencies and run the CLI app."""

from thread_safety_linter.infrastructure.di.container import ThreadSafetyContainer
from thread_safety_linter.interface.cli import CLIAppFactory, CLIDependencies


def main() -> None:
    """Entry point: wire dependencies at composition root, create app, run."""
    container = ThreadSafetyContainer()
    deps = CLIDependencies(
        config_loader=container.get_config_loader(),
        telemetry=container.get_telemetry_port(),
        filesystem=container.get_filesystem_gateway(),
        tree_loader=container.get_tree_loader(),
    )
    app = CLIAppFactory.create_app(deps)
    app()


if __name__ == "__main__":
    main()
