"""Pytest configuration shared by the unit tests.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the root on sys.path so ``tests.linter_test_utils`` imports resolve.
"""

from unittest.mock import MagicMock

from thread_safety_linter.domain.config import ConfigurationLoader


def check_trees_required_deps(**overrides: object) -> dict[str, object]:
    """Return required dependency mocks for CheckTreesUseCase. Pass overrides to customize."""
    tree_loader = MagicMock()
    tree_loader.suffixes = (".json", ".sexp")
    filesystem = MagicMock()
    filesystem.is_directory.return_value = False
    base = {
        "tree_loader": tree_loader,
        "filesystem": filesystem,
        "telemetry": MagicMock(),
        "config_loader": ConfigurationLoader(),
    }
    base.update(overrides)
    return base
