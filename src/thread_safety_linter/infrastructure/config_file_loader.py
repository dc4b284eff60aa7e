"""Load [tool.thread-safety-linter] from pyproject.toml. Infrastructure I/O only."""

import logging
import sys
from pathlib import Path

from thread_safety_linter.domain.constants import CONFIG_SECTION

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

logger = logging.getLogger(__name__)


class ConfigFileLoader:
    """Loads config from the nearest pyproject.toml."""

    @staticmethod
    def find_pyproject(start: Path | None = None) -> Path | None:
        """Walk up from start (default: CWD) to the first pyproject.toml."""
        current_path = (start or Path.cwd()).resolve()
        for directory in (current_path, *current_path.parents):
            config_file = directory / "pyproject.toml"
            if config_file.is_file():
                return config_file
        return None

    @staticmethod
    def load_config_from_fs(start: Path | None = None) -> dict[str, object]:
        """Return the [tool.thread-safety-linter] table, or {} when absent or unreadable."""
        config_file = ConfigFileLoader.find_pyproject(start)
        if config_file is None:
            return {}
        try:
            with config_file.open("rb") as f:
                data = toml_lib.load(f)
        except (OSError, toml_lib.TOMLDecodeError) as e:
            logger.warning("Could not read %s: %s", config_file, e)
            return {}
        section = data.get("tool", {}).get(CONFIG_SECTION, {})
        if not isinstance(section, dict):
            logger.warning("[tool.%s] in %s is not a table; ignoring it.", CONFIG_SECTION, config_file)
            return {}
        logger.debug("Loaded configuration from %s", config_file)
        return section
