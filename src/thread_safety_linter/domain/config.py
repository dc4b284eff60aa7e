"""Configuration for linter settings. Immutable value object created by Infrastructure."""

from __future__ import annotations

import logging

from thread_safety_linter.domain.entities import Severity

logger = logging.getLogger(__name__)


class ConfigurationLoader:
    """
    Immutable configuration for linter settings.

    Created from the ``[tool.thread-safety-linter]`` table. Domain does not
    read the filesystem; Infrastructure calls ConfigFileLoader.load_config_from_fs()
    and constructs ConfigurationLoader(config_dict) at composition root.
    """

    def __init__(self, config_dict: dict[str, object] | None = None) -> None:
        """Set config once at construction. No mutable state after init."""
        self._config: dict[str, object] = dict(config_dict or {})
        self._severity = self._parse_severity(self._config.get("severity", Severity.WARNING.value))

    @staticmethod
    def _parse_severity(raw: object) -> Severity:
        try:
            return Severity(str(raw).lower())
        except ValueError:
            logger.warning(
                "Configuration Warning: unknown severity %r; using '%s'.",
                raw,
                Severity.WARNING.value,
            )
            return Severity.WARNING

    @property
    def config(self) -> dict[str, object]:
        """Return the loaded configuration."""
        return self._config

    @property
    def enabled(self) -> bool:
        """Whether the instance-variable rule runs at all."""
        return bool(self._config.get("enabled", True))

    @property
    def severity(self) -> Severity:
        return self._severity

    @property
    def exclude(self) -> list[str]:
        """
        Path fragments to skip when expanding check targets.

        Intended for dumps of vendored or generated code.
        """
        raw = self._config.get("exclude", [])
        if isinstance(raw, list):
            return [str(x) for x in raw if isinstance(x, str)]
        logger.warning("Configuration Warning: 'exclude' must be a list of strings.")
        return []

    def is_excluded(self, path: str) -> bool:
        normalized = path.replace("\\", "/")
        return any(fragment in normalized for fragment in self.exclude)

    def with_severity(self, severity: Severity) -> ConfigurationLoader:
        """Copy with a severity override (CLI flag beats pyproject.toml)."""
        return ConfigurationLoader({**self._config, "severity": severity.value})
