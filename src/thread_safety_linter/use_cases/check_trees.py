"""Use Case: Check Trees - run the rule over tree dump files and gather results."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from thread_safety_linter.domain.entities import CheckResult, FileReport
from thread_safety_linter.domain.errors import TreeFormatError
from thread_safety_linter.domain.protocols import (
    FileSystemProtocol,
    TelemetryPort,
    TreeLoaderProtocol,
)
from thread_safety_linter.domain.rules import InstanceVariableInClassMethodRule

if TYPE_CHECKING:
    from thread_safety_linter.domain.config import ConfigurationLoader

logger = logging.getLogger(__name__)


class CheckTreesUseCase:
    """Expand targets, analyze each dump with a fresh walk, and collect reports."""

    def __init__(
        self,
        tree_loader: TreeLoaderProtocol,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        config_loader: "ConfigurationLoader",
    ) -> None:
        self.tree_loader = tree_loader
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.config_loader = config_loader

    def execute(self, paths: list[str], jobs: int = 1) -> CheckResult:
        """
        Check every dump under ``paths``.

        Args:
            paths: Files or directories holding tree dumps.
            jobs: Worker threads. Reports come back sorted by path either way.

        Returns:
            CheckResult with one FileReport per dump, failures included.
        """
        severity = self.config_loader.severity
        if not self.config_loader.enabled:
            self.telemetry.step("Rule disabled in configuration; skipping check.")
            return CheckResult(severity=severity, enabled=False)

        targets = self.collect_targets(paths)
        self.telemetry.step(f"Checking {len(targets)} tree dump(s) with {max(jobs, 1)} job(s)...")
        rule = InstanceVariableInClassMethodRule(severity=severity)

        if jobs > 1 and len(targets) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as executor:
                reports = list(executor.map(lambda target: self.check_file(rule, target), targets))
        else:
            reports = [self.check_file(rule, target) for target in targets]

        return CheckResult(reports=tuple(reports), severity=severity)

    def collect_targets(self, paths: list[str]) -> list[str]:
        """Expand directories, drop excluded paths, dedupe and sort."""
        targets: set[str] = set()
        for path in paths:
            if self.filesystem.is_directory(path):
                candidates = self.filesystem.glob_files(path, self.tree_loader.suffixes)
            else:
                candidates = [path]
            for candidate in candidates:
                if self.config_loader.is_excluded(candidate):
                    logger.debug("Excluded by configuration: %s", candidate)
                    continue
                targets.add(candidate)
        return sorted(targets)

    def check_file(self, rule: InstanceVariableInClassMethodRule, path: str) -> FileReport:
        """Analyze one dump. Load failures become a FileReport error, never an exception."""
        try:
            tree = self.tree_loader.load(path)
        except (OSError, UnicodeDecodeError, TreeFormatError) as e:
            logger.warning("Skipping %s: %s", path, e)
            return FileReport(path=path, error=str(e))

        offenses = rule.check(tree, path=path)
        logger.debug("%s: %d offense(s)", path, len(offenses))
        return FileReport(path=path, offenses=tuple(offenses))
