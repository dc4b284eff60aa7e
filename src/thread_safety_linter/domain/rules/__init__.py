"""Domain models for rules."""

__all__ = [
    "Checkable",
    "InstanceVariableInClassMethodRule",
]

from typing import Protocol

from thread_safety_linter.domain.entities import Offense
from thread_safety_linter.domain.nodes import Node


class Checkable(Protocol):
    """One-and-done check: given a tree root, return offenses in traversal order."""

    code: str
    symbol: str
    description: str

    def check(self, node: Node, path: str = "") -> list[Offense]:
        """Interrogate a whole tree for thread-safety breaches."""
        ...


from thread_safety_linter.domain.rules.instance_variable_in_class_method import (  # noqa: E402
    InstanceVariableInClassMethodRule,
)
