"""
Instance-variable access detection.

Detectors answer one question: "does this node touch instance-scoped state of
self?". They know nothing about scopes or exemptions; the rule combines them.
"""

from thread_safety_linter.domain.constants import (
    CLASS_VARIABLE_MARKER,
    INSTANCE_MARKER,
    IVAR_REFLECTION_ARITY,
)
from thread_safety_linter.domain.nodes import (
    Node,
    NodeRole,
    Payload,
    SourceRange,
    call_arguments,
    call_name,
    call_receiver,
    is_implicit_self,
    role_of,
)


def _is_ivar_name(value: "Node | Payload") -> bool:
    return (
        isinstance(value, str)
        and value.startswith(INSTANCE_MARKER)
        and not value.startswith(CLASS_VARIABLE_MARKER)
    )


def is_ivar_name_literal(node: "Node | Payload") -> bool:
    """
    Match ``:@name``, ``"@name"`` and interpolated ``:"@#{name}"``.

    An interpolated name counts when its leading string part carries the marker.
    """
    if not isinstance(node, Node):
        return False
    if node.type in ("sym", "str"):
        return _is_ivar_name(node.child(0))
    if node.type in ("dsym", "dstr"):
        first = node.child(0)
        return isinstance(first, Node) and first.type == "str" and _is_ivar_name(first.child(0))
    return False


def is_direct_ivar_access(node: Node) -> bool:
    """``@x`` reads and ``@x = ...`` writes (including ``@x ||= ...`` targets)."""
    return role_of(node) == NodeRole.IVAR_ACCESS


def is_reflective_ivar_access(node: Node) -> bool:
    """``instance_variable_get(:@x)`` / ``instance_variable_set(:@x, v)`` on self."""
    if node.type != "send":
        return False
    arity = IVAR_REFLECTION_ARITY.get(call_name(node) or "")
    if arity is None:
        return False
    if not is_implicit_self(call_receiver(node)):
        return False
    arguments = call_arguments(node)
    return len(arguments) == arity and is_ivar_name_literal(arguments[0])


def is_ivar_access(node: Node) -> bool:
    return is_direct_ivar_access(node) or is_reflective_ivar_access(node)


def offense_anchor(node: Node) -> SourceRange | None:
    """Direct accesses point at the variable name; reflective calls at the call."""
    if is_direct_ivar_access(node):
        return node.anchor
    return node.location
