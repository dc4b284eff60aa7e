"""Class-method classification of method definitions."""

from thread_safety_linter.domain.constants import CLASS_METHODS_MODULE
from thread_safety_linter.domain.nodes import Node, NodeRole, role_of
from thread_safety_linter.domain.scope import ScopeKind, ScopeStack


def method_name(node: Node) -> str | None:
    """Name of a ``def``/``defs`` node."""
    index = 1 if role_of(node) == NodeRole.SINGLETON_METHOD_DEF else 0
    name = node.child(index)
    return name if isinstance(name, str) else None


def is_class_method_definition(stack: ScopeStack, node: Node) -> bool:
    """
    Decide whether a method definition's body runs in class-level context.

    ``stack`` is the scope stack at the moment the definition is visited. Its
    top frame carries the ``module_function`` state only when the definition
    is a direct statement of that scope; the walker clears it otherwise.

    Definitions nested in a method body are judged by the nearest non-method
    frame: a ``def`` inside ``def self.x`` defines an instance method, while a
    ``def`` inside a method of ``class << self`` stays on the singleton.
    """
    role = role_of(node)
    if role == NodeRole.SINGLETON_METHOD_DEF:
        return True
    if role != NodeRole.METHOD_DEF:
        return False

    container = stack.innermost_non_method()
    if container.kind in (ScopeKind.SINGLETON_CLASS_BODY, ScopeKind.CLASS_METHODS_BLOCK):
        return True
    if container.kind == ScopeKind.MODULE_BODY and container.declared_name == CLASS_METHODS_MODULE:
        return True

    return stack.top.module_function_mode.covers(method_name(node))
