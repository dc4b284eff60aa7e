"""Instance variables in class methods (W9701)."""

from typing import Callable, Iterable

from thread_safety_linter.domain.classifier import is_class_method_definition, method_name
from thread_safety_linter.domain.constants import (
    CLASS_METHODS_BLOCK,
    DEFINE_METHOD,
    DEFINE_SINGLETON_METHOD,
    MODULE_FUNCTION,
    RULE_CODE,
    RULE_DESCRIPTION,
    RULE_MESSAGE,
    RULE_SYMBOL,
)
from thread_safety_linter.domain.detector import is_ivar_access, offense_anchor
from thread_safety_linter.domain.entities import Offense, Severity
from thread_safety_linter.domain.exemptions import NO_EXEMPTION, ExemptionState
from thread_safety_linter.domain.nodes import (
    Node,
    NodeRole,
    Payload,
    call_arguments,
    const_name,
    is_command,
    role_of,
    statements_of,
)
from thread_safety_linter.domain.rules import Checkable
from thread_safety_linter.domain.scope import (
    EMPTY_STACK,
    ModuleFunctionMode,
    ScopeKind,
    ScopeStack,
)

# A node still to visit, with the scope and exemption state in force there.
_Entry = tuple[Node, ScopeStack, ExemptionState]


def _literal_names(arguments: tuple) -> frozenset[str]:
    names = set()
    for argument in arguments:
        if isinstance(argument, Node) and argument.type in ("sym", "str"):
            value = argument.child(0)
            if isinstance(value, str):
                names.add(value)
    return frozenset(names)


def _is_bare_module_function(statement: Node) -> bool:
    return is_command(statement, MODULE_FUNCTION) and not call_arguments(statement)


def _is_inline_definition(argument: "Node | Payload") -> bool:
    """``module_function def f ... end`` passes the definition as the argument."""
    return isinstance(argument, Node) and role_of(argument) == NodeRole.METHOD_DEF


def _explicit_module_function_names(statements: tuple[Node, ...]) -> frozenset[str]:
    """First phase of directive resolution: every name passed to module_function."""
    names: frozenset[str] = frozenset()
    for statement in statements:
        if not is_command(statement, MODULE_FUNCTION):
            continue
        arguments = call_arguments(statement)
        names |= _literal_names(arguments)
        names |= {
            name
            for name in (method_name(a) for a in arguments if _is_inline_definition(a))
            if name is not None
        }
    return names


class _Walk:
    """
    One pre-order traversal driven by an explicit work list, so tree depth is
    bounded by memory rather than the interpreter stack. Handlers record
    offenses for the node they are given and return the child entries to
    visit next, in source order.
    """

    def __init__(self, rule: "InstanceVariableInClassMethodRule", path: str) -> None:
        self.rule = rule
        self.path = path
        self.offenses: list[Offense] = []
        self._handlers: dict[NodeRole, Callable[[Node, ScopeStack, ExemptionState], list[_Entry]]] = {
            NodeRole.CLASS: self._visit_class,
            NodeRole.MODULE: self._visit_module,
            NodeRole.SINGLETON_CLASS: self._visit_singleton_class,
            NodeRole.METHOD_DEF: self._visit_def,
            NodeRole.SINGLETON_METHOD_DEF: self._visit_defs,
            NodeRole.BLOCK: self._visit_block,
            NodeRole.CALL: self._visit_access,
            NodeRole.IVAR_ACCESS: self._visit_access,
            NodeRole.OTHER: self._visit_children,
        }

    def run(self, entries: list[_Entry]) -> list[Offense]:
        pending = list(reversed(entries))
        while pending:
            node, stack, state = pending.pop()
            children = self._handlers[role_of(node)](node, stack, state)
            pending.extend(reversed(children))
        return self.offenses

    @staticmethod
    def _entries(children: Iterable["Node | Payload"], stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        return [(child, stack, state) for child in children if isinstance(child, Node)]

    def _visit_children(self, node: Node, stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        return self._entries(node.children, stack, state)

    def scope_body(self, body: "Node | Payload", stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        """Entries for the statements of a class/module-like body, in order."""
        statements = statements_of(body)
        mode = ModuleFunctionMode(names=_explicit_module_function_names(statements))
        entries: list[_Entry] = []
        for statement in statements:
            if role_of(statement) == NodeRole.METHOD_DEF:
                entries.append((statement, stack.with_module_function_mode(mode), state))
                continue
            if is_command(statement, MODULE_FUNCTION):
                # The directive itself is never an access; inline definitions
                # are judged like sibling statements.
                for argument in statement.child_nodes():
                    inner = stack.with_module_function_mode(mode) if _is_inline_definition(argument) else stack
                    entries.append((argument, inner, state))
                if _is_bare_module_function(statement):
                    mode = ModuleFunctionMode(all_subsequent=True, names=mode.names)
                continue
            entries.append((statement, stack, state))
        return entries

    # Scopes

    def _visit_class(self, node: Node, stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        if len(node.children) != 3:
            return self._visit_children(node, stack, state)
        name, superclass, body = node.children
        inner = stack.enter(ScopeKind.CLASS_BODY, const_name(name))
        return self._entries((name, superclass), stack, state) + self.scope_body(body, inner, state)

    def _visit_module(self, node: Node, stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        if len(node.children) != 2:
            return self._visit_children(node, stack, state)
        name, body = node.children
        inner = stack.enter(ScopeKind.MODULE_BODY, const_name(name))
        return self._entries((name,), stack, state) + self.scope_body(body, inner, state)

    def _visit_singleton_class(self, node: Node, stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        if len(node.children) != 2:
            return self._visit_children(node, stack, state)
        target, body = node.children
        inner = stack.enter(ScopeKind.SINGLETON_CLASS_BODY)
        return self._entries((target,), stack, state) + self.scope_body(body, inner, state)

    def _visit_def(self, node: Node, stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        inner = stack.enter(
            ScopeKind.METHOD_DEF,
            method_name(node),
            class_method=is_class_method_definition(stack, node),
        )
        return self._entries(node.children, inner, state)

    def _visit_defs(self, node: Node, stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        # The receiver (usually ``self``) is evaluated outside the method body.
        inner = stack.enter(
            ScopeKind.METHOD_DEF,
            method_name(node),
            class_method=is_class_method_definition(stack, node),
        )
        return self._entries(node.children[:1], stack, state) + self._entries(node.children[1:], inner, state)

    def _visit_block(self, node: Node, stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        call = node.child(0)
        if not isinstance(call, Node):
            return self._visit_children(node, stack, state)
        entries: list[_Entry] = [(call, stack, state)]

        inner_state = state.entering_block(call)
        rest = node.children[1:]
        if is_command(call, CLASS_METHODS_BLOCK):
            inner = stack.enter(ScopeKind.CLASS_METHODS_BLOCK)
            entries += self._entries(rest[:-1], inner, inner_state)
            return entries + self.scope_body(rest[-1] if rest else None, inner, inner_state)

        inner = stack
        if is_command(call, DEFINE_SINGLETON_METHOD):
            inner = stack.enter(ScopeKind.DYNAMIC_METHOD_BODY, _declared_name(call), class_method=True)
        elif is_command(call, DEFINE_METHOD):
            inner = stack.enter(ScopeKind.DYNAMIC_METHOD_BODY, _declared_name(call))
        return entries + self._entries(rest, inner, inner_state)

    # Accesses

    def _visit_access(self, node: Node, stack: ScopeStack, state: ExemptionState) -> list[_Entry]:
        if is_ivar_access(node) and self._in_class_method(stack, state):
            self.offenses.append(
                Offense.from_node(
                    code=self.rule.code,
                    symbol=self.rule.symbol,
                    message=RULE_MESSAGE,
                    node=node,
                    location=offense_anchor(node),
                    path=self.path,
                    severity=self.rule.severity,
                )
            )
        return self._visit_children(node, stack, state)

    def _in_class_method(self, stack: ScopeStack, state: ExemptionState) -> bool:
        if state.exempt:
            return False
        frame = stack.innermost_method()
        return frame is not None and frame.class_method


def _declared_name(call: Node) -> str | None:
    names = _literal_names(call_arguments(call)[:1])
    return next(iter(names), None)


class InstanceVariableInClassMethodRule(Checkable):
    """
    Rule for W9701: instance variables used in class-level methods.

    A class method, ``class << self`` body, ``ClassMethods`` module,
    ``class_methods`` block, ``define_singleton_method`` body or
    ``module_function`` runs on one shared object, so ``@ivars`` there are
    shared by every thread calling it. Accesses inside ``synchronize`` blocks
    and ``define_method`` bodies are exempt.
    """

    code: str = RULE_CODE
    symbol: str = RULE_SYMBOL
    description: str = RULE_DESCRIPTION

    def __init__(self, severity: Severity = Severity.WARNING) -> None:
        self.severity = severity

    def check(self, node: Node, path: str = "") -> list[Offense]:
        """Walk the tree rooted at ``node`` and return offenses in pre-order."""
        walk = _Walk(self, path)
        return walk.run(walk.scope_body(node, EMPTY_STACK, NO_EXEMPTION))
