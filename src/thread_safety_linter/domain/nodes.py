"""Tree node contract consumed by the analysis engine.

Nodes mirror the Ruby ``parser`` gem AST: a type tag (``"class"``, ``"defs"``,
``"ivasgn"`` ...), ordered children that are either sub-nodes or literal
payloads, and an optional source range.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Union

Payload = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class SourceRange:
    """Line is 1-based, column is 0-based (parser gem convention)."""

    line: int
    column: int
    end_line: int
    end_column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column + 1}"


@dataclass(frozen=True, eq=False)
class Node:
    """A syntax tree node. Compared by identity, like AST nodes elsewhere."""

    type: str
    children: tuple["Node | Payload", ...] = ()
    location: SourceRange | None = None
    name_location: SourceRange | None = field(default=None, repr=False)

    def child_nodes(self) -> Iterator["Node"]:
        """Yield only the children that are nodes, in order."""
        for child in self.children:
            if isinstance(child, Node):
                yield child

    def child(self, index: int) -> "Node | Payload":
        """Return the child at index, or None when the node is shorter."""
        if 0 <= index < len(self.children):
            return self.children[index]
        return None

    @property
    def anchor(self) -> SourceRange | None:
        """Range an offense should point at: the name if known, else the node."""
        return self.name_location or self.location


class NodeRole(Enum):
    """Closed set of structural roles the engine distinguishes."""

    CLASS = "class"
    MODULE = "module"
    SINGLETON_CLASS = "sclass"
    METHOD_DEF = "def"
    SINGLETON_METHOD_DEF = "defs"
    BLOCK = "block"
    CALL = "send"
    IVAR_ACCESS = "ivar"
    OTHER = "other"


_ROLE_BY_TYPE: dict[str, NodeRole] = {
    "class": NodeRole.CLASS,
    "module": NodeRole.MODULE,
    "sclass": NodeRole.SINGLETON_CLASS,
    "def": NodeRole.METHOD_DEF,
    "defs": NodeRole.SINGLETON_METHOD_DEF,
    "block": NodeRole.BLOCK,
    "numblock": NodeRole.BLOCK,
    "itblock": NodeRole.BLOCK,
    "send": NodeRole.CALL,
    "ivar": NodeRole.IVAR_ACCESS,
    "ivasgn": NodeRole.IVAR_ACCESS,
}

# Statement sequences: their children are siblings of one scope body.
SEQUENCE_TYPES = frozenset({"begin", "kwbegin"})


def role_of(node: Node) -> NodeRole:
    """Map a node's type tag to its role; unknown tags are OTHER."""
    return _ROLE_BY_TYPE.get(node.type, NodeRole.OTHER)


def const_name(node: "Node | Payload") -> str | None:
    """Last segment of a ``(const scope :Name)`` node, e.g. ``ClassMethods``."""
    if not isinstance(node, Node) or node.type != "const":
        return None
    name = node.child(1)
    return name if isinstance(name, str) else None


def call_name(node: "Node | Payload") -> str | None:
    """Method name of a ``send``/``csend`` node."""
    if not isinstance(node, Node) or node.type not in ("send", "csend"):
        return None
    name = node.child(1)
    return name if isinstance(name, str) else None


def call_receiver(node: Node) -> "Node | Payload":
    """Receiver of a ``send`` node (None when implicit self)."""
    return node.child(0)


def call_arguments(node: Node) -> tuple["Node | Payload", ...]:
    """Arguments of a ``send`` node."""
    return node.children[2:]


def is_implicit_self(receiver: "Node | Payload") -> bool:
    """True for a missing receiver or an explicit ``self``."""
    if receiver is None:
        return True
    return isinstance(receiver, Node) and receiver.type == "self"


def is_command(node: "Node | Payload", name: str) -> bool:
    """True for a call to ``name`` on implicit (or explicit) self."""
    if not isinstance(node, Node) or call_name(node) != name:
        return False
    return is_implicit_self(call_receiver(node))


def statements_of(body: "Node | Payload") -> tuple[Node, ...]:
    """Sibling statements of a scope body (a ``begin`` or a single node)."""
    if not isinstance(body, Node):
        return ()
    if body.type in SEQUENCE_TYPES:
        return tuple(body.child_nodes())
    return (body,)


def s(node_type: str, *children: "Node | Payload", location: SourceRange | None = None) -> Node:
    """Build a node the way parser gem's ``s(:type, ...)`` helper does."""
    return Node(type=node_type, children=tuple(children), location=location)
