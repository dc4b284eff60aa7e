"""S-expression Gateway - reads the tree dumps printed by ``ruby-parse``.

Example input::

    (class
      (const nil :Test) nil
      (defs
        (self) :some_method
        (args)
        (ivasgn :@params
          (lvar :params))))

Ranges attached to the nodes refer to positions in the dump text, since the
plain dump carries no source locations.
"""

import bisect
import re
from dataclasses import dataclass, field

from thread_safety_linter.domain.errors import TreeFormatError
from thread_safety_linter.domain.nodes import Node, Payload, SourceRange

_TOKEN = re.compile(
    r"""
      (?P<space>\s+)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<string>"(?:[^"\\]|\\.)*")
    | (?P<qsymbol>:"(?:[^"\\]|\\.)*")
    | (?P<atom>[^\s()"]+)
    """,
    re.VERBOSE | re.DOTALL,
)

_INTEGER = re.compile(r"[-+]?\d[\d_]*\Z")
_FLOAT = re.compile(r"[-+]?\d[\d_]*(\.\d+)?([eE][-+]?\d+)?\Z")
# Rational and Complex#inspect print as "(3/1)" and "(0+1i)".
_NUMERIC_LITERAL = re.compile(r"[-+]?\d")
_NODE_TYPE = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*[?!]?\Z")

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "e": "\x1b",
    "s": " ",
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F ]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{1,2}|[0-7]{1,3}|.)", re.DOTALL)

# Node types whose first symbol payload is the name offenses point at.
NAME_ANCHORED_TYPES = frozenset(
    {"ivar", "ivasgn", "cvar", "cvasgn", "gvar", "gvasgn", "lvar", "lvasgn", "def"}
)

_ATOMS: dict[str, Payload] = {
    "nil": None,
    "true": True,
    "false": False,
    "Infinity": float("inf"),
    "-Infinity": float("-inf"),
    "NaN": float("nan"),
}


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    start: int
    end: int


@dataclass
class _OpenNode:
    type: str
    start: int
    children: list = field(default_factory=list)
    name_location: SourceRange | None = None


def _unescape(body: str) -> str:
    def replace(match: re.Match) -> str:
        escape = match.group(1)
        if escape.startswith("u{"):
            return "".join(chr(int(code, 16)) for code in escape[2:-1].split())
        if escape.startswith("u") and len(escape) == 5:
            return chr(int(escape[1:], 16))
        if escape.startswith("x") and len(escape) > 1:
            return chr(int(escape[1:], 16))
        if escape.isdigit() and escape != "0":
            return chr(int(escape, 8))
        return _SIMPLE_ESCAPES.get(escape, escape)

    return _ESCAPE.sub(replace, body)


class _SExpressionParser:
    """Single-use parser for one dump; keeps the text and its line offsets."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._line_starts = [0] + [m.end() for m in re.finditer(r"\n", text)]

    def parse(self) -> Node:
        """Parse one tree. An empty dump (or bare ``nil``) is an empty program."""
        tokens = self._tokenize(self._text)
        if not tokens or (len(tokens) == 1 and tokens[0].text == "nil"):
            return Node(type="begin")

        stack: list[_OpenNode] = []
        root: Node | None = None
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if root is not None:
                raise self._error("unexpected content after the tree", token.start)

            if token.kind == "open":
                literal = self._numeric_literal(tokens, index)
                if literal is not None:
                    self._attach(stack, literal, tokens[index + 1])
                    index += 3
                    continue
                if index + 1 >= len(tokens) or tokens[index + 1].kind != "atom":
                    raise self._error("expected a node type after '('", token.start)
                node_type = tokens[index + 1].text
                if not _NODE_TYPE.match(node_type):
                    raise self._error(f"invalid node type {node_type!r}", tokens[index + 1].start)
                stack.append(_OpenNode(type=node_type, start=token.start))
                index += 2
                continue

            if token.kind == "close":
                if not stack:
                    raise self._error("unbalanced ')'", token.start)
                open_node = stack.pop()
                node = Node(
                    type=open_node.type,
                    children=tuple(open_node.children),
                    location=self._range(open_node.start, token.end),
                    name_location=open_node.name_location,
                )
                if stack:
                    stack[-1].children.append(node)
                else:
                    root = node
                index += 1
                continue

            if not stack:
                raise self._error(f"unexpected token {token.text!r} outside a node", token.start)
            self._attach(stack, self._payload(token), token)
            index += 1

        if stack:
            raise self._error(f"unclosed '({stack[-1].type}'", stack[-1].start)
        assert root is not None
        return root

    def _tokenize(self, text: str) -> list[_Token]:
        tokens: list[_Token] = []
        position = 0
        while position < len(text):
            match = _TOKEN.match(text, position)
            if match is None:
                reason = "unterminated string" if text[position] == '"' else "unexpected character"
                raise self._error(reason, position)
            kind = match.lastgroup or "atom"
            if kind != "space":
                tokens.append(_Token(kind, match.group(), match.start(), match.end()))
            position = match.end()
        return tokens

    def _numeric_literal(self, tokens: list[_Token], index: int) -> str | None:
        """``(3/1)`` rational or ``(0+1i)`` complex literal starting at ``index``."""
        if index + 2 >= len(tokens):
            return None
        atom, close = tokens[index + 1], tokens[index + 2]
        if atom.kind == "atom" and close.kind == "close" and _NUMERIC_LITERAL.match(atom.text):
            return atom.text
        return None

    def _attach(self, stack: list[_OpenNode], value: Payload, token: _Token) -> None:
        if not stack:
            raise self._error(f"unexpected literal {token.text!r} outside a node", token.start)
        open_node = stack[-1]
        if (
            open_node.name_location is None
            and open_node.type in NAME_ANCHORED_TYPES
            and token.kind in ("atom", "qsymbol")
            and token.text.startswith(":")
        ):
            open_node.name_location = self._range(token.start, token.end)
        open_node.children.append(value)

    def _payload(self, token: _Token) -> Payload:
        if token.kind == "string":
            return _unescape(token.text[1:-1])
        if token.kind == "qsymbol":
            return _unescape(token.text[2:-1])
        text = token.text
        if text in _ATOMS:
            return _ATOMS[text]
        if text.startswith(":") and len(text) > 1:
            return text[1:]
        if _INTEGER.match(text):
            return int(text.replace("_", ""))
        if _FLOAT.match(text):
            return float(text.replace("_", ""))
        return text

    def _position(self, offset: int) -> tuple[int, int]:
        line_index = bisect.bisect_right(self._line_starts, offset) - 1
        return line_index + 1, offset - self._line_starts[line_index]

    def _range(self, start: int, end: int) -> SourceRange:
        line, column = self._position(start)
        end_line, end_column = self._position(end)
        return SourceRange(line=line, column=column, end_line=end_line, end_column=end_column)

    def _error(self, message: str, offset: int) -> TreeFormatError:
        line, column = self._position(offset)
        return TreeFormatError(message, line=line, column=column)


class SExpressionGateway:
    """Parses ``ruby-parse`` s-expression text into Nodes. Safe to share across threads."""

    def read(self, text: str) -> Node:
        """Parse a dump into its root node; raises TreeFormatError with a position."""
        return _SExpressionParser(text).parse()
