"""JSON Tree Gateway - reads JSON tree dumps.

Two shapes are accepted:

* the array form printed by ``ruby-parse --emit-json``::

      ["class", ["const", null, "Test"], null, ["ivasgn", "@x", ["int", 1]]]

* an object form that also carries source ranges::

      {"type": "ivasgn",
       "children": ["@x", {"type": "int", "children": [1]}],
       "location": {"line": 3, "column": 4, "end_line": 3, "end_column": 11},
       "name_location": {"line": 3, "column": 4, "end_line": 3, "end_column": 6}}
"""

import json

from thread_safety_linter.domain.errors import TreeFormatError
from thread_safety_linter.domain.nodes import Node, Payload, SourceRange

_RANGE_KEYS = ("line", "column", "end_line", "end_column")


class JsonTreeGateway:
    """Converts decoded JSON into Nodes. Stateless."""

    def read(self, text: str) -> Node:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise TreeFormatError(f"invalid JSON: {e.msg}", line=e.lineno, column=e.colno - 1) from e
        if data is None:
            return Node(type="begin")
        try:
            node = self._convert(data, "$")
        except RecursionError as e:
            raise TreeFormatError("tree is nested too deeply") from e
        if not isinstance(node, Node):
            raise TreeFormatError("top level of a tree dump must be a node")
        return node

    def _convert(self, value: object, where: str) -> "Node | Payload":
        if isinstance(value, list):
            return self._from_array(value, where)
        if isinstance(value, dict):
            return self._from_object(value, where)
        if value is None or isinstance(value, (str, int, float, bool)):
            return value
        raise TreeFormatError(f"unsupported value at {where}: {value!r}")

    def _from_array(self, value: list, where: str) -> Node:
        if not value or not isinstance(value[0], str):
            raise TreeFormatError(f"node at {where} must start with its type name")
        children = tuple(
            self._convert(child, f"{where}[{index}]") for index, child in enumerate(value[1:], 1)
        )
        return Node(type=value[0], children=children)

    def _from_object(self, value: dict, where: str) -> Node:
        node_type = value.get("type")
        if not isinstance(node_type, str):
            raise TreeFormatError(f"node at {where} has no 'type'")
        raw_children = value.get("children", [])
        if not isinstance(raw_children, list):
            raise TreeFormatError(f"'children' of node at {where} must be a list")
        children = tuple(
            self._convert(child, f"{where}.children[{index}]")
            for index, child in enumerate(raw_children)
        )
        return Node(
            type=node_type,
            children=children,
            location=self._range(value.get("location"), f"{where}.location"),
            name_location=self._range(value.get("name_location"), f"{where}.name_location"),
        )

    def _range(self, value: object, where: str) -> SourceRange | None:
        if value is None:
            return None
        if not isinstance(value, dict) or any(
            not isinstance(value.get(key), int) or isinstance(value.get(key), bool) for key in _RANGE_KEYS
        ):
            raise TreeFormatError(f"{where} needs integer {', '.join(_RANGE_KEYS)}")
        return SourceRange(**{key: value[key] for key in _RANGE_KEYS})
