"""Recover the embedded OpenAPI document from a ``swagger-ui-init.js`` bundle.

The script is parsed with tree-sitter (JavaScript grammar) and never
executed.  The first ``swaggerDoc`` binding found in a pre-order walk --
a variable declarator, a plain assignment, or an object property -- is
converted to a Python value by a restricted evaluator that understands
only object, array, primitive literal and identifier nodes.  Identifiers
evaluate to their own name; nothing is looked up in any scope.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import tree_sitter_javascript
from tree_sitter import Language, Node, Parser

from src.shared.constants import SWAGGER_DOC_NAME
from src.shared.errors import SpecNotFoundError

logger = logging.getLogger(__name__)

_JS_LANGUAGE = Language(tree_sitter_javascript.language())

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}

_HEX_ESCAPE = re.compile(r"\\(?:x([0-9a-fA-F]{2})|u\{([0-9a-fA-F]+)\}|u([0-9a-fA-F]{4}))")


def _node_text(node: Node) -> str:
    """Return the UTF-8 text of a tree-sitter node (``node.text`` is bytes)."""
    return node.text.decode("utf-8")


def parse_script(source: str | bytes):
    """Parse JavaScript *source* and return the tree-sitter Tree."""
    if isinstance(source, str):
        source = source.encode("utf-8")
    tree = Parser(_JS_LANGUAGE).parse(source)
    if tree.root_node.has_error:
        logger.warning("Parse errors in swagger-ui-init.js; continuing with partial tree")
    return tree


def find_swagger_doc_node(root: Node, name: str = SWAGGER_DOC_NAME) -> Node | None:
    """Return the value node of the first *name* binding in pre-order, or ``None``."""
    stack = [root]
    while stack:
        node = stack.pop()
        value = _binding_value(node, name)
        if value is not None:
            return value
        # Reverse so the leftmost child is visited first
        stack.extend(reversed(node.named_children))
    return None


def extract_swagger_doc(source: str | bytes) -> Any:
    """Parse *source* and return the ``swaggerDoc`` literal as plain data.

    Raises:
        SpecNotFoundError: If the script holds no ``swaggerDoc`` binding.
    """
    tree = parse_script(source)
    node = find_swagger_doc_node(tree.root_node)
    if node is None:
        raise SpecNotFoundError()
    return node_to_value(node)


# ---------------------------------------------------------------------------
# Restricted evaluator
# ---------------------------------------------------------------------------


def node_to_value(node: Node | None) -> Any:
    """Convert a literal expression node into a Python value.

    Unsupported node kinds evaluate to ``None``.
    """
    if node is None:
        return None

    kind = node.type
    if kind == "object":
        return _object_to_dict(node)
    if kind == "array":
        return [node_to_value(child) for child in node.named_children if child.type != "comment"]
    if kind == "string":
        return _string_value(node)
    if kind == "number":
        return _number_value(_node_text(node))
    if kind == "true":
        return True
    if kind == "false":
        return False
    if kind == "null":
        return None
    if kind in ("identifier", "undefined"):
        return _node_text(node)
    if kind == "unary_expression":
        operator = node.child_by_field_name("operator")
        argument = node.child_by_field_name("argument")
        if (
            operator is not None
            and argument is not None
            and _node_text(operator) == "-"
            and argument.type == "number"
        ):
            return -_number_value(_node_text(argument))
    logger.debug("Unsupported node kind in swaggerDoc literal: %s", kind)
    return None


def _object_to_dict(node: Node) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for child in node.named_children:
        if child.type == "pair":
            key = _property_key(child.child_by_field_name("key"))
            if key is None:
                continue
            result[key] = node_to_value(child.child_by_field_name("value"))
        elif child.type == "shorthand_property_identifier":
            name = _node_text(child)
            result[name] = name
    return result


def _property_key(node: Node | None) -> str | None:
    """Key of an object property; computed keys are not supported."""
    if node is None:
        return None
    if node.type == "string":
        return _string_value(node)
    if node.type == "number":
        return _node_text(node)
    if node.type in ("property_identifier", "identifier"):
        return _node_text(node)
    return None


def _binding_value(node: Node, name: str) -> Node | None:
    """Value node when *node* binds *name*, else ``None``."""
    if node.type == "variable_declarator":
        target = node.child_by_field_name("name")
        if target is not None and target.type == "identifier" and _node_text(target) == name:
            return node.child_by_field_name("value")
    elif node.type == "assignment_expression":
        target = node.child_by_field_name("left")
        if target is not None and target.type == "identifier" and _node_text(target) == name:
            return node.child_by_field_name("right")
    elif node.type == "pair":
        if _property_key(node.child_by_field_name("key")) == name:
            return node.child_by_field_name("value")
    return None


def _string_value(node: Node) -> str:
    parts: list[str] = []
    for child in node.named_children:
        if child.type == "string_fragment":
            parts.append(_node_text(child))
        elif child.type == "escape_sequence":
            parts.append(_decode_escape(_node_text(child)))
    return "".join(parts)


def _decode_escape(sequence: str) -> str:
    """Decode one JavaScript escape sequence such as ``\\n`` or ``\\u00e9``."""
    match = _HEX_ESCAPE.fullmatch(sequence)
    if match:
        digits = next(group for group in match.groups() if group)
        return chr(int(digits, 16))
    body = sequence[1:]
    if body in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[body]
    if body.startswith(("\r\n", "\n", "\r", "\u2028", "\u2029")):
        # Line continuation
        return ""
    return body


def _number_value(text: str) -> int | float:
    text = text.replace("_", "")
    if text.endswith("n"):
        # BigInt literal
        return int(text[:-1], 0)
    try:
        return int(text, 0)
    except ValueError:
        return float(text)
