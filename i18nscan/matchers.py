"""Node matcher primitives shared by the rules.

All helpers are pure: they take nodes (and sometimes an ancestor chain) and
return a boolean or an extracted static value.
"""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

from .syntax import NodeKind, SyntaxNode

Lookup = Callable[[str], Optional[str]]

STRING_LIKE_KINDS = frozenset(
    {
        NodeKind.STRING_LITERAL,
        NodeKind.TEMPLATE_LITERAL,
        NodeKind.BINARY_EXPRESSION,
    }
)


def is_jsx_text_node(node: SyntaxNode) -> bool:
    return node.kind is NodeKind.JSX_TEXT


def attribute_value(attribute: SyntaxNode) -> Optional[SyntaxNode]:
    """Return the value expression of a JSX attribute, unwrapping ``{...}``."""

    value = attribute.get("value")
    if value is not None and value.kind is NodeKind.JSX_EXPRESSION_CONTAINER:
        return value.get("expression")
    return value


def is_jsx_attribute_value(
    node: SyntaxNode,
    attr_name: str | Iterable[str],
    ancestors: Sequence[SyntaxNode],
) -> bool:
    """True when ``node`` is the value of a JSX attribute named ``attr_name``.

    ``ancestors`` is ordered root first, as kept by the dispatcher.
    """

    names = {attr_name} if isinstance(attr_name, str) else set(attr_name)
    for ancestor in reversed(ancestors):
        if ancestor.kind is NodeKind.JSX_EXPRESSION_CONTAINER:
            continue
        return ancestor.kind is NodeKind.JSX_ATTRIBUTE and ancestor.value in names
    return False


def is_string_like(node: Optional[SyntaxNode]) -> bool:
    if node is None:
        return False
    if node.kind is NodeKind.BINARY_EXPRESSION:
        return node.operator == "+"
    return node.kind in STRING_LIKE_KINDS


def member_name(node: Optional[SyntaxNode]) -> Optional[str]:
    """Return the dotted name of an identifier or member chain."""

    parts = []
    current = node
    while current is not None:
        if current.kind is NodeKind.IDENTIFIER:
            parts.append(current.value or "")
            break
        if current.kind is NodeKind.MEMBER_EXPRESSION:
            prop = current.get("property")
            if prop is None or prop.kind is not NodeKind.IDENTIFIER or current.operator == "computed":
                return None
            parts.append(prop.value or "")
            current = current.get("object")
            continue
        return None
    else:
        return None
    return ".".join(reversed(parts))


def callee_name(call: SyntaxNode) -> Optional[str]:
    if call.kind is not NodeKind.CALL_EXPRESSION:
        return None
    return member_name(call.get("callee"))


def is_call_to(node: SyntaxNode, names: Iterable[str]) -> bool:
    name = callee_name(node)
    return name is not None and name in set(names)


def property_key(prop: SyntaxNode) -> Optional[str]:
    """Return the static key of an object property, ``None`` if computed."""

    if prop.kind is not NodeKind.PROPERTY or prop.operator == "computed":
        return None
    key = prop.get("key")
    if key is None:
        return None
    if key.kind in (NodeKind.IDENTIFIER, NodeKind.STRING_LITERAL, NodeKind.NUMERIC_LITERAL):
        return key.value
    return None


def _concat_operands(node: SyntaxNode) -> list[SyntaxNode]:
    """Flatten a ``+`` chain into its leaf operands, left to right."""

    operands: list[SyntaxNode] = []
    stack = [node]
    while stack:
        current = stack.pop()
        if current.kind is NodeKind.BINARY_EXPRESSION and current.operator == "+":
            right = current.get("right")
            left = current.get("left")
            if left is None or right is None:
                return []
            stack.append(right)
            stack.append(left)
            continue
        operands.append(current)
    return operands


def _resolve_leaf(node: SyntaxNode, lookup: Optional[Lookup]) -> Optional[str]:
    while node.kind is NodeKind.JSX_EXPRESSION_CONTAINER:
        inner = node.get("expression")
        if inner is None:
            return None
        node = inner
    if node.kind is NodeKind.STRING_LITERAL:
        return node.value if node.value is not None else ""
    if node.kind is NodeKind.TEMPLATE_LITERAL:
        if node.get_all("expressions"):
            return None
        return "".join(quasi.value or "" for quasi in node.get_all("quasis"))
    if node.kind is NodeKind.IDENTIFIER and lookup is not None and node.value:
        return lookup(node.value)
    return None


def resolve_static_string(node: Optional[SyntaxNode], lookup: Optional[Lookup] = None) -> Optional[str]:
    """Resolve ``node`` to a string without executing anything.

    Succeeds for string literals, templates with no interpolation and ``+``
    concatenations whose operands all resolve. Identifiers resolve only when
    ``lookup`` knows a literal for them. Returns ``None`` otherwise, which
    callers treat as "skip this node".
    """

    if node is None:
        return None
    if node.kind is NodeKind.BINARY_EXPRESSION:
        if node.operator != "+":
            return None
        operands = _concat_operands(node)
        if not operands:
            return None
        pieces = []
        for operand in operands:
            resolved = _resolve_leaf(operand, lookup)
            if resolved is None:
                return None
            pieces.append(resolved)
        return "".join(pieces)
    return _resolve_leaf(node, lookup)


def describe_expression(node: Optional[SyntaxNode]) -> str:
    """Short label for a dynamic expression, e.g. ``computeKey()``."""

    if node is None:
        return "<missing>"
    name = member_name(node)
    if name:
        return name
    if node.kind is NodeKind.CALL_EXPRESSION:
        callee = callee_name(node)
        return f"{callee}()" if callee else "<call>()"
    if node.kind is NodeKind.TEMPLATE_LITERAL:
        return template_pattern(node)
    return f"<{node.kind.value}>"


def template_pattern(node: SyntaxNode) -> str:
    """Render a template literal as ``plans.${planKey}.name``."""

    quasis = node.get_all("quasis")
    expressions = node.get_all("expressions")
    pattern = (quasis[0].value or "") if quasis else ""
    for index, expression in enumerate(expressions):
        name = member_name(expression) or "x"
        pattern += "${" + name + "}"
        if index + 1 < len(quasis):
            pattern += quasis[index + 1].value or ""
    return pattern
