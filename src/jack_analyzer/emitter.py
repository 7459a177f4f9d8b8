"""XML rendering for parse trees and flat token streams.

Leaves render as ``<tag> value </tag>`` and non-terminals as an open tag,
their indented children, then a close tag. Only ``<``, ``>`` and ``&`` are
escaped.
"""

from collections.abc import Iterable
from xml.sax.saxutils import escape

from .tokenizer import Token
from .tree import Node

INDENT = "  "


def render_token(token: Token) -> str:
    tag = token.kind.value
    return f"<{tag}> {escape(str(token.value))} </{tag}>"


def to_xml(node: Node) -> str:
    """Serialize a parse tree, one element per line."""
    lines = [f"<{node.label}>"]
    # Stack depth is the indentation level of the children being written
    stack = [(node, iter(node.children))]
    while stack:
        current, children = stack[-1]
        pad = INDENT * len(stack)
        for child in children:
            if isinstance(child, Node):
                lines.append(f"{pad}<{child.label}>")
                stack.append((child, iter(child.children)))
                break
            lines.append(pad + render_token(child))
        else:
            stack.pop()
            lines.append(f"{INDENT * len(stack)}</{current.label}>")
    return "\n".join(lines) + "\n"


def tokens_to_xml(tokens: Iterable[Token]) -> str:
    """Serialize a flat token stream under a ``tokens`` root."""
    lines = ["<tokens>"]
    lines.extend(render_token(tok) for tok in tokens)
    lines.append("</tokens>")
    return "\n".join(lines) + "\n"
