"""Parse tree nodes for Jack programs."""

from collections.abc import Iterator

from pydantic import BaseModel

from .tokenizer import Token


class Node(BaseModel):
    """One grammar production: a label and its children in source order.

    Children are either nested nodes or the tokens (terminals) the
    production consumed.
    """

    label: str  # production name, e.g. classVarDec, letStatement, term
    children: list["Node | Token"] = []

    def add(self, child: "Node | Token") -> "Node | Token":
        self.children.append(child)
        return child

    @property
    def nodes(self) -> list["Node"]:
        """Child nodes, skipping terminals."""
        return [c for c in self.children if isinstance(c, Node)]

    def iter_tokens(self) -> Iterator[Token]:
        """Every terminal under this node, in document order."""
        # Explicit stack: trees nest as deep as the source does
        stack = [iter(self.children)]
        while stack:
            for child in stack[-1]:
                if isinstance(child, Node):
                    stack.append(iter(child.children))
                    break
                yield child
            else:
                stack.pop()

    def iter_nodes(self) -> Iterator["Node"]:
        """This node and every descendant node, pre-order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.nodes))

    def find(self, label: str) -> "Node | None":
        for node in self.iter_nodes():
            if node.label == label:
                return node
        return None

    def find_all(self, label: str) -> list["Node"]:
        return [node for node in self.iter_nodes() if node.label == label]

    def count_nodes(self) -> int:
        return sum(1 for _ in self.iter_nodes())

    def shape(self) -> list:
        """Compact nested view: node labels and token lexemes.

        ``term[foo [ 1 ]]`` becomes ``["term", "foo", "[", ["expression",
        ["term", "1"]], "]"]``.
        """
        out: list = [self.label]
        for child in self.children:
            if isinstance(child, Node):
                out.append(child.shape())
            else:
                out.append(child.lexeme())
        return out


# Rebuild models for forward references
Node.model_rebuild()
