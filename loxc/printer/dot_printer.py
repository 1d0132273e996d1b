"""
Graphviz rendering of Lox expression trees.

The output is a ``digraph`` with one node statement per AST node and one edge
per parent/child pair, suitable for ``dot -Tpng``.
"""

from typing import List

from ..lexer.tokens import TokenType
from ..parser.ast_nodes import Binary, ErrorExpr, Expr, Grouping, Literal, Unary


class DotPrinter:
    """
    Renders an expression tree as a DOT graph description.

    Nodes are declared in pre-order: a node's statement comes before its
    subtree, and its outgoing edges come after the subtree. Node IDs combine
    the label, the depth and the pre-order index, e.g. ``"+_0_0"``.
    """

    def __init__(self, graph_name: str = "G", indent: str = "    "):
        self.graph_name = graph_name
        self.indent = indent

    def print(self, expr: Expr) -> str:
        """Render ``expr`` and return the complete graph text."""
        lines: List[str] = [f"digraph {self.graph_name} {{"]
        self._render(expr, lines)
        lines.append("}")
        return "\n".join(lines) + "\n"

    def _render(self, root: Expr, lines: List[str]):
        # Explicit stack of (node_id, depth, remaining children, rendered child IDs);
        # left-leaning operator chains get as deep as they are long.
        index = 0
        root_id = self._declare(root, 0, index, lines)
        stack = [(root_id, 0, iter(root.children()), [])]

        while stack:
            node_id, depth, pending, child_ids = stack[-1]
            child = next(pending, None)

            if child is None:
                stack.pop()
                for child_id in child_ids:
                    lines.append(f"{self.indent}{node_id} -> {child_id};")
                if stack:
                    stack[-1][3].append(node_id)
                continue

            index += 1
            child_id = self._declare(child, depth + 1, index, lines)
            stack.append((child_id, depth + 1, iter(child.children()), []))

    def _declare(self, expr: Expr, depth: int, index: int, lines: List[str]) -> str:
        label = _escape(node_label(expr))
        node_id = f'"{label}_{depth}_{index}"'
        lines.append(f'{self.indent}{node_id} [label="{label}"];')
        return node_id


def node_label(expr: Expr) -> str:
    """Human-readable label for a single node (children not included)."""
    if isinstance(expr, (Binary, Unary)):
        return expr.operator.lexeme
    elif isinstance(expr, Grouping):
        return "()"
    elif isinstance(expr, Literal):
        return _literal_text(expr)
    elif isinstance(expr, ErrorExpr):
        return "ERROR"
    else:
        raise TypeError(f"not an expression node: {expr!r}")


def _literal_text(literal: Literal) -> str:
    if literal.kind == TokenType.TRUE:
        return "true"
    if literal.kind == TokenType.FALSE:
        return "false"
    if literal.kind == TokenType.NIL:
        return "nil"
    if literal.kind == TokenType.STRING:
        return f'"{literal.value}"'
    # Integral numbers print without the trailing ".0"
    if float(literal.value).is_integer():
        return str(int(literal.value))
    return repr(literal.value)


def _escape(text: str) -> str:
    return (text.replace("\\", "\\\\")
                .replace('"', '\\"')
                .replace("\n", "\\n"))


def to_dot(expr: Expr, graph_name: str = "G") -> str:
    """Convenience function to render an expression tree as DOT."""
    return DotPrinter(graph_name).print(expr)
