"""
Lox Printer Package

Read-only renderers for expression trees.
"""

from .dot_printer import DotPrinter, node_label, to_dot

__all__ = [
    "DotPrinter",
    "node_label",
    "to_dot",
]
