"""Shared utilities for Tree-sitter parsing and node helpers."""

from __future__ import annotations

from typing import Iterator

import tree_sitter
import tree_sitter_java

JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

COMMENT_TYPES = frozenset({"line_comment", "block_comment"})


def create_java_parser() -> tree_sitter.Parser:
    """
    Create a Tree-sitter parser configured for Java.

    Supports both the modern bindings (Parser(language)) and older
    releases that expect ``set_language``.
    """

    try:
        parser = tree_sitter.Parser(JAVA_LANGUAGE)
    except TypeError:
        parser = tree_sitter.Parser()
        parser.set_language(JAVA_LANGUAGE)
    return parser


def node_text(node: tree_sitter.Node, source_bytes: bytes) -> str:
    """Decode the bytes that correspond to a node."""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def node_key(node: tree_sitter.Node) -> tuple[int, int]:
    """Byte span of a node; stable across re-derivations from the same tree."""
    return (node.start_byte, node.end_byte)


def iter_nodes(root: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    """Iterative preorder traversal of the syntax tree."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def iter_ancestors(node: tree_sitter.Node) -> Iterator[tree_sitter.Node]:
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent


def code_children(node: tree_sitter.Node) -> list[tree_sitter.Node]:
    """Named children without comments."""
    return [c for c in node.named_children if c.type not in COMMENT_TYPES]
