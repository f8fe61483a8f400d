"""Analysis context shared across checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Hashable, Iterator, List, Optional

import tree_sitter

from nullprune.valuation import MAX_RECURSION_DEPTH

from .symbols import METHOD_KINDS, TYPE_BODIES, JavaParameter, SourceMethod, collect_methods, scope_name
from .utils import iter_ancestors, iter_nodes, node_key, node_text


@dataclass
class AnalysisContext:
    tree: tree_sitter.Tree
    source_bytes: bytes
    unit: Hashable = None
    max_depth: int = MAX_RECURSION_DEPTH
    methods: Dict[tuple[int, int], SourceMethod] = field(init=False, default_factory=dict)
    methods_by_scope: Dict[tuple[int, int], Dict[str, List[SourceMethod]]] = field(
        init=False, default_factory=dict
    )

    def __post_init__(self):
        from .resolver import JavaSymbolResolver

        self._collect_methods()
        self.resolver = JavaSymbolResolver(self)

    def text(self, node: tree_sitter.Node | None) -> str:
        return node_text(node, self.source_bytes) if node is not None else ""

    def iter_nodes(self) -> Iterator[tree_sitter.Node]:
        return iter_nodes(self.tree.root_node)

    def enclosing_method(self, node: tree_sitter.Node) -> Optional[SourceMethod]:
        for ancestor in iter_ancestors(node):
            if ancestor.type in METHOD_KINDS:
                return self.methods.get(node_key(ancestor))
        return None

    def parameter_named(self, identifier: tree_sitter.Node) -> Optional[JavaParameter]:
        """Formal parameter of the nearest enclosing method that ``identifier`` names."""
        method = self.enclosing_method(identifier)
        if method is None:
            return None
        return method.parameter(self.text(identifier))

    def enclosing_scopes(self, node: tree_sitter.Node) -> Iterator[tuple[tuple[int, int], Optional[str]]]:
        """(scope key, type name) of every enclosing type body, innermost first."""
        for ancestor in iter_ancestors(node):
            if ancestor.type in TYPE_BODIES:
                yield node_key(ancestor), scope_name(ancestor, self.source_bytes)

    def methods_named(self, scope: tuple[int, int], name: str) -> List[SourceMethod]:
        return self.methods_by_scope.get(scope, {}).get(name, [])

    def _collect_methods(self):
        for method in collect_methods(self.tree.root_node, self.source_bytes):
            self.methods[method.key] = method
            if method.scope is None:
                continue
            by_name = self.methods_by_scope.setdefault(method.scope, {})
            by_name.setdefault(method.name, []).append(method)
