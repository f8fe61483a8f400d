"""
nullprune/syntaxer/symbols.py

Method and parameter symbols of a Java compilation unit.

A ``JavaParameter`` is the parameter identity handed to the valuation
engine. It is keyed on the byte span of its declaring method, so deriving
it twice from the same tree yields equal identities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import tree_sitter

from .utils import JAVA_LANGUAGE, code_children, iter_ancestors, node_key, node_text

# Primitive types; every other parameter type is a reference type.
PRIMITIVE_TYPES = frozenset({"integral_type", "floating_point_type", "boolean_type"})

TYPE_BODIES = frozenset({"class_body", "interface_body", "enum_body", "annotation_type_body"})

METHOD_KINDS = frozenset({"method_declaration", "constructor_declaration"})

_METHOD_QUERY = "[(method_declaration) (constructor_declaration)] @method"


@dataclass(frozen=True)
class JavaParameter:
    """
    Formal parameter of a method or constructor.

    Attributes:
        method: Byte span of the declaring method
        method_name: Name of the declaring method
        name: Parameter name
        position: Zero-based position in the parameter list
        type_name: Declared type as written
        is_reference: False for primitive (non-array) parameters
    """
    method: tuple[int, int]
    method_name: str
    name: str
    position: int
    type_name: str
    is_reference: bool

    def __str__(self) -> str:
        return self.name


@dataclass
class SourceMethod:
    """Parsed method or constructor declaration."""
    name: str
    kind: str
    return_type: str
    returns_boolean: bool
    parameters: list[JavaParameter] = field(default_factory=list)
    body: Optional[tree_sitter.Node] = None
    scope: Optional[tuple[int, int]] = None  # enclosing type body
    raw_node: Optional[tree_sitter.Node] = None
    start_line: int = 0
    end_line: int = 0

    @property
    def key(self) -> tuple[int, int]:
        return node_key(self.raw_node)

    def parameter(self, name: str) -> Optional[JavaParameter]:
        for param in self.parameters:
            if param.name == name:
                return param
        return None

    def returned_expression(self) -> Optional[tree_sitter.Node]:
        """Expression of the body's only statement if it is ``return <expr>;``."""
        if self.body is None or self.body.type != "block":
            return None
        statements = code_children(self.body)
        if len(statements) != 1 or statements[0].type != "return_statement":
            return None
        values = code_children(statements[0])
        return values[0] if values else None


def enclosing_scope(node: tree_sitter.Node) -> Optional[tree_sitter.Node]:
    """Nearest enclosing type body (class, interface, enum, anonymous class)."""
    for ancestor in iter_ancestors(node):
        if ancestor.type in TYPE_BODIES:
            return ancestor
    return None


def scope_name(scope: tree_sitter.Node, source_bytes: bytes) -> Optional[str]:
    """Name of the type declaring ``scope``; None for anonymous classes."""
    owner = scope.parent
    name_node = owner.child_by_field_name("name") if owner is not None else None
    if name_node is None or owner.type == "object_creation_expression":
        return None
    return node_text(name_node, source_bytes)


def collect_methods(root: tree_sitter.Node, source_bytes: bytes) -> list[SourceMethod]:
    """All method and constructor declarations below ``root``, in source order."""
    query = tree_sitter.Query(JAVA_LANGUAGE, _METHOD_QUERY)
    cursor = tree_sitter.QueryCursor(query)
    captures = cursor.captures(root)

    nodes = sorted(captures.get("method", []), key=lambda n: n.start_byte)
    methods = []
    for node in nodes:
        method = _parse_method(node, source_bytes)
        if method is not None:
            methods.append(method)
    return methods


def _parse_method(node: tree_sitter.Node, source_bytes: bytes) -> Optional[SourceMethod]:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        return None
    name = node_text(name_node, source_bytes)

    # constructors have no return type
    type_node = node.child_by_field_name("type")
    return_type = node_text(type_node, source_bytes) if type_node is not None else ""
    returns_boolean = (
        type_node is not None
        and type_node.type == "boolean_type"
        and node.child_by_field_name("dimensions") is None
    )

    scope = enclosing_scope(node)
    method = SourceMethod(
        name=name,
        kind=node.type,
        return_type=return_type,
        returns_boolean=returns_boolean,
        body=node.child_by_field_name("body"),
        scope=node_key(scope) if scope is not None else None,
        raw_node=node,
        start_line=node.start_point[0] + 1,
        end_line=node.end_point[0] + 1,
    )

    params_node = node.child_by_field_name("parameters")
    if params_node is None:
        return method

    for param in params_node.named_children:
        if param.type == "formal_parameter":
            type_n = param.child_by_field_name("type")
            is_reference = (
                type_n is None
                or type_n.type not in PRIMITIVE_TYPES
                or param.child_by_field_name("dimensions") is not None
            )
        elif param.type == "spread_parameter":
            # varargs are arrays
            type_n = next(
                (c for c in param.named_children if c.type not in ("modifiers", "variable_declarator")),
                None,
            )
            is_reference = True
        else:
            continue  # receiver parameter, comments

        pname = _declared_name(param, source_bytes)
        if pname is None:
            continue
        method.parameters.append(
            JavaParameter(
                method=method.key,
                method_name=name,
                name=pname,
                position=len(method.parameters),
                type_name=node_text(type_n, source_bytes) if type_n is not None else "",
                is_reference=is_reference,
            )
        )
    return method


def _declared_name(node: tree_sitter.Node, source_bytes: bytes) -> str | None:
    name_node = node.child_by_field_name("name")
    if name_node is not None and name_node.type == "identifier":
        return node_text(name_node, source_bytes)

    for child in node.named_children:
        if child.type == "variable_declarator":
            return _declared_name(child, source_bytes)

    id_candidates = [c for c in node.named_children if c.type == "identifier"]
    if id_candidates:
        return node_text(id_candidates[-1], source_bytes)
    return None
