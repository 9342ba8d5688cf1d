"""
Java front end built on tree-sitter.

Produces SyntaxNode trees whose identifier roles match what javac
reports: names being declared (variables, parameters, methods, types,
labels) are not references, while names used in expressions and type
positions are.
"""

from typing import List, Optional
import logging

import tree_sitter_java as tsjava
from tree_sitter import Language, Node, Parser

from methodlint.core.errors import ParseError
from methodlint.core.findings import CodeLocation
from methodlint.core.tree import (
    BranchVariant, LoopVariant, NodeKind, SyntaxNode
)
from methodlint.parsers import register_parser
from methodlint.parsers.base import BaseParser

logger = logging.getLogger(__name__)

JAVA_LANGUAGE = Language(tsjava.language())

_LOOP_TYPES = {
    "for_statement": LoopVariant.FOR,
    "enhanced_for_statement": LoopVariant.FOR_EACH,
    "while_statement": LoopVariant.WHILE,
    "do_statement": LoopVariant.DO_WHILE,
}

_BRANCH_TYPES = {
    "if_statement": BranchVariant.IF,
    "ternary_expression": BranchVariant.TERNARY,
    "catch_clause": BranchVariant.CATCH,
}

_SWITCH_TYPES = frozenset({"switch_expression", "switch_statement"})

# Parents under which a switch_expression stands as a statement
_STATEMENT_PARENTS = frozenset({
    "program",
    "block",
    "constructor_body",
    "switch_block_statement_group",
    "labeled_statement",
    "if_statement",
    *_LOOP_TYPES,
})

_METHOD_TYPES = frozenset({
    "method_declaration",
    "constructor_declaration",
    "compact_constructor_declaration",
})

_CONSTRUCTOR_NAME = "<init>"

_IDENTIFIER_TYPES = frozenset({"identifier", "type_identifier"})

# Nodes whose ``name`` field declares a name rather than referencing one
_DECLARING_TYPES = frozenset({
    "variable_declarator",
    "formal_parameter",
    "catch_formal_parameter",
    "enhanced_for_statement",
    "resource",
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
    "annotation_type_declaration",
    "annotation_type_element_declaration",
    "enum_constant",
})

# Nodes whose bare identifier children are labels or lambda parameters
_LABEL_TYPES = frozenset({
    "labeled_statement",
    "break_statement",
    "continue_statement",
    "inferred_parameters",
})


def _same(a: Optional[Node], b: Optional[Node]) -> bool:
    if a is None or b is None:
        return False
    return a.start_byte == b.start_byte and a.end_byte == b.end_byte and a.type == b.type


class _JavaTreeBuilder:
    """Converts one tree-sitter parse tree into SyntaxNodes."""

    def __init__(self, source: bytes, file_path: str):
        self.source = source
        self.file_path = file_path

    def text(self, node: Node) -> str:
        return self.source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    def location(self, node: Node) -> CodeLocation:
        return CodeLocation(
            file_path=self.file_path,
            start_line=node.start_point[0] + 1,
            end_line=node.end_point[0] + 1,
            start_column=node.start_point[1],
            end_column=node.end_point[1],
        )

    def convert(self, node: Node) -> SyntaxNode:
        node_type = node.type

        if node_type in _METHOD_TYPES:
            return self.convert_method(node)
        if node_type in _LOOP_TYPES:
            return SyntaxNode.loop(
                _LOOP_TYPES[node_type],
                *self.convert_children(node),
                location=self.location(node),
                node_type=node_type,
            )
        if node_type in _BRANCH_TYPES:
            return SyntaxNode.branch(
                _BRANCH_TYPES[node_type],
                *self.convert_children(node),
                location=self.location(node),
                node_type=node_type,
            )
        if node_type in _SWITCH_TYPES and self.is_statement(node):
            return self.convert_switch(node)
        if node_type == "method_invocation":
            return self.convert_invocation(node)
        if node_type == "field_access":
            return self.convert_member(node, "object", "field")
        if node_type == "scoped_identifier":
            return self.convert_member(node, "scope", "name")
        if node_type in _IDENTIFIER_TYPES:
            return SyntaxNode.identifier(
                self.text(node), location=self.location(node), node_type=node_type
            )
        return self.convert_generic(node)

    def convert_children(self, node: Node, skip: tuple = ()) -> List[SyntaxNode]:
        declared = None
        if node.type in _DECLARING_TYPES:
            declared = node.child_by_field_name("name")
        elif node.type == "lambda_expression":
            params = node.child_by_field_name("parameters")
            if params is not None and params.type == "identifier":
                declared = params

        children = []
        for child in node.named_children:
            if _same(child, declared) or any(_same(child, s) for s in skip):
                continue
            if node.type in _LABEL_TYPES and child.type == "identifier":
                continue
            children.append(self.convert(child))
        return children

    def convert_generic(self, node: Node) -> SyntaxNode:
        name = None
        if node.type in _DECLARING_TYPES:
            name_node = node.child_by_field_name("name")
            if name_node is not None:
                name = self.text(name_node)
        return SyntaxNode(
            NodeKind.OTHER,
            name=name,
            children=tuple(self.convert_children(node)),
            location=self.location(node),
            node_type=node.type,
        )

    def convert_parameter(self, node: Node) -> SyntaxNode:
        name_node = node.child_by_field_name("name")
        skip = (name_node,)
        if name_node is None and node.type == "spread_parameter":
            declarator = next(
                (c for c in node.named_children if c.type == "variable_declarator"), None
            )
            if declarator is not None:
                name_node = declarator.child_by_field_name("name")
                skip = (declarator,)
        return SyntaxNode.parameter(
            self.text(name_node) if name_node is not None else "",
            children=tuple(self.convert_children(node, skip=skip)),
            location=self.location(node),
            node_type=node.type,
        )

    def method_name(self, node: Node, name_node: Optional[Node]) -> str:
        # javac names every constructor <init>
        if node.type != "method_declaration" or name_node is None:
            return _CONSTRUCTOR_NAME
        return self.text(name_node)

    def is_statement(self, node: Node) -> bool:
        """A switch used as a value is not counted as a branch."""
        if node.type == "switch_statement":
            return True
        parent = node.parent
        return parent is None or parent.type in _STATEMENT_PARENTS

    def convert_method(self, node: Node) -> SyntaxNode:
        name_node = node.child_by_field_name("name")
        params_node = node.child_by_field_name("parameters")
        body_node = node.child_by_field_name("body")

        parameters = []
        if params_node is not None:
            for child in params_node.named_children:
                # receiver parameters (``Foo this``) are not declared parameters
                if child.type in ("formal_parameter", "spread_parameter"):
                    parameters.append(self.convert_parameter(child))

        skip = (name_node, params_node, body_node)
        return SyntaxNode.method(
            self.method_name(node, name_node),
            parameters=parameters,
            body=self.convert(body_node) if body_node is not None else None,
            children=tuple(self.convert_children(node, skip=skip)),
            location=self.location(node),
            node_type=node.type,
        )

    def convert_switch(self, node: Node) -> SyntaxNode:
        body = node.child_by_field_name("body")
        children = self.convert_children(node, skip=(body,))
        cases = []

        if body is not None:
            for group in body.named_children:
                if group.type not in ("switch_block_statement_group", "switch_rule"):
                    children.append(self.convert(group))
                    continue
                for child in group.named_children:
                    if child.type == "switch_label":
                        cases.append(self.convert_generic(child))
                    else:
                        children.append(self.convert(child))

        return SyntaxNode.switch(
            cases,
            *children,
            location=self.location(node),
            node_type=node.type,
        )

    def convert_invocation(self, node: Node) -> SyntaxNode:
        name_node = node.child_by_field_name("name")
        object_node = node.child_by_field_name("object")
        name = self.text(name_node)

        if object_node is not None:
            target = SyntaxNode.member_select(
                name,
                self.convert(object_node),
                location=self.location(name_node),
                node_type="member_select",
            )
        else:
            target = SyntaxNode.identifier(
                name, location=self.location(name_node), node_type="identifier"
            )

        arguments = self.convert_children(node, skip=(name_node, object_node))
        return SyntaxNode.call(
            target,
            *arguments,
            location=self.location(node),
            node_type=node.type,
        )

    def convert_member(self, node: Node, receiver_field: str, name_field: str) -> SyntaxNode:
        receiver = node.child_by_field_name(receiver_field)
        name_node = node.child_by_field_name(name_field)
        return SyntaxNode.member_select(
            self.text(name_node) if name_node is not None else "",
            self.convert(receiver) if receiver is not None else None,
            location=self.location(node),
            node_type=node.type,
        )


@register_parser("java")
class JavaParser(BaseParser):
    """
    Parser for Java source code using tree-sitter-java.
    """

    def __init__(self):
        self._parser = Parser(JAVA_LANGUAGE)

    @property
    def language(self) -> str:
        return "java"

    def parse(self, source: str, file_path: str = "<unknown>") -> SyntaxNode:
        """Parse Java source code into a SyntaxNode tree."""
        data = source.encode("utf-8")
        tree = self._parser.parse(data)
        root = tree.root_node

        if root.has_error:
            raise ParseError(f"Syntax errors in {file_path}", file_path=file_path)

        logger.debug("Parsed %s (%d bytes)", file_path, len(data))
        return _JavaTreeBuilder(data, file_path).convert(root)
