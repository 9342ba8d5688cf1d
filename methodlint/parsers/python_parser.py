"""
Python front end using Python's built-in ast module.
"""

import ast as python_ast
from typing import List
import logging

from methodlint.core.errors import ParseError
from methodlint.core.findings import CodeLocation
from methodlint.core.tree import (
    BranchVariant, LoopVariant, NodeKind, SyntaxNode
)
from methodlint.parsers import register_parser
from methodlint.parsers.base import BaseParser

logger = logging.getLogger(__name__)


_COMPREHENSIONS = (
    python_ast.ListComp,
    python_ast.SetComp,
    python_ast.DictComp,
    python_ast.GeneratorExp,
)


@register_parser("python")
class PythonParser(BaseParser):
    """
    Parser for Python source code using the built-in ast module.

    Functions map to methods, ``for``/``async for`` and comprehension
    generators to for-each loops, ``if``/conditional expressions/except
    handlers to branches and ``match`` to a switch with one case per
    ``case`` clause.
    """

    @property
    def language(self) -> str:
        return "python"

    def parse(self, source: str, file_path: str = "<unknown>") -> SyntaxNode:
        """Parse Python source code into a SyntaxNode tree."""
        try:
            tree = python_ast.parse(source, filename=file_path)
        except SyntaxError as e:
            raise ParseError(f"Syntax error in {file_path}: {e.msg} (line {e.lineno})", file_path=file_path) from e
        except ValueError as e:
            # null bytes in source
            raise ParseError(f"Cannot parse {file_path}: {e}", file_path=file_path) from e

        logger.debug("Parsed %s (%d statements)", file_path, len(tree.body))
        return self._convert_node(tree, file_path)

    def _location(self, node: python_ast.AST, file_path: str) -> CodeLocation:
        start_line = getattr(node, "lineno", 0)
        return CodeLocation(
            file_path=file_path,
            start_line=start_line,
            end_line=getattr(node, "end_lineno", None) or start_line,
            start_column=getattr(node, "col_offset", 0),
            end_column=getattr(node, "end_col_offset", None) or 0,
        )

    def _convert_all(self, nodes, file_path: str) -> List[SyntaxNode]:
        return [self._convert_node(n, file_path) for n in nodes if n is not None]

    def _convert_node(self, node: python_ast.AST, file_path: str) -> SyntaxNode:
        """Convert a Python AST node to a SyntaxNode."""
        location = self._location(node, file_path)
        node_type = node.__class__.__name__

        if isinstance(node, (python_ast.FunctionDef, python_ast.AsyncFunctionDef)):
            return self._convert_function(node, file_path)

        if isinstance(node, (python_ast.For, python_ast.AsyncFor)):
            return SyntaxNode.loop(
                LoopVariant.FOR_EACH,
                *self._convert_all(python_ast.iter_child_nodes(node), file_path),
                location=location,
                node_type=node_type,
            )

        if isinstance(node, python_ast.While):
            return SyntaxNode.loop(
                LoopVariant.WHILE,
                *self._convert_all(python_ast.iter_child_nodes(node), file_path),
                location=location,
                node_type=node_type,
            )

        if isinstance(node, _COMPREHENSIONS):
            return self._convert_comprehension(node, file_path)

        if isinstance(node, python_ast.If):
            variant = BranchVariant.IF
        elif isinstance(node, python_ast.IfExp):
            variant = BranchVariant.TERNARY
        elif isinstance(node, python_ast.ExceptHandler):
            variant = BranchVariant.CATCH
        else:
            variant = None
        if variant is not None:
            return SyntaxNode.branch(
                variant,
                *self._convert_all(python_ast.iter_child_nodes(node), file_path),
                location=location,
                node_type=node_type,
            )

        if isinstance(node, python_ast.Match):
            cases = self._convert_all(node.cases, file_path)
            return SyntaxNode.switch(
                cases,
                self._convert_node(node.subject, file_path),
                location=location,
                node_type=node_type,
            )

        if isinstance(node, python_ast.Call):
            return self._convert_call(node, file_path)

        if isinstance(node, python_ast.Name):
            # assignment and loop targets declare the name
            if isinstance(node.ctx, python_ast.Store):
                return SyntaxNode(NodeKind.OTHER, name=node.id, location=location, node_type=node_type)
            return SyntaxNode.identifier(node.id, location=location, node_type=node_type)

        if isinstance(node, python_ast.Attribute):
            return SyntaxNode.member_select(
                node.attr,
                self._convert_node(node.value, file_path),
                location=location,
                node_type=node_type,
            )

        name = getattr(node, "name", None)
        return SyntaxNode(
            NodeKind.OTHER,
            name=name if isinstance(name, str) else None,
            children=tuple(self._convert_all(python_ast.iter_child_nodes(node), file_path)),
            location=location,
            node_type=node_type,
        )

    def _convert_function(self, node: python_ast.AST, file_path: str) -> SyntaxNode:
        args = node.args
        declared = list(args.posonlyargs) + list(args.args)
        if args.vararg is not None:
            declared.append(args.vararg)
        declared.extend(args.kwonlyargs)
        if args.kwarg is not None:
            declared.append(args.kwarg)

        parameters = [
            SyntaxNode.parameter(
                arg.arg,
                children=tuple(self._convert_all([arg.annotation], file_path)),
                location=self._location(arg, file_path),
                node_type="arg",
            )
            for arg in declared
        ]

        others = list(node.decorator_list)
        others.extend(args.defaults)
        others.extend(args.kw_defaults)
        others.append(node.returns)

        body = SyntaxNode.block(
            *self._convert_all(node.body, file_path),
            location=self._location(node, file_path),
        )
        return SyntaxNode.method(
            node.name,
            parameters=parameters,
            body=body,
            children=tuple(self._convert_all(others, file_path)),
            location=self._location(node, file_path),
            node_type=node.__class__.__name__,
        )

    def _convert_comprehension(self, node: python_ast.AST, file_path: str) -> SyntaxNode:
        # Each generator clause is one loop
        loops = [
            SyntaxNode.loop(
                LoopVariant.FOR_EACH,
                *self._convert_all([gen.target, gen.iter] + list(gen.ifs), file_path),
                location=self._location(gen.iter, file_path),
                node_type="comprehension",
            )
            for gen in node.generators
        ]
        if isinstance(node, python_ast.DictComp):
            elements = [node.key, node.value]
        else:
            elements = [node.elt]
        return SyntaxNode(
            NodeKind.OTHER,
            children=tuple(self._convert_all(elements, file_path) + loops),
            location=self._location(node, file_path),
            node_type=node.__class__.__name__,
        )

    def _convert_call(self, node: python_ast.Call, file_path: str) -> SyntaxNode:
        func = node.func
        arguments = self._convert_all(list(node.args) + list(node.keywords), file_path)
        location = self._location(node, file_path)

        if isinstance(func, python_ast.Name):
            target = SyntaxNode.identifier(
                func.id, location=self._location(func, file_path), node_type="Name"
            )
        elif isinstance(func, python_ast.Attribute):
            target = SyntaxNode.member_select(
                func.attr,
                self._convert_node(func.value, file_path),
                location=self._location(func, file_path),
                node_type="Attribute",
            )
        else:
            # f()(), x[0]() and similar have no method name to check
            return SyntaxNode(
                NodeKind.OTHER,
                children=tuple([self._convert_node(func, file_path)] + arguments),
                location=location,
                node_type="Call",
            )

        return SyntaxNode.call(target, *arguments, location=location, node_type="Call")
