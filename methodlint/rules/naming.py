"""
Identifier naming rule.

Flags placeholder, single-letter and overlong identifiers wherever they
are referenced or called, and checks declared method names and their
parameters against stricter method-level rules.
"""

from typing import Callable, Dict, Iterator, Optional
import logging

from methodlint.analysis.names import (
    NameViolation, check_identifier, check_method_declaration
)
from methodlint.core.errors import malformed_method_invocation
from methodlint.core.findings import Diagnostic, Severity, DiagnosticCategory
from methodlint.core.rules import NodeRule, RuleMetadata, AnalysisContext, rule
from methodlint.core.tree import NodeKind, SyntaxNode

logger = logging.getLogger(__name__)


def resolve_call_name(call: SyntaxNode) -> str:
    """
    Return the method name a call invokes.

    Qualified calls (``obj.name()``) resolve to the selected member,
    unqualified ones (``name()``) to the bare identifier.

    Raises:
        MalformedTreeError: the call target is any other shape.
    """
    target = call.target
    if target is not None and target.name is not None:
        if target.kind in (NodeKind.MEMBER_SELECT, NodeKind.IDENTIFIER):
            return target.name
    raise malformed_method_invocation(call)


@rule
class BadNamesRule(NodeRule):
    """
    Detects poor-quality identifiers.

    Each matched node yields at most one diagnostic: the first rule the
    name breaks is reported and the rest are not evaluated.
    """

    node_kinds = frozenset({NodeKind.IDENTIFIER, NodeKind.CALL, NodeKind.METHOD})

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="BadNames",
            name="Bad Names",
            summary="Poor-quality identifiers",
            severity=Severity.WARNING,
            category=DiagnosticCategory.NAMING,
            languages=["*"],
            tags=["naming", "readability"],
            link="https://github.com/plse-Lab/",
        )

    def _matchers(self) -> Dict[NodeKind, Callable[[SyntaxNode, Optional[AnalysisContext]], Optional[Diagnostic]]]:
        return {
            NodeKind.IDENTIFIER: self.match_identifier,
            NodeKind.CALL: self.match_method_invocation,
            NodeKind.METHOD: self.match_method,
        }

    def match_identifier(
        self,
        node: SyntaxNode,
        context: Optional[AnalysisContext] = None,
    ) -> Optional[Diagnostic]:
        """Check a referenced identifier."""
        return self._report(node, check_identifier(node.name or ""), context)

    def match_method_invocation(
        self,
        node: SyntaxNode,
        context: Optional[AnalysisContext] = None,
    ) -> Optional[Diagnostic]:
        """Check the name a call invokes."""
        return self._report(node, check_identifier(resolve_call_name(node)), context)

    def match_method(
        self,
        node: SyntaxNode,
        context: Optional[AnalysisContext] = None,
    ) -> Optional[Diagnostic]:
        """Check a declared method's name, then its parameters in order."""
        parameter_names = [p.name or "" for p in node.parameters]
        violation = check_method_declaration(node.name or "", parameter_names)
        return self._report(node, violation, context)

    def match(self, node: SyntaxNode, context: Optional[AnalysisContext] = None) -> Optional[Diagnostic]:
        """Dispatch on node kind; nodes of other kinds never match."""
        matcher = self._matchers().get(node.kind)
        if matcher is None:
            return None
        return matcher(node, context)

    def visit_node(self, node: SyntaxNode, context: AnalysisContext) -> Iterator[Diagnostic]:
        diagnostic = self.match(node, context)
        if diagnostic is not None:
            yield diagnostic

    def _report(
        self,
        node: SyntaxNode,
        violation: Optional[NameViolation],
        context: Optional[AnalysisContext],
    ) -> Optional[Diagnostic]:
        if violation is None:
            return None
        return self.create_diagnostic(
            node,
            violation.message,
            context=context,
            metadata={"name": violation.name, "violation": violation.rule_id},
        )
