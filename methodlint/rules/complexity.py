"""
Control-flow complexity rule.

Counts loops and branches in each method body and reports, in a single
diagnostic, every threshold the method exceeds.
"""

from typing import Iterator, List, Optional
import logging

from methodlint.analysis.metrics import MethodMetrics, measure_method
from methodlint.analysis.thresholds import (
    Classification, classify_loops, classify_branches, classify_total
)
from methodlint.core.findings import Diagnostic, Severity, DiagnosticCategory
from methodlint.core.rules import NodeRule, RuleMetadata, AnalysisContext, rule
from methodlint.core.tree import NodeKind, SyntaxNode

logger = logging.getLogger(__name__)


@rule
class BadCyclomaticComplexityRule(NodeRule):
    """
    Detects methods with too many loops, branches, or both.

    Loop, branch and total checks are independent: a method can trip all
    three, and the messages are joined into one diagnostic on the method.
    """

    node_kinds = frozenset({NodeKind.METHOD})

    @property
    def metadata(self) -> RuleMetadata:
        return RuleMetadata(
            rule_id="BadCyclomaticComplexity",
            name="Bad Cyclomatic Complexity",
            summary="Detects excessive loop and branch complexity in methods",
            severity=Severity.WARNING,
            category=DiagnosticCategory.COMPLEXITY,
            languages=["*"],
            tags=["complexity", "maintainability"],
            link="https://github.com/jvc-nc/pAnalysisProject.git",
        )

    def classify_method(self, metrics: MethodMetrics) -> List[Classification]:
        """Return the fired tiers for loops, branches and total, in that order."""
        fired = [
            classify_loops(metrics.name, metrics.loops),
            classify_branches(metrics.name, metrics.branches),
            classify_total(metrics.name, metrics.total),
        ]
        return [c for c in fired if c is not None]

    def match_method(
        self,
        method: SyntaxNode,
        context: Optional[AnalysisContext] = None,
    ) -> Optional[Diagnostic]:
        """Analyze one METHOD node; None when no threshold is exceeded."""
        metrics = measure_method(method)
        logger.debug(
            "Method %s: loops=%d branches=%d total=%d",
            metrics.name, metrics.loops, metrics.branches, metrics.total,
        )

        classifications = self.classify_method(metrics)
        if not classifications:
            return None

        message = "\n".join(c.message for c in classifications).strip()

        return self.create_diagnostic(
            method,
            message,
            context=context,
            severity=max(c.severity for c in classifications),
            metadata={
                "method_name": metrics.name,
                "loop_count": metrics.loops,
                "branch_count": metrics.branches,
                "total_complexity": metrics.total,
            },
        )

    def visit_node(self, node: SyntaxNode, context: AnalysisContext) -> Iterator[Diagnostic]:
        diagnostic = self.match_method(node, context)
        if diagnostic is not None:
            yield diagnostic
