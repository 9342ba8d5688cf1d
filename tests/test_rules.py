"""
Tests for the complexity and naming rules over hand-built trees.
"""

import pytest
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from methodlint.core.errors import MalformedTreeError
from methodlint.core.findings import Severity, DiagnosticCategory, CodeLocation
from methodlint.core.rules import AnalysisContext, registry
from methodlint.core.tree import SyntaxNode, NodeKind, LoopVariant, BranchVariant
from methodlint.rules.complexity import BadCyclomaticComplexityRule
from methodlint.rules.naming import BadNamesRule, resolve_call_name


def method_with(name, loops=0, branches=0, parameters=()):
    body = SyntaxNode.block(
        *[SyntaxNode.loop(LoopVariant.FOR) for _ in range(loops)],
        *[SyntaxNode.branch(BranchVariant.IF) for _ in range(branches)],
    )
    return SyntaxNode.method(name, parameters, body=body)


def analyze(rule, tree):
    return list(rule.analyze(AnalysisContext("Sample.java", tree, language="java")))


class TestRegistry:
    """Tests for rule registration."""

    def test_rules_registered(self):
        assert "BadCyclomaticComplexity" in registry.rule_ids
        assert "BadNames" in registry.rule_ids
        assert registry.rule_count == 2

    def test_rule_metadata(self):
        complexity = registry.get_rule("BadCyclomaticComplexity")
        naming = registry.get_rule("BadNames")
        assert complexity.metadata.category == DiagnosticCategory.COMPLEXITY
        assert complexity.metadata.link == "https://github.com/jvc-nc/pAnalysisProject.git"
        assert naming.metadata.summary == "Poor-quality identifiers"
        assert naming.metadata.link == "https://github.com/plse-Lab/"

    def test_disabled_rules_excluded(self):
        rules = registry.get_rules_for_language("java", disabled={"BadNames"})
        assert [r.metadata.rule_id for r in rules] == ["BadCyclomaticComplexity"]

    def test_rules_support_any_language(self):
        assert len(registry.get_rules_for_language("kotlin")) == 2


class TestComplexityRule:
    """Tests for BadCyclomaticComplexity."""

    def setup_method(self):
        self.rule = BadCyclomaticComplexityRule()

    def test_no_control_flow_no_diagnostic(self):
        assert self.rule.match_method(method_with("compute")) is None

    def test_empty_body_never_fires(self):
        assert self.rule.match_method(SyntaxNode.method("compute")) is None

    def test_moderate_loops(self):
        diagnostic = self.rule.match_method(method_with("compute", loops=6))
        assert diagnostic.severity == Severity.WARNING
        assert diagnostic.message == (
            "Method 'compute' has a moderately high number of loops:\n"
            "  Loop count        : 6\n"
            "  Recommended max   : 5"
        )

    def test_total_boundary(self):
        """5 loops + 10 branches = 15 stays quiet on total; 16 fires."""
        quiet = self.rule.match_method(method_with("compute", loops=5, branches=10))
        assert "total" not in quiet.message
        loud = self.rule.match_method(method_with("compute", loops=6, branches=10))
        assert "high total cyclomatic complexity" in loud.message

    def test_all_three_tiers_merge_into_one_diagnostic(self):
        diagnostic = self.rule.match_method(method_with("compute", loops=9, branches=13))
        lines = diagnostic.message.splitlines()
        assert lines[0] == "Method 'compute' has too many loops:"
        assert "Method 'compute' has too many branches:" in lines
        assert "Method 'compute' has high total cyclomatic complexity:" in lines
        assert diagnostic.message == diagnostic.message.strip()
        assert diagnostic.severity == Severity.ERROR
        assert diagnostic.metadata["loop_count"] == 9
        assert diagnostic.metadata["branch_count"] == 13
        assert diagnostic.metadata["total_complexity"] == 22

    def test_switch_cases_drive_branch_count(self):
        cases = [SyntaxNode(NodeKind.OTHER, node_type="case") for _ in range(9)]
        method = SyntaxNode.method("choose", body=SyntaxNode.block(SyntaxNode.switch(cases)))
        diagnostic = self.rule.match_method(method)
        assert "Branch count      : 9" in diagnostic.message

    def test_diagnostic_attached_to_method(self):
        location = CodeLocation("Sample.java", 3, 20)
        method = SyntaxNode.method(
            "compute",
            body=SyntaxNode.block(*[SyntaxNode.loop(LoopVariant.WHILE) for _ in range(6)]),
            location=location,
        )
        diagnostics = analyze(self.rule, SyntaxNode.block(method))
        assert len(diagnostics) == 1
        assert diagnostics[0].node is method
        assert diagnostics[0].location == location
        assert diagnostics[0].language == "java"

    def test_each_method_reported_separately(self):
        tree = SyntaxNode.block(
            method_with("first", loops=6),
            method_with("second"),
            method_with("third", branches=9),
        )
        diagnostics = analyze(self.rule, tree)
        assert [d.metadata["method_name"] for d in diagnostics] == ["first", "third"]


class TestNamingRule:
    """Tests for BadNames."""

    def setup_method(self):
        self.rule = BadNamesRule()

    def test_identifier_reference(self):
        diagnostic = self.rule.match(SyntaxNode.identifier("x"))
        assert diagnostic.message == "x is too short to be a good identifier name"
        assert diagnostic.severity == Severity.WARNING
        assert diagnostic.metadata["violation"] == "short-name"

    def test_good_identifier(self):
        assert self.rule.match(SyntaxNode.identifier("total")) is None
        assert self.rule.match(SyntaxNode.identifier("i")) is None
        assert self.rule.match(SyntaxNode.identifier("ab")) is None

    def test_unqualified_call(self):
        call = SyntaxNode.call(SyntaxNode.identifier("foo"))
        diagnostic = self.rule.match(call)
        assert diagnostic.message == "foo is a bad identifier name"
        assert diagnostic.node is call

    def test_qualified_call_uses_member_name(self):
        call = SyntaxNode.call(SyntaxNode.member_select("foo", SyntaxNode.identifier("client")))
        assert resolve_call_name(call) == "foo"
        assert self.rule.match(call).message == "foo is a bad identifier name"

    def test_unqualified_call_also_reports_identifier(self):
        """The bare name of foo() is itself an identifier reference."""
        tree = SyntaxNode.block(SyntaxNode.call(SyntaxNode.identifier("foo")))
        diagnostics = analyze(self.rule, tree)
        assert [d.node.kind for d in diagnostics] == [NodeKind.CALL, NodeKind.IDENTIFIER]

    def test_malformed_call_raises(self):
        call = SyntaxNode.call(SyntaxNode(NodeKind.OTHER, node_type="lambda"))
        with pytest.raises(MalformedTreeError) as excinfo:
            self.rule.match(call)
        assert "is malformed." in str(excinfo.value)
        assert str(excinfo.value).startswith("Method name ")
        assert excinfo.value.node is call

    def test_malformed_call_propagates_from_analyze(self):
        tree = SyntaxNode.block(SyntaxNode.call(SyntaxNode(NodeKind.OTHER)))
        with pytest.raises(MalformedTreeError):
            analyze(self.rule, tree)

    def test_method_name_before_parameters(self):
        """int a(int x1) reports only the method name."""
        method = SyntaxNode.method("a", ["x1"])
        diagnostic = self.rule.match(method)
        assert diagnostic.message == "a is too short to be a good method name"
        assert diagnostic.node is method

    def test_parameter_reported_on_method(self):
        method = SyntaxNode.method("compute", ["value", "x1"])
        diagnostic = self.rule.match(method)
        assert diagnostic.message == "x1 is not a valid parameter name"
        assert diagnostic.node is method

    def test_method_name_not_checked_as_identifier(self):
        """Identifier rules do not apply to declarations."""
        assert self.rule.match(SyntaxNode.method("food")) is None

    def test_other_kinds_never_match(self):
        assert self.rule.match(SyntaxNode.parameter("x")) is None
        assert self.rule.match(SyntaxNode.loop(LoopVariant.FOR)) is None

    def test_deterministic(self):
        tree = SyntaxNode.block(
            SyntaxNode.method("a", ["x1"], body=SyntaxNode.block(
                SyntaxNode.identifier("x"),
                SyntaxNode.call(SyntaxNode.member_select("foo", SyntaxNode.identifier("client"))),
            )),
        )
        first = analyze(self.rule, tree)
        second = analyze(self.rule, tree)
        assert first == second
        assert [d.message for d in first] == [
            "a is too short to be a good method name",
            "x is too short to be a good identifier name",
            "foo is a bad identifier name",
        ]
