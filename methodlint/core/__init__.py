"""Core data structures, tree model and rule engine."""

from methodlint.core.findings import Diagnostic, Severity, DiagnosticCategory, CodeLocation, ScanResult
from methodlint.core.tree import SyntaxNode, NodeKind, LoopVariant, BranchVariant, walk
from methodlint.core.errors import MethodLintError, MalformedTreeError, ParseError, ConfigError
from methodlint.core.rules import Rule, NodeRule, RuleRegistry, AnalysisContext
from methodlint.core.engine import ScanEngine

__all__ = [
    "Diagnostic",
    "Severity",
    "DiagnosticCategory",
    "CodeLocation",
    "ScanResult",
    "SyntaxNode",
    "NodeKind",
    "LoopVariant",
    "BranchVariant",
    "walk",
    "MethodLintError",
    "MalformedTreeError",
    "ParseError",
    "ConfigError",
    "Rule",
    "NodeRule",
    "RuleRegistry",
    "AnalysisContext",
    "ScanEngine",
]
