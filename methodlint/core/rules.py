"""
Rule engine for methodlint.

This module provides the base classes for defining rules over syntax
trees, the registry used to discover them, and the per-file context
handed to each rule.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Type, Set, FrozenSet, Iterator
import dataclasses
import re

from methodlint.core.findings import (
    Diagnostic, Severity, DiagnosticCategory, CodeLocation, UNKNOWN_LOCATION
)
from methodlint.core.tree import NodeKind, SyntaxNode, walk


DEFAULT_SUPPRESSION_MARKERS = ["methodlint: ignore", "noqa"]


@dataclass
class RuleMetadata:
    """Metadata for a rule."""
    rule_id: str
    name: str
    summary: str
    severity: Severity
    category: DiagnosticCategory
    languages: List[str]
    tags: List[str] = field(default_factory=list)
    link: Optional[str] = None
    enabled_by_default: bool = True


class Rule(ABC):
    """
    Base class for all rules.

    A rule holds no state between analyses; everything a run needs is
    passed in through the context, so one instance serves every file.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    @property
    @abstractmethod
    def metadata(self) -> RuleMetadata:
        """Return rule metadata."""

    @abstractmethod
    def analyze(self, context: "AnalysisContext") -> Iterator[Diagnostic]:
        """
        Analyze the tree in ``context`` and yield diagnostics.

        Raises:
            MalformedTreeError: the tree does not have the shape the rule relies on.
        """

    def supports_language(self, language: str) -> bool:
        """Check if this rule supports a given language."""
        languages = self.metadata.languages
        return "*" in languages or language.lower() in [l.lower() for l in languages]

    def create_diagnostic(
        self,
        node: SyntaxNode,
        message: str,
        context: Optional["AnalysisContext"] = None,
        severity: Optional[Severity] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Diagnostic:
        """Create a diagnostic attached to ``node`` using the rule's defaults."""
        location = context.locate(node) if context else node.location
        return Diagnostic(
            rule_id=self.metadata.rule_id,
            severity=severity or self.metadata.severity,
            message=message,
            location=location,
            category=self.metadata.category,
            node=node,
            language=context.language if context else "unknown",
            metadata=metadata or {},
        )


class NodeRule(Rule):
    """
    A rule that reacts to specific node kinds.

    The tree is walked once; every node whose kind is listed in
    ``node_kinds`` is passed to ``visit_node``.
    """

    node_kinds: FrozenSet[NodeKind] = frozenset()

    def visit_node(self, node: SyntaxNode, context: "AnalysisContext") -> Iterator[Diagnostic]:
        """Override to inspect a matching node."""
        yield from []

    def analyze(self, context: "AnalysisContext") -> Iterator[Diagnostic]:
        for node in context.traverse(self.node_kinds):
            yield from self.visit_node(node, context)


class RuleRegistry:
    """
    Registry for managing and discovering rules.

    Rules are registered by id. The registry only knows which rules are
    on by default; per-scan enabling and disabling is applied by the
    engine so that one scan's configuration never leaks into another.
    """

    _instance: Optional["RuleRegistry"] = None

    def __init__(self):
        self._rules: Dict[str, Type[Rule]] = {}
        self._instances: Dict[str, Rule] = {}
        self._enabled_by_default: Set[str] = set()

    @classmethod
    def get_instance(cls) -> "RuleRegistry":
        """Get the singleton registry instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset the singleton instance."""
        cls._instance = None

    def register(self, rule_class: Type[Rule]) -> Type[Rule]:
        """
        Register a rule class.

        Can be used as a decorator:

        @registry.register
        class MyRule(Rule):
            ...
        """
        meta = rule_class().metadata
        self._rules[meta.rule_id] = rule_class

        if meta.enabled_by_default:
            self._enabled_by_default.add(meta.rule_id)

        return rule_class

    def get_rule(self, rule_id: str, config: Optional[Dict[str, Any]] = None) -> Optional[Rule]:
        """Get a rule instance by ID."""
        if rule_id not in self._rules:
            return None

        cache_key = f"{rule_id}:{hash(str(config))}"
        if cache_key not in self._instances:
            self._instances[cache_key] = self._rules[rule_id](config)

        return self._instances[cache_key]

    def is_enabled_by_default(self, rule_id: str) -> bool:
        return rule_id in self._enabled_by_default

    def get_rules_for_language(
        self,
        language: str,
        enabled: Optional[Set[str]] = None,
        disabled: Optional[Set[str]] = None,
        config: Optional[Dict[str, Any]] = None,
    ) -> List[Rule]:
        """
        Get the active rules for a given language.

        ``enabled`` switches on rules that are off by default, ``disabled``
        switches off rules regardless of their default.
        """
        enabled = enabled or set()
        disabled = disabled or set()
        rules = []

        for rule_id in self._rules:
            if rule_id in disabled:
                continue
            if rule_id not in enabled and not self.is_enabled_by_default(rule_id):
                continue

            rule = self.get_rule(rule_id, config)
            if rule and rule.supports_language(language):
                rules.append(rule)

        return rules

    def get_all_rules(self, config: Optional[Dict[str, Any]] = None) -> List[Rule]:
        """Get all registered rules."""
        return [
            self.get_rule(rule_id, config)
            for rule_id in self._rules
        ]

    @property
    def rule_ids(self) -> List[str]:
        return list(self._rules)

    @property
    def rule_count(self) -> int:
        """Return the number of registered rules."""
        return len(self._rules)


class AnalysisContext:
    """
    Context provided to rules during analysis.

    Holds the syntax tree of one file (or one host-supplied tree) plus
    the source text, when there is one, for suppression handling.
    """

    def __init__(
        self,
        file_path: str,
        tree: Optional[SyntaxNode],
        language: str = "unknown",
        content: str = "",
        config: Optional[Dict[str, Any]] = None,
    ):
        self.file_path = file_path
        self.tree = tree
        self.language = language
        self.content = content
        self.config = config or {}
        self._lines: Optional[List[str]] = None
        self._suppression_comments: Optional[Set[int]] = None

    @property
    def lines(self) -> List[str]:
        """Get the source code lines."""
        if self._lines is None:
            self._lines = self.content.splitlines()
        return self._lines

    @property
    def suppressed_lines(self) -> Set[int]:
        """Get line numbers that have suppression comments."""
        if self._suppression_comments is None:
            self._suppression_comments = set()
            markers = self.config.get("suppression_markers", DEFAULT_SUPPRESSION_MARKERS)
            if markers:
                combined_pattern = re.compile(
                    r"(?:#|//|/\*)\s*(?:" + "|".join(re.escape(m) for m in markers) + r")",
                    re.IGNORECASE,
                )

                for i, line in enumerate(self.lines, start=1):
                    if combined_pattern.search(line):
                        self._suppression_comments.add(i)
                        # A marker on its own line covers the next line too
                        self._suppression_comments.add(i + 1)

        return self._suppression_comments

    def is_line_suppressed(self, line_number: int) -> bool:
        """Check if a line has a suppression comment."""
        return line_number in self.suppressed_lines

    def locate(self, node: SyntaxNode) -> CodeLocation:
        """Return the node's location, filling in this context's file path."""
        location = node.location
        if location is UNKNOWN_LOCATION or location.file_path == UNKNOWN_LOCATION.file_path:
            return dataclasses.replace(location, file_path=self.file_path)
        return location

    def traverse(self, node_kinds: Optional[FrozenSet[NodeKind]] = None) -> Iterator[SyntaxNode]:
        """
        Traverse the tree and yield nodes of the specified kinds.

        If node_kinds is None, yields all nodes.
        """
        for node in walk(self.tree):
            if node_kinds is None or node.kind in node_kinds:
                yield node


# Global registry instance
registry = RuleRegistry.get_instance()


def rule(cls: Type[Rule]) -> Type[Rule]:
    """
    Decorator to register a rule with the global registry.

    Usage:
        @rule
        class MyRule(Rule):
            ...
    """
    return registry.register(cls)
