"""
SARIF output formatter for IDE integration.

SARIF (Static Analysis Results Interchange Format) is a standard
format for static analysis tool output, supported by many IDEs
and code review tools.
"""

import json
from typing import Dict, Any, List
from datetime import datetime, timezone

from methodlint import __version__
from methodlint.core.findings import Diagnostic, ScanResult, Severity
from methodlint.core.rules import registry


SARIF_LEVEL = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
}


class SARIFFormatter:
    """
    Formats scan results in SARIF format.

    SARIF is supported by:
    - GitHub Code Scanning
    - VS Code SARIF Viewer
    - Azure DevOps
    """

    SARIF_VERSION = "2.1.0"
    SCHEMA_URI = "https://raw.githubusercontent.com/oasis-tcs/sarif-spec/master/Schemata/sarif-schema-2.1.0.json"

    def __init__(self, include_suppressed: bool = False):
        self.include_suppressed = include_suppressed

    def format_result(self, result: ScanResult) -> str:
        """Format a complete scan result in SARIF format."""
        sarif = {
            "$schema": self.SCHEMA_URI,
            "version": self.SARIF_VERSION,
            "runs": [self._create_run(result)],
        }

        return json.dumps(sarif, indent=2)

    def _create_run(self, result: ScanResult) -> Dict[str, Any]:
        """Create a SARIF run object."""
        rules = self._collect_rules(result.diagnostics)

        return {
            "tool": self._create_tool(rules),
            "results": [
                self._create_result(diagnostic)
                for diagnostic in result.diagnostics
                if self.include_suppressed or not diagnostic.suppressed
            ],
            "invocations": [self._create_invocation(result)],
        }

    def _create_tool(self, rules: List[Dict[str, Any]]) -> Dict[str, Any]:
        return {
            "driver": {
                "name": "methodlint",
                "version": __version__,
                "rules": rules,
            }
        }

    def _collect_rules(self, diagnostics: List[Diagnostic]) -> List[Dict[str, Any]]:
        """Collect unique rules from diagnostics."""
        rules_seen = set()
        rules = []

        for diagnostic in diagnostics:
            if diagnostic.rule_id not in rules_seen:
                rules_seen.add(diagnostic.rule_id)
                rules.append(self._create_rule(diagnostic.rule_id))

        return rules

    def _create_rule(self, rule_id: str) -> Dict[str, Any]:
        """Create a SARIF rule object from the registered rule metadata."""
        registered = registry.get_rule(rule_id)
        if registered is None:
            return {"id": rule_id}

        meta = registered.metadata
        rule = {
            "id": meta.rule_id,
            "name": meta.name,
            "shortDescription": {
                "text": meta.summary,
            },
            "defaultConfiguration": {
                "level": SARIF_LEVEL.get(meta.severity, "warning"),
            },
            "properties": {
                "tags": meta.tags,
                "category": meta.category.value,
            },
        }
        if meta.link:
            rule["helpUri"] = meta.link

        return rule

    def _create_result(self, diagnostic: Diagnostic) -> Dict[str, Any]:
        """Create a SARIF result object from a diagnostic."""
        result = {
            "ruleId": diagnostic.rule_id,
            "level": SARIF_LEVEL.get(diagnostic.severity, "warning"),
            "message": {
                "text": diagnostic.message,
            },
            "locations": [
                {
                    "physicalLocation": {
                        "artifactLocation": {
                            "uri": diagnostic.location.file_path,
                        },
                        "region": {
                            "startLine": max(diagnostic.location.start_line, 1),
                            "endLine": max(diagnostic.location.end_line, 1),
                            "startColumn": diagnostic.location.start_column + 1,  # SARIF is 1-indexed
                            "endColumn": diagnostic.location.end_column + 1,
                        },
                    },
                }
            ],
            "properties": {
                "language": diagnostic.language,
                **diagnostic.metadata,
            },
        }

        if diagnostic.suppressed:
            result["suppressions"] = [
                {
                    "kind": "inSource",
                    "justification": "Suppressed by inline comment",
                }
            ]

        return result

    def _create_invocation(self, result: ScanResult) -> Dict[str, Any]:
        """Create a SARIF invocation object."""
        return {
            "executionSuccessful": len(result.errors) == 0,
            "endTimeUtc": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ"),
            "toolExecutionNotifications": [
                {
                    "message": {
                        "text": error,
                    },
                    "level": "error",
                }
                for error in result.errors
            ],
        }
