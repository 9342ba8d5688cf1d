"""
JSON output formatter for machine-readable results.
"""

import json
from typing import List

from methodlint.core.findings import Diagnostic, ScanResult


class JSONFormatter:
    """
    Formats scan results as JSON for machine consumption.
    """

    def __init__(self, indent: int = 2, include_suppressed: bool = False):
        self.indent = indent
        self.include_suppressed = include_suppressed

    def format_result(self, result: ScanResult) -> str:
        """Format a complete scan result as JSON."""
        data = result.to_dict()

        # Filter suppressed diagnostics if not included
        if not self.include_suppressed:
            data["diagnostics"] = [
                d for d in data["diagnostics"]
                if not d.get("suppressed", False)
            ]

        return json.dumps(data, indent=self.indent, default=str)

    def format_diagnostic(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic as JSON."""
        return json.dumps(diagnostic.to_dict(), indent=self.indent, default=str)

    def format_diagnostics(self, diagnostics: List[Diagnostic]) -> str:
        """Format a list of diagnostics as JSON."""
        data = [d.to_dict() for d in diagnostics]

        if not self.include_suppressed:
            data = [d for d in data if not d.get("suppressed", False)]

        return json.dumps(data, indent=self.indent, default=str)
