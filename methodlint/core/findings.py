"""
Diagnostic data structures for methodlint.

This module defines the records produced by rules: the source location
a diagnostic is attached to, its severity tier, and the aggregated
result of a scan.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any, TYPE_CHECKING
import json

if TYPE_CHECKING:
    from methodlint.core.tree import SyntaxNode


class Severity(Enum):
    """Severity tiers for diagnostics."""
    ERROR = "error"
    WARNING = "warning"

    def __lt__(self, other):
        order = [Severity.WARNING, Severity.ERROR]
        return order.index(self) < order.index(other)

    def __le__(self, other):
        return self == other or self < other


class DiagnosticCategory(Enum):
    """Categories of diagnostics."""
    COMPLEXITY = "complexity"
    NAMING = "naming"


@dataclass(frozen=True)
class CodeLocation:
    """Represents a location in source code."""
    file_path: str
    start_line: int
    end_line: int
    start_column: int = 0
    end_column: int = 0

    def __str__(self) -> str:
        return f"{self.file_path}:{self.start_line}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_path": self.file_path,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "start_column": self.start_column,
            "end_column": self.end_column,
        }


UNKNOWN_LOCATION = CodeLocation(file_path="<unknown>", start_line=0, end_line=0)


@dataclass(frozen=True)
class Diagnostic:
    """
    A rule violation attached to a syntax node.

    Diagnostics are never mutated after creation. Adjustments made by the
    engine (language, suppression) go through ``dataclasses.replace``.
    """
    rule_id: str
    severity: Severity
    message: str
    location: CodeLocation
    category: DiagnosticCategory
    node: Optional["SyntaxNode"] = field(default=None, compare=False, repr=False)
    language: str = "unknown"
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)
    suppressed: bool = False

    @property
    def title(self) -> str:
        """First line of the message."""
        return self.message.splitlines()[0] if self.message else ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert diagnostic to a dictionary."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.value,
            "category": self.category.value,
            "message": self.message,
            "location": self.location.to_dict(),
            "language": self.language,
            "metadata": self.metadata,
            "suppressed": self.suppressed,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert diagnostic to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)


@dataclass
class ScanResult:
    """Results from a complete scan."""
    diagnostics: List[Diagnostic]
    files_scanned: int
    scan_time_seconds: float
    languages_detected: List[str]
    rules_applied: List[str]
    errors: List[str] = field(default_factory=list)

    def _count(self, severity: Severity) -> int:
        return sum(1 for d in self.diagnostics if d.severity == severity and not d.suppressed)

    @property
    def error_count(self) -> int:
        return self._count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self._count(Severity.WARNING)

    @property
    def total_diagnostics(self) -> int:
        return sum(1 for d in self.diagnostics if not d.suppressed)

    @property
    def suppressed_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.suppressed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": {
                "files_scanned": self.files_scanned,
                "scan_time_seconds": self.scan_time_seconds,
                "languages_detected": self.languages_detected,
                "rules_applied": self.rules_applied,
                "total_diagnostics": self.total_diagnostics,
                "suppressed_diagnostics": self.suppressed_count,
                "by_severity": {
                    "error": self.error_count,
                    "warning": self.warning_count,
                },
            },
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "errors": self.errors,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)
