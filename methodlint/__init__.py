"""
methodlint

Method-level static analysis: flags methods with too many loops or
branches and identifiers, method names and parameters with poor names.
"""

__version__ = "1.0.0"

from methodlint.core.engine import ScanEngine, create_engine
from methodlint.core.findings import Diagnostic, Severity, ScanResult
from methodlint.core.tree import SyntaxNode
from methodlint.config import ScanConfig

__all__ = [
    "ScanEngine",
    "create_engine",
    "Diagnostic",
    "Severity",
    "ScanResult",
    "SyntaxNode",
    "ScanConfig",
]
