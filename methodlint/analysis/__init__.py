"""Pure analyses over method syntax trees: counts, thresholds and name rules."""

from methodlint.analysis.metrics import (
    MethodMetrics,
    count_loops,
    count_branches,
    total_complexity,
    measure_method,
)
from methodlint.analysis.thresholds import (
    ThresholdRule,
    Classification,
    classify_loops,
    classify_branches,
    classify_total,
)
from methodlint.analysis.names import (
    NameRule,
    NameViolation,
    check_identifier,
    check_method_declaration,
)

__all__ = [
    "MethodMetrics",
    "count_loops",
    "count_branches",
    "total_complexity",
    "measure_method",
    "ThresholdRule",
    "Classification",
    "classify_loops",
    "classify_branches",
    "classify_total",
    "NameRule",
    "NameViolation",
    "check_identifier",
    "check_method_declaration",
]
