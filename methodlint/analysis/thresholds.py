"""
Threshold tables mapping a control-flow count to a severity tier.

Bounds are strict: a rule fires when the count is greater than its
``lower_bound``. Tables are checked from the highest bound down so that
only the most severe applicable tier produces a message.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from methodlint.core.findings import Severity


@dataclass(frozen=True)
class ThresholdRule:
    lower_bound: int
    severity: Severity
    template: str

    def applies(self, count: int) -> bool:
        return count > self.lower_bound

    def render(self, method_name: str, count: int) -> str:
        return self.template.format(name=method_name, count=count)


@dataclass(frozen=True)
class Classification:
    """The tier a count fell into and its rendered message."""
    severity: Severity
    message: str
    count: int


RECOMMENDED_MAX_LOOPS = 5
RECOMMENDED_MAX_BRANCHES = 8
RECOMMENDED_MAX_TOTAL = 15

LOOP_THRESHOLDS: Tuple[ThresholdRule, ...] = (
    ThresholdRule(
        lower_bound=8,
        severity=Severity.ERROR,
        template=(
            "Method '{name}' has too many loops:\n"
            "  Loop count        : {count}\n"
            f"  Recommended max   : {RECOMMENDED_MAX_LOOPS}\n"
            "  Suggestion        : Consider refactoring to reduce loops."
        ),
    ),
    ThresholdRule(
        lower_bound=5,
        severity=Severity.WARNING,
        template=(
            "Method '{name}' has a moderately high number of loops:\n"
            "  Loop count        : {count}\n"
            f"  Recommended max   : {RECOMMENDED_MAX_LOOPS}"
        ),
    ),
)

BRANCH_THRESHOLDS: Tuple[ThresholdRule, ...] = (
    ThresholdRule(
        lower_bound=12,
        severity=Severity.ERROR,
        template=(
            "Method '{name}' has too many branches:\n"
            "  Branch count      : {count}\n"
            f"  Recommended max   : {RECOMMENDED_MAX_BRANCHES}\n"
            "  Suggestion        : Consider refactoring to reduce branches."
        ),
    ),
    ThresholdRule(
        lower_bound=8,
        severity=Severity.WARNING,
        template=(
            "Method '{name}' has a moderately high number of branches:\n"
            "  Branch count      : {count}\n"
            f"  Recommended max   : {RECOMMENDED_MAX_BRANCHES}"
        ),
    ),
)

TOTAL_THRESHOLDS: Tuple[ThresholdRule, ...] = (
    ThresholdRule(
        lower_bound=15,
        severity=Severity.WARNING,
        template=(
            "Method '{name}' has high total cyclomatic complexity:\n"
            "  Combined complexity: {count}\n"
            f"  Recommended max    : {RECOMMENDED_MAX_TOTAL}\n"
            "  Suggestion         : Consider refactoring to simplify control flow."
        ),
    ),
)


def classify(
    count: int,
    table: Tuple[ThresholdRule, ...],
    method_name: str,
) -> Optional[Classification]:
    """Return the most severe tier ``count`` exceeds, or None."""
    for threshold in sorted(table, key=lambda t: t.lower_bound, reverse=True):
        if threshold.applies(count):
            return Classification(
                severity=threshold.severity,
                message=threshold.render(method_name, count),
                count=count,
            )
    return None


def classify_loops(method_name: str, count: int) -> Optional[Classification]:
    return classify(count, LOOP_THRESHOLDS, method_name)


def classify_branches(method_name: str, count: int) -> Optional[Classification]:
    return classify(count, BRANCH_THRESHOLDS, method_name)


def classify_total(method_name: str, count: int) -> Optional[Classification]:
    return classify(count, TOTAL_THRESHOLDS, method_name)
