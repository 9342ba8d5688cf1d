"""
Control-flow counts for a method body.

Each count is a fold over the subtree: nothing is cached and no state
survives the call, so the same functions can run on many trees at once.
"""

from dataclasses import dataclass
from typing import Optional

from methodlint.core.tree import BranchVariant, NodeKind, SyntaxNode, walk


@dataclass(frozen=True)
class MethodMetrics:
    name: str
    loops: int
    branches: int
    total: int


def loop_weight(node: SyntaxNode) -> int:
    """Every loop node counts once, whatever its variant or contents."""
    return 1 if node.kind is NodeKind.LOOP else 0


def branch_weight(node: SyntaxNode) -> int:
    """
    Branches count once each, except switches which count their case labels.

    ``if``/``else if`` chains are separate nodes and are not folded.
    """
    if node.kind is not NodeKind.BRANCH:
        return 0
    if node.variant is BranchVariant.SWITCH:
        return len(node.cases)
    return 1


def count_loops(root: Optional[SyntaxNode]) -> int:
    return sum(loop_weight(node) for node in walk(root))


def count_branches(root: Optional[SyntaxNode]) -> int:
    return sum(branch_weight(node) for node in walk(root))


def total_complexity(root: Optional[SyntaxNode]) -> int:
    """Loop count plus branch count, each from its own traversal."""
    return count_loops(root) + count_branches(root)


def measure_method(method: SyntaxNode) -> MethodMetrics:
    """Compute all counts for a METHOD node's body."""
    body = method.body
    return MethodMetrics(
        name=method.name or "",
        loops=count_loops(body),
        branches=count_branches(body),
        total=total_complexity(body),
    )
