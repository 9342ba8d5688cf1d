"""
Language-neutral syntax tree consumed by the rules.

Front ends (or a host toolchain) build these nodes once per file; rules
only read and walk them. Every node is immutable, so one tree can be
shared by any number of concurrent analyses.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

from methodlint.core.findings import CodeLocation, UNKNOWN_LOCATION


class NodeKind(Enum):
    """The node kinds rules dispatch on."""
    LOOP = "loop"
    BRANCH = "branch"
    IDENTIFIER = "identifier"
    MEMBER_SELECT = "member_select"
    CALL = "call"
    METHOD = "method"
    PARAMETER = "parameter"
    OTHER = "other"


class LoopVariant(Enum):
    FOR = "for"
    WHILE = "while"
    DO_WHILE = "do_while"
    FOR_EACH = "for_each"


class BranchVariant(Enum):
    IF = "if"
    TERNARY = "ternary"
    SWITCH = "switch"
    CATCH = "catch"


Variant = Union[LoopVariant, BranchVariant]
Children = Tuple["SyntaxNode", ...]


@dataclass(frozen=True)
class SyntaxNode:
    """
    A node of a method-level syntax tree.

    ``children`` holds the generic sub-nodes. A few kinds carry their
    structural parts in dedicated fields instead:

    - METHOD: ``parameters`` (PARAMETER nodes) and ``body``
    - CALL: ``target`` (IDENTIFIER or MEMBER_SELECT) and the arguments in ``children``
    - SWITCH branches: one entry per case label in ``cases``

    ``node_type`` is the label the producing parser used for the node,
    kept for error messages and debugging.
    """
    kind: NodeKind
    variant: Optional[Variant] = None
    name: Optional[str] = None
    children: Children = ()
    parameters: Children = ()
    body: Optional["SyntaxNode"] = None
    target: Optional["SyntaxNode"] = None
    cases: Children = ()
    location: CodeLocation = UNKNOWN_LOCATION
    node_type: str = ""

    def __repr__(self) -> str:
        label = self.node_type or self.kind.value
        return f"SyntaxNode({label!r}, name={self.name!r}, line={self.location.start_line})"

    def child_nodes(self) -> Iterator["SyntaxNode"]:
        """Yield the direct sub-nodes in source order."""
        if self.target is not None:
            yield self.target
        yield from self.parameters
        yield from self.children
        yield from self.cases
        if self.body is not None:
            yield self.body

    def find_all(self, kind: NodeKind) -> Iterator["SyntaxNode"]:
        """Find all nodes of a given kind in this subtree, this node included."""
        for node in walk(self):
            if node.kind is kind:
                yield node

    @property
    def is_switch(self) -> bool:
        return self.kind is NodeKind.BRANCH and self.variant is BranchVariant.SWITCH

    # Factories -----------------------------------------------------------

    @classmethod
    def loop(cls, variant: LoopVariant, *children: "SyntaxNode", **kwargs) -> "SyntaxNode":
        return cls(NodeKind.LOOP, variant=variant, children=tuple(children), **kwargs)

    @classmethod
    def branch(cls, variant: BranchVariant, *children: "SyntaxNode", **kwargs) -> "SyntaxNode":
        if variant is BranchVariant.SWITCH:
            raise ValueError("use SyntaxNode.switch() for switch branches")
        return cls(NodeKind.BRANCH, variant=variant, children=tuple(children), **kwargs)

    @classmethod
    def switch(cls, cases, *children: "SyntaxNode", **kwargs) -> "SyntaxNode":
        return cls(
            NodeKind.BRANCH,
            variant=BranchVariant.SWITCH,
            cases=tuple(cases),
            children=tuple(children),
            **kwargs,
        )

    @classmethod
    def identifier(cls, name: str, **kwargs) -> "SyntaxNode":
        return cls(NodeKind.IDENTIFIER, name=name, **kwargs)

    @classmethod
    def member_select(cls, name: str, receiver: Optional["SyntaxNode"] = None, **kwargs) -> "SyntaxNode":
        children = (receiver,) if receiver is not None else ()
        return cls(NodeKind.MEMBER_SELECT, name=name, children=children, **kwargs)

    @classmethod
    def call(cls, target: "SyntaxNode", *arguments: "SyntaxNode", **kwargs) -> "SyntaxNode":
        return cls(NodeKind.CALL, target=target, children=tuple(arguments), **kwargs)

    @classmethod
    def parameter(cls, name: str, **kwargs) -> "SyntaxNode":
        return cls(NodeKind.PARAMETER, name=name, **kwargs)

    @classmethod
    def method(
        cls,
        name: str,
        parameters=(),
        body: Optional["SyntaxNode"] = None,
        **kwargs,
    ) -> "SyntaxNode":
        params = tuple(
            p if isinstance(p, SyntaxNode) else cls.parameter(p)
            for p in parameters
        )
        return cls(NodeKind.METHOD, name=name, parameters=params, body=body, **kwargs)

    @classmethod
    def block(cls, *children: "SyntaxNode", **kwargs) -> "SyntaxNode":
        kwargs.setdefault("node_type", "block")
        return cls(NodeKind.OTHER, children=tuple(children), **kwargs)


def walk(root: Optional[SyntaxNode]) -> Iterator[SyntaxNode]:
    """
    Yield every node of a subtree in pre-order.

    Uses an explicit stack so arbitrarily deep trees do not run into the
    interpreter recursion limit.
    """
    if root is None:
        return
    stack = [root]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(tuple(current.child_nodes())))
