"""
Base parser class for language front ends.
"""

from abc import ABC, abstractmethod
from typing import List

from methodlint.core.tree import NodeKind, SyntaxNode


class BaseParser(ABC):
    """
    Base class for language front ends.

    Each parser turns source text into the language-neutral SyntaxNode
    tree the rules consume. Parsers must only emit CALL nodes whose
    target is an IDENTIFIER or MEMBER_SELECT.
    """

    @property
    @abstractmethod
    def language(self) -> str:
        """Return the language this parser handles."""

    @abstractmethod
    def parse(self, source: str, file_path: str = "<unknown>") -> SyntaxNode:
        """
        Parse source code into a syntax tree.

        Args:
            source: The source code to parse.
            file_path: The file path (for locations and error messages).

        Returns:
            The root SyntaxNode of the file.

        Raises:
            ParseError: the source could not be parsed.
        """

    def get_methods(self, tree: SyntaxNode) -> List[SyntaxNode]:
        """Get all method declaration nodes from a tree."""
        return list(tree.find_all(NodeKind.METHOD))
