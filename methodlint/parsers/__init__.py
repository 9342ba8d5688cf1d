"""
Language front ends producing syntax trees for rule analysis.
"""

from typing import Dict, Optional, Type
from methodlint.parsers.base import BaseParser

# Registry of available parsers
_parsers: Dict[str, Type[BaseParser]] = {}


def register_parser(language: str):
    """Decorator to register a parser for a language."""
    def decorator(cls: Type[BaseParser]) -> Type[BaseParser]:
        _parsers[language.lower()] = cls
        return cls
    return decorator


def get_parser(language: str) -> Optional[BaseParser]:
    """Get a parser instance for a language, or None if unsupported."""
    language = language.lower()

    aliases = {
        "py": "python",
    }
    language = aliases.get(language, language)

    if language in _parsers:
        return _parsers[language]()
    return None


def list_supported_languages() -> list:
    """List all languages with registered parsers."""
    return list(_parsers.keys())


# Import parsers to register them
from methodlint.parsers.java_parser import JavaParser  # noqa: E402
from methodlint.parsers.python_parser import PythonParser  # noqa: E402

__all__ = [
    "BaseParser",
    "get_parser",
    "register_parser",
    "list_supported_languages",
    "JavaParser",
    "PythonParser",
]
