"""
Method quality rules.

Importing this package registers every rule with the global registry.
"""

from methodlint.rules import complexity, naming

__all__ = [
    "complexity",
    "naming",
]
