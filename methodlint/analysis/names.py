"""
Lexical-quality rules for identifiers.

Each rule set is an ordered tuple of predicates. Evaluation stops at the
first predicate that matches, so a name produces at most one violation.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple
import logging

logger = logging.getLogger(__name__)


# Placeholder names that never belong in real code
BANNED_NAMES = frozenset({"foo"})

# Single-letter names accepted by convention for loop counters
LOOP_COUNTER_NAMES = frozenset({"i", "j", "k"})

MAX_NAME_LENGTH = 30
MIN_METHOD_NAME_LENGTH = 4
MIN_PARAMETER_NAME_LENGTH = 3
INVALID_METHOD_NAME_CHARS = ("_", "-", " ")


@dataclass(frozen=True)
class NameRule:
    rule_id: str
    predicate: Callable[[str], bool]
    template: str

    def check(self, name: str) -> Optional["NameViolation"]:
        if self.predicate(name):
            return NameViolation(
                rule_id=self.rule_id,
                name=name,
                message=self.template.format(name=name),
            )
        return None


@dataclass(frozen=True)
class NameViolation:
    rule_id: str
    name: str
    message: str


def is_banned(name: str) -> bool:
    return name in BANNED_NAMES


def is_too_short(name: str) -> bool:
    # Only single characters are flagged; two-letter names pass.
    return len(name) == 1 and name not in LOOP_COUNTER_NAMES


def is_too_long(name: str) -> bool:
    return len(name) > MAX_NAME_LENGTH


def is_short_method_name(name: str) -> bool:
    return len(name) < MIN_METHOD_NAME_LENGTH


def has_invalid_method_chars(name: str) -> bool:
    return any(char in name for char in INVALID_METHOD_NAME_CHARS)


def is_invalid_parameter(name: str) -> bool:
    return name == "_" or "1" in name


def is_short_parameter(name: str) -> bool:
    return len(name) < MIN_PARAMETER_NAME_LENGTH


IDENTIFIER_RULES: Tuple[NameRule, ...] = (
    NameRule("banned-name", is_banned, "{name} is a bad identifier name"),
    NameRule("short-name", is_too_short, "{name} is too short to be a good identifier name"),
    NameRule("long-name", is_too_long, "{name} is too long to be a good identifier name"),
)

METHOD_NAME_RULES: Tuple[NameRule, ...] = (
    NameRule("short-method-name", is_short_method_name, "{name} is too short to be a good method name"),
    NameRule("invalid-method-name", has_invalid_method_chars, "{name} is not a valid method name"),
)

PARAMETER_RULES: Tuple[NameRule, ...] = (
    NameRule("invalid-parameter-name", is_invalid_parameter, "{name} is not a valid parameter name"),
    NameRule("short-parameter-name", is_short_parameter, "{name} is too short to be a good parameter name"),
    NameRule("long-parameter-name", is_too_long, "{name} is too long to be a good parameter name"),
)


def first_violation(name: str, rules: Iterable[NameRule]) -> Optional[NameViolation]:
    """Return the violation of the first rule ``name`` breaks."""
    for rule in rules:
        violation = rule.check(name)
        if violation is not None:
            return violation
    return None


def check_identifier(name: str) -> Optional[NameViolation]:
    """Check a referenced name or call target."""
    return first_violation(name, IDENTIFIER_RULES)


def check_parameters(parameter_names: Iterable[str]) -> Optional[NameViolation]:
    """Check parameters in declaration order, stopping at the first offender."""
    for parameter_name in parameter_names:
        logger.debug("Checking parameter: %s", parameter_name)
        violation = first_violation(parameter_name, PARAMETER_RULES)
        if violation is not None:
            return violation
    return None


def check_method_declaration(
    method_name: str,
    parameter_names: Iterable[str] = (),
) -> Optional[NameViolation]:
    """Check a declared method: its own name first, then its parameters."""
    violation = first_violation(method_name, METHOD_NAME_RULES)
    if violation is not None:
        return violation
    return check_parameters(parameter_names)
