"""
Tests for identifier, method-name and parameter-name predicates.
"""

import logging
import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from methodlint.analysis.names import (
    check_identifier, check_parameters, check_method_declaration
)


class TestIdentifierRules:
    """Tests for referenced identifiers."""

    def test_banned_name(self):
        violation = check_identifier("foo")
        assert violation.rule_id == "banned-name"
        assert violation.message == "foo is a bad identifier name"

    def test_loop_counters_allowed(self):
        """i, j and k are never too short."""
        for name in ("i", "j", "k"):
            assert check_identifier(name) is None

    def test_single_letter_flagged(self):
        violation = check_identifier("x")
        assert violation.rule_id == "short-name"
        assert violation.message == "x is too short to be a good identifier name"

    def test_two_letters_not_flagged(self):
        """Only length 1 triggers the short-name rule."""
        assert check_identifier("ab") is None
        assert check_identifier("x1") is None

    def test_long_name(self):
        name = "a" * 31
        violation = check_identifier(name)
        assert violation.rule_id == "long-name"
        assert violation.message == f"{name} is too long to be a good identifier name"
        assert check_identifier("a" * 30) is None

    def test_first_rule_wins(self):
        """At most one violation per name."""
        assert check_identifier("foo").rule_id == "banned-name"


class TestMethodDeclarationRules:
    """Tests for declared methods and their parameters."""

    def test_short_method_name(self):
        violation = check_method_declaration("run")
        assert violation.message == "run is too short to be a good method name"
        assert check_method_declaration("load") is None

    def test_invalid_method_characters(self):
        for name in ("load_data", "load-data", "load data"):
            violation = check_method_declaration(name)
            assert violation.rule_id == "invalid-method-name"
            assert violation.message == f"{name} is not a valid method name"

    def test_method_name_checked_before_parameters(self):
        """int a(int x1): the name is reported, not the parameter."""
        violation = check_method_declaration("a", ["x1"])
        assert violation.message == "a is too short to be a good method name"

    def test_parameter_with_digit_one(self):
        violation = check_method_declaration("compute", ["x1"])
        assert violation.message == "x1 is not a valid parameter name"

    def test_underscore_parameter(self):
        assert check_parameters(["_"]).rule_id == "invalid-parameter-name"

    def test_short_parameter(self):
        violation = check_parameters(["ab"])
        assert violation.message == "ab is too short to be a good parameter name"
        assert check_parameters(["abc"]) is None

    def test_long_parameter(self):
        name = "p" * 31
        assert check_parameters([name]).message == f"{name} is too long to be a good parameter name"

    def test_first_offending_parameter_stops_checks(self):
        violation = check_parameters(["value", "ab", "x1"])
        assert violation.name == "ab"

    def test_checked_parameters_are_logged(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="methodlint.analysis.names"):
            check_parameters(["value", "count"])
        assert "Checking parameter: value" in caplog.text
        assert "Checking parameter: count" in caplog.text
