import logging

import pytest

from schema_workbench.rules import (
    Email,
    Max,
    MaxLength,
    Min,
    MinLength,
    Pattern,
    Required,
    compile_pattern,
    parse_rule,
    parse_rules,
)


class TestParseRule:
    @pytest.mark.parametrize("text,expected", [
        ("required", Required()),
        ("email", Email()),
        ("minLength:3", MinLength(3)),
        ("maxLength:10", MaxLength(10)),
        ("min:0", Min(0.0)),
        ("max:2.5", Max(2.5)),
        ("  min : 5 ", Min(5.0)),
    ])
    def test_known_rules(self, text, expected):
        assert parse_rule(text) == expected

    def test_pattern_keeps_source(self):
        rule = parse_rule("pattern:^[A-Z]+$")
        assert isinstance(rule, Pattern)
        assert rule.source == "^[A-Z]+$"
        assert rule.regex.search("ABC")

    @pytest.mark.parametrize("text", [
        "bogus:x",
        "bogus",
        "min:notanumber",
        "minLength:abc",
        "minLength:-1",
        "max:",
        "pattern",
        "pattern:[unclosed",
        "pattern:a:b",
        "",
    ])
    def test_malformed_rules_are_ignored(self, text):
        assert parse_rule(text) is None

    def test_malformed_rule_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="schema_workbench.rules"):
            parse_rule("bogus:x")
        assert "bogus:x" in caplog.text

    def test_non_string_rule_is_ignored(self):
        assert parse_rule(42) is None


class TestParseRules:
    def test_skips_bad_entries_and_keeps_order(self):
        rules = parse_rules(["required", "bogus", "minLength:2", "min:x", "maxLength:5"])
        assert rules == [Required(), MinLength(2), MaxLength(5)]

    def test_empty_input(self):
        assert parse_rules([]) == []
        assert parse_rules(None) == []


class TestCompilePattern:
    def test_slash_literal_is_unwrapped(self):
        regex = compile_pattern("/^[A-Za-z]+$/")
        assert regex.search("Hello")
        assert not regex.search("/Hello/")

    def test_slash_literal_flags(self):
        regex = compile_pattern("/^abc$/i")
        assert regex.search("ABC")

    def test_bare_expression(self):
        assert compile_pattern("^a").search("abc")

    def test_invalid_expression(self):
        assert compile_pattern("(") is None
