"""Parsing of validation rule strings.

A rule string is either a bare name (``required``, ``email``) or a name with a
single argument separated by a colon (``minLength:3``, ``pattern:^[A-Z]+$``).
Anything that does not parse is dropped with a warning; it never raises.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

logger = logging.getLogger(__name__)

_REGEX_FLAGS = {'i': re.IGNORECASE, 'm': re.MULTILINE, 's': re.DOTALL}


@dataclass(frozen=True)
class Required:
    pass


@dataclass(frozen=True)
class MinLength:
    n: int


@dataclass(frozen=True)
class MaxLength:
    n: int


@dataclass(frozen=True)
class Min:
    n: float


@dataclass(frozen=True)
class Max:
    n: float


@dataclass(frozen=True)
class Email:
    pass


@dataclass(frozen=True)
class Pattern:
    regex: re.Pattern
    source: str


Rule = Union[Required, MinLength, MaxLength, Min, Max, Email, Pattern]

STRING_RULES = (MinLength, MaxLength, Email, Pattern)
NUMERIC_RULES = (Min, Max)


def _parse_int(arg: str) -> Optional[int]:
    try:
        value = int(arg)
    except ValueError:
        return None
    return value if value >= 0 else None


def _parse_number(arg: str) -> Optional[float]:
    try:
        value = float(arg)
    except ValueError:
        return None
    if value != value or value in (float('inf'), float('-inf')):
        return None
    return value


def compile_pattern(source: str) -> Optional[re.Pattern]:
    """Compile a bare expression or a ``/body/flags`` literal."""
    body, flags = source, 0
    if len(source) >= 2 and source.startswith('/'):
        end = source.rfind('/')
        if end > 0 and all(c in _REGEX_FLAGS for c in source[end + 1:]):
            body = source[1:end]
            for c in source[end + 1:]:
                flags |= _REGEX_FLAGS[c]
    try:
        return re.compile(body, flags)
    except re.error:
        return None


def parse_rule(text: str) -> Optional[Rule]:
    if not isinstance(text, str):
        logger.warning("Ignoring non-string validation rule: %r", text)
        return None
    text = text.strip()
    parts = text.split(':')
    if len(parts) > 2:
        logger.warning("Ignoring validation rule with more than one argument: %s", text)
        return None

    name = parts[0].strip()
    arg = parts[1].strip() if len(parts) == 2 else None

    if name == 'required':
        return Required()
    if name == 'email':
        return Email()

    if name in ('minLength', 'maxLength', 'min', 'max', 'pattern'):
        if not arg:
            logger.warning("Ignoring validation rule without argument: %s", text)
            return None
        if name == 'pattern':
            regex = compile_pattern(arg)
            if regex is None:
                logger.warning("Ignoring validation rule with invalid regular expression: %s", text)
                return None
            return Pattern(regex, arg)
        if name in ('minLength', 'maxLength'):
            length = _parse_int(arg)
            if length is None:
                logger.warning("Ignoring validation rule with non-numeric length: %s", text)
                return None
            return MinLength(length) if name == 'minLength' else MaxLength(length)
        bound = _parse_number(arg)
        if bound is None:
            logger.warning("Ignoring validation rule with non-numeric bound: %s", text)
            return None
        return Min(bound) if name == 'min' else Max(bound)

    logger.warning("Ignoring unknown validation rule: %s", text)
    return None


def parse_rules(texts: Iterable[str]) -> List[Rule]:
    rules: List[Rule] = []
    for text in texts or []:
        rule = parse_rule(text)
        if rule is not None:
            rules.append(rule)
    return rules
