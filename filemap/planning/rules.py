"""
Rule parsing for filemap.

A rules file holds one rule per line:

    c /<regex>/<relative destination>    copy matching files
    m /<regex>/<relative destination>    move matching files

The regex body runs until the next unescaped '/', so '\\/' can be used to
match a literal slash. Blank lines are ignored.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Iterable

from ..errors import (
    InvalidDestination,
    InvalidRegex,
    MalformedRule,
    RulesFileUnreadable,
    UnknownRuleKind,
)

logger = logging.getLogger(__name__)

# Leading kind token: everything up to the first whitespace or '/'
_KIND_FORMAT = re.compile(r"\s*(?P<kind>[^\s/]*)\s*")
_BODY_FORMAT = re.compile(r"/(?P<regex>(?:\\.|[^\\/])*)/(?P<destination>.*)", re.DOTALL)


class RuleKind(Enum):
    COPY = "c"
    MOVE = "m"

    @property
    def label(self) -> str:
        return self.name.capitalize()


@dataclass(frozen=True)
class Rule:
    """
    A validated copy/move rule.

    The pattern is compiled at parse time and is matched against bare file
    names only. The destination is relative to the destination root.
    """
    kind: RuleKind
    pattern: re.Pattern
    destination: str
    line_number: int = 0

    def matches(self, file_name: str) -> bool:
        return self.pattern.search(file_name) is not None

    def __str__(self) -> str:
        return f"{self.kind.value} /{self.pattern.pattern}/{self.destination}"


def _is_absolute(destination: str) -> bool:
    if destination.startswith(("/", "\\")):
        return True
    if PurePosixPath(destination).is_absolute():
        return True
    windows = PureWindowsPath(destination)
    return windows.is_absolute() or bool(windows.drive)


def parse_rule(line: str, line_number: int) -> Rule | None:
    """
    Parse a single rule line.

    Args:
        line: The raw rule text.
        line_number: 1-based line number, used in error messages.

    Returns:
        The parsed Rule, or None for a blank line.

    Raises:
        UnknownRuleKind: The kind marker is not 'c' or 'm'.
        MalformedRule: The /regex/ part is missing or unterminated.
        InvalidRegex: The regex body does not compile.
        InvalidDestination: The destination is empty or absolute.
    """
    line = line.rstrip("\r\n")
    if not line.strip():
        return None

    head = _KIND_FORMAT.match(line)
    marker = head.group("kind")
    try:
        kind = RuleKind(marker)
    except ValueError:
        raise UnknownRuleKind(line_number, line, marker) from None

    body = _BODY_FORMAT.fullmatch(line, head.end())
    if body is None:
        raise MalformedRule(line_number, line)

    try:
        pattern = re.compile(body.group("regex"))
    except re.error as e:
        raise InvalidRegex(line_number, line, str(e)) from e

    destination = body.group("destination").strip()
    if not destination:
        raise InvalidDestination(line_number, line, "destination is empty")
    if _is_absolute(destination):
        raise InvalidDestination(line_number, line, f"{destination!r} is not a relative path")

    rule = Rule(kind=kind, pattern=pattern, destination=destination, line_number=line_number)
    logger.debug("Parsed rule on line %d: %s", line_number, rule)
    return rule


def parse_rules(lines: Iterable[str]) -> list[Rule]:
    """
    Parse every rule line, all or nothing.

    The first invalid line raises its ParseError; no partial list is ever
    returned.
    """
    rules = []
    for line_number, line in enumerate(lines, start=1):
        rule = parse_rule(line, line_number)
        if rule is not None:
            rules.append(rule)
    return rules


def load_rules_file(path: Path) -> list[Rule]:
    """Read and parse a UTF-8 rules file."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise RulesFileUnreadable(path) from e

    return parse_rules(text.splitlines())


def load_rules(config) -> list[Rule]:
    """Parse the rules named by a RunConfig: the rules file, or the inline rule."""
    if config.rules_file is not None:
        return load_rules_file(config.rules_file)
    if config.inline_rule:
        return parse_rules([config.inline_rule])
    return []
