"""
Action planning for filemap.

Turns parsed rules and the source directory listing into an ordered list of
fully resolved actions. Nothing here writes to the filesystem.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..scanner import list_source_files
from .rules import Rule, RuleKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Action:
    """A single copy or move with both paths already resolved."""
    kind: RuleKind
    source_path: Path
    dest_path: Path
    rule_line: int = 0

    def describe(self) -> str:
        return f"{self.kind.label} {self.source_path} -> {self.dest_path}"

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.label.lower(),
            "source": str(self.source_path),
            "destination": str(self.dest_path),
            "rule_line": self.rule_line,
        }


@dataclass(frozen=True)
class MatchedFile:
    """A source file name and the rules it satisfies, in declaration order."""
    name: str
    rules: tuple[Rule, ...]


def match_files(rules: list[Rule], file_names: Iterable[str]) -> list[MatchedFile]:
    """Pair each file name (sorted) with the rules whose pattern matches it."""
    return [
        MatchedFile(name, tuple(rule for rule in rules if rule.matches(name)))
        for name in sorted(file_names)
    ]


def plan_actions(
    rules: list[Rule],
    file_names: Iterable[str],
    source_dir: Path,
    dest_dir: Path
) -> list[Action]:
    """
    Build the action list for a set of rules and source files.

    Rules are applied in declaration order and, within a rule, files in
    lexicographic order. A file matched by several rules gets one action per
    rule.

    Args:
        rules: Parsed rules, in the order they were declared.
        file_names: Names of regular files in the source directory.
        source_dir: The source directory.
        dest_dir: The destination root.

    Returns:
        Ordered list of actions.
    """
    source_root = Path(source_dir).resolve()
    dest_root = Path(dest_dir).resolve()

    matched = match_files(rules, file_names)
    for item in matched:
        if not item.rules:
            logger.debug("No rule matches for file: %s", item.name)

    actions = []
    for rule in rules:
        for item in matched:
            if not any(r is rule for r in item.rules):
                continue
            action = Action(
                kind=rule.kind,
                source_path=source_root / item.name,
                dest_path=Path(os.path.normpath(dest_root / rule.destination / item.name)),
                rule_line=rule.line_number,
            )
            logger.debug("Planned (rule on line %d): %s", rule.line_number, action.describe())
            actions.append(action)

    return actions


def build_plan(rules: list[Rule], config) -> list[Action]:
    """
    List the configured source directory and plan actions for it.

    Raises:
        SourceUnreadable: If the source directory cannot be listed.
    """
    file_names = list_source_files(config.source_dir)
    logger.info("Found %d files in %s", len(file_names), config.source_dir)
    return plan_actions(rules, file_names, config.source_dir, config.dest_dir)
