"""
Planning module for filemap.

Provides:
- Rule parsing: rule text to validated Rule values
- Action planning: rules + source files to resolved actions
- Plan validation
"""

from .validator import validate_plan
from .planner import Action, MatchedFile, build_plan, match_files, plan_actions
from .rules import (
    Rule,
    RuleKind,
    load_rules,
    load_rules_file,
    parse_rule,
    parse_rules,
)

__all__ = [
    "validate_plan",
    "Action",
    "MatchedFile",
    "build_plan",
    "match_files",
    "plan_actions",
    "Rule",
    "RuleKind",
    "load_rules",
    "load_rules_file",
    "parse_rule",
    "parse_rules",
]
