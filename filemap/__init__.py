"""
filemap
=======

A command-line tool that copies or moves files from a flat source directory
into a destination tree, driven by regex-based rules.
"""

__version__ = "1.0.0"

from .config import RunConfig
from .executor import ExecutionReport, LocalFilesystem, execute_actions
from .planning import (
    Action,
    Rule,
    RuleKind,
    build_plan,
    load_rules,
    parse_rule,
    parse_rules,
    plan_actions,
    validate_plan,
)
from .scanner import list_source_files

__all__ = [
    "RunConfig",
    "ExecutionReport",
    "LocalFilesystem",
    "execute_actions",
    "Action",
    "Rule",
    "RuleKind",
    "build_plan",
    "load_rules",
    "parse_rule",
    "parse_rules",
    "plan_actions",
    "validate_plan",
    "list_source_files",
]
