"""
Error types for filemap.

Parsing and planning errors are raised before anything touches the
filesystem. Execution errors stop the run at the failing action; actions
that already completed stay in place.
"""

from pathlib import Path


class FileMapError(Exception):
    """Base class for all expected, user-facing filemap failures."""


# -----------------------------------------------------------------------------
# Rule parsing
# -----------------------------------------------------------------------------

class ParseError(FileMapError):
    """A rule line could not be turned into a Rule."""

    def __init__(self, line_number: int, line: str, message: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"Line {line_number}: {message}: {line.strip()!r}")


class UnknownRuleKind(ParseError):
    def __init__(self, line_number: int, line: str, kind: str):
        self.kind = kind
        super().__init__(line_number, line, f"Unknown rule kind {kind!r} (expected 'c' or 'm')")


class MalformedRule(ParseError):
    def __init__(self, line_number: int, line: str):
        super().__init__(line_number, line, "Expected a /regex/ followed by a destination")


class InvalidRegex(ParseError):
    def __init__(self, line_number: int, line: str, reason: str):
        self.reason = reason
        super().__init__(line_number, line, f"Invalid regex ({reason})")


class InvalidDestination(ParseError):
    def __init__(self, line_number: int, line: str, reason: str):
        self.reason = reason
        super().__init__(line_number, line, f"Invalid destination ({reason})")


class RulesFileUnreadable(FileMapError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Unable to read rules file {path}")


# -----------------------------------------------------------------------------
# Planning
# -----------------------------------------------------------------------------

class PlanningError(FileMapError):
    """The action list could not be computed."""


class SourceUnreadable(PlanningError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Unable to read entries of source directory {path}")


# -----------------------------------------------------------------------------
# Execution
# -----------------------------------------------------------------------------

class ExecutionError(FileMapError):
    """
    A single action failed.

    Attributes:
        index: 0-based position of the failing action in the plan.
        action: The failing Action.
        completed: Number of actions that already changed the filesystem.
    """

    def __init__(self, index: int, action, completed: int, message: str):
        self.index = index
        self.action = action
        self.completed = completed
        super().__init__(message)


class DirectoryCreateFailed(ExecutionError):
    def __init__(self, index: int, action, completed: int, path: Path):
        self.path = path
        super().__init__(
            index, action, completed,
            f"Unable to create destination directory {path}"
        )


class CopyFailed(ExecutionError):
    def __init__(self, index: int, action, completed: int):
        super().__init__(
            index, action, completed,
            f"Unable to copy file {action.source_path} to destination {action.dest_path}"
        )


class DeleteFailed(ExecutionError):
    def __init__(self, index: int, action, completed: int):
        super().__init__(
            index, action, completed,
            f"Copied {action.source_path} to {action.dest_path} but could not remove the source"
        )
