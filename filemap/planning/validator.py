"""
Plan validation for filemap.

Looks for plans that will not do what the rules author probably expects.
Problems are reported as warnings; the plan itself is never changed.
"""

import logging
from pathlib import Path

from .planner import Action
from .rules import RuleKind

logger = logging.getLogger(__name__)


def validate_plan(actions: list[Action]) -> list[str]:
    """
    Check a plan before it is executed.

    Checks for:
    - Actions on a source file that an earlier move has already consumed
    - Several actions writing the same destination (the last one wins)

    Args:
        actions: The ordered action list.

    Returns:
        Warning messages, in plan order. Empty if nothing was found.
    """
    warnings = []

    # source path -> index of the move that consumes it
    moved_sources: dict[Path, int] = {}
    # destination path -> index of the first action writing it
    destinations: dict[Path, int] = {}

    for index, action in enumerate(actions, start=1):
        if action.source_path in moved_sources:
            warnings.append(
                f"Action {index} ({action.describe()}) uses a source already moved "
                f"by action {moved_sources[action.source_path]}; it will fail"
            )
        elif action.kind == RuleKind.MOVE:
            moved_sources[action.source_path] = index

        if action.dest_path in destinations:
            warnings.append(
                f"Action {index} overwrites {action.dest_path}, "
                f"already written by action {destinations[action.dest_path]}"
            )
        else:
            destinations[action.dest_path] = index

    for warning in warnings:
        logger.warning(warning)

    return warnings
