"""
Plan execution for filemap.

Applies a planned action list to the filesystem, in order, stopping at the
first failure. Completed actions are left as they are.
"""

import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from tqdm import tqdm

from .errors import CopyFailed, DeleteFailed, DirectoryCreateFailed
from .planning.planner import Action
from .planning.rules import RuleKind

logger = logging.getLogger(__name__)


class LocalFilesystem:
    """The filesystem operations the executor needs. Each raises OSError on failure."""

    def copy(self, src: Path, dst: Path) -> None:
        shutil.copyfile(src, dst)
        shutil.copystat(src, dst)

    def remove(self, path: Path) -> None:
        os.remove(path)

    def create_dir_all(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)


@dataclass
class ExecutionReport:
    dry_run: bool
    performed: list[Action] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.performed)


def _apply_action(index: int, action: Action, completed: int, backend) -> None:
    """Perform one action. Raises an ExecutionError subclass on failure."""
    output_directory = action.dest_path.parent
    if not output_directory.is_dir():
        logger.info("Creating destination directory: %s", output_directory)
        try:
            backend.create_dir_all(output_directory)
        except OSError as e:
            raise DirectoryCreateFailed(index, action, completed, output_directory) from e

    logger.info("%s %s -> %s", "Moving" if action.kind == RuleKind.MOVE else "Copying",
                action.source_path, action.dest_path)
    try:
        backend.copy(action.source_path, action.dest_path)
    except OSError as e:
        raise CopyFailed(index, action, completed) from e

    if action.kind == RuleKind.MOVE:
        try:
            backend.remove(action.source_path)
        except OSError as e:
            raise DeleteFailed(index, action, completed) from e


def execute_actions(
    actions: list[Action],
    dry_run: bool = False,
    backend=None,
    show_progress: bool = False
) -> ExecutionReport:
    """
    Execute (or simulate) a plan.

    Args:
        actions: Planned actions, executed in list order.
        dry_run: If True, only report what would be done.
        backend: Object providing copy/remove/create_dir_all.
            Defaults to LocalFilesystem.
        show_progress: Show a tqdm progress bar.

    Returns:
        ExecutionReport listing the actions performed (or, for a dry run,
        the actions that would be performed).

    Raises:
        ExecutionError: On the first failing action. Its `completed`
            attribute is the number of actions already applied.
    """
    backend = backend or LocalFilesystem()
    report = ExecutionReport(dry_run=dry_run)

    if dry_run:
        for action in actions:
            logger.info("[WOULD %s] %s -> %s", action.kind.label.upper(),
                        action.source_path, action.dest_path)
            report.performed.append(action)
        return report

    with tqdm(total=len(actions), unit="file", disable=not show_progress) as pbar:
        for index, action in enumerate(actions):
            _apply_action(index, action, len(report.performed), backend)
            report.performed.append(action)
            pbar.update(1)

    return report
