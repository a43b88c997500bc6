#!/usr/bin/env python3
"""
filemap - CLI Entry Point
=========================

Usage:
    python -m filemap 'm/lime/Lime Files' -s ./inbox -d ./sorted
    python -m filemap -r rules.txt -s ./inbox -d ./sorted --dry-run -vv
"""

import argparse
import sys
from datetime import datetime
from pathlib import Path

from . import __version__
from .config import RunConfig
from .errors import ExecutionError, FileMapError
from .executor import execute_actions
from .planning import build_plan, load_rules, validate_plan
from .utils import (
    console,
    print_error,
    print_header,
    print_plan_table,
    print_success,
    print_warning,
    save_json,
    setup_logging,
)

RULES_HELP = """\
Rules (one per line in a rules file):
  c /<regex>/<destination>   copy files whose name matches <regex>
  m /<regex>/<destination>   move files whose name matches <regex>

<destination> is relative to --dest-dir. Use \\/ for a literal slash in <regex>.
"""


def print_error_chain(error: BaseException) -> None:
    """Print an error and the chain of exceptions that caused it."""
    print_error(str(error))
    cause = error.__cause__
    while cause is not None:
        console.print(f"  caused by: {cause}", markup=False)
        cause = cause.__cause__


def build_report(config: RunConfig, actions: list, executed: int, warnings: list[str]) -> dict:
    return {
        "source_dir": str(config.source_dir.resolve()),
        "dest_dir": str(config.dest_dir.resolve()),
        "dry_run": config.dry_run,
        "executed_at": datetime.now().isoformat(timespec='seconds'),
        "planned_actions_count": len(actions),
        "executed_actions_count": executed,
        "warnings": warnings,
        "actions": [a.to_dict() for a in actions],
    }


def write_report(report: dict, path: Path) -> bool:
    """Save the run report, printing the error instead of raising if it cannot be written."""
    try:
        save_json(report, path)
    except OSError as e:
        print_error_chain(e)
        print_warning(f"Run report was not written to {path}")
        return False
    return True


def run(config: RunConfig, backend=None) -> int:
    """
    Parse, plan, validate and execute.

    Parsing and planning both finish before anything is written, so a failure
    in either leaves the filesystem untouched.

    Returns:
        Process exit code.
    """
    mode_str = "DRY-RUN" if config.dry_run else "APPLY"
    print_header("filemap", f"Source: {config.source_dir}\nDestination: {config.dest_dir}\nMode: {mode_str}")

    # Step 1: Rules
    console.print("\n[bold cyan][STEP 1] Parsing rules...[/bold cyan]")
    try:
        rules = load_rules(config)
    except FileMapError as e:
        print_error_chain(e)
        print_warning("No files were changed.")
        return 1
    console.print(f"[INFO] Loaded {len(rules)} rules", markup=False)

    # Step 2: Plan
    console.print("\n[bold cyan][STEP 2] Planning actions...[/bold cyan]")
    try:
        actions = build_plan(rules, config)
    except FileMapError as e:
        print_error_chain(e)
        print_warning("No files were changed.")
        return 1
    print_plan_table(actions)

    # Step 3: Validate
    console.print("\n[bold cyan][STEP 3] Validating plan...[/bold cyan]")
    warnings = validate_plan(actions)
    if not warnings:
        console.print("[INFO] No problems found", markup=False)

    # Step 4: Execute
    console.print("\n[bold cyan][STEP 4] Executing plan...[/bold cyan]")
    try:
        result = execute_actions(actions, config.dry_run, backend, show_progress=not config.dry_run)
    except ExecutionError as e:
        print_error_chain(e)
        print_warning(
            f"Stopped at action {e.index + 1} of {len(actions)}. "
            f"{e.completed} earlier action(s) were applied and have not been undone."
        )
        if config.report_out:
            report = build_report(config, actions, e.completed, warnings)
            report["failed_action_index"] = e.index
            report["error"] = str(e)
            write_report(report, config.report_out)
        return 1

    if config.dry_run:
        print_success(f"{result.count} action(s) would be performed")
        print_warning("This was a DRY-RUN. No files were changed.")
        console.print("       Run without --dry-run to apply changes.")
    else:
        print_success(f"{result.count} action(s) performed")

    if config.report_out:
        report = build_report(config, actions, result.count, warnings)
        if not write_report(report, config.report_out):
            return 1

    return 0


# =============================================================================
# Main
# =============================================================================

def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filemap",
        description="Copy or move files into folders based on name matches",
        epilog=RULES_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    rules_group = parser.add_mutually_exclusive_group(required=True)
    rules_group.add_argument("rule", nargs="?",
                             help="A single rule, e.g. 'm/lime/Lime Files'")
    rules_group.add_argument("-r", "--rules", type=Path, metavar="FILE",
                             help="File to read mapping rules from")

    parser.add_argument("-s", "--source-dir", type=Path, default=Path("."), metavar="DIRECTORY",
                        help="Directory to look for files in (default: current directory)")
    parser.add_argument("-d", "--dest-dir", type=Path, default=Path("."), metavar="DIRECTORY",
                        help="Directory that rule destinations are relative to (default: current directory)")
    parser.add_argument("-n", "--dry-run", action="store_true",
                        help="Report what would be done without changing any files")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v info, -vv debug, -vvv trace)")
    parser.add_argument("--report-out", type=Path, metavar="FILE",
                        help="Write a JSON report of the run")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = create_parser().parse_args(argv)
    config = RunConfig.from_args(args)
    setup_logging(config.verbosity)

    try:
        return run(config)
    except KeyboardInterrupt:
        console.print("\n[ABORT] Operation cancelled by user", markup=False)
        return 130


if __name__ == "__main__":
    sys.exit(main())
