"""
Run configuration.

Everything a run depends on (roots, dry-run flag, verbosity, where the rules
come from) is carried in a RunConfig value and passed to each stage.
"""

from argparse import Namespace
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class RunConfig:
    source_dir: Path = Path(".")
    dest_dir: Path = Path(".")
    dry_run: bool = False
    verbosity: int = 0
    rules_file: Path | None = None
    inline_rule: str | None = None
    report_out: Path | None = None

    @classmethod
    def from_args(cls, args: Namespace) -> "RunConfig":
        """Create a RunConfig from parsed command-line arguments."""
        return cls(
            source_dir=Path(args.source_dir),
            dest_dir=Path(args.dest_dir),
            dry_run=args.dry_run,
            verbosity=args.verbose or 0,
            rules_file=Path(args.rules) if args.rules else None,
            inline_rule=args.rule,
            report_out=args.report_out,
        )
