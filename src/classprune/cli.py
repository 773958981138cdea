#!/usr/bin/env python3
"""
classprune CLI — standalone entry point for classdump pruning.
Runs the same pipeline as the build step, configured from the command line.
Pruning is safe: unreferenced dump files are moved to an exclusion tree, never deleted.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import time
from pathlib import Path
from typing import List, Optional, NoReturn
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

from classprune.commands import PruningCommand
from classprune.core.errors import PruningError
from classprune.core.models import PruningParams, PruningStats
from classprune.aliases import (
    DEFAULT_CLASSDUMP_DIR, CLASSPATH_HELP_TEXT, EXCLUSION_HELP_TEXT, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            description="classprune — prune a JaCoCo classdump down to the locally built classes",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "--classdump", "-d",
            default=DEFAULT_CLASSDUMP_DIR,
            type=str,
            help=f"Classdump directory written by the coverage agent. Default: {DEFAULT_CLASSDUMP_DIR}"
        )
        parser.add_argument(
            "--classpath", "-c",
            required=True,
            action="append",
            type=str,
            metavar="DIRS",
            help=CLASSPATH_HELP_TEXT
        )
        parser.add_argument(
            "--exclusion-dir", "-e",
            default=None,
            type=str,
            dest="exclusion_dir",
            help=EXCLUSION_HELP_TEXT
        )

        # Actions
        parser.add_argument(
            "--dry-run",
            action="store_true",
            dest="dry_run",
            help="Classify classdump files without moving anything"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show detailed statistics, progress and per-class decisions"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.quiet and args.verbose:
            self.error_exit("--quiet and --verbose cannot be used together")

        classdump = Path(args.classdump).resolve()
        if not classdump.exists():
            self.error_exit(f"Classdump directory not found: {args.classdump}")
        if not classdump.is_dir():
            self.error_exit(f"Classdump path is not a directory: {args.classdump}")

        if args.exclusion_dir and Path(args.exclusion_dir).exists():
            self.error_exit(f"Exclusion directory already exists: {args.exclusion_dir}")

        for item in self.split_classpath(args.classpath):
            path = Path(item)
            if not path.exists():
                self.warning(f"Classpath entry not found: {item}")
            elif not path.is_dir():
                self.warning(f"Classpath entry is not a directory, it will not be scanned: {item}")

    @staticmethod
    def split_classpath(values: List[str]) -> List[str]:
        """Flatten repeated, comma-separated --classpath values."""
        classpath = []
        for value in values or []:
            classpath.extend(PruningParams.split_classpath(value))
        return classpath

    def create_params(self, args: argparse.Namespace) -> PruningParams:
        """Create PruningParams from CLI arguments."""
        try:
            return PruningParams(
                classdump_dir=str(Path(args.classdump).resolve()),
                classpath=self.split_classpath(args.classpath),
                exclusion_dir=str(Path(args.exclusion_dir).resolve()) if args.exclusion_dir else None,
                dry_run=args.dry_run
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(f"\r  [{stage}] {current}/{total} ({percent:.1f}%)")
        else:
            sys.stderr.write(f"\r  [{stage}] {current} classes processed...")
        sys.stderr.flush()

    def run_pruning(self, params: PruningParams) -> PruningStats:
        """Execute pruning workflow."""
        command = PruningCommand()
        try:
            stats = command.execute(
                params,
                progress_callback=self.progress_callback if self.verbose else None
            )
        except PruningError as e:
            self.error_exit(str(e))

        if self.verbose:
            sys.stderr.write("\n")
        return stats

    def output_results(self, params: PruningParams, stats: PruningStats) -> None:
        """Print the run summary."""
        if self.quiet:
            return

        if self.verbose:
            print()
            print(stats.print_summary())
            print()

        if params.dry_run:
            print(f"Dry run: {stats.pruned} of {stats.total} classdump files would be moved to {params.exclusion_dir}")
        else:
            print(f"✅ Kept {stats.kept} classdump files, moved {stats.pruned} to {params.exclusion_dir}")
        if stats.skipped:
            self.warning(f"{stats.skipped} classdump entries could not be read and were left in place")

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> PruningStats:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet

        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if not self.quiet:
            print(f"Pruning classdump: {params.classdump_dir}")

        stats = self.run_pruning(params)
        self.output_results(params, stats)

        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")
        return stats


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)")
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
