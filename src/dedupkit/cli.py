#!/usr/bin/env python3
"""
dedupkit CLI — command line interface for duplicate file detection and removal.
Builds DedupeParams from flags (and the optional config file), runs the core
pipeline and renders the report. Nothing is removed unless --action delete is
given without --dry-run.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import dataclasses
import signal
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

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    from send2trash import send2trash
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from dedupkit.core.models import DedupeParams, DedupeReport, RemovalMethod, Action
from dedupkit.core.errors import TraversalError, ConfigError
from dedupkit.commands import DedupeCommand
from dedupkit.config import load_config
from dedupkit.report import ReportRenderer
from dedupkit.aliases import (
    STRATEGY_ALIASES, STRATEGY_CHOICES, STRATEGY_HELP_TEXT,
    ACTION_ALIASES, ACTION_CHOICES, ACTION_HELP_TEXT,
    OUTPUT_CHOICES, EPILOG_TEXT
)


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.output: str = "plain"
        self._stop_requested: bool = False
        self._plan_shown: bool = False

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="dedupkit",
            description="dedupkit — find duplicate files and optionally remove them",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "path",
            nargs="?",
            default=".",
            help="Directory to search (default: current directory)"
        )

        # Comparison options
        parser.add_argument(
            "--by", "-b",
            choices=STRATEGY_CHOICES,
            default="hash",
            help=STRATEGY_HELP_TEXT
        )
        parser.add_argument(
            "--recursive", "-r",
            action=argparse.BooleanOptionalAction,
            default=False,
            help="Search subdirectories too"
        )
        parser.add_argument(
            "--prescreen",
            action=argparse.BooleanOptionalAction,
            default=True,
            help="Skip files with a unique size or a unique first 64 KiB\n"
                 "before hashing whole files (--no-prescreen hashes every file)"
        )
        parser.add_argument(
            "--workers", "-w",
            type=int,
            default=1,
            metavar='N',
            help="Number of threads used for hashing. Default: 1"
        )

        # Actions
        parser.add_argument(
            "--action", "-a",
            choices=ACTION_CHOICES,
            default="list",
            help=ACTION_HELP_TEXT
        )
        parser.add_argument(
            "--dry-run", "-d",
            action=argparse.BooleanOptionalAction,
            default=False,
            help="Show what would be deleted without making changes"
        )
        parser.add_argument(
            "--trash",
            action=argparse.BooleanOptionalAction,
            default=False,
            help="Move duplicates to the system trash instead of deleting them permanently"
        )
        parser.add_argument(
            "--force", "-f",
            action="store_true",
            help="Skip confirmation prompt when deleting (for automation/scripts)"
        )

        # Output options
        parser.add_argument(
            "--output", "-o",
            choices=OUTPUT_CHOICES,
            default="plain",
            help="Output format: plain, json. Default: plain"
        )
        parser.add_argument(
            "--config",
            type=str,
            default=None,
            metavar='FILE',
            help="TOML config file with defaults (default: ~/.dedupkit.toml)"
        )
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress non-essential output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Show debug logging and progress"
        )
        return parser

    def parse_args(self, args=None) -> argparse.Namespace:
        """Parse arguments, using the config file for defaults."""
        parser = self.build_parser()

        # First pass only to find --config
        known, _ = parser.parse_known_args(args)
        try:
            config = load_config(known.config)
        except ConfigError as e:
            self.error_exit(str(e))

        if config:
            parser.set_defaults(**config)
        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.force and args.action != "delete":
            self.error_exit("--force can only be used with --action delete")

        if args.workers < 1:
            self.error_exit("--workers must be at least 1")

        # Prevent interactive confirmation in non-TTY environments
        if args.action == "delete" and not args.dry_run and not args.force:
            if not sys.stdin.isatty() or not sys.stdout.isatty():
                self.error_exit(
                    "Cannot request interactive confirmation in non-interactive session.\n"
                    "Use --force flag to proceed without confirmation when piping output or running in scripts."
                )

    def create_params(self, args: argparse.Namespace) -> DedupeParams:
        """Create DedupeParams from CLI arguments."""
        try:
            return DedupeParams(
                root_path=args.path,
                key_strategy=STRATEGY_ALIASES[args.by],
                recursive=args.recursive,
                action=ACTION_ALIASES[args.action],
                dry_run=args.dry_run,
                removal_method=RemovalMethod.TRASH if args.trash else RemovalMethod.UNLINK,
                workers=args.workers,
                prescreen=args.prescreen,
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def progress_callback(self, stage: str, current: int, total: Optional[int]) -> None:
        """CLI progress callback - shows progress in console."""
        if not self.verbose:
            return

        if total and total > 0:
            percent = (current / total) * 100
            sys.stderr.write(
                f"\r  [{stage}] {current}/{total} ({percent:.1f}%)"
            )
        else:
            sys.stderr.write(f"\r  [{stage}] {current} files processed...")
        sys.stderr.flush()

    def stopped_flag(self) -> bool:
        """True once Ctrl+C was pressed during removal."""
        return self._stop_requested

    def _request_stop(self, signum, frame) -> None:
        self._stop_requested = True

    def run_dedupe(self, params: DedupeParams, force: bool = False) -> DedupeReport:
        """Execute the dedupe workflow, asking before removal unless forced."""
        command = DedupeCommand()
        progress = self.progress_callback if self.verbose else None

        if not params.apply_mode:
            return command.execute(params, progress_callback=progress, stopped_flag=self.stopped_flag)

        preview = command.execute(
            dataclasses.replace(params, dry_run=True),
            progress_callback=progress,
            stopped_flag=self.stopped_flag
        )
        if self.verbose:
            sys.stderr.write("\n")

        if preview.to_delete == 0:
            return command.apply(preview, params)

        if force:
            if not self.quiet:
                self.warning("--force flag skips confirmation. Proceeding with deletion...")
        elif not self.confirm_removal(preview, params):
            print("Deletion cancelled by user.", file=self._console())
            return command.apply(preview, dataclasses.replace(params, action=Action.LIST))

        # Ctrl+C from here on finishes the current file and stops; completed removals stay done
        previous_handler = signal.signal(signal.SIGINT, self._request_stop)
        try:
            return command.apply(preview, params, progress_callback=progress, stopped_flag=self.stopped_flag)
        finally:
            signal.signal(signal.SIGINT, previous_handler)

    def confirm_removal(self, preview: DedupeReport, params: DedupeParams) -> bool:
        """Show the plan and ask for confirmation."""
        # Safety check: confirm we're still in interactive mode
        if not sys.stdin.isatty() or not sys.stdout.isatty():
            self.error_exit(
                "Lost interactive terminal during operation. "
                "Use --force to proceed in non-interactive environments."
            )

        console = self._console()
        print(ReportRenderer.render_plain(preview), file=console)
        print(file=console)
        self._plan_shown = True
        verb = "move" if params.removal_method == RemovalMethod.TRASH else "permanently delete"
        target = " to trash" if params.removal_method == RemovalMethod.TRASH else ""
        console.write(f"Are you sure you want to {verb} {preview.to_delete} files{target}? [y/N]: ")
        console.flush()
        response = input()
        return response.strip().lower() in ("y", "yes")

    def output_report(self, report: DedupeReport) -> None:
        if self.output == "json":
            print(ReportRenderer.render_json(report))
            return

        if self.quiet:
            return
        print(ReportRenderer.render_plain(report, include_groups=not self._plan_shown))

        if self.verbose and report.skipped:
            for path in report.skipped[:5]:
                print(f"  • skipped: {path}", file=sys.stderr)
            if len(report.skipped) > 5:
                print(f"  ...and {len(report.skipped) - 5} more", file=sys.stderr)

    def _console(self):
        """Where interactive text goes; stdout is reserved for the report in JSON mode."""
        return sys.stderr if self.output == "json" else sys.stdout

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    def error_exit(self, message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        if self.output == "json":
            print(ReportRenderer.render_error_json(message))
        else:
            print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        self.output = args.output

        if self.verbose:
            logging.getLogger().setLevel(logging.DEBUG)

        self.validate_args(args)
        params = self.create_params(args)

        if self.verbose:
            print(f"Scanning directory: {Path(params.root_path).resolve()}", file=sys.stderr)

        try:
            report = self.run_dedupe(params, force=args.force)
        except TraversalError as e:
            self.error_exit(str(e))

        self.output_report(report)

        # Show completion time
        if self.verbose:
            elapsed = time.time() - self.start_time
            print(f"\n✅ Completed in {elapsed:.2f} seconds", file=sys.stderr)


def main() -> None:
    """Application entry point."""
    app = CLIApplication()
    try:
        app.run()
    except KeyboardInterrupt:
        print("\n⚠️  Operation cancelled by user (Ctrl+C)", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        if os.environ.get("DEBUG"):
            raise
        print(f"❌ Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
