#!/usr/bin/env python3
"""
fdup CLI — Command line interface for duplicate file detection and removal.
Runs the same engine as library callers, with a live progress line and a plain-text report.
"""
from __future__ import annotations  # Enable postponed evaluation of annotations (PEP 563)
import argparse
import sys
import os
import threading
import time
from typing import List, Optional, NoReturn, TextIO
import logging

logging.basicConfig(
    level=logging.ERROR,
    format="%(levelname)-8s | %(name)-25s | %(message)s"
)

# === EARLY DEPENDENCY VALIDATION ===
_MISSING_DEPS = []
try:
    import send2trash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("send2trash")

try:
    import xxhash  # noqa: F401
except ImportError:
    _MISSING_DEPS.append("xxhash")

if _MISSING_DEPS:
    print("❌ Missing required dependencies:", file=sys.stderr)
    print(f"   pip install {' '.join(_MISSING_DEPS)}", file=sys.stderr)
    sys.exit(1)

# === NORMAL IMPORTS (after validation) ===
from fdup import __version__
from fdup.core.models import ScanParams, ScanCounters, ScanProgress, ScanResult, ScanConfig
from fdup.commands import ScanCommand
from fdup.utils.convert_utils import ConvertUtils
from fdup.aliases import (
    ALGORITHM_ALIASES, ALGORITHM_CHOICES, ALGORITHM_HELP_TEXT,
    EXTENSIONS_HELP_TEXT, EPILOG_TEXT
)


class ProgressReporter:
    """Redraws the running counters on one terminal line from a background thread."""

    def __init__(self, counters: ScanCounters, stream: TextIO = None,
                 interval: float = ScanConfig.PROGRESS_INTERVAL):
        self.counters = counters
        self.stream = stream or sys.stderr
        self.interval = interval
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_width = 0

    def start(self) -> None:
        self._thread = threading.Thread(target=self._run, name="fdup-progress", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self._clear()

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self._draw(" ".join(CLIApplication.status_lines(self.counters.snapshot())))

    def _draw(self, line: str) -> None:
        padding = " " * max(0, self._last_width - len(line))
        self.stream.write(f"\r{line}{padding}")
        self.stream.flush()
        self._last_width = len(line)

    def _clear(self) -> None:
        if self._last_width:
            self.stream.write("\r" + " " * self._last_width + "\r")
            self.stream.flush()
            self._last_width = 0


class CLIApplication:
    """Main CLI application controller."""

    def __init__(self):
        self.start_time: float = time.time()
        self.verbose: bool = False
        self.quiet: bool = False
        self.counters = ScanCounters()
        self._stopped = threading.Event()

        # Fix encoding for Windows consoles to prevent UnicodeEncodeError
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding='utf-8')
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding='utf-8')

    @staticmethod
    def parse_args(args=None) -> argparse.Namespace:
        """Parse and validate command-line arguments."""
        parser = argparse.ArgumentParser(
            prog="fdup",
            description="fdup — find and optionally remove duplicate files by content",
            formatter_class=argparse.RawTextHelpFormatter,
            epilog=EPILOG_TEXT
        )

        parser.add_argument(
            "dirs",
            nargs="*",
            metavar="dir",
            help="Directories to scan. Default: current directory"
        )

        # Filtering options
        parser.add_argument(
            "--ext", "-x",
            action="append",
            default=[],
            type=str,
            metavar="EXT",
            dest="extensions",
            help=EXTENSIONS_HELP_TEXT
        )
        parser.add_argument(
            "--case",
            action="store_true",
            dest="case_sensitive",
            help="Extensions are case-sensitive"
        )
        parser.add_argument(
            "--hidden",
            action="store_true",
            help="Process files and directories that start with a period.\n"
                 "Hidden files are ignored by default"
        )

        # Hashing options
        parser.add_argument(
            "--algorithm",
            choices=ALGORITHM_CHOICES,
            default="sha256",
            type=str,
            help=ALGORITHM_HELP_TEXT
        )
        parser.add_argument(
            "--workers", "-w",
            type=int,
            default=ScanConfig.default_workers(),
            metavar="N",
            help=f"Number of files hashed in parallel. Default: {ScanConfig.default_workers()}"
        )

        # Actions
        parser.add_argument(
            "--delete",
            action="store_true",
            help="Delete all duplicates found. The first copy encountered will be preserved"
        )
        parser.add_argument(
            "--last",
            action="store_true",
            dest="last_only",
            help="When deleting duplicates, only delete those found within\n"
                 "the last directory tree specified on the command line"
        )
        parser.add_argument(
            "--trash",
            action="store_true",
            help="When deleting duplicates, move them to the system trash instead"
        )

        # Output options
        parser.add_argument(
            "--quiet", "-q",
            action="store_true",
            help="Suppress progress and status output"
        )
        parser.add_argument(
            "--verbose", "-v",
            action="store_true",
            help="Log what the scan is doing"
        )
        parser.add_argument(
            "--version",
            action="version",
            version=f"%(prog)s {__version__}"
        )

        return parser.parse_args(args)

    def validate_args(self, args: argparse.Namespace) -> None:
        """Validate command-line arguments before execution."""
        if args.last_only and not args.delete:
            self.error_exit("--last can only be used with --delete")

        if args.trash and not args.delete:
            self.error_exit("--trash can only be used with --delete")

        if args.workers < 1:
            self.error_exit("--workers must be at least 1")

        if args.algorithm not in ALGORITHM_ALIASES:
            self.error_exit(
                f"Invalid hash algorithm: '{args.algorithm}'.\n"
                f"Valid options: {', '.join(ALGORITHM_CHOICES)}"
            )

    def create_params(self, args: argparse.Namespace) -> ScanParams:
        """Create ScanParams from CLI arguments."""
        try:
            return ScanParams(
                roots=args.dirs,
                extensions=args.extensions,
                include_hidden=args.hidden,
                delete=args.delete,
                last_only=args.last_only,
                case_sensitive=args.case_sensitive,
                use_trash=args.trash,
                algorithm=ALGORITHM_ALIASES[args.algorithm],
                workers=args.workers
            )
        except ValueError as e:
            self.error_exit(f"Parameter error: {e}")

    def stopped_flag(self) -> bool:
        """True once the user asked the scan to stop."""
        return self._stopped.is_set()

    def run_scan(self, params: ScanParams) -> ScanResult:
        """Execute the scan, redrawing progress while it runs."""
        command = ScanCommand()
        reporter = None
        if not self.quiet and sys.stderr.isatty():
            reporter = ProgressReporter(self.counters)
            reporter.start()

        try:
            return command.execute(
                params,
                stopped_flag=self.stopped_flag,
                counters=self.counters
            )
        except KeyboardInterrupt:
            self._stopped.set()
            raise
        except RuntimeError as e:
            self.error_exit(str(e))
        finally:
            if reporter is not None:
                reporter.stop()

    @staticmethod
    def status_lines(progress: ScanProgress) -> List[str]:
        """Two-sentence summary of the counters, e.g. for the live progress line."""
        examined = (
            f"Examined {ConvertUtils.count_noun(progress.files_processed, 'file', 'files')} "
            f"containing {ConvertUtils.count_noun(progress.bytes_processed, 'byte', 'bytes')}."
        )
        found = f"Found {ConvertUtils.count_noun(progress.duplicates_found, 'duplicate file', 'duplicate files')}"
        if progress.duplicates_found > 0:
            found += f" containing {ConvertUtils.count_noun(progress.duplicate_bytes, 'byte', 'bytes')}"
        return [examined, found + "."]

    def output_status(self, progress: ScanProgress) -> None:
        if self.quiet:
            return
        for line in self.status_lines(progress):
            print(line)
        if progress.files_unprocessable:
            print(f"Unable to process "
                  f"{ConvertUtils.count_noun(progress.files_unprocessable, 'file', 'files')}.")
        if self.verbose and progress.duplicates_found:
            print(f"Duplicates occupy {ConvertUtils.bytes_to_human(progress.duplicate_bytes)}.")

    @staticmethod
    def output_removal_list(prefix: str, paths: List[str]) -> None:
        """Print a labelled, already naturally sorted list of paths, if any."""
        if not paths:
            return
        print(f"\n{prefix} {ConvertUtils.count_noun(len(paths), 'file', 'files')}:")
        for path in paths:
            print(path)

    def output_results(self, result: ScanResult) -> None:
        """Output duplicate groups (original first) or the removal summary."""
        if result.delete:
            self.output_removal_list("Removed", result.removed)
            self.output_removal_list("Unable to remove", result.unable_to_remove)
            return

        if not result.has_duplicates:
            print("\nNo duplicates found.")
            return

        for group in result.groups:
            print()
            print(group.original)
            for path in group.duplicates:
                print(path)

    def warning(self, message: str) -> None:
        """Print a warning message to stderr."""
        if not self.quiet:
            print(f"⚠️  {message}", file=sys.stderr)

    @staticmethod
    def error_exit(message: str, code: int = 1) -> NoReturn:
        """Print error and exit."""
        print(f"❌ Error: {message}", file=sys.stderr)
        sys.exit(code)

    def run(self, argv: Optional[List[str]] = None) -> None:
        """Main entry point with conditional output behavior."""
        args = self.parse_args(argv)
        self.verbose = args.verbose
        self.quiet = args.quiet
        if self.verbose:
            logging.getLogger("fdup").setLevel(logging.INFO)

        self.validate_args(args)
        params = self.create_params(args)

        result = self.run_scan(params)

        self.output_status(result.progress)
        if result.stopped:
            self.warning("Scan stopped before all files were examined.")
        self.output_results(result)

        # Show completion time
        elapsed = time.time() - self.start_time
        if self.verbose:
            print(f"\n✅ Completed in {elapsed:.2f} seconds")


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
