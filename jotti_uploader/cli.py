"""
Command-line interface for the Jotti uploader.
"""
import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .coordinator import SubmissionCoordinator
from .exceptions import RateLimitedError
from .models import ScannerConfig

logger = logging.getLogger(__name__)

PROJECT_URL = "https://github.com/cyclone-github/jotti"
EXIT_USAGE = 1
EXIT_RATE_LIMITED = 2

EXAMPLES = """\
Example Usage:

  jotti-upload {file_to_scan}
  jotti-upload file1.exe file2.pdf
  jotti-upload --help
  jotti-upload --version
"""


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application.
    
    Args:
        verbose: Whether to enable debug logging
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def version_text() -> str:
    return f"Jotti Uploader v{__version__}\n{PROJECT_URL}"


class UsageErrorParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with EXIT_USAGE.

    argparse exits with 2 by default, which is reserved for the rate limit.
    """

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = UsageErrorParser(
        prog="jotti-upload",
        description="Upload files to https://virusscan.jotti.org for a malware scan",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('files', nargs='*', metavar='FILE',
                        help="Files to check and upload")
    parser.add_argument('-v', '--verbose', action='store_true',
                        help="Enable verbose logging")
    parser.add_argument('--version', action='store_true',
                        help="Print program version")
    parser.add_argument('--author', action='store_true',
                        help="Print author credit")
    return parser


def create_coordinator() -> SubmissionCoordinator:
    """Create the submission coordinator for a run.
    
    Returns:
        Configured SubmissionCoordinator instance
    """
    return SubmissionCoordinator(config=ScannerConfig())


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(version_text(), file=sys.stderr)
        sys.exit(0)
    if args.author:
        print("Coded by cyclone ;)", file=sys.stderr)
        sys.exit(0)

    setup_logging(args.verbose)

    if not args.files:
        logger.critical("Usage: jotti-upload <file_to_scan>")
        sys.exit(EXIT_USAGE)

    try:
        with create_coordinator() as coordinator:
            summary = coordinator.run(args.files)
        summary.raise_for_rate_limit()

    except RateLimitedError as e:
        logger.error(str(e))
        sys.exit(EXIT_RATE_LIMITED)

    except KeyboardInterrupt:
        logger.info("Upload interrupted by user")
        sys.exit(130)

    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
