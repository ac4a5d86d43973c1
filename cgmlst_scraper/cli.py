"""
Command-line interface for cgmlst_scraper.

Usage:
    cgmlst-scraper                              list all schemes
    cgmlst-scraper -f last_change -i Abaumannii show version and last change
    cgmlst-scraper -f download -i Abaumannii    download and unpack the alleles
"""

import sys
import logging
import argparse
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from cgmlst_scraper import __version__
from cgmlst_scraper.archive import STATUS_EXISTS, fetch_and_extract
from cgmlst_scraper.detail import fetch_detail
from cgmlst_scraper.downloader import DEFAULT_TIMEOUT, set_default_user_agent
from cgmlst_scraper.errors import CgmlstError, InvalidFunctionArgument, UnknownSchemeId
from cgmlst_scraper.registry import SchemeSummary, find_scheme, list_schemes
from cgmlst_scraper.report import format_last_change, format_scheme_listing
from cgmlst_scraper.version import resolve_version

FUNCTION_LAST_CHANGE = 'last_change'
FUNCTION_DOWNLOAD = 'download'
FUNCTIONS = (FUNCTION_LAST_CHANGE, FUNCTION_DOWNLOAD)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2


@dataclass(frozen=True)
class Command:
    """Everything a run needs, built once from the parsed arguments."""

    function: Optional[str] = None
    scheme_id: Optional[str] = None
    output_dir: str = '.'
    timeout: int = DEFAULT_TIMEOUT
    show_progress: bool = False


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog='cgmlst-scraper',
        description='List cgMLST.org schemes, show when a scheme last changed, '
                    'or download and unpack its alleles.',
    )
    parser.add_argument(
        '-f', '--function',
        metavar='FUNCTION',
        help="Function to perform: 'download' to download the scheme given with -i, "
             "or 'last_change' to show its version and time of the last change.",
    )
    parser.add_argument(
        '-i', '--id',
        dest='scheme_id',
        metavar='SCHEME_ID',
        help='Scheme ID on which to perform the function.',
    )
    parser.add_argument(
        '-o', '--output-dir',
        default='.',
        help='Directory receiving downloaded archives (default: current directory).',
    )
    parser.add_argument(
        '--timeout',
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f'Request timeout in seconds (default: {DEFAULT_TIMEOUT}).',
    )
    parser.add_argument(
        '--user-agent',
        help='Custom User-Agent string for HTTP requests.',
    )
    parser.add_argument(
        '--progress',
        action='store_true',
        help='Show a progress bar while downloading.',
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only log errors.')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging for command-line use."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format='%(levelname)s: %(message)s', force=True)


def build_command(args: argparse.Namespace) -> Command:
    return Command(
        function=args.function,
        scheme_id=args.scheme_id,
        output_dir=args.output_dir,
        timeout=args.timeout,
        show_progress=args.progress,
    )


def validate_function(function: str) -> str:
    """
    Raises:
        InvalidFunctionArgument: If function is not one of FUNCTIONS.
    """
    if function not in FUNCTIONS:
        raise InvalidFunctionArgument(function, FUNCTIONS)
    return function


def print_listing(schemes: List[SchemeSummary]) -> None:
    print(format_scheme_listing(schemes))


def show_last_change(command: Command) -> int:
    detail = fetch_detail(command.scheme_id, timeout=command.timeout)
    print(format_last_change(resolve_version(detail)))
    return EXIT_OK


def download_scheme(command: Command) -> int:
    detail = fetch_detail(command.scheme_id, timeout=command.timeout)
    version_info = resolve_version(detail)
    result = fetch_and_extract(
        command.scheme_id,
        version_info,
        output_dir=command.output_dir,
        timeout=command.timeout,
        show_progress=command.show_progress,
    )
    destination = result.destination
    if result.status == STATUS_EXISTS:
        existing = destination.zip_path if destination.zip_exists else destination.directory
        print(f"{existing} exists. Downloading aborted.")
    else:
        print(f"Downloaded {destination.zip_path}")
        print(f"Unzipped {len(result.files)} files into {destination.directory}")
    return EXIT_OK


def run(command: Command) -> int:
    """Dispatch a Command and return the process exit code."""
    if command.function is None and command.scheme_id is None:
        print(f"\nCurrent date and time: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print("\nPrinting available cgMLST.org schemes with their IDs:\n")
        print_listing(list_schemes(timeout=command.timeout))
        return EXIT_OK

    if command.function is None:
        print("\nPlease provide the function you want to perform using argument -f.")
        return EXIT_USAGE
    if command.scheme_id is None:
        print("\nPlease provide a scheme ID using argument -i.")
        return EXIT_USAGE

    try:
        validate_function(command.function)
    except InvalidFunctionArgument as e:
        choices = ', '.join(f'"-f {choice}"' for choice in e.choices)
        print(f"\nInvalid entry for -f. Please specify {choices}.")
        return EXIT_USAGE

    schemes = list_schemes(timeout=command.timeout)
    try:
        find_scheme(schemes, command.scheme_id)
    except UnknownSchemeId:
        print("\nInvalid entry for -i. Please specify one of the existing scheme IDs.")
        print("\nAvailable schemes and their IDs are:\n")
        print_listing(schemes)
        return EXIT_ERROR

    if command.function == FUNCTION_LAST_CHANGE:
        return show_last_change(command)
    return download_scheme(command)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.user_agent:
        set_default_user_agent(args.user_agent)

    command = build_command(args)
    try:
        return run(command)
    except CgmlstError as e:
        logging.debug("Run failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == '__main__':
    sys.exit(main())
