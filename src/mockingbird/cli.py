"""
MockingBird CLI

Command-line interface for inspecting mock bundles.

Commands:
    validate    - Load a bundle and report problems
    show        - Print the entries of a bundle as JSON
    match       - Show which entry and response a request would get

Examples:
    # Check a bundle before committing it
    mockingbird validate tests/bundles/httpbin

    # Dry-run a request against a bundle
    mockingbird match tests/bundles/httpbin "http://httpbin.org/get?arg1=test"

    # Same, claiming unmatched requests with a 501
    mockingbird match tests/bundles/httpbin http://httpbin.org/html --handle-all
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .bundle import BundleError, load_bundle
from .mock import (
    InterceptionController,
    RequestDescriptor,
    RequestMatcher,
    mock_bundle
)
from .adapters import ResponseCollector


def cmd_validate(args) -> int:
    """
    Validate a bundle.

    Args:
        args: Parsed command-line arguments
    """
    try:
        bundle = load_bundle(args.bundle)
    except BundleError as e:
        print(f"❌ {type(e).__name__}: {e}")
        return 1

    print(f"✅ {bundle.base_path}: {len(bundle)} entries")
    for entry in bundle:
        if entry.response_file is None:
            continue
        if not os.access(os.path.join(bundle.base_path, entry.response_file), os.R_OK):
            print(f"⚠️  {entry.method} {entry.url}: response file {entry.response_file} not readable")
    return 0


def cmd_show(args) -> int:
    """Print bundle entries in manifest form."""
    try:
        bundle = load_bundle(args.bundle)
    except BundleError as e:
        print(f"❌ {type(e).__name__}: {e}")
        return 1

    print(json.dumps(bundle.to_list(), indent=2))
    return 0


def cmd_match(args) -> int:
    """
    Dry-run a request against a bundle.

    Args:
        args: Parsed command-line arguments
    """
    request = RequestDescriptor(url=args.url, method=args.method)

    try:
        with mock_bundle(args.bundle, handle_all_requests=args.handle_all) as bundle:
            result = RequestMatcher(bundle).find_match(request.method, request.url)
            print(f"Match: {result.reason}")

            if not InterceptionController.can_intercept(request):
                print("Not intercepted: request would go to the network")
                return 2

            collector = ResponseCollector()
            InterceptionController(request, collector).start()
    except BundleError as e:
        print(f"❌ {type(e).__name__}: {e}")
        return 1

    if collector.error is not None:
        print(f"❌ {collector.error}")
        return 2

    response = collector.response
    print(f"Status: {response.status_code}")
    for name, value in response.headers.items():
        print(f"  {name}: {value}")
    print(f"Body: {len(collector.body)} bytes")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='mockingbird',
        description='Inspect and dry-run MockingBird mock bundles',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # --- VALIDATE command ---
    validate_parser = subparsers.add_parser('validate', help='Validate a mock bundle')
    validate_parser.add_argument('bundle', help='Bundle directory containing bundle.json')

    # --- SHOW command ---
    show_parser = subparsers.add_parser('show', help='Print bundle entries as JSON')
    show_parser.add_argument('bundle', help='Bundle directory containing bundle.json')

    # --- MATCH command ---
    match_parser = subparsers.add_parser('match', help='Show the response a request would get')
    match_parser.add_argument('bundle', help='Bundle directory containing bundle.json')
    match_parser.add_argument('url', help='Absolute request URL including query string')
    match_parser.add_argument('-X', '--method', default='GET', help='HTTP method (default: GET)')
    match_parser.add_argument('--handle-all', action='store_true',
                              help='Answer unmatched requests with 501 instead of passing through')

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    # Dispatch to command handler
    if args.command == 'validate':
        return cmd_validate(args)
    elif args.command == 'show':
        return cmd_show(args)
    elif args.command == 'match':
        return cmd_match(args)

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
