"""
Command Line Interface.

    license-bundle [--manifest-path PATH] [--package NAME] [-v] list
    license-bundle [--manifest-path PATH] [--package NAME] [-v] bundle [-o FILE]
    license-bundle [--manifest-path PATH] [--package NAME] [-v] check

Exit codes: 0 on success, 1 on any audit failure (message on stderr),
2 when `check` finds an excluded dependency.
"""

import argparse
import logging
import sys
from typing import List, Optional

from license_bundle import __version__
from license_bundle.core.config import LOG_LEVEL
from license_bundle.core.errors import IOFailure, LicenseAuditError
from license_bundle.services.audit_workflow import perform_bundle, perform_check, perform_listing_text
from license_bundle.services.licenses.compatibility import Compatibility

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INCOMPATIBLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="license-bundle",
        description="List or bundle the licenses of a package and its runtime dependencies.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--manifest-path", help="Path to the root pyproject.toml")
    parser.add_argument("--package", help="Use an installed distribution as root instead of a manifest")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("list", help="List dependencies grouped by license")

    bundle = subparsers.add_parser("bundle", help="Write a document bundling all license texts")
    bundle.add_argument("-o", "--output", help="Output file (default: stdout)")

    subparsers.add_parser("check", help="Check each dependency against the root package license")
    return parser


def _write_output(text: str, output: Optional[str]) -> None:
    """
    Writes `text` to `output`, or to stdout when no path is given.

    Raises:
        IOFailure: If the file cannot be written.
    """
    if not output:
        sys.stdout.write(text)
        return

    try:
        with open(output, "w", encoding="utf-8") as file_handle:
            file_handle.write(text)
    except OSError as e:
        raise IOFailure(f"Could not write {output}: {e}") from e
    logger.info("Wrote bundle to %s", output)


def _run_check(args: argparse.Namespace) -> int:
    result = perform_check(manifest_path=args.manifest_path, package=args.package)
    exit_code = EXIT_OK
    for issue in result.issues:
        print(f"{issue.package} ({issue.detected_license}): {issue.status.value}")
        if issue.status is Compatibility.EXCLUDED:
            exit_code = EXIT_INCOMPATIBLE
    return exit_code


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "list":
            _write_output(perform_listing_text(manifest_path=args.manifest_path, package=args.package), None)
        elif args.command == "bundle":
            result = perform_bundle(manifest_path=args.manifest_path, package=args.package)
            _write_output(result.document, args.output)
        else:
            return _run_check(args)
    except LicenseAuditError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
