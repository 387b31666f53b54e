"""
Emergency-Mind Command Line Interface

Thin wrapper around DocumentService: parses arguments, configures the log
sink, runs one subcommand, prints the result, and returns an exit code.

Usage:
    emergency-mind services
    emergency-mind services emergency
    emergency-mind generate --specialty emergency --service final-report \\
        --note "Patient presents with chest pain" --note "BP 140/90" --save
    emergency-mind history --specialty emergency --search chest
    emergency-mind show <report-id>
    emergency-mind delete <report-id>
    emergency-mind clear
    emergency-mind stats

Exit Codes:
    0 → success
    1 → report not found
    2 → rejected input or invalid configuration
    3 → storage rejected the write

Author: Emergency-Mind Team
Date: October 2026
"""

import argparse
import json
import sys
from typing import List, Optional

from loguru import logger

from emergency_mind.core.config import ServiceConfiguration
from emergency_mind.core.enums import StorageBackend
from emergency_mind.core.exceptions import (
    ConfigurationError,
    PersistenceError,
    ValidationError,
)
from emergency_mind.core.models import Report
from emergency_mind.service import DocumentService

EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_INVALID = 2
EXIT_PERSISTENCE = 3


# =============================================================================
# STAGE 1: ARGUMENT PARSER
# =============================================================================


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Step 1: Global options (env file, log level, storage directory)
    Step 2: One subparser per command

    Example:
        >>> parser = create_argument_parser()
        >>> args = parser.parse_args(["show", "5f0c"])
    """
    # Step 1: Global options
    parser = argparse.ArgumentParser(
        prog="emergency-mind",
        description="Generate and manage medico-legal documents from clinical bullet notes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  List services for a specialty:
    emergency-mind services emergency

  Generate and save a final report:
    emergency-mind generate --specialty emergency --service final-report \\
        --note "Patient presents with chest pain" --note "BP 140/90" --save

  Search saved reports:
    emergency-mind --storage-dir ./reports history --search chest
        """,
    )
    parser.add_argument("--env-file", default=None, help="Path to .env file")
    parser.add_argument(
        "--log-level", default=None, help="Log level override (DEBUG, INFO, WARNING, ...)"
    )
    parser.add_argument(
        "--storage-dir",
        default=None,
        help="Store reports as JSON files in this directory (implies file backend)",
    )

    # Step 2: Subcommands
    subparsers = parser.add_subparsers(dest="command", required=True)

    services = subparsers.add_parser("services", help="List specialties or a specialty's services")
    services.add_argument("specialty", nargs="?", default=None)

    generate = subparsers.add_parser("generate", help="Generate a document")
    generate.add_argument("--specialty", required=True)
    generate.add_argument("--service", required=True, help="Service code, e.g. final-report")
    generate.add_argument(
        "--note", dest="notes", action="append", default=[], help="One bullet (repeatable)"
    )
    generate.add_argument("--save", action="store_true", help="Save the document to history")
    generate.add_argument("--json", action="store_true", help="Print the transport payload")

    history = subparsers.add_parser("history", help="List saved reports, newest first")
    history.add_argument("--specialty", default=None)
    history.add_argument("--service", default=None)
    history.add_argument("--search", default=None, help="Case-insensitive search term")

    show = subparsers.add_parser("show", help="Print one saved report")
    show.add_argument("report_id")
    show.add_argument("--json", action="store_true", help="Print the stored record")

    delete = subparsers.add_parser("delete", help="Delete one saved report")
    delete.add_argument("report_id")

    subparsers.add_parser("clear", help="Delete every saved report")
    subparsers.add_parser("stats", help="Show storage usage")

    return parser


def configure_logging(level: str) -> None:
    """Send loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level)


def build_service(args: argparse.Namespace) -> DocumentService:
    """Load configuration, apply CLI overrides, and build the service."""
    config = ServiceConfiguration.from_environment(env_file=args.env_file, validate_on_load=False)
    if args.storage_dir:
        config.storage_backend = StorageBackend.FILE
        config.storage_directory = args.storage_dir
    if args.log_level:
        config.log_level = args.log_level.upper()
    config.validate()

    configure_logging(config.log_level)
    return DocumentService(config)


# =============================================================================
# STAGE 2: COMMAND HANDLERS
# =============================================================================


def _print_report_line(report: Report, service: DocumentService) -> None:
    print(
        f"{report.id}  {report.timestamp}  {report.specialty:<18} "
        f"{service.catalog.display_name(report.service):<24} {report.note_count} notes"
    )


def cmd_services(args: argparse.Namespace, service: DocumentService) -> int:
    catalog = service.catalog
    allowed = set(service.validator.allowed_services)

    if args.specialty is None:
        for specialty in catalog.specialties():
            info = catalog.specialty_info(specialty)
            print(f"{specialty:<18} {info['name']}")
        return EXIT_OK

    codes = catalog.services_for(args.specialty)
    if not codes:
        print(f"No services for specialty: {args.specialty}")
        return EXIT_OK

    for code in codes:
        marker = "" if code in allowed else "  (unavailable)"
        print(f"{code:<20} {catalog.display_name(code):<24} {catalog.description(code)}{marker}")
    return EXIT_OK


def cmd_generate(args: argparse.Namespace, service: DocumentService) -> int:
    if args.save:
        report = service.generate_and_save(args.specialty, args.service, args.notes)
        if args.json:
            print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        else:
            print(report.result)
            print()
            print(f"Saved report {report.id}")
        return EXIT_OK

    document = service.generate(args.specialty, args.service, args.notes)
    if args.json:
        print(json.dumps(document.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(document.text)
    return EXIT_OK


def cmd_history(args: argparse.Namespace, service: DocumentService) -> int:
    reports = service.store.filter(
        specialty=args.specialty,
        service=args.service,
        term=args.search,
        catalog=service.catalog,
        newest_first=True,
    )
    if not reports:
        print("No reports found")
        return EXIT_OK

    for report in reports:
        _print_report_line(report, service)
    print(f"\n{len(reports)} report(s)")
    return EXIT_OK


def cmd_show(args: argparse.Namespace, service: DocumentService) -> int:
    report = service.store.get_by_id(args.report_id)
    if report is None:
        print(f"Report not found: {args.report_id}", file=sys.stderr)
        return EXIT_NOT_FOUND

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
        return EXIT_OK

    print(f"ID:        {report.id}")
    print(f"Specialty: {service.catalog.specialty_info(report.specialty)['name']}")
    print(f"Service:   {service.catalog.display_name(report.service)}")
    print(f"Saved:     {report.timestamp}")
    print("Notes:")
    for note in report.notes:
        print(f"  - {note}")
    print()
    print(report.result)
    return EXIT_OK


def cmd_delete(args: argparse.Namespace, service: DocumentService) -> int:
    if not service.store.delete_by_id(args.report_id):
        print(f"Report not found: {args.report_id}", file=sys.stderr)
        return EXIT_NOT_FOUND
    print(f"Deleted report {args.report_id}")
    return EXIT_OK


def cmd_clear(args: argparse.Namespace, service: DocumentService) -> int:
    count = len(service.store.get_all())
    service.store.clear_all()
    print(f"Cleared {count} report(s)")
    return EXIT_OK


def cmd_stats(args: argparse.Namespace, service: DocumentService) -> int:
    stats = service.store.usage_stats()
    print(f"Reports:     {stats.count}")
    print(f"Size:        {stats.approximate_size_bytes:,} bytes")
    specialties = service.store.distinct_specialties()
    if specialties:
        print(f"Specialties: {', '.join(specialties)}")
    return EXIT_OK


COMMANDS = {
    "services": cmd_services,
    "generate": cmd_generate,
    "history": cmd_history,
    "show": cmd_show,
    "delete": cmd_delete,
    "clear": cmd_clear,
    "stats": cmd_stats,
}


# =============================================================================
# STAGE 3: ENTRY POINT
# =============================================================================


def main(argv: Optional[List[str]] = None, service: Optional[DocumentService] = None) -> int:
    """
    Run one CLI command.

    Step 1: Parse arguments
    Step 2: Build the service (unless one is injected)
    Step 3: Dispatch to the command handler
    Step 4: Map domain errors to exit codes

    Args:
        argv: Arguments (defaults to sys.argv[1:])
        service: Pre-built service (for testing)

    Returns:
        Process exit code
    """
    # Step 1: Parse arguments
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        # Step 2: Build service
        if service is None:
            service = build_service(args)

        # Step 3: Dispatch
        return COMMANDS[args.command](args, service)

    # Step 4: Map errors
    except ValidationError as error:
        print(f"Error: {error.message}", file=sys.stderr)
        return EXIT_INVALID

    except ConfigurationError as error:
        logger.error(f"Invalid configuration: {error}")
        return EXIT_INVALID

    except PersistenceError as error:
        logger.error(f"Storage error: {error}")
        print(f"Error: {error.message}", file=sys.stderr)
        return EXIT_PERSISTENCE


if __name__ == "__main__":
    sys.exit(main())
