from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from reliefsync.adapters.audit import SqlAlchemyAuditSink
from reliefsync.adapters.schema import ImportResultPayload
from reliefsync.app import export_csv, import_csv, template_csv
from reliefsync.common import configure_logging
from reliefsync.config import ConfigurationError, get_cli_actor
from reliefsync.domain.errors import ReliefSyncError
from reliefsync.domain.model import ResourceFamily

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

FAMILY_CHOICES = [family.value for family in ResourceFamily]


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Import and export relief records as CSV")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log row-level details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    export = subparsers.add_parser("export", help="Export records of a family to CSV")
    export.add_argument("family", choices=FAMILY_CHOICES)
    export.add_argument(
        "--trash",
        action="store_true",
        help="Export deleted records instead of active ones",
    )
    export.add_argument(
        "--output",
        type=Path,
        help="File to write (defaults to stdout)",
    )

    importer = subparsers.add_parser("import", help="Import a CSV file")
    importer.add_argument("family", choices=FAMILY_CHOICES)
    importer.add_argument("path", type=Path, help="CSV file to import")
    importer.add_argument(
        "--trash",
        action="store_true",
        help="Apply rows as trash (soft-delete) transitions",
    )
    duplicates = importer.add_mutually_exclusive_group()
    duplicates.add_argument(
        "--skip-duplicates",
        dest="skip_duplicates",
        action="store_true",
        default=None,
        help="Skip rows matching an existing record (default from config)",
    )
    duplicates.add_argument(
        "--no-skip-duplicates",
        dest="skip_duplicates",
        action="store_false",
        help="Insert rows even when they match an existing record",
    )

    template = subparsers.add_parser("template", help="Write an import template")
    template.add_argument("family", choices=FAMILY_CHOICES)
    template.add_argument(
        "--output",
        type=Path,
        help="File to write (defaults to stdout)",
    )

    return parser.parse_args(list(argv))


def _write(text: str, output: Path | None) -> None:
    if output is None:
        sys.stdout.write(text)
        return
    output.write_text(text, encoding="utf-8")
    log.info("Wrote %s", output)


def _read_csv(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        # Spreadsheet exports in legacy encodings; BOM remnants are stripped later.
        log.warning(
            "%s is not valid UTF-8 (%s); reading it as latin-1, headers may not match",
            path,
            exc.reason,
        )
        return path.read_text(encoding="latin-1")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        actor = get_cli_actor()
        if parsed_args.command == "export":
            document = export_csv(
                parsed_args.family,
                actor=actor,
                trash=parsed_args.trash,
                audit_sink=SqlAlchemyAuditSink(),
            )
            _write(document.text, parsed_args.output)
        elif parsed_args.command == "import":
            result = import_csv(
                parsed_args.family,
                _read_csv(parsed_args.path),
                actor=actor,
                skip_duplicates=parsed_args.skip_duplicates,
                trash=parsed_args.trash,
                audit_sink=SqlAlchemyAuditSink(),
            )
            payload = ImportResultPayload.from_result(result).to_json()
            sys.stdout.write(json.dumps(payload, ensure_ascii=False, indent=2) + "\n")
        elif parsed_args.command == "template":
            _write(template_csv(parsed_args.family, actor=actor), parsed_args.output)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except (ReliefSyncError, ConfigurationError, OSError) as exc:
        log.error("%s", exc)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
