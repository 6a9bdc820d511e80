from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from inventory_consolidator.config.loader import ConfigError, load_config
from inventory_consolidator.logging.error_log import ErrorLogBuffer
from inventory_consolidator.logging.init import log_summary, set_debug, setup_logging, use_stream
from inventory_consolidator.models.items import ColumnMapping
from inventory_consolidator.services.exporter import render_table, to_csv, to_tsv, write_export
from inventory_consolidator.services.orchestrator import RUN_ERRORS, ConsolidationSession, ProcessingError
from inventory_consolidator.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env and the optional YAML config
- Decode the source file (or pasted text from stdin when SOURCE is "-")
- Build the column mapping from flags, guessing the roles left out
- Normalize + aggregate, then print the table or write CSV/TSV exports
- Emit one SUMMARY line
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

STDOUT = "-"


def _load_env_file(path: Path) -> None:
    """Load .env using python-dotenv without overriding existing variables."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=False)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="inventory-consolidate",
        description="Deduplicate an inventory list and sum quantities per item",
    )
    p.add_argument("source", help="Excel/CSV/TXT file, or '-' to read pasted text from stdin")
    p.add_argument("--description", metavar="COL", help="Header of the description column")
    p.add_argument("--quantity", metavar="COL", help="Header of the quantity column")
    p.add_argument("--unit", metavar="COL", help="Header of the unit column, or 'none'")
    p.add_argument(
        "--csv", nargs="?", const="", default=None, metavar="PATH",
        help="Write the CSV export (default name from config)",
    )
    p.add_argument(
        "--tsv", nargs="?", const=STDOUT, default=None, metavar="PATH",
        help="Write tab-separated text for spreadsheet paste ('-' = stdout)",
    )
    p.add_argument("--config", type=Path, help="Path to YAML config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers, guessed mapping & first rows then exit")
    return p.parse_args(argv)


def _inspect_data(session: ConsolidationSession) -> int:
    sheet = session.sheet
    if sheet is None:
        raise ProcessingError("no sheet loaded")
    guessed = session.suggested_mapping()
    print(f"FILE: {sheet.file_name}")
    print(f"  columns={sheet.headers}")
    print(
        f"  guessed description={guessed.description_col!r} "
        f"quantity={guessed.quantity_col!r} unit={guessed.unit_col!r}"
    )
    print("  sample_rows=", sheet.rows[:3])
    return EXIT_SUCCESS


def _mapping_from_args(args: argparse.Namespace, session: ConsolidationSession) -> ColumnMapping:
    guessed = session.suggested_mapping()
    return ColumnMapping(
        description_col=args.description or guessed.description_col,
        quantity_col=args.quantity or guessed.quantity_col,
        unit_col=args.unit or guessed.unit_col,
    )


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if args.tsv == STDOUT:
        # stdout はクリップボード用 TSV 専用にする
        use_stream(sys.stderr)
    _load_env_file(Path(".env"))

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(True)
        logger.debug("debug mode enabled")

    error_log = ErrorLogBuffer(Path(cfg.logs_directory))
    session = ConsolidationSession(error_log=error_log, column_hints=cfg.column_hints)

    try:
        if args.source == STDOUT:
            session.load_text(sys.stdin.read())
        else:
            session.load_file(Path(args.source))

        if args.inspect_data:
            return _inspect_data(session)

        mapping = _mapping_from_args(args, session)
        logger.info(
            f"mapping description={mapping.description_col} "
            f"quantity={mapping.quantity_col} unit={mapping.unit_col}"
        )
        result = session.apply_mapping(mapping)
    except RUN_ERRORS as e:
        logger.error(str(e))
        log_path = error_log.flush()
        if log_path is not None:
            logger.debug(f"error log: {log_path}")
        return EXIT_FATAL

    logger.info(f"Found {result.unique_count} unique items from {result.validated_count} rows")

    if args.csv is not None:
        csv_path = Path(args.csv) if args.csv else Path(cfg.export_directory) / cfg.csv_file_name
        write_export(to_csv(result.items), csv_path)
    if args.tsv is not None:
        tsv_text = to_tsv(result.items)
        if args.tsv == STDOUT:
            sys.stdout.write(tsv_text)
            sys.stdout.flush()
        else:
            write_export(tsv_text, Path(args.tsv))
    if args.csv is None and args.tsv is None:
        print(render_table(result.items))

    summary_line = render_summary_line(result)
    # log_summary adds the "SUMMARY " prefix
    log_summary(summary_line[len("SUMMARY "):])
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
