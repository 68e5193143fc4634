from __future__ import annotations

import argparse
import os
import sys
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

import psycopg2
from dotenv import load_dotenv

from wedding_planner.config.loader import DEFAULT_CONFIG_PATH, AppConfig, ConfigError, load_config
from wedding_planner.db.store import InMemoryRecordStore, PostgresRecordStore, RecordStore, StoreError
from wedding_planner.excel.reader import ParseError, UnsupportedFormatError, ensure_supported_format
from wedding_planner.excel.template import write_template
from wedding_planner.i18n.messages import translator_for
from wedding_planner.logging.init import enable_debug, log_summary, setup_logging
from wedding_planner.models.session_state import Preview
from wedding_planner.services.app_state import WeddingState
from wedding_planner.services.notifications import LogNotifier
from wedding_planner.services.pipeline import parse_guest_file
from wedding_planner.services.preview import preview_frame, summarize
from wedding_planner.services.session import ImportSession
from wedding_planner.services.summary import build_import_result, render_summary_body

"""CLI host for the guest import.

Commands:
- template: write the example workbook
- preview FILE: decode + validate and print the review table
- import FILE --wedding-id ID: preview, confirm, commit and refresh
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NOTHING_IMPORTED = 2


def _build_dsn(cfg: AppConfig) -> str:
    """Resolve connection settings.

    Priority: DATABASE_URL / PGDSN, then PG* variables, then the config file.
    """
    db_cfg = cfg.database
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


@contextmanager
def _record_store(cfg: AppConfig, wedding_id: str):
    """Yield a RecordStore; in-memory when DISABLE_DB_CONNECT=1.

    The mock store is seeded with the requested wedding so the post-import
    refresh has a tenant to load.
    """
    logger = setup_logging()
    if os.getenv("DISABLE_DB_CONNECT") == "1":
        logger.debug("DB connect disabled via DISABLE_DB_CONNECT=1 -> mock mode")
        yield InMemoryRecordStore({"weddings": [{"id": wedding_id}]})
        return

    conn = psycopg2.connect(_build_dsn(cfg))
    # The store issues BEGIN/COMMIT itself around each batch
    conn.autocommit = True
    cur = conn.cursor()
    try:
        yield PostgresRecordStore(cur, page_size=cfg.page_size)
    finally:
        cur.close()
        conn.close()


def _load_env_file(path: Path, override: bool = True) -> None:
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="wedding-planner", description="Wedding planner guest import")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    sub = p.add_subparsers(dest="command", required=True)

    tpl = sub.add_parser("template", help="Write the example guest workbook")
    tpl.add_argument("--out", type=Path, default=None, help="Target file or directory")
    tpl.add_argument("--language", choices=["es", "en"], default=None, help="Header language")

    prev = sub.add_parser("preview", help="Validate a guest workbook and print the preview")
    prev.add_argument("file", type=Path)

    imp = sub.add_parser("import", help="Import the valid guests of a workbook")
    imp.add_argument("file", type=Path)
    imp.add_argument("--wedding-id", required=True, help="Wedding (tenant) identifier")
    imp.add_argument("--yes", action="store_true", help="Do not ask for confirmation")
    return p.parse_args(argv)


def _resolve_config(path: Path | None) -> AppConfig:
    if path is None and not DEFAULT_CONFIG_PATH.exists():
        return AppConfig()
    return load_config(path or DEFAULT_CONFIG_PATH)


def _print_preview(guests, lang: str) -> None:
    frame = preview_frame(guests, translator_for(lang))
    if frame.empty:
        print("(no rows)")
    else:
        print(frame.to_string(index=False))


def _cmd_template(args: argparse.Namespace, cfg: AppConfig) -> int:
    logger = setup_logging()
    out = args.out or Path(cfg.template.filename)
    language = args.language or cfg.template.language
    path = write_template(out, language)
    logger.info(f"template written: {path}")
    return EXIT_SUCCESS


def _cmd_preview(args: argparse.Namespace, cfg: AppConfig) -> int:
    logger = setup_logging()
    _t = translator_for(cfg.locale)
    path: Path = args.file
    try:
        ensure_supported_format(path.name)
        guests = parse_guest_file(path.read_bytes(), _t)
    except UnsupportedFormatError:
        logger.error(_t("guests.import.errors.invalidFormat"))
        return EXIT_FATAL
    except (ParseError, OSError) as e:
        logger.debug(f"preview failed: {e}")
        logger.error(_t("guests.import.errors.parseError"))
        return EXIT_FATAL

    _print_preview(guests, cfg.locale)
    counts = summarize(guests)
    logger.info(
        f"{counts.valid_count} {_t('guests.import.valid')} / {counts.invalid_count} {_t('guests.import.invalid')}"
    )
    return EXIT_SUCCESS if counts.valid_count else EXIT_NOTHING_IMPORTED


def _confirm(count: int) -> bool:
    try:
        answer = input(f"Import {count} guests? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes", "s", "si", "sí"}


def _cmd_import(args: argparse.Namespace, cfg: AppConfig, store: RecordStore) -> int:
    logger = setup_logging()
    start = datetime.now(UTC)
    state = WeddingState(store, args.wedding_id)

    def _refresh() -> None:
        try:
            state.refresh()
        except StoreError as e:
            logger.warning(f"refresh after import failed: {e}")

    session = ImportSession(
        args.wedding_id,
        store,
        LogNotifier(logger),
        on_import_complete=_refresh,
        lang=cfg.locale,
    )
    path: Path = args.file
    try:
        session.select_path(path)
    except OSError as e:
        logger.error(f"cannot read {path}: {e}")
        return EXIT_FATAL
    if not isinstance(session.state, Preview):
        return EXIT_FATAL

    guests = session.guests
    _print_preview(guests, cfg.locale)

    inserted = 0
    if session.valid_count and not args.yes and not _confirm(session.valid_count):
        logger.info("import cancelled")
        session.close()
    else:
        inserted = session.commit()

    result = build_import_result(guests, inserted, start, datetime.now(UTC))
    if inserted:
        logger.info(f"wedding={args.wedding_id} guests_now={len(state.guests)}")
    log_summary(render_summary_body(result))

    if inserted:
        return EXIT_SUCCESS
    if isinstance(session.state, Preview) and session.valid_count:
        # Store failure: preview kept, nothing written
        return EXIT_FATAL
    return EXIT_NOTHING_IMPORTED


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an empty list from tests must not pick up pytest's argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        enable_debug()
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.command == "template":
        return _cmd_template(args, cfg)
    if args.command == "preview":
        return _cmd_preview(args, cfg)

    try:
        with _record_store(cfg, args.wedding_id) as store:
            return _cmd_import(args, cfg, store)
    except psycopg2.Error as e:
        logger.error(f"database connection failed: {e}")
        return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
