from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path

import pytest

from wedding_planner.cli import main as cli_main
from wedding_planner.db.store import InMemoryRecordStore
from wedding_planner.logging.init import reset_logging

MIXED_ROWS = [
    ["Nombre Completo", "Email", "Tiene Acompañante"],
    ["Juan Pérez", "juan@ejemplo.com", "Sí"],
    ["", "sin-nombre@ejemplo.com", "No"],
    ["Ana López", "ana-at-ejemplo", ""],
    ["Luis", None, "x"],
]


@pytest.fixture(autouse=True)
def clean_logging(monkeypatch):
    # handlers bind sys.stdout at setup time; capsys swaps it per test
    reset_logging()
    monkeypatch.setenv("DISABLE_DB_CONNECT", "1")
    yield
    reset_logging()


def test_template_writes_default_file(temp_workdir: Path, capsys):
    code = cli_main(["template"])
    out = capsys.readouterr().out
    assert code == 0
    assert (temp_workdir / "plantilla_invitados.xlsx").exists()
    assert "INFO template written:" in out


def test_template_out_directory_and_language(temp_workdir: Path):
    code = cli_main(["template", "--out", str(temp_workdir / "data"), "--language", "en"])
    assert code == 0
    assert (temp_workdir / "data" / "plantilla_invitados.xlsx").exists()


def test_preview_prints_rows_and_counts(write_workbook, capsys):
    path = write_workbook("invitados.xlsx", MIXED_ROWS)
    code = cli_main(["preview", str(path)])
    out = capsys.readouterr().out
    assert code == 0
    assert "Juan Pérez" in out
    assert "name required" in out
    assert "invalid email" in out
    assert "INFO 2 valid / 2 invalid" in out


def test_preview_uses_config_locale(write_config: Path, write_workbook, capsys):
    write_config.write_text("locale: es\n", encoding="utf-8")
    path = write_workbook("invitados.xlsx", MIXED_ROWS)
    code = cli_main(["preview", str(path)])
    out = capsys.readouterr().out
    assert code == 0
    assert "nombre requerido" in out
    assert "INFO 2 válidos / 2 inválidos" in out


def test_preview_nothing_valid_exits_2(write_workbook, capsys):
    path = write_workbook("bad.xlsx", [["Name", "Email"], ["", "x@y.zz"], ["Bob", "nope"]])
    assert cli_main(["preview", str(path)]) == 2


def test_preview_unsupported_extension(temp_workdir: Path, capsys):
    path = temp_workdir / "data" / "guests.csv"
    path.write_text("Name\nAna\n", encoding="utf-8")
    code = cli_main(["preview", str(path)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR Unsupported file format. Use .xlsx or .xls" in out


def test_preview_corrupt_workbook(temp_workdir: Path, capsys):
    path = temp_workdir / "data" / "broken.xlsx"
    path.write_bytes(b"not a workbook")
    code = cli_main(["preview", str(path)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR The file could not be read as a spreadsheet" in out


def test_import_with_yes_commits_valid_rows(write_workbook, capsys):
    path = write_workbook("invitados.xlsx", MIXED_ROWS)
    code = cli_main(["import", str(path), "--wedding-id", "w1", "--yes"])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO 2 guests imported" in out
    assert "INFO wedding=w1 guests_now=2" in out
    assert "SUMMARY rows=4 valid=2 invalid=2 inserted=2 elapsed_sec=" in out


def test_import_confirmation_declined(write_workbook, monkeypatch, capsys):
    path = write_workbook("invitados.xlsx", MIXED_ROWS)
    monkeypatch.setattr("builtins.input", lambda prompt="": "n")
    code = cli_main(["import", str(path), "--wedding-id", "w1"])
    out = capsys.readouterr().out
    assert code == 2
    assert "INFO import cancelled" in out
    assert "inserted=0" in out


def test_import_confirmation_accepted(write_workbook, monkeypatch, capsys):
    path = write_workbook("invitados.xlsx", MIXED_ROWS)
    monkeypatch.setattr("builtins.input", lambda prompt="": "sí")
    assert cli_main(["import", str(path), "--wedding-id", "w1"]) == 0


def test_import_no_valid_rows_exits_2(write_workbook, capsys):
    path = write_workbook("bad.xlsx", [["Name"], [""], [" "]])
    code = cli_main(["import", str(path), "--wedding-id", "w1", "--yes"])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR There are no valid guests to import" in out


def test_import_store_failure_exits_1(write_workbook, monkeypatch, capsys):
    import wedding_planner.cli.__main__ as cli_mod

    failing = InMemoryRecordStore({"weddings": [{"id": "w1"}]})
    failing.fail_inserts = True

    @contextmanager
    def fake_store(cfg, wedding_id):
        yield failing

    monkeypatch.setattr(cli_mod, "_record_store", fake_store)
    path = write_workbook("invitados.xlsx", MIXED_ROWS)
    code = cli_main(["import", str(path), "--wedding-id", "w1", "--yes"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR The guests could not be imported" in out
    assert failing.collections["guests"] == []


def test_import_unsupported_extension_exits_1(temp_workdir: Path, capsys):
    path = temp_workdir / "data" / "guests.ods"
    path.write_bytes(b"")
    assert cli_main(["import", str(path), "--wedding-id", "w1", "--yes"]) == 1


def test_import_missing_file_exits_1(temp_workdir: Path, capsys):
    code = cli_main(["import", str(temp_workdir / "data" / "missing.xlsx"), "--wedding-id", "w1", "--yes"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR cannot read" in out


def test_invalid_config_is_fatal(write_config: Path, write_workbook, capsys):
    write_config.write_text("locale: fr\n", encoding="utf-8")
    path = write_workbook("invitados.xlsx", MIXED_ROWS)
    code = cli_main(["preview", str(path)])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config validation failed" in out


def test_explicit_missing_config_is_fatal(temp_workdir: Path, capsys):
    code = cli_main(["--config", str(temp_workdir / "config" / "nope.yml"), "template"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config file not found" in out


def test_debug_flag_enables_debug_lines(write_workbook, capsys):
    path = write_workbook("invitados.xlsx", MIXED_ROWS)
    cli_main(["--debug", "preview", str(path)])
    out = capsys.readouterr().out
    assert "DEBUG debug mode enabled" in out


def test_build_dsn_prefers_environment(monkeypatch):
    from wedding_planner.cli.__main__ import _build_dsn
    from wedding_planner.config.loader import AppConfig, DatabaseConfig

    cfg = AppConfig(database=DatabaseConfig(host="cfg-host", user="cfg-user", database="cfgdb"))
    for var in ("DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE"):
        monkeypatch.delenv(var, raising=False)
    assert _build_dsn(cfg) == "host=cfg-host port=5432 user=cfg-user dbname=cfgdb"

    monkeypatch.setenv("PGHOST", "env-host")
    monkeypatch.setenv("PGPASSWORD", "pw")
    assert _build_dsn(cfg) == "host=env-host port=5432 user=cfg-user dbname=cfgdb password=pw"

    monkeypatch.setenv("DATABASE_URL", "postgresql://u@h/db")
    assert _build_dsn(cfg) == "postgresql://u@h/db"
