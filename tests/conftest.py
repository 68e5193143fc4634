# Shared pytest fixtures
from __future__ import annotations
import io
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from wedding_planner.db.store import InMemoryRecordStore
from wedding_planner.services.notifications import RecordingNotifier

WEDDING_ID = "wedding-1"


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """locale: en
page_size: 500
template:
  filename: plantilla_invitados.xlsx
  language: es
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "wedding_planner.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def make_workbook_bytes(rows: list[list[object]], sheet_name: str = "Invitados", extra_sheets: dict | None = None) -> bytes:
    """Build an .xlsx in memory; ``rows[0]`` is the header row."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
        for name, extra in (extra_sheets or {}).items():
            pd.DataFrame(extra).to_excel(writer, sheet_name=name, header=False, index=False)
    return buffer.getvalue()


@pytest.fixture()
def workbook_bytes():
    return make_workbook_bytes


@pytest.fixture()
def write_workbook(temp_workdir: Path):
    def _write(name: str, rows: list[list[object]]) -> Path:
        p = temp_workdir / "data" / name
        p.write_bytes(make_workbook_bytes(rows))
        return p
    return _write


@pytest.fixture()
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore({"weddings": [{"id": WEDDING_ID, "partner_name_1": "Ana", "partner_name_2": "Luis"}]})


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
