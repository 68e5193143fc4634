from __future__ import annotations

import io
from pathlib import Path

import pandas as pd
from openpyxl.utils import get_column_letter

"""Example guest-list workbook ("download template").

The headers are the first spelling of each field in the normalizer's alias
table, so a filled-in template always resolves every column.
"""

__all__ = [
    "TEMPLATE_FILENAME",
    "TEMPLATE_SHEET_NAME",
    "COLUMN_WIDTHS",
    "TEMPLATE_HEADERS",
    "template_frame",
    "build_template_bytes",
    "write_template",
]

TEMPLATE_FILENAME = "plantilla_invitados.xlsx"
TEMPLATE_SHEET_NAME = "Invitados"

# Display widths in characters, one per column
COLUMN_WIDTHS = [20, 25, 18, 18, 20, 25, 10]

TEMPLATE_HEADERS: dict[str, list[str]] = {
    "es": [
        "Nombre Completo",
        "Email",
        "Teléfono",
        "Tiene Acompañante",
        "Nombre Acompañante",
        "Preferencias Alimentarias",
        "Mesa",
    ],
    "en": [
        "Full Name",
        "Email",
        "Phone",
        "Has Plus One",
        "Plus One Name",
        "Dietary Preferences",
        "Table",
    ],
}

_SAMPLE_ROWS: dict[str, list[list[str]]] = {
    "es": [
        ["Juan Pérez", "juan@ejemplo.com", "+54 11 1234 5678", "Sí", "María García", "Vegetariano", "Mesa 1"],
        ["Ana López", "ana@ejemplo.com", "+54 11 8765 4321", "No", "", "", ""],
    ],
    "en": [
        ["John Smith", "john@example.com", "+1 555 123 4567", "Yes", "Mary Jones", "Vegetarian", "Table 1"],
        ["Anna Brown", "anna@example.com", "+1 555 765 4321", "No", "", "", ""],
    ],
}


def template_frame(language: str = "es") -> pd.DataFrame:
    """Two sample guests under the headers of ``language``."""
    if language not in TEMPLATE_HEADERS:
        raise ValueError(f"unsupported template language: {language}")
    return pd.DataFrame(_SAMPLE_ROWS[language], columns=TEMPLATE_HEADERS[language])


def build_template_bytes(language: str = "es") -> bytes:
    """Serialize the template workbook to .xlsx bytes."""
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        template_frame(language).to_excel(writer, sheet_name=TEMPLATE_SHEET_NAME, index=False)
        ws = writer.sheets[TEMPLATE_SHEET_NAME]
        for idx, width in enumerate(COLUMN_WIDTHS, start=1):
            ws.column_dimensions[get_column_letter(idx)].width = width
    return buffer.getvalue()


def write_template(destination: Path, language: str = "es") -> Path:
    """Write the template; a directory destination receives TEMPLATE_FILENAME."""
    path = destination / TEMPLATE_FILENAME if destination.is_dir() else destination
    path.write_bytes(build_template_bytes(language))
    return path
