from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from ..excel.reader import is_missing
from ..i18n.messages import DEFAULT_LANG, Translator, translator_for
from ..models.parsed_guest import ParsedGuest, RawRow

"""Field normalization and row validation for imported guests.

Users author headers in Spanish or English with varying spelling. Each logical
field has an ordered alias list (Spanish first, then English, then lowercase
variants); the first alias whose cell is not missing wins. Lookup is exact and
case-sensitive.

Validation collects every error of a row rather than stopping at the first.
"""

__all__ = [
    "HEADER_ALIASES",
    "TRUTHY_TOKENS",
    "EMAIL_PATTERN",
    "resolve_field",
    "cell_to_text",
    "coerce_plus_one",
    "validate_row",
    "validate_rows",
]

HEADER_ALIASES: dict[str, tuple[str, ...]] = {
    "full_name": ("Nombre Completo", "Nombre", "Name", "Full Name", "nombre"),
    "email": ("Email", "email", "Correo", "correo"),
    "phone": ("Teléfono", "Telefono", "Phone", "Tel", "telefono"),
    "plus_one": ("Tiene Acompañante", "Acompañante", "Plus One", "Has Plus One", "acompañante"),
    "plus_one_name": ("Nombre Acompañante", "Nombre del Acompañante", "Plus One Name"),
    "dietary_preferences": (
        "Preferencias Alimentarias",
        "Dieta",
        "Dietary",
        "Dietary Preferences",
        "preferencias",
    ),
    "table_assignment": ("Mesa", "Table", "mesa"),
}

TRUTHY_TOKENS = frozenset({"sí", "si", "yes", "true", "1", "x"})

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def resolve_field(row: Mapping[str, Any], field: str) -> Any:
    """Value of the first alias of ``field`` present in ``row``, else ""."""
    for header in HEADER_ALIASES[field]:
        value = row.get(header)
        if not is_missing(value):
            return value
    return ""


def cell_to_text(value: Any) -> str:
    """Stringify a cell; integral floats lose their ".0" (1.0 -> "1")."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_plus_one(value: Any) -> bool:
    return cell_to_text(value).lower().strip() in TRUTHY_TOKENS


def _optional_text(value: Any) -> str | None:
    text = cell_to_text(value).strip()
    return text or None


def validate_row(row: RawRow, translate: Translator | None = None) -> ParsedGuest:
    """Normalize and validate one raw row.

    Rules, all applied:
      1. full_name trims to "" -> name required
      2. non-empty email not matching EMAIL_PATTERN -> invalid email

    The email pattern is tested on the untrimmed text, so surrounding spaces
    make an address invalid.
    """
    _ = translate or translator_for(DEFAULT_LANG)
    errors: list[str] = []

    full_name = cell_to_text(resolve_field(row, "full_name")).strip()
    if full_name == "":
        errors.append(_("guests.import.errors.nameRequired"))

    email_text = cell_to_text(resolve_field(row, "email"))
    if email_text and not EMAIL_PATTERN.fullmatch(email_text):
        errors.append(_("guests.import.errors.invalidEmail"))

    return ParsedGuest(
        full_name=full_name,
        email=_optional_text(email_text),
        phone=_optional_text(resolve_field(row, "phone")),
        plus_one=coerce_plus_one(resolve_field(row, "plus_one")),
        plus_one_name=_optional_text(resolve_field(row, "plus_one_name")),
        dietary_preferences=_optional_text(resolve_field(row, "dietary_preferences")),
        table_assignment=_optional_text(resolve_field(row, "table_assignment")),
        # Name is checked again directly, not only through the error list
        is_valid=not errors and full_name.strip() != "",
        errors=tuple(errors),
    )


def validate_rows(rows: list[RawRow], translate: Translator | None = None) -> list[ParsedGuest]:
    """Apply validate_row to every row, preserving order."""
    return [validate_row(r, translate) for r in rows]
