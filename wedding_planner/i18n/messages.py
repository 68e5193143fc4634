from __future__ import annotations

from collections.abc import Callable

"""Translation lookup for user-facing import messages.

A flat key -> text catalog per language. ``t(key, lang, **kwargs)`` falls back
to the default language and finally to the key itself so a missing entry never
breaks a notification.
"""

__all__ = [
    "DEFAULT_LANG",
    "VALID_LANGS",
    "TRANSLATIONS",
    "Translator",
    "t",
    "translator_for",
]

DEFAULT_LANG: str = "en"
VALID_LANGS: list[str] = ["en", "es"]

Translator = Callable[..., str]

TRANSLATIONS: dict[str, dict[str, str]] = {
    "en": {
        "guests.import.errors.nameRequired": "name required",
        "guests.import.errors.invalidEmail": "invalid email",
        "guests.import.errors.invalidFormat": "Unsupported file format. Use .xlsx or .xls",
        "guests.import.errors.parseError": "The file could not be read as a spreadsheet",
        "guests.import.errors.noValidGuests": "There are no valid guests to import",
        "guests.import.errors.importError": "The guests could not be imported",
        "guests.import.success": "{count} guests imported",
        "guests.import.ready": "ready",
        "guests.import.valid": "valid",
        "guests.import.invalid": "invalid",
        "common.yes": "Yes",
        "common.no": "No",
        "preview.position": "#",
        "preview.fullName": "Full name",
        "preview.email": "Email",
        "preview.phone": "Phone",
        "preview.plusOne": "Plus one",
        "preview.status": "Status",
    },
    "es": {
        "guests.import.errors.nameRequired": "nombre requerido",
        "guests.import.errors.invalidEmail": "email inválido",
        "guests.import.errors.invalidFormat": "Formato no soportado. Usa .xlsx o .xls",
        "guests.import.errors.parseError": "No se pudo leer el archivo como hoja de cálculo",
        "guests.import.errors.noValidGuests": "No hay invitados válidos para importar",
        "guests.import.errors.importError": "No se pudieron importar los invitados",
        "guests.import.success": "{count} invitados importados",
        "guests.import.ready": "listo",
        "guests.import.valid": "válidos",
        "guests.import.invalid": "inválidos",
        "common.yes": "Sí",
        "common.no": "No",
        "preview.position": "#",
        "preview.fullName": "Nombre completo",
        "preview.email": "Email",
        "preview.phone": "Teléfono",
        "preview.plusOne": "Acompañante",
        "preview.status": "Estado",
    },
}


def t(key: str, lang: str = DEFAULT_LANG, **kwargs: object) -> str:
    """Look up ``key`` for ``lang`` and format it with ``kwargs``."""
    catalog = TRANSLATIONS.get(lang) or TRANSLATIONS[DEFAULT_LANG]
    text = catalog.get(key) or TRANSLATIONS[DEFAULT_LANG].get(key) or key
    if kwargs:
        return text.format(**kwargs)
    return text


def translator_for(lang: str) -> Translator:
    """Bind ``t`` to one language."""
    if lang not in VALID_LANGS:
        lang = DEFAULT_LANG

    def _t(key: str, **kwargs: object) -> str:
        return t(key, lang, **kwargs)

    return _t
