from __future__ import annotations

from wedding_planner.i18n.messages import TRANSLATIONS, VALID_LANGS, t, translator_for


def test_catalogs_have_same_keys():
    assert set(TRANSLATIONS["en"]) == set(TRANSLATIONS["es"])
    assert sorted(TRANSLATIONS) == sorted(VALID_LANGS)


def test_lookup_and_format():
    assert t("guests.import.success", "en", count=3) == "3 guests imported"
    assert t("guests.import.success", "es", count=3) == "3 invitados importados"
    assert t("guests.import.errors.invalidEmail", "es") == "email inválido"


def test_unknown_language_falls_back_to_english():
    assert t("guests.import.errors.nameRequired", "fr") == "name required"
    assert translator_for("de")("common.yes") == "Yes"


def test_unknown_key_returns_key():
    assert t("no.such.key") == "no.such.key"


def test_translator_binds_language():
    _t = translator_for("es")
    assert _t("guests.import.ready") == "listo"
    assert _t("guests.import.success", count=1) == "1 invitados importados"
