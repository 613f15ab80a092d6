"""Tests for locale catalogs."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from weather_agent.config import PACKAGED_LOCALES
from weather_agent.i18n import Bundle

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def locales(tmp_path: Path) -> Path:
    (tmp_path / "en.json").write_text(json.dumps({"greet": "Hello %s", "bye": "Bye"}))
    (tmp_path / "de.json").write_text(json.dumps({"greet": "Hallo %s"}))
    (tmp_path / "broken.json").write_text("{not json")
    (tmp_path / "list.json").write_text("[]")
    (tmp_path / "notes.txt").write_text("ignored")
    return tmp_path


class TestBundleLoad:
    """Test reading catalogs from disk."""

    def test_loads_json_catalogs(self, locales: Path) -> None:
        bundle = Bundle.load(locales)
        assert bundle.available_locales() == ["de", "en"]

    def test_missing_directory(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        bundle = Bundle.load(tmp_path / "missing")
        assert bundle.available_locales() == []
        assert "Could not read locales directory" in caplog.text

    def test_missing_default_warns(self, locales: Path, caplog: pytest.LogCaptureFixture) -> None:
        Bundle.load(locales, default_lang="pt")
        assert "Default language 'pt' not found" in caplog.text

    def test_packaged_locales(self) -> None:
        bundle = Bundle.load(PACKAGED_LOCALES)
        assert {"en", "es", "fr"} <= set(bundle.available_locales())
        for lang in bundle.available_locales():
            assert set(bundle.catalogs[lang]) == set(bundle.catalogs["en"])


class TestTranslate:
    """Test lookup and fallback."""

    def test_requested_language(self, locales: Path) -> None:
        assert Bundle.load(locales).translate("de", "greet", "Welt") == "Hallo Welt"

    def test_falls_back_to_default_language(self, locales: Path) -> None:
        assert Bundle.load(locales).translate("ja", "bye") == "Bye"

    def test_none_language_uses_default(self, locales: Path) -> None:
        assert Bundle.load(locales).translate(None, "greet", "you") == "Hello you"

    def test_missing_key_returns_key(self, locales: Path) -> None:
        bundle = Bundle.load(locales)
        assert bundle.translate("de", "bye") == "bye"
        assert bundle.translate("en", "nope") == "nope"

    def test_independent_bundles(self, locales: Path, tmp_path_factory: pytest.TempPathFactory) -> None:
        other = tmp_path_factory.mktemp("other")
        (other / "en.json").write_text(json.dumps({"bye": "Later"}))
        assert Bundle.load(locales).translate("en", "bye") == "Bye"
        assert Bundle.load(other).translate("en", "bye") == "Later"

    def test_message_without_placeholder_ignores_args(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        (tmp_path / "de.json").write_text(
            json.dumps({"errors.ip_lookup_failed": "IP-Suche fehlgeschlagen"})
        )
        bundle = Bundle.load(tmp_path, default_lang="de")
        assert (
            bundle.translate("de", "errors.ip_lookup_failed", "1.2.3.4")
            == "IP-Suche fehlgeschlagen"
        )
        assert "does not match its arguments" in caplog.text

    def test_stray_percent_returns_raw_message(self, tmp_path: Path) -> None:
        (tmp_path / "en.json").write_text(json.dumps({"rate": "Done %s at 100%"}))
        bundle = Bundle.load(tmp_path)
        assert bundle.translate("en", "rate", "x") == "Done %s at 100%"
