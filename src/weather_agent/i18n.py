"""
Message catalogs for user-facing error strings.

A locale is a flat JSON object of ``key -> message`` stored as
``<locales_path>/<lang>.json``. Messages may contain ``%s``-style
placeholders filled from ``translate()``'s extra arguments.

Lookup falls back from the requested language to the default language and
finally to the key itself, so a missing catalog never breaks a response.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from weather_agent.config import Settings

logger = logging.getLogger(__name__)


@dataclass
class Bundle:
    """Loaded locale catalogs plus the default language."""

    default_lang: str = "en"
    catalogs: dict[str, dict[str, str]] = field(default_factory=dict)

    @classmethod
    def load(cls, locales_path: Path, default_lang: str = "en") -> Bundle:
        """
        Read every ``*.json`` catalog in ``locales_path``.

        Unreadable directories and malformed files are logged and skipped.
        """
        bundle = cls(default_lang=default_lang)
        if not locales_path.is_dir():
            logger.warning("Could not read locales directory: %s", locales_path)
            return bundle

        for path in sorted(locales_path.glob("*.json")):
            try:
                with path.open(encoding="utf-8") as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Error loading locale %s: %s", path.stem, e)
                continue
            if not isinstance(data, dict):
                logger.warning("Error loading locale %s: not a JSON object", path.stem)
                continue
            bundle.catalogs[path.stem] = {str(k): str(v) for k, v in data.items()}
            logger.debug("Loaded locale: %s", path.stem)

        if default_lang not in bundle.catalogs:
            logger.warning("Default language '%s' not found", default_lang)
        return bundle

    @classmethod
    def from_settings(cls, settings: Settings) -> Bundle:
        return cls.load(settings.locales_path, settings.default_lang)

    def available_locales(self) -> list[str]:
        return sorted(self.catalogs)

    def translate(self, lang: str | None, key: str, *args: object) -> str:
        catalog = self.catalogs.get(lang or self.default_lang)
        if catalog is None:
            catalog = self.catalogs.get(self.default_lang)
        if catalog is None or key not in catalog:
            return key
        message = catalog[key]
        if not args:
            return message
        try:
            return message % args
        except (TypeError, ValueError):
            logger.warning("Message %s does not match its arguments: %r", key, message)
            return message
