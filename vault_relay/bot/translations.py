"""Localized bot-facing text.

Translation dictionaries are loaded from the YAML files in ``vault_relay/locales``
once at startup. Every dictionary must cover exactly the keys of
``TranslationKey``; a missing or unknown key fails the load instead of
surfacing later as untranslated text.
"""

import logging
import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from types import MappingProxyType

import yaml

from ..config import DEFAULT_LANGUAGE, ConfigError

logger = logging.getLogger(__name__)

LOCALES_DIR = Path(__file__).resolve().parent.parent / "locales"

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class TranslationKey(str, Enum):
    """Closed set of message keys available to the bot."""

    UNAUTHORIZED = "unauthorized"
    UNSUPPORTED_MESSAGE_TYPE = "unsupportedMessageType"
    FORWARD_FAILED = "forwardFailed"
    COMMAND_ID_GROUP_ID = "commands.id.groupId"
    COMMAND_ID_YOUR_ID = "commands.id.yourId"


class TranslationError(ConfigError):
    """Raised when a locale file does not cover every translation key."""


def load_locale(path: Path) -> Mapping[str, str]:
    """Load and check one locale file.

    Args:
        path: YAML file mapping translation keys to templates.

    Returns:
        Read-only mapping from key to template.

    Raises:
        ConfigError: If the file is not a flat string mapping.
        TranslationError: If keys are missing or unknown.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or not all(
        isinstance(k, str) and isinstance(v, str) for k, v in data.items()
    ):
        raise ConfigError(f"Locale file {path.name} must map keys to strings")

    expected = {key.value for key in TranslationKey}
    missing = expected - data.keys()
    extra = data.keys() - expected
    if missing or extra:
        raise TranslationError(
            f"Locale file {path.name} does not match translation keys "
            f"(missing: {sorted(missing)}, unknown: {sorted(extra)})"
        )

    return MappingProxyType(dict(data))


def load_translations(locales_dir: Path = LOCALES_DIR) -> Mapping[str, Mapping[str, str]]:
    """Load every ``<language-tag>.yml`` file in a directory.

    Raises:
        ConfigError: If the default language is not among the files.
    """
    translations = {path.stem: load_locale(path) for path in sorted(locales_dir.glob("*.yml"))}
    if DEFAULT_LANGUAGE not in translations:
        raise ConfigError(f"Default language {DEFAULT_LANGUAGE} has no locale file")

    logger.info("Loaded translations: %s", ", ".join(translations))
    return MappingProxyType(translations)


class Translator:
    """Render bot-facing text in the configured language.

    Unknown or absent language tags fall back to the default language. The
    language is resolved once, so a translator never changes language during
    the life of the process.
    """

    def __init__(
        self,
        language: str | None = None,
        translations: Mapping[str, Mapping[str, str]] | None = None,
    ):
        self.translations = translations if translations is not None else load_translations()
        self.language = self.resolve_language(language)

    def resolve_language(self, language: str | None) -> str:
        if language and language in self.translations:
            return language
        if language:
            logger.warning("Unsupported language %r, falling back to %s", language, DEFAULT_LANGUAGE)
        return DEFAULT_LANGUAGE

    def translate(
        self,
        key: TranslationKey | str,
        replacements: Mapping[str, object] | None = None,
    ) -> str:
        """Look up a template and substitute its placeholders.

        Every ``{name}`` with an entry in ``replacements`` is replaced by
        ``str(value)``; placeholders without an entry stay as they are. A key
        missing from the dictionary renders as the key itself.

        Args:
            key: Translation key.
            replacements: Placeholder values by name.

        Returns:
            Rendered text, never raises for unknown keys or placeholders.
        """
        key_text = key.value if isinstance(key, TranslationKey) else key
        template = self.translations[self.language].get(key_text, key_text)
        if not replacements:
            return template

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name in replacements:
                return str(replacements[name])
            return match.group(0)

        return _PLACEHOLDER.sub(substitute, template)
