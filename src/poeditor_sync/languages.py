"""Language identifier handling."""

import re
from collections.abc import Mapping

# POEditor only knows the region-coded Chinese variants
_SIMPLIFIED_CHINESE = re.compile(r"zh.+(hans|cn)")
_TRADITIONAL_CHINESE = re.compile(r"zh.+(hant|tw)")


class LanguageResolver:
    """Map configured language identifiers to remote codes and aliases."""

    def __init__(self, language_alias: Mapping[str, str] | None = None):
        """Initialize the resolver.

        Args:
            language_alias: Mapping of alias language -> source language
        """
        self.language_alias = dict(language_alias or {})

    def to_remote_code(self, language: str) -> str:
        """Return the language code POEditor expects for ``language``.

        Examples:
            'zh-Hans' -> 'zh-CN', 'zh_TW' -> 'zh-TW', 'en' -> 'en'
        """
        lowered = language.lower()
        if _SIMPLIFIED_CHINESE.search(lowered):
            return "zh-CN"
        if _TRADITIONAL_CHINESE.search(lowered):
            return "zh-TW"
        return language

    def expand_aliases(self, language: str) -> list[str]:
        """Return ``language`` followed by every alias sourced from it."""
        languages = [language]
        for alias, source in self.language_alias.items():
            if source == language and alias not in languages:
                languages.append(alias)
        return languages


def to_remote_code(language: str) -> str:
    return LanguageResolver().to_remote_code(language)


def expand_aliases(language: str, language_alias: Mapping[str, str]) -> list[str]:
    return LanguageResolver(language_alias).expand_aliases(language)
