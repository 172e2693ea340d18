"""Content normalization for exported string tables."""

import re

APPLE_STRINGS = "apple_strings"
ANDROID_STRINGS = "android_strings"

# Export formats accepted by the POEditor export endpoint
SUPPORTED_EXPORT_TYPES = frozenset(
    {
        "po",
        "pot",
        "mo",
        "xls",
        "xlsx",
        "csv",
        "ini",
        "resw",
        "resx",
        ANDROID_STRINGS,
        APPLE_STRINGS,
        "xliff",
        "properties",
        "key_value_json",
        "json",
        "yml",
        "xlf",
        "xmb",
        "xtb",
        "arb",
        "rise_360_xliff",
    }
)

# %s, %1$s -> %@, %1$@
_STRING_PLACEHOLDER = re.compile(r"(%(\d+\$)?)s")
# %@, %1$@ -> %s, %1$s
_OBJECT_PLACEHOLDER = re.compile(r"(%(\d+\$)?)@")


class ContentTransformer:
    """Rewrite placeholders between Apple and Android conventions.

    Only the conversion character changes; a positional ``N$`` prefix is
    kept as-is. Every result ends with a newline.
    """

    def normalize(self, content: str, export_type: str) -> str:
        """Normalize exported content for the given export type.

        Args:
            content: Raw content downloaded from the export URL
            export_type: POEditor export type (e.g. 'apple_strings')

        Returns:
            Content with placeholders rewritten and a trailing newline
        """
        if export_type == APPLE_STRINGS:
            content = _STRING_PLACEHOLDER.sub(r"\1@", content)
        elif export_type == ANDROID_STRINGS:
            content = _OBJECT_PLACEHOLDER.sub(r"\1s", content)

        if not content.endswith("\n"):
            content += "\n"
        return content


def normalize(content: str, export_type: str) -> str:
    """Module-level shortcut for ``ContentTransformer().normalize``."""
    return ContentTransformer().normalize(content, export_type)
