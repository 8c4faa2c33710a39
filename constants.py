"""
Application-wide constants and configuration defaults.

This module defines the heuristics used to recognize Laravel translation
directories, the defaults applied when the configuration file omits an option,
and the fixed names used by the generated output.
"""

import re
from typing import Final

# A directory (or root JSON file) named like this is a locale: en, pt_BR, ...
LOCALE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-z]{2}(_[A-Z]{2})?$")

# Asset directories that commonly sit next to locale directories and are never
# treated as locales, even though they pass the length check.
NON_LOCALE_DIRS: Final[frozenset[str]] = frozenset(
    {
        "css",
        "js",
        "sass",
        "scss",
        "views",
        "components",
        "layouts",
        "assets",
        "images",
        "fonts",
        "vendor",
    }
)

MIN_LOCALE_DIR_LENGTH: Final[int] = 2

# Project-relative paths that hold the application's own translations.
DEFAULT_LANG_PATHS: Final[tuple[str, ...]] = ("lang", "resources/lang")

# Sub-directories checked below a configured path, in order.
LANG_SUBDIRS: Final[tuple[str, ...]] = ("lang", "resources/lang")
WILDCARD_LANG_SUBDIRS: Final[tuple[str, ...]] = (
    "lang",
    "resources/lang",
    "Resources/lang",
)

# Sub-directories checked inside every vendor/<vendor>/<package> directory.
VENDOR_DIR: Final[str] = "vendor"
VENDOR_LANG_SUBDIRS: Final[tuple[str, ...]] = (
    "resources/lang",
    "lang",
    "src/lang",
    "src/resources/lang",
)
SKIPPED_VENDOR_DIRS: Final[frozenset[str]] = frozenset({"bin", "composer"})

CONFIG_FILE_NAME: Final[str] = "langtypes.json"
KEYS_FILE_NAME: Final[str] = "translation-keys.d.ts"

# Identifier fragment that distinguishes JSON-origin translation files.
JSON_IDENTIFIER: Final[str] = "Json"
# Legacy dotted spelling of a JSON-origin file key (e.g. `_json.admin`).
JSON_FILE_KEY: Final[str] = "_json"
# Appended to a structured file whose identifier or file name is already taken.
PHP_IDENTIFIER: Final[str] = "Php"
PHP_FILE_MARKER: Final[str] = "-php"

DEFAULT_TYPE_SUFFIX: Final[str] = "I18N"
DEFAULT_VALUE_SUFFIX: Final[str] = "Translations"
DEFAULT_SYSTEM_NAME: Final[str] = "System"

TYPES_HEADER: Final[tuple[str, ...]] = (
    "Auto-generated TypeScript types from Laravel translation files",
    "Do not edit this file manually",
)
VALUES_HEADER: Final[tuple[str, ...]] = (
    "Auto-generated translation exports from Laravel translation files",
    "Do not edit this file manually",
)
