"""
Naming conventions shared by every output path.

Every identifier, property name and file name that appears in generated output
is derived here. The type-generation path and the value-export path must call
these functions instead of concatenating names themselves: the generated
types and values only line up because both derive names from the same
(source, file key) pair with the same rules, differing only by suffix.

The case conversions reproduce Laravel's `Str` helpers, since source and file
names come from Laravel projects and users expect the same spelling.
"""

import re

from constants import JSON_IDENTIFIER
from core.models import FileKey
from models import ExportFormat, LocaleFormat

_WHITESPACE = re.compile(r"\s+")
_BEFORE_UPPER = re.compile(r"(.)(?=[A-Z])")
_WORD_START = re.compile(r"(^|\s)(\S)")
_LOWER_ONLY = re.compile(r"[a-z]+")
_NON_PROPERTY_CHARS = re.compile(r"[^A-Za-z0-9_]")
_IDENTIFIER = re.compile(r"[A-Za-z_$][A-Za-z0-9_$]*")
_SAFE_KEY_CHARS = str.maketrans({"-": "_", ".": "_", " ": "_", "/": "_", "\\": "_"})


# ============================================================================
# Case conversions
# ============================================================================


def studly(value: str) -> str:
    """`bank-accounts` -> `BankAccounts`, `user_profile` -> `UserProfile`."""
    words = value.replace("-", " ").replace("_", " ").split(" ")
    return "".join(word[:1].upper() + word[1:] for word in words)


def camel(value: str) -> str:
    studly_value = studly(value)
    return studly_value[:1].lower() + studly_value[1:]


def snake(value: str, delimiter: str = "_") -> str:
    """
    Insert `delimiter` before every upper-case letter and lower-case the result.

    Values made only of lower-case letters are returned unchanged.
    """
    if _LOWER_ONLY.fullmatch(value):
        return value
    value = _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), value)
    value = _WHITESPACE.sub("", value)
    return _BEFORE_UPPER.sub(lambda m: m.group(1) + delimiter, value).lower()


def kebab(value: str) -> str:
    return snake(value, "-")


# ============================================================================
# Identifiers
# ============================================================================


def to_filename_safe(name: str) -> str:
    """Kebab-case, lower-case token used for directory and file names."""
    return kebab(name.lower())


def build_module_name(source: str, file_key: str) -> str:
    """
    Derive the module identifier for a (source, dotted file key) pair.

    The file key is split on `.` and each segment StudlyCased after the
    StudlyCased source. The first segment is elided when it equals the source
    name case-insensitively, so `('vendors', 'vendors.forms')` and
    `('vendors', 'forms')` both give `VendorsForms`.
    """
    name = studly(source)
    if not file_key:
        return name
    for position, part in enumerate(file_key.split(".")):
        if position == 0 and part.lower() == source.lower():
            continue
        name += studly(part)
    return name


def build_file_identifier(source: str, file_key: FileKey) -> str:
    """
    Derive the module identifier of one translation file, distinct from the
    source's combined identifier.

    JSON-origin files carry a `Json` marker after the source name
    (`_json` -> `VendorsJson`, `_json.admin` -> `VendorsJsonAdmin`). A
    structured file whose only segment echoes the source keeps the echoed
    segment (`vendors/vendors.php` -> `VendorsVendors`).

    Two files of one source can still derive the same identifier
    (`json.php` next to `<locale>.json`); `disambiguate` settles those.
    """
    head = studly(source)
    module = build_module_name(source, file_key.path)
    if file_key.is_json:
        return head + JSON_IDENTIFIER + module[len(head) :]
    if module == head:
        return module + "".join(studly(part) for part in file_key.segments)
    return module


def disambiguate(name: str, taken: set[str], marker: str) -> str:
    """
    Return `name`, or `name + marker` when `name` is in `taken`, numbering
    further repeats (`name + marker + "2"`, ...). The result is added to `taken`.
    """
    candidate = name
    if candidate in taken:
        candidate = name + marker
    counter = 2
    while candidate in taken:
        candidate = f"{name}{marker}{counter}"
        counter += 1
    taken.add(candidate)
    return candidate


def get_export_name(module: str, suffix: str) -> str:
    return module + suffix


def get_type_name(export: str) -> str:
    return export + "Type"


def get_locales_type_name(module: str) -> str:
    return module + "Locales"


def get_getter_function_name(module: str) -> str:
    return "get" + module


def get_localized_type_name(module: str, suffix: str) -> str:
    """`('Vendors', 'I18N')` -> `VendorsLocalizedI18N`; `('', 'I18N')` -> `LocalizedI18N`."""
    return f"{module}Localized{suffix}"


def get_keys_type_name(module: str) -> str:
    """Name of the key union emitted next to generated types."""
    return module + "TranslationKey"


def get_key_export_name(module: str, keys_format: str) -> str:
    """
    Name of a per-source declaration in the standalone key export.

    Unions and enums are named `<Module>Key`; const objects `<Module>Keys`.
    """
    return module + ("Keys" if keys_format == "const" else "Key")


def get_aggregate_name(suffix: str) -> str:
    """Name of the interface that nests every source's combined interface."""
    return suffix or "Translations"


def to_property_name(source: str) -> str:
    """Property under which a source appears in the top-level aggregate."""
    return camel(source)


def get_file_property_name(file_key: FileKey) -> str:
    """
    Property under which a structured file appears in its source aggregate.

    Every character outside `[A-Za-z0-9_]` becomes `_`, e.g.
    `bank-accounts.pages` -> `bank_accounts_pages`.
    """
    return _NON_PROPERTY_CHARS.sub("_", file_key.path)


def format_locale(locale: str, locale_format: LocaleFormat | str) -> str:
    """
    Format a locale for use as a directory name.

    The locale is split on `_` and `-` first, so `pt_BR` becomes `pt_br`
    (snake), `pt-br` (kebab), `ptBR` (camel) or `PtBR` (studly).
    """
    parts = [part for part in re.split(r"[-_]", locale) if part]
    match LocaleFormat(locale_format):
        case LocaleFormat.KEBAB:
            return "-".join(part.lower() for part in parts)
        case LocaleFormat.CAMEL:
            return camel("_".join(parts))
        case LocaleFormat.STUDLY:
            return studly("_".join(parts))
        case _:
            return "_".join(part.lower() for part in parts)


# ============================================================================
# File names
# ============================================================================


def get_file_extension(export_format: str) -> str:
    """`json` -> `json`, `javascript` -> `js`, anything else -> `ts`."""
    if export_format == ExportFormat.JSON:
        return "json"
    if export_format == ExportFormat.JAVASCRIPT:
        return "js"
    return "ts"


def get_module_file_name(source: str) -> str:
    """Base name of a source's file in module mode, e.g. `vendors.translations`."""
    return f"{to_filename_safe(source)}.translations"


def get_granular_file_name(file_key: FileKey) -> str:
    """
    Base name of one translation file in granular mode.

    Dots become hyphens (`bank-accounts.pages` -> `bank-accounts-pages`);
    JSON-origin files are named `json` or `json-<path>`.
    """
    if file_key.is_json:
        stem = "json" + (f"-{file_key.path}" if file_key.path else "")
    else:
        stem = file_key.path
    return kebab(stem.replace(".", "-").lower())


# ============================================================================
# Property keys
# ============================================================================


def quote(value: str) -> str:
    """Single-quote a string literal, escaping backslashes and quotes."""
    return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"


def is_identifier(value: str) -> bool:
    return bool(_IDENTIFIER.fullmatch(value))


def get_safe_key(key: str) -> str:
    """
    Make a translation key usable as a property name.

    `-`, `.`, space, `/` and `\\` become `_`. The result is quoted when it
    starts with a digit or still is not a bare identifier.
    """
    safe_key = key.translate(_SAFE_KEY_CHARS)
    if safe_key[:1].isdigit() or not is_identifier(safe_key):
        return quote(safe_key)
    return safe_key


def get_flat_key(key: str) -> str:
    """Property name for a dotted flat key: kept verbatim, quoted if needed."""
    return key if is_identifier(key) else quote(key)


def get_enum_member_name(key: str) -> str:
    """`auth.failed-login` -> `AUTH_FAILED_LOGIN`."""
    member = key.upper().replace(".", "_").replace("-", "_").replace(" ", "_")
    return member if is_identifier(member) else quote(member)
