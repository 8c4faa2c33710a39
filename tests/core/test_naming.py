"""
Tests for the naming module.

Tests cover:
- Case conversions (studly, camel, snake, kebab)
- Module and file identifiers, including echo elision and JSON markers
- Property keys, quoting and enum member names
- Locale formatting and output file names
"""

import pytest

from core import naming
from core.models import FileKey
from models import LocaleFormat


# ============================================================================
# Tests for case conversions
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [
        ("vendors", "Vendors"),
        ("bank-accounts", "BankAccounts"),
        ("user_profile", "UserProfile"),
        ("already Studly", "AlreadyStudly"),
    ],
)
def test_studly(value, expected):
    """Words split on `-`, `_` and spaces should be capitalized and joined."""
    assert naming.studly(value) == expected


@pytest.mark.unit
def test_camel():
    """camel should lower-case the first letter of the studly form."""
    assert naming.camel("Vendors") == "vendors"
    assert naming.camel("bank-accounts") == "bankAccounts"


@pytest.mark.unit
def test_snake_and_kebab():
    """Upper-case letters should be split off with the delimiter."""
    assert naming.snake("BankAccounts") == "bank_accounts"
    assert naming.kebab("BankAccounts") == "bank-accounts"
    assert naming.snake("vendors") == "vendors"


# ============================================================================
# Tests for identifiers
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "source, file_key, expected",
    [
        ("Vendors", "", "Vendors"),
        ("Vendors", "forms", "VendorsForms"),
        ("vendors", "vendors.forms", "VendorsForms"),
        ("Vendors", "admin.users", "VendorsAdminUsers"),
        ("Vendors", "forms.vendors", "VendorsFormsVendors"),
        ("bank-accounts", "pages", "BankAccountsPages"),
    ],
)
def test_build_module_name(source, file_key, expected):
    """The first file key segment is elided only when it echoes the source."""
    assert naming.build_module_name(source, file_key) == expected


@pytest.mark.unit
def test_build_file_identifier_json_marker():
    """JSON-origin files should carry the `Json` marker after the source."""
    assert naming.build_file_identifier("Vendors", FileKey.json()) == "VendorsJson"
    assert naming.build_file_identifier("Vendors", FileKey.json("admin")) == "VendorsJsonAdmin"


@pytest.mark.unit
def test_build_file_identifier_does_not_collide_with_source():
    """A file named like its source should keep the echoed segment."""
    assert naming.build_file_identifier("Vendors", FileKey("vendors")) == "VendorsVendors"
    assert naming.build_file_identifier("Vendors", FileKey("forms")) == "VendorsForms"


@pytest.mark.unit
def test_disambiguate_marks_and_numbers_repeats():
    """Free names pass through; repeats get the marker, then a counter."""
    taken = {"SystemJson"}

    assert naming.disambiguate("SystemAuth", taken, "Php") == "SystemAuth"
    assert naming.disambiguate("SystemJson", taken, "Php") == "SystemJsonPhp"
    assert naming.disambiguate("SystemJson", taken, "Php") == "SystemJsonPhp2"
    assert taken == {"SystemJson", "SystemAuth", "SystemJsonPhp", "SystemJsonPhp2"}


@pytest.mark.unit
def test_derived_names():
    """Derived names should only append fixed fragments."""
    assert naming.get_export_name("VendorsForms", "Translations") == "VendorsFormsTranslations"
    assert naming.get_type_name("VendorsTranslations") == "VendorsTranslationsType"
    assert naming.get_locales_type_name("Vendors") == "VendorsLocales"
    assert naming.get_getter_function_name("Vendors") == "getVendors"
    assert naming.get_localized_type_name("Vendors", "I18N") == "VendorsLocalizedI18N"
    assert naming.get_localized_type_name("", "I18N") == "LocalizedI18N"
    assert naming.get_keys_type_name("Vendors") == "VendorsTranslationKey"
    assert naming.get_aggregate_name("I18N") == "I18N"
    assert naming.get_aggregate_name("") == "Translations"


@pytest.mark.unit
def test_get_key_export_name():
    """Const objects are named `<Module>Keys`, unions and enums `<Module>Key`."""
    assert naming.get_key_export_name("Vendors", "union") == "VendorsKey"
    assert naming.get_key_export_name("Vendors", "enum") == "VendorsKey"
    assert naming.get_key_export_name("Vendors", "const") == "VendorsKeys"


@pytest.mark.unit
def test_property_names():
    """Source and file property names should be valid identifiers."""
    assert naming.to_property_name("BankAccounts") == "bankAccounts"
    assert naming.get_file_property_name(FileKey("bank-accounts.pages")) == "bank_accounts_pages"


# ============================================================================
# Tests for property keys
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "key, expected",
    [
        ("title", "title"),
        ("first-name", "first_name"),
        ("a.b", "a_b"),
        ("with space", "with_space"),
        ("path/to", "path_to"),
        ("0", "'0'"),
        ("1st", "'1st'"),
        ("it's", "'it\\'s'"),
        ("$price", "$price"),
    ],
)
def test_get_safe_key(key, expected):
    """Separators become `_`; leading digits and non-identifiers are quoted."""
    assert naming.get_safe_key(key) == expected


@pytest.mark.unit
def test_get_flat_key():
    """Flat keys are kept verbatim and quoted when not bare identifiers."""
    assert naming.get_flat_key("title") == "title"
    assert naming.get_flat_key("auth.failed") == "'auth.failed'"


@pytest.mark.unit
def test_quote_escapes_backslashes_and_quotes():
    """Backslashes and single quotes should be escaped."""
    assert naming.quote("a\\b'c") == "'a\\\\b\\'c'"


@pytest.mark.unit
def test_get_enum_member_name():
    """Enum members are upper-cased with separators replaced by `_`."""
    assert naming.get_enum_member_name("auth.failed-login") == "AUTH_FAILED_LOGIN"
    assert naming.get_enum_member_name("0.title") == "'0_TITLE'"


# ============================================================================
# Tests for locales and file names
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "locale_format, expected",
    [
        (LocaleFormat.SNAKE, "pt_br"),
        (LocaleFormat.KEBAB, "pt-br"),
        (LocaleFormat.CAMEL, "ptBR"),
        (LocaleFormat.STUDLY, "PtBR"),
    ],
)
def test_format_locale(locale_format, expected):
    """Locales are split on `_` and `-` before formatting."""
    assert naming.format_locale("pt_BR", locale_format) == expected


@pytest.mark.unit
def test_format_locale_simple():
    """A single-part locale should stay as is in snake and kebab form."""
    assert naming.format_locale("en", "snake") == "en"
    assert naming.format_locale("en", "kebab") == "en"


@pytest.mark.unit
def test_file_names():
    """Module and granular file names should be lower-case and hyphenated."""
    assert naming.get_module_file_name("Vendors") == "vendors.translations"
    assert naming.get_granular_file_name(FileKey("bank-accounts.pages")) == "bank-accounts-pages"
    assert naming.get_granular_file_name(FileKey.json()) == "json"
    assert naming.get_granular_file_name(FileKey.json("admin")) == "json-admin"


@pytest.mark.unit
def test_get_file_extension():
    """Every format but json and javascript writes `.ts` modules."""
    assert naming.get_file_extension("json") == "json"
    assert naming.get_file_extension("javascript") == "js"
    assert naming.get_file_extension("typescript") == "ts"
    assert naming.get_file_extension("both") == "ts"
