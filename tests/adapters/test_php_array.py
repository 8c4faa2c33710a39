"""
Tests for the PHP translation file parser.

Tests cover:
- parse_php_array: array syntaxes, keys, scalars, strings and concatenation
- Leading declare/namespace/use statements, comments and tags
- PhpParseError: unsupported expressions and malformed files
"""

import pytest

from adapters.php_array import PhpParseError, parse_php_array, tokenize


# ============================================================================
# Tests for arrays and keys
# ============================================================================


@pytest.mark.unit
def test_parse_short_array_syntax():
    """A typical Laravel translation file should parse to a nested dict."""
    source = (
        "<?php\n"
        "\n"
        "return [\n"
        "    'welcome' => 'Welcome, :name!',\n"
        "    'nav' => [\n"
        "        'home' => 'Home',\n"
        "        'about' => 'About',\n"
        "    ],\n"
        "];\n"
    )

    assert parse_php_array(source) == {
        "welcome": "Welcome, :name!",
        "nav": {"home": "Home", "about": "About"},
    }


@pytest.mark.unit
def test_parse_long_array_syntax():
    """`array(...)` literals are supported, keyword case-insensitively."""
    source = "<?php return array('a' => ARRAY('b' => 'c'));"

    assert parse_php_array(source) == {"a": {"b": "c"}}


@pytest.mark.unit
def test_parse_implicit_integer_keys():
    """Values without keys get the next integer key."""
    source = "<?php return ['a', 'b', 5 => 'c', 'd'];"

    assert parse_php_array(source) == {0: "a", 1: "b", 5: "c", 6: "d"}


@pytest.mark.unit
def test_parse_coerces_numeric_string_keys():
    """Canonical decimal string keys become integers."""
    source = "<?php return ['10' => 'x', '010' => 'y', 'name' => 'z'];"

    assert parse_php_array(source) == {10: "x", "010": "y", "name": "z"}


@pytest.mark.unit
def test_parse_empty_array():
    """An empty array parses to an empty dict."""
    assert parse_php_array("<?php return [];") == {}


# ============================================================================
# Tests for scalar values
# ============================================================================


@pytest.mark.unit
def test_parse_scalars():
    """Numbers, booleans and null are returned as Python values."""
    source = (
        "<?php return ['int' => 42, 'neg' => -3, 'float' => 1.5, 'hex' => 0x1F, "
        "'bin' => 0b101, 'oct' => 017, 'yes' => true, 'no' => FALSE, 'none' => null];"
    )

    assert parse_php_array(source) == {
        "int": 42,
        "neg": -3,
        "float": 1.5,
        "hex": 31,
        "bin": 5,
        "oct": 15,
        "yes": True,
        "no": False,
        "none": None,
    }


@pytest.mark.unit
def test_parse_single_quoted_escapes():
    """Only `\\'` and `\\\\` are escapes in single-quoted strings."""
    source = r"<?php return ['a' => 'It\'s', 'b' => 'C:\\path', 'c' => 'keep\n'];"

    assert parse_php_array(source) == {"a": "It's", "b": "C:\\path", "c": "keep\\n"}


@pytest.mark.unit
def test_parse_double_quoted_escapes():
    """Double-quoted strings interpret the usual escapes."""
    source = r'<?php return ["a" => "Line\nTwo", "b" => "\$price", "c" => "\x41\u{e9}"];'

    assert parse_php_array(source) == {"a": "Line\nTwo", "b": "$price", "c": "Aé"}


@pytest.mark.unit
def test_parse_concatenation():
    """Strings joined with `.` are concatenated, numbers stringified."""
    source = "<?php return ['a' => 'Hello ' . 'World', 'b' => 'Page ' . 2];"

    assert parse_php_array(source) == {"a": "Hello World", "b": "Page 2"}


@pytest.mark.unit
def test_parse_heredoc_and_nowdoc():
    """Heredoc bodies are dedented by the closing marker's indentation."""
    source = (
        "<?php\n"
        "return [\n"
        "    'text' => <<<EOT\n"
        "    Hello\n"
        "      World\n"
        "    EOT,\n"
        "    'raw' => <<<'RAW'\n"
        "    No \\n escape\n"
        "    RAW,\n"
        "];\n"
    )

    assert parse_php_array(source) == {"text": "Hello\n  World", "raw": "No \\n escape"}


@pytest.mark.unit
def test_parse_unicode_values():
    """Non-ASCII strings are kept as is."""
    assert parse_php_array("<?php return ['create' => 'إنشاء'];") == {"create": "إنشاء"}


# ============================================================================
# Tests for file structure
# ============================================================================


@pytest.mark.unit
def test_parse_skips_leading_statements_and_comments():
    """declare, namespace and use statements and all comment styles are skipped."""
    source = (
        "<?php\n"
        "declare(strict_types=1);\n"
        "\n"
        "namespace App\\Lang;\n"
        "use Foo\\Bar;\n"
        "\n"
        "/**\n"
        " * Auth messages\n"
        " */\n"
        "return [\n"
        "    // login\n"
        "    'failed' => 'Failed', # trailing\n"
        "];\n"
        "?>\n"
    )

    assert parse_php_array(source) == {"failed": "Failed"}


@pytest.mark.unit
def test_tokenize_tracks_lines():
    """Tokens carry the line they start on."""
    tokens = tokenize("<?php\n\nreturn [\n'a' => 'b'];")

    assert [(token.value, token.line) for token in tokens[:3]] == [
        ("return", 3),
        ("[", 3),
        ("a", 4),
    ]


# ============================================================================
# Tests for parse errors
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "source, message",
    [
        ("<?php return [__('x')];", "Unsupported expression '__'"),
        ("<?php return ['a' => $name];", "Unsupported expression '$name'"),
        ("<?php echo 'x';", "Expected 'return' but found 'echo'"),
        ("<?php return 'x';", "File does not return an array"),
        ("<?php", "File does not return an array"),
        ("<?php return ['a' => 'b' 'c' => 'd'];", "Expected ',' or ']' but found 'c'"),
        ("<?php return ['a' => 'b'", "Expected ',' or ']' but found 'end of file'"),
        ("<?php return ['a' =>", "Unexpected end of file"),
        ("<?php return ['a' => 'b'] @", "Unexpected character '@'"),
        ("<?php return ['a' => -'b'];", "Unary sign applied to a non-number"),
        ("<?php return ['a' => ['b'] . 'c'];", "Cannot concatenate an array"),
        ("<?php return ['a' => <<<EOT\nnever closed\n];", "Unterminated heredoc 'EOT'"),
    ],
)
def test_parse_errors(source, message):
    """Malformed or unsupported files raise PhpParseError."""
    with pytest.raises(PhpParseError) as exc_info:
        parse_php_array(source)

    assert message in exc_info.value.message


@pytest.mark.unit
def test_parse_error_reports_line():
    """The error message and attribute carry the offending line."""
    source = "<?php\n\nreturn [\n    'a' => config('x'),\n];"

    with pytest.raises(PhpParseError) as exc_info:
        parse_php_array(source)

    assert exc_info.value.line == 4
    assert exc_info.value.message == "Unsupported expression 'config' (line 4)"
