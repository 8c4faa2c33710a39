"""
Parser for Laravel PHP translation files.

Translation files are plain PHP scripts returning an array literal:

    <?php

    return [
        'welcome' => 'Welcome, :name!',
        'nav' => ['home' => 'Home', 'about' => 'About'],
    ];

Rather than executing PHP, the file is tokenized and the returned literal is
parsed with a small recursive-descent parser. Supported: `[...]` and
`array(...)` literals, single- and double-quoted strings, heredoc and nowdoc
strings, integers, floats, `true`/`false`/`null`, unary minus, string
concatenation with `.`, implicit integer keys, trailing commas, comments, and
leading `declare(...)`, `use ...` and `namespace ...` statements. Anything else
(function calls, constants, variables) raises `PhpParseError`.
"""

from dataclasses import dataclass
import re
from typing import Any

from core.models import coerce_key

_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}

_TOKEN_PATTERNS = [
    ("WHITESPACE", r"\s+"),
    ("OPEN_TAG", r"<\?php\b|<\?="),
    ("CLOSE_TAG", r"\?>"),
    ("COMMENT", r"//[^\n]*|#(?!\[)[^\n]*|/\*.*?\*/"),
    ("HEREDOC", r"<<<[ \t]*(?P<quote>[\"']?)(?P<label>[A-Za-z_][A-Za-z0-9_]*)(?P=quote)\r?\n"),
    ("SINGLE", r"'(?:[^'\\]|\\.)*'"),
    ("DOUBLE", r'"(?:[^"\\]|\\.)*"'),
    ("NUMBER", r"0[xX][0-9a-fA-F]+|0[bB][01]+|(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?"),
    ("ARROW", r"=>"),
    ("NAME", r"\\?[A-Za-z_][A-Za-z0-9_]*(?:\\[A-Za-z_][A-Za-z0-9_]*)*"),
    ("VARIABLE", r"\$[A-Za-z_][A-Za-z0-9_]*"),
    ("PUNCT", r"[\[\](),;.\-+=:]"),
]
_TOKEN_RE = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_PATTERNS),
    re.DOTALL,
)


class PhpParseError(Exception):
    """
    Raised when a PHP translation file cannot be parsed.

    Attributes:
        message: A human-readable description including the line number.
        line: 1-based line of the offending token, if known.
    """

    def __init__(self, message: str, line: int | None = None):
        self.message = f"{message} (line {line})" if line else message
        super().__init__(self.message)
        self.line = line


@dataclass(frozen=True)
class Token:
    kind: str
    value: Any
    line: int


def tokenize(source: str) -> list[Token]:
    """Split PHP source into tokens, dropping whitespace, comments and tags."""
    tokens: list[Token] = []
    position = 0
    line = 1
    while position < len(source):
        match = _TOKEN_RE.match(source, position)
        if match is None:
            raise PhpParseError(f"Unexpected character {source[position]!r}", line)

        kind = match.lastgroup or ""
        text = match.group(0)
        if kind == "HEREDOC":
            kind, value, end = _read_heredoc(source, match, line)
            tokens.append(Token(kind, value, line))
            line += source.count("\n", position, end)
            position = end
            continue

        if kind == "SINGLE":
            tokens.append(Token("STRING", _unescape_single(text[1:-1]), line))
        elif kind == "DOUBLE":
            tokens.append(Token("STRING", _unescape_double(text[1:-1]), line))
        elif kind == "NUMBER":
            tokens.append(Token("NUMBER", _parse_number(text), line))
        elif kind in ("NAME", "VARIABLE", "ARROW", "PUNCT"):
            tokens.append(Token(kind, text, line))

        line += text.count("\n")
        position = match.end()
    return tokens


def _read_heredoc(source: str, match: re.Match[str], line: int) -> tuple[str, str, int]:
    label = match.group("label")
    nowdoc = match.group("quote") == "'"
    closing = re.compile(rf"^([ \t]*){re.escape(label)}\b", re.MULTILINE)
    end_match = closing.search(source, match.end())
    if end_match is None:
        raise PhpParseError(f"Unterminated heredoc '{label}'", line)

    body = source[match.end() : end_match.start()]
    indent = end_match.group(1)
    lines = body.split("\n")
    if lines and lines[-1].strip() == "":
        lines = lines[:-1]
    if indent:
        lines = [text[len(indent) :] if text.startswith(indent) else text for text in lines]
    text = "\n".join(lines).rstrip("\r")
    value = text if nowdoc else _unescape_double(text)
    return "STRING", value, end_match.end()


def _unescape_single(text: str) -> str:
    return re.sub(r"\\([\\'])", r"\1", text)


def _unescape_double(text: str) -> str:
    def replace(match: re.Match[str]) -> str:
        escape = match.group(1)
        if escape in _ESCAPES:
            return _ESCAPES[escape]
        if escape[0] in "01234567":
            return chr(int(escape, 8) & 0xFF)
        if escape[0] == "x":
            return chr(int(escape[1:], 16))
        if escape[0] == "u":
            return chr(int(escape[2:-1], 16))
        return match.group(0)

    return re.sub(
        r"\\([nrtvef\\$\"]|[0-7]{1,3}|x[0-9A-Fa-f]{1,2}|u\{[0-9A-Fa-f]+\})",
        replace,
        text,
    )


def _parse_number(text: str) -> int | float:
    lowered = text.lower()
    if lowered.startswith("0x"):
        return int(lowered, 16)
    if lowered.startswith("0b"):
        return int(lowered, 2)
    if any(char in lowered for char in ".e"):
        return float(lowered)
    if len(lowered) > 1 and lowered.startswith("0"):
        return int(lowered, 8)
    return int(lowered)


class _Parser:
    def __init__(self, tokens: list[Token]):
        self.tokens = tokens
        self.position = 0

    def peek(self, offset: int = 0) -> Token | None:
        index = self.position + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def advance(self) -> Token:
        token = self.peek()
        if token is None:
            raise PhpParseError("Unexpected end of file")
        self.position += 1
        return token

    def expect(self, value: str) -> Token:
        token = self.advance()
        if token.value != value:
            raise PhpParseError(f"Expected '{value}' but found '{token.value}'", token.line)
        return token

    def at(self, value: str) -> bool:
        token = self.peek()
        return token is not None and token.kind != "STRING" and token.value == value

    def at_keyword(self, keyword: str) -> bool:
        token = self.peek()
        return (
            token is not None
            and token.kind == "NAME"
            and token.value.lower() == keyword
        )

    def parse_file(self) -> Any:
        while self.at_keyword("declare") or self.at_keyword("namespace") or self.at_keyword("use"):
            self.skip_statement()

        if not self.at_keyword("return"):
            token = self.peek()
            if token is None:
                raise PhpParseError("File does not return an array")
            raise PhpParseError(f"Expected 'return' but found '{token.value}'", token.line)
        self.advance()
        value = self.parse_expression()
        if self.peek() is not None:
            self.expect(";")
        return value

    def skip_statement(self) -> None:
        depth = 0
        while True:
            token = self.advance()
            if token.kind == "STRING":
                continue
            if token.value == "(":
                depth += 1
            elif token.value == ")":
                depth -= 1
            elif token.value == ";" and depth == 0:
                return

    def parse_expression(self) -> Any:
        value = self.parse_operand()
        while self.at("."):
            self.advance()
            right = self.parse_operand()
            value = _concat_operand(value) + _concat_operand(right)
        return value

    def parse_operand(self) -> Any:
        token = self.advance()
        if token.kind == "STRING":
            return token.value
        if token.kind == "NUMBER":
            return token.value
        if token.value == "[":
            return self.parse_array_items("]")
        if token.value in ("-", "+"):
            operand = self.parse_operand()
            if not isinstance(operand, (int, float)) or isinstance(operand, bool):
                raise PhpParseError("Unary sign applied to a non-number", token.line)
            return -operand if token.value == "-" else operand
        if token.value == "(":
            value = self.parse_expression()
            self.expect(")")
            return value
        if token.kind == "NAME":
            name = token.value.lower()
            if name == "array" and self.at("("):
                self.advance()
                return self.parse_array_items(")")
            if name == "true":
                return True
            if name == "false":
                return False
            if name == "null":
                return None
        raise PhpParseError(f"Unsupported expression '{token.value}'", token.line)

    def parse_array_items(self, closing: str) -> dict[int | str, Any]:
        items: dict[int | str, Any] = {}
        next_index = 0
        while not self.at(closing):
            value = self.parse_expression()
            if self.at("=>"):
                self.advance()
                key = coerce_key(value)
                value = self.parse_expression()
            else:
                key = next_index
            items[key] = value
            if isinstance(key, int) and key >= next_index:
                next_index = key + 1

            if self.at(","):
                self.advance()
            elif not self.at(closing):
                token = self.peek()
                found = token.value if token else "end of file"
                line = token.line if token else None
                raise PhpParseError(f"Expected ',' or '{closing}' but found '{found}'", line)
        self.expect(closing)
        return items


def _concat_operand(value: Any) -> str:
    if isinstance(value, dict):
        raise PhpParseError("Cannot concatenate an array")
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_php_array(source: str) -> dict[int | str, Any]:
    """
    Parse the array returned by a PHP translation file.

    Args:
        source: The file's PHP source.

    Returns:
        The returned array, as a dict with `int` or `str` keys.

    Raises:
        PhpParseError: If the file does not consist of a `return` of a
            supported array literal.
    """
    value = _Parser(tokenize(source)).parse_file()
    if not isinstance(value, dict):
        raise PhpParseError("File does not return an array")
    return value
