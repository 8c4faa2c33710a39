"""
Intermediate representation of generated files.

The planner describes every output file as an `OutputUnit`: a target path and
an ordered tuple of declarations. The renderer is the only place that turns
these into text, so the type path and the value path cannot drift apart in
how they spell, quote or escape things.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, TypeAlias

from core.structure import Structure


# ============================================================================
# Expressions (right-hand side of const declarations)
# ============================================================================


@dataclass(frozen=True)
class LiteralExpr:
    """Literal data, serialized as JSON. `inline` keeps it on one line."""

    data: Any
    inline: bool = False


@dataclass(frozen=True)
class RefExpr:
    """A reference to another declaration, e.g. `VendorsActionsTranslations.en`."""

    target: str


@dataclass(frozen=True)
class PropertyEntry:
    key: str
    value: "Expr"


@dataclass(frozen=True)
class SpreadEntry:
    value: "Expr"


@dataclass(frozen=True)
class ObjectExpr:
    entries: tuple[PropertyEntry | SpreadEntry, ...] = ()


Expr: TypeAlias = LiteralExpr | RefExpr | ObjectExpr


# ============================================================================
# Statements
# ============================================================================


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Import:
    names: tuple[str, ...]
    module: str
    type_only: bool = True


@dataclass(frozen=True)
class ReExport:
    """`export * from module`, or `export * as namespace from module`."""

    module: str
    namespace: str | None = None


@dataclass(frozen=True)
class InterfaceDecl:
    name: str
    body: Structure
    comment: str | None = None


@dataclass(frozen=True)
class UnionType:
    """
    A union of string literals, or of type names when `references` is set.

    An empty union renders as `empty` (`never` for key unions, `string` for
    the locale union of a tree without locales).
    """

    name: str
    members: tuple[str, ...]
    references: bool = False
    empty: str = "never"


@dataclass(frozen=True)
class MappedType:
    """`export type name = { [key in key_type]: value_type };`"""

    name: str
    key_type: str
    value_type: str


@dataclass(frozen=True)
class TypeDecl:
    """`export type name = expression;`"""

    name: str
    expression: str


@dataclass(frozen=True)
class ConstDecl:
    name: str
    value: Expr
    comment: str | None = None


@dataclass(frozen=True)
class EnumDecl:
    """`members` pairs an enum member name with its string value."""

    name: str
    members: tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class GetterFunction:
    """Typed accessor returning one locale's branch of a locale-mapped export."""

    name: str
    const_name: str
    type_name: str
    locales_type: str


@dataclass(frozen=True)
class JsonDocument:
    """A standalone JSON data file; nothing else may share its unit."""

    data: Any


Statement: TypeAlias = (
    Comment
    | Import
    | ReExport
    | InterfaceDecl
    | UnionType
    | MappedType
    | TypeDecl
    | ConstDecl
    | EnumDecl
    | GetterFunction
    | JsonDocument
)


class Dialect(StrEnum):
    """
    Language a unit is written in.

    ESM and COMMONJS are plain JavaScript: type declarations are dropped and
    constants lose their `as const`. COMMONJS also swaps `import` and
    `export` for `require` and a trailing `module.exports`.
    """

    TYPESCRIPT = "typescript"
    ESM = "esm"
    COMMONJS = "commonjs"


@dataclass(frozen=True)
class OutputUnit:
    """
    One planned output file.

    Attributes:
        path: Target path, POSIX-style, relative to the output root.
        statements: Declarations in emission order.
        header: Comment lines written at the top of the file.
        source: The source the unit belongs to, or None for shared and
            index units.
        dialect: Language the statements are rendered in.
    """

    path: str
    statements: tuple[Statement, ...]
    header: tuple[str, ...] = ()
    source: str | None = None
    dialect: Dialect = Dialect.TYPESCRIPT

    @property
    def declared_names(self) -> list[str]:
        return [
            statement.name
            for statement in self.statements
            if hasattr(statement, "name")
        ]
