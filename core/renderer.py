"""
Serialization of planned output units to text.

Rendering is deterministic: the output depends only on the units, which the
planner builds in the tree's insertion order. Literal data is serialized as
JSON with unicode and forward slashes left unescaped.
"""

from dataclasses import dataclass
import json
from typing import Any

from core import naming
from core.ir import (
    Comment,
    ConstDecl,
    Dialect,
    EnumDecl,
    Expr,
    GetterFunction,
    Import,
    InterfaceDecl,
    JsonDocument,
    LiteralExpr,
    MappedType,
    ObjectExpr,
    OutputUnit,
    PropertyEntry,
    ReExport,
    RefExpr,
    SpreadEntry,
    Statement,
    TypeDecl,
    UnionType,
)
from core.models import is_sequential
from core.structure import Field, FieldKind, Structure

INDENT = "  "

# Statements with no JavaScript counterpart.
TYPE_STATEMENTS = (InterfaceDecl, UnionType, MappedType, TypeDecl)


@dataclass(frozen=True)
class RenderedFile:
    path: str
    content: str


def render_units(units: list[OutputUnit]) -> list[RenderedFile]:
    return [render_unit(unit) for unit in units]


def render_unit(unit: OutputUnit) -> RenderedFile:
    """
    Render one unit to a file.

    Imports and re-exports are grouped on consecutive lines, a comment sticks
    to the statement after it, every other statement is separated by a blank
    line. JSON documents are written bare, without header. JavaScript units
    drop their type declarations; CommonJS units end with `module.exports`.
    """
    if unit.statements and isinstance(unit.statements[0], JsonDocument):
        return RenderedFile(unit.path, to_json(unit.statements[0].data) + "\n")

    statements = list(unit.statements)
    exports: list[str] = []
    if unit.dialect is not Dialect.TYPESCRIPT:
        statements = _script_statements(statements)
    if unit.dialect is Dialect.COMMONJS:
        statements, exports = _commonjs_exports(statements)

    blocks: list[str] = []
    if unit.header:
        blocks.append("\n".join(f"// {line}" for line in unit.header) + "\n\n")

    previous: Statement | None = None
    for statement in statements:
        if previous is not None:
            grouped = isinstance(previous, Comment) or (
                _is_module_statement(previous) and _is_module_statement(statement)
            )
            blocks.append("\n" if grouped else "\n\n")
        blocks.append(render_statement(statement, unit.dialect))
        previous = statement

    if exports:
        if previous is not None:
            blocks.append("\n\n")
        entries = "".join(f"{INDENT}{entry},\n" for entry in exports)
        blocks.append(f"module.exports = {{\n{entries}}};")

    return RenderedFile(unit.path, "".join(blocks) + "\n")


def _is_module_statement(statement: Statement) -> bool:
    return isinstance(statement, (Import, ReExport))


def _script_statements(statements: list[Statement]) -> list[Statement]:
    """Drop type-only statements, along with a comment standing before one."""
    kept: list[Statement] = []
    for statement in statements:
        type_only = isinstance(statement, TYPE_STATEMENTS) or (
            isinstance(statement, Import) and statement.type_only
        )
        if not type_only:
            kept.append(statement)
        elif kept and isinstance(kept[-1], Comment):
            kept.pop()
    return kept


def _commonjs_exports(
    statements: list[Statement],
) -> tuple[list[Statement], list[str]]:
    """
    Split re-exports off into `module.exports` entries.

    Returns:
        The statements left to render, and the entries in declaration order.
    """
    kept: list[Statement] = []
    exports: list[str] = []
    for statement in statements:
        match statement:
            case ReExport(module=module, namespace=None):
                exports.append(f"...require({naming.quote(module)})")
                continue
            case ReExport(module=module, namespace=namespace):
                exports.append(f"{namespace}: require({naming.quote(module)})")
                continue
            case ConstDecl(name=name) | GetterFunction(name=name):
                exports.append(name)
        kept.append(statement)
    return kept, exports


def render_statement(
    statement: Statement, dialect: Dialect = Dialect.TYPESCRIPT
) -> str:
    if dialect is not Dialect.TYPESCRIPT:
        return _render_script_statement(statement, dialect)

    match statement:
        case Comment(text=text):
            return f"// {text}"
        case Import(names=names, module=module, type_only=type_only):
            keyword = "import type" if type_only else "import"
            return f"{keyword} {{ {', '.join(names)} }} from {naming.quote(module)};"
        case ReExport(module=module, namespace=None):
            return f"export * from {naming.quote(module)};"
        case ReExport(module=module, namespace=namespace):
            return f"export * as {namespace} from {naming.quote(module)};"
        case InterfaceDecl():
            return _with_comment(
                statement.comment,
                f"export interface {statement.name} {render_structure(statement.body)}",
            )
        case UnionType():
            return f"export type {statement.name} = {render_union(statement)};"
        case MappedType(name=name, key_type=key_type, value_type=value_type):
            return (
                f"export type {name} = {{\n"
                f"{INDENT}[key in {key_type}]: {value_type};\n"
                "};"
            )
        case TypeDecl(name=name, expression=expression):
            return f"export type {name} = {expression};"
        case ConstDecl():
            return _with_comment(
                statement.comment,
                f"export const {statement.name} = {render_expr(statement.value)} as const;",
            )
        case EnumDecl(name=name, members=members):
            if not members:
                return f"export enum {name} {{}}"
            lines = [
                f"{INDENT}{member} = {naming.quote(value)},"
                for member, value in members
            ]
            return f"export enum {name} {{\n" + "\n".join(lines) + "\n}"
        case GetterFunction():
            return (
                f"export function {statement.name}<L extends {statement.locales_type}>"
                f"(locale: L): {statement.type_name}[L] {{\n"
                f"{INDENT}return {statement.const_name}[locale];\n"
                "}"
            )
        case JsonDocument(data=data):
            return to_json(data)
    raise TypeError(f"Unsupported statement: {statement!r}")


def _with_comment(comment: str | None, text: str) -> str:
    return f"// {comment}\n{text}" if comment else text


def _render_script_statement(statement: Statement, dialect: Dialect) -> str:
    """Plain JavaScript form of a value statement."""
    export = "export " if dialect is Dialect.ESM else ""
    match statement:
        case Comment(text=text):
            return f"// {text}"
        case Import(names=names, module=module) if dialect is Dialect.COMMONJS:
            return f"const {{ {', '.join(names)} }} = require({naming.quote(module)});"
        case Import() | ReExport() if dialect is Dialect.ESM:
            return render_statement(statement)
        case ConstDecl():
            return _with_comment(
                statement.comment,
                f"{export}const {statement.name} = {render_expr(statement.value)};",
            )
        case GetterFunction():
            return (
                f"{export}function {statement.name}(locale) {{\n"
                f"{INDENT}return {statement.const_name}[locale];\n"
                "}"
            )
    raise TypeError(f"Unsupported {dialect} statement: {statement!r}")


# ============================================================================
# Types
# ============================================================================


def render_structure(structure: Structure, depth: int = 0) -> str:
    """Render a structure as an object type literal; `{}` when empty."""
    if not structure.fields:
        return "{}"
    lines = [_render_field(field, depth + 1) for field in structure.fields]
    return "{\n" + "\n".join(lines) + "\n" + INDENT * depth + "}"


def _render_field(field: Field, depth: int) -> str:
    prefix = INDENT * depth + field.key
    match field.kind:
        case FieldKind.STRING:
            return f"{prefix}: string;"
        case FieldKind.STRING_ARRAY:
            return f"{prefix}: string[];"
        case FieldKind.REFERENCE:
            return f"{prefix}: {field.reference};"
        case _:
            return f"{prefix}: {render_structure(Structure(field.children), depth)};"


def render_union(union: UnionType) -> str:
    if not union.members:
        return union.empty
    if union.references:
        return " | ".join(union.members)
    return " | ".join(naming.quote(member) for member in union.members)


# ============================================================================
# Values
# ============================================================================


def render_expr(expr: Expr, depth: int = 0) -> str:
    match expr:
        case RefExpr(target=target):
            return target
        case LiteralExpr(data=data, inline=True):
            return to_json(data, indent=None)
        case LiteralExpr(data=data):
            return _indent_following_lines(to_json(data), depth)
        case ObjectExpr(entries=entries):
            if not entries:
                return "{}"
            lines = []
            for entry in entries:
                if isinstance(entry, SpreadEntry):
                    spread = render_expr(entry.value, depth + 1)
                    lines.append(f"{INDENT * (depth + 1)}...{spread},")
                else:
                    lines.append(_render_property(entry, depth + 1))
            return "{\n" + "\n".join(lines) + "\n" + INDENT * depth + "}"
    raise TypeError(f"Unsupported expression: {expr!r}")


def _render_property(entry: PropertyEntry, depth: int) -> str:
    return f"{INDENT * depth}{entry.key}: {render_expr(entry.value, depth)},"


def _indent_following_lines(text: str, depth: int) -> str:
    if depth == 0:
        return text
    pad = INDENT * depth
    first, *rest = text.split("\n")
    return "\n".join([first, *(pad + line for line in rest)])


def to_json(data: Any, indent: int | None = 2) -> str:
    """
    Serialize leaf data as JSON.

    Sequential maps become arrays; unicode and `/` are left unescaped.
    """
    return json.dumps(to_jsonable(data), indent=indent, ensure_ascii=False)


def to_jsonable(data: Any) -> Any:
    if isinstance(data, dict):
        if is_sequential(data):
            return [to_jsonable(value) for value in data.values()]
        return {str(key): to_jsonable(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [to_jsonable(value) for value in data]
    return data
