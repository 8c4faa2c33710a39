"""
Structural description of translation maps.

A `Structure` is the language-neutral shape of one leaf map: a list of fields
that are either plain strings, string arrays, nested structures or references
to another declared interface. The renderer turns it into an interface body;
nothing here knows about TypeScript syntax beyond which property names need
quoting.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

from constants import JSON_FILE_KEY
from core import naming
from core.models import FileKey, LeafKey, LeafMap, is_sequential
from models import StructureFormat


class FieldKind(Enum):
    STRING = "string"
    STRING_ARRAY = "string[]"
    OBJECT = "object"
    REFERENCE = "reference"


@dataclass(frozen=True)
class Field:
    """
    One property of a structure.

    Attributes:
        key: The property name as it must appear in output (already escaped
            and quoted where necessary).
        kind: The field's type.
        children: Nested fields, for OBJECT fields.
        reference: Name of the referenced declaration, for REFERENCE fields.
    """

    key: str
    kind: FieldKind
    children: tuple["Field", ...] = ()
    reference: str | None = None

    @classmethod
    def string(cls, key: str) -> "Field":
        return cls(key, FieldKind.STRING)

    @classmethod
    def ref(cls, key: str, reference: str) -> "Field":
        return cls(key, FieldKind.REFERENCE, reference=reference)


@dataclass(frozen=True)
class Structure:
    fields: tuple[Field, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return bool(self.fields)

    def __add__(self, other: "Structure") -> "Structure":
        return Structure(self.fields + other.fields)


def generate_structure(
    leaf_map: Mapping[LeafKey, Any], format: StructureFormat | str
) -> Structure:
    """
    Describe the shape of `leaf_map`.

    Args:
        leaf_map: Normalized translation map.
        format: `nested` mirrors the map, with sequential arrays as `string[]`;
            `flat` emits one string field per dotted leaf path.

    Returns:
        Structure: The description. Empty for an empty map.
    """
    if StructureFormat(format) is StructureFormat.FLAT:
        return Structure(
            tuple(Field.string(naming.get_flat_key(key)) for key in flatten(leaf_map))
        )
    return Structure(_nested_fields(leaf_map))


def _nested_fields(leaf_map: Mapping[LeafKey, Any]) -> tuple[Field, ...]:
    fields = []
    for key, value in leaf_map.items():
        safe_key = naming.get_safe_key(str(key))
        if not isinstance(value, dict):
            fields.append(Field.string(safe_key))
        elif is_sequential(value):
            fields.append(Field(safe_key, FieldKind.STRING_ARRAY))
        else:
            fields.append(Field(safe_key, FieldKind.OBJECT, _nested_fields(value)))
    return tuple(fields)


def flatten(
    leaf_map: Mapping[LeafKey, Any], prefix: str = "", separator: str = "."
) -> dict[str, str]:
    """
    Dot-flatten every nested map, sequential arrays included.

    `{"a": {"b": "x"}, "c": ["y"]}` -> `{"a.b": "x", "c.0": "y"}`.
    """
    result: dict[str, str] = {}
    for key, value in leaf_map.items():
        path = f"{prefix}{separator}{key}" if prefix else str(key)
        if isinstance(value, dict):
            result.update(flatten(value, path, separator))
        else:
            result[path] = value
    return result


def generate_keys(leaf_map: Mapping[LeafKey, Any], prefix: str = "") -> list[str]:
    """
    List the dotted paths of every leaf, in map order.

    Sequential arrays count as a single key. At the top level a `_json` entry
    is transparent: its children are listed as if they were top-level keys.
    """
    keys: list[str] = []
    for key, value in leaf_map.items():
        if key == JSON_FILE_KEY and not prefix:
            if isinstance(value, dict):
                keys.extend(generate_keys(value))
            continue

        current = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, dict) and not is_sequential(value):
            keys.extend(generate_keys(value, current))
        else:
            keys.append(current)
    return keys


def source_keys(files: Mapping[FileKey, LeafMap]) -> list[str]:
    """
    List the translation keys of a whole source.

    Structured files prefix their keys with the dotted file key
    (`actions.create`); JSON-origin keys are listed without prefix.
    Duplicates keep their first position.
    """
    keys: dict[str, None] = {}
    for file_key, leaf_map in files.items():
        prefix = "" if file_key.is_json else file_key.path
        for key in generate_keys(leaf_map, prefix):
            keys.setdefault(key, None)
    return list(keys)


def reference_structure(references: Iterable[tuple[str, str]]) -> Structure:
    """Build a structure of reference fields from (property, declaration) pairs."""
    return Structure(
        tuple(
            Field.ref(naming.get_safe_key(prop), reference)
            for prop, reference in references
        )
    )
