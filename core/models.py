"""
Core data models for the translation pipeline.

This module defines the in-memory translation tree that scanning folds results
into, the tagged file key that tells JSON-origin translations apart from
structured (PHP array) ones, and the per-locale scan result the value export
consumes.

Leaf maps follow the host array model of the translation files: keys are
either `int` or `str` (canonical decimal strings are coerced to `int`), values
are either `str` or another leaf map. `normalize_leaf_map` establishes that
shape for anything decoded from JSON or PHP.
"""

from dataclasses import dataclass, field
from enum import Enum
import re
from typing import Any, Iterator, Mapping, TypeAlias

from constants import JSON_FILE_KEY

LeafKey: TypeAlias = int | str
LeafMap: TypeAlias = dict[LeafKey, "str | LeafMap"]

_CANONICAL_INT = re.compile(r"0|-?[1-9][0-9]*")
_INT_MAX = 2**63 - 1


class FileOrigin(Enum):
    STRUCTURED = "structured"
    JSON = "json"


@dataclass(frozen=True)
class FileKey:
    """
    Logical location of a translation file within a source.

    Attributes:
        path: Dot-joined path, e.g. `vendors.forms` for `vendors/forms.php`.
            For JSON-origin files it is the sub-directory path of the JSON
            file inside its locale directory (empty for root-level files).
        origin: Whether the translations came from a JSON file, whose content
            is spliced into the source aggregate instead of nested under a
            property.
    """

    path: str
    origin: FileOrigin = FileOrigin.STRUCTURED

    @classmethod
    def json(cls, path: str = "") -> "FileKey":
        return cls(path, FileOrigin.JSON)

    @classmethod
    def parse(cls, raw: str) -> "FileKey":
        """
        Parse the legacy dotted spelling, where `_json` and `_json.<path>`
        denote JSON-origin files.
        """
        if raw == JSON_FILE_KEY:
            return cls.json()
        if raw.startswith(f"{JSON_FILE_KEY}."):
            return cls.json(raw[len(JSON_FILE_KEY) + 1 :])
        return cls(raw)

    @property
    def is_json(self) -> bool:
        return self.origin is FileOrigin.JSON

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self.path.split(".")) if self.path else ()

    def __str__(self) -> str:
        if not self.is_json:
            return self.path
        return f"{JSON_FILE_KEY}.{self.path}" if self.path else JSON_FILE_KEY


def coerce_key(key: Any) -> LeafKey:
    """
    Coerce an array key the way the translation files' host language does.

    Canonical decimal strings become integers, booleans and floats are
    truncated to integers, `None` becomes the empty string.
    """
    if isinstance(key, bool):
        return int(key)
    if isinstance(key, int):
        return key
    if isinstance(key, float):
        return int(key)
    if key is None:
        return ""
    key = str(key)
    if _CANONICAL_INT.fullmatch(key) and abs(int(key)) <= _INT_MAX:
        return int(key)
    return key


def stringify_leaf(value: Any) -> str:
    """Convert a scalar translation value to its string form."""
    if isinstance(value, str):
        return value
    if value is True:
        return "1"
    if value is False or value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def normalize_leaf_map(data: Mapping[Any, Any] | list[Any]) -> LeafMap:
    """
    Return a fresh leaf map with coerced keys and string leaves.

    Lists become integer-keyed maps. Nested containers are normalized
    recursively; the input is never mutated.
    """
    items = enumerate(data) if isinstance(data, list) else data.items()
    result: LeafMap = {}
    for key, value in items:
        if isinstance(value, (Mapping, list)):
            result[coerce_key(key)] = normalize_leaf_map(value)
        else:
            result[coerce_key(key)] = stringify_leaf(value)
    return result


def is_sequential(value: Mapping[LeafKey, Any]) -> bool:
    """
    True iff the map's keys are exactly 0..n-1 in order.

    An empty map is not sequential.
    """
    if not value:
        return False
    return list(value.keys()) == list(range(len(value)))


def merge_leaf_maps(base: LeafMap, incoming: Mapping[LeafKey, Any]) -> None:
    """
    Deep-merge `incoming` into `base` in place.

    Associative maps are merged key by key, recursively. Sequential lists and
    scalars are replaced wholesale by the incoming value. Keys already present
    keep their position; new keys are appended.
    """
    for key, value in incoming.items():
        current = base.get(key)
        if (
            isinstance(current, dict)
            and isinstance(value, dict)
            and not is_sequential(current)
            and not is_sequential(value)
        ):
            merge_leaf_maps(current, value)
        elif isinstance(value, dict):
            base[key] = normalize_leaf_map(value)
        else:
            base[key] = value


def count_leaves(leaf_map: Mapping[LeafKey, Any]) -> int:
    return sum(
        count_leaves(value) if isinstance(value, dict) else 1
        for value in leaf_map.values()
    )


class TranslationTree:
    """
    Sources mapped to file keys mapped to nested translation maps.

    Built fresh for every run by folding scan results, then treated as read-only
    by the structure, planning and rendering stages. Sources, file keys and
    locales keep their insertion order, which is the order every generated
    artifact follows.
    """

    def __init__(self) -> None:
        self._sources: dict[str, dict[FileKey, LeafMap]] = {}
        self._locales: list[str] = []

    def add_translations(
        self,
        source: str,
        file_key: FileKey | str,
        leaf_map: Mapping[Any, Any] | list[Any],
    ) -> None:
        """
        Merge `leaf_map` into the translations recorded for (source, file_key).

        Repeated additions are deep-merged in call order, so later calls win
        on conflicting leaves; earlier content is never replaced wholesale.
        """
        if isinstance(file_key, str):
            file_key = FileKey.parse(file_key)
        files = self._sources.setdefault(source, {})
        normalized = normalize_leaf_map(leaf_map)
        if file_key in files:
            merge_leaf_maps(files[file_key], normalized)
        else:
            files[file_key] = normalized

    def add_locale(self, locale: str) -> None:
        if locale not in self._locales:
            self._locales.append(locale)

    def get_sources(self) -> dict[str, dict[FileKey, LeafMap]]:
        return self._sources

    def get_files(self, source: str) -> dict[FileKey, LeafMap]:
        return self._sources.get(source, {})

    def get(self, source: str, file_key: FileKey) -> LeafMap | None:
        return self._sources.get(source, {}).get(file_key)

    @property
    def locales(self) -> tuple[str, ...]:
        return tuple(self._locales)

    def is_empty(self) -> bool:
        return not self._sources

    def merge(self, other: "TranslationTree") -> None:
        """Fold another tree's sources and locales into this one."""
        for source, files in other.get_sources().items():
            for file_key, leaf_map in files.items():
                self.add_translations(source, file_key, leaf_map)
        for locale in other.locales:
            self.add_locale(locale)

    def __iter__(self) -> Iterator[str]:
        return iter(self._sources)

    def __repr__(self) -> str:
        return (
            f"TranslationTree(sources={list(self._sources)}, "
            f"locales={self._locales})"
        )


@dataclass
class LocaleScan:
    """
    Scan results kept apart per locale.

    Attributes:
        locales: Every observed locale, in discovery order.
        trees: One translation tree per locale that produced content.
        file_counts: Translation files read, per origin.
        skipped_files: Files left out because they could not be parsed.
    """

    locales: list[str] = field(default_factory=list)
    trees: dict[str, TranslationTree] = field(default_factory=dict)
    file_counts: dict[FileOrigin, int] = field(default_factory=dict)
    skipped_files: list[str] = field(default_factory=list)

    def count_file(self, origin: FileOrigin) -> None:
        self.file_counts[origin] = self.file_counts.get(origin, 0) + 1

    def add_locale(self, locale: str) -> None:
        if locale not in self.locales:
            self.locales.append(locale)

    def tree_for(self, locale: str) -> TranslationTree:
        if locale not in self.trees:
            tree = TranslationTree()
            tree.add_locale(locale)
            self.trees[locale] = tree
        return self.trees[locale]

    def is_empty(self) -> bool:
        return all(tree.is_empty() for tree in self.trees.values())

    def default_locale(self, base_language: str | None = None) -> str | None:
        """The configured base language, else the first observed locale."""
        if base_language:
            return base_language
        return self.locales[0] if self.locales else None

    def fold(self, base_language: str | None = None) -> TranslationTree:
        """
        Fold the per-locale trees into one structural tree.

        With a base language only that locale's shape is folded in; all
        observed locales are still recorded on the result.
        """
        folded = TranslationTree()
        for locale in self.locales:
            folded.add_locale(locale)
            if base_language and locale != base_language:
                continue
            if locale in self.trees:
                folded.merge(self.trees[locale])
        return folded
