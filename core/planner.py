"""
Planning of output files for generated types, exported values and keys.

The planner decides which declarations go into which file for each generation
mode:

- single: one file holding every declaration.
- module: one file per source, a shared locale file and a root index.
- granular: one file per translation file, grouped in a directory per source
  with its own index, and a root index.

Types and values are planned independently, but both start from
`compose_sources`, which fixes the identifier, property name and directory of
every source and file once. Because the two paths only differ by the suffix
they append, a value export always lines up with the type generated for it.
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable

from constants import (
    KEYS_FILE_NAME,
    PHP_FILE_MARKER,
    PHP_IDENTIFIER,
    TYPES_HEADER,
    VALUES_HEADER,
)
from core import naming
from core.config import TranslationConfig
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
from core.models import (
    FileKey,
    LeafMap,
    LocaleScan,
    TranslationTree,
    merge_leaf_maps,
    normalize_leaf_map,
)
from core.structure import (
    Field,
    Structure,
    generate_structure,
    reference_structure,
    source_keys,
)
from models import ExportFormat, GenerationMode, KeysFormat, ModuleFormat, OrganizeBy

TYPES_DIR = "translations"
SHARED_TYPES_FILE = "shared.types"
SHARED_VALUES_FILE = "shared"
INDEX_FILE = "index"
SINGLE_VALUES_FILE = "translations"
LOCALE_TYPE = "Locale"
LOCALES_CONST = "locales"


@dataclass(frozen=True)
class ComposedFile:
    """
    A translation file with every name derived for it.

    Attributes:
        file_key: The file's key within its source.
        module: Identifier without suffix, e.g. `VendorsActions`.
        property: Property name inside the source aggregate, or None for
            JSON-origin files, whose keys are spliced into the aggregate.
        granular_name: Base file name in granular mode, e.g. `actions`.
        leaf_map: The file's translations.
    """

    file_key: FileKey
    module: str
    property: str | None
    granular_name: str
    leaf_map: LeafMap


@dataclass(frozen=True)
class ComposedSource:
    """
    A source with every name derived for it.

    Attributes:
        source: Source name as discovered.
        module: Identifier without suffix, e.g. `Vendors`.
        property: Property name inside the top-level aggregate, e.g. `vendors`.
        directory: File-name-safe token, e.g. `vendors`.
        files: The source's non-empty files, in tree order.
    """

    source: str
    module: str
    property: str
    directory: str
    files: tuple[ComposedFile, ...]

    @property
    def leaf_maps(self) -> dict[FileKey, LeafMap]:
        return {composed.file_key: composed.leaf_map for composed in self.files}


def compose_sources(tree: TranslationTree) -> list[ComposedSource]:
    """
    Derive the names of every non-empty source and file of `tree`.

    Files with an empty leaf map are dropped, and a source left without files
    is skipped entirely. Within a source, identifiers and granular file names
    are unique: JSON-origin files claim theirs first, and a structured file
    that would repeat one gets a `Php` (`-php`) marker.
    """
    composed = []
    for source, files in tree.get_sources().items():
        present = [(file_key, leaf_map) for file_key, leaf_map in files.items() if leaf_map]
        if not present:
            continue
        module = naming.build_module_name(source, "")
        names = _unique_file_names(source, module, [file_key for file_key, _ in present])
        composed.append(
            ComposedSource(
                source=source,
                module=module,
                property=naming.to_property_name(source),
                directory=naming.to_filename_safe(source),
                files=tuple(
                    ComposedFile(
                        file_key=file_key,
                        module=names[file_key][0],
                        property=None
                        if file_key.is_json
                        else names[file_key][1],
                        granular_name=names[file_key][2],
                        leaf_map=leaf_map,
                    )
                    for file_key, leaf_map in present
                ),
            )
        )
    return composed


def _unique_file_names(
    source: str, module: str, file_keys: list[FileKey]
) -> dict[FileKey, tuple[str, str, str]]:
    """Map each file key to its (identifier, property, granular name)."""
    modules = {module}
    properties: set[str] = set()
    granular_names = {INDEX_FILE}
    names = {}
    # JSON-origin files first, so their names never depend on the PHP files
    for file_key in sorted(file_keys, key=lambda key: not key.is_json):
        names[file_key] = (
            naming.disambiguate(
                naming.build_file_identifier(source, file_key), modules, PHP_IDENTIFIER
            ),
            ""
            if file_key.is_json
            else naming.disambiguate(
                naming.get_file_property_name(file_key), properties, "_"
            ),
            naming.disambiguate(
                naming.get_granular_file_name(file_key), granular_names, PHP_FILE_MARKER
            ),
        )
    return names


def describe_file(file_key: FileKey) -> str:
    if not file_key.is_json:
        return f"Translations from {file_key.path.replace('.', '/')}.php"
    if file_key.path:
        return f"Translations from JSON files in {file_key.path.replace('.', '/')}/"
    return "Translations from <locale>.json files"


class OutputPlanner:
    """
    Computes the output units of a run from a translation tree.

    All names come from `core.naming`; the configuration decides the mode,
    structure format, suffixes and value organization.
    """

    def __init__(self, config: TranslationConfig):
        self.config = config

    # ========================================================================
    # Types
    # ========================================================================

    def plan_types(self, tree: TranslationTree) -> list[OutputUnit]:
        """
        Plan the type declaration files for `tree`.

        Returns:
            list[OutputUnit]: Units with paths relative to the types output root.
            Empty when the tree holds no translations.
        """
        sources = compose_sources(tree)
        if not sources:
            return []

        match self.config.mode:
            case GenerationMode.MODULE:
                return self._module_types(sources, tree.locales)
            case GenerationMode.GRANULAR:
                return self._granular_types(sources, tree.locales)
            case _:
                return [self._single_types(sources, tree.locales)]

    def _type_name(self, module: str) -> str:
        return naming.get_export_name(module, self.config.suffix)

    def _file_interface(self, composed: ComposedFile) -> InterfaceDecl:
        return InterfaceDecl(
            name=self._type_name(composed.module),
            body=generate_structure(composed.leaf_map, self.config.format),
            comment=describe_file(composed.file_key),
        )

    def _source_interface(self, source: ComposedSource) -> InterfaceDecl:
        """
        The combined interface of a source: structured files nest under their
        property as references, JSON-origin keys are inlined.
        """
        fields: list[Field] = []
        for composed in source.files:
            if composed.property is None:
                spliced = generate_structure(composed.leaf_map, self.config.format)
                fields.extend(spliced.fields)
            else:
                fields.append(
                    Field.ref(
                        naming.get_safe_key(composed.property),
                        self._type_name(composed.module),
                    )
                )
        return InterfaceDecl(
            name=self._type_name(source.module),
            body=Structure(tuple(fields)),
            comment=f"All translations of {source.source}",
        )

    def _aggregate_statements(self, sources: list[ComposedSource]) -> list[Statement]:
        aggregate = naming.get_aggregate_name(self.config.suffix)
        return [
            InterfaceDecl(
                name=aggregate,
                body=reference_structure(
                    (source.property, self._type_name(source.module))
                    for source in sources
                ),
            ),
            MappedType(
                name=naming.get_localized_type_name("", self.config.suffix),
                key_type=LOCALE_TYPE,
                value_type=aggregate,
            ),
        ]

    def _source_keys(self, source: ComposedSource) -> list[Statement]:
        if not self.config.export_keys:
            return []
        return [
            UnionType(
                name=naming.get_keys_type_name(source.module),
                members=tuple(source_keys(source.leaf_maps)),
            )
        ]

    def _combined_keys(self, sources: list[ComposedSource]) -> list[Statement]:
        if not self.config.export_keys:
            return []
        members = tuple(
            f"{source.property}.{key}"
            for source in sources
            for key in source_keys(source.leaf_maps)
        )
        return [
            Comment("Union of all translation keys"),
            UnionType(name=naming.get_keys_type_name(""), members=members),
        ]

    def _source_declarations(self, source: ComposedSource) -> list[Statement]:
        statements: list[Statement] = [
            self._file_interface(composed) for composed in source.files
        ]
        statements.append(self._source_interface(source))
        return statements

    @staticmethod
    def _locale_union(locales: Iterable[str]) -> UnionType:
        return UnionType(name=LOCALE_TYPE, members=tuple(locales), empty="string")

    def _single_types(
        self, sources: list[ComposedSource], locales: tuple[str, ...]
    ) -> OutputUnit:
        statements: list[Statement] = [self._locale_union(locales)]
        for source in sources:
            statements.extend(self._source_declarations(source))
        statements.extend(self._aggregate_statements(sources))
        for source in sources:
            statements.extend(self._source_keys(source))
        statements.extend(self._combined_keys(sources))
        return OutputUnit(
            path=self.config.output.filename,
            statements=tuple(statements),
            header=TYPES_HEADER,
        )

    def _module_types(
        self, sources: list[ComposedSource], locales: tuple[str, ...]
    ) -> list[OutputUnit]:
        units = []
        for source in sources:
            statements: list[Statement] = [
                Import((LOCALE_TYPE,), f"./{SHARED_TYPES_FILE}")
            ]
            statements.extend(self._source_declarations(source))
            statements.append(
                MappedType(
                    name=naming.get_localized_type_name(
                        source.module, self.config.suffix
                    ),
                    key_type=LOCALE_TYPE,
                    value_type=self._type_name(source.module),
                )
            )
            statements.extend(self._source_keys(source))
            units.append(
                OutputUnit(
                    path=f"{TYPES_DIR}/{naming.get_module_file_name(source.source)}.d.ts",
                    statements=tuple(statements),
                    header=TYPES_HEADER,
                    source=source.source,
                )
            )

        units.append(
            OutputUnit(
                path=f"{TYPES_DIR}/{SHARED_TYPES_FILE}.d.ts",
                statements=(self._locale_union(locales),),
                header=TYPES_HEADER,
            )
        )

        shared = f"./{TYPES_DIR}/{SHARED_TYPES_FILE}"
        index: list[Statement] = [ReExport(shared)]
        index.extend(
            ReExport(f"./{TYPES_DIR}/{naming.get_module_file_name(source.source)}")
            for source in sources
        )
        index.append(Import((LOCALE_TYPE,), shared))
        index.extend(
            Import(
                (self._type_name(source.module),),
                f"./{TYPES_DIR}/{naming.get_module_file_name(source.source)}",
            )
            for source in sources
        )
        index.extend(self._aggregate_statements(sources))
        index.extend(self._combined_keys(sources))
        units.append(
            OutputUnit(
                path=self.config.output.filename,
                statements=tuple(index),
                header=TYPES_HEADER,
            )
        )
        return units

    def _granular_types(
        self, sources: list[ComposedSource], locales: tuple[str, ...]
    ) -> list[OutputUnit]:
        units = []
        for source in sources:
            for composed in source.files:
                units.append(
                    OutputUnit(
                        path=(
                            f"{TYPES_DIR}/{source.directory}/"
                            f"{composed.granular_name}.translations.d.ts"
                        ),
                        statements=(self._file_interface(composed),),
                        header=TYPES_HEADER,
                        source=source.source,
                    )
                )

            statements: list[Statement] = [
                ReExport(f"./{composed.granular_name}.translations")
                for composed in source.files
            ]
            statements.extend(
                Import(
                    (self._type_name(composed.module),),
                    f"./{composed.granular_name}.translations",
                )
                for composed in source.files
                if composed.property is not None
            )
            statements.append(self._source_interface(source))
            statements.extend(self._source_keys(source))
            units.append(
                OutputUnit(
                    path=f"{TYPES_DIR}/{source.directory}/{INDEX_FILE}.d.ts",
                    statements=tuple(statements),
                    header=TYPES_HEADER,
                    source=source.source,
                )
            )

        index: list[Statement] = [
            ReExport(f"./{source.directory}") for source in sources
        ]
        index.extend(
            Import((self._type_name(source.module),), f"./{source.directory}")
            for source in sources
        )
        index.append(self._locale_union(locales))
        index.extend(self._aggregate_statements(sources))
        index.extend(self._combined_keys(sources))
        units.append(
            OutputUnit(
                path=f"{TYPES_DIR}/{INDEX_FILE}.d.ts",
                statements=tuple(index),
                header=TYPES_HEADER,
            )
        )
        return units

    # ========================================================================
    # Values
    # ========================================================================

    def plan_values(self, scan: LocaleScan) -> list[OutputUnit]:
        """
        Plan the translation value exports for `scan`.

        Files and sources are composed from the union of all locales, so every
        locale partition and every locale-mapped export uses the same names as
        the generated types.

        Returns:
            list[OutputUnit]: Units with paths relative to the export root.
        """
        sources = compose_sources(scan.fold())
        if not sources:
            return []

        export = self.config.translation_export
        match export.organize_by:
            case OrganizeBy.LOCALE:
                return self._locale_partitions(sources, scan)
            case OrganizeBy.MODULE:
                locale = scan.default_locale(self.config.base_language)
                return self._values_layout(
                    sources, scan.locales, _SingleLocaleValues(scan, locale)
                )[0]
            case _:
                return self._values_layout(
                    sources, scan.locales, _LocaleMappedValues(scan)
                )[0]

    def _locale_partitions(
        self, sources: list[ComposedSource], scan: LocaleScan
    ) -> list[OutputUnit]:
        """
        One directory per locale, each mirroring the mode layout, plus a root
        index exposing every partition as a namespace.
        """
        units: list[OutputUnit] = []
        index: list[Statement] = []
        for locale in scan.locales:
            partition = naming.format_locale(
                locale, self.config.translation_naming.locale_format
            )
            layout, entry = self._values_layout(
                sources, scan.locales, _SingleLocaleValues(scan, locale)
            )
            units.extend(
                replace(unit, path=f"{partition}/{unit.path}") for unit in layout
            )
            index.append(
                ReExport(
                    f"./{partition}/{entry}", namespace=naming.get_safe_key(partition)
                )
            )

        if self._emits_code:
            index.extend(self._locales_statements(scan.locales))
            units.append(
                OutputUnit(
                    path=self._code_file(INDEX_FILE),
                    statements=tuple(index),
                    header=VALUES_HEADER,
                    dialect=self._dialect,
                )
            )
        return units

    @property
    def _emits_code(self) -> bool:
        return self.config.translation_export.format != ExportFormat.JSON

    @property
    def _emits_json(self) -> bool:
        return self.config.translation_export.format in (
            ExportFormat.JSON,
            ExportFormat.BOTH,
        )

    @property
    def _dialect(self) -> Dialect:
        export = self.config.translation_export
        if export.format != ExportFormat.JAVASCRIPT:
            return Dialect.TYPESCRIPT
        if export.module_format == ModuleFormat.COMMONJS:
            return Dialect.COMMONJS
        return Dialect.ESM

    def _code_file(self, name: str) -> str:
        """`name` with the extension of the exported modules."""
        extension = naming.get_file_extension(self.config.translation_export.format)
        return f"{name}.{extension}"

    def _export_name(self, module: str) -> str:
        return naming.get_export_name(module, self.config.value_suffix)

    def _values_layout(
        self,
        sources: list[ComposedSource],
        locales: Iterable[str],
        values: "_ValueStrategy",
    ) -> tuple[list[OutputUnit], str]:
        """
        Plan the value files of one mode layout.

        Returns:
            The units, and the extension-less path of the layout's entry module.
        """
        match self.config.translation_export.mode:
            case GenerationMode.MODULE:
                code_units, json_units = self._module_values(sources, locales, values)
                entry = INDEX_FILE
            case GenerationMode.GRANULAR:
                code_units, json_units = self._granular_values(sources, locales, values)
                entry = INDEX_FILE
            case _:
                code_units, json_units = self._single_values(sources, locales, values)
                entry = SINGLE_VALUES_FILE

        units: list[OutputUnit] = []
        if self._emits_code:
            units.extend(code_units)
        if self._emits_json:
            units.extend(json_units)
        return units, entry

    def _single_values(
        self,
        sources: list[ComposedSource],
        locales: Iterable[str],
        values: "_ValueStrategy",
    ) -> tuple[list[OutputUnit], list[OutputUnit]]:
        statements = self._locales_statements(locales)
        for source in sources:
            statements.extend(self._source_value_statements(source, values))
        statements.extend(self._aggregate_values(sources))
        data = {source.property: values.source_data(source) for source in sources}
        return (
            [self._values_unit(self._code_file(SINGLE_VALUES_FILE), statements)],
            [self._json_unit(f"{SINGLE_VALUES_FILE}.json", data)],
        )

    def _module_values(
        self,
        sources: list[ComposedSource],
        locales: Iterable[str],
        values: "_ValueStrategy",
    ) -> tuple[list[OutputUnit], list[OutputUnit]]:
        code_units = []
        json_units = []
        for source in sources:
            module_file = naming.get_module_file_name(source.source)
            code_units.append(
                self._values_unit(
                    self._code_file(module_file),
                    self._source_value_statements(source, values),
                    source.source,
                )
            )
            json_units.append(
                self._json_unit(
                    f"{module_file}.json", values.source_data(source), source.source
                )
            )
        code_units.append(
            self._values_unit(
                self._code_file(SHARED_VALUES_FILE), self._locales_statements(locales)
            )
        )

        index: list[Statement] = [ReExport(f"./{SHARED_VALUES_FILE}")]
        index.extend(
            ReExport(f"./{naming.get_module_file_name(source.source)}")
            for source in sources
        )
        index.extend(
            Import(
                (self._export_name(source.module),),
                f"./{naming.get_module_file_name(source.source)}",
                type_only=False,
            )
            for source in sources
        )
        index.extend(self._aggregate_values(sources))
        code_units.append(self._values_unit(self._code_file(INDEX_FILE), index))
        return code_units, json_units

    def _granular_values(
        self,
        sources: list[ComposedSource],
        locales: Iterable[str],
        values: "_ValueStrategy",
    ) -> tuple[list[OutputUnit], list[OutputUnit]]:
        code_units = []
        json_units = []
        for source in sources:
            for composed in source.files:
                path = f"{source.directory}/{composed.granular_name}"
                code_units.append(
                    self._values_unit(
                        self._code_file(path),
                        self._file_value_statements(source, composed, values),
                        source.source,
                    )
                )
                json_units.append(
                    self._json_unit(
                        f"{path}.json",
                        values.file_data(source, composed),
                        source.source,
                    )
                )

            source_index: list[Statement] = [
                ReExport(f"./{composed.granular_name}") for composed in source.files
            ]
            source_index.extend(
                Import(
                    (self._export_name(composed.module),),
                    f"./{composed.granular_name}",
                    type_only=False,
                )
                for composed in source.files
            )
            source_index.extend(self._combined_value_statements(source, values))
            code_units.append(
                self._values_unit(
                    self._code_file(f"{source.directory}/{INDEX_FILE}"),
                    source_index,
                    source.source,
                )
            )

        root: list[Statement] = [ReExport(f"./{source.directory}") for source in sources]
        root.extend(
            Import(
                (self._export_name(source.module),),
                f"./{source.directory}",
                type_only=False,
            )
            for source in sources
        )
        root.extend(self._locales_statements(locales))
        root.extend(self._aggregate_values(sources))
        code_units.append(self._values_unit(self._code_file(INDEX_FILE), root))
        return code_units, json_units

    def _values_unit(
        self, path: str, statements: list[Statement], source: str | None = None
    ) -> OutputUnit:
        return OutputUnit(
            path=path,
            statements=tuple(statements),
            header=VALUES_HEADER,
            source=source,
            dialect=self._dialect,
        )

    @staticmethod
    def _json_unit(path: str, data: Any, source: str | None = None) -> OutputUnit:
        return OutputUnit(path=path, statements=(JsonDocument(data),), source=source)

    @staticmethod
    def _locales_statements(locales: Iterable[str]) -> list[Statement]:
        return [
            ConstDecl(LOCALES_CONST, LiteralExpr(list(locales), inline=True)),
            TypeDecl(LOCALE_TYPE, f"(typeof {LOCALES_CONST})[number]"),
        ]

    def _declare_value(
        self,
        module: str,
        value: Expr,
        values: "_ValueStrategy",
        comment: str | None = None,
    ) -> list[Statement]:
        """
        Declare one exported value with its type, and for locale-mapped
        exports its locale union and typed getter.
        """
        export = self._export_name(module)
        type_name = naming.get_type_name(export)
        statements: list[Statement] = [
            ConstDecl(export, value, comment),
            TypeDecl(type_name, f"typeof {export}"),
        ]
        if values.locale_mapped:
            locales_type = naming.get_locales_type_name(module)
            statements.append(TypeDecl(locales_type, f"keyof {type_name}"))
            statements.append(
                GetterFunction(
                    name=naming.get_getter_function_name(module),
                    const_name=export,
                    type_name=type_name,
                    locales_type=locales_type,
                )
            )
        return statements

    def _file_value_statements(
        self,
        source: ComposedSource,
        composed: ComposedFile,
        values: "_ValueStrategy",
    ) -> list[Statement]:
        return self._declare_value(
            composed.module,
            LiteralExpr(values.file_data(source, composed)),
            values,
            comment=describe_file(composed.file_key),
        )

    def _source_value_statements(
        self, source: ComposedSource, values: "_ValueStrategy"
    ) -> list[Statement]:
        statements: list[Statement] = []
        for composed in source.files:
            statements.extend(self._file_value_statements(source, composed, values))
        statements.extend(self._combined_value_statements(source, values))
        return statements

    def _combined_value_statements(
        self, source: ComposedSource, values: "_ValueStrategy"
    ) -> list[Statement]:
        return self._declare_value(
            source.module,
            values.source_value(source, self._export_name),
            values,
            comment=f"All translations of {source.source}",
        )

    def _aggregate_values(self, sources: list[ComposedSource]) -> list[Statement]:
        aggregate = naming.get_aggregate_name(self.config.value_suffix)
        const_name = naming.camel(aggregate)
        return [
            ConstDecl(
                const_name,
                ObjectExpr(
                    tuple(
                        PropertyEntry(
                            naming.get_safe_key(source.property),
                            RefExpr(self._export_name(source.module)),
                        )
                        for source in sources
                    )
                ),
            ),
            TypeDecl(naming.studly(aggregate), f"typeof {const_name}"),
        ]

    # ========================================================================
    # Keys
    # ========================================================================

    def plan_keys(
        self,
        tree: TranslationTree,
        keys_format: KeysFormat | str = KeysFormat.UNION,
        selected_sources: Iterable[str] = (),
    ) -> OutputUnit | None:
        """
        Plan the standalone translation key export.

        Args:
            tree: The structural translation tree.
            keys_format: `union`, `enum` or `const`.
            selected_sources: Restrict the export to these source names.

        Returns:
            OutputUnit | None: The key file, relative to the types output root,
            or None when no selected source has keys.
        """
        keys_format = KeysFormat(keys_format)
        selected = set(selected_sources)
        sources = [
            source
            for source in compose_sources(tree)
            if not selected or source.source in selected
        ]
        if not sources:
            return None

        statements: list[Statement] = []
        for source in sources:
            keys = source_keys(source.leaf_maps)
            statements.append(Comment(f"Keys for {source.source}"))
            statements.extend(
                _key_declarations(
                    naming.get_key_export_name(source.module, keys_format),
                    keys,
                    keys_format,
                )
            )

        if len(sources) > 1:
            statements.append(Comment("Combined translation keys"))
            combined = naming.get_key_export_name("Translation", keys_format)
            if keys_format is KeysFormat.UNION:
                statements.append(
                    UnionType(
                        combined,
                        tuple(
                            naming.get_key_export_name(source.module, keys_format)
                            for source in sources
                        ),
                        references=True,
                    )
                )
            else:
                prefixed = [
                    f"{source.property}.{key}"
                    for source in sources
                    for key in source_keys(source.leaf_maps)
                ]
                statements.extend(_key_declarations(combined, prefixed, keys_format))

        return OutputUnit(
            path=self._keys_path(keys_format),
            statements=tuple(statements),
            header=(*TYPES_HEADER[:1], "Translation keys export"),
        )

    def _keys_path(self, keys_format: KeysFormat) -> str:
        organize = self.config.organize_output
        if not organize.enabled:
            return KEYS_FILE_NAME
        folder = {
            KeysFormat.ENUM: organize.enums_folder,
            KeysFormat.CONST: organize.keys_folder,
        }.get(keys_format, organize.types_folder)
        return f"{folder}/{KEYS_FILE_NAME}"


def _key_declarations(
    name: str, keys: list[str], keys_format: KeysFormat
) -> list[Statement]:
    if keys_format is KeysFormat.UNION:
        return [UnionType(name, tuple(keys))]

    if keys_format is KeysFormat.ENUM:
        members: dict[str, str] = {}
        for key in keys:
            members.setdefault(naming.get_enum_member_name(key), key)
        return [EnumDecl(name, tuple(members.items()))]

    entries: dict[str, PropertyEntry] = {}
    for key in keys:
        safe_key = naming.get_safe_key(key)
        entries.setdefault(safe_key, PropertyEntry(safe_key, LiteralExpr(key, inline=True)))
    return [
        ConstDecl(name, ObjectExpr(tuple(entries.values()))),
        TypeDecl(naming.get_type_name(name), f"(typeof {name})[keyof typeof {name}]"),
    ]


# ============================================================================
# Value strategies
# ============================================================================


def _member(export: str, locale: str) -> str:
    if naming.is_identifier(locale):
        return f"{export}.{locale}"
    return f"{export}[{naming.quote(locale)}]"


def _resolve(
    source: ComposedSource, data_of: Callable[[ComposedFile], LeafMap | None]
) -> dict[Any, Any]:
    """Resolved data of a source: JSON keys at the root, files under their property."""
    resolved: dict[Any, Any] = {}
    for composed in source.files:
        data = data_of(composed)
        if data is None:
            continue
        if composed.property is None:
            merge_leaf_maps(resolved, data)
        else:
            resolved[composed.property] = normalize_leaf_map(data)
    return resolved


class _ValueStrategy:
    """How the value of a file or source export is built."""

    locale_mapped: bool = False

    def file_data(self, source: ComposedSource, composed: ComposedFile) -> Any:
        raise NotImplementedError

    def source_data(self, source: ComposedSource) -> Any:
        raise NotImplementedError

    def source_value(
        self, source: ComposedSource, export_name: Callable[[str], str]
    ) -> Expr:
        raise NotImplementedError


class _SingleLocaleValues(_ValueStrategy):
    """Exports hold one locale's data; files missing in it export `{}`."""

    def __init__(self, scan: LocaleScan, locale: str | None):
        self.tree = scan.trees.get(locale) if locale else None

    def _data(self, source: str, composed: ComposedFile) -> LeafMap | None:
        if self.tree is None:
            return None
        return self.tree.get(source, composed.file_key)

    def file_data(self, source: ComposedSource, composed: ComposedFile) -> Any:
        return self._data(source.source, composed) or {}

    def source_data(self, source: ComposedSource) -> Any:
        return _resolve(source, lambda composed: self._data(source.source, composed))

    def source_value(
        self, source: ComposedSource, export_name: Callable[[str], str]
    ) -> Expr:
        entries: list[PropertyEntry | SpreadEntry] = []
        for composed in source.files:
            reference = RefExpr(export_name(composed.module))
            if composed.property is None:
                entries.append(SpreadEntry(reference))
            else:
                entries.append(
                    PropertyEntry(naming.get_safe_key(composed.property), reference)
                )
        return ObjectExpr(tuple(entries))


class _LocaleMappedValues(_ValueStrategy):
    """Exports map every locale holding the file to that locale's data."""

    locale_mapped = True

    def __init__(self, scan: LocaleScan):
        self.scan = scan

    def _locales_of(
        self, source: ComposedSource, composed: ComposedFile
    ) -> dict[str, LeafMap]:
        mapped = {}
        for locale in self.scan.locales:
            tree = self.scan.trees.get(locale)
            data = tree.get(source.source, composed.file_key) if tree else None
            if data:
                mapped[locale] = data
        return mapped

    def file_data(self, source: ComposedSource, composed: ComposedFile) -> Any:
        return self._locales_of(source, composed)

    def source_data(self, source: ComposedSource) -> Any:
        per_file = {
            composed.file_key: self._locales_of(source, composed)
            for composed in source.files
        }
        return {
            locale: _resolve(
                source, lambda composed: per_file[composed.file_key].get(locale)
            )
            for locale in self._source_locales(per_file)
        }

    def source_value(
        self, source: ComposedSource, export_name: Callable[[str], str]
    ) -> Expr:
        per_file = {
            composed.file_key: self._locales_of(source, composed)
            for composed in source.files
        }
        branches = []
        for locale in self._source_locales(per_file):
            entries: list[PropertyEntry | SpreadEntry] = []
            for composed in source.files:
                if locale not in per_file[composed.file_key]:
                    continue
                reference = RefExpr(_member(export_name(composed.module), locale))
                if composed.property is None:
                    entries.append(SpreadEntry(reference))
                else:
                    entries.append(
                        PropertyEntry(naming.get_safe_key(composed.property), reference)
                    )
            branches.append(
                PropertyEntry(naming.get_flat_key(locale), ObjectExpr(tuple(entries)))
            )
        return ObjectExpr(tuple(branches))

    def _source_locales(self, per_file: dict[FileKey, dict[str, LeafMap]]) -> list[str]:
        return [
            locale
            for locale in self.scan.locales
            if any(locale in mapped for mapped in per_file.values())
        ]
