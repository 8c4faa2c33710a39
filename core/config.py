"""
Run configuration.

The configuration is read once, before a run starts, from a JSON file
(`langtypes.json` in the project root by default) and materialized as an
immutable `TranslationConfig`. It is passed explicitly into every component
that needs it; nothing reads configuration from ambient state.
"""

from dataclasses import asdict, dataclass, field, replace
from enum import StrEnum
import json
from pathlib import Path, PurePosixPath
from typing import Any, TypeVar

from constants import (
    DEFAULT_LANG_PATHS,
    DEFAULT_SYSTEM_NAME,
    DEFAULT_TYPE_SUFFIX,
    DEFAULT_VALUE_SUFFIX,
)
from core.exceptions import ConfigurationError
from core.file_io import FileReader, FilesystemFileReader
from models import (
    ExportFormat,
    GenerationMode,
    LocaleFormat,
    ModuleFormat,
    OrganizeBy,
    ScanType,
    StructureFormat,
)

E = TypeVar("E", bound=StrEnum)


@dataclass(frozen=True)
class OutputSettings:
    path: str = "resources/js/types"
    filename: str = "translations.d.ts"


@dataclass(frozen=True)
class ExportSettings:
    path: str = "resources/js/data/translations"
    mode: GenerationMode = GenerationMode.MODULE
    organize_by: OrganizeBy = OrganizeBy.LOCALE_MAPPED
    format: ExportFormat = ExportFormat.TYPESCRIPT
    module_format: ModuleFormat = ModuleFormat.ESM


@dataclass(frozen=True)
class NamingSettings:
    suffix: str = DEFAULT_VALUE_SUFFIX
    locale_format: LocaleFormat = LocaleFormat.SNAKE


@dataclass(frozen=True)
class OrganizeSettings:
    enabled: bool = True
    types_folder: str = "types"
    enums_folder: str = "enums"
    keys_folder: str = "keys"


@dataclass(frozen=True)
class TranslationConfig:
    """
    Immutable configuration of a generation run.

    Attributes:
        paths: Project-relative (or absolute) paths searched for translations.
            Glob wildcards are allowed.
        output: Where generated types go.
        suffix: Suffix appended to every generated interface name.
        scan: Which file types are scanned.
        base_language: Locale whose shape alone drives type generation.
        locales: If non-empty, only these locales are scanned.
        exclude: Translation file names (with or without `.php`) to skip.
        mode: File layout of generated types.
        format: Nested or flat interfaces.
        scan_vendor: Whether vendor packages are searched for translations.
        vendor_paths: Extra vendor paths searched when `scan_vendor` is set.
        export_keys: Whether key unions are emitted next to the types.
        translation_export: Where and how translation values are exported.
        translation_naming: Naming of exported values.
        organize_output: Folder layout of the standalone key export.
        system_translations_name: Source name of the project's own `lang` dir.
    """

    paths: tuple[str, ...] = DEFAULT_LANG_PATHS
    output: OutputSettings = field(default_factory=OutputSettings)
    suffix: str = DEFAULT_TYPE_SUFFIX
    scan: ScanType = ScanType.ALL
    base_language: str | None = None
    locales: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    mode: GenerationMode = GenerationMode.SINGLE
    format: StructureFormat = StructureFormat.NESTED
    scan_vendor: bool = False
    vendor_paths: tuple[str, ...] = ()
    export_keys: bool = True
    translation_export: ExportSettings = field(default_factory=ExportSettings)
    translation_naming: NamingSettings = field(default_factory=NamingSettings)
    organize_output: OrganizeSettings = field(default_factory=OrganizeSettings)
    system_translations_name: str = DEFAULT_SYSTEM_NAME

    @property
    def value_suffix(self) -> str:
        return self.translation_naming.suffix

    @property
    def organize_by(self) -> OrganizeBy:
        return self.translation_export.organize_by

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranslationConfig":
        """
        Build a configuration from decoded JSON, applying defaults.

        Raises:
            ConfigurationError: If an enum-valued option holds an unknown value
                or a section has the wrong type.
        """
        defaults = cls()
        export = _section(data, "translation_export")
        naming = _section(data, "translation_naming")
        output = _section(data, "output")
        organize = _section(data, "organize_output")

        return cls(
            paths=_string_list(data, "paths", defaults.paths),
            output=OutputSettings(
                path=str(output.get("path", defaults.output.path)),
                filename=str(output.get("filename", defaults.output.filename)),
            ),
            suffix=str(data.get("suffix", defaults.suffix)),
            scan=_enum(data, "scan", ScanType, defaults.scan),
            base_language=data.get("base_language") or None,
            locales=_string_list(data, "locales", defaults.locales),
            exclude=_string_list(data, "exclude", defaults.exclude),
            mode=_enum(data, "mode", GenerationMode, defaults.mode),
            format=_enum(data, "format", StructureFormat, defaults.format),
            scan_vendor=bool(data.get("scan_vendor", defaults.scan_vendor)),
            vendor_paths=_string_list(data, "vendor_paths", defaults.vendor_paths),
            export_keys=bool(data.get("export_keys", defaults.export_keys)),
            translation_export=ExportSettings(
                path=str(export.get("path", defaults.translation_export.path)),
                mode=_enum(
                    export,
                    "mode",
                    GenerationMode,
                    defaults.translation_export.mode,
                    "translation_export.mode",
                ),
                organize_by=_enum(
                    export,
                    "organize_by",
                    OrganizeBy,
                    defaults.translation_export.organize_by,
                    "translation_export.organize_by",
                ),
                format=_enum(
                    export,
                    "format",
                    ExportFormat,
                    defaults.translation_export.format,
                    "translation_export.format",
                ),
                module_format=_enum(
                    export,
                    "module_format",
                    ModuleFormat,
                    defaults.translation_export.module_format,
                    "translation_export.module_format",
                ),
            ),
            translation_naming=NamingSettings(
                suffix=str(naming.get("suffix", defaults.translation_naming.suffix)),
                locale_format=_enum(
                    naming,
                    "locale_format",
                    LocaleFormat,
                    defaults.translation_naming.locale_format,
                    "translation_naming.locale_format",
                ),
            ),
            organize_output=OrganizeSettings(
                enabled=bool(
                    organize.get("enabled", defaults.organize_output.enabled)
                ),
                types_folder=str(
                    organize.get("types_folder", defaults.organize_output.types_folder)
                ),
                enums_folder=str(
                    organize.get("enums_folder", defaults.organize_output.enums_folder)
                ),
                keys_folder=str(
                    organize.get("keys_folder", defaults.organize_output.keys_folder)
                ),
            ),
            system_translations_name=str(
                data.get("system_translations_name", defaults.system_translations_name)
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-serializable form, as written by `langtypes init`."""
        data = asdict(self)
        for key in ("paths", "locales", "exclude", "vendor_paths"):
            data[key] = list(data[key])
        return data

    def with_overrides(self, **overrides: Any) -> "TranslationConfig":
        """
        Return a copy with the given top-level fields replaced.

        `None` values are ignored, so CLI options left unset keep the file value.
        """
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self

    def with_output(self, output: str | None) -> "TranslationConfig":
        """
        Apply an `--output` value to the type output settings.

        A value ending in `.ts` names the file itself and is split into
        directory and file name (`resources/js/i18n.d.ts`); anything else is
        the output directory.
        """
        if not output:
            return self
        if output.endswith(".ts"):
            target = PurePosixPath(output)
            settings = replace(
                self.output, path=str(target.parent), filename=target.name
            )
        else:
            settings = replace(self.output, path=output)
        return replace(self, output=settings)


def load_config(
    config_path: Path, file_reader: FileReader | None = None
) -> TranslationConfig:
    """
    Load the configuration file, falling back to defaults when it is absent.

    Args:
        config_path: Path of the JSON configuration file.
        file_reader: Reader used to load the file. Defaults to the filesystem.

    Returns:
        TranslationConfig: The validated configuration.

    Raises:
        ConfigurationError: If the file is not a JSON object or holds invalid values.
        FileReadError: If the file exists but cannot be read.
    """
    reader = file_reader if file_reader is not None else FilesystemFileReader()
    content = reader.read_file(config_path)
    if not content.strip():
        return TranslationConfig()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            message=f"Invalid JSON in configuration file {config_path}: {e.msg} (line {e.lineno})"
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            message=f"Configuration file {config_path} must contain a JSON object"
        )

    return TranslationConfig.from_dict(data)


def parse_enum(value: Any, enum_cls: type[E], option: str) -> E:
    """
    Validate `value` against `enum_cls`.

    Raises:
        ConfigurationError: Naming the option and the accepted values.
    """
    try:
        return enum_cls(value)
    except ValueError as e:
        accepted = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(
            message=f"Invalid value '{value}' for '{option}'. Expected one of: {accepted}",
            option=option,
        ) from e


def _enum(
    data: dict[str, Any],
    key: str,
    enum_cls: type[E],
    default: E,
    option: str | None = None,
) -> E:
    if key not in data or data[key] is None:
        return default
    return parse_enum(data[key], enum_cls, option or key)


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    section = data.get(key) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(message=f"'{key}' must be an object", option=key)
    return section


def _string_list(
    data: dict[str, Any], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list):
        raise ConfigurationError(message=f"'{key}' must be a list", option=key)
    return tuple(str(item) for item in value)
