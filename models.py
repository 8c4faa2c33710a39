"""
Type definitions and data models used across the langtypes CLI application.

This module contains shared type definitions including enums and TypedDict
structures that are used throughout the codebase for type safety and consistency.
Every enum value is the literal accepted in the configuration file and on the
command line.
"""

from enum import StrEnum
from typing import TypedDict


class GenerationMode(StrEnum):
    """
    How generated output is split into files.

    SINGLE writes everything into one file, MODULE writes one file per source
    plus shared and index files, GRANULAR writes one file per translation file
    grouped in a directory per source.
    """

    SINGLE = "single"
    MODULE = "module"
    GRANULAR = "granular"


class StructureFormat(StrEnum):
    """Shape of the generated interfaces: nested objects or dotted flat keys."""

    NESTED = "nested"
    FLAT = "flat"


class OrganizeBy(StrEnum):
    """
    Organization strategy for exported translation values.

    Attributes:
        LOCALE: One directory partition per locale, each holding single-locale exports.
        MODULE: Single-locale exports (the default locale) organized by module.
        LOCALE_MAPPED: Every export maps each observed locale to its data.
    """

    LOCALE = "locale"
    MODULE = "module"
    LOCALE_MAPPED = "locale-mapped"


class ExportFormat(StrEnum):
    """
    File format of exported translation values.

    BOTH writes the TypeScript modules and the JSON data files side by side.
    JAVASCRIPT writes plain `.js` modules without type declarations.
    """

    TYPESCRIPT = "typescript"
    JAVASCRIPT = "javascript"
    JSON = "json"
    BOTH = "both"


class ModuleFormat(StrEnum):
    """Module system of JavaScript value exports."""

    ESM = "esm"
    COMMONJS = "commonjs"


class ScanType(StrEnum):
    """Which translation file types the scanner reads."""

    ALL = "all"
    PHP = "php"
    JSON = "json"


class KeysFormat(StrEnum):
    """Declaration style used when exporting translation keys."""

    UNION = "union"
    ENUM = "enum"
    CONST = "const"


class LocaleFormat(StrEnum):
    SNAKE = "snake"
    KEBAB = "kebab"
    CAMEL = "camel"
    STUDLY = "studly"


class SourceSummary(TypedDict):
    """
    Type definition for the per-source entry of a scan summary.

    Attributes:
        source: Source (logical translation module) name.
        files: Number of translation files holding content.
        keys: Number of leaf translation strings.
    """

    source: str
    files: int
    keys: int


class ScanSummary(TypedDict):
    """
    Type definition for the machine-readable output of the `scan` command.

    Attributes:
        locales: Observed locales in discovery order.
        sources: Per-source statistics.
        total_files: Sum of files over all sources.
        total_keys: Sum of keys over all sources.
    """

    locales: list[str]
    sources: list[SourceSummary]
    total_files: int
    total_keys: int


class AnalyticsOverview(TypedDict):
    total_paths: int
    total_files: int
    total_keys: int
    total_sources: int
    total_locales: int


class AnalyticsRatios(TypedDict):
    avg_keys_per_file: float
    avg_keys_per_source: float
    php_vs_json_ratio: float


class FileDetail(TypedDict):
    keys: int
    type: str


class SourceAnalytics(TypedDict, total=False):
    """
    Per-source entry of the `analytics` output; `files` only with `--detailed`.
    """

    name: str
    files_count: int
    keys_count: int
    files: dict[str, FileDetail]


class PathEntry(TypedDict):
    source: str
    path: str
    exists: bool


class AnalyticsSummary(TypedDict):
    """
    Type definition for the machine-readable output of the `analytics` command.

    Attributes:
        overview: Totals over every discovered path and source.
        sources: Per-source file and key counts.
        locales: Observed locales in discovery order.
        file_types: Translation files read, by format (`php`, `json`).
        statistics: Averages and the PHP/JSON file ratio.
        paths_list: Every discovered translation directory.
        skipped_files: Files left out because they could not be parsed.
    """

    overview: AnalyticsOverview
    sources: list[SourceAnalytics]
    locales: list[str]
    file_types: dict[str, int]
    statistics: AnalyticsRatios
    paths_list: list[PathEntry]
    skipped_files: list[str]
