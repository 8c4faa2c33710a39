"""
Translation analytics shown by the `analytics` command.

Extends the per-source counts of `core.statistics` with the discovered
paths, the number of PHP and JSON files read, and averages over both.
"""

from dataclasses import dataclass
from pathlib import Path

from core.models import FileKey, FileOrigin, LocaleScan, count_leaves
from core.statistics import ScanStatistics, collect_statistics
from models import (
    AnalyticsSummary,
    FileDetail,
    PathEntry,
    SourceAnalytics,
)


@dataclass(frozen=True)
class PathStatus:
    source: str
    path: Path
    exists: bool


@dataclass(frozen=True)
class FileBreakdown:
    file_key: FileKey
    keys: int

    @property
    def type(self) -> str:
        return "json" if self.file_key.is_json else "php"


@dataclass(frozen=True)
class TranslationAnalytics:
    """
    Attributes:
        statistics: Per-source file and key counts of the structural tree.
        paths: Every discovered translation directory, per source.
        files: Per-file key counts, per source, in scan order.
        php_files: PHP translation files read.
        json_files: JSON translation files read.
        skipped_files: Files left out because they could not be parsed.
    """

    statistics: ScanStatistics
    paths: tuple[PathStatus, ...]
    files: dict[str, tuple[FileBreakdown, ...]]
    php_files: int
    json_files: int
    skipped_files: tuple[str, ...] = ()

    @property
    def total_files(self) -> int:
        return self.php_files + self.json_files

    @property
    def total_keys(self) -> int:
        return self.statistics.total_keys

    @property
    def total_sources(self) -> int:
        return len(self.statistics.sources)

    @property
    def avg_keys_per_file(self) -> float:
        return round(self.total_keys / self.total_files, 2) if self.total_files else 0

    @property
    def avg_keys_per_source(self) -> float:
        return round(self.total_keys / self.total_sources, 2) if self.total_sources else 0

    @property
    def php_vs_json_ratio(self) -> float:
        """PHP files per JSON file; the PHP count itself when there is no JSON."""
        if not self.json_files:
            return self.php_files
        return round(self.php_files / self.json_files, 2)

    def to_dict(self, detailed: bool = False) -> AnalyticsSummary:
        sources = []
        for source in self.statistics.sources:
            entry = SourceAnalytics(
                name=source.source, files_count=source.files, keys_count=source.keys
            )
            if detailed:
                entry["files"] = {
                    str(breakdown.file_key): FileDetail(
                        keys=breakdown.keys, type=breakdown.type
                    )
                    for breakdown in self.files.get(source.source, ())
                }
            sources.append(entry)

        return AnalyticsSummary(
            overview={
                "total_paths": len(self.paths),
                "total_files": self.total_files,
                "total_keys": self.total_keys,
                "total_sources": self.total_sources,
                "total_locales": len(self.statistics.locales),
            },
            sources=sources,
            locales=list(self.statistics.locales),
            file_types={"php": self.php_files, "json": self.json_files},
            statistics={
                "avg_keys_per_file": self.avg_keys_per_file,
                "avg_keys_per_source": self.avg_keys_per_source,
                "php_vs_json_ratio": self.php_vs_json_ratio,
            },
            paths_list=[
                PathEntry(source=status.source, path=str(status.path), exists=status.exists)
                for status in self.paths
            ],
            skipped_files=list(self.skipped_files),
        )


def collect_analytics(
    paths: dict[str, list[Path]],
    scan: LocaleScan,
    base_language: str | None = None,
) -> TranslationAnalytics:
    """
    Combine discovered paths and a locale scan into analytics.

    Key counts come from the structural tree (every locale folded, or only
    `base_language`); file counts are every translation file the scan read,
    including the ones it had to skip.
    """
    tree = scan.fold(base_language)
    return TranslationAnalytics(
        statistics=collect_statistics(tree),
        paths=tuple(
            PathStatus(source, path, path.is_dir())
            for source, source_paths in paths.items()
            for path in source_paths
        ),
        files={
            source: tuple(
                FileBreakdown(file_key, count_leaves(leaf_map))
                for file_key, leaf_map in files.items()
            )
            for source, files in tree.get_sources().items()
        },
        php_files=scan.file_counts.get(FileOrigin.STRUCTURED, 0),
        json_files=scan.file_counts.get(FileOrigin.JSON, 0),
        skipped_files=tuple(scan.skipped_files),
    )
