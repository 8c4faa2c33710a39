"""
Translation statistics shown by the `scan` command.
"""

from dataclasses import dataclass, field

from core.models import TranslationTree, count_leaves
from models import ScanSummary, SourceSummary


@dataclass(frozen=True)
class SourceStatistics:
    """
    Attributes:
        source: Source name.
        file_keys: Leaf counts per file key, in scan order.
    """

    source: str
    file_keys: dict[str, int] = field(default_factory=dict)

    @property
    def files(self) -> int:
        return len(self.file_keys)

    @property
    def keys(self) -> int:
        return sum(self.file_keys.values())


@dataclass(frozen=True)
class ScanStatistics:
    locales: tuple[str, ...]
    sources: tuple[SourceStatistics, ...]

    @property
    def total_files(self) -> int:
        return sum(source.files for source in self.sources)

    @property
    def total_keys(self) -> int:
        return sum(source.keys for source in self.sources)

    def to_dict(self) -> ScanSummary:
        return ScanSummary(
            locales=list(self.locales),
            sources=[
                SourceSummary(source=s.source, files=s.files, keys=s.keys)
                for s in self.sources
            ],
            total_files=self.total_files,
            total_keys=self.total_keys,
        )


def collect_statistics(tree: TranslationTree) -> ScanStatistics:
    """
    Count files and leaf strings per source.

    Every element of a sequential array counts as one key.
    """
    sources = tuple(
        SourceStatistics(
            source,
            {str(file_key): count_leaves(leaf_map) for file_key, leaf_map in files.items()},
        )
        for source, files in tree.get_sources().items()
    )
    return ScanStatistics(locales=tree.locales, sources=sources)
