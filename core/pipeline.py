"""
Generation pipeline.

Each command runs the same stages: discovery -> scanning -> planning ->
rendering -> writing. Everything before the write step is free of side
effects; the rendered files are handed to a `FileWriter` only at the end, and
the first failed write aborts the run (files already written stay in place).
"""

from pathlib import Path

from adapters.discovery import PathsCollector
from adapters.scanners import ScannerManager
from core.analytics import TranslationAnalytics, collect_analytics
from core.config import TranslationConfig
from core.exceptions import DiscoveryEmptyError, FileIOError, ScanEmptyError
from core.file_io import FileReader, FilesystemFileWriter, FileWriter
from core.models import LocaleScan, TranslationTree
from core.planner import OutputPlanner
from core.renderer import RenderedFile, render_unit, render_units
from core.statistics import ScanStatistics, collect_statistics
from core.validation import ValidationReport, validate_locales
from models import KeysFormat
from ui.progress import ProgressDisplay, ProgressState, RichProgressDisplay
from utils import debug


def discover_paths(root: Path, config: TranslationConfig) -> dict[str, list[Path]]:
    """
    Raises:
        DiscoveryEmptyError: If no translation directory was found.
    """
    paths = PathsCollector(root, config).collect()
    if not paths:
        raise DiscoveryEmptyError(
            message=f"No translation paths found in {root} "
            f"(searched: {', '.join(config.paths)})"
        )
    return paths


def scan_locales(
    root: Path,
    config: TranslationConfig,
    file_reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
    paths: dict[str, list[Path]] | None = None,
) -> LocaleScan:
    """
    Scan every translation path, discovering them first unless `paths` is given.

    Raises:
        DiscoveryEmptyError: If no translation directory was found.
        ScanEmptyError: If the directories hold no translations.
    """
    paths = paths if paths is not None else discover_paths(root, config)
    debug(f"Discovered sources: {', '.join(paths)}")
    scan = ScannerManager(config, file_reader, progress_display).scan(paths)
    if scan.is_empty():
        raise ScanEmptyError()
    return scan


def build_tree(
    root: Path,
    config: TranslationConfig,
    file_reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
) -> TranslationTree:
    """The structural tree: every locale folded, or only the base language."""
    scan = scan_locales(root, config, file_reader, progress_display)
    tree = scan.fold(config.base_language)
    if tree.is_empty():
        raise ScanEmptyError(
            message=f"No translation files found for base language '{config.base_language}'"
        )
    return tree


# ============================================================================
# Rendering (pure)
# ============================================================================


def render_types(tree: TranslationTree, config: TranslationConfig) -> list[RenderedFile]:
    return render_units(OutputPlanner(config).plan_types(tree))


def render_values(scan: LocaleScan, config: TranslationConfig) -> list[RenderedFile]:
    return render_units(OutputPlanner(config).plan_values(scan))


def render_keys(
    tree: TranslationTree,
    config: TranslationConfig,
    keys_format: KeysFormat | str = KeysFormat.UNION,
    selected_sources: tuple[str, ...] = (),
) -> RenderedFile | None:
    unit = OutputPlanner(config).plan_keys(tree, keys_format, selected_sources)
    return render_unit(unit) if unit is not None else None


# ============================================================================
# Writing
# ============================================================================


def write_files(
    files: list[RenderedFile],
    writer: FileWriter,
    progress_display: ProgressDisplay | None = None,
) -> list[Path]:
    """
    Write rendered files in order.

    Raises:
        FileWriteError: On the first file that cannot be written.
        InvalidFilePathError: If a path escapes the writer's root.
    """
    written: list[Path] = []
    rich_progress_display = (
        progress_display if progress_display is not None else RichProgressDisplay()
    )
    with rich_progress_display as rpd:
        rpd.on_start("Writing files...", len(files))
        for rendered in files:
            try:
                written.append(writer.write(rendered.path, rendered.content))
            except FileIOError:
                rpd.on_complete(
                    f"Failed writing {rendered.path}",
                    completed=len(written),
                    state=ProgressState.ERROR,
                )
                raise
            debug(f"Wrote {rendered.path}")
            rpd.on_update(advance=1)
        rpd.on_complete(f"Wrote {len(written)} file(s)", completed=len(written))
    return written


def generate_types(
    root: Path,
    config: TranslationConfig,
    writer: FileWriter | None = None,
    file_reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
) -> list[Path]:
    """
    Generate TypeScript declarations below `config.output.path`.

    Returns:
        list[Path]: The written files.
    """
    tree = build_tree(root, config, file_reader, progress_display)
    writer = writer if writer is not None else FilesystemFileWriter(root / config.output.path)
    return write_files(render_types(tree, config), writer, progress_display)


def export_values(
    root: Path,
    config: TranslationConfig,
    writer: FileWriter | None = None,
    file_reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
) -> list[Path]:
    """Export translation values below `config.translation_export.path`."""
    scan = scan_locales(root, config, file_reader, progress_display)
    writer = (
        writer
        if writer is not None
        else FilesystemFileWriter(root / config.translation_export.path)
    )
    return write_files(render_values(scan, config), writer, progress_display)


def export_keys(
    root: Path,
    config: TranslationConfig,
    keys_format: KeysFormat | str = KeysFormat.UNION,
    selected_sources: tuple[str, ...] = (),
    writer: FileWriter | None = None,
    file_reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
    output: str | None = None,
) -> list[Path]:
    """
    Export translation keys below `config.output.path`, or to `output`.

    Args:
        output: Path of the key file itself, relative to `root` unless
            absolute. Replaces the organized location below the output path.

    Raises:
        ScanEmptyError: If none of the selected sources holds keys.
    """
    tree = build_tree(root, config, file_reader, progress_display)
    rendered = render_keys(tree, config, keys_format, selected_sources)
    if rendered is None:
        raise ScanEmptyError(
            message=f"No translation keys found for sources: {', '.join(selected_sources)}"
        )
    if output:
        target = root / output
        rendered = RenderedFile(target.name, rendered.content)
        writer = writer if writer is not None else FilesystemFileWriter(target.parent)
    writer = writer if writer is not None else FilesystemFileWriter(root / config.output.path)
    return write_files([rendered], writer, progress_display)


def scan_translations(
    root: Path,
    config: TranslationConfig,
    file_reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
) -> ScanStatistics:
    """Scan statistics over every locale."""
    scan = scan_locales(root, config, file_reader, progress_display)
    return collect_statistics(scan.fold(config.base_language))


def validate_translations(
    root: Path,
    config: TranslationConfig,
    file_reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
) -> ValidationReport:
    scan = scan_locales(root, config, file_reader, progress_display)
    return validate_locales(scan, config.base_language)


def analyze_translations(
    root: Path,
    config: TranslationConfig,
    file_reader: FileReader | None = None,
    progress_display: ProgressDisplay | None = None,
) -> TranslationAnalytics:
    """Analytics over the discovered paths and every scanned file."""
    paths = discover_paths(root, config)
    scan = scan_locales(root, config, file_reader, progress_display, paths=paths)
    return collect_analytics(paths, scan, config.base_language)
