"""
Translation file scanners.

`PhpScanner` and `JsonScanner` turn a single translation file into a
normalized leaf map. `ScannerManager` walks the directories found by path
discovery, picks the scanner for each file, and records the results per locale
in a `LocaleScan`.

Directory layout walked below every translation path:

    lang/
    ├── en/                 locale directory
    │   ├── auth.php        file key `auth`
    │   ├── admin/
    │   │   └── users.php   file key `admin.users`
    │   └── extra.json      JSON file key (root of the source)
    └── en.json             JSON file key (root of the source)

A file that cannot be read or parsed is reported as a warning and skipped;
the remaining files are still scanned.
"""

import json
from pathlib import Path
from typing import Protocol

from rich import print as pr

from adapters.php_array import PhpParseError, parse_php_array
from constants import LOCALE_PATTERN, MIN_LOCALE_DIR_LENGTH, NON_LOCALE_DIRS
from core.config import TranslationConfig
from core.exceptions import FileReadError
from core.file_io import FileReader, FilesystemFileReader
from core.models import FileKey, LeafMap, LocaleScan, normalize_leaf_map
from models import ScanType
from ui.progress import ProgressDisplay, ProgressState, RichProgressDisplay
from utils import debug


class FileScanner(Protocol):
    """
    Protocol for scanners that read one translation file format.

    Attributes:
        extension: File extension handled by the scanner, without the dot.
    """

    extension: str

    def scan(self, file_path: Path) -> LeafMap:
        """
        Read `file_path` and return its translations as a normalized leaf map.

        Returns an empty map for missing or empty files.

        Raises:
            FileReadError: If the file cannot be read or parsed.
        """


class PhpScanner:
    """Reads PHP translation files without executing them."""

    extension = "php"

    def __init__(self, file_reader: FileReader | None = None):
        self.file_reader = (
            file_reader if file_reader is not None else FilesystemFileReader()
        )

    def scan(self, file_path: Path) -> LeafMap:
        content = self.file_reader.read_file(file_path)
        if not content.strip():
            return {}

        try:
            return normalize_leaf_map(parse_php_array(content))
        except PhpParseError as e:
            raise FileReadError(
                message=f"Failed to parse PHP translation file: {e.message}",
                file_path=str(file_path),
                original_exception=e,
            ) from e


class JsonScanner:
    """Reads JSON translation files."""

    extension = "json"

    def __init__(self, file_reader: FileReader | None = None):
        self.file_reader = (
            file_reader if file_reader is not None else FilesystemFileReader()
        )

    def scan(self, file_path: Path) -> LeafMap:
        content = self.file_reader.read_file(file_path)
        if not content.strip():
            return {}

        try:
            decoded = json.loads(content)
        except json.JSONDecodeError as e:
            raise FileReadError(
                message=f"Invalid JSON in translation file (line {e.lineno})",
                file_path=str(file_path),
                original_exception=e,
            ) from e

        # Scalars at the top level carry no translations
        if not isinstance(decoded, (dict, list)):
            return {}
        return normalize_leaf_map(decoded)


class ScannerManager:
    """
    Scans every discovered translation path into a `LocaleScan`.

    Locale directories are visited in sorted order, so repeated runs over the
    same files record sources, file keys and locales in the same order.
    """

    def __init__(
        self,
        config: TranslationConfig,
        file_reader: FileReader | None = None,
        progress_display: ProgressDisplay | None = None,
    ):
        self.config = config
        self.progress_display = progress_display
        self.php_scanner = PhpScanner(file_reader)
        self.json_scanner = JsonScanner(file_reader)

    @property
    def scans_php(self) -> bool:
        return self.config.scan in (ScanType.ALL, ScanType.PHP)

    @property
    def scans_json(self) -> bool:
        return self.config.scan in (ScanType.ALL, ScanType.JSON)

    def scan(self, paths: dict[str, list[Path]]) -> LocaleScan:
        """
        Scan the translation paths of every source.

        Args:
            paths: Source names mapped to their translation directories, as
                returned by `PathsCollector.collect()`.

        Returns:
            LocaleScan: Observed locales and one translation tree per locale.
        """
        result = LocaleScan()
        total = sum(len(source_paths) for source_paths in paths.values())

        rich_progress_display = (
            self.progress_display
            if self.progress_display is not None
            else RichProgressDisplay()
        )
        with rich_progress_display as rpd:
            rpd.on_start("Scanning translation files...", total)
            for source, source_paths in paths.items():
                for path in source_paths:
                    debug(f"Scanning {path} for source {source}")
                    self._scan_path(path, source, result)
                    rpd.on_update(advance=1)
            summary = f"Scanned {len(result.locales)} locale(s) in {total} path(s)"
            if result.skipped_files:
                rpd.on_complete(
                    f"{summary}, skipped {len(result.skipped_files)} malformed file(s)",
                    completed=total,
                    state=ProgressState.WARNING,
                )
            else:
                rpd.on_complete(summary, completed=total)

        return result

    def _scan_path(self, path: Path, source: str, result: LocaleScan) -> None:
        if not path.is_dir():
            return

        for locale_dir in sorted(child for child in path.iterdir() if child.is_dir()):
            locale = locale_dir.name
            if not self._is_candidate_locale(locale):
                continue
            result.add_locale(locale)
            self._scan_locale_directory(locale_dir, source, "", locale, result)

        if self.scans_json:
            self._scan_root_json_files(path, source, result)

    def _is_candidate_locale(self, name: str) -> bool:
        if name in NON_LOCALE_DIRS or len(name) < MIN_LOCALE_DIR_LENGTH:
            return False
        return self._is_selected(name)

    def _is_selected(self, locale: str) -> bool:
        return not self.config.locales or locale in self.config.locales

    def _scan_locale_directory(
        self,
        directory: Path,
        source: str,
        sub_path: str,
        locale: str,
        result: LocaleScan,
    ) -> None:
        if self.scans_php:
            for file_path in sorted(directory.glob("*.php")):
                if self._is_excluded(file_path):
                    continue
                key = f"{sub_path}.{file_path.stem}" if sub_path else file_path.stem
                self._record(
                    self.php_scanner, file_path, source, FileKey(key), locale, result
                )

        if self.scans_json:
            for file_path in sorted(directory.glob("*.json")):
                if self._is_excluded(file_path):
                    continue
                self._record(
                    self.json_scanner,
                    file_path,
                    source,
                    FileKey.json(sub_path),
                    locale,
                    result,
                )

        for child in sorted(p for p in directory.iterdir() if p.is_dir()):
            child_path = f"{sub_path}.{child.name}" if sub_path else child.name
            self._scan_locale_directory(child, source, child_path, locale, result)

    def _scan_root_json_files(self, path: Path, source: str, result: LocaleScan) -> None:
        for file_path in sorted(path.glob("*.json")):
            locale = file_path.stem
            if not LOCALE_PATTERN.match(locale) or not self._is_selected(locale):
                continue
            if self._record(
                self.json_scanner, file_path, source, FileKey.json(), locale, result
            ):
                result.add_locale(locale)

    def _is_excluded(self, file_path: Path) -> bool:
        return any(
            file_path.stem == excluded.removesuffix(".php")
            for excluded in self.config.exclude
        )

    def _record(
        self,
        scanner: FileScanner,
        file_path: Path,
        source: str,
        file_key: FileKey,
        locale: str,
        result: LocaleScan,
    ) -> bool:
        """Scan one file into the locale's tree; True if it held translations."""
        result.count_file(file_key.origin)
        try:
            content = scanner.scan(file_path)
        except FileReadError as e:
            result.skipped_files.append(str(file_path))
            pr(f"[yellow]⚠ Warning:[/yellow] Skipping {file_path}: {e.message}")
            return False

        if not content:
            return False

        result.tree_for(locale).add_translations(source, file_key, content)
        return True
