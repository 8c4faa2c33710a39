"""
Discovery of translation directories in a Laravel project.

`PathsCollector` turns the configured `paths` (and, when vendor scanning is
enabled, the installed Composer packages) into a mapping of source names to
translation directories. Source names drive every generated identifier, so
they are derived from the directory layout:

    lang, resources/lang        -> system_translations_name ("System")
    Modules/Blog/...            -> Blog
    .../app, .../resources      -> App
    .../packages                -> Packages
    vendor/acme/billing/...     -> VendorAcmeBilling
    anything else               -> Studly(last segment)
"""

from pathlib import Path
import re

from constants import (
    DEFAULT_LANG_PATHS,
    LANG_SUBDIRS,
    LOCALE_PATTERN,
    SKIPPED_VENDOR_DIRS,
    VENDOR_DIR,
    VENDOR_LANG_SUBDIRS,
    WILDCARD_LANG_SUBDIRS,
)
from core.config import TranslationConfig
from core.naming import studly
from utils import debug, relative_to

_MODULE_PATTERN = re.compile(r"(?:^|/)Modules/([^/]+)")
_VENDOR_PATTERN = re.compile(r"(?:^|/)vendor/([^/]+)/([^/]+)")


def is_lang_directory(path: Path) -> bool:
    """
    Check whether `path` holds translations.

    A language directory contains a locale-named sub-directory (`en`, `pt_BR`)
    or a locale-named JSON file (`en.json`).
    """
    if not path.is_dir():
        return False

    for child in path.iterdir():
        if child.is_dir() and LOCALE_PATTERN.match(child.name):
            return True
        if child.suffix == ".json" and child.is_file() and LOCALE_PATTERN.match(child.stem):
            return True
    return False


def get_package_name(vendor: str, package: str) -> str:
    """`acme`, `billing-tools` -> `AcmeBillingTools`."""
    return studly(vendor) + studly(package)


class PathsCollector:
    """
    Collects translation directories per source.

    Args:
        root: Project root; relative configured paths are resolved against it.
        config: Run configuration (`paths`, `scan_vendor`, `vendor_paths`,
            `system_translations_name`).
    """

    def __init__(self, root: Path, config: TranslationConfig):
        self.root = root
        self.config = config
        self._collected: dict[str, list[Path]] = {}

    def collect(self) -> dict[str, list[Path]]:
        """
        Discover translation directories.

        Returns:
            dict[str, list[Path]]: Source names mapped to absolute directory
            paths, in discovery order and without duplicates.
        """
        self._collected = {}

        for path in self.config.paths:
            self._discover_path(path)

        if self.config.scan_vendor:
            for path in self.config.vendor_paths:
                self._discover_path(path)
            vendor_root = self.root / VENDOR_DIR
            if vendor_root.is_dir():
                self._discover_vendor_packages(vendor_root)

        return self._collected

    def get_sources(self) -> list[str]:
        return list(self._collected)

    def _discover_path(self, path: str) -> None:
        if "*" in path:
            self._discover_wildcard_paths(path)
            return

        source = self.get_source_name(path)
        base = self._resolve(path)
        for candidate in (*(base / sub for sub in LANG_SUBDIRS), base):
            if is_lang_directory(candidate):
                self._add_path(source, candidate)

    def _discover_wildcard_paths(self, pattern: str) -> None:
        if Path(pattern).is_absolute():
            anchor = Path(pattern.split("*", 1)[0]).parent
            matches = anchor.glob(str(Path(pattern).relative_to(anchor)))
        else:
            matches = self.root.glob(pattern)

        for match in sorted(m for m in matches if m.is_dir()):
            source = self.get_source_name(relative_to(match, self.root))
            for sub in WILDCARD_LANG_SUBDIRS:
                candidate = match / sub
                if is_lang_directory(candidate):
                    self._add_path(source, candidate)

    def _discover_vendor_packages(self, vendor_root: Path) -> None:
        for vendor in sorted(p for p in vendor_root.iterdir() if p.is_dir()):
            if vendor.name in SKIPPED_VENDOR_DIRS:
                continue
            for package in sorted(p for p in vendor.iterdir() if p.is_dir()):
                for sub in VENDOR_LANG_SUBDIRS:
                    candidate = package / sub
                    if is_lang_directory(candidate):
                        source = "Vendor" + get_package_name(vendor.name, package.name)
                        self._add_path(source, candidate)

    def get_source_name(self, path: str) -> str:
        """Derive the source name of a configured (project-relative) path."""
        normalized = path.replace("\\", "/").strip("/")
        if normalized in DEFAULT_LANG_PATHS:
            return self.config.system_translations_name

        module = _MODULE_PATTERN.search(normalized)
        if module:
            return module.group(1)

        vendor = _VENDOR_PATTERN.search(normalized)
        if vendor:
            return "Vendor" + get_package_name(vendor.group(1), vendor.group(2))

        name = normalized.rsplit("/", 1)[-1]
        if name in ("app", "resources"):
            return "App"
        if name == "packages":
            return "Packages"
        return studly(name)

    def _resolve(self, path: str) -> Path:
        candidate = Path(path)
        return candidate if candidate.is_absolute() else self.root / candidate

    def _add_path(self, source: str, path: Path) -> None:
        paths = self._collected.setdefault(source, [])
        if path not in paths:
            debug(f"Found translations for {source}: {relative_to(path, self.root)}")
            paths.append(path)
