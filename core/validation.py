"""
Locale consistency checks.

Every locale is compared with the base locale, source by source: keys present
in the base locale but absent in another locale are reported as missing, keys
only the other locale has are reported as extra. Values are not inspected.
"""

from dataclasses import dataclass, field
from typing import Any

from core.models import LocaleScan, TranslationTree
from core.structure import source_keys


@dataclass(frozen=True)
class LocaleIssue:
    source: str
    locale: str
    missing: tuple[str, ...] = ()
    extra: tuple[str, ...] = ()

    @property
    def count(self) -> int:
        return len(self.missing) + len(self.extra)


@dataclass
class ValidationReport:
    """
    Result of `validate_locales`.

    Attributes:
        base_locale: Locale every other locale was compared with, if any.
        locales: Every observed locale, in discovery order.
        issues: One entry per (source, locale) pair whose key set differs.
    """

    base_locale: str | None
    locales: list[str]
    issues: list[LocaleIssue] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.issues

    @property
    def skipped(self) -> bool:
        """True when fewer than two locales were found."""
        return len(self.locales) < 2

    def to_dict(self) -> dict[str, Any]:
        """Issues grouped by source and locale, for `validate --json`."""
        grouped: dict[str, dict[str, dict[str, list[str]]]] = {}
        for issue in self.issues:
            grouped.setdefault(issue.source, {})[issue.locale] = {
                "missing": list(issue.missing),
                "extra": list(issue.extra),
            }
        return {
            "base_locale": self.base_locale,
            "locales": self.locales,
            "issues": grouped,
        }


def validate_locales(scan: LocaleScan, base_language: str | None = None) -> ValidationReport:
    """
    Compare the key set of every locale with the base locale.

    Args:
        scan: Per-locale scan results.
        base_language: Locale to compare against; defaults to the first
            observed locale.

    Returns:
        ValidationReport: Empty when fewer than two locales exist.
    """
    base_locale = scan.default_locale(base_language)
    report = ValidationReport(base_locale=base_locale, locales=list(scan.locales))
    if report.skipped or base_locale is None:
        return report

    base_tree = scan.trees.get(base_locale, TranslationTree())
    sources = list(scan.fold())

    for locale in scan.locales:
        if locale == base_locale:
            continue
        tree = scan.trees.get(locale, TranslationTree())
        for source in sources:
            expected = source_keys(base_tree.get_files(source))
            actual = source_keys(tree.get_files(source))
            actual_set = set(actual)
            expected_set = set(expected)
            missing = tuple(key for key in expected if key not in actual_set)
            extra = tuple(key for key in actual if key not in expected_set)
            if missing or extra:
                report.issues.append(LocaleIssue(source, locale, missing, extra))

    return report
