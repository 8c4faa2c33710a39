"""
Shared fixtures for core module tests.

This module provides reusable pytest fixtures for testing core functionality:
translation trees, per-locale scans and configuration builders.
"""

import pytest

from core.config import TranslationConfig
from core.models import FileKey, LocaleScan, TranslationTree


@pytest.fixture
def vendors_tree():
    """The `Vendors` source with an `actions` and a `forms` file, in English."""
    tree = TranslationTree()
    tree.add_locale("en")
    tree.add_translations("Vendors", "actions", {"create": "Create", "edit": "Edit"})
    tree.add_translations("Vendors", "forms", {"title": "Vendor Form"})
    return tree


@pytest.fixture
def two_source_tree():
    """Two sources with three files each."""
    tree = TranslationTree()
    tree.add_locale("en")
    for source in ("Vendors", "Billing"):
        for file_key in ("actions", "forms", "pages"):
            tree.add_translations(source, file_key, {"title": f"{source} {file_key}"})
    return tree


@pytest.fixture
def vendors_scan():
    """`Vendors` in English and Arabic; Arabic lacks `forms` and `actions.edit`."""
    scan = LocaleScan()
    scan.add_locale("en")
    scan.add_locale("ar")
    en = scan.tree_for("en")
    en.add_translations("Vendors", "actions", {"create": "Create", "edit": "Edit"})
    en.add_translations("Vendors", "forms", {"title": "Vendor Form"})
    en.add_translations("Vendors", FileKey.json(), {"welcome": "Welcome"})
    ar = scan.tree_for("ar")
    ar.add_translations("Vendors", "actions", {"create": "إنشاء"})
    ar.add_translations("Vendors", FileKey.json(), {"welcome": "أهلا"})
    return scan


@pytest.fixture
def make_config():
    """Factory for configurations with top-level overrides."""

    def _factory(**overrides) -> TranslationConfig:
        return TranslationConfig(**overrides)

    return _factory
