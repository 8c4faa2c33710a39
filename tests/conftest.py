"""
Shared fixtures for all test packages.

Provides a builder for throw-away Laravel projects on disk, so discovery,
scanning and the CLI can be exercised against real directory layouts.
"""

from pathlib import Path
from typing import Callable

import pytest

from ui.progress import NoOpProgressDisplay


@pytest.fixture
def progress_display():
    """Progress display for testing."""
    return NoOpProgressDisplay()


@pytest.fixture
def make_project(tmp_path) -> Callable[[dict[str, str]], Path]:
    """
    Factory writing a project tree from a mapping of relative path to content.

    Example:
        root = make_project({"lang/en/auth.php": "<?php return ['failed' => 'No'];"})
    """

    def _factory(files: dict[str, str]) -> Path:
        root = tmp_path / "project"
        root.mkdir(exist_ok=True)
        for relative, content in files.items():
            file_path = root / relative
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding="utf-8")
        return root

    return _factory


@pytest.fixture
def vendors_project(make_project) -> Path:
    """A project with one `Vendors` module translated into English and Arabic."""
    return make_project(
        {
            "Modules/Vendors/lang/en/actions.php": (
                "<?php\n\nreturn [\n    'create' => 'Create',\n    'edit' => 'Edit',\n];\n"
            ),
            "Modules/Vendors/lang/en/forms.php": (
                "<?php\n\nreturn [\n    'title' => 'Vendor Form',\n];\n"
            ),
            "Modules/Vendors/lang/ar/actions.php": (
                "<?php\n\nreturn [\n    'create' => 'إنشاء',\n];\n"
            ),
        }
    )
