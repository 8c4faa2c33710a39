"""
Integration tests for the generation pipeline.

Projects are written to a temporary directory and run through discovery,
scanning, planning and rendering; writes go to a MockFileWriter unless the
test is about the filesystem.
"""

from unittest.mock import MagicMock

import pytest

from core.config import ExportSettings, TranslationConfig
from core.exceptions import DiscoveryEmptyError, FileWriteError, ScanEmptyError
from core.file_io import MockFileWriter
from core.models import FileKey
from core.pipeline import (
    build_tree,
    export_keys,
    export_values,
    generate_types,
    render_keys,
    scan_translations,
    validate_translations,
    write_files,
)
from core.renderer import RenderedFile
from models import GenerationMode, KeysFormat, OrganizeBy
from ui.progress import ProgressState

MODULES = ("Modules/*",)


# ============================================================================
# Tests for discovery and scanning stages
# ============================================================================


@pytest.mark.integration
def test_build_tree_folds_all_locales(vendors_project, progress_display):
    """Without a base language the tree holds every locale's keys."""
    tree = build_tree(
        vendors_project, TranslationConfig(paths=MODULES), progress_display=progress_display
    )

    assert list(tree) == ["Vendors"]
    assert tree.locales == ("ar", "en")
    assert tree.get("Vendors", FileKey("actions")) == {"create": "Create", "edit": "Edit"}


@pytest.mark.integration
def test_build_tree_unknown_base_language(vendors_project, progress_display):
    """A base language without translations is an empty run."""
    config = TranslationConfig(paths=MODULES, base_language="de")

    with pytest.raises(ScanEmptyError, match="base language 'de'"):
        build_tree(vendors_project, config, progress_display=progress_display)


@pytest.mark.integration
def test_no_translation_paths(make_project, progress_display):
    """A project without translation directories raises DiscoveryEmptyError."""
    root = make_project({"README.md": "# App"})

    with pytest.raises(DiscoveryEmptyError, match="No translation paths found"):
        build_tree(root, TranslationConfig(), progress_display=progress_display)


@pytest.mark.integration
def test_no_translations(make_project, progress_display):
    """Translation directories holding only empty files raise ScanEmptyError."""
    root = make_project({"lang/en/empty.php": "<?php return [];"})

    with pytest.raises(ScanEmptyError):
        build_tree(root, TranslationConfig(), progress_display=progress_display)


# ============================================================================
# Tests for generate_types
# ============================================================================


@pytest.mark.integration
def test_generate_types_module_mode(vendors_project, progress_display):
    """Module mode writes the source file, shared types and the index."""
    writer = MockFileWriter()
    config = TranslationConfig(paths=MODULES, mode=GenerationMode.MODULE)

    written = generate_types(
        vendors_project, config, writer=writer, progress_display=progress_display
    )

    assert list(writer.written) == [
        "translations/vendors.translations.d.ts",
        "translations/shared.types.d.ts",
        "translations.d.ts",
    ]
    assert len(written) == 3
    assert "export type Locale = 'ar' | 'en';" in writer.written["translations/shared.types.d.ts"]
    assert "'actions.edit'" in writer.written["translations/vendors.translations.d.ts"]


@pytest.mark.integration
def test_generate_types_base_language(vendors_project, progress_display):
    """With a base language only its keys are typed."""
    writer = MockFileWriter()
    config = TranslationConfig(paths=MODULES, base_language="ar")

    generate_types(vendors_project, config, writer=writer, progress_display=progress_display)

    content = writer.written["translations.d.ts"]
    assert "export type VendorsTranslationKey = 'actions.create';" in content
    assert "VendorsFormsI18N" not in content


@pytest.mark.integration
def test_generate_types_writes_to_output_path(vendors_project, progress_display):
    """The default writer writes below the configured output path."""
    config = TranslationConfig(paths=MODULES)

    written = generate_types(vendors_project, config, progress_display=progress_display)

    expected = vendors_project / "resources/js/types/translations.d.ts"
    assert written == [expected]
    assert expected.read_text(encoding="utf-8").startswith(
        "// Auto-generated TypeScript types from Laravel translation files\n"
    )


@pytest.mark.integration
def test_generate_types_is_deterministic(vendors_project, progress_display):
    """Two runs over the same files produce identical output."""
    config = TranslationConfig(paths=MODULES, mode=GenerationMode.GRANULAR)
    first, second = MockFileWriter(), MockFileWriter()

    generate_types(vendors_project, config, writer=first, progress_display=progress_display)
    generate_types(vendors_project, config, writer=second, progress_display=progress_display)

    assert first.write_calls == second.write_calls


# ============================================================================
# Tests for export_values / export_keys
# ============================================================================


@pytest.mark.integration
def test_export_values_by_locale(vendors_project, progress_display):
    """Per-locale exports hold every locale, not only the base language."""
    writer = MockFileWriter()
    config = TranslationConfig(
        paths=MODULES,
        base_language="en",
        translation_export=ExportSettings(organize_by=OrganizeBy.LOCALE),
    )

    export_values(vendors_project, config, writer=writer, progress_display=progress_display)

    assert "ar/vendors.translations.ts" in writer.written
    assert "en/vendors.translations.ts" in writer.written
    assert "إنشاء" in writer.written["ar/vendors.translations.ts"]


@pytest.mark.integration
def test_export_values_default_writer(vendors_project, progress_display):
    """The default writer writes below the export path."""
    written = export_values(
        vendors_project, TranslationConfig(paths=MODULES), progress_display=progress_display
    )

    export_root = vendors_project / "resources/js/data/translations"
    assert written == [
        export_root / "vendors.translations.ts",
        export_root / "shared.ts",
        export_root / "index.ts",
    ]
    assert all(path.is_file() for path in written)


@pytest.mark.integration
def test_export_keys(vendors_project, progress_display):
    """Keys are exported in the requested format."""
    writer = MockFileWriter()

    export_keys(
        vendors_project,
        TranslationConfig(paths=MODULES),
        KeysFormat.ENUM,
        writer=writer,
        progress_display=progress_display,
    )

    (path,) = writer.written
    assert path == "enums/translation-keys.d.ts"
    assert "ACTIONS_CREATE = 'actions.create'," in writer.written[path]


@pytest.mark.integration
def test_export_keys_to_output_file(vendors_project, progress_display):
    """An output path replaces the organized key file location."""
    written = export_keys(
        vendors_project,
        TranslationConfig(paths=MODULES),
        output="frontend/keys.ts",
        progress_display=progress_display,
    )

    assert written == [vendors_project / "frontend/keys.ts"]
    assert "export type VendorsKey = " in written[0].read_text(encoding="utf-8")


@pytest.mark.integration
def test_export_keys_unknown_source(vendors_project, progress_display):
    """Selecting only unknown sources is an empty run."""
    with pytest.raises(ScanEmptyError, match="Billing"):
        export_keys(
            vendors_project,
            TranslationConfig(paths=MODULES),
            selected_sources=("Billing",),
            writer=MockFileWriter(),
            progress_display=progress_display,
        )


@pytest.mark.unit
def test_render_keys_pure(vendors_tree):
    """render_keys needs no filesystem access."""
    rendered = render_keys(vendors_tree, TranslationConfig(), "union")

    assert rendered.path == "types/translation-keys.d.ts"
    assert render_keys(vendors_tree, TranslationConfig(), "union", ("Missing",)) is None


# ============================================================================
# Tests for write_files
# ============================================================================


@pytest.mark.unit
def test_write_files_aborts_on_first_failure(progress_display):
    """The first failed write aborts the run; earlier files stay written."""
    writer = MockFileWriter(fail_on="b.ts")
    files = [RenderedFile("a.ts", "a"), RenderedFile("b.ts", "b"), RenderedFile("c.ts", "c")]

    with pytest.raises(FileWriteError):
        write_files(files, writer, progress_display)

    assert list(writer.written) == ["a.ts"]


@pytest.mark.unit
@pytest.mark.mock
def test_write_files_marks_failed_task():
    """A failed write finishes the task in the error state before raising."""
    display = MagicMock()
    display.__enter__.return_value = display
    writer = MockFileWriter(fail_on="b.ts")

    with pytest.raises(FileWriteError):
        write_files([RenderedFile("a.ts", "a"), RenderedFile("b.ts", "b")], writer, display)

    display.on_complete.assert_called_once_with(
        "Failed writing b.ts", completed=1, state=ProgressState.ERROR
    )


# ============================================================================
# Tests for scan_translations / validate_translations
# ============================================================================


@pytest.mark.integration
def test_scan_translations(vendors_project, progress_display):
    """Statistics count files and keys over every locale."""
    statistics = scan_translations(
        vendors_project, TranslationConfig(paths=MODULES), progress_display=progress_display
    )

    assert statistics.locales == ("ar", "en")
    assert statistics.total_files == 2
    assert statistics.total_keys == 3


@pytest.mark.integration
def test_validate_translations(vendors_project, progress_display):
    """Keys missing from a locale are reported against the base language."""
    report = validate_translations(
        vendors_project,
        TranslationConfig(paths=MODULES, base_language="en"),
        progress_display=progress_display,
    )

    assert not report.is_valid
    (issue,) = report.issues
    assert (issue.source, issue.locale) == ("Vendors", "ar")
    assert issue.missing == ("actions.edit", "forms.title")
