"""
Comprehensive tests for the file_io module using pytest.

Tests cover:
- FilesystemFileReader: reading files, handling binary files, I/O errors
- FilesystemFileWriter: path resolution, writing files, I/O errors
- MockFileReader: call tracking and configurable return values
- MockFileWriter: call tracking, data storage and simulated failures
"""

from pathlib import Path

import pytest

from core.exceptions import FileReadError, FileWriteError, InvalidFilePathError
from core.file_io import (
    FilesystemFileReader,
    FilesystemFileWriter,
    MockFileReader,
    MockFileWriter,
)


# ============================================================================
# Tests for FilesystemFileReader.read_file
# ============================================================================


@pytest.mark.unit
def test_read_file_success(tmp_path):
    """Should successfully read a text file."""
    file_path = tmp_path / "en.json"
    content = '{"welcome": "Welcome!"}'
    file_path.write_text(content, encoding="utf-8")

    reader = FilesystemFileReader()
    result = reader.read_file(file_path)

    assert result == content


@pytest.mark.unit
def test_read_file_nonexistent(tmp_path):
    """Should return empty string for non-existent file."""
    reader = FilesystemFileReader()

    assert reader.read_file(tmp_path / "missing.php") == ""


@pytest.mark.unit
def test_read_file_binary_with_null_bytes(tmp_path):
    """Should return empty string for binary file with null bytes."""
    file_path = tmp_path / "binary.php"
    file_path.write_bytes(b"\x00\x01\x02\x03Hello\x00World")

    reader = FilesystemFileReader()

    assert reader.read_file(file_path) == ""


@pytest.mark.unit
def test_read_file_mixed_valid_invalid_utf8(tmp_path):
    """Should read file with mixed valid and invalid UTF-8, ignoring invalid bytes."""
    file_path = tmp_path / "mixed.php"
    file_path.write_text("Valid text", encoding="utf-8")
    with file_path.open("ab") as f:
        f.write(b"\xff\xfe")

    reader = FilesystemFileReader()

    assert reader.read_file(file_path) == "Valid text"


@pytest.mark.unit
def test_read_file_io_error(tmp_path, mocker):
    """Should raise FileReadError when I/O error occurs."""
    file_path = tmp_path / "auth.php"
    file_path.write_text("<?php return [];", encoding="utf-8")

    reader = FilesystemFileReader()

    mock_open = mocker.patch("pathlib.Path.open")
    mock_open.side_effect = OSError("Permission denied")

    with pytest.raises(FileReadError) as exc_info:
        reader.read_file(file_path)

    assert "Failed to read file" in str(exc_info.value)
    assert exc_info.value.file_path == str(file_path)
    assert exc_info.value.original_exception is not None


@pytest.mark.unit
def test_is_binary_file_unreadable(tmp_path, mocker):
    """Should return True when file cannot be read."""
    reader = FilesystemFileReader()

    mock_open = mocker.patch("builtins.open")
    mock_open.side_effect = OSError("Permission denied")

    assert reader._is_binary_file(tmp_path / "unreadable.php") is True


# ============================================================================
# Tests for FilesystemFileWriter
# ============================================================================


@pytest.mark.unit
def test_write_creates_parent_directories(tmp_path):
    """Should create missing parent directories before writing."""
    writer = FilesystemFileWriter(tmp_path / "types")

    written = writer.write("translations/vendors.translations.d.ts", "export {};\n")

    assert written == tmp_path / "types" / "translations" / "vendors.translations.d.ts"
    assert written.read_text(encoding="utf-8") == "export {};\n"


@pytest.mark.unit
def test_write_overwrites_existing_file(tmp_path):
    """Should replace the content of an existing file."""
    writer = FilesystemFileWriter(tmp_path)
    writer.write("index.ts", "old")

    writer.write("index.ts", "new")

    assert (tmp_path / "index.ts").read_text(encoding="utf-8") == "new"


@pytest.mark.unit
def test_write_keeps_unicode_and_unix_newlines(tmp_path):
    """Should write UTF-8 with `\\n` line endings."""
    writer = FilesystemFileWriter(tmp_path)

    written = writer.write("ar.ts", "export const x = 'مرحبا';\n")

    assert written.read_bytes() == "export const x = 'مرحبا';\n".encode("utf-8")


@pytest.mark.unit
@pytest.mark.parametrize("path", ["../escape.ts", "a/../../escape.ts"])
def test_write_rejects_paths_outside_root(tmp_path, path):
    """Should raise InvalidFilePathError for paths escaping the root."""
    writer = FilesystemFileWriter(tmp_path / "out")

    with pytest.raises(InvalidFilePathError) as exc_info:
        writer.write(path, "content")

    assert exc_info.value.file_path == path
    assert not (tmp_path / "escape.ts").exists()


@pytest.mark.unit
def test_write_rejects_absolute_paths(tmp_path):
    """Should raise InvalidFilePathError for absolute paths."""
    writer = FilesystemFileWriter(tmp_path)

    with pytest.raises(InvalidFilePathError):
        writer.write(str(tmp_path / "absolute.ts"), "content")


@pytest.mark.unit
def test_write_os_error_raises_file_write_error(tmp_path, mocker):
    """Should wrap OSError in FileWriteError."""
    writer = FilesystemFileWriter(tmp_path)
    mocker.patch("builtins.open", side_effect=OSError("Disk full"))

    with pytest.raises(FileWriteError) as exc_info:
        writer.write("index.ts", "content")

    assert "Failed to write to file" in exc_info.value.message
    assert isinstance(exc_info.value.original_exception, OSError)


# ============================================================================
# Tests for MockFileReader
# ============================================================================


@pytest.mark.unit
def test_mock_file_reader_return_value():
    """Should return configured return_value."""
    reader = MockFileReader(return_value="fixed content")

    result = reader.read_file(Path("any/path.php"))

    assert result == "fixed content"
    assert reader.read_file_calls == [Path("any/path.php")]


@pytest.mark.unit
def test_mock_file_reader_read_file_fn():
    """Should use read_file_fn when return_value is None."""
    reader = MockFileReader(read_file_fn=lambda path: f"Content from {path.name}")

    assert reader.read_file(Path("auth.php")) == "Content from auth.php"


@pytest.mark.unit
def test_mock_file_reader_default_empty():
    """Should return empty string when nothing is configured."""
    assert MockFileReader().read_file(Path("auth.php")) == ""


# ============================================================================
# Tests for MockFileWriter
# ============================================================================


@pytest.mark.unit
def test_mock_file_writer_records_writes():
    """Should record every write in order and keep the latest content."""
    writer = MockFileWriter()

    writer.write("a.ts", "1")
    writer.write("b.ts", "2")
    path = writer.write("a.ts", "3")

    assert path == Path("/out/a.ts")
    assert writer.write_calls == [("a.ts", "1"), ("b.ts", "2"), ("a.ts", "3")]
    assert writer.written == {"a.ts": "3", "b.ts": "2"}


@pytest.mark.unit
def test_mock_file_writer_fail_on():
    """Should raise FileWriteError for the configured path only."""
    writer = MockFileWriter(fail_on="b.ts")
    writer.write("a.ts", "1")

    with pytest.raises(FileWriteError):
        writer.write("b.ts", "2")

    assert list(writer.written) == ["a.ts"]
