"""
File access for translation sources, config files and generated output.

Readers and writers are protocols so the pipeline and config loader can be
exercised against in-memory doubles.
"""

from pathlib import Path
from typing import Callable, Protocol

from core.exceptions import (
    FileReadError,
    FileWriteError,
    InvalidFilePathError,
)

# Bytes sniffed for a NUL before a translation file is treated as text
BINARY_SNIFF_BYTES = 1024


class FileReader(Protocol):
    """Anything that can hand back the text of a translation or config file."""

    def read_file(self, file_path: Path) -> str:
        """Return the UTF-8 text of `file_path`, or "" when there is nothing usable."""


class FileWriter(Protocol):
    """
    Protocol defining the interface for writing generated files.

    Paths are relative to the writer's output root, POSIX-style.
    """

    def write(self, path: str, content: str) -> Path:
        """
        Write `content` to `path`, creating parent directories as needed.

        Args:
            path: Target path relative to the output root.
            content: Text content to write.

        Returns:
            The absolute path that was written.
        """


class FilesystemFileReader:

    def read_file(self, file_path: Path) -> str:
        """
        Read a translation or config file from disk.

        Missing paths, directories and files that look binary all yield "".
        Undecodable bytes are dropped rather than failing the whole scan.

        Raises:
            FileReadError: If the file exists but cannot be opened or read.
        """
        if not file_path.is_file() or self._is_binary_file(file_path):
            return ""

        try:
            with file_path.open("r", encoding="utf-8", errors="ignore") as f:
                return f.read()
        except OSError as e:
            raise FileReadError(
                message=f"Failed to read file: {file_path}",
                file_path=str(file_path),
                original_exception=e,
            ) from e

    def _is_binary_file(self, file_path: Path) -> bool:
        # Unreadable files count as binary so they are skipped, not parsed
        try:
            with open(file_path, "rb") as f:
                return b"\0" in f.read(BINARY_SNIFF_BYTES)
        except OSError:
            return True


class FilesystemFileWriter:
    """Writes generated files below a fixed output root."""

    def __init__(self, root: Path):
        self.root = root

    def resolve(self, path: str) -> Path:
        """
        Resolve `path` against the output root.

        Raises:
            InvalidFilePathError: If the path is absolute or escapes the root.
        """
        relative = Path(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise InvalidFilePathError(
                message=f"Output path must stay inside {self.root}: {path}",
                file_path=path,
            )
        return self.root / relative

    def write(self, path: str, content: str) -> Path:
        """
        Write `content` to `path` below the output root.

        Parent directories are created if absent. Content is written as UTF-8
        with `\\n` line endings on every platform.

        Raises:
            InvalidFilePathError: If the path escapes the output root.
            FileWriteError: If the directory cannot be created or the file written.
        """
        target = self.resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError as e:
            raise FileWriteError(
                message=f"Failed to write to file: {target}",
                file_path=str(target),
                original_exception=e,
            ) from e
        return target


class MockFileReader:
    """
    In-memory FileReader for tests.

    `return_value` wins over `read_file_fn`; with neither set every read
    returns "". Paths passed in are kept in `read_file_calls`.
    """

    def __init__(
        self,
        return_value: str | None = None,
        read_file_fn: Callable[[Path], str] | None = None,
    ):
        self.return_value = return_value
        self.read_file_fn = read_file_fn
        self.read_file_calls: list[Path] = []

    def read_file(self, file_path: Path) -> str:
        self.read_file_calls.append(file_path)
        if self.return_value is not None:
            return self.return_value
        if self.read_file_fn is not None:
            return self.read_file_fn(file_path)
        return ""


class MockFileWriter:
    """
    Mock implementation of FileWriter for testing.

    Records every write in order and keeps the latest content per path, so tests
    can inspect generated output without touching the filesystem.
    """

    def __init__(self, root: Path = Path("/out"), fail_on: str | None = None):
        """
        Args:
            root: Root reported in returned paths.
            fail_on: If set, writing this path raises FileWriteError.

        Attributes (for test inspection):
            write_calls: List of (path, content) tuples passed to write()
            written: Mapping of path to the last content written there
        """
        self.root = root
        self.fail_on = fail_on
        self.write_calls: list[tuple[str, str]] = []
        self.written: dict[str, str] = {}

    def write(self, path: str, content: str) -> Path:
        if path == self.fail_on:
            raise FileWriteError(
                message=f"Failed to write to file: {path}", file_path=path
            )
        self.write_calls.append((path, content))
        self.written[path] = content
        return self.root / path
