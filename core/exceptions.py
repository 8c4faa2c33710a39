"""
Custom exception classes for the langtypes CLI.

This module defines application-specific exceptions raised at the boundaries
of a generation run: reading the configuration, discovering translation
directories, scanning translation files and writing generated output.
Naming, structure, planning and rendering never raise; they are total
functions over a well-formed translation tree.
"""

from typing import Optional


class FileIOError(Exception):
    """
    Base exception for file I/O errors.

    Attributes:
        message: A human-readable error message describing what went wrong.
        file_path: The path of the file involved, if known.
        original_exception: The underlying exception that caused this error, if any.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        self.message = message or "An error occurred during file I/O operation"
        super().__init__(self.message)
        self.file_path = file_path
        self.original_exception = original_exception


class FileReadError(FileIOError):
    """
    Raised when a translation or configuration file cannot be read or parsed.

    During scanning this error is reported as a warning and the offending file
    contributes nothing; it never aborts a run on its own.
    """


class FileWriteError(FileIOError):
    """
    Raised when a generated file cannot be written.

    Fatal: the remaining output units of the run are not attempted, and files
    written before the failure are left in place.
    """


class InvalidFilePathError(FileIOError):
    """Raised when a file path is unusable (e.g. it escapes the output root)."""


class ConfigurationError(Exception):
    """
    Raised when the configuration holds an unrecognized option value.

    Attributes:
        message: A human-readable error message naming the offending option.
        option: The configuration key that failed validation, if known.
    """

    def __init__(self, message: Optional[str] = None, option: Optional[str] = None):
        self.message = message or "Invalid configuration"
        super().__init__(self.message)
        self.option = option


class DiscoveryEmptyError(Exception):
    """
    Raised when no translation directories are found.

    This typically means the configured `paths` do not exist or do not contain
    any locale-named sub-directory or root `<locale>.json` file.
    """

    def __init__(self, message: Optional[str] = None):
        self.message = message or "No translation paths found"
        super().__init__(self.message)


class ScanEmptyError(Exception):
    """Raised when translation directories were found but hold no translations."""

    def __init__(self, message: Optional[str] = None):
        self.message = message or "No translation files found"
        super().__init__(self.message)
