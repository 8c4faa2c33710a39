"""
General utility functions for the CLI application.
"""

from pathlib import Path

from rich.console import Console

console: Console = Console()

_verbose = False


def set_verbose(enabled: bool) -> None:
    """Enable or disable the output of `debug()`."""
    global _verbose
    _verbose = enabled


def debug(
    *values: object,
    sep: str = " ",
    end: str = "\n",
) -> None:
    """
    Print debug message with orange formatting when verbose output is enabled.

    This utility function formats and prints debug messages to the console using
    Rich's styling capabilities. It is silent unless `--verbose` was passed.

    Args:
        *values: Variable number of objects to print. All values are converted to strings.
        sep: Separator string between values. Defaults to a single space.
        end: String appended after the last value. Defaults to newline.
    """
    if not _verbose:
        return

    if not values:
        console.print(end=end)
        return

    message = sep.join(str(v) for v in values)
    console.print(f"DEBUG: {message}", end=end, style="orange1")


def relative_to(path: Path, root: Path) -> str:
    """
    Render `path` relative to `root` with forward slashes, for display.

    Paths outside of `root` are returned unchanged.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()
