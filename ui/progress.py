"""
Progress reporting for long-running langtypes commands.

This module wraps Rich progress bars behind the `ProgressDisplay` protocol so
that scanning and writing can report progress without depending on Rich
directly. Tests pass a `NoOpProgressDisplay`; the CLI uses
`RichProgressDisplay`. Progress states are color coded (in progress, complete,
warning, error).
"""

from enum import StrEnum
from types import TracebackType
from typing import Optional, Protocol

from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TaskProgressColumn,
    TextColumn,
)


class ProgressState(StrEnum):
    """
    Enumeration of progress bar states with associated color codes.

    Attributes:
        IN_PROGRESS: Magenta color for tasks currently being processed.
        COMPLETE: Green color for successfully completed tasks.
        WARNING: Yellow color for tasks with warnings or non-critical issues.
        ERROR: Red color for tasks that have encountered errors.
    """

    IN_PROGRESS = "magenta"
    COMPLETE = "green"
    WARNING = "yellow"
    ERROR = "red"


def create_progress() -> Progress:
    """
    Creates a Rich Progress instance with the standard columns: spinner,
    description, bar and percentage.
    """
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
    )


def create_task(progress: Progress, description: str, total: Optional[int]) -> TaskID:
    """
    Adds a task to `progress`, styled with the IN_PROGRESS state.

    Args:
        progress: The Rich Progress instance to add the task to.
        description: The description text to display for this task.
        total: The total number of steps, or None for indeterminate progress.

    Returns:
        TaskID: The identifier used for later updates.
    """
    return progress.add_task(f"[{ProgressState.IN_PROGRESS}]{description}", total=total)


def update_progress(
    progress: Progress,
    task: TaskID,
    progress_state: Optional[ProgressState] = None,
    total: Optional[float] = None,
    completed: Optional[float] = None,
    advance: Optional[float] = None,
    description: Optional[str] = None,
) -> None:
    """
    Updates a progress task with new state, progress, or description.

    `progress_state` and `description` must be given together, so that the
    description is always styled with the state color.

    Raises:
        ValueError: If only one of progress_state and description is provided.
    """
    if bool(progress_state) != bool(description):
        raise ValueError("progress_state and description must be provided together.")

    if description:
        description = f"[{progress_state}]{description}"

    # Rich treats description=None as "clear", so it is omitted entirely
    if description is not None:
        progress.update(
            task,
            total=total,
            completed=completed,
            advance=advance,
            description=description,
        )
    else:
        progress.update(task, total=total, completed=completed, advance=advance)


class ProgressDisplay(Protocol):
    """
    Protocol for progress reporting.

    The lifecycle is:
    1. Context manager entry (__enter__)
    2. on_start() - Called once at the beginning
    3. on_update() - Called multiple times during processing
    4. on_complete() - Called once at the end
    5. Context manager exit (__exit__)
    """

    def __enter__(self) -> "ProgressDisplay":
        """Enter the progress context."""

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the progress context."""

    def on_start(self, description: str, total: int | None) -> None:
        """
        Initialize progress reporting for a new task.

        Args:
            description: Initial description text to display.
            total: Total number of items to process. If None, progress is
                indeterminate.
        """

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        """
        Update progress by advancing the counter, updating description, or both.

        At least one of `advance` or `description` must be provided.
        """

    def on_complete(
        self,
        description: str,
        completed: int,
        total: int | None = None,
        state: ProgressState = ProgressState.COMPLETE,
    ) -> None:
        """
        Mark the task as finished.

        Args:
            description: Final description text to display.
            completed: Number of items that were completed.
            total: Optional total count. If None, keeps the existing total.
            state: Final color; WARNING when items were skipped, ERROR when
                the task stopped on a failure.
        """


class RichProgressDisplay:
    """
    Rich UI implementation of ProgressDisplay.

    Must be used as a context manager: `with RichProgressDisplay() as rpd:`.
    """

    def __init__(self) -> None:
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> "RichProgressDisplay":
        self._progress = create_progress()
        self._progress.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._progress:
            self._progress.__exit__(exc_type, exc_val, exc_tb)

    def _require_progress(self) -> Progress:
        if not self._progress:
            raise RuntimeError(
                "RichProgressDisplay must be used as a context manager. "
                "Use: with RichProgressDisplay() as rpd:"
            )
        return self._progress

    def on_start(self, description: str, total: int | None) -> None:
        """
        Create a new task in the Rich progress bar.

        Raises:
            RuntimeError: If not used as a context manager.
        """
        progress = self._require_progress()
        self._task = create_task(progress, description, total=total)

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        """
        Advance the counter and/or replace the description.

        A new description is styled with the IN_PROGRESS state.

        Raises:
            RuntimeError: If not used as a context manager or if on_start()
                was not called first.
            ValueError: If neither advance nor description is provided.
        """
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called before on_update()")

        if not (advance or description):
            raise ValueError(
                "At least one of 'advance' or 'description' must be provided to on_update()"
            )

        if description:
            update_progress(
                progress,
                self._task,
                ProgressState.IN_PROGRESS,
                advance=advance,
                description=description,
            )
        elif advance:
            update_progress(progress, self._task, advance=advance)

    def on_complete(
        self,
        description: str,
        completed: int,
        total: int | None = None,
        state: ProgressState = ProgressState.COMPLETE,
    ) -> None:
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called before on_complete()")

        update_progress(
            progress,
            self._task,
            state,
            completed=completed,
            total=total,
            description=description,
        )


class NoOpProgressDisplay:
    """No-op implementation of ProgressDisplay for tests and `--json` output."""

    def __enter__(self) -> "NoOpProgressDisplay":
        return self

    def __exit__(self, *args) -> None:
        pass

    def on_start(self, description: str, total: int | None) -> None:
        pass

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        pass

    def on_complete(
        self,
        description: str,
        completed: int,
        total: int | None = None,
        state: ProgressState = ProgressState.COMPLETE,
    ) -> None:
        pass
