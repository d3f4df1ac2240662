"""Error types and user-facing error reporting."""

import logging
import shutil
import sys
from enum import Enum
from pathlib import Path

from rich.console import Console

logger = logging.getLogger(__name__)
console = Console()


class ErrorCategory(Enum):
    """Categories of errors for better user experience."""

    CONFIGURATION = "configuration"
    DEPENDENCY = "dependency"
    FILESYSTEM = "filesystem"
    CATALOG = "catalog"
    EXTERNAL_TOOL = "external_tool"
    SYSTEM = "system"
    USER_INPUT = "user_input"
    CONFLICT = "conflict"


class ReelshelfError(Exception):
    """Base exception for Reelshelf with enhanced user experience."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        *,
        solution: str | None = None,
        details: str | None = None,
        recoverable: bool = True,
        log_level: int = logging.ERROR,
        original_error: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.solution = solution
        self.details = details
        self.recoverable = recoverable
        self.log_level = log_level
        self.original_error = original_error

    def display_to_user(self) -> None:
        """Display error to user with helpful context."""
        category_styles = {
            ErrorCategory.CONFIGURATION: ("⚙️", "yellow"),
            ErrorCategory.DEPENDENCY: ("📦", "red"),
            ErrorCategory.FILESYSTEM: ("📁", "red"),
            ErrorCategory.CATALOG: ("📚", "blue"),
            ErrorCategory.EXTERNAL_TOOL: ("🔧", "red"),
            ErrorCategory.SYSTEM: ("💻", "red"),
            ErrorCategory.USER_INPUT: ("⌨️", "yellow"),
            ErrorCategory.CONFLICT: ("🔁", "yellow"),
        }

        emoji, color = category_styles.get(self.category, ("❌", "red"))

        console.print(
            f"\n{emoji} [{color} bold]{self.category.value.title()} Error[/{color} bold]",
        )
        console.print(f"[{color}]{self.message}[/{color}]")

        if self.details:
            console.print(f"\n[dim]Details:[/dim] {self.details}")

        if self.solution:
            console.print(f"\n[green]💡 Solution:[/green] {self.solution}")

        if self.recoverable:
            console.print(
                "\n[dim]This error may be temporary. You can try again.[/dim]",
            )
        else:
            console.print(
                "\n[dim]This error requires intervention before continuing.[/dim]",
            )

        if self.original_error:
            logger.log(
                self.log_level,
                "%s: %s",
                self.category.value,
                self.message,
                exc_info=self.original_error,
            )
        else:
            logger.log(self.log_level, "%s: %s", self.category.value, self.message)


class InvalidInputError(ReelshelfError, ValueError):
    """Caller supplied an argument that can never be valid."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.USER_INPUT, **kwargs)


class InvalidPathError(InvalidInputError):
    """Path is empty or not absolute."""

    def __init__(self, path: str | None, **kwargs):
        self.path = path
        solution = kwargs.pop("solution", "Provide an absolute directory path")
        super().__init__(f"Invalid path: {path!r}", solution=solution, **kwargs)


class InvalidTargetError(InvalidInputError):
    """Job target identifier is not a positive integer."""

    def __init__(self, target_id: int, **kwargs):
        self.target_id = target_id
        super().__init__(
            f"Target id must be positive, got {target_id}",
            **kwargs,
        )


class NotFoundError(ReelshelfError, LookupError):
    """A referenced folder or catalog entry does not exist."""

    def __init__(self, message: str, category: ErrorCategory, **kwargs):
        super().__init__(message, category, **kwargs)


class RootFolderNotFoundError(NotFoundError):
    """Root folder path does not exist on disk."""

    def __init__(self, path: str, **kwargs):
        self.path = path
        solution = kwargs.pop(
            "solution",
            "Create the directory or check that its drive is mounted",
        )
        super().__init__(
            f"Can't add root folder that doesn't exist: {path}",
            ErrorCategory.FILESYSTEM,
            solution=solution,
            **kwargs,
        )


class EpisodeNotFoundError(NotFoundError):
    """Episode id is not in the catalog."""

    def __init__(self, episode_id: int, **kwargs):
        self.episode_id = episode_id
        super().__init__(
            f"Episode {episode_id} not found",
            ErrorCategory.CATALOG,
            **kwargs,
        )


class ConflictError(ReelshelfError):
    """Operation would duplicate existing state."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, ErrorCategory.CONFLICT, **kwargs)


class RootFolderExistsError(ConflictError):
    """A path-equal root folder is already registered."""

    def __init__(self, path: str, **kwargs):
        self.path = path
        super().__init__(f"Root folder already exists: {path}", **kwargs)


class ConfigurationError(ReelshelfError):
    """Configuration-related errors."""

    def __init__(self, message: str, *, config_path: Path | None = None, **kwargs):
        solution = kwargs.pop("solution", None)
        if not solution and config_path:
            solution = f"Check your configuration file at {config_path}"
        super().__init__(
            message,
            ErrorCategory.CONFIGURATION,
            solution=solution,
            **kwargs,
        )


class DependencyError(ReelshelfError):
    """Missing or broken dependency errors."""

    def __init__(
        self,
        dependency: str,
        *,
        install_command: str | None = None,
        **kwargs,
    ):
        message = f"Required dependency '{dependency}' is not available"
        solution = kwargs.pop("solution", None)
        if not solution and install_command:
            solution = f"Install with: {install_command}"
        super().__init__(
            message,
            ErrorCategory.DEPENDENCY,
            solution=solution,
            recoverable=False,
            **kwargs,
        )


class UnknownCommandError(ReelshelfError):
    """No job is registered for a command."""

    def __init__(self, command_name: str, **kwargs):
        self.command_name = command_name
        super().__init__(
            f"No job registered for command '{command_name}'",
            ErrorCategory.SYSTEM,
            **kwargs,
        )


def handle_error(
    error: Exception,
    *,
    category: ErrorCategory | None = None,
    **kwargs,
) -> None:
    """Convert generic exceptions to ReelshelfError and display to user."""
    if isinstance(error, ReelshelfError):
        error.display_to_user()
        return

    if category is None:
        if isinstance(error, FileNotFoundError | PermissionError):
            category = ErrorCategory.FILESYSTEM
        elif isinstance(error, ValueError):
            category = ErrorCategory.USER_INPUT
        else:
            category = ErrorCategory.SYSTEM

    reelshelf_error = ReelshelfError(
        message=str(error) or "An unexpected error occurred",
        category=category,
        original_error=error,
        **kwargs,
    )
    reelshelf_error.display_to_user()


def check_dependencies(
    handbrake_binary: str = "HandBrakeCLI",
    atomicparsley_binary: str = "AtomicParsley",
) -> list[DependencyError]:
    """Check for missing conversion tools and return list of errors."""
    errors = []

    if not shutil.which(handbrake_binary):
        errors.append(
            DependencyError(
                "HandBrakeCLI",
                solution="Install HandBrake CLI from https://handbrake.fr/ or your package manager",
                details="HandBrakeCLI is required for episode conversion",
            ),
        )

    if not shutil.which(atomicparsley_binary):
        errors.append(
            DependencyError(
                "AtomicParsley",
                solution="Install AtomicParsley from your package manager",
                details="AtomicParsley is required for tagging converted episodes",
            ),
        )

    return errors


def graceful_exit(exit_code: int = 1) -> None:
    """Exit gracefully with helpful message."""
    if exit_code == 0:
        console.print("\n[green]✨ Reelshelf completed successfully[/green]")
    else:
        console.print("\n[red]Reelshelf encountered errors and had to stop[/red]")
        console.print("[dim]Check the logs above for details on what went wrong[/dim]")

    sys.exit(exit_code)


def with_error_handling(category: ErrorCategory):
    """Decorator to add consistent error handling to functions."""

    def decorator(func):
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ReelshelfError:
                raise
            except Exception as e:
                handle_error(e, category=category)
                raise

        return wrapper

    return decorator
