"""Errors raised by header analysis and dependency resolution."""

from pathlib import Path


class AnalysisError(Exception):
    """Base class for hdrkit failures that name a specific file."""

    def __init__(self, message: str, path: str | Path | None = None, suggestion: str | None = None):
        self.path = str(path) if path is not None else None
        self.suggestion = suggestion
        super().__init__(message)


class HeaderNotFoundError(AnalysisError, FileNotFoundError):
    """A requested header does not exist."""

    def __init__(self, path: str | Path):
        super().__init__(
            f"Header file not found: {path}",
            path=path,
            suggestion="Check that the header file path is correct and the file exists",
        )


class HeaderNotReadableError(AnalysisError, PermissionError):
    """A requested header exists but cannot be read."""

    def __init__(self, path: str | Path, reason: str = ""):
        message = f"Header file is not readable: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message, path=path, suggestion="Check the file permissions")


class CircularDependencyError(AnalysisError):
    """Include relationships form a cycle, so no compilation order exists."""

    def __init__(self, header: str):
        self.header = header
        super().__init__(
            f"Circular dependency detected involving: {header}",
            path=header,
            suggestion="Break the include cycle or add forward declarations",
        )


class ConfigError(AnalysisError):
    """A configuration file is missing or invalid."""
