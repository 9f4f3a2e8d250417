"""Exception hierarchy for setup-pro.

Only fatal conditions are exceptions.  Injection-level problems (a missing
anchor, a missing target file) are reported as ``InjectionResult`` values
and never raised.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every fatal scaffolding error."""


class UnknownVariant(ScaffoldError):
    """Raised when a (framework, language) pair is not in the registry."""

    def __init__(self, framework: str, language: str) -> None:
        self.framework = framework
        self.language = language
        super().__init__(
            f"Unsupported stack: {framework!r} + {language!r}. "
            "Choose one of react, vue, svelte with js or ts."
        )


class ExternalGeneratorFailure(ScaffoldError):
    """Raised when the project generator or the package manager fails."""

    def __init__(
        self,
        message: str,
        command: str = "",
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class FilesystemFailure(ScaffoldError):
    """Raised when the project directory cannot be written."""

    def __init__(self, message: str, path: str | Path = "") -> None:
        self.path = Path(path) if path else None
        super().__init__(message)
