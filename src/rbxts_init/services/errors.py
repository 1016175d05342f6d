"""Service failure contracts.

Services return typed outcomes on success and raise ServiceFailure on expected
environment, validation, conflict, and subprocess failures. Programmer bugs
raise normal exceptions.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Literal

ServiceFailureCode = Literal[
    "validation_failed",
    "dependency_missing",
    "destination_conflict",
    "external_command_failed",
    "io_failed",
]


class ServiceFailure(Exception):
    """Expected service failure: validation, environment, or runtime error.

    Raised by services instead of returning a failure value. Use ``raise
    ServiceFailure(...) from exc`` to chain a causing exception; it is
    available as ``__cause__``. Callers catch ServiceFailure and handle per
    their interface (the CLI logs the message and exits non-zero).
    """

    def __init__(
        self,
        code: ServiceFailureCode,
        message: str,
        *,
        recovery_hint: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.recovery_hint = recovery_hint


class ValidationFailedError(ServiceFailure):
    """Validation failed (invalid input, constraint violation)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("validation_failed", message, recovery_hint=recovery_hint)


class DependencyMissingError(ServiceFailure):
    """Required tool is missing or unavailable."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("dependency_missing", message, recovery_hint=recovery_hint)


class DestinationConflictError(ServiceFailure):
    """Destination already holds paths the template would overwrite."""

    HEADLINE = "Cannot initialize project, process could overwrite:"

    def __init__(self, paths: Sequence[str], *, recovery_hint: str | None = None) -> None:
        self.paths = tuple(paths)
        listing = "".join(f"  - {path}\n" for path in self.paths)
        super().__init__(
            "destination_conflict",
            f"{self.HEADLINE}\n{listing}",
            recovery_hint=recovery_hint,
        )


class ExternalCommandFailedError(ServiceFailure):
    """External command (git, npm, etc.) failed."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("external_command_failed", message, recovery_hint=recovery_hint)


class IoFailedError(ServiceFailure):
    """I/O operation failed (copy, read, write)."""

    def __init__(self, message: str, *, recovery_hint: str | None = None) -> None:
        super().__init__("io_failed", message, recovery_hint=recovery_hint)
