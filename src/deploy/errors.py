from __future__ import annotations


class DeployError(RuntimeError):
    """Base error for fatal deployment failures (process exits non-zero)."""


class ProductionGuardError(DeployError):
    """Production deployment attempted without the explicit override flag."""


class CredentialsError(DeployError):
    """The AWS identity check failed for the configured profile."""


class MissingFileError(DeployError):
    """A file required for the site is not present locally."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Required file missing: {path}")
        self.path = path


class UnreadableFileError(DeployError):
    """A site file exists but cannot be read as UTF-8 text."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path


class ConfigError(DeployError):
    """The deploy configuration (defaults plus environment overrides) is invalid."""


class SyncError(DeployError):
    """The S3 sync (or its dry-run preview) failed."""


class CommandError(RuntimeError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, argv: list[str], returncode: int | None, output: str = "") -> None:
        detail = f"exit code {returncode}" if returncode is not None else "could not start"
        super().__init__(f"{argv[0] if argv else '<empty>'} failed ({detail})")
        self.argv = argv
        self.returncode = returncode
        self.output = output


__all__ = [
    "DeployError",
    "ProductionGuardError",
    "CredentialsError",
    "MissingFileError",
    "UnreadableFileError",
    "ConfigError",
    "SyncError",
    "CommandError",
]
