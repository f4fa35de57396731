"""Errors raised while bootstrapping the demo cluster."""

from pathlib import Path

# Options whose value is a key and must never be logged or reported
SECRET_OPTIONS = ("--add-key=",)


def redact_argv(argv: list[str]) -> list[str]:
    """Copy of ``argv`` with the values of secret options masked."""
    redacted = []
    for arg in argv:
        for option in SECRET_OPTIONS:
            if arg.startswith(option):
                arg = f"{option}***"
        redacted.append(arg)
    return redacted


class BootstrapError(Exception):
    """Base class for failures that abort the bootstrap sequence."""

    exit_code = 1


class ExistingCephFilesError(BootstrapError):
    """Foreign Ceph state was found on a host without demo markers."""


class MissingArtifactError(BootstrapError):
    """A required keyring or map is absent after config generation."""

    def __init__(self, path: Path, hint: str):
        self.path = path
        self.hint = hint
        super().__init__(f"{path} must exist.  {hint}")


class AddressDiscoveryError(BootstrapError):
    """No IPv4 stream address could be resolved for the monitor host."""


class CommandError(BootstrapError):
    """An external tool exited with a non-zero status."""

    def __init__(self, argv: list[str], returncode: int, stderr: str = ""):
        self.argv = redact_argv(argv)
        self.returncode = returncode
        self.stderr = stderr
        message = f"{' '.join(self.argv)} exited with status {returncode}"
        if stderr:
            message = f"{message}: {stderr.strip()}"
        super().__init__(message)
