"""
Installer error types.

Every fatal condition is an InstallerError. main() turns it into a
user-facing message and a non-zero exit code; nothing is retried.
"""

from __future__ import annotations

from typing import Sequence


class InstallerError(RuntimeError):
    """Base exception for all fatal installer conditions."""

    exit_code = 1


class PrivilegeError(InstallerError):
    """Raised when the installer is not running as root."""

    def __init__(self, euid: int):
        self.euid = euid
        super().__init__("This script must be executed with root privileges (sudo).")


class PreconditionError(InstallerError):
    """Raised when the base Pterodactyl installation cannot be found."""

    def __init__(self, panel_dir: str):
        self.panel_dir = panel_dir
        super().__init__(f"Pterodactyl panel is not installed! (missing {panel_dir})")


class ConfigError(InstallerError):
    """Raised when the installer config file holds an invalid value."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid config {path}: {reason}")


class TargetPathError(InstallerError):
    """Raised when a file the installer manages is in the way."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write {path}: {reason}")


class UnsupportedArchitectureDeclined(InstallerError):
    """Raised when the operator declines to continue on a non-x86_64 host."""

    def __init__(self, architecture: str):
        self.architecture = architecture
        super().__init__("Installation aborted!")


class UnsupportedEnvironment(InstallerError):
    """Raised when (distro, major version) is not in the support table."""

    def __init__(self, distro_id: str, version: str):
        self.distro_id = distro_id
        self.version = version
        super().__init__(f"Unsupported OS: {distro_id} {version}")


class UserDeclined(InstallerError):
    """Raised when the operator declines the final confirmation."""

    def __init__(self):
        super().__init__("Installation aborted.")


class DispatchError(InstallerError):
    """Raised when a supported host has no usable installer routine."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Dispatch failure: {reason}")


class ExternalToolFailure(InstallerError):
    """Raised when a package manager or configuration command exits non-zero.

    The process exits with the tool's own status.
    """

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"Command failed ({returncode}): {' '.join(self.argv)}\n{stderr}".rstrip())

    @property
    def exit_code(self) -> int:  # type: ignore[override]
        return self.returncode if self.returncode > 0 else 1
