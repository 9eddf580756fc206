from __future__ import annotations


class InstallerError(RuntimeError):
    """Fatal installer failure; the CLI exits with status 1."""


class PrivilegeError(InstallerError):
    pass


class UnsupportedArchitectureError(InstallerError):
    pass


class RuntimeInstallError(InstallerError):
    pass


class DownloadError(InstallerError):
    pass


class CommandError(InstallerError):
    def __init__(self, message: str, *, returncode: int) -> None:
        super().__init__(message)
        self.returncode = returncode
