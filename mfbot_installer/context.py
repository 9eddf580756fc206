from __future__ import annotations

from dataclasses import dataclass

from .lib.host import HostProfile
from .settings import InstallSettings


@dataclass(frozen=True)
class InstallCtx:
    """Everything a step may read: resolved settings plus the detected host."""

    settings: InstallSettings
    host: HostProfile

    @property
    def dry_run(self) -> bool:
        return self.settings.dry_run
