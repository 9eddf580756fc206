from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

# Credentials shipped in config.ini and the launchers; users are told to change them.
REMOTE_USER = "admin"
REMOTE_PASSWORD = "changeme"
WEB_USER = "web"
WEB_PASSWORD = "changeme"

DOCS_URL = "https://www.mfbot.de/"
FORUM_URL = "https://forum.mfbot.de/"


@dataclass(frozen=True)
class InstallSettings:
    raw: Dict[str, Any]

    @classmethod
    def from_state(cls, state: Dict[str, Any]) -> "InstallSettings":
        return cls(raw=dict(state.get("config") or {}))

    @property
    def dry_run(self) -> bool:
        return bool(self.raw.get("dry_run", False))

    @property
    def install_dir(self) -> Path:
        return Path(str(self.raw.get("install_dir") or "/opt/mfbot"))

    @property
    def web_dir(self) -> Path:
        return self.install_dir / str(self.raw.get("web_subdir") or "webinterface")

    @property
    def bot_path(self) -> Path:
        return self.install_dir / "MFBot"

    @property
    def config_path(self) -> Path:
        return self.install_dir / "config.ini"

    @property
    def venv_dir(self) -> Path:
        return self.web_dir / "venv"

    @property
    def systemd_dir(self) -> Path:
        return Path(str(self.raw.get("systemd_dir") or "/etc/systemd/system"))

    @property
    def os_release_path(self) -> str:
        return str(self.raw.get("os_release_path") or "/etc/os-release")

    @property
    def tmp_dir(self) -> Path:
        return Path(str(self.raw.get("tmp_dir") or "/tmp"))

    @property
    def bot_port(self) -> int:
        return int(self.raw.get("bot_port") or 8443)

    @property
    def web_port(self) -> int:
        return int(self.raw.get("web_port") or 8050)

    @property
    def bot_url_template(self) -> str:
        return str(self.raw.get("bot_url_template") or "https://download.mfbot.de/latest/MFBot_Konsole_{arch}")

    @property
    def webui_url(self) -> str:
        return str(self.raw.get("webui_url") or "https://download.mfbot.de/latest/mfbot-webinterface.zip")

    @property
    def runtime_min_major(self) -> int:
        return int(self.raw.get("runtime_min_major") or 6)

    @property
    def runtime_channel(self) -> str:
        return str(self.raw.get("runtime_channel") or "8.0")

    @property
    def runtime_pinned_version(self) -> str:
        return str(self.raw.get("runtime_pinned_version") or "6.0")

    @property
    def runtime_install_dir(self) -> str:
        return str(self.raw.get("runtime_install_dir") or "/usr/share/dotnet")

    @property
    def dotnet_install_script_url(self) -> str:
        return str(self.raw.get("dotnet_install_script_url") or "https://dot.net/v1/dotnet-install.sh")

    @property
    def microsoft_repo_url_template(self) -> str:
        return str(
            self.raw.get("microsoft_repo_url_template")
            or "https://packages.microsoft.com/config/{distro}/{version}/packages-microsoft-prod.deb"
        )

    @property
    def start_delay(self) -> int:
        return int(self.raw.get("start_delay", 3))

    @property
    def restart_sec(self) -> int:
        return int(self.raw.get("restart_sec", 10))
