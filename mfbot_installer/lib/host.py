from __future__ import annotations

import enum
import logging
import os
import platform
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import PrivilegeError, UnsupportedArchitectureError

logger = logging.getLogger(__name__)


class DistroFamily(enum.Enum):
    DEBIAN = "debian"
    FEDORA = "fedora"
    ARCH = "arch"
    UNKNOWN = "unknown"


class BotArch(enum.Enum):
    """Architecture tags used in MFBot download file names."""

    X86_64 = "x86_64"
    ARM64 = "ARM64"
    ARM_RASP = "ARMRasp"
    ARM = "ARM"
    I686 = "i686"


_FAMILY_BY_ID = {
    "ubuntu": DistroFamily.DEBIAN,
    "debian": DistroFamily.DEBIAN,
    "raspbian": DistroFamily.DEBIAN,
    "fedora": DistroFamily.FEDORA,
    "rhel": DistroFamily.FEDORA,
    "centos": DistroFamily.FEDORA,
    "arch": DistroFamily.ARCH,
    "manjaro": DistroFamily.ARCH,
}

_ARCH_BY_MACHINE = {
    "x86_64": BotArch.X86_64,
    "amd64": BotArch.X86_64,
    "aarch64": BotArch.ARM64,
    "arm64": BotArch.ARM64,
    "armv7l": BotArch.ARM_RASP,
    "armv6l": BotArch.ARM_RASP,
    "armhf": BotArch.ARM,
    "i386": BotArch.I686,
    "i686": BotArch.I686,
}

DEFAULT_DISTRO_ID = "debian"


@dataclass(frozen=True)
class HostProfile:
    distro_id: str
    distro_version: str
    family: DistroFamily
    machine: str
    arch: BotArch

    def as_dict(self) -> Dict[str, Any]:
        return {
            "distro_id": self.distro_id,
            "distro_version": self.distro_version,
            "family": self.family.value,
            "machine": self.machine,
            "arch": self.arch.value,
        }


def check_root() -> None:
    if os.geteuid() != 0:
        raise PrivilegeError("This installer must be run as root (use sudo)")


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse os-release(5) KEY=VALUE lines, unquoting like the shell does."""

    out: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            parts = [value]
        out[key.strip()] = " ".join(parts)
    return out


def classify_distro(distro_id: str, id_like: str = "") -> DistroFamily:
    family = _FAMILY_BY_ID.get(distro_id.lower())
    if family is not None:
        return family
    for token in id_like.lower().split():
        family = _FAMILY_BY_ID.get(token)
        if family is not None:
            return family
    return DistroFamily.UNKNOWN


def detect_distro(os_release_path: str = "/etc/os-release") -> tuple[str, str, DistroFamily]:
    p = Path(os_release_path)
    if not p.exists():
        logger.warning("Cannot detect distribution (%s missing), assuming Debian-based", os_release_path)
        return DEFAULT_DISTRO_ID, "", DistroFamily.DEBIAN

    info = parse_os_release(p.read_text(encoding="utf-8", errors="ignore"))
    distro_id = info.get("ID", "").lower() or DEFAULT_DISTRO_ID
    version = info.get("VERSION_ID", "")
    family = classify_distro(distro_id, info.get("ID_LIKE", ""))
    logger.info("Detected distribution: %s %s (family=%s)", distro_id, version, family.value)
    return distro_id, version, family


def normalize_arch(machine: str) -> BotArch:
    arch = _ARCH_BY_MACHINE.get(machine.strip().lower())
    if arch is None:
        raise UnsupportedArchitectureError(f"Unsupported architecture: {machine}")
    return arch


def detect_host(*, os_release_path: str = "/etc/os-release", machine: Optional[str] = None) -> HostProfile:
    """Distro and architecture detection; run once per install, after check_root()."""

    distro_id, version, family = detect_distro(os_release_path)

    m = machine if machine is not None else platform.machine()
    logger.info("Detected architecture: %s", m)
    arch = normalize_arch(m)
    logger.info("Will download MFBot for architecture: %s", arch.value)

    return HostProfile(
        distro_id=distro_id,
        distro_version=version,
        family=family,
        machine=m,
        arch=arch,
    )
