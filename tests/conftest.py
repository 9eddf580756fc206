from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Sequence, Tuple, Union

import pytest

from mfbot_installer.context import InstallCtx
from mfbot_installer.errors import CommandError
from mfbot_installer.lib.command import CmdResult
from mfbot_installer.lib.host import BotArch, DistroFamily, HostProfile
from mfbot_installer.settings import InstallSettings
from mfbot_installer.state_store import ensure_defaults

Response = Union[Tuple[int, str], Callable[[List[str]], Tuple[int, str]]]


class FakeRunner:
    """Stands in for run_cmd: records argv, answers by argv prefix (first match wins)."""

    def __init__(self, responses: Sequence[Tuple[Sequence[str], Response]] = ()):
        self.responses = list(responses)
        self.calls: List[List[str]] = []

    def __call__(self, argv, *, check=True, env=None, cwd=None, dry_run=False) -> CmdResult:
        argv = [str(a) for a in argv]
        self.calls.append(argv)
        rc, out = 0, ""
        for prefix, response in self.responses:
            if argv[: len(prefix)] == list(prefix):
                rc, out = response(argv) if callable(response) else response
                break
        if check and rc != 0:
            raise CommandError(f"fake failure: {argv}", returncode=rc)
        return CmdResult(argv=argv, returncode=rc, stdout=out, stderr="")

    def programs(self) -> List[str]:
        return [c[0] for c in self.calls]


def wget_writes(payload: bytes) -> Callable[[List[str]], Tuple[int, str]]:
    """Response for `wget -q -O dest url` that writes payload to dest."""

    def respond(argv: List[str]) -> Tuple[int, str]:
        dest = Path(argv[argv.index("-O") + 1])
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(payload)
        return 0, ""

    return respond


@pytest.fixture
def make_ctx(tmp_path):
    def _make(
        *,
        family: DistroFamily = DistroFamily.DEBIAN,
        distro_id: str = "ubuntu",
        distro_version: str = "22.04",
        arch: BotArch = BotArch.X86_64,
        **config: Any,
    ) -> InstallCtx:
        state: Dict[str, Any] = {"config": dict(config)}
        cfg = ensure_defaults(state)["config"]
        # Keep generated files inside tmp_path unless a test overrides the path.
        for key, rel in (("install_dir", "opt/mfbot"), ("systemd_dir", "systemd"), ("tmp_dir", "tmp")):
            if key not in config:
                cfg[key] = str(tmp_path / rel)
        (tmp_path / "tmp").mkdir(exist_ok=True)
        host = HostProfile(
            distro_id=distro_id,
            distro_version=distro_version,
            family=family,
            machine="x86_64",
            arch=arch,
        )
        return InstallCtx(settings=InstallSettings.from_state(state), host=host)

    return _make


@pytest.fixture
def new_state():
    return ensure_defaults({})
