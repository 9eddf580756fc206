import json

import pytest

from mfbot_installer import main as main_mod
from mfbot_installer.lib import host, net, pkg, pyenv, runtime
from mfbot_installer.steps import step_90_write_service_units

from .conftest import FakeRunner, wget_writes


@pytest.fixture
def paths(tmp_path):
    os_release = tmp_path / "os-release"
    os_release.write_text('ID=ubuntu\nVERSION_ID="22.04"\n', encoding="utf-8")
    state = tmp_path / "state.json"
    state.write_text(
        json.dumps(
            {
                "config": {
                    "os_release_path": str(os_release),
                    "install_dir": str(tmp_path / "opt" / "mfbot"),
                    "systemd_dir": str(tmp_path / "systemd"),
                    "tmp_dir": str(tmp_path),
                }
            }
        ),
        encoding="utf-8",
    )
    return {"state": str(state), "log": str(tmp_path / "install.log"), "root": tmp_path}


def test_non_root_exits_with_status_1(monkeypatch, paths):
    monkeypatch.setattr(host.os, "geteuid", lambda: 1000)
    assert main_mod.main(["--state", paths["state"], "--log", paths["log"]]) == 1


def test_unsupported_architecture_exits_with_status_1(monkeypatch, paths):
    monkeypatch.setattr(host.os, "geteuid", lambda: 0)
    monkeypatch.setattr(host.platform, "machine", lambda: "sparc64")

    assert main_mod.main(["--state", paths["state"], "--log", paths["log"]]) == 1

    saved = json.loads(open(paths["state"], encoding="utf-8").read())
    assert "Unsupported architecture" in saved["execution"]["errors"][-1]["error"]


def test_dry_run_walks_every_step(monkeypatch, paths, capsys):
    monkeypatch.setattr(host.os, "geteuid", lambda: 0)
    before = open(paths["state"], encoding="utf-8").read()

    state = main_mod.run(state_path=paths["state"], log_path=paths["log"], dry_run=True, machine="aarch64")

    assert state["execution"]["summary"]["ran_steps"] == [s.step_id for s in main_mod.build_steps()]
    assert state["host"]["arch"] == "ARM64"
    assert state["execution"]["decisions"]["runtime_strategy"] == "distro_repository"
    assert state["execution"]["decisions"]["webinterface"] == "archive"
    assert not (paths["root"] / "opt").exists()
    assert open(paths["state"], encoding="utf-8").read() == before

    out = capsys.readouterr().out
    assert "Installation Complete!" in out
    assert "Username: admin" in out
    assert "Port: 8050" in out
    assert "requirements.txt not found" in out


def test_step_ids_are_unique_and_ordered():
    ids = [s.step_id for s in main_mod.build_steps()]
    assert ids == sorted(ids)
    assert len(ids) == len(set(ids))


@pytest.fixture
def fake_host(monkeypatch):
    """Root, a current .NET on PATH and every external command faked; wget serves an HTML error page."""

    monkeypatch.setattr(host.os, "geteuid", lambda: 0)
    monkeypatch.setattr(runtime, "dotnet_available", lambda: True)
    runner = FakeRunner(
        [
            (["dotnet", "--version"], (0, "8.0.100\n")),
            (["wget"], wget_writes(b"<html>502 Bad Gateway</html>")),
        ]
    )
    for mod in (pkg, runtime, net, pyenv, step_90_write_service_units):
        monkeypatch.setattr(mod, "run_cmd", runner)
    return runner


def test_plain_rerun_executes_every_step_and_reports_warnings(fake_host, paths, capsys):
    all_steps = [s.step_id for s in main_mod.build_steps()]

    first = main_mod.run(state_path=paths["state"], log_path=paths["log"], machine="x86_64")
    first_out = capsys.readouterr().out
    fake_host.calls.clear()

    second = main_mod.run(state_path=paths["state"], log_path=paths["log"], machine="x86_64")
    second_out = capsys.readouterr().out

    for state, out in ((first, first_out), (second, second_out)):
        assert state["execution"]["summary"]["ran_steps"] == all_steps
        assert state["execution"]["summary"]["degraded_steps"] == ["50_download_webinterface"]
        assert "installed with warnings" in out
        assert "Official web interface unavailable" in out

    assert "wget" in fake_host.programs()
    assert "50_download_webinterface" not in second["execution"]["completed_steps"]
    assert (paths["root"] / "opt" / "mfbot" / "webinterface" / "MainProgram.py").exists()


def test_resume_only_retries_degraded_steps(fake_host, paths, capsys):
    main_mod.run(state_path=paths["state"], log_path=paths["log"], machine="x86_64")

    state = main_mod.run(state_path=paths["state"], log_path=paths["log"], machine="x86_64", resume=True)

    assert state["execution"]["summary"]["ran_steps"] == ["50_download_webinterface"]
    assert "Official web interface unavailable" in capsys.readouterr().out


def test_stop_after_prints_partial_summary(monkeypatch, paths, capsys):
    monkeypatch.setattr(host.os, "geteuid", lambda: 0)

    state = main_mod.run(
        state_path=paths["state"],
        log_path=paths["log"],
        dry_run=True,
        machine="x86_64",
        stop_after="30_create_directories",
    )

    assert state["execution"]["summary"]["stopped_after"] == "30_create_directories"
    out = capsys.readouterr().out
    assert "Installation Complete!" not in out
    assert "partial install" in out
    assert "Stopped after step 30_create_directories" in out
