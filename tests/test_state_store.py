import json

from mfbot_installer.settings import InstallSettings
from mfbot_installer.state_store import ensure_defaults, load_state, record_warning, save_state


def test_missing_state_file_is_empty(tmp_path):
    assert load_state(str(tmp_path / "state.json")) == {}


def test_json_round_trip(tmp_path):
    path = tmp_path / "nested" / "state.json"
    state = ensure_defaults({})
    save_state(str(path), state)

    assert json.loads(path.read_text(encoding="utf-8"))["config"]["bot_port"] == 8443
    assert load_state(str(path)) == state


def test_yaml_state_overrides_defaults(tmp_path):
    path = tmp_path / "state.yaml"
    path.write_text("config:\n  install_dir: /srv/mfbot\n  web_port: 9000\n", encoding="utf-8")

    state = ensure_defaults(load_state(str(path)))
    s = InstallSettings.from_state(state)

    assert str(s.install_dir) == "/srv/mfbot"
    assert str(s.web_dir) == "/srv/mfbot/webinterface"
    assert s.web_port == 9000
    assert s.bot_port == 8443
    assert s.runtime_min_major == 6


def test_record_warning(caplog):
    state = ensure_defaults({})
    record_warning(state, "50_download_webinterface", "archive missing")

    assert state["execution"]["warnings"] == [{"step": "50_download_webinterface", "warning": "archive missing"}]
    assert "archive missing" in caplog.text
