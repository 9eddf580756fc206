import ast
import base64
import sys
import types

import pytest
import requests

from mfbot_installer.lib.dashboard import ENTRYPOINT, FALLBACK_APP, write_fallback_dashboard


def test_fallback_app_is_valid_python():
    ast.parse(FALLBACK_APP, filename=ENTRYPOINT)


def test_fallback_app_accepts_official_command_line():
    for flag in ('"-a"', '"--remoteU"', '"--remoteP"', '"--webU"', '"--webP"', '"--port"'):
        assert flag in FALLBACK_APP


def test_fallback_app_reports_three_connection_states():
    assert 'CONNECTED = "connected"' in FALLBACK_APP
    assert 'CONNECTION_ERROR = "connection_error"' in FALLBACK_APP
    assert 'UNREACHABLE = "unreachable"' in FALLBACK_APP
    assert '"/status"' in FALLBACK_APP
    assert "auth=(user, password)" in FALLBACK_APP


def test_fallback_app_is_login_gated():
    assert "@app.before_request" in FALLBACK_APP
    assert "WWW-Authenticate" in FALLBACK_APP


def test_write_fallback_dashboard(tmp_path):
    web = tmp_path / "webinterface"
    assert write_fallback_dashboard(web) is True
    assert (web / ENTRYPOINT).read_text(encoding="utf-8") == FALLBACK_APP


def test_write_fallback_dashboard_dry_run(tmp_path):
    web = tmp_path / "webinterface"
    write_fallback_dashboard(web, dry_run=True)
    assert not web.exists()


class _Reply:
    def __init__(self, status_code, text=""):
        self.status_code = status_code
        self.text = text


def _basic(user, password):
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


@pytest.fixture
def app_module(tmp_path, monkeypatch):
    """The generated MainProgram.py loaded as a module."""

    path = tmp_path / ENTRYPOINT
    path.write_text(FALLBACK_APP, encoding="utf-8")
    mod = types.ModuleType("MainProgram")
    mod.__file__ = str(path)
    monkeypatch.setitem(sys.modules, "MainProgram", mod)
    exec(compile(FALLBACK_APP, str(path), "exec"), mod.__dict__)
    return mod


@pytest.fixture
def bot_replies(monkeypatch):
    """Queue of replies for requests.get; an exception instance is raised instead of returned."""

    calls = []
    replies = []

    def fake_get(url, auth=None, timeout=None):
        calls.append({"url": url, "auth": auth, "timeout": timeout})
        reply = replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(requests, "get", fake_get)
    return replies, calls


@pytest.mark.parametrize(
    "reply, state",
    [
        (_Reply(200, "running"), "connected"),
        (_Reply(204), "connected"),
        (_Reply(401), "connection_error"),
        (_Reply(500), "connection_error"),
        (requests.ConnectionError("refused"), "unreachable"),
        (requests.Timeout("slow"), "unreachable"),
    ],
)
def test_check_bot_classifies_connection_state(app_module, bot_replies, reply, state):
    replies, calls = bot_replies
    replies.append(reply)

    result = app_module.check_bot("http://127.0.0.1:8443/", "admin", "changeme")

    assert result["state"] == state
    assert calls == [{"url": "http://127.0.0.1:8443/status", "auth": ("admin", "changeme"), "timeout": 5}]


def _client(app_module, *argv):
    args = app_module.parse_args(list(argv))
    return app_module.create_app(args).test_client()


def test_every_route_requires_login(app_module):
    client = _client(app_module)

    for route in ("/", "/api/status"):
        r = client.get(route)
        assert r.status_code == 401
        assert r.headers["WWW-Authenticate"].startswith("Basic")

    assert client.get("/", headers=_basic("web", "wrong")).status_code == 401


def test_non_ascii_credentials_are_rejected_or_accepted_cleanly(app_module):
    client = _client(app_module, "--webP", "pässwört")

    assert client.get("/", headers=_basic("wéb", "x")).status_code == 401
    assert client.get("/", headers=_basic("web", "changeme")).status_code == 401
    assert client.get("/", headers=_basic("web", "pässwört")).status_code == 200


def test_status_page_and_api(app_module, bot_replies):
    replies, calls = bot_replies
    replies.append(_Reply(503))
    client = _client(app_module, "-a", "http://bot:9443", "--remoteU", "ops", "--remoteP", "s3cret")

    page = client.get("/", headers=_basic("web", "changeme"))
    assert page.status_code == 200
    assert "http://bot:9443" in page.get_data(as_text=True)

    r = client.get("/api/status", headers=_basic("web", "changeme"))
    assert r.status_code == 200
    assert r.get_json() == {"state": "connection_error", "detail": "HTTP 503"}
    assert calls[0]["url"] == "http://bot:9443/status"
    assert calls[0]["auth"] == ("ops", "s3cret")
