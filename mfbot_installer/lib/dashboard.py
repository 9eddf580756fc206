"""Minimal stand-in web interface.

Written into the web dir when the official archive cannot be fetched or is
not a ZIP. It accepts the same command line as the official MainProgram.py,
so start_webui.sh, the systemd unit and docker-compose work unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path

from .files import write_file

logger = logging.getLogger(__name__)

ENTRYPOINT = "MainProgram.py"

FALLBACK_REQUIREMENTS = "flask\nrequests\n"

FALLBACK_APP = '''\
"""MFBot status page (fallback web interface generated by mfbot-installer)."""

import argparse
import hmac

import requests
from flask import Flask, Response, jsonify, request

POLL_SECONDS = 5
STATUS_TIMEOUT = 5

CONNECTED = "connected"
CONNECTION_ERROR = "connection_error"
UNREACHABLE = "unreachable"

PAGE = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>MFBot Status</title></head>
<body>
<h1>MFBot Status</h1>
<p>Bot: <code>%(bot)s</code></p>
<p>State: <strong id="state">checking...</strong></p>
<p id="detail"></p>
<script>
const LABELS = {connected: "Connected", connection_error: "Connection error", unreachable: "Unreachable"};
async function poll() {
  try {
    const r = await fetch("/api/status");
    const data = await r.json();
    document.getElementById("state").textContent = LABELS[data.state] || data.state;
    document.getElementById("detail").textContent = data.detail || "";
  } catch (e) {
    document.getElementById("state").textContent = "Unreachable";
  }
}
poll();
setInterval(poll, %(interval)d);
</script>
</body>
</html>
"""


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="MFBot status page")
    p.add_argument("-a", "--address", default="http://127.0.0.1:8443", help="Bot remote access URL")
    p.add_argument("--remoteU", default="admin")
    p.add_argument("--remoteP", default="changeme")
    p.add_argument("--webU", default="web")
    p.add_argument("--webP", default="changeme")
    p.add_argument("--port", type=int, default=8050)
    return p.parse_args(argv)


def check_bot(address, user, password):
    try:
        r = requests.get(address.rstrip("/") + "/status", auth=(user, password), timeout=STATUS_TIMEOUT)
    except requests.RequestException as e:
        return {"state": UNREACHABLE, "detail": str(e)}
    if 200 <= r.status_code < 300:
        return {"state": CONNECTED, "detail": r.text[:500]}
    return {"state": CONNECTION_ERROR, "detail": "HTTP %d" % r.status_code}


def _same(given, expected):
    # compare_digest only accepts ASCII str; compare UTF-8 bytes instead.
    return hmac.compare_digest((given or "").encode("utf-8"), expected.encode("utf-8"))


def create_app(args):
    app = Flask(__name__)

    @app.before_request
    def require_login():
        auth = request.authorization
        if (
            auth is None
            or not _same(auth.username, args.webU)
            or not _same(auth.password, args.webP)
        ):
            return Response("Login required", 401, {"WWW-Authenticate": 'Basic realm="MFBot"'})
        return None

    @app.route("/")
    def index():
        return PAGE % {"bot": args.address, "interval": POLL_SECONDS * 1000}

    @app.route("/api/status")
    def status():
        return jsonify(check_bot(args.address, args.remoteU, args.remoteP))

    return app


def main(argv=None):
    args = parse_args(argv)
    create_app(args).run(host="0.0.0.0", port=args.port)


if __name__ == "__main__":
    main()
'''


def write_fallback_dashboard(web_dir: Path, *, dry_run: bool = False) -> bool:
    logger.info("Generating fallback web interface in %s", str(web_dir))
    write_file(web_dir / ENTRYPOINT, FALLBACK_APP, mode=0o755, dry_run=dry_run)
    write_file(web_dir / "requirements.txt", FALLBACK_REQUIREMENTS, dry_run=dry_run)
    return True
