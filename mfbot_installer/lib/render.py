"""Text of every file the installer generates.

Renderers are pure functions of the settings so they can be tested without
touching the filesystem.
"""

from __future__ import annotations

from typing import Any, Dict

import yaml

from ..settings import REMOTE_PASSWORD, REMOTE_USER, WEB_PASSWORD, WEB_USER, InstallSettings

BOT_UNIT = "mfbot.service"
WEBUI_UNIT = "mfbot-webui.service"


def render_config_ini(s: InstallSettings) -> str:
    return "\n".join(
        [
            "# MFBot Configuration File",
            "# Edit this file to configure your bot settings",
            "",
            "[Remote Access]",
            "Enabled=true",
            f"Port={s.bot_port}",
            f"Username={REMOTE_USER}",
            f"Password={REMOTE_PASSWORD}",
            "",
            "[Web Interface]",
            "Enabled=true",
            f"Port={s.web_port}",
            f"Username={WEB_USER}",
            f"Password={WEB_PASSWORD}",
            "",
            "# Note: After first run, account settings will be stored in Acc.ini",
            "",
        ]
    )


_SCRIPT_DIR_LINE = 'SCRIPT_DIR="$(cd "$(dirname "${BASH_SOURCE[0]}")" && pwd)"'


def render_start_bot(s: InstallSettings) -> str:
    return "\n".join(
        [
            "#!/bin/bash",
            "",
            "# MFBot Start Script",
            _SCRIPT_DIR_LINE,
            "",
            'echo "Starting MFBot Console..."',
            'cd "$SCRIPT_DIR"',
            f"./{s.bot_path.name}",
            "",
        ]
    )


def render_start_webui(s: InstallSettings) -> str:
    return "\n".join(
        [
            "#!/bin/bash",
            "",
            "# MFBot Web Interface Start Script",
            _SCRIPT_DIR_LINE,
            f'WEB_DIR="$SCRIPT_DIR/{s.web_dir.name}"',
            "",
            "# Default configuration - edit these values",
            f'BOT_HOST="http://127.0.0.1:{s.bot_port}"',
            f'BOT_USER="{REMOTE_USER}"',
            f'BOT_PASS="{REMOTE_PASSWORD}"',
            f'WEB_USER="{WEB_USER}"',
            f'WEB_PASS="{WEB_PASSWORD}"',
            f'WEB_PORT="{s.web_port}"',
            "",
            'echo "Starting MFBot Web Interface..."',
            'echo "Web UI will be available at: http://localhost:$WEB_PORT"',
            'echo ""',
            "",
            'cd "$WEB_DIR"',
            "source venv/bin/activate",
            "",
            "python MainProgram.py \\",
            '    -a "$BOT_HOST" \\',
            '    --remoteU="$BOT_USER" \\',
            '    --remoteP="$BOT_PASS" \\',
            '    --webU="$WEB_USER" \\',
            '    --webP="$WEB_PASS" \\',
            '    --port="$WEB_PORT"',
            "",
        ]
    )


def render_start_all(s: InstallSettings) -> str:
    return "\n".join(
        [
            "#!/bin/bash",
            "",
            "# Start MFBot and Web Interface",
            _SCRIPT_DIR_LINE,
            "",
            'echo "Starting MFBot services..."',
            "",
            "# Start bot in background",
            '"$SCRIPT_DIR/start_bot.sh" &',
            "BOT_PID=$!",
            "",
            'echo "MFBot started with PID: $BOT_PID"',
            f"sleep {s.start_delay}",
            "",
            "# Start web interface",
            '"$SCRIPT_DIR/start_webui.sh"',
            "",
        ]
    )


START_SCRIPTS = {
    "start_bot.sh": render_start_bot,
    "start_webui.sh": render_start_webui,
    "start_all.sh": render_start_all,
}


def _unit(*, description: str, after: str, requires: str | None, workdir: str, exec_start: str, restart_sec: int) -> str:
    unit = ["[Unit]", f"Description={description}", f"After={after}"]
    if requires:
        unit.append(f"Requires={requires}")
    return "\n".join(
        [
            *unit,
            "",
            "[Service]",
            "Type=simple",
            "User=root",
            f"WorkingDirectory={workdir}",
            f"ExecStart={exec_start}",
            "Restart=on-failure",
            f"RestartSec={restart_sec}",
            "",
            "[Install]",
            "WantedBy=multi-user.target",
            "",
        ]
    )


def render_bot_unit(s: InstallSettings) -> str:
    return _unit(
        description="Magical Fidget Bot",
        after="network.target",
        requires=None,
        workdir=str(s.install_dir),
        exec_start=str(s.bot_path),
        restart_sec=s.restart_sec,
    )


def render_webui_unit(s: InstallSettings) -> str:
    return _unit(
        description="MFBot Web Interface",
        after=f"network.target {BOT_UNIT}",
        requires=BOT_UNIT,
        workdir=str(s.web_dir),
        exec_start=str(s.install_dir / "start_webui.sh"),
        restart_sec=s.restart_sec,
    )


def compose_definition(s: InstallSettings) -> Dict[str, Any]:
    webui_cmd = (
        "pip install -r requirements.txt && python MainProgram.py"
        f" -a http://mfbot:{s.bot_port}"
        f" --remoteU={REMOTE_USER} --remoteP={REMOTE_PASSWORD}"
        f" --webU={WEB_USER} --webP={WEB_PASSWORD}"
        f" --port={s.web_port}"
    )
    return {
        "version": "3.8",
        "services": {
            "mfbot": {
                "image": "mono:latest",
                "container_name": "mfbot",
                "volumes": [f"{s.install_dir}:/app"],
                "working_dir": "/app",
                "command": f"./{s.bot_path.name}",
                "restart": "unless-stopped",
                "ports": [f"{s.bot_port}:{s.bot_port}"],
            },
            "mfbot-webui": {
                "image": "python:3.9-slim",
                "container_name": "mfbot-webui",
                "volumes": [f"{s.web_dir}:/app"],
                "working_dir": "/app",
                "command": ["bash", "-c", webui_cmd],
                "restart": "unless-stopped",
                "ports": [f"{s.web_port}:{s.web_port}"],
                "depends_on": ["mfbot"],
            },
        },
    }


def render_compose(s: InstallSettings) -> str:
    return yaml.safe_dump(compose_definition(s), sort_keys=False, default_flow_style=False)
