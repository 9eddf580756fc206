from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..settings import DOCS_URL, FORUM_URL, REMOTE_PASSWORD, REMOTE_USER, WEB_PASSWORD, WEB_USER, InstallSettings
from .render import BOT_UNIT, WEBUI_UNIT

RULE = "=" * 40


def render_summary(s: InstallSettings, state: Dict[str, Any], *, stopped_after: Optional[str] = None) -> str:
    install_dir = str(s.install_dir)
    bot_service = BOT_UNIT.removesuffix(".service")
    webui_service = WEBUI_UNIT.removesuffix(".service")

    if stopped_after is not None:
        header = [
            "Installation Stopped (partial install)",
            RULE,
            "",
            f"Stopped after step {stopped_after}; later steps did not run.",
            "Run again without --stop-after to finish the installation.",
        ]
    else:
        warned = bool((state.get("execution") or {}).get("warnings"))
        header = [
            "Installation Complete!",
            RULE,
            "",
            "MFBot has been installed with warnings (see below)." if warned else "MFBot has been successfully installed!",
        ]

    lines: List[str] = [
        "",
        RULE,
        *header,
        "",
        f"Installation Directory: {install_dir}",
        "",
        "Quick Start Guide:",
        "",
        "1. Configure your bot:",
        f"   Edit: {s.config_path}",
        f"   Or after first run: {s.install_dir / 'Acc.ini'}",
        "",
        "2. Start the bot only:",
        f"   cd {install_dir}",
        "   ./start_bot.sh",
        "",
        "3. Start the web interface only:",
        f"   cd {install_dir}",
        "   ./start_webui.sh",
        f"   Then open: http://localhost:{s.web_port}",
        "",
        "4. Start both bot and web interface:",
        f"   cd {install_dir}",
        "   ./start_all.sh",
        "",
        "Systemd Service (optional, not enabled):",
        f"   sudo systemctl start {bot_service}",
        f"   sudo systemctl start {webui_service}",
        f"   sudo systemctl enable {bot_service}  # Auto-start on boot",
        f"   sudo systemctl enable {webui_service}",
        "",
        "Docker Compose (alternative):",
        f"   cd {install_dir} && docker compose up -d",
        "",
        "Default Credentials:",
        "   Bot Remote Access:",
        f"     Username: {REMOTE_USER}",
        f"     Password: {REMOTE_PASSWORD}",
        f"     Port: {s.bot_port}",
        "",
        "   Web Interface:",
        f"     Username: {WEB_USER}",
        f"     Password: {WEB_PASSWORD}",
        f"     Port: {s.web_port}",
        "",
        "IMPORTANT: Change default passwords before exposing to network!",
        "",
    ]

    warnings = (state.get("execution") or {}).get("warnings") or []
    if warnings:
        lines.append("Warnings during installation:")
        lines.extend(f"   [{w.get('step')}] {w.get('warning')}" for w in warnings)
        lines.append("")

    lines += [
        "Documentation:",
        f"   Official site: {DOCS_URL}",
        f"   Forum: {FORUM_URL}",
        "",
    ]
    return "\n".join(lines)
