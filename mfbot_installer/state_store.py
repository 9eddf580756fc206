from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def _yaml():
    try:
        import yaml  # type: ignore
    except ImportError as e:  # pragma: no cover
        raise RuntimeError(
            "YAML state requested but PyYAML is not available. "
            "Use JSON state or install PyYAML."
        ) from e
    return yaml


def load_state(path: str) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        return {}

    if _detect_format(p) in {"yaml", "yml"}:
        data = _yaml().safe_load(p.read_text(encoding="utf-8")) or {}
    else:
        data = json.loads(p.read_text(encoding="utf-8"))

    if not isinstance(data, dict):
        raise ValueError(f"State file must be an object/dict, got {type(data)}")

    return data


def save_state(path: str, state: Dict[str, Any]) -> None:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    if _detect_format(p) in {"yaml", "yml"}:
        p.write_text(_yaml().safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding user values)."""

    state.setdefault("version", "1.0")
    state.setdefault("config", {})
    state.setdefault("host", {})
    state.setdefault("execution", {})

    cfg = state["config"]
    cfg.setdefault("dry_run", False)
    cfg.setdefault("install_dir", "/opt/mfbot")
    cfg.setdefault("web_subdir", "webinterface")
    cfg.setdefault("systemd_dir", "/etc/systemd/system")
    cfg.setdefault("os_release_path", "/etc/os-release")
    cfg.setdefault("bot_port", 8443)
    cfg.setdefault("web_port", 8050)
    cfg.setdefault("bot_url_template", "https://download.mfbot.de/latest/MFBot_Konsole_{arch}")
    cfg.setdefault("webui_url", "https://download.mfbot.de/latest/mfbot-webinterface.zip")
    # .NET: accept any installed major >= runtime_min_major; install runtime_channel otherwise.
    cfg.setdefault("runtime_min_major", 6)
    cfg.setdefault("runtime_channel", "8.0")
    cfg.setdefault("runtime_pinned_version", "6.0")
    cfg.setdefault("runtime_install_dir", "/usr/share/dotnet")
    cfg.setdefault("dotnet_install_script_url", "https://dot.net/v1/dotnet-install.sh")
    cfg.setdefault(
        "microsoft_repo_url_template",
        "https://packages.microsoft.com/config/{distro}/{version}/packages-microsoft-prod.deb",
    )
    cfg.setdefault("start_delay", 3)
    cfg.setdefault("restart_sec", 10)
    cfg.setdefault("tmp_dir", "/tmp")

    exe = state["execution"]
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("errors", [])
    exe.setdefault("warnings", [])

    return state


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def is_step_completed(state: Dict[str, Any], step_id: str) -> bool:
    exe = state.get("execution") or {}
    completed = exe.get("completed_steps") or []
    return step_id in completed


def record_warning(state: Dict[str, Any], step_id: str, message: str) -> None:
    logger.warning(message)
    state.setdefault("execution", {}).setdefault("warnings", []).append({"step": step_id, "warning": message})


def warnings_for(state: Dict[str, Any], step_id: str) -> list:
    exe = state.get("execution") or {}
    return [w for w in (exe.get("warnings") or []) if w.get("step") == step_id]


def clear_step_completed(state: Dict[str, Any], step_id: str) -> None:
    completed = (state.get("execution") or {}).get("completed_steps") or []
    if step_id in completed:
        completed.remove(step_id)
