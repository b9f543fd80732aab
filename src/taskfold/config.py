# src/taskfold/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- The engine itself never reads settings; they are injected through AppState.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKFOLD"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    data_path: Path

    # ---- History ----
    history_limit: int  # 0 = unbounded

    # ---- Rendering ----
    icon_completed: str
    icon_uncompleted: str
    icon_folded: str
    vertical_child_char: str
    turn_right_child_char: str
    horizontal_child_char: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskfold") or "taskfold"
        # Console logs interleave with the interactive view; keep them quiet by default.
        log_level = _env(_k("LOG_LEVEL"), "WARNING")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskfold"))
        data_path = _env_path(_k("DATA_PATH"), data_dir / "data.json")

        history_limit = max(0, _env_int(_k("HISTORY_LIMIT"), 0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            data_path=data_path,
            history_limit=history_limit,
            icon_completed=_env(_k("ICON_COMPLETED"), "[x]"),
            icon_uncompleted=_env(_k("ICON_UNCOMPLETED"), "[ ]"),
            icon_folded=_env(_k("ICON_FOLDED"), "[+]"),
            vertical_child_char=_env(_k("VERTICAL_CHILD_CHAR"), "║"),
            turn_right_child_char=_env(_k("TURN_RIGHT_CHILD_CHAR"), "╚"),
            horizontal_child_char=_env(_k("HORIZONTAL_CHILD_CHAR"), "═"),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
