"""Runtime settings: defaults, then config.toml, then environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from grid_games.registry import DEFAULT_PLUGIN_MODULES


class Settings(BaseModel):
    plugins: List[str] = Field(default_factory=lambda: list(DEFAULT_PLUGIN_MODULES))
    log_level: str = "WARNING"
    seed: Optional[int] = None

    class Config:
        extra = "ignore"


def _load_config_table(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        return {}

    try:
        import tomllib

        config = tomllib.loads(config_path.read_text(encoding="utf-8"))
    except Exception:
        return {}

    return config.get("grid_games", {})


def _load_environment() -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    plugins = os.environ.get("GRID_GAMES_PLUGINS")
    if plugins:
        values["plugins"] = [path.strip() for path in plugins.split(",") if path.strip()]
    log_level = os.environ.get("GRID_GAMES_LOG_LEVEL")
    if log_level:
        values["log_level"] = log_level
    seed = os.environ.get("GRID_GAMES_SEED")
    if seed:
        values["seed"] = seed
    return values


def load_settings(config_path: Optional[Path] = None, **overrides: Any) -> Settings:
    values = _load_config_table(config_path or Path("config.toml"))
    values.update(_load_environment())
    values.update({key: value for key, value in overrides.items() if value is not None})
    settings = (
        Settings.model_validate(values) if hasattr(Settings, "model_validate") else Settings.parse_obj(values)
    )
    settings.log_level = settings.log_level.upper()
    return settings
