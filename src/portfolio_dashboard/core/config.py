"""Application configuration, loaded from config.json at project root."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class AppConfig:
    currency: str = "USD"
    history_days: int = 30
    random_seed: Optional[int] = None
    user_name: str = ""


_DEFAULTS = AppConfig()
_cached: Optional[AppConfig] = None


def _config_path() -> Path:
    from ..data.database import _find_project_root
    return _find_project_root() / "config.json"


def _parse(data: dict) -> AppConfig:
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    seed = data.get("random_seed", _DEFAULTS.random_seed)
    days = int(data.get("history_days", _DEFAULTS.history_days))
    if days < 1:
        raise ValueError(f"history_days must be >= 1, got {days}")
    return AppConfig(
        currency=str(data.get("currency", _DEFAULTS.currency)),
        history_days=days,
        random_seed=int(seed) if seed is not None else None,
        user_name=str(data.get("user_name", "")),
    )


def get_config() -> AppConfig:
    global _cached
    if _cached is not None:
        return _cached
    path = _config_path()
    if not path.exists():
        _cached = AppConfig()
        return _cached
    try:
        _cached = _parse(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, ValueError, TypeError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        _cached = AppConfig()
    return _cached


def save_config(cfg: AppConfig) -> None:
    global _cached
    _cached = cfg
    data = {
        "currency": cfg.currency,
        "history_days": cfg.history_days,
        "random_seed": cfg.random_seed,
        "user_name": cfg.user_name,
    }
    _config_path().write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")


def reset_config_cache() -> None:
    global _cached
    _cached = None
