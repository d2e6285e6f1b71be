from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from rich.errors import StyleSyntaxError
from rich.style import Style

from tailsieve import paths
from tailsieve.errors import ConfigError

TRUNCATION_NOTICE = "***FILE TRUNCATED: READING FROM NEW EOF***"


@dataclass(frozen=True)
class TailConfig:
    num_lines: int = 5

    # rich style used for sieve matches
    highlight_style: str = "red"
    truncation_notice: str = TRUNCATION_NOTICE

    # watchdog backend
    watch_polling: bool = False
    poll_interval: float = 1.0


DEFAULT_CONFIG = TailConfig()


def _to_dict(cfg: TailConfig) -> Dict[str, Any]:
    return {
        "num_lines": cfg.num_lines,
        "highlight_style": cfg.highlight_style,
        "truncation_notice": cfg.truncation_notice,
        "watch": {
            "polling": cfg.watch_polling,
            "poll_interval": cfg.poll_interval,
        },
    }


def write_default_config(path: Optional[Path] = None) -> Path:
    """Create config.yaml with the defaults if it does not exist yet."""
    cfg_path = path or paths.config_file()
    if cfg_path.exists():
        return cfg_path

    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    cfg_path.write_text(
        yaml.safe_dump(_to_dict(DEFAULT_CONFIG), sort_keys=False),
        encoding="utf-8",
    )
    return cfg_path


def load_config(path: Optional[Path] = None) -> TailConfig:
    """Load config.yaml, falling back to the defaults for anything missing."""
    cfg_path = path or paths.config_file()
    if not cfg_path.exists():
        return DEFAULT_CONFIG

    try:
        raw = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot load {cfg_path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{cfg_path}: expected a mapping at top level")

    watch = raw.get("watch", {}) or {}
    if not isinstance(watch, dict):
        raise ConfigError(f"{cfg_path}: 'watch' must be a mapping")
    try:
        num_lines = int(raw.get("num_lines", DEFAULT_CONFIG.num_lines))
        poll_interval = float(watch.get("poll_interval", DEFAULT_CONFIG.poll_interval))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{cfg_path}: {e}") from e

    style = str(raw.get("highlight_style", DEFAULT_CONFIG.highlight_style))
    try:
        Style.parse(style)
    except StyleSyntaxError as e:
        raise ConfigError(f"{cfg_path}: invalid highlight_style {style!r}: {e}") from e

    if poll_interval <= 0:
        raise ConfigError(f"{cfg_path}: watch.poll_interval must be positive")

    return TailConfig(
        num_lines=num_lines,
        highlight_style=style,
        truncation_notice=str(raw.get("truncation_notice", DEFAULT_CONFIG.truncation_notice)),
        watch_polling=bool(watch.get("polling", DEFAULT_CONFIG.watch_polling)),
        poll_interval=poll_interval,
    )
