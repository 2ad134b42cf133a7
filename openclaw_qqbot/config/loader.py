"""Configuration loader for the QQ Bot onboarding tool.

Loads configuration from files and environment variables.

- JSON5 parsing (comments, trailing commas, unquoted keys)
- ${ENV_VAR} environment variable substitution on load
- Backup rotation on write
- Preserve ${VAR} tokens in written config
"""

from __future__ import annotations

import json
import logging
import os
import re
import shutil
from pathlib import Path
from typing import Any, Optional

import json5
from pydantic import ValidationError

from .schema import BotConfig

logger = logging.getLogger(__name__)

MAX_BACKUPS = 3


class ConfigError(Exception):
    """Raised when a config file cannot be parsed or validated"""


# ---------------------------------------------------------------------------
# env-var substitution
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def _substitute_env_vars(obj: Any) -> Any:
    """Recursively replace ${VAR} with os.environ values (unresolved tokens stay)."""
    if isinstance(obj, str):

        def _replace(m: re.Match) -> str:
            return os.environ.get(m.group(1), m.group(0))

        return _ENV_VAR_RE.sub(_replace, obj)
    if isinstance(obj, dict):
        return {k: _substitute_env_vars(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_substitute_env_vars(v) for v in obj]
    return obj


# ---------------------------------------------------------------------------
# Core load / save
# ---------------------------------------------------------------------------

def get_config_path() -> Path:
    """Get the path to the active configuration file.

    Searches well-known locations.  If no file is found, returns the default
    user-level config path (``~/.openclaw/openclaw.json``) even if it does not
    yet exist.
    """
    candidates = [
        Path.cwd() / "openclaw.json",
        Path.cwd() / "openclaw.json5",
        Path.home() / ".openclaw" / "openclaw.json",
    ]
    for candidate in candidates:
        if candidate.exists():
            return candidate

    return Path.home() / ".openclaw" / "openclaw.json"


def load_config_raw(path: Path, substitute: bool = True) -> dict[str, Any]:
    """Load a config file with JSON5 parsing and, by default, env-var substitution."""
    try:
        obj = json5.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise ConfigError(f"Invalid config file {path}: {exc}") from exc
    if substitute:
        obj = _substitute_env_vars(obj)
    if not isinstance(obj, dict):
        raise ConfigError(f"Config root must be an object: {path}")
    return obj


def load_config(config_path: Optional[str | Path] = None) -> BotConfig:
    """Load bot configuration.

    Args:
        config_path: Optional path to config file.  Supports JSON5.

    Returns:
        Validated configuration. A missing file yields an empty config.

    Raises:
        ConfigError: the file exists but is not a valid config
    """
    path = Path(config_path) if config_path else get_config_path()

    if not path.exists():
        logger.info(f"No config at {path}, starting from empty config")
        return BotConfig()

    config_dict = load_config_raw(path)
    try:
        config = BotConfig.model_validate(config_dict)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc

    logger.debug(f"Loaded config from {path}, keys={list(config_dict.keys())[:5]}")
    return config


def _restore_env_refs(new: Any, raw: Any) -> Any:
    """Put ${VAR} tokens from the file back wherever the value is unchanged."""
    if isinstance(new, dict) and isinstance(raw, dict):
        return {k: _restore_env_refs(v, raw[k]) if k in raw else v for k, v in new.items()}
    if isinstance(new, list) and isinstance(raw, list) and len(new) == len(raw):
        return [_restore_env_refs(n, r) for n, r in zip(new, raw)]
    if isinstance(raw, str) and _ENV_VAR_RE.search(raw) and _substitute_env_vars(raw) == new:
        return raw
    return new


def _backup_path(path: Path, index: int) -> Path:
    return path.with_name(f"{path.name}.bak{index}")


def _rotate_backups(path: Path) -> None:
    for i in range(MAX_BACKUPS - 1, 0, -1):
        src = _backup_path(path, i)
        if src.exists():
            shutil.copy2(src, _backup_path(path, i + 1))
    shutil.copy2(path, _backup_path(path, 1))


def save_config(config: BotConfig, config_path: Optional[str | Path] = None) -> Path:
    """Save bot configuration to file.

    - Keeps up to three ``<name>.bakN`` backups of the previous file
    - Preserves ${VAR} tokens from the previous file for unchanged values

    Returns:
        Path written
    """
    path = Path(config_path) if config_path else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.to_dict()
    if path.exists():
        try:
            config_dict = _restore_env_refs(config_dict, load_config_raw(path, substitute=False))
        except ConfigError as exc:
            logger.debug(f"Not preserving ${{VAR}} references: {exc}")
        try:
            _rotate_backups(path)
        except OSError as exc:
            logger.debug(f"Backup rotation skipped: {exc}")

    with open(path, "w", encoding="utf-8") as f:
        json.dump(config_dict, f, indent=2, ensure_ascii=False)
        f.write("\n")

    logger.info(f"Saved config to {path}")
    return path
