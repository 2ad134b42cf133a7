"""
QQ Bot account listing and resolution

An account is either the reserved ``default`` slot (the channel's top-level
fields) or a named entry under ``channels.qqbot.accounts``.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from .schema import BotConfig, QQBotAccountConfig, QQBotChannelConfig

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_ID = "default"

ENV_APP_ID = "QQBOT_APP_ID"
ENV_CLIENT_SECRET = "QQBOT_CLIENT_SECRET"

EnvLookup = Callable[[str], str | None]
"""Environment lookup capability; ``None`` in its place means no environment"""

SecretSource = Literal["config", "file", "env", "none"]

_ACCOUNT_FIELDS = tuple(QQBotAccountConfig.model_fields)


@dataclass(frozen=True)
class ResolvedQQBotAccount:
    """Effective view of one account after default layering"""

    account_id: str
    name: str | None
    enabled: bool
    app_id: str
    client_secret: str
    secret_source: SecretSource
    config: QQBotAccountConfig
    """Raw config at this account's slot (no env/file fallbacks applied)"""

    @property
    def has_credentials(self) -> bool:
        return bool(self.app_id and self.client_secret)


def get_qqbot_channel(cfg: BotConfig) -> QQBotChannelConfig | None:
    return cfg.channels.qqbot


def list_qqbot_account_ids(cfg: BotConfig) -> list[str]:
    """
    List account ids that have an AppID configured

    ``default`` comes first when the top-level slot has an AppID, followed by
    named accounts in insertion order.
    """
    qqbot = get_qqbot_channel(cfg)
    if qqbot is None:
        return []

    ids: list[str] = []
    if qqbot.app_id:
        ids.append(DEFAULT_ACCOUNT_ID)
    for account_id, account in (qqbot.accounts or {}).items():
        if account.app_id and account_id not in ids:
            ids.append(account_id)
    return ids


def read_env(env: EnvLookup | None, name: str) -> str:
    """Read and trim an environment variable, '' when unavailable"""
    if env is None:
        return ""
    value = env(name)
    return value.strip() if value else ""


def _default_account_config(qqbot: QQBotChannelConfig | None) -> QQBotAccountConfig:
    if qqbot is None:
        return QQBotAccountConfig()
    values = {field: getattr(qqbot, field) for field in _ACCOUNT_FIELDS}
    return QQBotAccountConfig(**values)


def _read_secret_file(path: str) -> str:
    try:
        return Path(path).expanduser().read_text(encoding="utf-8").strip()
    except OSError as exc:
        logger.warning(f"Failed to read QQ Bot client secret file {path}: {exc}")
        return ""


def resolve_qqbot_account(
    cfg: BotConfig,
    account_id: str | None = None,
    env: EnvLookup | None = os.environ.get,
) -> ResolvedQQBotAccount:
    """
    Resolve the effective credentials for an account

    Args:
        cfg: Bot configuration
        account_id: Account id, ``default`` when omitted
        env: Environment lookup; only consulted for the default account

    Returns:
        Resolved account view. ``config`` holds the raw slot so callers can
        tell explicitly configured credentials from inherited ones.
    """
    resolved_id = account_id or DEFAULT_ACCOUNT_ID
    qqbot = get_qqbot_channel(cfg)
    is_default = resolved_id == DEFAULT_ACCOUNT_ID

    if is_default:
        account_config = _default_account_config(qqbot)
    else:
        accounts = (qqbot.accounts if qqbot else None) or {}
        account_config = accounts.get(resolved_id) or QQBotAccountConfig()

    client_secret = ""
    secret_source: SecretSource = "none"
    if account_config.client_secret:
        client_secret = account_config.client_secret
        secret_source = "config"
    elif account_config.client_secret_file:
        client_secret = _read_secret_file(account_config.client_secret_file)
        if client_secret:
            secret_source = "file"

    if not client_secret and is_default:
        client_secret = read_env(env, ENV_CLIENT_SECRET)
        if client_secret:
            secret_source = "env"

    app_id = account_config.app_id or ""
    if not app_id and is_default:
        app_id = read_env(env, ENV_APP_ID)

    return ResolvedQQBotAccount(
        account_id=resolved_id,
        name=account_config.name,
        enabled=account_config.enabled is not False,
        app_id=app_id,
        client_secret=client_secret,
        secret_source=secret_source,
        config=account_config,
    )
