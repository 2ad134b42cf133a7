"""Configuration schema, loading and QQ Bot account resolution"""

from .accounts import (
    DEFAULT_ACCOUNT_ID,
    ENV_APP_ID,
    ENV_CLIENT_SECRET,
    EnvLookup,
    ResolvedQQBotAccount,
    list_qqbot_account_ids,
    resolve_qqbot_account,
)
from .loader import ConfigError, get_config_path, load_config, save_config
from .schema import BotConfig, ChannelsConfig, QQBotAccountConfig, QQBotChannelConfig

__all__ = [
    "BotConfig",
    "ChannelsConfig",
    "QQBotAccountConfig",
    "QQBotChannelConfig",
    "DEFAULT_ACCOUNT_ID",
    "ENV_APP_ID",
    "ENV_CLIENT_SECRET",
    "EnvLookup",
    "ResolvedQQBotAccount",
    "list_qqbot_account_ids",
    "resolve_qqbot_account",
    "ConfigError",
    "get_config_path",
    "load_config",
    "save_config",
]
