"""Configuration schema for the QQ Bot channel.

Keys are camelCase on disk (``appId``, ``clientSecret``) and snake_case in
Python. Models are frozen: updates go through ``model_copy(update=...)`` so
untouched branches are shared between the old and new tree.
"""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Base(BaseModel):
    """Frozen model accepting both camelCase and snake_case keys.

    Unknown keys are kept as extras and written back unchanged.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="allow",
    )


class QQBotAccountConfig(Base):
    """Credentials and options for a single QQ Bot account"""

    enabled: bool | None = None
    name: str | None = None
    app_id: str | None = None
    client_secret: str | None = None
    client_secret_file: str | None = None
    dm_policy: str | None = None
    allow_from: list[str] | None = None
    system_prompt: str | None = None
    image_server_base_url: str | None = None
    markdown_support: bool | None = None


class QQBotChannelConfig(QQBotAccountConfig):
    """Channel-level config: the default account slot plus named accounts"""

    accounts: dict[str, QQBotAccountConfig] | None = None


class ChannelsConfig(Base):
    """All channel configs.

    Only ``qqbot`` is typed; other channels are opaque payloads stored as
    extras (channel name -> payload) and passed through untouched.
    """

    qqbot: QQBotChannelConfig | None = None

    def other_channels(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class BotConfig(Base):
    """Top-level bot configuration"""

    channels: ChannelsConfig = Field(default_factory=ChannelsConfig)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using on-disk (camelCase) keys, dropping unset values"""
        return self.model_dump(by_alias=True, exclude_none=True)
