"""
QQ Bot channel onboarding adapter

Reports whether the qqbot channel has usable credentials and walks the
operator through configuring one account (the default slot or a named
account under ``channels.qqbot.accounts``).
"""
from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from ...config.accounts import (
    DEFAULT_ACCOUNT_ID,
    ENV_APP_ID,
    ENV_CLIENT_SECRET,
    EnvLookup,
    ResolvedQQBotAccount,
    list_qqbot_account_ids,
    read_env,
    resolve_qqbot_account,
)
from ...config.schema import BotConfig, QQBotAccountConfig, QQBotChannelConfig
from .prompter import SelectOption, WizardPrompter
from .types import (
    ChannelOnboardingAdapter,
    ChannelOnboardingConfigureContext,
    ChannelOnboardingResult,
    ChannelOnboardingStatus,
    ChannelOnboardingStatusContext,
)

logger = logging.getLogger(__name__)

CHANNEL_ID = "qqbot"

QUICKSTART_SCORE_CONFIGURED = 1
QUICKSTART_SCORE_UNCONFIGURED = 20

HELP_TITLE = "QQ Bot 配置"
HELP_LINES = (
    "1) 打开 QQ 开放平台: https://q.qq.com/",
    "2) 创建机器人应用，获取 AppID 和 ClientSecret",
    "3) 在「开发设置」中添加沙箱成员（测试阶段）",
    f"4) 你也可以设置环境变量 {ENV_APP_ID} 和 {ENV_CLIENT_SECRET}",
    "",
    "文档: https://bot.q.qq.com/wiki/",
)

DEFAULT_ACCOUNT_LABEL = "默认账户"


def _require(label: str):
    def validate(value: str | None) -> str | None:
        return None if value and value.strip() else f"{label} 不能为空"

    return validate


def _with_qqbot(cfg: BotConfig, qqbot: QQBotChannelConfig) -> BotConfig:
    channels = cfg.channels.model_copy(update={"qqbot": qqbot})
    return cfg.model_copy(update={"channels": channels})


def _qqbot_or_empty(cfg: BotConfig) -> QQBotChannelConfig:
    return cfg.channels.qqbot or QQBotChannelConfig()


def apply_qqbot_credentials(
    cfg: BotConfig,
    account_id: str,
    app_id: str,
    client_secret: str,
) -> BotConfig:
    """
    Write credentials into the slot for ``account_id``

    Only ``enabled``, ``appId`` and ``clientSecret`` are overwritten at the
    slot; sibling fields and other accounts are carried over as-is.
    """
    qqbot = _qqbot_or_empty(cfg)
    credentials = {"enabled": True, "app_id": app_id, "client_secret": client_secret}

    if account_id == DEFAULT_ACCOUNT_ID:
        return _with_qqbot(cfg, qqbot.model_copy(update=credentials))

    accounts = dict(qqbot.accounts or {})
    existing = accounts.get(account_id) or QQBotAccountConfig()
    accounts[account_id] = existing.model_copy(update=credentials)
    return _with_qqbot(cfg, qqbot.model_copy(update={"enabled": True, "accounts": accounts}))


def enable_qqbot(cfg: BotConfig) -> BotConfig:
    """Set ``channels.qqbot.enabled`` without touching credentials"""
    return _with_qqbot(cfg, _qqbot_or_empty(cfg).model_copy(update={"enabled": True}))


def disable_qqbot(cfg: BotConfig) -> BotConfig:
    """Clear ``channels.qqbot.enabled``; credentials stay in place"""
    return _with_qqbot(cfg, _qqbot_or_empty(cfg).model_copy(update={"enabled": False}))


class QQBotOnboardingAdapter(ChannelOnboardingAdapter):
    """Onboarding adapter for the QQ Bot channel"""

    def __init__(self, env: EnvLookup | None = os.environ.get):
        super().__init__(CHANNEL_ID)
        self.env = env

    def _resolve(self, cfg: BotConfig, account_id: str) -> ResolvedQQBotAccount:
        return resolve_qqbot_account(cfg, account_id, env=self.env)

    async def get_status(self, ctx: ChannelOnboardingStatusContext) -> ChannelOnboardingStatus:
        """Check QQ Bot configuration status"""
        cfg = ctx.cfg
        configured = any(
            self._resolve(cfg, account_id).has_credentials
            for account_id in list_qqbot_account_ids(cfg)
        )

        return ChannelOnboardingStatus(
            channel=self.channel_id,
            configured=configured,
            status_lines=[f"QQ Bot: {'已配置' if configured else '需要 AppID 和 ClientSecret'}"],
            selection_hint="已配置" if configured else "支持 QQ 群聊和私聊",
            quickstart_score=(
                QUICKSTART_SCORE_CONFIGURED if configured else QUICKSTART_SCORE_UNCONFIGURED
            ),
        )

    async def configure(self, ctx: ChannelOnboardingConfigureContext) -> ChannelOnboardingResult:
        """Interactive QQ Bot configuration"""
        account_id = await self.resolve_account_id(
            ctx.cfg,
            override=_override_for(ctx.account_overrides, self.channel_id),
            should_prompt=ctx.should_prompt_account_ids,
            prompter=ctx.prompter,
        )
        cfg, account_id = await self.negotiate(ctx.cfg, account_id, ctx.prompter)
        return ChannelOnboardingResult(cfg=cfg, account_id=account_id)

    async def resolve_account_id(
        self,
        cfg: BotConfig,
        override: str | None,
        should_prompt: bool,
        prompter: WizardPrompter,
    ) -> str:
        """
        Pick the account to configure this run

        An override always wins. Otherwise the first listed account (or
        ``default``) is used, and the operator is asked to choose only when
        prompting is enabled and more than one account exists.
        """
        override = override.strip() if override else ""
        if override:
            logger.debug(f"Using qqbot account override: {override}")
            return override

        existing_ids = list_qqbot_account_ids(cfg)
        account_id = existing_ids[0] if existing_ids else DEFAULT_ACCOUNT_ID

        if should_prompt and len(existing_ids) > 1:
            account_id = await prompter.select(
                message="选择 QQBot 账户",
                options=[
                    SelectOption(
                        value=existing_id,
                        label=DEFAULT_ACCOUNT_LABEL if existing_id == DEFAULT_ACCOUNT_ID else existing_id,
                    )
                    for existing_id in existing_ids
                ],
                initial_value=account_id,
            )

        logger.debug(f"Configuring qqbot account: {account_id}")
        return account_id

    async def negotiate(
        self,
        cfg: BotConfig,
        account_id: str,
        prompter: WizardPrompter,
    ) -> tuple[BotConfig, str]:
        """
        Decide between existing, environment and freshly entered credentials

        Returns:
            (updated config, account id). The config is returned unchanged
            when the operator keeps the current credentials.
        """
        resolved = self._resolve(cfg, account_id)
        allow_env = account_id == DEFAULT_ACCOUNT_ID
        env = self.env if allow_env else None
        env_app_id = read_env(env, ENV_APP_ID)
        env_secret = read_env(env, ENV_CLIENT_SECRET)
        can_use_env = allow_env and bool(env_app_id and env_secret)
        has_config_credentials = bool(resolved.config.app_id and resolved.config.client_secret)

        if not resolved.has_credentials:
            await self._show_help(prompter)

        credentials: tuple[str, str]

        if can_use_env and not has_config_credentials:
            use_env = await prompter.confirm(
                message=f"检测到环境变量 {ENV_APP_ID} 和 {ENV_CLIENT_SECRET}，是否使用？",
                initial_value=True,
            )
            if use_env:
                logger.info("QQ Bot will use credentials from environment")
                return enable_qqbot(cfg), account_id
            credentials = await self._prompt_credentials(prompter, resolved)
        elif has_config_credentials:
            keep = await prompter.confirm(
                message="QQ Bot 已配置，是否保留当前配置？",
                initial_value=True,
            )
            if keep:
                logger.debug(f"Keeping existing qqbot credentials for {account_id}")
                return cfg, account_id
            credentials = await self._prompt_credentials(prompter, resolved)
        else:
            credentials = await self._prompt_credentials(prompter, resolved)

        app_id, client_secret = credentials
        if not (app_id and client_secret):
            return cfg, account_id

        logger.info(f"QQ Bot credentials configured for account: {account_id}")
        return apply_qqbot_credentials(cfg, account_id, app_id, client_secret), account_id

    def disable(self, cfg: BotConfig) -> BotConfig:
        """Disable the QQ Bot channel, keeping its credentials"""
        logger.info("QQ Bot channel disabled")
        return disable_qqbot(cfg)

    async def _prompt_credentials(
        self,
        prompter: WizardPrompter,
        resolved: ResolvedQQBotAccount,
    ) -> tuple[str, str]:
        app_id = await prompter.text(
            message="请输入 QQ Bot AppID",
            placeholder="例如: 102146862",
            initial_value=resolved.app_id or None,
            validate=_require("AppID"),
        )
        client_secret = await prompter.text(
            message="请输入 QQ Bot ClientSecret",
            placeholder="你的 ClientSecret",
            validate=_require("ClientSecret"),
            secret=True,
        )
        return str(app_id).strip(), str(client_secret).strip()

    async def _show_help(self, prompter: WizardPrompter) -> None:
        """Show help for registering a bot on the QQ open platform"""
        await prompter.note("\n".join(HELP_LINES), HELP_TITLE)


def _override_for(overrides: Mapping[str, str] | None, channel_id: str) -> str | None:
    if not overrides:
        return None
    return overrides.get(channel_id)


qqbot_onboarding_adapter = QQBotOnboardingAdapter()
