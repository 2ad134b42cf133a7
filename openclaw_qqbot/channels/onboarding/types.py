"""
Channel onboarding adapter types
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ...config.schema import BotConfig
from .prompter import WizardPrompter


@dataclass
class ChannelOnboardingStatus:
    """Status of channel configuration"""

    channel: str
    """Channel id"""

    configured: bool
    """Whether at least one account has usable credentials"""

    status_lines: list[str] = field(default_factory=list)
    """Human-readable status lines for the setup menu"""

    selection_hint: str | None = None
    """Short hint shown next to the channel in the menu"""

    quickstart_score: int | None = None
    """Priority hint for the host's quickstart ranking"""


@dataclass
class ChannelOnboardingStatusContext:
    """Inputs for a status check"""

    cfg: BotConfig
    account_overrides: Mapping[str, str] = field(default_factory=dict)
    options: Any = None


@dataclass
class ChannelOnboardingConfigureContext:
    """Inputs for an interactive configure run"""

    cfg: BotConfig
    prompter: WizardPrompter
    account_overrides: Mapping[str, str] = field(default_factory=dict)
    should_prompt_account_ids: bool = False
    force_allow_from: bool = False
    runtime: Any = None
    options: Any = None


@dataclass
class ChannelOnboardingResult:
    """Updated configuration and the account that was configured"""

    cfg: BotConfig
    account_id: str | None = None


class ChannelOnboardingAdapter(ABC):
    """
    Base class for channel onboarding adapters

    Each channel implements this interface to report its configuration
    status and provide a guided configuration flow.
    """

    def __init__(self, channel_id: str):
        self.channel_id = channel_id

    @abstractmethod
    async def get_status(self, ctx: ChannelOnboardingStatusContext) -> ChannelOnboardingStatus:
        """
        Check current configuration status

        Args:
            ctx: Status context carrying the current configuration

        Returns:
            Status indicating what's configured
        """
        pass

    @abstractmethod
    async def configure(self, ctx: ChannelOnboardingConfigureContext) -> ChannelOnboardingResult:
        """
        Interactive configuration wizard

        Args:
            ctx: Configure context (config, prompter, account overrides)

        Returns:
            Updated configuration and configured account id
        """
        pass

    def disable(self, cfg: BotConfig) -> BotConfig:
        """Return a config with this channel disabled (unchanged by default)"""
        return cfg
