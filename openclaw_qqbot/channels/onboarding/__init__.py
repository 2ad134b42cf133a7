"""Channel onboarding adapters"""

from .prompter import SelectOption, WizardPrompter
from .qqbot import QQBotOnboardingAdapter, qqbot_onboarding_adapter
from .types import (
    ChannelOnboardingAdapter,
    ChannelOnboardingConfigureContext,
    ChannelOnboardingResult,
    ChannelOnboardingStatus,
    ChannelOnboardingStatusContext,
)

__all__ = [
    "ChannelOnboardingAdapter",
    "ChannelOnboardingConfigureContext",
    "ChannelOnboardingResult",
    "ChannelOnboardingStatus",
    "ChannelOnboardingStatusContext",
    "SelectOption",
    "WizardPrompter",
    "QQBotOnboardingAdapter",
    "qqbot_onboarding_adapter",
]
