"""
Pytest configuration for openclaw-qqbot tests

Shared fixtures for configs, prompters and environments
"""
from unittest.mock import AsyncMock, Mock

import pytest

from openclaw_qqbot.channels.onboarding import QQBotOnboardingAdapter
from openclaw_qqbot.config.schema import BotConfig


@pytest.fixture
def mock_prompter():
    """Mock wizard prompter"""
    prompter = Mock()
    prompter.text = AsyncMock()
    prompter.select = AsyncMock()
    prompter.note = AsyncMock()
    prompter.confirm = AsyncMock()
    return prompter


@pytest.fixture
def empty_config():
    """Config with unrelated sections and no qqbot channel"""
    return BotConfig.model_validate({
        "agent": {},
        "gateway": {},
        "channels": {},
    })


@pytest.fixture
def make_config():
    """Build a config from a ``channels.qqbot`` payload"""
    def _make(qqbot=None, **channels):
        payload = dict(channels)
        if qqbot is not None:
            payload["qqbot"] = qqbot
        return BotConfig.model_validate({"channels": payload})
    return _make


@pytest.fixture
def make_adapter():
    """Adapter reading from a fixed environment instead of os.environ"""
    def _make(env=None):
        return QQBotOnboardingAdapter(env=dict(env or {}).get)
    return _make


@pytest.fixture
def qqbot_env():
    return {"QQBOT_APP_ID": " 102146862 ", "QQBOT_CLIENT_SECRET": "env-secret"}
