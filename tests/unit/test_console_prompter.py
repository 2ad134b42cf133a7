"""Unit tests for the rich console prompter"""

import io

import pytest
from rich.console import Console
from rich.prompt import Prompt

from openclaw_qqbot.channels.onboarding import SelectOption
from openclaw_qqbot.wizard.prompter import ConsolePrompter


def _prompter(answers: str):
    output = io.StringIO()
    console = Console(file=output, force_terminal=False, width=100)
    return ConsolePrompter(console=console, stream=io.StringIO(answers)), output


@pytest.mark.asyncio
async def test_note_renders_title_and_message():
    prompter, output = _prompter("")

    await prompter.note("1) 打开 QQ 开放平台", "QQ Bot 配置")

    rendered = output.getvalue()
    assert "QQ Bot 配置" in rendered
    assert "打开 QQ 开放平台" in rendered


@pytest.mark.asyncio
async def test_text_reprompts_until_valid():
    prompter, output = _prompter("\n  102146862  \n")

    value = await prompter.text(
        "请输入 QQ Bot AppID",
        placeholder="例如: 102146862",
        validate=lambda v: None if v and v.strip() else "AppID 不能为空",
    )

    assert value == "102146862"
    assert "AppID 不能为空" in output.getvalue()


@pytest.mark.asyncio
async def test_text_without_validator():
    prompter, _ = _prompter("hello\n")

    assert await prompter.text("Say something") == "hello"


@pytest.mark.asyncio
async def test_confirm():
    prompter, _ = _prompter("n\n")

    assert await prompter.confirm("Keep?", initial_value=True) is False


@pytest.mark.asyncio
async def test_select_returns_option_value():
    prompter, output = _prompter("2\n")
    options = [
        SelectOption(value="default", label="默认账户"),
        SelectOption(value="teamA", label="teamA", hint="group bot"),
    ]

    value = await prompter.select("选择 QQBot 账户", options, initial_value="default")

    assert value == "teamA"
    rendered = output.getvalue()
    assert "1. 默认账户" in rendered
    assert "2. teamA - group bot" in rendered


@pytest.mark.asyncio
async def test_select_requires_options():
    prompter, _ = _prompter("")

    with pytest.raises(ValueError):
        await prompter.select("Pick", [])


@pytest.mark.asyncio
async def test_secret_text_masks_input(monkeypatch):
    calls = []

    def fake_ask(message, **kwargs):
        calls.append(kwargs)
        return "s3cr3t"

    monkeypatch.setattr(Prompt, "ask", fake_ask)
    prompter = ConsolePrompter(console=Console(file=io.StringIO()), mask_secrets=True)

    assert await prompter.text("请输入 QQ Bot ClientSecret", secret=True) == "s3cr3t"
    assert await prompter.text("请输入 QQ Bot AppID") == "s3cr3t"

    assert calls[0]["password"] is True
    assert "password" not in calls[1]


@pytest.mark.asyncio
async def test_secret_text_from_stream_is_not_masked():
    prompter, _ = _prompter("s3cr3t\n")

    assert await prompter.text("ClientSecret", secret=True) == "s3cr3t"
