"""Terminal prompter for the onboarding wizard.

Implements the ``WizardPrompter`` protocol on top of rich prompts.
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Sequence
from typing import Any, TextIO, TypeVar

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt

from ..channels.onboarding.prompter import SelectOption, Validator

T = TypeVar("T")


class ConsolePrompter:
    """Rich console prompter.

    Blocking reads run in a worker thread so the event loop stays free.

    Args:
        console: Console to render to (a new one by default)
        stream: Optional input stream, stdin when omitted
        mask_secrets: Hide secret input; by default only when no stream is
            given and stdin is a terminal
    """

    def __init__(
        self,
        console: Console | None = None,
        stream: TextIO | None = None,
        mask_secrets: bool | None = None,
    ):
        self.console = console or Console()
        self.stream = stream
        self.mask_secrets = mask_secrets

    def _should_mask(self) -> bool:
        if self.mask_secrets is not None:
            return self.mask_secrets
        return self.stream is None and sys.stdin is not None and sys.stdin.isatty()

    async def _ask(self, prompt_cls: Any, message: str, **kwargs: Any) -> Any:
        return await asyncio.to_thread(
            prompt_cls.ask,
            message,
            console=self.console,
            stream=self.stream,
            **kwargs,
        )

    async def note(self, message: str, title: str | None = None) -> None:
        self.console.print(Panel(message, title=title, expand=False))

    async def text(
        self,
        message: str,
        placeholder: str | None = None,
        initial_value: str | None = None,
        validate: Validator | None = None,
        secret: bool = False,
    ) -> str:
        prompt = f"{message} [dim]({placeholder})[/dim]" if placeholder else message
        kwargs: dict[str, Any] = {}
        if initial_value is not None:
            kwargs["default"] = initial_value
        if secret and self._should_mask():
            kwargs["password"] = True

        while True:
            answer = await self._ask(Prompt, prompt, **kwargs)
            error = validate(answer) if validate else None
            if not error:
                return (answer or "").strip()
            self.console.print(f"[red]{error}[/red]")

    async def confirm(self, message: str, initial_value: bool | None = None) -> bool:
        kwargs: dict[str, Any] = {}
        if initial_value is not None:
            kwargs["default"] = initial_value
        return bool(await self._ask(Confirm, message, **kwargs))

    async def select(
        self,
        message: str,
        options: Sequence[SelectOption[T]],
        initial_value: T | None = None,
    ) -> T:
        if not options:
            raise ValueError("select() needs at least one option")

        self.console.print(f"[bold]{message}[/bold]")
        default_index = 1
        for index, option in enumerate(options, start=1):
            hint = f" [dim]- {option.hint}[/dim]" if option.hint else ""
            self.console.print(f"  {index}. {option.label}{hint}")
            if option.value == initial_value:
                default_index = index

        choice = await self._ask(
            Prompt,
            "Choose",
            choices=[str(i) for i in range(1, len(options) + 1)],
            default=str(default_index),
        )
        return options[int(choice) - 1].value
