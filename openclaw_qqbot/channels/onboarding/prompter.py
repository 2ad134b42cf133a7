"""
Wizard prompter capability used by onboarding adapters

Any terminal UI or scripted test double can implement this protocol.
"""
from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

T = TypeVar("T")

Validator = Callable[[str | None], str | None]
"""Returns an error message to reject the input, None to accept it"""


@dataclass(frozen=True)
class SelectOption(Generic[T]):
    """One choice in a select prompt"""

    value: T
    label: str
    hint: str | None = None


class WizardPrompter(Protocol):
    """Interactive prompts; every call suspends until the operator answers"""

    async def note(self, message: str, title: str | None = None) -> None: ...

    async def text(
        self,
        message: str,
        placeholder: str | None = None,
        initial_value: str | None = None,
        validate: Validator | None = None,
        secret: bool = False,
    ) -> str: ...

    async def confirm(self, message: str, initial_value: bool | None = None) -> bool: ...

    async def select(
        self,
        message: str,
        options: Sequence[SelectOption[T]],
        initial_value: T | None = None,
    ) -> T: ...
