"""Interactive wizard helpers."""

from __future__ import annotations

from .prompter import ConsolePrompter

__all__ = ["ConsolePrompter"]
