"""QQ Bot channel onboarding for OpenClaw-style multi-channel bots."""

__version__ = "0.1.0"
