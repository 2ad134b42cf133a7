"""Command line interface"""

from .onboard_cmd import qqbot_app

__all__ = ["qqbot_app"]
