from .cli import qqbot_app

qqbot_app(prog_name="openclaw-qqbot")
