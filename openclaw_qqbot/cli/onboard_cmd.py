"""QQ Bot onboarding commands"""

import asyncio
import json
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..channels.onboarding import (
    ChannelOnboardingConfigureContext,
    ChannelOnboardingStatusContext,
    QQBotOnboardingAdapter,
)
from ..config.loader import ConfigError, get_config_path, load_config, save_config
from ..wizard.prompter import ConsolePrompter

console = Console()
qqbot_app = typer.Typer(help="QQ Bot channel onboarding")


def _config_path(config: Path | None) -> Path:
    return config if config else get_config_path()


def _load(path: Path):
    try:
        return load_config(path)
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


@qqbot_app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    env_file: Path = typer.Option(None, "--env-file", help="Load environment variables from file"),
):
    """Configure the QQ Bot channel"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    if env_file:
        load_dotenv(env_file)
    elif Path(".env").exists():
        load_dotenv(Path(".env"))


@qqbot_app.command("status")
def status(
    config: Path = typer.Option(None, "--config", "-c", help="Config file path"),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
):
    """Show QQ Bot configuration status"""
    cfg = _load(_config_path(config))
    result = asyncio.run(QQBotOnboardingAdapter().get_status(ChannelOnboardingStatusContext(cfg=cfg)))

    if json_output:
        console.print_json(json.dumps({
            "channel": result.channel,
            "configured": result.configured,
            "statusLines": result.status_lines,
            "selectionHint": result.selection_hint,
            "quickstartScore": result.quickstart_score,
        }, ensure_ascii=False))
        return

    table = Table(title="Channel Status")
    table.add_column("Channel", style="cyan", no_wrap=True)
    table.add_column("Configured", style="green")
    table.add_column("Status", style="white")
    table.add_column("Hint", style="yellow")
    table.add_row(
        result.channel,
        "yes" if result.configured else "no",
        "\n".join(result.status_lines),
        result.selection_hint or "-",
    )
    console.print(table)


@qqbot_app.command("configure")
def configure(
    config: Path = typer.Option(None, "--config", "-c", help="Config file path"),
    account: str = typer.Option(None, "--account", "-a", help="Account id to configure"),
    prompt_accounts: bool = typer.Option(
        True,
        "--prompt-accounts/--no-prompt-accounts",
        help="Ask which account to configure when several exist",
    ),
):
    """Interactively configure QQ Bot credentials"""
    path = _config_path(config)
    cfg = _load(path)

    ctx = ChannelOnboardingConfigureContext(
        cfg=cfg,
        prompter=ConsolePrompter(console=console),
        account_overrides={"qqbot": account} if account else {},
        should_prompt_account_ids=prompt_accounts,
    )
    try:
        result = asyncio.run(QQBotOnboardingAdapter().configure(ctx))
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled, config not saved[/yellow]")
        raise typer.Exit(1)

    if result.cfg is cfg:
        console.print("[dim]No changes[/dim]")
        return

    save_config(result.cfg, path)
    console.print(f"[green]✓[/green] QQ Bot account [cyan]{result.account_id}[/cyan] saved to {path}")


@qqbot_app.command("disable")
def disable(
    config: Path = typer.Option(None, "--config", "-c", help="Config file path"),
):
    """Disable the QQ Bot channel (credentials are kept)"""
    path = _config_path(config)
    cfg = _load(path)
    save_config(QQBotOnboardingAdapter().disable(cfg), path)
    console.print(f"[green]✓[/green] QQ Bot disabled in {path}")
