"""CLI interface for dishook using Click."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import NoReturn

import click
import httpx
import yaml
from dotenv import load_dotenv

from dishook import __version__
from dishook.core.config import Settings
from dishook.core.options import EditOptions, ExecuteOptions, GetOptions
from dishook.webhooks.dispatcher import (
    MAX_CONTENT_LENGTH,
    InvalidWebhookError,
    WebhookDispatcher,
    WebhookError,
    build_content,
    is_too_long,
    message_url,
)
from dishook.webhooks.fields import MESSAGE_FIELDS, extract_fields

logger = logging.getLogger(__name__)


def default_config_path() -> Path:
    return Path(click.get_app_dir("dishook")) / "settings.yaml"


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class AppContext:
    """Holds settings and the dispatcher shared by all commands."""

    def __init__(self, settings: Settings, transport: httpx.BaseTransport | None = None):
        self.settings = settings
        self.dispatcher = WebhookDispatcher(
            timeout=settings.http.timeout,
            user_agent=settings.http.user_agent,
            probe=settings.http.probe,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config_path: Path) -> AppContext:
        load_dotenv(Path.cwd() / ".env")
        return cls(Settings.load(config_path))


def _fail(ctx: click.Context, message: str) -> NoReturn:
    """Print a red ERROR line and stop. Failures still exit with status 0."""
    click.echo(f"{click.style('ERROR:', fg='red')} {message}", err=True)
    ctx.exit(0)


def _valid_target(ctx: click.Context, url: str) -> str:
    """Resolve an alias and make sure the result looks like a live webhook."""
    app: AppContext = ctx.obj
    resolved = app.settings.resolve_webhook(url)
    if not app.dispatcher.validate(resolved):
        _fail(ctx, str(InvalidWebhookError(url)))
    return resolved


def _content(ctx: click.Context, message: str | None, words: tuple[str, ...]) -> str:
    content = message or build_content(words, 0)
    if not content:
        _fail(ctx, "Message flag required.")
    if is_too_long(content):
        _fail(
            ctx,
            f"Message is {len(content)} characters long, "
            f"Discord allows at most {MAX_CONTENT_LENGTH}.",
        )
    return content


@click.group()
@click.version_option(version=__version__, prog_name="dishook")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings YAML file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool):
    """dishook - send, edit, fetch and delete Discord webhook messages"""
    if ctx.obj is None:
        try:
            ctx.obj = AppContext.from_config(config_path or default_config_path())
        except (ValueError, yaml.YAMLError) as e:
            _fail(ctx, f"Could not load settings: {e}")
    _setup_logging("DEBUG" if verbose else ctx.obj.settings.log_level)


@cli.command()
@click.argument("url")
@click.argument("words", nargs=-1, metavar="[MESSAGE]...")
@click.option("--avatar-url", "-a", default=None, help="Sets the webhook's profile picture")
@click.option("--message", "-m", default=None, help="Sets the message")
@click.option("--username", "-u", default=None, help="Sets the username of the webhook")
@click.option("--tts", "-t", is_flag=True, help="Sends the message as text-to-speech")
@click.option("--wait", "-w", is_flag=True, help="Wait for Discord and print the new message ID")
@click.pass_context
def execute(
    ctx: click.Context,
    url: str,
    words: tuple[str, ...],
    avatar_url: str | None,
    message: str | None,
    username: str | None,
    tts: bool,
    wait: bool,
):
    """Send a message through a webhook."""
    app: AppContext = ctx.obj
    target = _valid_target(ctx, url)
    options = ExecuteOptions(
        url=target,
        content=_content(ctx, message, words),
        username=username or app.settings.username,
        avatar_url=avatar_url or app.settings.avatar_url,
        tts=tts,
        wait=wait,
    )

    params = {"wait": "true"} if options.wait else None
    try:
        result = app.dispatcher.dispatch("POST", options.url, options.payload(), params=params)
    except WebhookError as e:
        _fail(ctx, str(e))

    if options.wait and result is not None and isinstance(result.data, dict):
        click.echo(result.data.get("id", ""))


@cli.command()
@click.argument("url")
@click.argument("message_id")
@click.argument("words", nargs=-1, metavar="[MESSAGE]...")
@click.option("--message", "-m", default=None, help="Sets the message you want to edit")
@click.pass_context
def edit(ctx: click.Context, url: str, message_id: str, words: tuple[str, ...], message: str | None):
    """Edit a message sent by a webhook."""
    app: AppContext = ctx.obj
    resolved = app.settings.resolve_webhook(url)
    if not app.dispatcher.validate(message_url(resolved, message_id)):
        _fail(ctx, str(InvalidWebhookError(url)))

    options = EditOptions(
        url=resolved,
        message_id=message_id,
        content=_content(ctx, message, words),
    )
    try:
        app.dispatcher.dispatch("PATCH", options.target, options.payload())
    except WebhookError as e:
        _fail(ctx, str(e))


def _field_options(func):
    """Attach one boolean flag per selectable message field."""
    for field in reversed(MESSAGE_FIELDS):
        decls = [f"--{field.name}"]
        if field.short:
            decls.append(f"-{field.short}")
        func = click.option(*decls, field.param, is_flag=True, help=field.help)(func)
    return func


@cli.command()
@click.argument("url")
@_field_options
@click.pass_context
def get(ctx: click.Context, url: str, **selected: bool):
    """Fetch a webhook message and print it, or only the flagged fields.

    URL is usually a webhook URL ending in /messages/<message-id>.
    """
    app: AppContext = ctx.obj
    options = GetOptions(
        url=_valid_target(ctx, url),
        fields=tuple(f.name for f in MESSAGE_FIELDS if selected[f.param]),
    )
    try:
        message = app.dispatcher.fetch(options.url)
    except WebhookError as e:
        _fail(ctx, str(e))

    output = extract_fields(message, options.fields) if options.fields else message
    click.echo(json.dumps(output, indent=2, ensure_ascii=False))


@cli.command()
@click.argument("url")
@click.pass_context
def delete(ctx: click.Context, url: str):
    """Delete a webhook message, or the webhook itself.

    Pass a URL ending in /messages/<message-id> to delete a single message.
    """
    app: AppContext = ctx.obj
    target = _valid_target(ctx, url)
    try:
        app.dispatcher.delete(target)
    except WebhookError as e:
        _fail(ctx, str(e))
    logger.info("Deleted %s", target)


def main(args: list[str] | None = None) -> None:
    """Console entry point. Usage errors exit with status 0 as well."""
    try:
        cli.main(args=args, prog_name="dishook", standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(0)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(0)
