"""Click CLI for signing test payloads and calling the Messaging API."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import click

from line_bridge.config import DEFAULT_API_BASE_URL
from line_bridge.messaging.bot import BotClient
from line_bridge.messaging.client import MessagingApiClient
from line_bridge.messaging.models import BroadcastRequest, PushMessageRequest, TextMessage
from line_bridge.webhook.errors import WebhookRequestError
from line_bridge.webhook.signature import sign, verify


@click.group()
@click.option("--token", envvar="LINE_BOT_CHANNEL_TOKEN", default=None, help="Channel access token.")
@click.option(
    "--api-base-url", envvar="LINE_API_BASE_URL", default=DEFAULT_API_BASE_URL,
    help="Messaging API base URL.",
)
@click.pass_context
def cli(ctx: click.Context, token: str | None, api_base_url: str) -> None:
    """LINE bot webhook and messaging tools."""
    ctx.ensure_object(dict)
    ctx.obj["token"] = token
    ctx.obj["api_base_url"] = api_base_url


def _bot(ctx: click.Context) -> BotClient:
    token = ctx.obj["token"]
    if not token:
        raise click.UsageError("A channel access token is required (--token or LINE_BOT_CHANNEL_TOKEN).")
    return BotClient(MessagingApiClient(token, base_url=ctx.obj["api_base_url"]))


@cli.command("sign")
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--secret", envvar="LINE_BOT_CHANNEL_SECRET", required=True, help="Channel secret.")
def sign_command(body_file: Path, secret: str) -> None:
    """Print the x-line-signature value for a request body."""
    click.echo(sign(body_file.read_bytes(), secret))


@cli.command("verify")
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("signature")
@click.option("--secret", envvar="LINE_BOT_CHANNEL_SECRET", required=True, help="Channel secret.")
def verify_command(body_file: Path, signature: str, secret: str) -> None:
    """Check a signature against a request body."""
    try:
        verify(body_file.read_bytes(), signature, secret)
    except WebhookRequestError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo("Signature is valid")


@cli.command("bot-info")
@click.pass_context
def bot_info(ctx: click.Context) -> None:
    """Show the bot's basic information."""
    info = asyncio.run(_bot(ctx).call("get_bot_info"))
    click.echo(info.model_dump_json(indent=2, by_alias=True))


@cli.command()
@click.argument("to")
@click.argument("texts", nargs=-1, required=True)
@click.option("--retry-key", default=None, help="X-Line-Retry-Key (UUID) for idempotent retries.")
@click.pass_context
def push(ctx: click.Context, to: str, texts: tuple[str, ...], retry_key: str | None) -> None:
    """Push text messages to a user, group or room."""
    request = PushMessageRequest(to=to, messages=[TextMessage(text=t) for t in texts])
    response = asyncio.run(_bot(ctx).call("push_message", request, retry_key=retry_key))
    click.echo(response.model_dump_json(indent=2, by_alias=True))


@cli.command()
@click.argument("texts", nargs=-1, required=True)
@click.pass_context
def broadcast(ctx: click.Context, texts: tuple[str, ...]) -> None:
    """Broadcast text messages to every friend of the bot."""
    request = BroadcastRequest(messages=[TextMessage(text=t) for t in texts])
    asyncio.run(_bot(ctx).call("broadcast", request))
    click.echo(json.dumps({"broadcast": len(texts)}))
