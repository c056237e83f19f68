"""CLI: push-envelope build"""

import json
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from push_envelope.errors import InvalidMessageError, PushEnvelopeError
from push_envelope.models.message import Message, Platform
from push_envelope.wire.envelope import EnvelopeAssembler

console = Console()


def _get_settings():
    from push_envelope.cli.main import _get_settings
    return _get_settings()


def _fail(err: PushEnvelopeError) -> None:
    from push_envelope.cli.main import _fail
    _fail(err)


def _parse_custom(raw: Optional[str]) -> Optional[dict]:
    if raw is None:
        return None
    try:
        custom = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidMessageError(f"--custom is not valid JSON: {e}")
    if not isinstance(custom, dict):
        raise InvalidMessageError("--custom must be a JSON object")
    return custom


@click.command("build")
@click.option("-t", "--text", default="", help="Body text, also the envelope default")
@click.option("--title", default=None)
@click.option("--loc-key", default=None, help="Body localization key")
@click.option("--loc-arg", "loc_args", multiple=True, help="Body localization argument (repeatable)")
@click.option("--title-loc-key", default=None)
@click.option("--title-loc-arg", "title_loc_args", multiple=True)
@click.option("--custom", default=None, help="Custom data as a JSON object")
@click.option("--ttl", default=None, type=click.IntRange(min=0), help="Time to live in seconds")
@click.option("-p", "--platform", "platforms", multiple=True,
              type=click.Choice([p.value for p in Platform]), help="Target platform (repeatable)")
@click.option("--no-trim", is_flag=True, help="Fail instead of truncating long text")
@click.option("--drop-oversized", is_flag=True, help="Leave oversized platforms out of the envelope")
@click.option("--json-output", "--json", is_flag=True, help="Print only the envelope")
def build_cmd(text: str, title: Optional[str], loc_key: Optional[str], loc_args: tuple[str, ...],
              title_loc_key: Optional[str], title_loc_args: tuple[str, ...], custom: Optional[str],
              ttl: Optional[int], platforms: tuple[str, ...], no_trim: bool, drop_oversized: bool,
              json_output: bool):
    """Build an envelope and print it."""
    assembler = EnvelopeAssembler(_get_settings())
    try:
        message = Message(
            text=text,
            title=title,
            localized_key=loc_key,
            localized_arguments=list(loc_args) or None,
            title_localized_key=title_loc_key,
            title_localized_arguments=list(title_loc_args) or None,
            custom=_parse_custom(custom),
            ttl=ttl,
            platforms=frozenset(Platform(p) for p in platforms) if platforms else None,
            allow_trimming=not no_trim,
        )
        envelope = assembler.assemble(message, on_overflow="drop" if drop_oversized else "raise")
    except ValidationError as e:
        _fail(InvalidMessageError(str(e)))
        return
    except PushEnvelopeError as e:
        _fail(e)
        return

    if json_output:
        click.echo(envelope)
        return

    results = assembler.build_payloads(message)
    table = Table(title="Platform payloads")
    table.add_column("Platform", style="bold")
    table.add_column("Size", justify="right")
    table.add_column("Limit", justify="right")
    table.add_column("Status")
    for platform, result in results.items():
        if not result.ok:
            status = "[red]dropped[/red]"
        elif result.truncated:
            status = "[yellow]truncated[/yellow]"
        else:
            status = "[green]ok[/green]"
        table.add_row(platform.value, str(result.size), str(result.limit), status)
    console.print(table)
    click.echo(envelope)
