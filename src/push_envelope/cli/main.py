"""
push-envelope CLI — `push-envelope` command.

Commands:
  push-envelope build     Build an envelope from command-line fields
  push-envelope limits    Show per-platform size limits
"""

import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.markup import escape
except ImportError:
    raise SystemExit("CLI requires extras: pip install push-envelope[cli]")

from push_envelope import __version__
from push_envelope.config import PushSettings
from push_envelope.errors import PushEnvelopeError

console = Console()
CONFIG_FILE = Path.home() / ".push-envelope" / "config.json"


def _load_settings(path: Optional[str]) -> PushSettings:
    if path:
        return PushSettings.from_file(path)
    if CONFIG_FILE.exists():
        return PushSettings.from_file(CONFIG_FILE)
    return PushSettings()


def _get_settings() -> PushSettings:
    ctx = click.get_current_context()
    return ctx.find_root().obj["settings"]


def _fail(err: PushEnvelopeError) -> None:
    console.print(f"[red]{err.code}: {escape(str(err))}[/red]")
    raise SystemExit(1)


@click.group()
@click.version_option(__version__)
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help="Settings JSON file (default ~/.push-envelope/config.json)")
@click.option("-v", "--verbose", is_flag=True, help="Log truncation and dropped platforms")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """Build multi-platform push notification envelopes."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        settings = _load_settings(config_path)
    except PushEnvelopeError as e:
        _fail(e)
    ctx.obj = {"settings": settings}


# Register subcommands from separate modules
from push_envelope.cli.build import build_cmd
from push_envelope.cli.limits import limits_cmd

main.add_command(build_cmd)
main.add_command(limits_cmd)


if __name__ == "__main__":
    main()
