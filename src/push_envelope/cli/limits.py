"""CLI: push-envelope limits"""

import json

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _get_settings():
    from push_envelope.cli.main import _get_settings
    return _get_settings()


@click.command("limits")
@click.option("--json-output", "--json", is_flag=True)
def limits_cmd(json_output: bool):
    """Show the size limit applied to each platform."""
    settings = _get_settings()
    if json_output:
        click.echo(json.dumps({p.value: limit for p, limit in settings.limits.items()}, indent=2))
        return
    table = Table(title="Payload size limits")
    table.add_column("Platform", style="bold")
    table.add_column("Limit (bytes)", justify="right")
    table.add_column("Default")
    for platform, limit in settings.limits.items():
        table.add_row(platform.value, str(limit), "yes" if platform in settings.default_platforms else "")
    console.print(table)
