"""nepguard CLI - nepguard command."""

from pathlib import Path

import click

from nepguard import __version__
from nepguard.cli.check import check_command
from nepguard.cli.fix import fix_command
from nepguard.cli.profiles import profiles_command
from nepguard.config.loader import load_config
from nepguard.core.errors import NepGuardError
from nepguard.core.logging import configure_logging, set_run_id


@click.group()
@click.version_option(version=__version__, prog_name="nepguard")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Config file to use instead of ./.nepguard.yaml",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_file: Path | None) -> None:
    """nepguard - NEP-17 / NEP-11 token contract conformance checker."""
    ctx.ensure_object(dict)
    try:
        config = load_config(config_file=config_file)
    except NepGuardError as e:
        raise click.ClickException(str(e)) from e
    if verbose:
        config.logging.level = "DEBUG"
    configure_logging(config=config.logging)
    set_run_id()

    ctx.obj["verbose"] = verbose
    ctx.obj["config"] = config


cli.add_command(check_command, name="check")
cli.add_command(fix_command, name="fix")
cli.add_command(profiles_command, name="profiles")


if __name__ == "__main__":
    cli()
