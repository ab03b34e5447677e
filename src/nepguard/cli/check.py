"""nepguard check command - report conformance diagnostics."""

import json
from pathlib import Path

import click

from nepguard.analysis.ops import AnalysisOps, AnalysisResult
from nepguard.cli.utils import get_config, read_unit
from nepguard.core.errors import NepGuardError
from nepguard.core.progress import check_summary


def _print_text(result: AnalysisResult) -> None:
    for index, diagnostic in enumerate(result.diagnostics, start=1):
        where = str(diagnostic.location) if diagnostic.location else result.path
        click.echo(
            f"{where}: {diagnostic.severity.value} {diagnostic.rule_code}: "
            f"{diagnostic.message} [{index}]"
        )

    check_summary(classes=len(result.classes), diagnostics=result.total_diagnostics)


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--profile",
    "profile_ids",
    multiple=True,
    help="Profile id to check (repeatable). Default: configured or all profiles.",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("--exit-zero", is_flag=True, help="Exit with 0 even when diagnostics are found")
@click.pass_context
def check_command(
    ctx: click.Context,
    path: Path,
    profile_ids: tuple[str, ...],
    as_json: bool,
    exit_zero: bool,
) -> None:
    """Check a declaration tree against token standard profiles.

    PATH is a YAML or JSON declaration tree. Diagnostics are numbered so
    they can be passed to 'nepguard fix --diagnostic N'.
    """
    unit = read_unit(path)
    try:
        result = AnalysisOps(get_config(ctx)).analyze(unit, profile_ids=list(profile_ids) or None)
    except NepGuardError as e:
        raise click.ClickException(str(e)) from e

    if as_json:
        click.echo(
            json.dumps(
                {
                    "path": result.path,
                    "profiles": result.profiles,
                    "status": result.status,
                    "diagnostics": [d.to_dict() for d in result.diagnostics],
                },
                indent=2,
            )
        )
    else:
        _print_text(result)

    if result.total_diagnostics and not exit_zero:
        ctx.exit(1)
