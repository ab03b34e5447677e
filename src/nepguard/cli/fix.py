"""nepguard fix command - apply fixes to a declaration tree."""

from pathlib import Path

import click

from nepguard.analysis.ops import AnalysisOps
from nepguard.cli.utils import get_config, read_unit
from nepguard.core.errors import NepGuardError
from nepguard.core.progress import fix_summary, pluralize, status
from nepguard.fixes.models import FixKind, FixResult
from nepguard.fixes.ops import FixOps
from nepguard.tree.schema import write_tree

_KIND_CHOICES = [k.value for k in FixKind]


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--all", "fix_all", is_flag=True, help="Apply every available fix until none remain")
@click.option("--diagnostic", "number", type=int, help="Number of the diagnostic to fix (from 'check')")
@click.option(
    "--kind",
    type=click.Choice(_KIND_CHOICES),
    help="Fix kind to apply for --diagnostic. Default: first offered.",
)
@click.option("--profile", "profile_ids", multiple=True, help="Profile id (repeatable)")
@click.option("--write", is_flag=True, help="Write the fixed tree back to PATH")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the fixed tree to this file",
)
@click.pass_context
def fix_command(
    ctx: click.Context,
    path: Path,
    fix_all: bool,
    number: int | None,
    kind: str | None,
    profile_ids: tuple[str, ...],
    write: bool,
    output: Path | None,
) -> None:
    """Fix conformance diagnostics in a declaration tree.

    Prints a unified diff of the rendered source. The input file is only
    changed with --write.
    """
    if fix_all == (number is not None):
        raise click.UsageError("Pass exactly one of --all or --diagnostic N")

    config = get_config(ctx)
    unit = read_unit(path)
    selected = list(profile_ids) or None
    ops = FixOps(config)

    try:
        if fix_all:
            result = ops.fix_all(unit, profile_ids=selected)
        else:
            diagnostics = AnalysisOps(config).analyze(unit, profile_ids=selected).diagnostics
            if not 1 <= number <= len(diagnostics):  # type: ignore[operator]
                raise click.ClickException(
                    f"No diagnostic #{number}; found {pluralize(len(diagnostics), 'diagnostic')}"
                )
            diagnostic = diagnostics[number - 1]  # type: ignore[operator]
            fixes = ops.available_fixes(diagnostic)
            if kind is not None:
                fixes = [f for f in fixes if f.kind.value == kind]
            if not fixes:
                raise click.ClickException(f"No fix available for: {diagnostic.message}")
            result = ops.apply(unit, fixes[0])
    except NepGuardError as e:
        raise click.ClickException(str(e)) from e

    _report(result)

    if result.applied:
        if write:
            write_tree(result.unit, path)
            status(f"Wrote {path}", style="success")
        if output is not None:
            write_tree(result.unit, output)
            status(f"Wrote {output}", style="success")


def _report(result: FixResult) -> None:
    if result.applied:
        click.echo(result.diff)
        for fix in result.fixes:
            status(fix.title, style="success", indent=2)
    fix_summary(fixes=len(result.fixes) if result.applied else 0, edits=result.edit_count)
