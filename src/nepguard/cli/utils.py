"""CLI utilities."""

from pathlib import Path

import click

from nepguard.config.loader import load_config
from nepguard.config.models import NepGuardConfig
from nepguard.core.errors import NepGuardError
from nepguard.tree.models import CompilationUnit
from nepguard.tree.schema import load_tree


def get_config(ctx: click.Context) -> NepGuardConfig:
    """Config loaded by the group callback, or a fresh load when run standalone."""
    obj = ctx.find_root().obj
    if isinstance(obj, dict) and "config" in obj:
        return obj["config"]
    try:
        return load_config()
    except NepGuardError as e:
        raise click.ClickException(str(e)) from e


def read_unit(path: Path) -> CompilationUnit:
    """Load a declaration tree file.

    Raises:
        click.ClickException: If the file is not a valid declaration tree
    """
    try:
        return load_tree(path)
    except NepGuardError as e:
        raise click.ClickException(str(e)) from e
