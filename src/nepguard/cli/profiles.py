"""nepguard profiles command - list built-in standard profiles."""

import json

import click
from rich.table import Table

from nepguard.core.progress import get_console
from nepguard.diagnostics.reporter import rule_for
from nepguard.profiles.models import MemberKind, Profile, RequiredMember
from nepguard.profiles.registry import registry


def _signature(member: RequiredMember) -> str:
    if member.kind == MemberKind.PROPERTY:
        return f"{member.return_type} {member.name} {{ get; }}"
    if member.kind == MemberKind.EVENT:
        return f"event {member.name}{member.signature.display()}"
    overloads = " | ".join(s.display() for s in member.signatures)
    return f"{member.display_return_types()} {member.name}{overloads}"


def _profile_dict(profile: Profile) -> dict[str, object]:
    rule = rule_for(profile)
    return {
        "id": profile.profile_id,
        "standard": profile.standard,
        "rule_code": rule.code,
        "title": rule.title,
        "category": rule.category,
        "severity": rule.severity.value,
        "base_types": list(profile.applicability.base_types),
        "marker": f"{profile.applicability.marker_attribute}"
        f"({profile.applicability.standard_identifier})",
        "members": [
            {
                "name": m.name,
                "kind": m.kind.value,
                "signature": _signature(m),
                "safety": m.safety.value,
                "payment_hook": m is profile.payment_hook,
            }
            for m in profile.all_members()
        ],
    }


def _make_profile_table(profile: Profile) -> Table:
    table = Table(
        title=f"{profile.standard} [dim]({profile.profile_id}, {profile.rule_code})[/dim]",
        title_justify="left",
        box=None,
        padding=(0, 1),
        pad_edge=False,
    )
    table.add_column("kind", style="cyan", width=8)
    table.add_column("member")
    table.add_column("safety", style="dim")
    for member in profile.all_members():
        table.add_row(member.kind.value, _signature(member), member.safety.value)
    return table


@click.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def profiles_command(as_json: bool) -> None:
    """List the built-in token standard profiles."""
    profiles = registry.all()
    if as_json:
        click.echo(json.dumps([_profile_dict(p) for p in profiles], indent=2))
        return

    console = get_console()
    for i, profile in enumerate(profiles):
        if i:
            console.print()
        console.print(_make_profile_table(profile))
