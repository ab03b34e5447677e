"""Render declaration trees as C#-flavoured source text.

The output is for previews and diffs of synthesized fixes. It is a faithful
listing of what the tree declares, not a round-trip of the original source:
comments and formatting of the original file are not part of the tree.
"""

from __future__ import annotations

from nepguard.tree.models import (
    Accessor,
    Attribute,
    ClassDeclaration,
    CompilationUnit,
    EventDeclaration,
    FieldDeclaration,
    Member,
    MethodDeclaration,
    PropertyDeclaration,
)

INDENT = "    "


def render_attribute(attribute: Attribute) -> str:
    if attribute.arguments:
        return f"[{attribute.name}({attribute.argument_text})]"
    return f"[{attribute.name}]"


def _prefix(modifiers: tuple[str, ...]) -> str:
    return " ".join(modifiers) + " " if modifiers else ""


def _render_accessor(accessor: Accessor) -> str:
    attrs = "".join(render_attribute(a) + " " for a in accessor.attributes)
    if accessor.body is None:
        return f"{attrs}{accessor.kind};"
    return f"{attrs}{accessor.kind} => {accessor.body};"


def render_member(member: Member, indent: str = INDENT) -> list[str]:
    """Render one member as lines, attributes first."""
    lines = [indent + render_attribute(a) for a in member.attributes]
    mods = _prefix(member.modifiers)

    if isinstance(member, MethodDeclaration):
        params = ", ".join(f"{p.type} {p.name}" for p in member.parameters)
        signature = f"{indent}{mods}{member.return_type} {member.name}({params})"
        if member.body is None:
            lines.append(signature + ";")
        else:
            lines.append(signature)
            lines.append(indent + "{")
            lines.extend(indent + INDENT + line for line in member.body.splitlines())
            lines.append(indent + "}")
    elif isinstance(member, PropertyDeclaration):
        accessors = " ".join(_render_accessor(a) for a in member.accessors)
        lines.append(f"{indent}{mods}{member.type} {member.name} {{ {accessors} }}")
    elif isinstance(member, EventDeclaration):
        if member.type_kind == "function_pointer":
            types = ", ".join((*(member.parameter_types or ()), "void"))
            event_type = f"delegate*<{types}>"
        else:
            event_type = member.type_name or "Action"
        lines.append(f"{indent}{mods}event {event_type} {member.name};")
    elif isinstance(member, FieldDeclaration):
        lines.append(f"{indent}{mods}{member.type} {member.name};")
    return lines


def render_class(cls: ClassDeclaration, indent: str = "") -> list[str]:
    lines = [indent + render_attribute(a) for a in cls.attributes]
    header = f"{indent}{_prefix(cls.modifiers)}class {cls.name}"
    if cls.base_types:
        header += " : " + ", ".join(cls.base_types)
    lines.append(header)
    lines.append(indent + "{")
    for i, member in enumerate(cls.members):
        if i:
            lines.append("")
        lines.extend(render_member(member, indent + INDENT))
    lines.append(indent + "}")
    return lines


def render_unit(unit: CompilationUnit) -> str:
    lines = [f"using {u};" for u in unit.usings]
    if lines:
        lines.append("")
    indent = ""
    if unit.namespace:
        lines.append(f"namespace {unit.namespace}")
        lines.append("{")
        indent = INDENT
    for i, cls in enumerate(unit.classes):
        if i:
            lines.append("")
        lines.extend(render_class(cls, indent))
    if unit.namespace:
        lines.append("}")
    return "\n".join(lines) + "\n"
