"""Declaration tree - immutable models, persistent edits, loading and rendering."""

from nepguard.tree.edits import Edit, apply_edit, apply_edits
from nepguard.tree.models import (
    Accessor,
    Attribute,
    ClassDeclaration,
    CompilationUnit,
    EventDeclaration,
    FieldDeclaration,
    Member,
    MethodDeclaration,
    Parameter,
    PropertyDeclaration,
    SourceSpan,
)
from nepguard.tree.render import render_class, render_unit
from nepguard.tree.schema import dump_tree, load_tree, parse_tree, write_tree

__all__ = [
    "Accessor",
    "Attribute",
    "ClassDeclaration",
    "CompilationUnit",
    "Edit",
    "EventDeclaration",
    "FieldDeclaration",
    "Member",
    "MethodDeclaration",
    "Parameter",
    "PropertyDeclaration",
    "SourceSpan",
    "apply_edit",
    "apply_edits",
    "dump_tree",
    "load_tree",
    "parse_tree",
    "render_class",
    "render_unit",
    "write_tree",
]
