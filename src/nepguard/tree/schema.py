"""Documented YAML/JSON shape of the declaration tree.

This is the hand-over format for the parser collaborator. A document looks
like::

    path: Contracts/Token.cs
    namespace: Demo
    classes:
      - name: Token
        base_types: [SmartContract]
        attributes:
          - {name: SupportedStandards, arguments: [NepStandard.Nep17]}
        identifier_span: {start_line: 12, start_column: 18}
        members:
          - kind: property
            name: Symbol
            type: string
            accessors:
              - {kind: get, attributes: [Safe], body: '"TOK"'}
          - kind: method
            name: BalanceOf
            return_type: BigInteger
            parameters: [{type: UInt160, name: owner}]
            attributes: [Safe]
          - kind: event
            name: Transfer
            type_kind: function_pointer
            parameter_types: [UInt160, UInt160, BigInteger]

Attributes may be written as a bare name (``Safe``) when they take no
arguments. Validation uses pydantic; conversion to the frozen tree lives in
``to_tree`` and the reverse in ``dump_tree``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any, Literal

import structlog
import yaml
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError

from nepguard.core.errors import TreeError
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

logger = structlog.get_logger()


class _Node(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SpanSchema(_Node):
    path: str = ""
    start_line: int = 0
    start_column: int = 0
    end_line: int = 0
    end_column: int = 0


class AttributeSchema(_Node):
    name: str
    arguments: list[str] = Field(default_factory=list)


def _coerce_attributes(value: Any) -> Any:
    if isinstance(value, list):
        return [{"name": item} if isinstance(item, str) else item for item in value]
    return value


AttributeList = Annotated[list[AttributeSchema], BeforeValidator(_coerce_attributes)]


class ParameterSchema(_Node):
    type: str
    name: str


class AccessorSchema(_Node):
    kind: Literal["get", "set", "init"]
    attributes: AttributeList = Field(default_factory=list)
    body: str | None = None


class MethodSchema(_Node):
    kind: Literal["method"]
    name: str
    return_type: str
    parameters: list[ParameterSchema] = Field(default_factory=list)
    attributes: AttributeList = Field(default_factory=list)
    modifiers: list[str] = Field(default_factory=list)
    body: str | None = None
    span: SpanSchema | None = None


class PropertySchema(_Node):
    kind: Literal["property"]
    name: str
    type: str
    accessors: list[AccessorSchema] = Field(default_factory=list)
    attributes: AttributeList = Field(default_factory=list)
    modifiers: list[str] = Field(default_factory=list)
    span: SpanSchema | None = None


class EventSchema(_Node):
    kind: Literal["event"]
    name: str
    type_kind: Literal["function_pointer", "delegate"] = "function_pointer"
    parameter_types: list[str] | None = None
    type_name: str | None = None
    attributes: AttributeList = Field(default_factory=list)
    modifiers: list[str] = Field(default_factory=list)
    span: SpanSchema | None = None


class FieldSchema(_Node):
    kind: Literal["field"]
    name: str
    type: str
    attributes: AttributeList = Field(default_factory=list)
    modifiers: list[str] = Field(default_factory=list)
    span: SpanSchema | None = None


MemberSchema = Annotated[
    MethodSchema | PropertySchema | EventSchema | FieldSchema,
    Field(discriminator="kind"),
]


class ClassSchema(_Node):
    name: str
    base_types: list[str] = Field(default_factory=list)
    attributes: AttributeList = Field(default_factory=list)
    members: list[MemberSchema] = Field(default_factory=list)
    modifiers: list[str] = Field(default_factory=list)
    span: SpanSchema | None = None
    identifier_span: SpanSchema | None = None


class UnitSchema(_Node):
    path: str = ""
    usings: list[str] = Field(default_factory=list)
    namespace: str | None = None
    classes: list[ClassSchema] = Field(default_factory=list)


# =============================================================================
# Schema -> tree
# =============================================================================


def _span(schema: SpanSchema | None, unit_path: str) -> SourceSpan | None:
    if schema is None:
        return None
    return SourceSpan(
        path=schema.path or unit_path,
        start_line=schema.start_line,
        start_column=schema.start_column,
        end_line=schema.end_line,
        end_column=schema.end_column,
    )


def _attributes(items: list[AttributeSchema]) -> tuple[Attribute, ...]:
    return tuple(Attribute(name=a.name, arguments=tuple(a.arguments)) for a in items)


def _member(schema: MethodSchema | PropertySchema | EventSchema | FieldSchema, path: str) -> Member:
    if isinstance(schema, MethodSchema):
        return MethodDeclaration(
            name=schema.name,
            return_type=schema.return_type,
            parameters=tuple(Parameter(type=p.type, name=p.name) for p in schema.parameters),
            attributes=_attributes(schema.attributes),
            modifiers=tuple(schema.modifiers),
            body=schema.body,
            span=_span(schema.span, path),
        )
    if isinstance(schema, PropertySchema):
        return PropertyDeclaration(
            name=schema.name,
            type=schema.type,
            accessors=tuple(
                Accessor(kind=a.kind, attributes=_attributes(a.attributes), body=a.body)
                for a in schema.accessors
            ),
            attributes=_attributes(schema.attributes),
            modifiers=tuple(schema.modifiers),
            span=_span(schema.span, path),
        )
    if isinstance(schema, EventSchema):
        return EventDeclaration(
            name=schema.name,
            type_kind=schema.type_kind,
            parameter_types=None if schema.parameter_types is None else tuple(schema.parameter_types),
            type_name=schema.type_name,
            attributes=_attributes(schema.attributes),
            modifiers=tuple(schema.modifiers),
            span=_span(schema.span, path),
        )
    return FieldDeclaration(
        name=schema.name,
        type=schema.type,
        attributes=_attributes(schema.attributes),
        modifiers=tuple(schema.modifiers),
        span=_span(schema.span, path),
    )


def to_tree(schema: UnitSchema) -> CompilationUnit:
    """Convert a validated document into the frozen declaration tree."""
    path = schema.path
    classes = tuple(
        ClassDeclaration(
            name=c.name,
            base_types=tuple(c.base_types),
            attributes=_attributes(c.attributes),
            members=tuple(_member(m, path) for m in c.members),
            modifiers=tuple(c.modifiers),
            span=_span(c.span, path),
            identifier_span=_span(c.identifier_span, path),
        )
        for c in schema.classes
    )
    return CompilationUnit(
        path=path,
        usings=tuple(schema.usings),
        namespace=schema.namespace,
        classes=classes,
    )


def parse_tree(data: dict[str, Any], *, source: str = "<memory>") -> CompilationUnit:
    """Validate a plain dict against the documented shape and build the tree.

    Raises:
        TreeError: If the document does not follow the documented shape.
    """
    try:
        schema = UnitSchema.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        where = ".".join(str(loc) for loc in err["loc"]) or "<root>"
        raise TreeError.load_error(source, f"{where}: {err['msg']}") from e
    unit = to_tree(schema)
    logger.debug("declaration_tree_loaded", source=source, classes=len(unit.classes))
    return unit


def load_tree(path: Path) -> CompilationUnit:
    """Load a declaration tree from a YAML or JSON file.

    The unit's ``path`` defaults to the file name when the document omits it.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TreeError.load_error(str(path), str(e)) from e

    try:
        data = json.loads(text) if path.suffix == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise TreeError.load_error(str(path), str(e)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise TreeError.load_error(str(path), "top-level value must be a mapping")
    data.setdefault("path", path.name)
    return parse_tree(data, source=str(path))


# =============================================================================
# Tree -> plain dict
# =============================================================================


def _dump_span(span: SourceSpan | None) -> dict[str, Any] | None:
    if span is None:
        return None
    return {
        "path": span.path,
        "start_line": span.start_line,
        "start_column": span.start_column,
        "end_line": span.end_line,
        "end_column": span.end_column,
    }


def _dump_attributes(attributes: tuple[Attribute, ...]) -> list[dict[str, Any]]:
    return [{"name": a.name, "arguments": list(a.arguments)} for a in attributes]


def _dump_member(member: Member) -> dict[str, Any]:
    data: dict[str, Any]
    if isinstance(member, MethodDeclaration):
        data = {
            "kind": "method",
            "name": member.name,
            "return_type": member.return_type,
            "parameters": [{"type": p.type, "name": p.name} for p in member.parameters],
            "body": member.body,
        }
    elif isinstance(member, PropertyDeclaration):
        data = {
            "kind": "property",
            "name": member.name,
            "type": member.type,
            "accessors": [
                {"kind": a.kind, "attributes": _dump_attributes(a.attributes), "body": a.body}
                for a in member.accessors
            ],
        }
    elif isinstance(member, EventDeclaration):
        data = {
            "kind": "event",
            "name": member.name,
            "type_kind": member.type_kind,
            "parameter_types": None
            if member.parameter_types is None
            else list(member.parameter_types),
            "type_name": member.type_name,
        }
    else:
        data = {"kind": "field", "name": member.name, "type": member.type}
    data["attributes"] = _dump_attributes(member.attributes)
    data["modifiers"] = list(member.modifiers)
    data["span"] = _dump_span(member.span)
    return data


def dump_tree(unit: CompilationUnit) -> dict[str, Any]:
    """Serialize a tree back into the documented shape."""
    return {
        "path": unit.path,
        "usings": list(unit.usings),
        "namespace": unit.namespace,
        "classes": [
            {
                "name": c.name,
                "base_types": list(c.base_types),
                "attributes": _dump_attributes(c.attributes),
                "members": [_dump_member(m) for m in c.members],
                "modifiers": list(c.modifiers),
                "span": _dump_span(c.span),
                "identifier_span": _dump_span(c.identifier_span),
            }
            for c in unit.classes
        ],
    }


def write_tree(unit: CompilationUnit, path: Path) -> None:
    """Write a tree as YAML (or JSON for a ``.json`` path)."""
    data = dump_tree(unit)
    if path.suffix == ".json":
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
