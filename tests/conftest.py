"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides conformant NEP-17 / NEP-11 classes for tests to break.
"""

import sys
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local nepguard package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of nepguard modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("nepguard"):
        del sys.modules[module_name]

from nepguard.tree.models import (  # noqa: E402
    Accessor,
    Attribute,
    ClassDeclaration,
    CompilationUnit,
    EventDeclaration,
    MethodDeclaration,
    Parameter,
    PropertyDeclaration,
    SourceSpan,
)

SAFE = Attribute("Safe")


def method(name: str, return_type: str, *params: tuple[str, str], safe: bool = False) -> MethodDeclaration:
    return MethodDeclaration(
        name=name,
        return_type=return_type,
        parameters=tuple(Parameter(type=t, name=n) for t, n in params),
        attributes=(SAFE,) if safe else (),
        modifiers=("public", "static"),
        body="return default;" if return_type != "void" else "",
    )


def safe_property(name: str, type_name: str, value: str) -> PropertyDeclaration:
    return PropertyDeclaration(
        name=name,
        type=type_name,
        accessors=(Accessor("get", (SAFE,), value),),
        modifiers=("public", "override"),
    )


def _nep17_class() -> ClassDeclaration:
    return ClassDeclaration(
        name="SampleToken",
        base_types=("Nep17Token",),
        members=(
            safe_property("Symbol", "string", '"SMP"'),
            safe_property("Decimals", "byte", "8"),
            method("TotalSupply", "BigInteger", safe=True),
            method("BalanceOf", "BigInteger", ("UInt160", "owner"), safe=True),
            method(
                "Transfer",
                "bool",
                ("UInt160", "from"),
                ("UInt160", "to"),
                ("BigInteger", "amount"),
                ("object", "data"),
            ),
            EventDeclaration(
                name="Transfer",
                parameter_types=("UInt160", "UInt160", "BigInteger"),
                modifiers=("public", "static"),
            ),
            method(
                "OnNEP17Payment",
                "void",
                ("UInt160", "from"),
                ("BigInteger", "amount"),
                ("object", "data"),
                safe=True,
            ),
        ),
        modifiers=("public",),
        span=SourceSpan("SampleToken.cs", 5, 1, 60, 2),
        identifier_span=SourceSpan("SampleToken.cs", 5, 14, 5, 25),
    )


def _nep11_class() -> ClassDeclaration:
    return ClassDeclaration(
        name="SampleNft",
        base_types=("Nep11Token",),
        members=(
            method("Symbol", "string", safe=True),
            method("Decimals", "byte", safe=True),
            method("TotalSupply", "BigInteger", safe=True),
            method("BalanceOf", "BigInteger", ("UInt160", "owner"), safe=True),
            method(
                "BalanceOf",
                "BigInteger",
                ("UInt160", "owner"),
                ("ByteString", "tokenId"),
                safe=True,
            ),
            method("TokensOf", "InteropInterface", ("UInt160", "owner"), safe=True),
            method("OwnerOf", "UInt160", ("ByteString", "tokenId"), safe=True),
            method(
                "Transfer",
                "bool",
                ("UInt160", "to"),
                ("ByteString", "tokenId"),
                ("object", "data"),
            ),
            method(
                "Transfer",
                "bool",
                ("UInt160", "from"),
                ("UInt160", "to"),
                ("BigInteger", "amount"),
                ("ByteString", "tokenId"),
                ("object", "data"),
            ),
            EventDeclaration(
                name="Transfer",
                parameter_types=("UInt160", "UInt160", "BigInteger", "ByteString"),
                modifiers=("public", "static"),
            ),
            method(
                "OnNEP11Payment",
                "void",
                ("UInt160", "from"),
                ("BigInteger", "amount"),
                ("ByteString", "tokenId"),
                ("object", "data"),
                safe=True,
            ),
        ),
        modifiers=("public",),
        identifier_span=SourceSpan("SampleNft.cs", 3, 14, 3, 23),
    )


@pytest.fixture
def nep17_class() -> ClassDeclaration:
    """A fully conformant NEP-17 class."""
    return _nep17_class()


@pytest.fixture
def nep11_class() -> ClassDeclaration:
    """A fully conformant NEP-11 class."""
    return _nep11_class()


@pytest.fixture
def nep17_unit(nep17_class: ClassDeclaration) -> CompilationUnit:
    return CompilationUnit(
        path="SampleToken.cs",
        usings=("Neo.SmartContract.Framework", "System.Numerics"),
        namespace="Samples",
        classes=(nep17_class,),
    )


@pytest.fixture
def nep11_unit(nep11_class: ClassDeclaration) -> CompilationUnit:
    return CompilationUnit(path="SampleNft.cs", classes=(nep11_class,))


@pytest.fixture
def make_method() -> Callable[..., MethodDeclaration]:
    """Return the method builder: ``make_method(name, ret, (type, name)..., safe=False)``."""
    return method


@pytest.fixture
def drop_members() -> Callable[..., ClassDeclaration]:
    """Return a helper removing members by name (and optionally type) from a class."""

    def _drop(cls: ClassDeclaration, name: str, node_type: type | None = None, arity: int | None = None):
        def keep(member: object) -> bool:
            if getattr(member, "name", None) != name:
                return True
            if node_type is not None and not isinstance(member, node_type):
                return True
            if arity is not None and getattr(member, "arity", None) != arity:
                return True
            return False

        return replace(cls, members=tuple(m for m in cls.members if keep(m)))

    return _drop
