"""Profiles module - built-in token standard profiles."""

# Import definitions to register all profiles
from nepguard.profiles import definitions as _definitions  # noqa: F401
from nepguard.profiles.definitions import NEP11, NEP17
from nepguard.profiles.models import (
    ApplicabilityRule,
    MemberKind,
    OverloadSignature,
    ParameterSpec,
    Profile,
    RequiredMember,
    Safety,
)
from nepguard.profiles.registry import ProfileRegistry, registry

__all__ = [
    "NEP11",
    "NEP17",
    "ApplicabilityRule",
    "MemberKind",
    "OverloadSignature",
    "ParameterSpec",
    "Profile",
    "ProfileRegistry",
    "RequiredMember",
    "Safety",
    "registry",
]
