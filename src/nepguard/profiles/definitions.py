"""Profile definitions - register the built-in token standards."""

from nepguard.profiles.models import (
    ApplicabilityRule,
    MemberKind,
    Profile,
    RequiredMember,
    Safety,
    sig,
)
from nepguard.profiles.registry import registry

NEP17 = "nep-17"
NEP11 = "nep-11"

# =============================================================================
# NEP-17 (fungible token)
# =============================================================================

registry.register(
    Profile(
        profile_id=NEP17,
        standard="NEP-17",
        rule_code="NC4024",
        title="NEP-17 contract format and compliance",
        description="Verifies the correct format and compliance for NEP-17 token contracts.",
        applicability=ApplicabilityRule(
            base_types=("Neo.SmartContract.Framework.Nep17Token", "Nep17Token"),
            marker_attribute="SupportedStandards",
            standard_identifier="NepStandard.Nep17",
        ),
        members=(
            RequiredMember(
                name="Symbol",
                kind=MemberKind.PROPERTY,
                return_types=("string",),
                safety=Safety.SAFE,
            ),
            RequiredMember(
                name="Decimals",
                kind=MemberKind.PROPERTY,
                return_types=("byte",),
                safety=Safety.SAFE,
            ),
            RequiredMember(
                name="TotalSupply",
                kind=MemberKind.METHOD,
                return_types=("BigInteger",),
                safety=Safety.SAFE,
            ),
            RequiredMember(
                name="BalanceOf",
                kind=MemberKind.METHOD,
                signatures=(sig(("UInt160", "owner")),),
                return_types=("BigInteger",),
                safety=Safety.SAFE,
            ),
            RequiredMember(
                name="Transfer",
                kind=MemberKind.METHOD,
                signatures=(
                    sig(
                        ("UInt160", "from"),
                        ("UInt160", "to"),
                        ("BigInteger", "amount"),
                        ("object", "data"),
                    ),
                ),
                return_types=("bool",),
                safety=Safety.UNSAFE,
            ),
            RequiredMember(
                name="Transfer",
                kind=MemberKind.EVENT,
                signatures=(
                    sig(("UInt160", "from"), ("UInt160", "to"), ("BigInteger", "amount")),
                ),
            ),
        ),
        payment_hook=RequiredMember(
            name="OnNEP17Payment",
            kind=MemberKind.METHOD,
            signatures=(sig(("UInt160", "from"), ("BigInteger", "amount"), ("object", "data")),),
            return_types=("void",),
            safety=Safety.SAFE,
        ),
    )
)

# =============================================================================
# NEP-11 (non-fungible token)
# =============================================================================

registry.register(
    Profile(
        profile_id=NEP11,
        standard="NEP-11",
        rule_code="NC4025",
        title="NEP-11 contract format and compliance",
        description="Verifies the correct format and compliance for NEP-11 token contracts.",
        missing_message="Missing {noun}: {name}",
        applicability=ApplicabilityRule(
            base_types=("Neo.SmartContract.Framework.Nep11Token", "Nep11Token"),
            marker_attribute="SupportedStandards",
            standard_identifier="NepStandard.Nep11",
        ),
        members=(
            RequiredMember(
                name="Symbol",
                kind=MemberKind.METHOD,
                return_types=("string",),
                safety=Safety.SAFE,
            ),
            RequiredMember(
                name="Decimals",
                kind=MemberKind.METHOD,
                return_types=("byte",),
                safety=Safety.SAFE,
            ),
            RequiredMember(
                name="TotalSupply",
                kind=MemberKind.METHOD,
                return_types=("BigInteger",),
                safety=Safety.SAFE,
            ),
            RequiredMember(
                name="BalanceOf",
                kind=MemberKind.METHOD,
                signatures=(
                    sig(("UInt160", "owner")),
                    sig(("UInt160", "owner"), ("ByteString", "tokenId")),
                ),
                return_types=("BigInteger",),
                safety=Safety.SAFE,
                overloaded=True,
            ),
            RequiredMember(
                name="TokensOf",
                kind=MemberKind.METHOD,
                signatures=(sig(("UInt160", "owner")),),
                return_types=("InteropInterface",),
                safety=Safety.SAFE,
            ),
            RequiredMember(
                name="OwnerOf",
                kind=MemberKind.METHOD,
                signatures=(sig(("ByteString", "tokenId")),),
                return_types=("UInt160", "InteropInterface"),
                safety=Safety.SAFE,
                overloaded=True,
            ),
            RequiredMember(
                name="Transfer",
                kind=MemberKind.METHOD,
                signatures=(
                    sig(("UInt160", "to"), ("ByteString", "tokenId"), ("object", "data")),
                    sig(
                        ("UInt160", "from"),
                        ("UInt160", "to"),
                        ("BigInteger", "amount"),
                        ("ByteString", "tokenId"),
                        ("object", "data"),
                    ),
                ),
                return_types=("bool",),
                safety=Safety.UNSAFE,
                overloaded=True,
            ),
            RequiredMember(
                name="Transfer",
                kind=MemberKind.EVENT,
                signatures=(
                    sig(
                        ("UInt160", "from"),
                        ("UInt160", "to"),
                        ("BigInteger", "amount"),
                        ("ByteString", "tokenId"),
                    ),
                ),
            ),
        ),
        payment_hook=RequiredMember(
            name="OnNEP11Payment",
            kind=MemberKind.METHOD,
            signatures=(
                sig(
                    ("UInt160", "from"),
                    ("BigInteger", "amount"),
                    ("ByteString", "tokenId"),
                    ("object", "data"),
                ),
            ),
            return_types=("void",),
            safety=Safety.SAFE,
        ),
    )
)
