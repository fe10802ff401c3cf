from __future__ import annotations

import re

from group_forge.resolver import GlobalResolver, PatternResolver


def test_default_resolvers_cover_known_identifier_kinds() -> None:
    address = "0x" + "AbCd" * 10
    resolved = GlobalResolver().resolve_all(
        {
            address: 1,
            "twitter:Vitalik:295218901": 2,
            "github:Octo-Cat": 3,
            "vitalik.eth": 4,
            "not an identifier": 5,
        }
    )
    assert resolved == {
        address.lower(): 1,
        "twitter:vitalik:295218901": 2,
        "github:octo-cat": 3,
        "vitalik.eth": 4,
    }


def test_first_matching_resolver_wins() -> None:
    upper = PatternResolver("upper", re.compile(r"[A-Z]+"))
    anything = PatternResolver("anything", re.compile(r".+"), lower_case=True)
    resolved = GlobalResolver([upper, anything]).resolve_all({"ABC": 1, "Def": 2})
    assert resolved == {"ABC": 1, "def": 2}


def test_input_is_not_mutated() -> None:
    data = {"0x" + "F" * 40: 1}
    GlobalResolver().resolve_all(data)
    assert data == {"0x" + "F" * 40: 1}


def test_empty_input() -> None:
    assert GlobalResolver().resolve_all({}) == {}
