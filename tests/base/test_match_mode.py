# tests/base/test_match_mode.py

import pytest

from jpql_builder import MatchMode


@pytest.mark.parametrize(
    "mode, expected",
    [
        (MatchMode.EXACT, "abc"),
        (MatchMode.PREFIX, "abc%"),
        (MatchMode.SUFFIX, "%abc"),
        (MatchMode.ANYWHERE, "%abc%"),
    ],
    ids=["exact", "prefix", "suffix", "anywhere"],
)
def test_to_match_string(mode, expected):
    assert mode.to_match_string("abc") == expected


def test_aliases():
    assert MatchMode.START is MatchMode.PREFIX
    assert MatchMode.END is MatchMode.SUFFIX
    assert MatchMode("prefix") is MatchMode.PREFIX


def test_wildcards_in_value_are_not_escaped():
    assert MatchMode.ANYWHERE.to_match_string("50%_off") == "%50%_off%"


def test_non_string_value():
    with pytest.raises(TypeError, match="Match mode 'prefix' requires a string value, got int"):
        MatchMode.PREFIX.to_match_string(5)
