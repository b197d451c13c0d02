from hypothesis import given
from hypothesis import strategies as st

from nerdlog.cmdtext import capitalize_first_rune, split_command


def test_capitalize_error_message():
    assert capitalize_first_rune("unknown option: foo") == "Unknown option: foo"


def test_capitalize_invalid_set_command():
    assert capitalize_first_rune("invalid set command") == "Invalid set command"


def test_capitalize_empty_string():
    assert capitalize_first_rune("") == ""


def test_capitalize_already_upper():
    assert capitalize_first_rune("Already") == "Already"


def test_capitalize_non_letter_first():
    assert capitalize_first_rune("1st option") == "1st option"


def test_capitalize_non_ascii_letter():
    assert capitalize_first_rune("\u00e9mile") == "\u00c9mile"


def test_capitalize_keeps_multi_char_upper_mapping():
    # "ß".upper() is "SS"; a single-character mapping is required.
    assert capitalize_first_rune("\u00dfx") == "\u00dfx"


def test_capitalize_undecodable_first_byte():
    s = b"\xffabc".decode("utf-8", "surrogateescape")
    assert capitalize_first_rune(s) == s


def test_capitalize_only_first_character_changes():
    assert capitalize_first_rune("abc def") == "Abc def"


@given(st.text(min_size=1))
def test_capitalize_preserves_tail(s):
    result = capitalize_first_rune(s)
    assert result[1:] == s[1:]
    assert len(result) == len(s)


def test_split_command_simple():
    assert split_command("set numlines=5") == ["set", "numlines=5"]


def test_split_command_collapses_whitespace():
    assert split_command("  time \t -1h   to\n  -5m ") == ["time", "-1h", "to", "-5m"]


def test_split_command_empty():
    assert split_command("") == []


def test_split_command_blank():
    assert split_command("   \t\n ") == []


@given(st.lists(st.text(alphabet=st.characters(blacklist_categories=("Zs", "Zl", "Zp", "Cc")), min_size=1), max_size=6))
def test_split_command_round_trip(words):
    words = [w for w in words if w.split() == [w]]
    assert split_command("  ".join(words)) == words