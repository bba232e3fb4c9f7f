import pytest

from flagtree.completion import COMPLETION_MARKER
from flagtree.parser.tokenizer import Token, expand_tokens, split_short_flags


def texts(tokens):
    return [token.text for token in tokens]


def test_split_short_flag_cluster():
    assert split_short_flags("-qlf") == ["-q", "-l", "-f"]


def test_split_short_flag_with_attached_value():
    assert split_short_flags("-j3") == ["-j", "3"]
    assert split_short_flags("-qj3") == ["-q", "-j", "3"]
    assert split_short_flags("-o/tmp/out") == ["-o", "/tmp/out"]


@pytest.mark.parametrize("text", ["", "-", "-x", "--long", "--", "-1", "-5x", "plain"])
def test_split_leaves_non_clusters_alone(text):
    assert split_short_flags(text) == [text]


def test_expand_tokens_splits_every_cluster():
    stream = expand_tokens(["-qv", "build", "-j4"])
    assert texts(stream) == ["-q", "-v", "build", "-j", "4"]
    assert not any(token.literal for token in stream)


def test_expand_tokens_does_not_modify_input():
    raw = ["-ab", "c"]
    expand_tokens(raw)
    assert raw == ["-ab", "c"]


def test_double_dash_marks_rest_literal():
    stream = expand_tokens(["-a", "--", "-bc", "--", "x"])
    assert stream == [
        Token("-a"),
        Token("-bc", literal=True),
        Token("--", literal=True),
        Token("x", literal=True),
    ]


def test_completion_marker_on_target():
    stream = expand_tokens(["build", "--ve"], completion_index=2)
    assert texts(stream) == ["build", "--ve" + COMPLETION_MARKER]


def test_completion_marker_added_before_splitting():
    stream = expand_tokens(["-qj"], completion_index=1)
    assert texts(stream) == ["-q", "-j", COMPLETION_MARKER]


def test_completion_marker_after_single_short_flag():
    stream = expand_tokens(["-q"], completion_index=1)
    assert texts(stream) == ["-q", COMPLETION_MARKER]


def test_completion_marker_on_attached_value():
    stream = expand_tokens(["-j3"], completion_index=1)
    assert texts(stream) == ["-j", "3" + COMPLETION_MARKER]


def test_completion_marker_on_bare_dash():
    stream = expand_tokens(["-"], completion_index=1)
    assert texts(stream) == ["-" + COMPLETION_MARKER]


def test_completion_marker_on_empty_token():
    stream = expand_tokens(["build", ""], completion_index=2)
    assert texts(stream) == ["build", COMPLETION_MARKER]


def test_completion_marker_after_double_dash():
    stream = expand_tokens(["--", "-x"], completion_index=2)
    assert stream == [Token("-x" + COMPLETION_MARKER, literal=True)]


def test_completion_target_double_dash_is_not_a_separator():
    stream = expand_tokens(["--", "a"], completion_index=1)
    assert texts(stream) == ["--" + COMPLETION_MARKER, "a"]
    assert not any(token.literal for token in stream)


def test_custom_marker():
    stream = expand_tokens(["x"], completion_index=1, marker="@@")
    assert texts(stream) == ["x@@"]


@pytest.mark.parametrize("index", [0, 3, -1])
def test_completion_index_out_of_range(index):
    with pytest.raises(ValueError):
        expand_tokens(["a", "b"], completion_index=index)
