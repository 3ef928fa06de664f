import pytest

from diffwrap.blocks import MinusPlus, State, wrap_minusplus_block
from diffwrap.wrapping import WrapConfig, wrap_line

S1 = "s1"
S2 = "s2"
SD = ""

W = "+"
WR = "<"
RA = ">"

CFG = WrapConfig(
    left_symbol=W,
    right_symbol=WR,
    right_prefix_symbol=RA,
    use_wrap_right_permille=370,
    max_lines=5,
    inline_hint_syntax_style=None,
)


def run(syntax, diff, alignment, wrapinfo, width=6):
    return wrap_minusplus_block(
        CFG,
        syntax,
        diff,
        alignment,
        MinusPlus(width, width),
        wrapinfo,
        MinusPlus(SD, SD),
        SD,
        None,
    )


def test_minusplus_indexing_and_iteration():
    pair = MinusPlus("a", "b")
    assert (pair[0], pair[1]) == ("a", "b")
    assert list(pair) == ["a", "b"]
    with pytest.raises(IndexError):
        pair[2]


def test_no_wrapping_keeps_alignment():
    minus_line = [(S1, "_ab")]
    plus_line = [(S2, "_cd")]
    alignment, states, syn, dif = run(
        MinusPlus([minus_line], [plus_line]),
        MinusPlus([minus_line], [plus_line]),
        [(0, 0)],
        MinusPlus([False], [False]),
    )
    assert alignment == [(0, 0)]
    assert states.minus == [State.HUNK_MINUS]
    assert states.plus == [State.HUNK_PLUS]
    assert syn.minus == [minus_line]
    assert dif.plus == [plus_line]


def test_wrapped_plus_line_right_aligned():
    line = [(S1, "_012"), (S2, "3456")]
    alignment, states, syn, dif = run(
        MinusPlus([], [line]),
        MinusPlus([], [line]),
        [(None, 0)],
        MinusPlus([], [True]),
    )
    expected = [
        [(S1, "_012"), (S2, "34"), (SD, WR)],
        [(SD, "_"), (SD, "    "), (SD, RA), (S2, "56")],
    ]
    assert dif.plus == expected
    assert syn.plus == expected
    assert alignment == [(None, 0), (None, 1)]
    assert states.plus == [State.HUNK_PLUS, State.HUNK_PLUS_WRAPPED]
    assert states.minus == []


def test_uneven_pair_is_filled_with_none():
    long_line = [(S1, "_0123456789abcdef")]
    short_line = [(S2, "_ab")]
    alignment, states, syn, dif = run(
        MinusPlus([long_line], [short_line]),
        MinusPlus([long_line], [short_line]),
        [(0, 0)],
        MinusPlus([True], [False]),
        width=4,
    )
    wrapped = wrap_line(CFG, long_line, 4, SD, None)
    assert syn.minus == wrapped
    assert dif.minus == wrapped
    assert len(wrapped) > 1
    assert alignment[0] == (0, 0)
    assert alignment[1:] == [(i, None) for i in range(1, len(wrapped))]
    assert states.minus == [State.HUNK_MINUS] + [State.HUNK_MINUS_WRAPPED] * (
        len(wrapped) - 1
    )
    assert states.plus == [State.HUNK_PLUS]


def test_plus_longer_than_minus():
    short_line = [(S1, "_ab")]
    long_line = [(S2, "_0123456789abcdef")]
    alignment, states, _, dif = run(
        MinusPlus([short_line], [long_line]),
        MinusPlus([short_line], [long_line]),
        [(0, 0)],
        MinusPlus([False], [True]),
        width=4,
    )
    count = len(dif.plus)
    assert count > 1
    assert alignment == [(0, 0)] + [(None, i) for i in range(1, count)]
    assert len(states.plus) == count
    assert states.plus[0] is State.HUNK_PLUS


def test_separate_minus_and_plus_lines():
    m = [(S1, "_x")]
    p = [(S2, "_y")]
    alignment, states, syn, _ = run(
        MinusPlus([m, m], [p]),
        MinusPlus([m, m], [p]),
        [(0, None), (1, None), (None, 0)],
        MinusPlus([False, False], [False]),
    )
    assert alignment == [(0, None), (1, None), (None, 0)]
    assert states.minus == [State.HUNK_MINUS, State.HUNK_MINUS]
    assert states.plus == [State.HUNK_PLUS]
    assert syn.minus == [m, m]


def test_bad_alignment_index_raises():
    m = [(S1, "_x")]
    with pytest.raises(ValueError, match="bad alignment index"):
        run(
            MinusPlus([m], []),
            MinusPlus([m], []),
            [(1, None)],
            MinusPlus([False], []),
        )


def test_none_none_alignment_raises():
    with pytest.raises(ValueError, match="None-None"):
        run(MinusPlus([], []), MinusPlus([], []), [(None, None)], MinusPlus([], []))


def test_missing_wrap_info_raises():
    m = [(S1, "_x")]
    with pytest.raises(ValueError, match="bad wrap info"):
        run(MinusPlus([m], []), MinusPlus([m], []), [(0, None)], MinusPlus([], []))


def test_missing_diff_line_raises():
    m = [(S1, "_x")]
    with pytest.raises(ValueError, match="bad diff alignment"):
        run(MinusPlus([m], []), MinusPlus([], []), [(0, None)], MinusPlus([False], []))


def test_syntax_and_diff_mismatch_raises():
    syntax_line = [(S1, "_0123456789abcdef")]
    diff_line = [(S1, "_0")]
    with pytest.raises(ValueError, match="wrapping differs"):
        run(
            MinusPlus([syntax_line], []),
            MinusPlus([diff_line], []),
            [(0, None)],
            MinusPlus([True], []),
            width=4,
        )