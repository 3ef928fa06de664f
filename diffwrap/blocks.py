"""Wrapping of aligned blocks of removed and added lines.

A block holds the minus (removed) and plus (added) lines of a hunk. Each
line exists twice, once with syntax styles and once with diff styles. An
alignment pairs minus lines with plus lines. Wrapping adds lines, so the
alignment and the line states are rebuilt to match.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from diffwrap.wrapping import LineSegments, WrapConfig, wrap_if_too_long

T = TypeVar("T")

Alignment = List[Tuple[Optional[int], Optional[int]]]


class State(enum.Enum):
    """State of a line in a wrapped block."""

    HUNK_MINUS = "hunk-minus"
    HUNK_MINUS_WRAPPED = "hunk-minus-wrapped"
    HUNK_PLUS = "hunk-plus"
    HUNK_PLUS_WRAPPED = "hunk-plus-wrapped"


@dataclass
class MinusPlus(Generic[T]):
    """A pair of values, one for the minus side and one for the plus side.

    Index 0 is the minus (left) side, index 1 the plus (right) side.
    """

    minus: T
    plus: T

    def __getitem__(self, index: int) -> T:
        if index == 0:
            return self.minus
        if index == 1:
            return self.plus
        raise IndexError(f"side index must be 0 or 1, got {index!r}")

    def __iter__(self) -> Iterator[T]:
        yield self.minus
        yield self.plus


class _Side:
    """Input iterators and wrapped output for one side of the block."""

    def __init__(
        self,
        syntax: Sequence[LineSegments],
        diff: Sequence[LineSegments],
        wrapinfo: Sequence[bool],
        line_width: int,
        fill_style: Any,
    ) -> None:
        self.syntax = iter(syntax)
        self.diff = iter(diff)
        self.wrapinfo = iter(wrapinfo)
        self.line_width = line_width
        self.fill_style = fill_style
        self.expected = 0
        self.wrapped_syntax: List[LineSegments] = []
        self.wrapped_diff: List[LineSegments] = []
        self.states: List[State] = []


_MISSING = object()


def _wrap_next(
    side: _Side,
    index: int,
    errhint: str,
    wrap_config: WrapConfig,
    null_syntax_style: Any,
    inline_hint_style: Optional[Any],
) -> Tuple[int, int]:
    """Wrap the next line of ``side``, which the alignment calls ``index``."""
    if index != side.expected:
        raise ValueError(
            f"bad alignment index {errhint}: got {index}, expected {side.expected}"
        )
    side.expected += 1

    must_wrap = next(side.wrapinfo, _MISSING)
    if must_wrap is _MISSING:
        raise ValueError(f"bad wrap info {errhint}")
    syntax_line = next(side.syntax, _MISSING)
    if syntax_line is _MISSING:
        raise ValueError(f"bad syntax alignment {errhint}")
    diff_line = next(side.diff, _MISSING)
    if diff_line is _MISSING:
        raise ValueError(f"bad diff alignment {errhint}")

    syntax_range = wrap_if_too_long(
        wrap_config,
        side.wrapped_syntax,
        syntax_line,
        bool(must_wrap),
        side.line_width,
        null_syntax_style,
        wrap_config.inline_hint_syntax_style,
    )
    diff_range = wrap_if_too_long(
        wrap_config,
        side.wrapped_diff,
        diff_line,
        bool(must_wrap),
        side.line_width,
        side.fill_style,
        inline_hint_style,
    )
    # The text under both stylings is the same, so the wrapping must match.
    if syntax_range != diff_range:
        raise ValueError(
            f"syntax and diff wrapping differs {errhint}: {syntax_range} vs {diff_range}"
        )
    return syntax_range


def wrap_minusplus_block(
    wrap_config: WrapConfig,
    syntax: MinusPlus[Sequence[LineSegments]],
    diff: MinusPlus[Sequence[LineSegments]],
    alignment: Sequence[Tuple[Optional[int], Optional[int]]],
    line_widths: MinusPlus[int],
    wrapinfo: MinusPlus[Sequence[bool]],
    fill_styles: MinusPlus[Any],
    null_syntax_style: Any,
    inline_hint_style: Optional[Any],
) -> Tuple[
    Alignment,
    MinusPlus[List[State]],
    MinusPlus[List[LineSegments]],
    MinusPlus[List[LineSegments]],
]:
    """Wrap the lines that ``wrapinfo`` marks as too long and rebuild the alignment.

    Returns the new alignment, the state of every output line, and the
    wrapped syntax and diff lines of both sides. The first line produced from
    an input line has state HUNK_MINUS or HUNK_PLUS; lines added by wrapping
    have the corresponding WRAPPED state. Inconsistent input raises ValueError.
    """
    minus = _Side(syntax.minus, diff.minus, wrapinfo.minus, line_widths.minus, fill_styles.minus)
    plus = _Side(syntax.plus, diff.plus, wrapinfo.plus, line_widths.plus, fill_styles.plus)

    def wrap(side: _Side, index: int, errhint: str) -> Tuple[int, int]:
        return _wrap_next(
            side, index, errhint, wrap_config, null_syntax_style, inline_hint_style
        )

    new_alignment: Alignment = []

    for m, p in alignment:
        if m is not None and p is None:
            start, end = wrap(minus, m, "[*l*] (-)")
            new_alignment.extend((i, None) for i in range(start, end))
            minus_extended, plus_extended = end - start, 0
        elif m is None and p is not None:
            start, end = wrap(plus, p, "(-) [*r*]")
            new_alignment.extend((None, i) for i in range(start, end))
            minus_extended, plus_extended = 0, end - start
        elif m is not None and p is not None:
            m_start, m_end = wrap(minus, m, "[*l*] (r)")
            p_start, p_end = wrap(plus, p, "(l) [*r*]")
            new_alignment.extend(zip(range(m_start, m_end), range(p_start, p_end)))

            minus_extended = m_end - m_start
            plus_extended = p_end - p_start
            # The pair may have become uneven; fill the shorter side with None.
            if minus_extended > plus_extended:
                new_alignment.extend(
                    (i, None) for i in range(m_start + plus_extended, m_end)
                )
            elif plus_extended > minus_extended:
                new_alignment.extend(
                    (None, i) for i in range(p_start + minus_extended, p_end)
                )
        else:
            raise ValueError("None-None alignment")

        if minus_extended > 0:
            minus.states.append(State.HUNK_MINUS)
            minus.states.extend([State.HUNK_MINUS_WRAPPED] * (minus_extended - 1))
        if plus_extended > 0:
            plus.states.append(State.HUNK_PLUS)
            plus.states.extend([State.HUNK_PLUS_WRAPPED] * (plus_extended - 1))

    return (
        new_alignment,
        MinusPlus(minus.states, plus.states),
        MinusPlus(minus.wrapped_syntax, plus.wrapped_syntax),
        MinusPlus(minus.wrapped_diff, plus.wrapped_diff),
    )