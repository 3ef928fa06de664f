"""Wrapping of styled diff lines that are too wide for their panel.

A line is a sequence of ``(style, text)`` segments. Styles are opaque to the
wrapping code: any value works, as long as its type can be built without
arguments to give the default style, which is used for inserted line prefixes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

import regex

Segment = Tuple[Any, str]
LineSegments = List[Segment]

# Stands in for the "+", "-" or " " prefix of the unwrapped input line and is
# placed at the start of every wrapped line, so all lines carry a prefix.
LINE_PREFIX = "_"
INLINE_SYMBOL_WIDTH_1 = 1

# Right-aligning spaces are inserted in chunks of this string.
_SPACES = " " * 64

_GRAPHEME = regex.compile(r"\X")


@dataclass(frozen=True)
class WrapConfig:
    """Settings that control how lines are wrapped.

    ``use_wrap_right_permille`` is in thousandths of the panel width, so that
    a panel wider than 100 columns can still be set down to one character.
    ``max_lines`` is the maximum number of wrapped lines plus one; 0 means
    unlimited.
    """

    left_symbol: str = "↵"
    right_symbol: str = "↴"
    right_prefix_symbol: str = "…"
    use_wrap_right_permille: int = 370
    max_lines: int = 3
    inline_hint_syntax_style: Any = None


def _default_style(fill_style: Any) -> Any:
    """The default value of the style type in use."""
    try:
        return type(fill_style)()
    except TypeError as err:
        raise TypeError(
            f"style type {type(fill_style).__name__} must be constructible without arguments"
        ) from err


def _grapheme_starts(text: str) -> List[int]:
    return [match.start() for match in _GRAPHEME.finditer(text)]


class _CurrentLine:
    """The line being assembled to fit exactly into the available width."""

    def __init__(self, segments: LineSegments, length: int) -> None:
        self.segments = segments
        self.length = length

    @classmethod
    def fresh(cls, default_style: Any) -> "_CurrentLine":
        return cls([(default_style, LINE_PREFIX)], len(LINE_PREFIX))

    def push(self, segment: Segment, length: int) -> None:
        self.segments.append(segment)
        self.length = length

    @property
    def has_text(self) -> bool:
        return self.length > len(LINE_PREFIX)

    @property
    def text_len(self) -> int:
        return max(self.length - len(LINE_PREFIX), 0)


def wrap_line(
    wrap_config: WrapConfig,
    line: Iterable[Segment],
    line_width: int,
    fill_style: Any,
    inline_hint_style: Optional[Any],
) -> List[LineSegments]:
    """Wrap ``line`` if it is wider than ``line_width``.

    The input is expected to start with a one-character (unprinted) prefix;
    every wrapped line gets the prefix ``_``. At most ``max_lines`` lines are
    produced (unless it is 0); whatever is left is appended to the last line.
    Wrapped lines end in ``left_symbol``. If wrapping adds exactly one short
    line (narrower than ``use_wrap_right_permille``), that line is
    right-aligned, the first line ends in ``right_symbol`` and the second
    starts with ``right_prefix_symbol``. Inserted symbols take
    ``inline_hint_style``, or ``fill_style`` when it is None.
    """
    default_style = _default_style(fill_style)
    max_len = line_width + len(LINE_PREFIX)
    symbol_style = inline_hint_style if inline_hint_style is not None else fill_style

    result: List[LineSegments] = []
    # The first push includes the input's own prefix; later lines get LINE_PREFIX.
    current = _CurrentLine([], 0)
    stack: List[Segment] = list(line)
    stack.reverse()

    # If only the wrap symbol and no text fits, wrapping is not possible.
    max_lines = 1 if line_width <= INLINE_SYMBOL_WIDTH_1 else wrap_config.max_lines

    def line_limit_reached() -> bool:
        return max_lines > 0 and len(result) + 1 >= max_lines

    while stack and not line_limit_reached() and max_len > len(LINE_PREFIX):
        style, text = stack.pop()
        graphemes = _grapheme_starts(text)
        new_len = current.length + len(graphemes)

        if new_len < max_len:
            current.push((style, text), new_len)
            must_split = False
        elif new_len == max_len:
            if not stack:
                # Perfect fit, no room needed for a wrap symbol.
                current.push((style, text), new_len)
                must_split = False
            elif len(stack) == 1 and stack[-1][1] == "\n":
                # A single trailing newline stays on this line, uncounted.
                current.push((style, text), new_len)
                current.push(stack.pop(), new_len)
                must_split = False
            else:
                must_split = True
        elif new_len == max_len + 1 and not stack:
            # A single overhanging newline stays on this line, uncounted.
            if text.endswith("\n"):
                current.push((style, text), new_len - 1)
                must_split = False
            else:
                must_split = True
        else:
            must_split = True

        if must_split:
            split_at = len(graphemes) - (new_len - max_len) - 1
            segments = current.segments
            if split_at == 0:
                rest = text
            else:
                byte_pos = graphemes[split_at]
                segments.append((style, text[:byte_pos]))
                rest = text[byte_pos:]
            stack.append((style, rest))
            segments.append((symbol_style, wrap_config.left_symbol))
            result.append(segments)
            current = _CurrentLine.fresh(default_style)

    if len(result) == 1 and current.has_text:
        text_len = current.text_len
        current_permille = (text_len * 1000) // max_len
        pad_len = max(max_len - (text_len + INLINE_SYMBOL_WIDTH_1), 0)

        if (
            wrap_config.use_wrap_right_permille > current_permille
            and pad_len > INLINE_SYMBOL_WIDTH_1
        ):
            first = result[-1]
            first[-1] = (first[-1][0], wrap_config.right_symbol)

            aligned: LineSegments = [(default_style, LINE_PREFIX)]
            chunks, remainder = divmod(pad_len, len(_SPACES))
            aligned.extend((fill_style, _SPACES) for _ in range(chunks))
            if remainder:
                aligned.append((fill_style, _SPACES[:remainder]))
            aligned.append((symbol_style, wrap_config.right_prefix_symbol))
            aligned.extend(current.segments[1:])
            current.segments = aligned

    if current.length > 0:
        result.append(current.segments)

    # Anything left goes onto the last line; it is truncated later if too long.
    if stack:
        if not result:
            result.append([])
        result[-1].extend(reversed(stack))

    return result


def wrap_if_too_long(
    wrap_config: WrapConfig,
    wrapped: List[LineSegments],
    segments: Sequence[Segment],
    must_wrap: bool,
    line_width: int,
    fill_style: Any,
    inline_hint_style: Optional[Any],
) -> Tuple[int, int]:
    """Append ``segments`` to ``wrapped``, wrapped if ``must_wrap``.

    Returns the half-open range of indices in ``wrapped`` that was added.
    """
    start = len(wrapped)
    if must_wrap:
        wrapped.extend(
            wrap_line(wrap_config, segments, line_width, fill_style, inline_hint_style)
        )
    else:
        wrapped.append(list(segments))
    return start, len(wrapped)