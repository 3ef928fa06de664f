# diffwrap

Helpers for showing git diffs in fixed-width terminal panels. Long diff
lines are wrapped into the panel. In a side-by-side view the removed and
added lines stay aligned after wrapping. A small helper formats option
values the way git config expects them.

## Modules

- `diffwrap.wrapping` has `WrapConfig`, `wrap_line` and `wrap_if_too_long`.
  A line is a list of `(style, text)` segments. Its first character is the
  diff prefix (`+`, `-` or a space).
  - Styles can be any value, as long as their type can be built with no
    arguments. That no-argument value is the style given to the `_` prefix
    put in front of every continuation line.
  - Width is counted in grapheme clusters.
  - Each wrapped line ends with `left_symbol`.
  - Wrapping stops once `max_lines` lines exist. `max_lines` is the maximum
    number of wrapped lines plus one, and 0 means no limit. Any text that is
    left goes onto the last line.
  - Some wraps add exactly one continuation line, and that line takes up
    less of the panel than `use_wrap_right_permille` thousandths. Such a
    line is right-aligned and starts with `right_prefix_symbol`. The line
    before it then ends with `right_symbol`.
  - `wrap_if_too_long` appends a line to a list, wrapped or as it is. It
    returns the range of indices it added.
- `diffwrap.blocks` has `State`, `MinusPlus` and `wrap_minusplus_block`.
  This function takes the removed (minus) and added (plus) lines of a hunk,
  each in a syntax-styled and a diff-styled version. It wraps the lines
  marked as too long and returns four things:
  - a new alignment, in which the shorter side of an uneven pair is padded
    with `None`;
  - a `State` for every output line: `HUNK_MINUS` / `HUNK_PLUS` for the
    first line and `HUNK_MINUS_WRAPPED` / `HUNK_PLUS_WRAPPED` for the
    continuations;
  - the wrapped syntax lines;
  - the wrapped diff lines.

  Inconsistent input raises `ValueError`. This covers an alignment index out
  of order, a missing line, and syntax and diff wrapping that disagree.
- `diffwrap.optionfmt` has `format_option_value`. It puts a value in single
  quotes when the value is empty, starts or ends with a space, or contains
  `\`, `{`, `}` or `:`.

## Examples

```python
from diffwrap.wrapping import WrapConfig, wrap_line

lines = wrap_line(WrapConfig(), [("s", "_0123456789ab")], 11, "", None)
# [[("s", "_0123456789"), ("", "↴")],
#  [("", "_"), ("", "         "), ("", "…"), ("s", "ab")]]
```

```python
from diffwrap.optionfmt import format_option_value

format_option_value("raw")    # raw
format_option_value(r"\w+")   # '\w+'
format_option_value("")       # ''
```

## What it does not do

- diffwrap does not read or parse diffs.
- It does not run git.
- It does not apply syntax highlighting.
- It does not write ANSI escape codes.
- It has no command-line program.

You supply the styled segments and decide which lines are too long. Drawing
the panels on the terminal is also up to you.