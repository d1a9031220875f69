"""sigdefs.comments.

Comment extraction on top of `tokenize`, plus association of comment blocks
with the definitions directly below them.
"""

from __future__ import annotations

import io
import tokenize
from dataclasses import dataclass
from itertools import accumulate
from typing import TYPE_CHECKING

from .errors import raise_invalid_source

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .definitions import NamedItem


@dataclass(frozen=True, slots=True)
class Comment:
    """A `#` comment found in module source.

    Attributes:
        lineno: 1-based line number.
        col: 0-based column of the `#`.
        begin: Character offset of the `#` in the source.
        end: Character offset just past the comment text.
        text: The comment, `#` included.
        own_line: True when nothing but whitespace precedes the comment.
    """

    lineno: int
    col: int
    begin: int
    end: int
    text: str
    own_line: bool

    def __str__(self) -> str:
        return f"{self.lineno}:{self.col}: {self.text!r}"


def extract_comments(source: str) -> list[Comment]:
    """
    Return every comment of `source`, in source order.

    Args:
        source: Python source.

    Returns:
        List of comments.

    Raises:
        ValueError: If the source cannot be tokenized.
    """
    # the lines tokenize reads; str.splitlines also breaks on \x0c
    lines = list(iter(io.StringIO(source).readline, ""))
    line_starts = [0, *accumulate(len(line) for line in lines)]

    out: list[Comment] = []
    try:
        for tok in tokenize.generate_tokens(io.StringIO(source).readline):
            if tok.type != tokenize.COMMENT:
                continue
            (row, col), (_, end_col) = tok.start, tok.end
            begin = line_starts[row - 1] + col
            out.append(
                Comment(
                    lineno=row,
                    col=col,
                    begin=begin,
                    end=begin + (end_col - col),
                    text=tok.string,
                    own_line=not tok.line[:col].strip(),
                )
            )
    except (tokenize.TokenError, SyntaxError) as exc:
        raise_invalid_source(detail=f"could not tokenize source: {exc}")
    return out


def leading_comments(
    item: NamedItem, comments: Sequence[Comment]
) -> tuple[Comment, ...]:
    """
    Return the comment block sitting on the lines directly above `item`.

    The block stops at the first line that is not an own-line comment (blank
    lines included).

    Args:
        item: Definition to look up.
        comments: Comments of the same source, as from `extract_comments`.

    Returns:
        Comments in source order; empty when there are none.
    """
    by_line = {c.lineno: c for c in comments if c.own_line}
    block: list[Comment] = []
    line = item.lineno - 1
    while line in by_line:
        block.append(by_line[line])
        line -= 1
    return tuple(reversed(block))
