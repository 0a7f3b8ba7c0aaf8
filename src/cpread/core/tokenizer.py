"""Splitting lines into tokens and grouping lines into blocks."""

from __future__ import annotations
import re
from functools import lru_cache
from typing import Iterable, Iterator, List, Optional, Sequence


@lru_cache(maxsize=32)
def _token_re(delimiters: str | None) -> re.Pattern[str]:
    if not delimiters:
        return re.compile(r"\S+")
    return re.compile(rf"[^\s{re.escape(delimiters)}]+")


def tokenize(line: str, delimiters: str | None = None) -> List[str]:
    """Split `line` on runs of whitespace (plus any chars in `delimiters`)."""
    return _token_re(delimiters).findall(line)


def is_blank(line: str) -> bool:
    return not line.strip()


def iter_blocks(lines: Iterable[str]) -> Iterator[List[str]]:
    """Group consecutive non-blank lines; blank lines only separate."""
    block: List[str] = []
    for line in lines:
        if is_blank(line):
            if block:
                yield block
                block = []
        else:
            block.append(line)
    if block:
        yield block


def next_block(source) -> Optional[List[str]]:
    """Pull the next block from a LineSource, or None when only blanks remain."""
    block: List[str] = []
    while (line := source.next_line()) is not None:
        if is_blank(line):
            if block:
                return block
            continue
        block.append(line)
    return block or None


class TokenCursor:
    """Tokens of one line (or block) with a forward-only read position."""

    def __init__(self, text: str | Sequence[str], delimiters: str | None = None) -> None:
        lines = [text] if isinstance(text, str) else list(text)
        pattern = _token_re(delimiters)
        # (line index, match) per token, so the raw remainder can be recovered
        self._spans = [(i, m) for i, ln in enumerate(lines) for m in pattern.finditer(ln)]
        self._lines = lines
        self.tokens: List[str] = [m.group() for _, m in self._spans]
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.tokens) - self.pos

    def peek(self) -> Optional[str]:
        return self.tokens[self.pos] if self.pos < len(self.tokens) else None

    def advance(self, n: int) -> None:
        if n < 0 or n > self.remaining:
            raise ValueError(f"cannot advance {n} token(s), {self.remaining} remaining")
        self.pos += n

    def rest(self) -> str:
        """Raw text from the next unconsumed token to the end; '' when exhausted."""
        if self.pos >= len(self.tokens):
            return ""
        i, m = self._spans[self.pos]
        return "\n".join([self._lines[i][m.start():], *self._lines[i + 1:]])
