"""Per-line and per-block parsing contexts handed out by Io."""

from __future__ import annotations
import re
from abc import ABC, abstractmethod
from typing import Any, Iterator, List, Sequence

from .core.extract import Shape, as_shape, extract, extract_outcome, positive_numbers
from .core.model import Outcome
from .core.tokenizer import TokenCursor

_NUM = re.compile(r"-?[0-9]+")


class TokenContext(ABC):
    """Typed, incremental extraction over a fixed token sequence.

    Every successful call consumes the tokens it used; a failed call
    consumes nothing.
    """

    def __init__(self, text: str | Sequence[str], delimiters: str | None = None) -> None:
        self._cursor = TokenCursor(text, delimiters)

    @property
    def tokens(self) -> List[str]:
        return self._cursor.tokens

    @property
    def remaining(self) -> int:
        return self._cursor.remaining

    def _take(self, shape: Shape) -> tuple:
        values = extract(self._cursor.tokens, shape, self._cursor.pos)
        self._cursor.advance(shape.arity)
        return values

    def _try(self, shape: Shape) -> Outcome:
        res = extract_outcome(self._cursor.tokens, shape, self._cursor.pos)
        if res.success:
            self._cursor.advance(shape.arity)
        return res

    def value(self, target: Any = str) -> Any:
        """Parse the next token as `target`."""
        return self._take(as_shape(target))[0]

    def tuple(self, *targets: Any) -> tuple:
        """Parse the next len(targets) tokens, one type per position."""
        return self._take(Shape.of(*targets))

    def try_value(self, target: Any = str) -> Outcome:
        res = self._try(as_shape(target))
        if res.success:
            res.value = res.value[0]
        return res

    def try_tuple(self, *targets: Any) -> Outcome:
        return self._try(Shape.of(*targets))

    def vec(self, target: Any, n: int) -> list:
        """Parse the next `n` tokens as `target` (all or nothing)."""
        if n < 0:
            raise ValueError(f"cannot read {n} values")
        if n == 0:
            return []
        shape = as_shape(target)
        values = extract(self._cursor.tokens, Shape(shape.targets * n, shape.parsers * n), self._cursor.pos)
        self._cursor.advance(n)
        return list(values)

    def rest_values(self, target: Any = str) -> list:
        """Parse every unconsumed token as `target`."""
        return self.vec(target, self.remaining)

    def pnums(self, target: Any = int) -> list:
        """All tokens that parse as `target` and are > 0; others are skipped."""
        return positive_numbers(self._cursor.tokens, target)

    def nums(self, target: Any = int) -> list:
        """Every `-?[0-9]+` run in the raw text, parsed as `target`."""
        shape = as_shape(target)
        return [shape.parsers[0].parse_token(m) for m in _NUM.findall(self.text)]

    def rest(self) -> str:
        """Raw text starting at the next unconsumed token."""
        return self._cursor.rest()

    @property
    @abstractmethod
    def text(self) -> str:
        """Raw text the tokens were taken from."""


class LineIo(TokenContext):
    """Parsing context for a single line."""

    def __init__(self, line: str, number: int, delimiters: str | None = None) -> None:
        super().__init__(line, delimiters)
        self.line = line
        self.number = number

    @property
    def text(self) -> str:
        return self.line

    def chars(self) -> List[str]:
        return list(self.value(str))

    def __repr__(self) -> str:
        return f"LineIo({self.number}: {self.line!r})"


class BlockIo(TokenContext):
    """Parsing context for a block; extraction runs over all of its tokens."""

    def __init__(self, lines: List[str], number: int, delimiters: str | None = None) -> None:
        super().__init__(lines, delimiters)
        self.lines = lines
        self.number = number
        self._delimiters = delimiters

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def line_io(self) -> Iterator[LineIo]:
        """Independent per-line contexts; they do not share this block's cursor."""
        for i, line in enumerate(self.lines):
            yield LineIo(line, i, self._delimiters)

    def __iter__(self) -> Iterator[LineIo]:
        return self.line_io()

    def __len__(self) -> int:
        return len(self.lines)

    def __repr__(self) -> str:
        return f"BlockIo({self.number}: {len(self.lines)} line(s))"
