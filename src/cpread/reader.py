"""The Io facade: one source, one forward pass, typed reads."""

from __future__ import annotations
import io
import logging
import re
import sys
from collections import deque
from pathlib import Path
from typing import Any, Deque, Iterator, List, Optional, TextIO, Tuple, Union

from .context import BlockIo, LineIo
from .core.extract import Shape, as_shape, extract
from .core.tokenizer import TokenCursor, iter_blocks
from .io import open_source
from .parsers import usize

log = logging.getLogger(__name__)

_NUM = re.compile(r"-?[0-9]+")


class Io:
    """Owns a line source (and an output sink) for a single forward pass.

    Lines and blocks are handed out lazily through `line_io()` / `block_io()`;
    `read()` and friends pull tokens straight from the stream, crossing line
    boundaries and skipping blank lines. Both styles can be mixed: whatever a
    token read left on the current line comes back as the next line.
    """

    def __init__(self, source=None, *, sink: Optional[TextIO] = None,
                 delimiters: Optional[str] = None, **source_options):
        self._source = open_source(source, **source_options)
        self._sink = sink if sink is not None else sys.stdout
        self._delimiters = delimiters
        # lines pulled by token reads and not fully consumed yet
        self._pending: Deque[Tuple[str, TokenCursor]] = deque()
        self._closed = False

    # --- constructors ---
    @classmethod
    def from_file(cls, path: Union[Path, str], **kwargs) -> Io:
        return cls(Path(path), **kwargs)

    @classmethod
    def from_stdin(cls, **kwargs) -> Io:
        return cls(None, **kwargs)

    @classmethod
    def from_str(cls, text: str, **kwargs) -> Io:
        return cls(io.StringIO(text), **kwargs)

    # --- line / block iteration ---
    def _pull_line(self) -> Optional[str]:
        while self._pending:
            line, cur = self._pending.popleft()
            if cur.pos == 0:
                return line
            if cur.remaining:
                return cur.rest()
        return self._source.next_line()

    def lines(self) -> Iterator[str]:
        while (line := self._pull_line()) is not None:
            yield line

    def line_io(self) -> Iterator[LineIo]:
        """Lazy per-line parsing contexts, in source order (blank lines included)."""
        for n, line in enumerate(self.lines()):
            yield LineIo(line, n, self._delimiters)

    def blocks(self) -> Iterator[List[str]]:
        return iter_blocks(self.lines())

    def block_io(self) -> Iterator[BlockIo]:
        """Lazy per-block parsing contexts; blank lines only separate blocks."""
        for n, block in enumerate(self.blocks()):
            yield BlockIo(block, n, self._delimiters)

    def __iter__(self) -> Iterator[LineIo]:
        return self.line_io()

    # --- token reads across lines ---
    def _gather(self, n: int) -> List[str]:
        tokens = [t for _, cur in self._pending for t in cur.tokens[cur.pos:]]
        while len(tokens) < n:
            line = self._source.next_line()
            if line is None:
                break
            cur = TokenCursor(line, self._delimiters)
            self._pending.append((line, cur))
            tokens.extend(cur.tokens)
        return tokens

    def _consume(self, n: int) -> None:
        while n:
            _, cur = self._pending[0]
            take = min(n, cur.remaining)
            cur.advance(take)
            n -= take
            if not cur.remaining:
                self._pending.popleft()

    def _read_shape(self, shape: Shape) -> tuple:
        values = extract(self._gather(shape.arity), shape)
        self._consume(shape.arity)
        return values

    def read(self, target: Any = str) -> Any:
        """Read the next token as `target`."""
        return self._read_shape(as_shape(target))[0]

    def tuple(self, *targets: Any) -> tuple:
        return self._read_shape(Shape.of(*targets))

    def vec(self, target: Any, n: int) -> list:
        """Read `n` tokens of `target` (all or nothing)."""
        if n < 0:
            raise ValueError(f"cannot read {n} values")
        if n == 0:
            return []
        shape = as_shape(target)
        return list(self._read_shape(Shape(shape.targets * n, shape.parsers * n)))

    def idx(self) -> int:
        """Read a 1-based index and return it 0-based."""
        return self.read(usize) - 1

    def chars(self) -> List[str]:
        return list(self.read(str))

    def read_line(self) -> Optional[str]:
        """Rest of the current line, or the next one; None at end of source."""
        return self._pull_line()

    def read_all(self) -> str:
        """Everything not consumed yet, lines joined with newlines."""
        return "\n".join(self.lines())

    def nums(self, target: Any = int) -> list:
        """Every `-?[0-9]+` run in the rest of the input, parsed as `target`."""
        parser = as_shape(target).parsers[0]
        return [parser.parse_token(m) for m in _NUM.findall(self.read_all())]

    # --- output ---
    def write(self, obj: Any) -> None:
        self._sink.write(str(obj))

    def writeln(self, obj: Any) -> None:
        self.write(obj)
        self.nl()
        self.flush()

    def writed(self, obj: Any) -> None:
        self._sink.write(repr(obj))

    def writedln(self, obj: Any) -> None:
        self.writed(obj)
        self.nl()
        self.flush()

    def nl(self) -> None:
        self._sink.write("\n")

    def flush(self) -> None:
        self._sink.flush()

    # --- lifetime ---
    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Flush output and release the source; safe to call twice."""
        if self._closed:
            return
        self._closed = True
        try:
            self.flush()
        finally:
            self._pending.clear()
            self._source.close()
            log.debug("io closed")
