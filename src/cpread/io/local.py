"""Line sources backed by local files and already-open streams."""

import logging
import sys
from pathlib import Path
from typing import IO, Iterator, Optional, Union

from ..core.model import IoFailure
from .base import DEFAULT_ENCODING

log = logging.getLogger(__name__)


class StreamLineSource:
    """Line source over an open text or binary stream (stdin, StringIO, ...)."""

    def __init__(self, stream: IO, *, owns: bool = False, name: Optional[str] = None,
                 encoding: str = DEFAULT_ENCODING, errors: str = "strict"):
        self.lines_read = 0
        self.name = name or getattr(stream, "name", repr(stream))
        self._stream = stream
        self._should_close = owns
        self._encoding = encoding
        self._errors = errors
        self._exhausted = False

    def next_line(self) -> Optional[str]:
        """Return the next line with its terminator removed, or None at end."""
        if self._exhausted:
            return None
        if self._stream is None:
            raise IoFailure(f"Source {self.name} is closed", source=self.name)
        try:
            line = self._stream.readline()
            if isinstance(line, bytes):
                line = line.decode(self._encoding, self._errors)
        except (OSError, UnicodeDecodeError) as e:
            self._exhausted = True
            raise IoFailure(f"Read failed on {self.name}: {e}", source=self.name) from e
        if not line:
            self._exhausted = True
            return None
        if line.endswith("\n"):
            line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
        self.lines_read += 1
        return line

    def __iter__(self) -> Iterator[str]:
        while (line := self.next_line()) is not None:
            yield line

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self):
        """Close the stream if we opened it; idempotent."""
        if self._should_close and self._stream is not None:
            self._stream.close()
            log.debug("closed %s after %d line(s)", self.name, self.lines_read)
        self._stream = None


class FileLineSource(StreamLineSource):
    """Line source that opens and owns a file on disk."""

    def __init__(self, path: Union[Path, str], *, encoding: str = DEFAULT_ENCODING, errors: str = "strict"):
        try:
            stream = open(path, "r", encoding=encoding, errors=errors, newline=None)
        except OSError as e:
            raise IoFailure(f"Cannot open {path}: {e.strerror or e}", source=path) from e
        log.debug("opened %s", path)
        super().__init__(stream, owns=True, name=str(path), encoding=encoding, errors=errors)


def open_file_source(path: Union[Path, str], **kwargs) -> FileLineSource:
    """Open a file-backed line source; fails with IoFailure if unreadable."""
    return FileLineSource(path, **kwargs)


def open_stdin_source(**kwargs) -> StreamLineSource:
    """Wrap the current sys.stdin; never fails at open time."""
    return StreamLineSource(sys.stdin, name="<stdin>", **kwargs)
