"""Base protocol and shared settings for line sources."""

from typing import Optional, Protocol, runtime_checkable

DEFAULT_ENCODING = "utf-8"


@runtime_checkable
class LineSource(Protocol):
    """Protocol for forward-only line providers."""

    lines_read: int  # running total

    def next_line(self) -> Optional[str]:
        """Return the next line without its terminator, or None at end of source.
        An unrecoverable read error → raise IoFailure.
        """
        ...

    def close(self) -> None:
        ...
