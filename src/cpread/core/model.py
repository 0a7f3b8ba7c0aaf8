from __future__ import annotations
from dataclasses import dataclass
from typing import Any


@dataclass(slots=True)
class Outcome:
    success: bool
    value: Any | None
    error: CpreadError | None


class CpreadError(RuntimeError):
    """Base class for every failure raised by cpread."""
    pass


class IoFailure(CpreadError, OSError):
    """Raised when a source cannot be opened or an unrecoverable read error occurs."""

    def __init__(self, message: str, *, source: object = None) -> None:
        super().__init__(message)
        self.source = source


class ConversionFailure(CpreadError, ValueError):
    """Raised when a token is not a well-formed literal for the requested type."""

    def __init__(self, token: str, target: object, reason: str, *, position: int | None = None) -> None:
        self.token = token
        self.target = target
        self.reason = reason
        self.position = position
        super().__init__(self._render())

    def _render(self) -> str:
        name = getattr(self.target, "__name__", repr(self.target))
        where = f"field {self.position}: " if self.position is not None else ""
        return f"{where}cannot parse {self.token!r} as {name}: {self.reason}"

    def at(self, position: int) -> ConversionFailure:
        """Return a copy of this failure attributed to a tuple position."""
        return ConversionFailure(self.token, self.target, self.reason, position=position)


class ArityFailure(CpreadError, LookupError):
    """Raised when fewer tokens are available than the requested shape needs."""

    def __init__(self, needed: int, found: int) -> None:
        self.needed = needed
        self.found = found
        super().__init__(f"needed {needed} token(s), found {found}")


class UnknownTargetError(CpreadError, TypeError):
    """Raised when no scalar parser is known for a target type."""
    pass
