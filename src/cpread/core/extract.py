"""Typed extraction of fixed-shape tuples from token sequences."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Sequence, Tuple

from .model import ArityFailure, ConversionFailure, CpreadError, Outcome
from .registry import _REGISTRY

MAX_TUPLE_ARITY = 12


@dataclass(frozen=True, slots=True)
class Shape:
    """Ordered target types and the parsers resolved for them."""
    targets: Tuple[Any, ...]
    parsers: Tuple[Any, ...]

    @classmethod
    def of(cls, *targets: Any, registry=None) -> Shape:
        if not targets:
            raise TypeError("a shape needs at least one target type")
        if len(targets) > MAX_TUPLE_ARITY:
            raise TypeError(f"shapes support at most {MAX_TUPLE_ARITY} fields, got {len(targets)}")
        reg = registry or _REGISTRY
        return cls(tuple(targets), tuple(reg.lookup(t) for t in targets))

    @property
    def arity(self) -> int:
        return len(self.targets)


def as_shape(target: Any) -> Shape:
    return target if isinstance(target, Shape) else Shape.of(target)


def extract(tokens: Sequence[str], shape: Shape, start: int = 0) -> Tuple[Any, ...]:
    """Parse `tokens[start:start + shape.arity]` into a tuple.

    All-or-nothing: raises ArityFailure when too few tokens remain and
    ConversionFailure (with `position` set) at the first field that fails.
    """
    available = max(len(tokens) - start, 0)
    if available < shape.arity:
        raise ArityFailure(shape.arity, available)
    values = []
    for i, parser in enumerate(shape.parsers):
        try:
            values.append(parser.parse_token(tokens[start + i]))
        except ConversionFailure as e:
            raise e.at(i) from e
    return tuple(values)


def extract_outcome(tokens: Sequence[str], shape: Shape, start: int = 0) -> Outcome:
    try:
        return Outcome(True, extract(tokens, shape, start), None)
    except CpreadError as e:
        return Outcome(False, None, e)


def positive_numbers(tokens: Sequence[str], target: Any = int) -> list:
    """Values of `tokens` that parse as `target` and are strictly positive."""
    parser = as_shape(target).parsers[0]
    if not getattr(parser, "numeric", False):
        raise TypeError(f"{getattr(target, '__name__', target)!s} is not a numeric target")
    found = []
    for token in tokens:
        try:
            value = parser.parse_token(token)
        except ConversionFailure:
            continue
        # NaN is unordered; Decimal NaN raises on comparison
        try:
            if value != value or not value > 0:
                continue
        except ArithmeticError:
            continue
        found.append(value)
    return found
