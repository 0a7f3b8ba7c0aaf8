from __future__ import annotations

import math
import re
import struct
from decimal import Decimal, InvalidOperation
from fractions import Fraction
from typing import ClassVar, NewType

from ..core.model import ConversionFailure
from ..core.parser_base import ScalarParser

f32 = NewType("f32", float)
f64 = NewType("f64", float)

_FINITE = r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
_REAL = re.compile(rf"{_FINITE}|[+-]?(?:inf|infinity|nan)", re.IGNORECASE)
_RATIO = re.compile(rf"[+-]?[0-9]+/[0-9]+|{_FINITE}")


def _check(pattern: re.Pattern[str], token: str, target) -> None:
    if not pattern.fullmatch(token):
        raise ConversionFailure(token, target, "not a real number literal")


def _is_special(token: str) -> bool:
    return token.lstrip("+-")[:1].lower() in ("i", "n")


class FloatParser(ScalarParser):
    """Double precision; a finite literal that rounds to infinity is an overflow."""

    targets: ClassVar = (float, f64)
    numeric: ClassVar = True

    @classmethod
    def parse_token(cls, token: str) -> float:
        _check(_REAL, token, float)
        value = float(token)
        if math.isinf(value) and not _is_special(token):
            raise ConversionFailure(token, float, "overflows f64")
        return value


class Float32Parser(ScalarParser):
    """Single precision; values are rounded through the 4-byte encoding."""

    targets: ClassVar = (f32,)
    numeric: ClassVar = True

    @classmethod
    def parse_token(cls, token: str) -> float:
        _check(_REAL, token, f32)
        value = float(token)
        if math.isinf(value) and not _is_special(token):
            raise ConversionFailure(token, f32, "overflows f32")
        try:
            return struct.unpack("<f", struct.pack("<f", value))[0]
        except OverflowError as e:
            raise ConversionFailure(token, f32, "overflows f32") from e


class DecimalParser(ScalarParser):
    targets: ClassVar = (Decimal,)
    numeric: ClassVar = True

    @classmethod
    def parse_token(cls, token: str) -> Decimal:
        _check(_REAL, token, Decimal)
        try:
            return Decimal(token)
        except InvalidOperation as e:
            raise ConversionFailure(token, Decimal, "invalid decimal literal") from e


class FractionParser(ScalarParser):
    """Exact rationals written as `p/q` or as a finite decimal literal."""

    targets: ClassVar = (Fraction,)
    numeric: ClassVar = True

    @classmethod
    def parse_token(cls, token: str) -> Fraction:
        _check(_RATIO, token, Fraction)
        try:
            return Fraction(token)
        except ZeroDivisionError as e:
            raise ConversionFailure(token, Fraction, "zero denominator") from e
