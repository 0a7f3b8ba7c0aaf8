from __future__ import annotations

import re
from typing import ClassVar, NewType

from ..core.model import ConversionFailure
from ..core.parser_base import ScalarParser

# Fixed-width integer targets. Values are plain ints; the marker only selects
# the range check.
i8 = NewType("i8", int)
i16 = NewType("i16", int)
i32 = NewType("i32", int)
i64 = NewType("i64", int)
i128 = NewType("i128", int)
isize = NewType("isize", int)
u8 = NewType("u8", int)
u16 = NewType("u16", int)
u32 = NewType("u32", int)
u64 = NewType("u64", int)
u128 = NewType("u128", int)
usize = NewType("usize", int)

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")


class IntParser(ScalarParser):
    """Arbitrary-precision decimal integers."""

    targets: ClassVar = (int,)
    numeric: ClassVar = True
    pattern: ClassVar[re.Pattern[str]] = _SIGNED

    @classmethod
    def _digits(cls, token: str, target) -> int:
        if not cls.pattern.fullmatch(token):
            raise ConversionFailure(token, target, "not a decimal integer literal")
        try:
            return int(token)
        except ValueError as e:       # str-digit limit on very long literals
            raise ConversionFailure(token, target, str(e)) from e

    @classmethod
    def parse_token(cls, token: str) -> int:
        return cls._digits(token, int)


class _FixedWidthParser(IntParser):
    bits: ClassVar[int]
    signed: ClassVar[bool]

    @classmethod
    def bounds(cls) -> tuple[int, int]:
        if cls.signed:
            return -(1 << (cls.bits - 1)), (1 << (cls.bits - 1)) - 1
        return 0, (1 << cls.bits) - 1

    @classmethod
    def parse_token(cls, token: str) -> int:
        target = cls.targets[0]
        value = cls._digits(token, target)
        lo, hi = cls.bounds()
        if not lo <= value <= hi:
            raise ConversionFailure(token, target, f"out of range [{lo}, {hi}]")
        return value


def _fixed_width(marker, bits: int, signed: bool) -> type[_FixedWidthParser]:
    return type(_FixedWidthParser)(f"{marker.__name__.capitalize()}Parser", (_FixedWidthParser,), {
        "targets": (marker,),
        "bits": bits,
        "signed": signed,
        "pattern": _SIGNED if signed else _UNSIGNED,
    })


I8Parser = _fixed_width(i8, 8, True)
I16Parser = _fixed_width(i16, 16, True)
I32Parser = _fixed_width(i32, 32, True)
I64Parser = _fixed_width(i64, 64, True)
I128Parser = _fixed_width(i128, 128, True)
ISizeParser = _fixed_width(isize, 64, True)
U8Parser = _fixed_width(u8, 8, False)
U16Parser = _fixed_width(u16, 16, False)
U32Parser = _fixed_width(u32, 32, False)
U64Parser = _fixed_width(u64, 64, False)
U128Parser = _fixed_width(u128, 128, False)
USizeParser = _fixed_width(usize, 64, False)
