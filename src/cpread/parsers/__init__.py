"""Built-in scalar parsers for cpread."""

from .integer import IntParser, i8, i16, i32, i64, i128, isize, u8, u16, u32, u64, u128, usize
from .real import FloatParser, Float32Parser, DecimalParser, FractionParser, f32, f64
from .text import StrParser, CharParser, BoolParser, char
