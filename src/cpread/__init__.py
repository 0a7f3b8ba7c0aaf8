"""cpread - type-driven parsing of whitespace-delimited text input."""

from .core.model import (                                             # re-export
    Outcome, CpreadError, IoFailure, ConversionFailure, ArityFailure, UnknownTargetError,
)
from .core.parser_base import ScalarParser
from .core.registry import _REGISTRY, register_scalar                 # singleton
from .core.extract import MAX_TUPLE_ARITY, Shape, extract, extract_outcome, positive_numbers
from .core.tokenizer import tokenize, iter_blocks, next_block
from .core.util import convert_radix, radix
from .io import open_source
from .context import LineIo, BlockIo
from .reader import Io

# Import parsers to trigger registration
from .parsers import (
    i8, i16, i32, i64, i128, isize, u8, u16, u32, u64, u128, usize, f32, f64, char,
)


def open_io(source=None, **kwargs) -> Io:
    """Open an Io over a path, a stream, or stdin (None / "-")."""
    return Io(source, **kwargs)


def parse_token(token: str, target=str):
    """Parse one token with the scalar parser registered for `target`."""
    return Shape.of(target).parsers[0].parse_token(token)


__all__ = [
    "Io", "LineIo", "BlockIo", "open_io", "open_source", "parse_token",
    "Shape", "extract", "extract_outcome", "positive_numbers", "MAX_TUPLE_ARITY",
    "tokenize", "iter_blocks", "next_block", "convert_radix", "radix",
    "ScalarParser", "register_scalar",
    "Outcome", "CpreadError", "IoFailure", "ConversionFailure", "ArityFailure", "UnknownTargetError",
    "i8", "i16", "i32", "i64", "i128", "isize", "u8", "u16", "u32", "u64", "u128", "usize",
    "f32", "f64", "char",
]
