from __future__ import annotations
import string

from .model import ConversionFailure

DIGITS = string.digits + string.ascii_lowercase
_VALUES = {c: i for i, c in enumerate(DIGITS)}


def _check_base(base: int) -> None:
    if not 2 <= base <= 36:
        raise ValueError(f"base must be in 2..36, got {base}")


def radix(n: int, base: int) -> str:
    """Format an integer in `base` using lowercase digits."""
    _check_base(base)
    if n == 0:
        return "0"
    sign, n = ("-", -n) if n < 0 else ("", n)
    out = []
    while n:
        n, r = divmod(n, base)
        out.append(DIGITS[r])
    return sign + "".join(reversed(out))


def parse_radix(token: str, base: int) -> int:
    """Strictly parse `token` as an integer in `base` (no prefixes or underscores)."""
    _check_base(base)
    body = token[1:] if token[:1] in ("-", "+") else token
    if not body:
        raise ConversionFailure(token, int, f"no digits for base {base}")
    n = 0
    for c in body:
        d = _VALUES.get(c.lower())
        if d is None or d >= base:
            raise ConversionFailure(token, int, f"invalid digit {c!r} for base {base}")
        n = n * base + d
    return -n if token[0] == "-" else n


def convert_radix(token: str, from_base: int, to_base: int) -> str:
    """Re-express `token` (written in `from_base`) in `to_base`."""
    return radix(parse_radix(token, from_base), to_base)
