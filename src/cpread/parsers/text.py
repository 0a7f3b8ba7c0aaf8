from __future__ import annotations

from typing import ClassVar, NewType

from ..core.model import ConversionFailure
from ..core.parser_base import ScalarParser

char = NewType("char", str)


class StrParser(ScalarParser):
    targets: ClassVar = (str,)

    @classmethod
    def parse_token(cls, token: str) -> str:
        return token


class CharParser(ScalarParser):
    targets: ClassVar = (char,)

    @classmethod
    def parse_token(cls, token: str) -> str:
        if len(token) != 1:
            raise ConversionFailure(token, char, f"expected one character, got {len(token)}")
        return token


class BoolParser(ScalarParser):
    targets: ClassVar = (bool,)

    @classmethod
    def parse_token(cls, token: str) -> bool:
        if token == "true":
            return True
        if token == "false":
            return False
        raise ConversionFailure(token, bool, "expected 'true' or 'false'")
