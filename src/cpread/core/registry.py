from __future__ import annotations
import bisect
import itertools
import logging
import warnings
from collections import defaultdict
from typing import Any, Callable, Dict, List, Type

from .parser_base import ScalarParser
from .model import ConversionFailure, UnknownTargetError

log = logging.getLogger(__name__)


def _target_name(target: Any) -> str:
    return getattr(target, "__name__", repr(target))


class ParserRegistry:
    def __init__(self) -> None:
        self._by_target: Dict[Any, List[tuple[int, int, Type[ScalarParser]]]] = defaultdict(list)
        self._seq = itertools.count()

    # called from ScalarParser.__init_subclass__
    def register(self, parser_cls: Type[ScalarParser]) -> None:
        # (priority, -seq, cls): at equal priority the newest registration wins
        entry = (parser_cls.priority, -next(self._seq), parser_cls)
        for target in parser_cls.targets:
            existing = self._by_target[target]
            previous = existing[0][2] if existing else None
            bisect.insort(existing, entry)
            if previous is not None:
                if existing[0][2] is parser_cls:
                    outcome = f"replacing {previous.__name__}"
                else:
                    outcome = f"{previous.__name__} keeps precedence"
                warnings.warn(f"{parser_cls.__name__} registered for {_target_name(target)}, {outcome}")
            log.debug("registered %s for %s", parser_cls.__name__, _target_name(target))

    def unregister(self, parser_cls: Type[ScalarParser]) -> None:
        for target in parser_cls.targets:
            entries = self._by_target.get(target, [])
            entries[:] = [e for e in entries if e[2] is not parser_cls]
            if not entries:
                self._by_target.pop(target, None)

    def __contains__(self, target: object) -> bool:
        return bool(self._by_target.get(target))

    def lookup(self, target: Any):
        """Return the parser for `target`.

        Registered targets win; otherwise any object exposing a callable
        `parse_token` is its own parser.
        """
        entries = self._by_target.get(target)
        if entries:
            return entries[0][2]
        if callable(getattr(target, "parse_token", None)):
            return target
        raise UnknownTargetError(f"No scalar parser for {_target_name(target)}")


# singleton used project-wide
_REGISTRY = ParserRegistry()


def register_scalar(
    target: Any,
    func: Callable[[str], Any],
    *,
    numeric: bool = False,
    priority: int = 100,
) -> Type[ScalarParser]:
    """Make `target` extractable by converting tokens with `func`.

    `ValueError` and `ArithmeticError` raised by `func` become
    `ConversionFailure`.
    """
    def parse_token(cls, token: str) -> Any:
        try:
            return func(token)
        except ConversionFailure:
            raise
        except (ValueError, ArithmeticError) as e:
            raise ConversionFailure(token, target, str(e) or type(e).__name__) from e

    name = f"{_target_name(target).title().replace('_', '')}Parser"
    return type(ScalarParser)(name, (ScalarParser,), {
        "targets": (target,),
        "numeric": numeric,
        "priority": priority,
        "parse_token": classmethod(parse_token),
    })
