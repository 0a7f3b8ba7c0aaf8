from abc import ABC, abstractmethod
from typing import Any, ClassVar


class ScalarParser(ABC):
    # --- required by subclasses ---
    targets: ClassVar[tuple[Any, ...]]       # types / NewType markers produced
    numeric: ClassVar[bool] = False          # usable with the positive-number filter
    priority: ClassVar[int] = 100            # lower = wins when targets collide

    @classmethod
    @abstractmethod
    def parse_token(cls, token: str) -> Any:
        """Convert one token or raise ConversionFailure."""
        ...

    # --- registry hook ---
    def __init_subclass__(cls, **kw):
        super().__init_subclass__(**kw)
        if cls.__dict__.get("targets"):
            from .registry import _REGISTRY
            _REGISTRY.register(cls)           # noqa: E402
