"""Variant of `sigdefs.samples.bar` whose arithmetic takes no argument."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Final

from ..errors import raise_parameter_error

logger = logging.getLogger(__name__)

# printed by do_the_thing
GREETING: Final[str] = "hey"


@dataclass(frozen=True)
class Bar:
    """Sample record, variant."""

    # always 5
    X: ClassVar[int] = 5

    # typed, fixed at construction
    bar: int = 0
    _foo: object = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.bar, bool) or not isinstance(self.bar, int):
            raise_parameter_error(
                detail=f"bar must be an int, got {type(self.bar).__name__}"
            )

    # prints the greeting
    # and needs no instance
    @staticmethod
    def do_the_thing() -> None:
        logger.debug("Bar.do_the_thing called")
        print(GREETING)

    # always ten
    def ten(self) -> int:
        return 10

    # read-only
    @property
    def foo(self) -> object:
        return self._foo
