"""A small record type: one constant, two read-only fields, two behaviours."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Final

from ..errors import raise_parameter_error

logger = logging.getLogger(__name__)

# printed by do_the_thing
GREETING: Final[str] = "hey"


def _require_int(value: object, *, name: str) -> None:
    # bool is an int subclass but not a valid value here
    if isinstance(value, bool) or not isinstance(value, int):
        raise_parameter_error(
            detail=f"{name} must be an int, got {type(value).__name__}"
        )


@dataclass(frozen=True)
class Bar:
    """Sample record."""

    # always 5
    X: ClassVar[int] = 5

    # typed, fixed at construction
    bar: int = 0
    _foo: object = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        _require_int(self.bar, name="bar")

    # prints the greeting
    # and needs no instance
    @staticmethod
    def do_the_thing() -> None:
        logger.debug("Bar.do_the_thing called")
        print(GREETING)

    # increment
    def add_one(self, x: int) -> int:
        _require_int(x, name="x")
        return x + 1

    # read-only
    @property
    def foo(self) -> object:
        return self._foo
