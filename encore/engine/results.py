"""Action results — success/failure values returned by every mutation entry point.

Expected gameplay failures (not enough money, feature still locked, unknown
id) are values, not exceptions. On failure the state is left untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any


class Failure(Enum):
    """Why an action was rejected."""

    INSUFFICIENT_FUNDS = auto()
    PRECONDITION_NOT_MET = auto()
    NOT_FOUND = auto()


@dataclass(frozen=True)
class ActionResult:
    """Outcome of a mutation. Truthy on success."""

    ok: bool
    failure: Failure | None = None
    message: str = ""
    value: Any = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = None, message: str = "") -> ActionResult:
        return cls(ok=True, message=message, value=value)

    @classmethod
    def fail(cls, failure: Failure, message: str = "") -> ActionResult:
        return cls(ok=False, failure=failure, message=message)


def insufficient_funds(cost: float, money: float) -> ActionResult:
    return ActionResult.fail(
        Failure.INSUFFICIENT_FUNDS,
        f"Need ${cost:,.2f}, have ${money:,.2f}",
    )
