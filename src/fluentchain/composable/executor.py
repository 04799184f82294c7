"""Deferred executor -- replays recorded steps against an evolving result.

Replay is a strict sequential loop:

    current = target
    for step in steps:
        member = getattr(current, step.name)
        current = await-or-identity(member(*step.args, **step.kwargs))
    return current

Each step is looked up on the previous step's settled result, not on
the original target, so a step may change the shape of the receiver
the next step sees. Step k+1 cannot start before step k settles
because its receiver *is* step k's outcome.

Plain return values are used as-is. Awaitable return values
(coroutines, futures, anything with __await__) are awaited, and the
result is awaited again while it is still awaitable, the same way a
promise resolving to another promise flattens.

Errors raised by an operation propagate untouched. A missing or
non-callable member raises NotCallable and stops the replay.
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Iterable

from fluentchain.domain.step import Step

log = logging.getLogger(__name__)


class NotCallable(Exception):
    """A recorded step does not resolve to a callable on its receiver."""

    def __init__(self, name: str, index: int, receiver_type: type) -> None:
        self.name = name
        self.index = index
        self.receiver_type = receiver_type
        super().__init__(
            f"Step {index} {name!r} is not callable on "
            f"{receiver_type.__name__}"
        )


async def settle(outcome: Any) -> Any:
    """Await outcome until it is no longer awaitable; plain values pass through."""
    while inspect.isawaitable(outcome):
        outcome = await outcome
    return outcome


async def replay(target: Any, steps: Iterable[Step]) -> Any:
    """Apply every step in order, starting from target.

    Returns the settled result of the last step, or target itself when
    there are no steps.

    Raises:
        NotCallable: a step's name is missing or not callable on the
            current receiver. Remaining steps are not attempted.
    """
    current = target
    for index, step in enumerate(steps):
        member = getattr(current, step.name, None)
        if not callable(member):
            raise NotCallable(step.name, index, type(current))

        log.debug(
            "Replaying step %d on %s: %s",
            index, type(current).__name__, step.describe(),
        )
        current = await settle(member(*step.args, **step.kwargs))

    return current
