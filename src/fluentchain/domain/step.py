"""Step and Chain -- the recorded side of a deferred call chain.

A Step is one recorded invocation: the operation name plus the
arguments it was called with. A Chain is the ordered list of Steps
owned by a single proxy. Order is the replay order and never changes.

The chain is append-only until it is drained. drain() hands the whole
sequence to the executor exactly once; after that the chain refuses
both new steps and a second drain. Replaying a chain twice would run
every step against the result of the first replay, not the original
target, so a consumed chain is closed for good.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterator

from fluentchain.domain.types import (
    FrozenKeywordArgs,
    KeywordArgs,
    OperationName,
    PositionalArgs,
)

log = logging.getLogger(__name__)


class ChainConsumed(Exception):
    """Raised when a drained chain is extended or drained again."""


@dataclass(frozen=True, slots=True)
class Step:
    """One recorded call: operation name, positional and keyword args."""

    name: OperationName
    args: PositionalArgs = ()
    kwargs: FrozenKeywordArgs = field(
        default_factory=lambda: MappingProxyType({})
    )

    @classmethod
    def create(
        cls,
        name: OperationName,
        args: PositionalArgs = (),
        kwargs: KeywordArgs | None = None,
    ) -> Step:
        """Factory: snapshot args and kwargs so later caller edits don't leak in."""
        return cls(
            name=name,
            args=tuple(args),
            kwargs=MappingProxyType(dict(kwargs or {})),
        )

    def describe(self) -> str:
        """Render the step as ``name(arg, key=value)``."""
        parts = [repr(a) for a in self.args]
        parts.extend(f"{k}={v!r}" for k, v in self.kwargs.items())
        return f"{self.name}({', '.join(parts)})"


class Chain:
    """Append-only sequence of Steps, consumed exactly once."""

    def __init__(self) -> None:
        self._steps: list[Step] = []
        self._consumed: bool = False

    @property
    def consumed(self) -> bool:
        """True once drain() has been called."""
        return self._consumed

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __getitem__(self, index: int) -> Step:
        return self._steps[index]

    def append(
        self,
        name: OperationName,
        args: PositionalArgs = (),
        kwargs: KeywordArgs | None = None,
    ) -> Step:
        """Record a call at the end of the chain.

        Raises ChainConsumed if the chain has already been drained.
        """
        if self._consumed:
            raise ChainConsumed(
                f"Cannot record {name!r}: chain was already materialized"
            )
        step = Step.create(name, args, kwargs)
        self._steps.append(step)
        log.debug("Recorded step %d: %s", len(self._steps) - 1, step.describe())
        return step

    def drain(self) -> tuple[Step, ...]:
        """Return every step in order and close the chain.

        Raises ChainConsumed on a second call.
        """
        if self._consumed:
            raise ChainConsumed("Chain was already materialized")
        self._consumed = True
        log.debug("Draining chain of %d steps", len(self._steps))
        return tuple(self._steps)
