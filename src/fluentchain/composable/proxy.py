"""ChainableProxy -- records method calls instead of running them.

wrap(target) discovers the target's callable members and installs a
recording stub for each one on a fresh proxy. Calling a stub appends a
Step to the proxy's Chain and returns the proxy, so calls chain:

    proxy = wrap(builder)
    proxy.select("a").where(x=1).limit(10)   # nothing has run yet
    result = await proxy                      # replay happens here

Nothing on the target is touched while recording. Non-callable members
read through to the target, so ``proxy.some_field`` still works.

A proxy materializes once. After that its chain is closed: another
call on a stub, another await, or another materialize() raises
ChainConsumed.
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Callable, Generator, Generic, TypeVar

from fluentchain.composable.discovery import chainable_members
from fluentchain.composable.executor import replay
from fluentchain.domain.step import Chain, Step

log = logging.getLogger(__name__)

T = TypeVar("T")


class ChainableProxy(Generic[T]):
    """Stand-in for a target whose method calls are deferred.

    Args:
        target: the object to wrap.
        exclude_private: leave ``_single_underscore`` members out.
    """

    def __init__(self, target: T, *, exclude_private: bool = False) -> None:
        self._fc_target: T = target
        self._fc_chain: Chain = Chain()
        for name in chainable_members(target, exclude_private=exclude_private):
            setattr(self, name, _recording_stub(self, name))

    def __getattr__(self, name: str) -> Any:
        # Only reached for names that are not stubs or proxy internals.
        if name.startswith("_fc_"):
            raise AttributeError(name)
        value = getattr(self._fc_target, name)
        if callable(value):
            raise AttributeError(
                f"{name!r} is not a chainable member of "
                f"{type(self._fc_target).__name__}"
            )
        return value

    def __await__(self) -> Generator[Any, None, Any]:
        return materialize(self).__await__()

    def __repr__(self) -> str:
        return (
            f"<ChainableProxy of {type(self._fc_target).__name__} "
            f"with {len(self._fc_chain)} recorded steps>"
        )


def _recording_stub(
    proxy: ChainableProxy[T], name: str
) -> Callable[..., ChainableProxy[T]]:
    """Build the stub installed on proxy for the target member ``name``."""
    chain: Chain = proxy._fc_chain
    original = getattr(proxy._fc_target, name)

    @functools.wraps(original)
    def stub(*args: Any, **kwargs: Any) -> ChainableProxy[T]:
        chain.append(name, args, kwargs)
        return proxy

    return stub


def wrap(target: T, *, exclude_private: bool = False) -> ChainableProxy[T]:
    """Build a proxy that records calls to target's methods."""
    return ChainableProxy(target, exclude_private=exclude_private)


def steps(proxy: ChainableProxy[Any]) -> tuple[Step, ...]:
    """Return the steps recorded on proxy so far, in call order."""
    return tuple(proxy._fc_chain)


async def materialize(proxy: ChainableProxy[Any]) -> Any:
    """Replay every recorded call and return the final settled value.

    Consumes the proxy: the chain is closed before the first step runs,
    so a failed replay cannot be retried on the same proxy.

    Raises:
        ChainConsumed: the proxy was already materialized.
        NotCallable: a step's name did not resolve to a callable.
    """
    recorded = proxy._fc_chain.drain()
    log.debug(
        "Materializing %d steps on %s",
        len(recorded), type(proxy._fc_target).__name__,
    )
    return await replay(proxy._fc_target, recorded)
