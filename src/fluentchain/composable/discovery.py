"""Discovery of the operations a proxy should intercept.

Walks the target's own attributes, then every class in its MRO from
nearest to farthest, and keeps the names whose current value is
callable. The first definition of a name wins, which is the same
precedence normal attribute lookup uses.

What is skipped:
    - dunder names (__init__ and every other protocol hook)
    - single-underscore names, when exclude_private is set
    - properties, cached properties and other descriptors that are not
      methods (never read, so their code never runs)
    - the proxy's own reserved attribute names
    - everything defined on ``object`` itself
"""
from __future__ import annotations

import inspect
import logging
from typing import Any, Iterable, Iterator

from fluentchain.domain.types import OperationName

log = logging.getLogger(__name__)

# Attributes the proxy stores on itself. A target member with one of
# these names cannot be exposed without clobbering the proxy.
RESERVED_NAMES: frozenset[str] = frozenset({"_fc_target", "_fc_chain"})


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _candidate_names(target: Any) -> Iterator[str]:
    """Yield own attribute names, then class attribute names along the MRO."""
    own = getattr(target, "__dict__", None)
    if isinstance(own, dict):
        yield from own

    # A class target lists its own body first, then its bases.
    mro = target.__mro__ if isinstance(target, type) else type(target).__mro__
    for klass in mro:
        if klass is object:
            continue
        yield from vars(klass)


def _is_operation(target: Any, name: str) -> bool:
    """Decide callability from the static attribute, without running it."""
    own = getattr(target, "__dict__", None)
    if isinstance(own, dict) and name in own:
        raw = inspect.getattr_static(target, name)
        if raw is own[name]:
            return callable(raw)

    raw = inspect.getattr_static(target, name, None)
    if isinstance(raw, (staticmethod, classmethod)) or inspect.isroutine(raw):
        return True
    # property, cached_property, slot members and any other descriptor
    # would run code on access.
    if hasattr(type(raw), "__get__"):
        return False
    return callable(raw)


def _dedupe(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    ordered: list[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            ordered.append(name)
    return ordered


def chainable_members(
    target: Any, exclude_private: bool = False
) -> list[OperationName]:
    """Return the names of every interceptable operation on target.

    Names come back in discovery order: own attributes first, then the
    nearest class, then its bases. No attribute is read through its
    descriptor, so properties and cached properties never run.

    Args:
        target: any object, or a class to inspect without instantiating.
        exclude_private: leave ``_single_underscore`` members out.
    """
    members: list[OperationName] = []
    for name in _dedupe(_candidate_names(target)):
        if _is_dunder(name) or name in RESERVED_NAMES:
            continue
        if exclude_private and name.startswith("_"):
            continue
        if _is_operation(target, name):
            members.append(name)

    log.debug(
        "Discovered %d chainable members on %s",
        len(members), type(target).__name__,
    )
    return members
