"""Fluent deferred call chains over sync and async methods.

Public API:
    wrap: build a ChainableProxy that records calls to a target's methods
    materialize: replay the recorded calls and return the settled result
    steps: inspect what a proxy has recorded so far
    chainable_members: list the members wrap() would intercept
    replay: the underlying sequential executor
    NotCallable: a recorded step did not resolve to a callable at replay
"""
from fluentchain.composable.discovery import RESERVED_NAMES, chainable_members
from fluentchain.composable.executor import NotCallable, replay, settle
from fluentchain.composable.proxy import ChainableProxy, materialize, steps, wrap
from fluentchain.domain.step import Chain, ChainConsumed, Step

__all__ = [
    "RESERVED_NAMES",
    "Chain",
    "ChainConsumed",
    "ChainableProxy",
    "NotCallable",
    "Step",
    "chainable_members",
    "materialize",
    "replay",
    "settle",
    "steps",
    "wrap",
]
