"""Data model for fluentchain.

Re-exports the recorded-call types:
    from fluentchain.domain import Step, Chain, ChainConsumed
"""
from fluentchain.domain.step import Chain, ChainConsumed, Step
from fluentchain.domain.types import (
    FrozenKeywordArgs,
    KeywordArgs,
    OperationName,
    PositionalArgs,
)

__all__ = [
    "Chain",
    "ChainConsumed",
    "Step",
    "FrozenKeywordArgs",
    "KeywordArgs",
    "OperationName",
    "PositionalArgs",
]
