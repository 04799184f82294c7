"""Shared fixtures for the composable tests."""
from __future__ import annotations

import pytest

from tests.composable.targets import Counter


@pytest.fixture()
def counter() -> Counter:
    return Counter()
