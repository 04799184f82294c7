"""Tests for ChainableProxy, wrap() and materialize()."""
from __future__ import annotations

import inspect

import pytest

from fluentchain.composable import (
    ChainableProxy,
    ChainConsumed,
    NotCallable,
    materialize,
    steps,
    wrap,
)

from tests.composable.targets import Counter, Snapshot


class TestRecording:
    """Calls on the proxy are recorded, never executed."""

    def test_wrap_returns_proxy(self, counter):
        assert isinstance(wrap(counter), ChainableProxy)

    def test_chaining_returns_same_proxy(self, counter):
        proxy = wrap(counter)
        assert proxy.add(1) is proxy
        assert proxy.add_later(2) is proxy
        assert proxy.add(1).add_later(2) is proxy

    def test_recording_does_not_touch_target(self, counter):
        wrap(counter).add(5).double().add_later(1).reset()
        assert counter.value == 0
        assert counter.history == []

    def test_recording_async_method_creates_no_coroutine(self, counter):
        # A never-awaited coroutine would only warn; recording must not call it.
        proxy = wrap(counter).add_later(3)
        assert steps(proxy)[0].name == "add_later"
        assert counter.history == []

    def test_steps_records_names_and_arguments(self, counter):
        proxy = wrap(counter).add(2).scale(3, offset=1).double()
        recorded = steps(proxy)
        assert [s.name for s in recorded] == ["add", "scale", "double"]
        assert recorded[0].args == (2,)
        assert recorded[1].args == (3,)
        assert dict(recorded[1].kwargs) == {"offset": 1}

    def test_each_proxy_owns_its_chain(self, counter):
        first = wrap(counter).add(1)
        second = wrap(counter).double()
        assert [s.name for s in steps(first)] == ["add"]
        assert [s.name for s in steps(second)] == ["double"]

    def test_stub_keeps_metadata(self, counter):
        proxy = wrap(counter)
        assert proxy.scale.__name__ == "scale"
        assert list(inspect.signature(proxy.scale).parameters) == ["factor", "offset"]

    def test_repr(self, counter):
        proxy = wrap(counter).add(1).double()
        assert repr(proxy) == "<ChainableProxy of Counter with 2 recorded steps>"


class TestAttributeAccess:

    def test_non_callable_field_reads_through(self, counter):
        counter.value = 11
        proxy = wrap(counter)
        assert proxy.value == 11
        assert proxy.unit == "items"
        assert proxy.history == []

    def test_property_reads_through(self):
        proxy = wrap(Counter(4))
        assert proxy.doubled == 8

    def test_field_is_not_a_stub(self, counter):
        proxy = wrap(counter)
        assert not callable(proxy.value)
        assert steps(proxy) == ()

    def test_missing_attribute(self, counter):
        with pytest.raises(AttributeError):
            wrap(counter).nope

    def test_private_method_exposed_by_default(self, counter):
        proxy = wrap(counter)
        assert proxy._bump() is proxy
        assert counter.value == 0

    def test_private_method_hidden_on_request(self, counter):
        with pytest.raises(AttributeError, match="_bump"):
            wrap(counter, exclude_private=True)._bump

    def test_exclude_private_is_keyword_only(self, counter):
        with pytest.raises(TypeError):
            ChainableProxy(counter, True)


class TestMaterialize:

    @pytest.mark.asyncio
    async def test_empty_chain_returns_target(self, counter):
        assert await materialize(wrap(counter)) is counter

    @pytest.mark.asyncio
    async def test_matches_manual_application(self):
        manual = Counter()
        r1 = manual.add(1)
        r2 = await r1.add_later(2)

        wrapped = Counter()
        result = await materialize(wrap(wrapped).add(1).add_later(2))

        assert result is wrapped
        assert wrapped.value == r2.value == 3
        assert wrapped.history == manual.history

    @pytest.mark.asyncio
    async def test_order_sensitivity(self):
        a = await materialize(wrap(Counter()).add(1).double())
        b = await materialize(wrap(Counter()).double().add(1))
        assert a.value == 2
        assert b.value == 1

    @pytest.mark.asyncio
    async def test_mixed_sync_and_async(self, counter):
        result = await materialize(
            wrap(counter).add(1).double_later().add_later(3).double().scale(2, offset=1)
        )
        assert result.value == 21
        assert counter.history == ["add 1", "double_later", "add_later 3", "double"]

    @pytest.mark.asyncio
    async def test_shape_change(self, counter):
        result = await materialize(wrap(counter).add(2).freeze_later())
        assert isinstance(result, Snapshot)
        assert result.describe() == "snapshot=2"

    def test_step_missing_on_target_is_not_recordable(self, counter):
        # Only the wrapped type's members get stubs.
        with pytest.raises(AttributeError, match="describe_later"):
            wrap(counter).freeze_later().describe_later

    @pytest.mark.asyncio
    async def test_private_step_replayed(self, counter):
        result = await materialize(wrap(counter)._bump().add(1))
        assert result.value == 101

    @pytest.mark.asyncio
    async def test_shape_change_failure_names_step(self, counter):
        with pytest.raises(NotCallable) as exc_info:
            await materialize(wrap(counter).freeze().double())
        assert exc_info.value.name == "double"
        assert exc_info.value.receiver_type is Snapshot

    @pytest.mark.asyncio
    async def test_operation_error_propagates(self, counter):
        with pytest.raises(RuntimeError, match="async failure"):
            await materialize(wrap(counter).add(1).fail_later().add(1))
        assert counter.value == 1

    @pytest.mark.asyncio
    async def test_await_proxy_directly(self, counter):
        result = await wrap(counter).add(2).double_later()
        assert result is counter
        assert counter.value == 4

    @pytest.mark.asyncio
    async def test_staticmethod_step(self, counter):
        counter.value = 9
        result = await wrap(counter).zero().add(1)
        assert result is not counter
        assert result.value == 1
        assert counter.value == 9


class TestConsumption:

    @pytest.mark.asyncio
    async def test_second_materialize_raises(self, counter):
        proxy = wrap(counter).add(1)
        await materialize(proxy)
        with pytest.raises(ChainConsumed):
            await materialize(proxy)
        assert counter.value == 1

    @pytest.mark.asyncio
    async def test_chaining_after_materialize_raises(self, counter):
        proxy = wrap(counter)
        await proxy
        with pytest.raises(ChainConsumed):
            proxy.add(1)

    @pytest.mark.asyncio
    async def test_failed_materialize_still_consumes(self, counter):
        proxy = wrap(counter).fail()
        with pytest.raises(ValueError):
            await proxy
        with pytest.raises(ChainConsumed):
            await proxy

    @pytest.mark.asyncio
    async def test_fresh_proxy_after_consumption(self, counter):
        await wrap(counter).add(1)
        await wrap(counter).add(1)
        assert counter.value == 2
