"""Tests for AsyncResult."""

import asyncio
import inspect

import pytest

from carton import AsyncOption, AsyncResult, Err, Nothing, Ok, Result, Some


async def ok_later(value) -> Result:
    await asyncio.sleep(0)
    return Ok(value)


async def err_later(error) -> Result:
    await asyncio.sleep(0)
    return Err(error)


class TestAsyncResultAwait:
    """Tests for constructing and awaiting AsyncResult."""

    async def test_await_ok(self):
        assert await AsyncResult(ok_later(42)) == Ok(42)

    async def test_await_err(self):
        assert await AsyncResult(err_later('error')) == Err('error')

    async def test_from_ok(self):
        assert await AsyncResult.from_ok(42) == Ok(42)

    async def test_from_err(self):
        assert await AsyncResult.from_err('error') == Err('error')

    async def test_from_result(self):
        err = Err('error')
        assert await AsyncResult.from_result(err) is err

    async def test_to_async(self, sample_ok, sample_err):
        assert await sample_ok.to_async() is sample_ok
        assert await sample_err.to_async() is sample_err

    async def test_falsy_error_stays_err(self, payload):
        assert (await AsyncResult(err_later(payload))).is_err()


class TestAsyncResultSettleOnce:
    """Awaiting the same AsyncResult repeatedly runs the chain once."""

    async def test_repeated_await_is_idempotent(self):
        calls = []

        def record(x):
            calls.append(x)
            return Ok(x + 1)

        wrapped = AsyncResult.from_ok(1).and_then(record)
        assert await wrapped == Ok(2)
        assert await wrapped == Ok(2)
        assert calls == [1]

    async def test_concurrent_awaiters_share_settlement(self):
        calls = 0

        async def source():
            nonlocal calls
            calls += 1
            await asyncio.sleep(0.01)
            return Ok('shared')

        wrapped = AsyncResult(source())

        async def read():
            return await wrapped

        results = await asyncio.gather(*(read() for _ in range(5)))
        assert all(r == Ok('shared') for r in results)
        assert calls == 1

    async def test_stored_exception_reraised(self):
        async def broken():
            raise ConnectionError('down')

        wrapped = AsyncResult(broken()).map(lambda x: x)
        with pytest.raises(ConnectionError) as first:
            await wrapped
        with pytest.raises(ConnectionError) as second:
            await wrapped
        assert second.value is first.value


class TestAsyncResultTransform:
    """Tests for map, map_err, inspect, inspect_err."""

    async def test_map_ok(self):
        assert await AsyncResult.from_ok(5).map(lambda x: x * 2) == Ok(10)

    async def test_map_async_function(self):
        async def double(x: int) -> int:
            await asyncio.sleep(0)
            return x * 2

        assert await AsyncResult.from_ok(5).map(double) == Ok(10)

    async def test_map_err_preserves_identity(self, sample_err):
        calls = []
        result = await sample_err.to_async().map(calls.append)
        assert result is sample_err
        assert calls == []

    async def test_map_err(self):
        assert await AsyncResult.from_err('error').map_err(str.upper) == Err('ERROR')
        assert await AsyncResult.from_ok(42).map_err(str.upper) == Ok(42)

    async def test_map_err_async_function(self):
        async def wrap(error: str) -> ValueError:
            return ValueError(error)

        result = await AsyncResult.from_err('bad').map_err(wrap)
        assert isinstance(result.error, ValueError)

    async def test_map_exception_propagates(self):
        with pytest.raises(KeyError):
            await AsyncResult.from_ok({}).map(lambda d: d['missing'])

    async def test_inspect(self):
        seen = []
        assert await AsyncResult.from_ok(1).inspect(seen.append) == Ok(1)
        assert await AsyncResult.from_err('e').inspect(seen.append) == Err('e')
        assert seen == [1]

    async def test_inspect_err(self):
        seen = []
        assert await AsyncResult.from_err('e').inspect_err(seen.append) == Err('e')
        assert await AsyncResult.from_ok(1).inspect_err(seen.append) == Ok(1)
        assert seen == ['e']


class TestAsyncResultCombinators:
    """Tests for and_, and_then, or_, or_else."""

    async def test_and_then_sync_return(self):
        def validate(x: int) -> Result[int, str]:
            return Ok(x) if x > 0 else Err('not positive')

        assert await AsyncResult.from_ok(5).and_then(validate) == Ok(5)
        assert await AsyncResult.from_ok(-5).and_then(validate) == Err('not positive')

    async def test_and_then_awaitable_return(self):
        assert await AsyncResult.from_ok(5).and_then(ok_later) == Ok(5)

    async def test_and_then_async_result_return(self):
        result = await AsyncResult.from_ok(5).and_then(lambda x: AsyncResult(err_later(f'bad {x}')))
        assert result == Err('bad 5')

    async def test_and_then_err_short_circuits(self):
        calls = []
        err = Err('original')
        result = await err.to_async().and_then(lambda x: calls.append(x) or Ok(x))
        assert result is err
        assert calls == []

    async def test_and(self):
        assert await AsyncResult.from_ok(1).and_(Ok('b')) == Ok('b')
        assert await AsyncResult.from_ok(1).and_(err_later('late')) == Err('late')
        assert await AsyncResult.from_err('first').and_(Ok('b')) == Err('first')

    async def test_or(self):
        assert await AsyncResult.from_ok(1).or_(Ok(2)) == Ok(1)
        assert await AsyncResult.from_err('e').or_(ok_later(2)) == Ok(2)

    async def test_or_else_receives_error(self):
        assert await AsyncResult.from_err('boom').or_else(lambda e: Ok(len(e))) == Ok(4)
        assert await AsyncResult.from_err('boom').or_else(lambda e: err_later(e.upper())) == Err('BOOM')

    async def test_or_else_ok_passes_through(self):
        calls = []
        assert await AsyncResult.from_ok(1).or_else(lambda e: calls.append(e) or Ok(0)) == Ok(1)
        assert calls == []

    async def test_error_identity_through_chain(self):
        error = ValueError('kept')
        result = await AsyncResult(err_later(error)).map(str).and_then(ok_later).inspect(print)
        assert result.unwrap_err() is error


class TestAsyncResultConversion:
    """Tests for ok(), err(), unwrap_or, unwrap_or_else."""

    async def test_ok_projection(self):
        projected = AsyncResult.from_ok(1).ok()
        assert isinstance(projected, AsyncOption)
        assert await projected == Some(1)
        assert await AsyncResult.from_err('e').ok() is Nothing

    async def test_err_projection(self):
        assert await AsyncResult.from_err('e').err() == Some('e')
        assert await AsyncResult.from_ok(1).err() is Nothing

    async def test_unwrap_or(self):
        assert await AsyncResult.from_ok(1).unwrap_or(0) == 1
        assert await AsyncResult.from_err('e').unwrap_or(0) == 0

    async def test_unwrap_or_else(self):
        assert await AsyncResult(ok_later(1)).unwrap_or_else(len) == 1
        assert await AsyncResult(err_later('boom')).unwrap_or_else(len) == 4


class TestAsyncResultWithAnyio:
    """AsyncResult settles under anyio task groups too."""

    async def test_task_group_awaiters(self):
        import anyio

        calls = 0

        async def source():
            nonlocal calls
            calls += 1
            await anyio.sleep(0.01)
            return Ok('tg')

        wrapped = AsyncResult(source())
        seen = []

        async def read():
            seen.append(await wrapped)

        async with anyio.create_task_group() as tg:
            for _ in range(3):
                tg.start_soon(read)

        assert seen == [Ok('tg')] * 3
        assert calls == 1


class TestAsyncResultUnusedArguments:
    """Coroutines handed to and_/or_ are closed when the chain skips them."""

    async def test_or_closes_unused_coroutine(self):
        fallback = ok_later(2)
        assert await AsyncResult.from_ok(1).or_(fallback) == Ok(1)
        assert inspect.getcoroutinestate(fallback) == inspect.CORO_CLOSED

    async def test_and_closes_unused_coroutine(self):
        follow_up = ok_later(2)
        assert await AsyncResult.from_err('stop').and_(follow_up) == Err('stop')
        assert inspect.getcoroutinestate(follow_up) == inspect.CORO_CLOSED

    async def test_needed_coroutine_is_awaited(self):
        assert await AsyncResult.from_err('e').or_(ok_later(3)) == Ok(3)
