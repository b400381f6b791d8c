"""
Test concurrent fan-out, parent/dependents aggregation and guarded delete.
"""
import asyncio
import gc

import pytest

from locallibrary.catalog.services.aggregation import aggregate, fan_out
from locallibrary.catalog.services.guarded_delete import DeleteOutcome, guarded_delete
from locallibrary.core.exceptions import NotFoundException, StoreTimeoutException

pytestmark = pytest.mark.asyncio


def returning(value, delay: float = 0):
    async def read():
        await asyncio.sleep(delay)
        return value

    return read


def failing(exc: Exception, delay: float = 0):
    async def read():
        await asyncio.sleep(delay)
        raise exc

    return read


class TestFanOut:
    """Test joining concurrent reads."""

    async def test_results_keyed_by_name(self):
        results = await fan_out({"a": returning(1), "b": returning([2, 3]), "c": returning(None)})

        assert results == {"a": 1, "b": [2, 3], "c": None}

    async def test_reads_run_concurrently(self):
        started = []
        release = asyncio.Event()

        def waiting(name):
            async def read():
                started.append(name)
                await release.wait()
                return name

            return read

        task = asyncio.ensure_future(fan_out({"a": waiting("a"), "b": waiting("b")}))
        for _ in range(5):
            await asyncio.sleep(0)

        # Both reads started before either finished
        assert sorted(started) == ["a", "b"]
        release.set()
        assert await task == {"a": "a", "b": "b"}

    async def test_first_failure_is_raised(self):
        with pytest.raises(ValueError, match="broken"):
            await fan_out({"ok": returning(1, delay=0.01), "bad": failing(ValueError("broken"))})

    async def test_sibling_cancelled_on_failure(self):
        finished = []

        async def slow():
            await asyncio.sleep(1)
            finished.append("slow")

        with pytest.raises(RuntimeError):
            await fan_out({"slow": slow, "bad": failing(RuntimeError("store down"))})

        await asyncio.sleep(0)
        assert finished == []

    async def test_simultaneous_failures_all_retrieved(self):
        loop = asyncio.get_running_loop()
        unhandled = []
        previous_handler = loop.get_exception_handler()
        loop.set_exception_handler(lambda _, context: unhandled.append(context))
        try:
            with pytest.raises(ValueError):
                await fan_out(
                    {
                        "first": failing(ValueError("first")),
                        "second": failing(KeyError("second")),
                    }
                )
            gc.collect()
            await asyncio.sleep(0)
        finally:
            loop.set_exception_handler(previous_handler)

        assert unhandled == []

    async def test_timeout_raises_store_timeout(self):
        with pytest.raises(StoreTimeoutException) as exc_info:
            await fan_out({"slow": returning(1, delay=1)}, timeout=0.01)

        assert exc_info.value.status_code == 500
        assert exc_info.value.code == "store_timeout"


class TestAggregate:
    """Test fetching a parent with its dependents."""

    async def test_found_with_dependents(self):
        result = await aggregate(returning("author"), returning(["book1", "book2"]))

        assert result.found
        assert result.parent == "author"
        assert result.dependents == ["book1", "book2"]

    async def test_missing_parent_discards_dependents(self):
        result = await aggregate(returning(None), returning(["orphan"]))

        assert not result.found
        assert result.dependents == []

    async def test_dependent_failure_propagates(self):
        with pytest.raises(ConnectionError):
            await aggregate(returning("author"), failing(ConnectionError("lost")))


class TestGuardedDelete:
    """Test deleting a parent only when nothing references it."""

    async def test_deletes_when_no_dependents(self):
        removed = []

        async def remove():
            removed.append("author")

        result = await guarded_delete(returning("author"), returning([]), remove)

        assert result.outcome is DeleteOutcome.DELETED
        assert result.deleted
        assert removed == ["author"]

    async def test_blocked_by_dependents(self):
        removed = []

        async def remove():
            removed.append("author")

        result = await guarded_delete(returning("author"), returning(["Emma"]), remove)

        assert result.outcome is DeleteOutcome.BLOCKED
        assert result.blocked
        assert result.parent == "author"
        assert result.dependents == ["Emma"]
        assert removed == []

    async def test_missing_parent_is_not_found(self):
        async def remove():
            raise AssertionError("remove must not be called")

        result = await guarded_delete(returning(None), returning([]), remove)

        assert result.outcome is DeleteOutcome.NOT_FOUND
        assert not result.deleted

    async def test_removed_concurrently_is_not_found(self):
        async def remove():
            raise NotFoundException()

        result = await guarded_delete(returning("genre"), returning([]), remove)

        assert result.outcome is DeleteOutcome.NOT_FOUND

    async def test_read_failure_aborts_delete(self):
        removed = []

        async def remove():
            removed.append("book")

        with pytest.raises(OSError):
            await guarded_delete(returning("book"), failing(OSError("disk")), remove)

        assert removed == []
