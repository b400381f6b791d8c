"""
Concurrent reads joined into one result.

Every read passed to ``fan_out`` starts immediately as its own task. The
combined result exists only once all of them finish; the first failure is
re-raised, the remaining reads are cancelled and nothing partial is returned.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar

from locallibrary.core.exceptions import StoreTimeoutException
from locallibrary.logging.setup import get_logger

logger = get_logger(__name__)

P = TypeVar("P")
D = TypeVar("D")

Read = Callable[[], Awaitable[Any]]


async def _bounded(name: str, read: Read, timeout: Optional[float]) -> Any:
    if timeout is None:
        return await read()
    try:
        return await asyncio.wait_for(read(), timeout)
    except asyncio.TimeoutError:
        logger.error(f"Read '{name}' timed out after {timeout}s")
        raise StoreTimeoutException(detail=f"Read '{name}' timed out after {timeout}s")


async def fan_out(reads: Dict[str, Read], timeout: Optional[float] = None) -> Dict[str, Any]:
    """Run named reads concurrently and join their results.

    Args:
        reads: Mapping of result name to a zero-argument coroutine function
        timeout: Optional bound in seconds applied to each read

    Returns:
        Mapping of result name to that read's value

    Raises:
        Whatever the first failing read raised
    """
    tasks = {
        name: asyncio.ensure_future(_bounded(name, read, timeout))
        for name, read in reads.items()
    }
    try:
        results = await asyncio.gather(*tasks.values())
    except BaseException:
        for task in tasks.values():
            if not task.done():
                task.cancel()
        # Collect every outcome, including siblings that failed at the same time,
        # and let cancelled reads release their sessions before propagating
        await asyncio.gather(*tasks.values(), return_exceptions=True)
        raise
    return dict(zip(tasks.keys(), results))


@dataclass
class Aggregate(Generic[P, D]):
    """A parent entity together with the entities that reference it."""

    parent: Optional[P]
    dependents: List[D] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return self.parent is not None


async def aggregate(
    fetch_parent: Callable[[], Awaitable[Optional[P]]],
    fetch_dependents: Callable[[], Awaitable[List[D]]],
    timeout: Optional[float] = None,
) -> Aggregate[P, D]:
    """Fetch a parent and its dependents concurrently.

    A missing parent yields ``Aggregate(parent=None)``; its dependents are
    discarded since nothing downstream may act on them.
    """
    results = await fan_out(
        {"parent": fetch_parent, "dependents": fetch_dependents}, timeout=timeout
    )
    if results["parent"] is None:
        return Aggregate(parent=None, dependents=[])
    return Aggregate(parent=results["parent"], dependents=list(results["dependents"]))
