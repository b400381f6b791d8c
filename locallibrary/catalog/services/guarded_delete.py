import enum
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Generic, List, Optional

from locallibrary.catalog.services.aggregation import D, P, aggregate
from locallibrary.core.exceptions import NotFoundException
from locallibrary.logging.setup import get_logger

logger = get_logger(__name__)


class DeleteOutcome(str, enum.Enum):
    DELETED = "deleted"
    BLOCKED = "blocked"
    NOT_FOUND = "not_found"


@dataclass
class DeleteResult(Generic[P, D]):
    outcome: DeleteOutcome
    parent: Optional[P] = None
    dependents: List[D] = field(default_factory=list)

    @property
    def deleted(self) -> bool:
        return self.outcome is DeleteOutcome.DELETED

    @property
    def blocked(self) -> bool:
        return self.outcome is DeleteOutcome.BLOCKED


async def guarded_delete(
    fetch_parent: Callable[[], Awaitable[Optional[P]]],
    fetch_dependents: Callable[[], Awaitable[List[D]]],
    remove: Callable[[], Awaitable[Any]],
    timeout: Optional[float] = None,
) -> DeleteResult[P, D]:
    """Delete a parent only when nothing references it.

    The dependent check and the removal are separate store calls, not one
    transaction: a dependent created between them is not detected.

    Args:
        fetch_parent: Reads the parent, returning None when it does not exist
        fetch_dependents: Reads every entity referencing the parent
        remove: Deletes the parent
        timeout: Optional bound for each of the two reads

    Returns:
        DELETED, BLOCKED with the blocking dependents, or NOT_FOUND
    """
    result = await aggregate(fetch_parent, fetch_dependents, timeout=timeout)

    if not result.found:
        return DeleteResult(outcome=DeleteOutcome.NOT_FOUND)

    if result.dependents:
        logger.info(
            f"Refusing to delete {result.parent!r}: {len(result.dependents)} dependent(s)"
        )
        return DeleteResult(
            outcome=DeleteOutcome.BLOCKED,
            parent=result.parent,
            dependents=result.dependents,
        )

    try:
        await remove()
    except NotFoundException:
        # Removed by someone else after the check
        return DeleteResult(outcome=DeleteOutcome.NOT_FOUND)

    logger.info(f"Deleted {result.parent!r}")
    return DeleteResult(outcome=DeleteOutcome.DELETED, parent=result.parent)
