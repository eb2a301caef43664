from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from govind.core.models import TimeRange

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)
R = TypeVar("R")


# ---------------------------------------------------------------------------
# IRpcProvider
# ---------------------------------------------------------------------------

@runtime_checkable
class IRpcProvider(Protocol):
    """
    JSON-RPC shaped capability used by every chain query.

    Domain expectations:
    - `request` returns the `result` member of the JSON-RPC response.
    - Transport retries, if any, are the implementation's business.
    """

    async def request(self, method: str, params: Sequence[Any] | None = None) -> Any:
        """
        Issue one JSON-RPC call and return its result.

        Implementations:
        - `RpcProvider` (httpx)
        - In-memory / AsyncMock provider for testing
        """
        ...


# ---------------------------------------------------------------------------
# ITaskQueue
# ---------------------------------------------------------------------------

@runtime_checkable
class ITaskQueue(Protocol[T_co]):
    """
    Anything the dispatcher can drain.

    `pop` and `peek` return the queue's empty sentinel instead of raising.
    """

    def pop(self) -> T_co | Any:
        ...

    def peek(self) -> T_co | Any:
        ...


# A task runner executes one queued task; for event fetching the task is a TimeRange.
TaskRunner = Callable[[T], Awaitable[R]]
TimeRangeRunner = Callable[[TimeRange], Awaitable[Any]]
