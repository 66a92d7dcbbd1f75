import asyncio
import heapq
import itertools
from collections.abc import Callable
from typing import Any

from bookingdesk.client.api import FetchError
from bookingdesk.core.models.network import ResourceRequest

TENANT_HEADERS = {"x-tenant-subdomain": "demo"}


async def settle(rounds: int = 10) -> None:
    """Let ready tasks run without advancing any clock."""
    for _ in range(rounds):
        await asyncio.sleep(0)


async def wait_until(predicate: Callable[[], bool], timeout: float = 5.0) -> None:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met in time")
        await asyncio.sleep(0.001)


class ManualClock:
    """Clock whose sleepers only wake when the test advances time."""

    def __init__(self) -> None:
        self.now = 0.0
        self._sleepers: list[tuple[float, int, asyncio.Future]] = []
        self._order = itertools.count()

    def time(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        future = asyncio.get_running_loop().create_future()
        heapq.heappush(self._sleepers, (self.now + seconds, next(self._order), future))
        await future

    @property
    def pending(self) -> int:
        return sum(1 for _, _, future in self._sleepers if not future.done())

    async def advance(self, seconds: float) -> None:
        target = self.now + seconds
        await settle()
        while self._sleepers and self._sleepers[0][0] <= target:
            wake_at, _, future = heapq.heappop(self._sleepers)
            self.now = wake_at
            if not future.done():
                future.set_result(None)
            await settle()
        self.now = target


class ScriptedFetcher:
    """Fetcher whose responses are resolved by the test, in any order."""

    def __init__(self) -> None:
        self.calls: list[tuple[ResourceRequest, asyncio.Future]] = []

    async def fetch(self, request: ResourceRequest) -> dict[str, Any]:
        future = asyncio.get_running_loop().create_future()
        self.calls.append((request, future))
        return await future

    def request(self, index: int) -> ResourceRequest:
        return self.calls[index][0]

    def resolve(self, index: int, body: dict[str, Any]) -> None:
        future = self.calls[index][1]
        if not future.done():
            future.set_result(body)

    def fail(self, index: int, error: FetchError) -> None:
        future = self.calls[index][1]
        if not future.done():
            future.set_exception(error)
