"""
Polling resource controller.

Owns the lifecycle of remote resources shown on screen: fetch on start, on
request change, on refresh and on a fixed interval. Each issued attempt takes
the next value of a per-handle sequence counter and only the attempt holding
the latest value may commit its result, so a slow response to a superseded
request never overwrites a newer one.
"""

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import replace
from typing import Any, Protocol, TypeAlias

from bookingdesk.client.api import FetchError
from bookingdesk.core.models.network import (
    ErrorKind,
    FetchStatus,
    PollSchedule,
    ResourceRequest,
    ResourceState,
)
from bookingdesk.core.models.pagination import PaginationResult
from bookingdesk.core.types import QueryValue

logger = logging.getLogger(__name__)

PayloadParser: TypeAlias = Callable[[Any], Any]
StateCallback: TypeAlias = Callable[[ResourceState], Any]


class ResourceFetcher(Protocol):
    async def fetch(self, request: ResourceRequest) -> dict[str, Any]: ...


class Clock(Protocol):
    async def sleep(self, seconds: float) -> None: ...

    def time(self) -> float: ...


class AsyncioClock:
    """Wall clock backed by the running event loop."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)

    def time(self) -> float:
        return time.time()


class ResourceHandle:
    """A started resource: its current request, state, timer and in-flight attempts."""

    def __init__(
        self,
        controller: "PollingResourceController",
        request: ResourceRequest,
        schedule: PollSchedule | None,
        parse: PayloadParser | None,
    ) -> None:
        self._controller = controller
        self.request = request
        self.schedule = schedule
        self.parse = parse
        self.state = ResourceState()
        self.sequence = 0
        self.stopped = False
        self._timer: asyncio.Task | None = None
        self._attempts: set[asyncio.Task] = set()
        self._callbacks: list[StateCallback] = []

    def __repr__(self) -> str:
        return f"ResourceHandle({self.request.key!r}, status={self.status.value}, seq={self.sequence})"

    @property
    def status(self) -> FetchStatus:
        return self.state.status

    @property
    def data(self) -> Any:
        return self.state.data

    @property
    def error(self) -> str | None:
        return self.state.error

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.state.error_kind

    @property
    def pagination(self) -> PaginationResult | None:
        return self.state.pagination

    @property
    def in_flight(self) -> int:
        return len(self._attempts)

    def register_change_callback(self, callback: StateCallback) -> None:
        self._callbacks.append(callback)

    def refresh(self) -> None:
        self._controller.refresh(self)

    def update_request(
        self, new_request: ResourceRequest | None = None, /, **params: QueryValue | None
    ) -> None:
        self._controller.update_request(self, new_request, **params)

    def stop(self) -> None:
        self._controller.stop(self)


class PollingResourceController:
    """Starts, refreshes, re-targets and stops resource handles."""

    def __init__(self, api: ResourceFetcher, clock: Clock | None = None) -> None:
        """
        Initialize a new instance of the PollingResourceController class.

        Args:
            api: Anything with an async ``fetch(request)``, normally an APIClient
            clock: Time source for poll timers; defaults to asyncio's
        """
        self.api = api
        self.clock = clock or AsyncioClock()
        self._handles: set[ResourceHandle] = set()

    def start(
        self,
        request: ResourceRequest,
        schedule: PollSchedule | None = None,
        parse: PayloadParser | None = None,
    ) -> ResourceHandle:
        """
        Start a resource: fetch it now and, with a schedule, on every interval.

        Must be called from inside a running event loop.

        Args:
            request: The initial request
            schedule: Optional fixed polling interval
            parse: Optional payload parser; parse errors count as decode failures

        Returns:
            A handle for refresh/update_request/stop
        """
        handle = ResourceHandle(self, request, schedule, parse)
        self._handles.add(handle)
        logger.debug(f"Starting {request.key} (schedule={schedule})")

        self._issue(handle)
        if schedule is not None:
            handle._timer = asyncio.create_task(
                self._run_schedule(handle), name=f"poll:{request.key}"
            )
        return handle

    def refresh(self, handle: ResourceHandle) -> None:
        """Fetch the current request out of band. The timer phase is untouched."""
        if handle.stopped:
            logger.warning(f"Ignoring refresh of stopped resource {handle.request.key}")
            return
        self._issue(handle)

    def update_request(
        self,
        handle: ResourceHandle,
        new_request: ResourceRequest | None = None,
        /,
        **params: QueryValue | None,
    ) -> None:
        """
        Replace the handle's request and fetch it immediately.

        Results of attempts issued for the previous request are discarded. The
        timer keeps running on its original phase and re-issues the new request.

        Args:
            handle: The handle to re-target
            new_request: A full replacement request
            params: Query parameters merged into the request; None removes one
        """
        if handle.stopped:
            logger.warning(f"Ignoring update of stopped resource {handle.request.key}")
            return

        request = new_request or handle.request
        if params:
            request = request.with_params(**params)
        handle.request = request
        self._issue(handle)

    def stop(self, handle: ResourceHandle) -> None:
        """Cancel the timer and discard in-flight attempts. Safe to call repeatedly."""
        if handle.stopped:
            return
        handle.stopped = True

        if handle._timer is not None:
            handle._timer.cancel()
            handle._timer = None
        for task in list(handle._attempts):
            task.cancel()

        self._handles.discard(handle)
        logger.debug(f"Stopped {handle.request.key}")

    def stop_all(self) -> None:
        for handle in list(self._handles):
            self.stop(handle)

    def _issue(self, handle: ResourceHandle) -> None:
        handle.sequence += 1
        sequence = handle.sequence
        request = handle.request

        self._transition(handle, replace(handle.state, status=FetchStatus.LOADING))

        task = asyncio.create_task(
            self._attempt(handle, sequence, request), name=f"fetch:{request.key}#{sequence}"
        )
        handle._attempts.add(task)
        task.add_done_callback(handle._attempts.discard)

    async def _attempt(self, handle: ResourceHandle, sequence: int, request: ResourceRequest) -> None:
        try:
            body = await self.api.fetch(request)
            payload, pagination = self._extract(request, body, handle.parse)
        except FetchError as e:
            self._fail(handle, sequence, e)
            return

        if not self._is_current(handle, sequence):
            logger.debug(f"Discarding stale result for {request.key} (seq {sequence})")
            return

        self._transition(
            handle,
            ResourceState(
                status=FetchStatus.READY,
                data=payload,
                pagination=pagination,
                request=request,
                updated_at=self.clock.time(),
            ),
        )

    def _fail(self, handle: ResourceHandle, sequence: int, error: FetchError) -> None:
        if not self._is_current(handle, sequence):
            logger.debug(f"Discarding stale failure for {handle.request.key} (seq {sequence})")
            return

        if error.kind == ErrorKind.DECODE:
            logger.error(f"Malformed response for {handle.request.key}: {error.message}")
        else:
            logger.warning(f"Fetch failed for {handle.request.key}: {error.kind} {error.message}")

        # last known good data and pagination stay in place
        self._transition(
            handle,
            replace(
                handle.state,
                status=FetchStatus.FAILED,
                error=error.message,
                error_kind=error.kind,
                updated_at=self.clock.time(),
            ),
        )

    @staticmethod
    def _extract(
        request: ResourceRequest, body: dict[str, Any], parse: PayloadParser | None
    ) -> tuple[Any, PaginationResult | None]:
        if body.get("success") is False:
            # the server rejected the request; its message is meant for the user
            raise FetchError(ErrorKind.HTTP_4XX, str(body.get("error") or "Request unsuccessful"))

        try:
            payload = body[request.resource_name] if request.resource_name else body
            pagination = (
                PaginationResult.model_validate(body["pagination"]) if body.get("pagination") else None
            )
            if parse is not None:
                payload = parse(payload)
        except (KeyError, TypeError, ValueError) as e:
            raise FetchError(ErrorKind.DECODE, f"Unexpected payload for {request.key}: {e}") from e

        return payload, pagination

    async def _run_schedule(self, handle: ResourceHandle) -> None:
        if handle.schedule is None:
            return
        interval = handle.schedule.interval_seconds

        while not handle.stopped:
            await self.clock.sleep(interval)
            if handle.stopped:
                return
            logger.debug(f"Poll tick for {handle.request.key}")
            self._issue(handle)

    @staticmethod
    def _is_current(handle: ResourceHandle, sequence: int) -> bool:
        return not handle.stopped and sequence == handle.sequence

    def _transition(self, handle: ResourceHandle, state: ResourceState) -> None:
        handle.state = state
        for callback in list(handle._callbacks):
            try:
                callback(state)
            except Exception:
                logger.exception(f"Error in state callback for {handle.request.key}")
