"""Remote command execution and service operation polling.

A command is POSTed once, then its service operation is polled until the
server reports a terminal state. At most one command runs per vehicle:
concurrent submissions of the same command share the running operation.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pyvoc._api.services import fetch_service_operation, submit_command
from pyvoc._constants import DEFAULT_OPERATION_TIMEOUT, DEFAULT_POLL_INTERVAL
from pyvoc._transport import Transport
from pyvoc.exceptions import (
    VocOperationCancelledError,
    VocOperationFailedError,
    VocOperationInProgressError,
    VocOperationTimeoutError,
    VocUnexpectedStateError,
)
from pyvoc.models.operation import OperationBucket, ServiceCommand, ServiceOperation
from pyvoc.models.vehicle import Vehicle

_logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[Any]]
ClockFn = Callable[[], float]


@dataclass(slots=True)
class _PendingOperation:
    """An in-flight command + poll loop for one vehicle."""

    vehicle_id: str
    command: ServiceCommand
    task: asyncio.Task[ServiceOperation] | None = None
    operation_id: str | None = None
    cancel_requested: bool = False


class OperationOrchestrator:
    """Submit remote commands and poll them to completion.

    Parameters
    ----------
    transport : Transport
        Authenticated transport used for every call.
    poll_interval : float
        Seconds to wait after a ``Queued``/``Started`` status before polling again.
    operation_timeout : float or None
        Default deadline in seconds for a poll loop. ``None`` polls until
        a terminal state or a transport error.
    sleep : callable
        Awaitable delay function, ``asyncio.sleep`` by default.
    clock : callable
        Monotonic clock used for the deadline, ``time.monotonic`` by default.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        operation_timeout: float | None = DEFAULT_OPERATION_TIMEOUT,
        sleep: SleepFn | None = None,
        clock: ClockFn | None = None,
    ) -> None:
        self._transport = transport
        self._poll_interval = poll_interval
        self._operation_timeout = operation_timeout
        self._sleep: SleepFn = sleep or asyncio.sleep
        self._clock: ClockFn = clock or time.monotonic
        self._pending: dict[str, _PendingOperation] = {}

    def in_flight(self, vehicle_id: str) -> bool:
        return vehicle_id in self._pending

    async def submit(
        self,
        vehicle: Vehicle,
        command: ServiceCommand = ServiceCommand.UPDATE_STATUS,
        *,
        body: Mapping[str, Any] | None = None,
        timeout: float | None = None,
    ) -> ServiceOperation:
        """Run *command* on *vehicle* and return the terminal service operation.

        If the same command is already running for the vehicle, the caller
        joins it and receives the same outcome; no second command is sent.
        Cancelling one caller does not abort the shared operation.

        Parameters
        ----------
        timeout : float or None
            Deadline for this submission; ``None`` uses the orchestrator default.
            A caller that joins a running operation waits at most *timeout*
            seconds for it; the shared poll loop keeps its own deadline.

        Raises
        ------
        VocOperationInProgressError
            If a *different* command is already running for the vehicle.
        VocOperationFailedError
            If the server reports ``Failed``.
        VocUnexpectedStateError
            If the server reports an unknown status.
        VocOperationTimeoutError
            If the deadline passes while the operation is still pending.
        VocOperationCancelledError
            If :meth:`cancel` was called for the vehicle.
        VocTransportError
            If the POST or any poll fails at the HTTP level.
        """
        # No await between lookup and registration: the guard is atomic.
        pending = self._pending.get(vehicle.id)
        if pending is None:
            pending = self._start(vehicle.id, command, body, timeout)
        elif pending.command != command:
            raise VocOperationInProgressError(vehicle.id, command.value)
        else:
            _logger.debug("Joining pending %s operation for vehicle %s", command.value, vehicle.id)
            return await self._join(pending, timeout)

        assert pending.task is not None  # noqa: S101
        return await asyncio.shield(pending.task)

    def cancel(self, vehicle_id: str) -> bool:
        """Request cancellation of the vehicle's in-flight operation.

        The poll loop stops at its next iteration and every waiter receives
        :class:`VocOperationCancelledError`. Returns ``False`` when nothing
        is running for the vehicle.
        """
        pending = self._pending.get(vehicle_id)
        if pending is None:
            return False
        pending.cancel_requested = True
        _logger.info("Cancellation requested for %s operation on vehicle %s", pending.command.value, vehicle_id)
        return True

    async def aclose(self) -> None:
        """Abort every running poll loop and wait for them to finish."""
        tasks = [p.task for p in self._pending.values() if p.task is not None]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._pending.clear()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _start(
        self,
        vehicle_id: str,
        command: ServiceCommand,
        body: Mapping[str, Any] | None,
        timeout: float | None,
    ) -> _PendingOperation:
        effective_timeout = timeout if timeout is not None else self._operation_timeout
        pending = _PendingOperation(vehicle_id=vehicle_id, command=command)
        self._pending[vehicle_id] = pending
        task = asyncio.create_task(
            self._run(pending, body, effective_timeout),
            name=f"pyvoc-{command.value}-{vehicle_id}",
        )
        pending.task = task
        task.add_done_callback(lambda t: self._release(pending, t))
        return pending

    async def _join(self, pending: _PendingOperation, timeout: float | None) -> ServiceOperation:
        assert pending.task is not None  # noqa: S101
        if timeout is None:
            return await asyncio.shield(pending.task)
        try:
            return await asyncio.wait_for(asyncio.shield(pending.task), timeout)
        except TimeoutError:
            raise VocOperationTimeoutError(pending.operation_id, timeout) from None

    def _discard(self, pending: _PendingOperation) -> None:
        if self._pending.get(pending.vehicle_id) is pending:
            del self._pending[pending.vehicle_id]

    def _release(self, pending: _PendingOperation, task: asyncio.Task[ServiceOperation]) -> None:
        self._discard(pending)
        # Waiters that went away through shield() never retrieve the result.
        if not task.cancelled():
            task.exception()

    def _raise_if_cancelled(self, pending: _PendingOperation) -> None:
        if pending.cancel_requested:
            raise VocOperationCancelledError(pending.operation_id)

    async def _run(
        self,
        pending: _PendingOperation,
        body: Mapping[str, Any] | None,
        timeout: float | None,
    ) -> ServiceOperation:
        try:
            return await self._execute(pending, body, timeout)
        finally:
            self._discard(pending)

    async def _execute(
        self,
        pending: _PendingOperation,
        body: Mapping[str, Any] | None,
        timeout: float | None,
    ) -> ServiceOperation:
        vehicle_id = pending.vehicle_id
        command = pending.command

        _logger.debug("Submitting %s for vehicle %s", command.value, vehicle_id)
        submitted = await submit_command(self._transport, vehicle_id, command, body)
        operation_id = submitted.customer_service_id
        if not operation_id:
            raise VocUnexpectedStateError(None, submitted.status)
        pending.operation_id = operation_id

        started = self._clock()
        polls = 0
        while True:
            self._raise_if_cancelled(pending)
            operation = await fetch_service_operation(self._transport, vehicle_id, operation_id)
            polls += 1
            bucket = operation.bucket
            _logger.debug(
                "Operation %s (%s) on vehicle %s: status=%s poll=%d",
                operation_id,
                command.value,
                vehicle_id,
                operation.status,
                polls,
            )

            if bucket is OperationBucket.SUCCESS:
                _logger.info("Operation %s (%s) completed: %s", operation_id, command.value, operation.status)
                return operation
            if bucket is OperationBucket.FAILURE:
                raise VocOperationFailedError(operation_id, operation.failure_reason)
            if bucket is OperationBucket.UNEXPECTED:
                raise VocUnexpectedStateError(operation_id, operation.status)

            if timeout is not None and self._clock() - started >= timeout:
                raise VocOperationTimeoutError(operation_id, timeout)
            await self._sleep(self._poll_interval)
