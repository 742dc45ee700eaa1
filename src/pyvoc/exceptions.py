"""Custom exception hierarchy for pyvoc."""

from __future__ import annotations

from typing import Any


class VocError(Exception):
    """Base exception for all pyvoc errors."""


class VocConfigError(VocError):
    """Invalid or missing configuration."""


class VocUnauthenticatedError(VocError):
    """A request was attempted before a credential was set.

    This is a programming error: call :meth:`RestTransport.authenticate`
    (or :meth:`VocClient.login`) first.
    """


class VocTransportError(VocError):
    """HTTP-level failure (network, timeout, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class VocHttpError(VocTransportError):
    """Response status code outside 200..299."""

    def __init__(self, status_code: int, endpoint: str) -> None:
        super().__init__(
            f"HTTP {status_code} from {endpoint}",
            status_code=status_code,
            endpoint=endpoint,
        )


class VocAuthenticationError(VocTransportError):
    """The server rejected the credential during login (HTTP 401/403)."""


class VocOperationError(VocError):
    """A remote service operation did not complete successfully."""

    def __init__(self, message: str, *, operation_id: str | None = None) -> None:
        self.operation_id = operation_id
        super().__init__(message)


class VocOperationFailedError(VocOperationError):
    """The server reported the operation as ``Failed``.

    ``reason`` holds the opaque ``failureReason`` payload verbatim.
    """

    def __init__(self, operation_id: str, reason: Any = None) -> None:
        self.reason = reason
        super().__init__(
            f"Service operation {operation_id} failed: {reason!r}",
            operation_id=operation_id,
        )


class VocUnexpectedStateError(VocOperationError):
    """The server reported a status outside the known set."""

    def __init__(self, operation_id: str | None, state: Any) -> None:
        self.state = state
        super().__init__(
            f"Unexpected service operation status {state!r} (operation {operation_id})",
            operation_id=operation_id,
        )


class VocOperationTimeoutError(VocOperationError):
    """The operation did not reach a terminal state within the deadline."""

    def __init__(self, operation_id: str | None, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            f"Service operation {operation_id} still pending after {timeout:.1f}s",
            operation_id=operation_id,
        )


class VocOperationCancelledError(VocOperationError):
    """The in-flight operation was cancelled by the caller."""

    def __init__(self, operation_id: str | None) -> None:
        super().__init__(
            f"Service operation {operation_id} cancelled",
            operation_id=operation_id,
        )


class VocOperationInProgressError(VocOperationError):
    """Another command is already running for the vehicle."""

    def __init__(self, vehicle_id: str, command: str) -> None:
        self.vehicle_id = vehicle_id
        self.command = command
        super().__init__(f"Vehicle {vehicle_id} already has a pending {command!r} operation")
