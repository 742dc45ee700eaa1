"""pyvoc - Async Python client for the Volvo On Call vehicle API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyvoc")
except PackageNotFoundError:
    __version__ = "0+local"
from pyvoc.client import VocClient
from pyvoc.config import DeviceProfile, VocConfig
from pyvoc.exceptions import (
    VocAuthenticationError,
    VocConfigError,
    VocError,
    VocHttpError,
    VocOperationCancelledError,
    VocOperationError,
    VocOperationFailedError,
    VocOperationInProgressError,
    VocOperationTimeoutError,
    VocTransportError,
    VocUnauthenticatedError,
    VocUnexpectedStateError,
)
from pyvoc.models import (
    Account,
    OperationBucket,
    OperationState,
    ServiceCommand,
    ServiceOperation,
    Vehicle,
    VehicleAttributes,
    VehicleInfo,
    VehicleRelation,
    VehicleStatus,
)
from pyvoc.session import Session

__all__ = [
    "__version__",
    "Account",
    "DeviceProfile",
    "OperationBucket",
    "OperationState",
    "ServiceCommand",
    "ServiceOperation",
    "Session",
    "Vehicle",
    "VehicleAttributes",
    "VehicleInfo",
    "VehicleRelation",
    "VehicleStatus",
    "VocAuthenticationError",
    "VocClient",
    "VocConfig",
    "VocConfigError",
    "VocError",
    "VocHttpError",
    "VocOperationCancelledError",
    "VocOperationError",
    "VocOperationFailedError",
    "VocOperationInProgressError",
    "VocOperationTimeoutError",
    "VocTransportError",
    "VocUnauthenticatedError",
    "VocUnexpectedStateError",
]
