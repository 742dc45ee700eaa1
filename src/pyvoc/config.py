"""Client configuration for pyvoc."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyvoc._constants import (
    DEFAULT_OPERATION_TIMEOUT,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_REGION,
    DEFAULT_REQUEST_TIMEOUT,
    DEVICE_ID,
    ORIGINATOR_TYPE,
    OS_TYPE,
    OS_VERSION,
    USER_AGENT,
    build_base_url,
)
from pyvoc.exceptions import VocConfigError


def _env_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise VocConfigError(f"{name} must be a number, got {value!r}") from exc


def _env_optional_float(name: str, value: str) -> float | None:
    normalized = value.strip().lower()
    if normalized in {"", "0", "none", "off"}:
        return None
    return _env_float(name, normalized)


@dataclasses.dataclass(frozen=True)
class DeviceProfile:
    """Client identification sent as headers with every request."""

    user_agent: str = USER_AGENT
    device_id: str = DEVICE_ID
    os_type: str = OS_TYPE
    os_version: str = OS_VERSION
    originator_type: str = ORIGINATOR_TYPE

    def headers(self) -> dict[str, str]:
        return {
            "User-Agent": self.user_agent,
            "X-Device-Id": self.device_id,
            "X-OS-Type": self.os_type,
            "X-OS-Version": self.os_version,
            "X-Originator-Type": self.originator_type,
        }


@dataclasses.dataclass(frozen=True)
class VocConfig:
    """Client configuration.

    Parameters
    ----------
    username : str
        Volvo On Call account e-mail.
    password : str
        Volvo On Call account password.
    region : str
        Region selector. ``"eu"`` uses the default host, anything else
        a region-prefixed host (e.g. ``"na"``, ``"cn"``).
    poll_interval : float
        Seconds between two polls of a pending service operation.
    operation_timeout : float or None
        Seconds before a service operation poll loop gives up with
        :class:`~pyvoc.exceptions.VocOperationTimeoutError`.  ``None``
        polls until the server reports a terminal state.
    request_timeout : float
        Total seconds allowed for a single HTTP request.
    device : DeviceProfile
        Client identification headers.
    """

    username: str
    password: str
    region: str = DEFAULT_REGION
    poll_interval: float = DEFAULT_POLL_INTERVAL
    operation_timeout: float | None = DEFAULT_OPERATION_TIMEOUT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    device: DeviceProfile = dataclasses.field(default_factory=DeviceProfile)

    def __post_init__(self) -> None:
        if self.poll_interval < 0:
            raise VocConfigError(f"poll_interval must be >= 0, got {self.poll_interval}")
        if self.operation_timeout is not None and self.operation_timeout <= 0:
            raise VocConfigError(f"operation_timeout must be > 0 or None, got {self.operation_timeout}")
        if self.request_timeout <= 0:
            raise VocConfigError(f"request_timeout must be > 0, got {self.request_timeout}")

    @property
    def base_url(self) -> str:
        return build_base_url(self.region)

    @classmethod
    def from_env(cls, **overrides: Any) -> VocConfig:
        """Create configuration from environment variables.

        Reads ``VOC_USERNAME``, ``VOC_PASSWORD`` and optional ``VOC_*``
        variables. Explicit keyword arguments override environment values.

        Raises
        ------
        VocConfigError
            If a numeric variable cannot be parsed or credentials are missing.
        """
        env = os.environ

        device_kwargs: dict[str, str] = {}
        _ENV_DEVICE_MAP = {
            "VOC_USER_AGENT": "user_agent",
            "VOC_DEVICE_ID": "device_id",
            "VOC_OS_TYPE": "os_type",
            "VOC_OS_VERSION": "os_version",
            "VOC_ORIGINATOR_TYPE": "originator_type",
        }
        for env_key, field_name in _ENV_DEVICE_MAP.items():
            val = env.get(env_key)
            if val is not None:
                device_kwargs[field_name] = val

        device_overrides = overrides.pop("device", None)
        if isinstance(device_overrides, dict):
            device_kwargs.update(device_overrides)
        elif isinstance(device_overrides, DeviceProfile):
            device_kwargs = dataclasses.asdict(device_overrides)

        config_kwargs: dict[str, Any] = {"device": DeviceProfile(**device_kwargs)}

        _ENV_CONFIG_MAP = {
            "VOC_USERNAME": "username",
            "VOC_PASSWORD": "password",
            "VOC_REGION": "region",
        }
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        interval_env = env.get("VOC_POLL_INTERVAL")
        if interval_env is not None and "poll_interval" not in overrides:
            config_kwargs["poll_interval"] = _env_float("VOC_POLL_INTERVAL", interval_env)

        timeout_env = env.get("VOC_OPERATION_TIMEOUT")
        if timeout_env is not None and "operation_timeout" not in overrides:
            config_kwargs["operation_timeout"] = _env_optional_float("VOC_OPERATION_TIMEOUT", timeout_env)

        request_timeout_env = env.get("VOC_REQUEST_TIMEOUT")
        if request_timeout_env is not None and "request_timeout" not in overrides:
            config_kwargs["request_timeout"] = _env_float("VOC_REQUEST_TIMEOUT", request_timeout_env)

        config_kwargs.update(overrides)

        for required in ("username", "password"):
            if not config_kwargs.get(required):
                raise VocConfigError(f"Missing {required} (set VOC_{required.upper()} or pass {required}=)")

        return cls(**config_kwargs)
