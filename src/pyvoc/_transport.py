"""Authenticated HTTP transport for the Volvo On Call REST API."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp
from multidict import CIMultiDict

from pyvoc._redact import redact_for_log
from pyvoc.config import VocConfig
from pyvoc.exceptions import VocHttpError, VocTransportError, VocUnauthenticatedError
from pyvoc.session import Session

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`RestTransport`) concrete.
    """

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        ...


class RestTransport:
    """HTTP transport that owns the credential and sends every API call."""

    def __init__(self, config: VocConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._session: Session | None = None
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def authenticate(self, identifier: str, secret: str) -> Session:
        """Encode and store the credential used by every subsequent request."""
        self._session = Session.authenticate(identifier, secret)
        return self._session

    def build_url(self, path: str) -> str:
        return f"{self._config.base_url}{path}"

    def build_headers(self, overrides: Mapping[str, str] | None = None) -> CIMultiDict[str]:
        """Default headers plus ``Authorization``, with *overrides* replacing per key.

        Header names compare case-insensitively, so ``authorization`` replaces
        the default ``Authorization`` rather than being sent alongside it.

        Raises
        ------
        VocUnauthenticatedError
            If no credential has been set.
        """
        if self._session is None:
            raise VocUnauthenticatedError("No credential set; authenticate before sending requests")

        headers: CIMultiDict[str] = CIMultiDict(
            {
                **self._config.device.headers(),
                "cache-control": "no-cache",
                "Content-Type": "application/json",
                "accept": "*/*",
                "Authorization": self._session.authorization_header,
            }
        )
        for key, value in (overrides or {}).items():
            headers[key] = value
        return headers

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Mapping[str, Any] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send an authenticated request and return the decoded JSON body.

        ``GET`` requests carry no body. Any other method sends *body* as
        JSON, defaulting to ``{}``.

        Raises
        ------
        VocUnauthenticatedError
            If called before :meth:`authenticate`. No request is sent.
        VocHttpError
            If the status code is outside 200..299. The body is not read.
        VocTransportError
            On network failure, timeout or a body that is not UTF-8 JSON.
        """
        request_headers = self.build_headers(headers)
        method = method.upper()
        url = self.build_url(path)
        data = None if method == "GET" else json.dumps(dict(body or {}), separators=(",", ":"))

        _logger.debug("%s %s", method, url)

        try:
            async with self._http.request(
                method,
                url,
                data=data,
                headers=request_headers,
                timeout=self._timeout,
            ) as resp:
                if not 200 <= resp.status <= 299:
                    raise VocHttpError(resp.status, path)
                status = resp.status
                raw = await resp.read()
        except VocTransportError:
            raise
        except TimeoutError as exc:
            raise VocTransportError(f"Request to {path} timed out", endpoint=path) from exc
        except aiohttp.ClientError as exc:
            raise VocTransportError(f"Request to {path} failed: {exc}", endpoint=path) from exc

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise VocTransportError(
                f"Response from {path} is not valid UTF-8",
                status_code=status,
                endpoint=path,
            ) from exc

        if not text.strip():
            return None

        try:
            result = json.loads(text)
        except json.JSONDecodeError as exc:
            raise VocTransportError(
                f"Invalid JSON from {path}: {text[:200]}",
                status_code=status,
                endpoint=path,
            ) from exc

        _logger.debug("Response from %s: %s", path, redact_for_log(result))
        return result
