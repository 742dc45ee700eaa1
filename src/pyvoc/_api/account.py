"""Account endpoint.

Endpoint:
  - customeraccounts (GET)

Requires the credential to already be set on the transport; a non-2xx
response here means the credential was rejected.
"""

from __future__ import annotations

import logging

from pyvoc._api._common import require_object
from pyvoc._transport import Transport
from pyvoc.exceptions import VocAuthenticationError, VocHttpError
from pyvoc.models.account import Account

_logger = logging.getLogger(__name__)

ACCOUNT_ENDPOINT = "customeraccounts"
_AUTH_FAILURE_CODES: frozenset[int] = frozenset({401, 403})


async def fetch_account(transport: Transport) -> Account:
    """Fetch the authenticated customer account.

    Raises
    ------
    VocAuthenticationError
        If the server rejects the credential (HTTP 401/403).
    """
    try:
        payload = await transport.request(ACCOUNT_ENDPOINT, "GET")
    except VocHttpError as exc:
        if exc.status_code in _AUTH_FAILURE_CODES:
            raise VocAuthenticationError(
                f"Login rejected by {ACCOUNT_ENDPOINT} (HTTP {exc.status_code})",
                status_code=exc.status_code,
                endpoint=exc.endpoint,
            ) from exc
        raise
    account = Account.model_validate(require_object(payload, ACCOUNT_ENDPOINT))
    _logger.debug("Account has %d vehicle relation(s)", len(account.account_vehicle_relations))
    return account
