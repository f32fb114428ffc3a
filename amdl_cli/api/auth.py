"""
Supplies the bearer token used for catalog requests.

Obtaining the token is outside the scope of this package; it is read from
configuration and handed to the client as an opaque credential.
"""

import logging
from typing import Protocol

from amdl_cli.exceptions import AuthenticationError

log = logging.getLogger(__name__)


class TokenProvider(Protocol):
    """Anything that can hand out the current authorization token."""

    async def get_token(self) -> str: ...


class StaticTokenProvider:
    """Returns a fixed token taken from the configuration file or CLI."""

    def __init__(self, token: str):
        self._token = token.strip()

    async def get_token(self) -> str:
        if not self._token:
            raise AuthenticationError(
                "No authorization token configured. Run 'amdl-cli init <TOKEN>' first."
            )
        log.debug(f"Using configured authorization token ({self._token[:8]}...)")
        return self._token
