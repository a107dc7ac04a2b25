"""Executor interface consumed by the request builders.

The executor performs the network, cache and cryptographic work. This
package only defines its shape (structural typing, like any other
Protocol) and the result type it returns.
"""

from __future__ import annotations

__all__ = [
    "TokenExecutor",
    "TokenResult",
]

import asyncio
from datetime import datetime
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from authreq.request.parameters import AcquireTokenParameters


class TokenResult(BaseModel):
    """Outcome of a successful token request.

    Attributes:
        access_token: The access token.
        expires_on: Expiry time (timezone-aware).
        scopes: Scopes actually granted.
        account: Account the token was issued for, if any.
    """

    access_token: str
    expires_on: datetime
    scopes: tuple[str, ...] = ()
    account: Any = None

    model_config = ConfigDict(frozen=True)


@runtime_checkable
class TokenExecutor(Protocol):
    """Performs a validated token request.

    Implementations receive the immutable parameter snapshot and an
    optional cancellation event. The builder never looks at the event;
    it is passed through untouched.
    """

    async def execute(
        self,
        parameters: AcquireTokenParameters,
        cancellation: asyncio.Event | None = None,
    ) -> TokenResult:
        """Acquire a token for the given parameters.

        Args:
            parameters: Validated request parameters.
            cancellation: Set by the caller to request cancellation.

        Returns:
            TokenResult for the request.
        """
        ...
