"""Immutable parameter snapshots handed to the executor.

A snapshot can only be obtained from a builder's build() (or execute()),
which runs the validation pipeline first. Executors accept nothing else.
"""

from __future__ import annotations

__all__ = [
    "AcquireTokenParameters",
    "AcquireTokenSilentParameters",
]

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from authreq.authority.info import AuthorityInfo
from authreq.request.api_ids import ApiId


class AcquireTokenParameters(BaseModel):
    """Validated parameters common to all request types.

    Attributes:
        api_id: Request type identifier (never ApiId.NONE).
        scopes: Requested scopes, in caller order.
        authority_override: Per-request authority, or None.
        extra_query_parameters: Extra query string parameters (may be empty).
            Read-only; the snapshot holds its own copy.
    """

    api_id: ApiId
    scopes: tuple[str, ...] = ()
    authority_override: AuthorityInfo | None = None
    extra_query_parameters: Mapping[str, str] = Field(default_factory=dict, validate_default=True)

    model_config = ConfigDict(frozen=True)

    @field_validator("extra_query_parameters", mode="after")
    @classmethod
    def freeze_extra_query_parameters(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        """Copy into a read-only mapping so holders cannot change the request."""
        return MappingProxyType(dict(v))


class AcquireTokenSilentParameters(AcquireTokenParameters):
    """Validated parameters of a silent request.

    Attributes:
        account: Opaque account reference, passed through verbatim.
        force_refresh: Skip cached access tokens and refresh.
    """

    account: Any
    force_refresh: bool = False
