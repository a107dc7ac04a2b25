"""Mutable request state owned by a single builder."""

from __future__ import annotations

__all__ = ["RequestState"]

from dataclasses import dataclass, field

from authreq.authority.info import AuthorityInfo
from authreq.request.api_ids import ApiId


@dataclass
class RequestState:
    """Parameters shared by every token request type.

    Mutated only through builder ``with_*`` calls. ``api_id`` is not
    user-settable: it stays ApiId.NONE until validation succeeds.

    Attributes:
        scopes: Requested scopes, in caller order.
        authority_override: Authority for this request only; None means
            "use the application's authority".
        extra_query_parameters: Appended as-is to the authority request.
        api_id: Request type identifier, set by validation.
    """

    scopes: list[str] = field(default_factory=list)
    authority_override: AuthorityInfo | None = None
    extra_query_parameters: dict[str, str] = field(default_factory=dict)
    api_id: ApiId = ApiId.NONE
