"""AuthorityInfo - the canonical, immutable description of an authority."""

from __future__ import annotations

__all__ = ["AuthorityInfo"]

from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from authreq.authority.types import AuthorityType


class AuthorityInfo(BaseModel):
    """Where tokens are requested from.

    Only produced by resolve_authority(), which normalizes every supported
    input shape into this one form. Two instances are equal exactly when
    type, canonical URI and validation flag are equal, whichever input
    produced them.

    Attributes:
        authority_type: AAD, ADFS or B2C.
        canonical_authority: Lower-case https URI with trailing slash, e.g.
            "https://login.microsoftonline.com/contoso.onmicrosoft.com/".
        validate_authority: Whether the executor should validate the
            authority against instance metadata. Always False for B2C.
    """

    authority_type: AuthorityType
    canonical_authority: str
    validate_authority: bool

    model_config = ConfigDict(frozen=True)

    @property
    def path_segments(self) -> tuple[str, ...]:
        """Non-empty path segments of the canonical URI."""
        return tuple(segment for segment in urlsplit(self.canonical_authority).path.split("/") if segment)

    @property
    def host(self) -> str:
        """Host of the canonical URI (e.g. "login.microsoftonline.com")."""
        return urlsplit(self.canonical_authority).netloc

    @property
    def tenant(self) -> str | None:
        """Tenant segment: AAD first segment, B2C second, None for ADFS."""
        segments = self.path_segments
        if self.authority_type is AuthorityType.AAD:
            return segments[0]
        if self.authority_type is AuthorityType.B2C:
            return segments[1]
        return None

    def __str__(self) -> str:
        return self.canonical_authority
