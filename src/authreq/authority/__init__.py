"""Authority descriptors and their resolution.

Structure:
    types.py      - AuthorityType, AzureCloudInstance, AadAuthorityAudience
    info.py       - AuthorityInfo (canonical, immutable)
    sources.py    - AuthoritySource tagged union (accepted input shapes)
    resolver.py   - resolve_authority(): AuthoritySource -> AuthorityInfo
"""

from authreq.authority.info import AuthorityInfo
from authreq.authority.resolver import make_source, normalize_tenant, resolve_authority
from authreq.authority.sources import (
    AadUriSource,
    AdfsUriSource,
    AudienceSource,
    AuthoritySource,
    B2cUriSource,
    CloudAudienceSource,
    CloudTenantIdSource,
    CloudTenantSource,
    CloudUriTenantIdSource,
    CloudUriTenantSource,
    RawUriSource,
)
from authreq.authority.types import AadAuthorityAudience, AuthorityType, AzureCloudInstance

__all__ = [
    # Types
    "AadAuthorityAudience",
    "AuthorityType",
    "AzureCloudInstance",
    # Descriptor
    "AuthorityInfo",
    # Sources
    "AadUriSource",
    "AdfsUriSource",
    "AudienceSource",
    "AuthoritySource",
    "B2cUriSource",
    "CloudAudienceSource",
    "CloudTenantIdSource",
    "CloudTenantSource",
    "CloudUriTenantIdSource",
    "CloudUriTenantSource",
    "RawUriSource",
    # Resolution
    "make_source",
    "normalize_tenant",
    "resolve_authority",
]
