"""Input shapes accepted by resolve_authority().

Each model is one way a caller can describe an authority. They form a
tagged union (AuthoritySource) discriminated on ``kind``, so resolution is
a single exhaustive match instead of a family of overloads.

    RawUriSource              any authority URI, type detected from the path
    CloudUriTenantIdSource    cloud instance URI + tenant GUID
    CloudUriTenantSource      cloud instance URI + tenant GUID text or name
    CloudTenantIdSource       AzureCloudInstance + tenant GUID
    CloudTenantSource         AzureCloudInstance + tenant GUID text or name
    CloudAudienceSource       AzureCloudInstance + AadAuthorityAudience
    AudienceSource            AadAuthorityAudience on the public cloud
    AadUriSource              AAD authority URI
    AdfsUriSource             ADFS authority URI
    B2cUriSource              B2C authority URI (never validated)
"""

from __future__ import annotations

__all__ = [
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
]

from typing import Annotated, Literal, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from authreq.authority.types import AadAuthorityAudience, AzureCloudInstance
from authreq.constants import (
    DEFAULT_AAD_VALIDATE_AUTHORITY,
    DEFAULT_ADFS_VALIDATE_AUTHORITY,
    DEFAULT_RAW_URI_VALIDATE_AUTHORITY,
)


class _Source(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class RawUriSource(_Source):
    kind: Literal["raw_uri"] = "raw_uri"
    authority_uri: str
    validate_authority: bool = DEFAULT_RAW_URI_VALIDATE_AUTHORITY


class CloudUriTenantIdSource(_Source):
    kind: Literal["cloud_uri_tenant_id"] = "cloud_uri_tenant_id"
    cloud_instance_uri: str
    tenant_id: UUID
    validate_authority: bool = DEFAULT_AAD_VALIDATE_AUTHORITY


class CloudUriTenantSource(_Source):
    kind: Literal["cloud_uri_tenant"] = "cloud_uri_tenant"
    cloud_instance_uri: str
    tenant: str
    validate_authority: bool = DEFAULT_AAD_VALIDATE_AUTHORITY


class CloudTenantIdSource(_Source):
    kind: Literal["cloud_tenant_id"] = "cloud_tenant_id"
    cloud_instance: AzureCloudInstance
    tenant_id: UUID
    validate_authority: bool = DEFAULT_AAD_VALIDATE_AUTHORITY


class CloudTenantSource(_Source):
    kind: Literal["cloud_tenant"] = "cloud_tenant"
    cloud_instance: AzureCloudInstance
    tenant: str
    validate_authority: bool = DEFAULT_AAD_VALIDATE_AUTHORITY


class CloudAudienceSource(_Source):
    kind: Literal["cloud_audience"] = "cloud_audience"
    cloud_instance: AzureCloudInstance
    audience: AadAuthorityAudience
    validate_authority: bool = DEFAULT_AAD_VALIDATE_AUTHORITY


class AudienceSource(_Source):
    kind: Literal["audience"] = "audience"
    audience: AadAuthorityAudience
    validate_authority: bool = DEFAULT_AAD_VALIDATE_AUTHORITY


class AadUriSource(_Source):
    kind: Literal["aad_uri"] = "aad_uri"
    authority_uri: str
    validate_authority: bool = DEFAULT_AAD_VALIDATE_AUTHORITY


class AdfsUriSource(_Source):
    kind: Literal["adfs_uri"] = "adfs_uri"
    authority_uri: str
    validate_authority: bool = DEFAULT_ADFS_VALIDATE_AUTHORITY


class B2cUriSource(_Source):
    """B2C authority URI. Has no validate flag: B2C is never validated."""

    kind: Literal["b2c_uri"] = "b2c_uri"
    authority_uri: str


AuthoritySource = Annotated[
    Union[
        RawUriSource,
        CloudUriTenantIdSource,
        CloudUriTenantSource,
        CloudTenantIdSource,
        CloudTenantSource,
        CloudAudienceSource,
        AudienceSource,
        AadUriSource,
        AdfsUriSource,
        B2cUriSource,
    ],
    Field(discriminator="kind"),
]
