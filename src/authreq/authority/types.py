"""Enumerations describing authorities.

These values are used as inputs to authority resolution and as the
authority_type of a resolved AuthorityInfo.
"""

from __future__ import annotations

__all__ = [
    "AadAuthorityAudience",
    "AuthorityType",
    "AzureCloudInstance",
]

from enum import Enum

from authreq.constants import AAD_AUDIENCE_TENANTS, CLOUD_INSTANCE_HOSTS


class AuthorityType(str, Enum):
    """Protocol family of an authority.

    Attributes:
        AAD: Azure Active Directory (https://host/<tenant>/).
        ADFS: Active Directory Federation Services (https://host/adfs/).
        B2C: Azure AD B2C (https://host/tfp/<tenant>/<policy>/).
    """

    AAD = "aad"
    ADFS = "adfs"
    B2C = "b2c"


class AzureCloudInstance(str, Enum):
    """Sovereign cloud hosting the AAD login endpoint."""

    PUBLIC = "public"
    CHINA = "china"
    GERMANY = "germany"
    US_GOVERNMENT = "us_government"

    @property
    def host(self) -> str:
        """Login host for this cloud (e.g. "login.microsoftonline.com")."""
        return CLOUD_INSTANCE_HOSTS[self.value]


class AadAuthorityAudience(str, Enum):
    """Which sign-in audiences an AAD authority accepts.

    Attributes:
        AZURE_AD_AND_PERSONAL_MICROSOFT_ACCOUNT: Work, school and personal
            accounts ("common").
        AZURE_AD_MULTIPLE_ORGS: Work or school accounts from any tenant
            ("organizations").
        PERSONAL_MICROSOFT_ACCOUNT: Personal accounts only ("consumers").
        AZURE_AD_MY_ORG: A single tenant; requires the tenant to be given.
    """

    AZURE_AD_AND_PERSONAL_MICROSOFT_ACCOUNT = "azure_ad_and_personal_microsoft_account"
    AZURE_AD_MULTIPLE_ORGS = "azure_ad_multiple_orgs"
    PERSONAL_MICROSOFT_ACCOUNT = "personal_microsoft_account"
    AZURE_AD_MY_ORG = "azure_ad_my_org"

    @property
    def tenant(self) -> str | None:
        """Tenant path segment, or None for AZURE_AD_MY_ORG."""
        return AAD_AUDIENCE_TENANTS.get(self.value)
