"""Tests for the AuthorityInfo model and authority enums."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from authreq.authority import AadAuthorityAudience, AuthorityInfo, AuthorityType, AzureCloudInstance


@pytest.fixture
def aad_info() -> AuthorityInfo:
    return AuthorityInfo(
        authority_type=AuthorityType.AAD,
        canonical_authority="https://login.microsoftonline.com/contoso.onmicrosoft.com/",
        validate_authority=True,
    )


class TestAuthorityInfo:
    """Tests for AuthorityInfo."""

    def test_is_immutable(self, aad_info: AuthorityInfo) -> None:
        """Assigning to a field of a resolved descriptor fails."""
        with pytest.raises(ValidationError):
            aad_info.validate_authority = False  # type: ignore[misc]

    def test_derived_properties(self, aad_info: AuthorityInfo) -> None:
        assert aad_info.host == "login.microsoftonline.com"
        assert aad_info.tenant == "contoso.onmicrosoft.com"
        assert aad_info.path_segments == ("contoso.onmicrosoft.com",)

    def test_str_is_canonical_authority(self, aad_info: AuthorityInfo) -> None:
        assert str(aad_info) == "https://login.microsoftonline.com/contoso.onmicrosoft.com/"

    def test_equality_uses_type_uri_and_flag(self, aad_info: AuthorityInfo) -> None:
        same = AuthorityInfo(
            authority_type=AuthorityType.AAD,
            canonical_authority=aad_info.canonical_authority,
            validate_authority=True,
        )
        other_type = AuthorityInfo(
            authority_type=AuthorityType.ADFS,
            canonical_authority=aad_info.canonical_authority,
            validate_authority=True,
        )

        assert aad_info == same
        assert aad_info != other_type


class TestEnums:
    """Tests for authority enums."""

    def test_my_org_audience_has_no_tenant(self) -> None:
        assert AadAuthorityAudience.AZURE_AD_MY_ORG.tenant is None

    def test_every_cloud_instance_has_a_host(self) -> None:
        assert all(cloud.host.startswith("login.") for cloud in AzureCloudInstance)

    def test_authority_type_is_exhaustive(self) -> None:
        assert {member.value for member in AuthorityType} == {"aad", "adfs", "b2c"}
