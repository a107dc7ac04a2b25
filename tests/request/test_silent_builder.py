"""Tests for the silent request builder and execution.

Tests cover:
- Account requirement (MissingRequiredParameter, UI required)
- Request type identifier assignment and idempotence
- Immutable parameter snapshots
- execute(): synchronous validation, executor hand-off, cancellation pass-through
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from pydantic import ValidationError

from authreq.application import PublicClientApplication
from authreq.authority import AuthorityType, AzureCloudInstance
from authreq.exceptions import GenericValidationFailure, MissingRequiredParameter
from authreq.request import (
    AcquireTokenSilentParameterBuilder,
    AcquireTokenSilentParameters,
    ApiId,
    TokenResult,
)

B2C_AUTHORITY = "https://fabrikamb2c.b2clogin.com/tfp/fabrikamb2c.onmicrosoft.com/B2C_1_SignIn"


# ============================================================================
# Tests: Construction
# ============================================================================


class TestConstruction:
    """Tests for builder creation."""

    def test_create_sets_scopes_and_account(self, app: PublicClientApplication, account: Any) -> None:
        builder = AcquireTokenSilentParameterBuilder.create(app, ["User.Read"], account)

        assert builder.common_parameters.scopes == ["User.Read"]
        assert builder.account is account
        assert builder.force_refresh is False
        assert builder.application is app

    def test_create_rejects_single_string_scope(self, app: PublicClientApplication, account: Any) -> None:
        """A bare string is not split into one scope per character."""
        with pytest.raises(GenericValidationFailure) as exc_info:
            app.acquire_token_silent("User.Read", account)  # type: ignore[arg-type]

        assert exc_info.value.field == "scopes"

    def test_application_factory(self, app: PublicClientApplication, account: Any) -> None:
        builder = app.acquire_token_silent(["User.Read"], account)

        assert isinstance(builder, AcquireTokenSilentParameterBuilder)
        assert builder.account is account

    def test_builders_do_not_share_state(self, app: PublicClientApplication, account: Any) -> None:
        first = app.acquire_token_silent(["a"], account)
        second = app.acquire_token_silent(["b"], account)

        first.with_extra_query_parameters({"x": "1"})

        assert second.common_parameters.extra_query_parameters == {}
        assert first.common_parameters is not second.common_parameters


# ============================================================================
# Tests: Account validation
# ============================================================================


class TestAccountValidation:
    """A silent request without an account requires user interaction."""

    def test_missing_account_raises_ui_required(self, app: PublicClientApplication) -> None:
        builder = AcquireTokenSilentParameterBuilder(app).with_scopes(["User.Read"])

        with pytest.raises(MissingRequiredParameter) as exc_info:
            builder.validate_and_assign_request_type()

        assert exc_info.value.field == "account"
        assert exc_info.value.error_code == "user_null"
        assert exc_info.value.ui_required is True

    def test_failure_leaves_state_untouched(self, app: PublicClientApplication) -> None:
        """Given a failed validation, scopes and authority are unchanged and no id is set."""
        builder = (
            AcquireTokenSilentParameterBuilder(app)
            .with_scopes(["User.Read"])
            .with_aad_authority(AzureCloudInstance.PUBLIC, "contoso.onmicrosoft.com")
        )
        authority = builder.common_parameters.authority_override

        with pytest.raises(MissingRequiredParameter):
            builder.validate_and_assign_request_type()

        assert builder.common_parameters.scopes == ["User.Read"]
        assert builder.common_parameters.authority_override == authority
        assert builder.common_parameters.api_id is ApiId.NONE
        assert builder.is_validated is False

    def test_failure_after_success_unvalidates(self, app: PublicClientApplication, account: Any) -> None:
        """Given a validated builder, a later failed validation clears the request type."""
        builder = app.acquire_token_silent(["User.Read"], account)
        builder.validate_and_assign_request_type()

        builder.with_account(None)
        with pytest.raises(MissingRequiredParameter):
            builder.validate_and_assign_request_type()

        assert builder.common_parameters.api_id is ApiId.NONE
        assert builder.is_validated is False
        assert builder.common_parameters.scopes == ["User.Read"]

    def test_fix_and_retry_succeeds(self, app: PublicClientApplication, account: Any) -> None:
        """After a failure the caller can set the account and validate again."""
        builder = AcquireTokenSilentParameterBuilder(app).with_scopes(["User.Read"])
        with pytest.raises(MissingRequiredParameter):
            builder.validate_and_assign_request_type()

        builder.with_account(account)

        assert builder.validate_and_assign_request_type() is ApiId.ACQUIRE_TOKEN_SILENT_WITHOUT_AUTHORITY

    def test_account_cleared_with_none(self, app: PublicClientApplication, account: Any) -> None:
        builder = app.acquire_token_silent(["User.Read"], account).with_account(None)

        with pytest.raises(MissingRequiredParameter):
            builder.build()


# ============================================================================
# Tests: Request type identifier
# ============================================================================


class TestApiId:
    """Tests for request type identifier assignment."""

    def test_unset_before_validation(self, app: PublicClientApplication, account: Any) -> None:
        builder = app.acquire_token_silent(["User.Read"], account)

        assert builder.common_parameters.api_id is ApiId.NONE

    def test_without_authority(self, app: PublicClientApplication, account: Any) -> None:
        builder = app.acquire_token_silent(["User.Read"], account)

        api_id = builder.validate_and_assign_request_type()

        assert api_id is ApiId.ACQUIRE_TOKEN_SILENT_WITHOUT_AUTHORITY
        assert builder.common_parameters.api_id is api_id
        assert builder.is_validated is True

    def test_with_authority(self, app: PublicClientApplication, account: Any) -> None:
        builder = app.acquire_token_silent(["User.Read"], account).with_b2c_authority(B2C_AUTHORITY)

        assert builder.validate_and_assign_request_type() is ApiId.ACQUIRE_TOKEN_SILENT_WITH_AUTHORITY

    def test_second_validation_is_idempotent(self, app: PublicClientApplication, account: Any) -> None:
        builder = app.acquire_token_silent(["User.Read"], account)

        first = builder.validate_and_assign_request_type()
        second = builder.validate_and_assign_request_type()

        assert first is second
        assert first is not ApiId.NONE


# ============================================================================
# Tests: Parameter snapshot
# ============================================================================


class TestBuild:
    """Tests for build() and the immutable snapshot."""

    def test_snapshot_carries_all_fields(self, app: PublicClientApplication, account: Any) -> None:
        parameters = (
            app.acquire_token_silent(["User.Read", "Mail.Read"], account)
            .with_force_refresh(True)
            .with_extra_query_parameters({"dc": "ESTS-PUB"})
            .build()
        )

        assert isinstance(parameters, AcquireTokenSilentParameters)
        assert parameters.scopes == ("User.Read", "Mail.Read")
        assert parameters.account is account
        assert parameters.force_refresh is True
        assert parameters.extra_query_parameters == {"dc": "ESTS-PUB"}
        assert parameters.authority_override is None
        assert parameters.api_id is ApiId.ACQUIRE_TOKEN_SILENT_WITHOUT_AUTHORITY

    def test_snapshot_is_immutable(self, app: PublicClientApplication, account: Any) -> None:
        parameters = app.acquire_token_silent(["User.Read"], account).build()

        with pytest.raises(ValidationError):
            parameters.force_refresh = True  # type: ignore[misc]

    def test_snapshot_query_parameters_are_read_only(self, app: PublicClientApplication, account: Any) -> None:
        """Holders of a snapshot cannot add to its extra query parameters."""
        parameters = (
            app.acquire_token_silent(["User.Read"], account).with_extra_query_parameters({"dc": "ESTS-PUB"}).build()
        )

        with pytest.raises(TypeError):
            parameters.extra_query_parameters["injected"] = "1"  # type: ignore[index]

        assert parameters.extra_query_parameters == {"dc": "ESTS-PUB"}

    def test_directly_built_snapshot_is_read_only(self, account: Any) -> None:
        source = {"a": "1"}
        parameters = AcquireTokenSilentParameters(
            api_id=ApiId.ACQUIRE_TOKEN_SILENT_WITHOUT_AUTHORITY,
            account=account,
            extra_query_parameters=source,
        )
        source["b"] = "2"

        assert dict(parameters.extra_query_parameters) == {"a": "1"}
        with pytest.raises(TypeError):
            parameters.extra_query_parameters["c"] = "3"  # type: ignore[index]

    def test_default_query_parameters_are_read_only(self, account: Any) -> None:
        parameters = AcquireTokenSilentParameters(api_id=ApiId.ACQUIRE_TOKEN_SILENT_WITHOUT_AUTHORITY, account=account)

        with pytest.raises(TypeError):
            parameters.extra_query_parameters["c"] = "3"  # type: ignore[index]

    def test_snapshot_is_independent_of_later_mutation(self, app: PublicClientApplication, account: Any) -> None:
        builder = app.acquire_token_silent(["User.Read"], account).with_extra_query_parameters({"a": "1"})
        parameters = builder.build()

        builder.with_scopes(["Files.Read"])
        builder.common_parameters.extra_query_parameters["b"] = "2"

        assert parameters.scopes == ("User.Read",)
        assert parameters.extra_query_parameters == {"a": "1"}


# ============================================================================
# Tests: Execution
# ============================================================================


class TestExecute:
    """Tests for execute()."""

    def test_validation_error_raised_before_awaiting(self, app: PublicClientApplication, executor: Any) -> None:
        """Configuration errors surface from the call itself, not the awaitable."""
        builder = AcquireTokenSilentParameterBuilder(app).with_scopes(["User.Read"])

        with pytest.raises(MissingRequiredParameter):
            builder.execute()

        assert executor.calls == []

    @pytest.mark.asyncio
    async def test_end_to_end_silent_request(
        self, app: PublicClientApplication, executor: Any, account: Any
    ) -> None:
        """Given scopes, AAD authority, account and force_refresh=False, the executor gets exactly those."""
        result = await (
            app.acquire_token_silent(["User.Read"], account)
            .with_aad_authority(AzureCloudInstance.PUBLIC, "contoso.onmicrosoft.com")
            .with_force_refresh(False)
            .execute()
        )

        assert isinstance(result, TokenResult)
        assert len(executor.calls) == 1
        parameters, cancellation = executor.calls[0]
        assert isinstance(parameters, AcquireTokenSilentParameters)
        assert parameters.scopes == ("User.Read",)
        assert parameters.authority_override is not None
        assert parameters.authority_override.authority_type is AuthorityType.AAD
        assert parameters.authority_override.canonical_authority == (
            "https://login.microsoftonline.com/contoso.onmicrosoft.com/"
        )
        assert parameters.account is account
        assert parameters.force_refresh is False
        assert parameters.extra_query_parameters == {}
        assert parameters.api_id is ApiId.ACQUIRE_TOKEN_SILENT_WITH_AUTHORITY
        assert cancellation is None

    @pytest.mark.asyncio
    async def test_b2c_authority_is_not_validated(
        self, app: PublicClientApplication, executor: Any, account: Any
    ) -> None:
        await app.acquire_token_silent(["openid"], account).with_authority(B2C_AUTHORITY, True).execute()

        parameters, _ = executor.calls[0]
        assert parameters.authority_override.validate_authority is False

    @pytest.mark.asyncio
    async def test_cancellation_is_passed_through(
        self, app: PublicClientApplication, executor: Any, account: Any
    ) -> None:
        cancellation = asyncio.Event()

        await app.acquire_token_silent(["User.Read"], account).execute(cancellation)

        _, received = executor.calls[0]
        assert received is cancellation
        assert not cancellation.is_set()

    @pytest.mark.asyncio
    async def test_reexecution_uses_current_state(
        self, app: PublicClientApplication, executor: Any, account: Any
    ) -> None:
        """Each execution validates and snapshots the builder as it is then."""
        builder = app.acquire_token_silent(["User.Read"], account)

        await builder.execute()
        await builder.with_scopes(["Files.Read"]).with_force_refresh(True).execute()

        first, _ = executor.calls[0]
        second, _ = executor.calls[1]
        assert first.scopes == ("User.Read",)
        assert first.force_refresh is False
        assert second.scopes == ("Files.Read",)
        assert second.force_refresh is True
