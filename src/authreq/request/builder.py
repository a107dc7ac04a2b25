"""Fluent base builder for token requests.

Every ``with_*`` call mutates the builder's RequestState and returns the
same builder, typed as the concrete subclass (typing.Self), so calls chain:

    builder.with_scopes(["User.Read"]).with_aad_authority(AzureCloudInstance.PUBLIC, "contoso.com")

Validation is an ordered list of zero-argument checks. The base class
registers its own check first in __init__; subclasses append theirs after
calling super().__init__(), so base checks always run before
request-type checks.

Lifecycle:
    configure (with_*) -> validate_and_assign_request_type() -> build()
    -> executor. execute() does all of it and hands the snapshot to the
    application's executor.
"""

from __future__ import annotations

__all__ = [
    "AcquireTokenParameterBuilder",
    "Validator",
]

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, Self, overload
from uuid import UUID

from authreq.authority.resolver import make_source, resolve_authority
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
from authreq.authority.types import AadAuthorityAudience, AzureCloudInstance
from authreq.constants import DEFAULT_AAD_VALIDATE_AUTHORITY, DEFAULT_ADFS_VALIDATE_AUTHORITY
from authreq.exceptions import GenericValidationFailure, InvalidAuthorityConfiguration, RequestValidationError
from authreq.request.api_ids import ApiId
from authreq.request.parameters import AcquireTokenParameters
from authreq.request.state import RequestState
from authreq.telemetry.system_logger import get_logger
from authreq.utils.query_params import parse_key_value_list

if TYPE_CHECKING:
    from authreq.application import PublicClientApplication
    from authreq.request.executor import TokenResult

Validator = Callable[[], None]


class AcquireTokenParameterBuilder(ABC):
    """Base class for builders of token requests.

    Subclasses provide calculate_api_id() and _create_parameters(), and
    register request-type checks with _add_validator().
    """

    def __init__(self, application: "PublicClientApplication") -> None:
        """Initialize the builder.

        Args:
            application: Owning application; supplies the executor.
        """
        self._application = application
        self._state = RequestState()
        self._validators: list[Validator] = [self._validate_common_parameters]

    @property
    def application(self) -> "PublicClientApplication":
        return self._application

    @property
    def common_parameters(self) -> RequestState:
        """The mutable request state (read it, configure via with_*)."""
        return self._state

    @property
    def is_validated(self) -> bool:
        """True once validation has succeeded and an ApiId is assigned."""
        return self._state.api_id is not ApiId.NONE

    # =========================================================================
    # Scopes and query parameters
    # =========================================================================

    def with_scopes(self, scopes: Iterable[str] | None) -> Self:
        """Set the scopes to request, replacing any previous scopes.

        Args:
            scopes: Scopes requested to access a protected API. May be empty;
                None clears the scopes. A single string is rejected, pass
                ["User.Read"] rather than "User.Read".

        Returns:
            The builder, for chaining.

        Raises:
            GenericValidationFailure: If scopes is a string or not iterable.
        """
        if scopes is None:
            self._state.scopes = []
            return self
        if isinstance(scopes, str) or not isinstance(scopes, Iterable):
            raise GenericValidationFailure(
                f"Scopes must be an iterable of strings, got {type(scopes).__name__}",
                field="scopes",
            )
        self._state.scopes = list(scopes)
        return self

    def with_extra_query_parameters(self, extra_query_parameters: Mapping[str, str] | str | None) -> Self:
        """Set extra query parameters, replacing any previous ones.

        Args:
            extra_query_parameters: Appended as-is to the query string of the
                authority request. A string is parsed as "key=value" pairs
                separated by "&". None clears the parameters.

        Returns:
            The builder, for chaining.
        """
        if isinstance(extra_query_parameters, str):
            self._state.extra_query_parameters = parse_key_value_list(extra_query_parameters)
        else:
            self._state.extra_query_parameters = dict(extra_query_parameters or {})
        return self

    # =========================================================================
    # Authority
    # =========================================================================

    def with_authority_source(self, source: AuthoritySource) -> Self:
        """Resolve an AuthoritySource and use it as this request's authority.

        Overwrites any authority set before (last call wins).

        Raises:
            InvalidAuthorityConfiguration: If the source is malformed.
        """
        self._state.authority_override = resolve_authority(source)
        return self

    def with_authority(self, authority_uri: str, validate_authority: bool = False) -> Self:
        """Use a specific authority URI for this request.

        The authority type (AAD, ADFS, B2C) is detected from the URI path.
        This narrows the request to one tenant without changing the
        application's configured authority.

        Args:
            authority_uri: Authority URI, e.g.
                "https://login.microsoftonline.com/contoso.onmicrosoft.com".
            validate_authority: Whether the executor validates the authority.
                Ignored for B2C authorities, which are never validated.

        Returns:
            The builder, for chaining.
        """
        return self.with_authority_source(
            make_source(RawUriSource, authority_uri=authority_uri, validate_authority=validate_authority)
        )

    @overload
    def with_aad_authority(self, authority_uri: str, /, *, validate_authority: bool = ...) -> Self: ...

    @overload
    def with_aad_authority(self, audience: AadAuthorityAudience, /, *, validate_authority: bool = ...) -> Self: ...

    @overload
    def with_aad_authority(
        self,
        cloud_instance: AzureCloudInstance | str,
        tenant: UUID | str,
        /,
        *,
        validate_authority: bool = ...,
    ) -> Self: ...

    @overload
    def with_aad_authority(
        self,
        cloud_instance: AzureCloudInstance,
        audience: AadAuthorityAudience,
        /,
        *,
        validate_authority: bool = ...,
    ) -> Self: ...

    def with_aad_authority(
        self,
        target: Any,
        tenant_or_audience: Any = None,
        /,
        *,
        validate_authority: bool = DEFAULT_AAD_VALIDATE_AUTHORITY,
    ) -> Self:
        """Use an Azure AD authority for this request.

        Accepted forms:
            with_aad_authority("https://login.microsoftonline.com/<tenant>")
            with_aad_authority(AadAuthorityAudience.AZURE_AD_MULTIPLE_ORGS)
            with_aad_authority(AzureCloudInstance.PUBLIC, tenant)
            with_aad_authority(AzureCloudInstance.PUBLIC, AadAuthorityAudience...)
            with_aad_authority("https://login.microsoftonline.us", tenant)

        ``tenant`` is a uuid.UUID, GUID text or tenant name.

        Returns:
            The builder, for chaining.

        Raises:
            InvalidAuthorityConfiguration: If the inputs are malformed or do
                not describe an AAD authority.
        """
        return self.with_authority_source(
            _aad_source(target, tenant_or_audience, validate_authority)
        )

    def with_adfs_authority(
        self,
        authority_uri: str,
        validate_authority: bool = DEFAULT_ADFS_VALIDATE_AUTHORITY,
    ) -> Self:
        """Use an ADFS authority (https://<host>/adfs/) for this request."""
        return self.with_authority_source(
            make_source(AdfsUriSource, authority_uri=authority_uri, validate_authority=validate_authority)
        )

    def with_b2c_authority(self, authority_uri: str) -> Self:
        """Use a B2C authority (https://<host>/tfp/<tenant>/<policy>/).

        B2C authorities are never validated.
        """
        return self.with_authority_source(make_source(B2cUriSource, authority_uri=authority_uri))

    # =========================================================================
    # Validation
    # =========================================================================

    def _add_validator(self, validator: Validator) -> None:
        """Append a request-type check; runs after all earlier checks."""
        self._validators.append(validator)

    def _validate_common_parameters(self) -> None:
        for scope in self._state.scopes:
            if not isinstance(scope, str) or not scope.strip():
                raise GenericValidationFailure(
                    f"Scopes must be non-empty strings, got {scope!r}",
                    field="scopes",
                )
        for key, value in self._state.extra_query_parameters.items():
            if not isinstance(key, str) or not key.strip():
                raise GenericValidationFailure(
                    f"Extra query parameter names must be non-empty strings, got {key!r}",
                    field="extra_query_parameters",
                )
            if not isinstance(value, str):
                raise GenericValidationFailure(
                    f"Extra query parameter '{key}' must have a string value, got {type(value).__name__}",
                    field="extra_query_parameters",
                )

    def validate(self) -> None:
        """Run every registered check in order; base checks come first.

        Only reads state, so it can be called any number of times.

        Raises:
            RequestValidationError: From the first failing check.
        """
        try:
            for validator in self._validators:
                validator()
        except RequestValidationError as e:
            get_logger().warning(
                {
                    "event": "request_validation_failed",
                    "message": f"{type(self).__name__}: {e.message}",
                    "builder": type(self).__name__,
                    "field": e.field,
                    "error_code": e.error_code,
                }
            )
            raise

    @abstractmethod
    def calculate_api_id(self) -> ApiId:
        """Request type identifier for the current configuration."""

    def validate_and_assign_request_type(self) -> ApiId:
        """Validate, then compute and store the request type identifier.

        On failure the configured fields are left untouched and the builder
        is unvalidated again (api_id is ApiId.NONE), even if an earlier
        validation succeeded.

        Returns:
            ApiId: The assigned identifier.

        Raises:
            RequestValidationError: If any check fails.
        """
        self._state.api_id = ApiId.NONE
        self.validate()
        api_id = self.calculate_api_id()
        self._state.api_id = api_id
        get_logger().debug(
            {
                "event": "request_validated",
                "builder": type(self).__name__,
                "api_id": api_id.name,
                "scope_count": len(self._state.scopes),
                "authority": (
                    self._state.authority_override.canonical_authority
                    if self._state.authority_override is not None
                    else None
                ),
            }
        )
        return api_id

    # =========================================================================
    # Build and execute
    # =========================================================================

    @abstractmethod
    def _create_parameters(self) -> AcquireTokenParameters:
        """Snapshot the validated state into the request's parameter type."""

    def _common_fields(self) -> dict[str, Any]:
        return {
            "api_id": self._state.api_id,
            "scopes": tuple(self._state.scopes),
            "authority_override": self._state.authority_override,
            "extra_query_parameters": dict(self._state.extra_query_parameters),
        }

    def build(self) -> AcquireTokenParameters:
        """Validate and return an immutable snapshot of the parameters.

        Raises:
            RequestValidationError: If validation fails.
        """
        self.validate_and_assign_request_type()
        return self._create_parameters()

    def execute(self, cancellation: asyncio.Event | None = None) -> Awaitable["TokenResult"]:
        """Validate the request and hand it to the application's executor.

        Validation happens synchronously, in this call, so configuration
        errors surface before anything is awaited:

            result = await builder.execute()

        Args:
            cancellation: Passed through to the executor untouched.

        Returns:
            Awaitable resolving to the executor's TokenResult.

        Raises:
            RequestValidationError: If validation fails.
        """
        parameters = self.build()
        get_logger().debug(
            {
                "event": "request_dispatched",
                "builder": type(self).__name__,
                "api_id": parameters.api_id.name,
            }
        )
        return self._application.executor.execute(parameters, cancellation)


def _aad_source(target: Any, tenant_or_audience: Any, validate_authority: bool) -> AuthoritySource:
    """Pick the AuthoritySource variant for with_aad_authority() arguments."""
    if isinstance(target, AadAuthorityAudience):
        if tenant_or_audience is not None:
            raise InvalidAuthorityConfiguration(
                "An audience cannot be combined with a tenant", value=tenant_or_audience
            )
        return make_source(AudienceSource, audience=target, validate_authority=validate_authority)

    if isinstance(target, AzureCloudInstance):
        if isinstance(tenant_or_audience, AadAuthorityAudience):
            return make_source(
                CloudAudienceSource,
                cloud_instance=target,
                audience=tenant_or_audience,
                validate_authority=validate_authority,
            )
        if isinstance(tenant_or_audience, UUID):
            return make_source(
                CloudTenantIdSource,
                cloud_instance=target,
                tenant_id=tenant_or_audience,
                validate_authority=validate_authority,
            )
        return make_source(
            CloudTenantSource,
            cloud_instance=target,
            tenant=tenant_or_audience,
            validate_authority=validate_authority,
        )

    if tenant_or_audience is None:
        return make_source(AadUriSource, authority_uri=target, validate_authority=validate_authority)
    if isinstance(tenant_or_audience, UUID):
        return make_source(
            CloudUriTenantIdSource,
            cloud_instance_uri=target,
            tenant_id=tenant_or_audience,
            validate_authority=validate_authority,
        )
    return make_source(
        CloudUriTenantSource,
        cloud_instance_uri=target,
        tenant=tenant_or_audience,
        validate_authority=validate_authority,
    )
