"""Builder for silent token requests.

A silent request tries to satisfy the request without user interaction
(token cache or refresh token). It needs the account the token is for;
without one, the only way forward is an interactive flow, which is why a
missing account raises MissingRequiredParameter (ui_required=True) rather
than a generic configuration error.
"""

from __future__ import annotations

__all__ = ["AcquireTokenSilentParameterBuilder"]

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Self

from authreq.constants import ERROR_CODE_USER_NULL
from authreq.exceptions import MissingRequiredParameter
from authreq.request.api_ids import ApiId
from authreq.request.builder import AcquireTokenParameterBuilder
from authreq.request.parameters import AcquireTokenSilentParameters

if TYPE_CHECKING:
    from authreq.application import PublicClientApplication


class AcquireTokenSilentParameterBuilder(AcquireTokenParameterBuilder):
    """Builder for AcquireTokenSilentParameters.

    Usage:
        result = await (
            AcquireTokenSilentParameterBuilder.create(app, ["User.Read"], account)
            .with_force_refresh(True)
            .execute()
        )
    """

    def __init__(self, application: "PublicClientApplication") -> None:
        super().__init__(application)
        self._account: Any = None
        self._force_refresh = False
        self._add_validator(self._validate_account)

    @classmethod
    def create(
        cls,
        application: "PublicClientApplication",
        scopes: Iterable[str],
        account: Any,
    ) -> Self:
        """Create a builder with scopes and account already set."""
        return cls(application).with_scopes(scopes).with_account(account)

    @property
    def account(self) -> Any:
        return self._account

    @property
    def force_refresh(self) -> bool:
        return self._force_refresh

    def with_account(self, account: Any) -> Self:
        """Set the account to acquire a token for (stored verbatim)."""
        self._account = account
        return self

    def with_force_refresh(self, force_refresh: bool) -> Self:
        """Ignore cached access tokens and always refresh when True."""
        self._force_refresh = force_refresh
        return self

    def _validate_account(self) -> None:
        if self._account is None:
            raise MissingRequiredParameter(
                "No account was passed to the silent request. "
                "Acquire a token interactively to sign in the user.",
                field="account",
                error_code=ERROR_CODE_USER_NULL,
            )

    def calculate_api_id(self) -> ApiId:
        if self._state.authority_override is None:
            return ApiId.ACQUIRE_TOKEN_SILENT_WITHOUT_AUTHORITY
        return ApiId.ACQUIRE_TOKEN_SILENT_WITH_AUTHORITY

    def _create_parameters(self) -> AcquireTokenSilentParameters:
        return AcquireTokenSilentParameters(
            **self._common_fields(),
            account=self._account,
            force_refresh=self._force_refresh,
        )
